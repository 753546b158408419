"""
Печать дубликата этикетки по сканированию.

Цикл на одно сканирование (строго последовательно):
1. Enter -> нормализация и разбор кода
2. Код в буфер обмена (вместе с EAN-13, если он есть)
3. Поиск товара по EAN-13
4. PDF с DataMatrix -> печать
5. PDF с EAN-13 -> печать (если EAN-13 есть)
6. Буфер ввода очищается при любом исходе
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from labelkit.models.label_types import PrintPayload, ProductInfo
from labelkit.services.api_client import DocumentResult
from labelkit.services.scan_input import classify_scan, convert_layout

logger = logging.getLogger(__name__)


class DocumentSource(Protocol):
    async def generate(self, payload: PrintPayload) -> DocumentResult: ...


class ProductSource(Protocol):
    async def get_product(self, barcode: str) -> ProductInfo | None: ...


class ClipboardWriter(Protocol):
    async def write_text(self, text: str) -> None: ...


class PrintSink(Protocol):
    """Вывод документа на печать. Возвращает управление, когда печать запущена."""

    async def present(self, document: bytes) -> None: ...

    async def aclose(self) -> None: ...


class ScanState(str, Enum):
    """Состояние станции сканирования."""

    IDLE = "idle"
    PROCESSING = "processing"


@dataclass
class ScanBuffer:
    """Буфер ввода сканера. Принадлежит одному оркестратору."""

    text: str = ""
    state: ScanState = ScanState.IDLE

    def clear(self) -> None:
        self.text = ""
        self.state = ScanState.IDLE


@dataclass
class ScanOutcome:
    """Итог обработки одного сканирования."""

    code: str
    ean13: str | None = None
    printed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped: bool = False


class ScanBusyError(RuntimeError):
    """Предыдущее сканирование ещё обрабатывается."""

    pass


class DuplicatePrintOrchestrator:
    """
    Оркестратор печати дубликатов.

    Использование:
        orchestrator = DuplicatePrintOrchestrator(documents, products, clipboard, sink)
        orchestrator.feed(raw_text)
        outcome = await orchestrator.submit()
    """

    def __init__(
        self,
        documents: DocumentSource,
        products: ProductSource,
        clipboard: ClipboardWriter,
        sink: PrintSink,
    ):
        self.documents = documents
        self.products = products
        self.clipboard = clipboard
        self.sink = sink
        self.buffer = ScanBuffer()

    @property
    def state(self) -> ScanState:
        return self.buffer.state

    def feed(self, text: str) -> bool:
        """
        Обновить содержимое поля ввода.

        Returns:
            False, если идёт обработка и ввод отклонён
        """
        if self.buffer.state is ScanState.PROCESSING:
            logger.warning("[SCAN] Ввод во время печати проигнорирован")
            return False

        self.buffer.text = convert_layout(text)
        return True

    async def submit(self) -> ScanOutcome:
        """
        Обработать буфер (нажатие Enter).

        Raises:
            ScanBusyError: Если предыдущее сканирование ещё не завершено
        """
        if self.buffer.state is ScanState.PROCESSING:
            raise ScanBusyError("Сканирование уже обрабатывается")

        self.buffer.state = ScanState.PROCESSING
        try:
            return await self._process(self.buffer.text)
        finally:
            self.buffer.clear()

    async def handle_scan(self, raw: str) -> ScanOutcome:
        """Ввод целиком и Enter — для сканера, отдающего строку за раз."""
        self.feed(raw)
        return await self.submit()

    async def _process(self, text: str) -> ScanOutcome:
        classification = classify_scan(text)
        if classification is None:
            logger.info(f"[SCAN] Слишком короткий код ({len(text.strip())} симв.), пропуск")
            return ScanOutcome(code=text.strip(), skipped=True)

        code = classification.canonical_code
        ean13 = classification.ean13_candidate
        outcome = ScanOutcome(code=code, ean13=ean13)

        await self._copy_to_clipboard(f"{code}\n{ean13}" if ean13 else code)

        product_name = ""
        product_size = ""
        if ean13:
            product = await self._lookup_product(ean13)
            if product is not None:
                product_name = product.title
                product_size = product.size

        # Оригинальный код маркировки
        await self._print(
            PrintPayload(scanned_data=code, product_name=product_name, product_size=product_size),
            outcome,
        )

        # EAN-13 отдельной этикеткой
        if ean13:
            await self._print(
                PrintPayload(scanned_data=ean13, product_name=product_name),
                outcome,
            )

        return outcome

    async def _copy_to_clipboard(self, text: str) -> None:
        try:
            await self.clipboard.write_text(text)
        except Exception as e:
            logger.warning(f"[SCAN] Не удалось записать в буфер обмена: {e}")

    async def _lookup_product(self, barcode: str) -> ProductInfo | None:
        try:
            return await self.products.get_product(barcode)
        except Exception as e:
            logger.error(f"[SCAN] Ошибка поиска товара {barcode}: {e}")
            return None

    async def _print(self, payload: PrintPayload, outcome: ScanOutcome) -> None:
        try:
            result = await self.documents.generate(payload)
        except Exception as e:
            logger.error(f"[PRINT] Ошибка генерации PDF для {payload.scanned_data!r}: {e}")
            outcome.failed.append(payload.scanned_data)
            return

        if not result.success or result.content is None:
            logger.error(f"[PRINT] PDF для {payload.scanned_data!r} не получен: {result.error}")
            outcome.failed.append(payload.scanned_data)
            return

        try:
            await self.sink.present(result.content)
        except Exception as e:
            logger.error(f"[PRINT] Ошибка печати {payload.scanned_data!r}: {e}")
            outcome.failed.append(payload.scanned_data)
            return

        outcome.printed.append(payload.scanned_data)
