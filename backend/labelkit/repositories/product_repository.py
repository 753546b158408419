"""
Каталог товаров и история сканирований.

Данные о товарах агрегируются из Wildberries Content API; здесь — поиск
по баркоду для подписи этикеток.
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

from labelkit.models.label_types import ProductInfo

logger = logging.getLogger(__name__)


@dataclass
class ProductSize:
    """Размер товара и его баркоды."""

    tech_size: str = ""
    wb_size: str = ""
    skus: list[str] = field(default_factory=list)


@dataclass
class ProductCard:
    """Карточка товара."""

    nm_id: int | None
    vendor_code: str
    title: str
    sizes: list[ProductSize] = field(default_factory=list)

    def to_product_info(self, barcode: str) -> ProductInfo:
        """Данные для этикетки: размер берётся из размера, содержащего баркод."""
        size = ""
        for size_data in self.sizes:
            if barcode in size_data.skus:
                size = size_data.wb_size or size_data.tech_size
                break

        return ProductInfo(
            title=self.title,
            size=size,
            nm_id=str(self.nm_id) if self.nm_id is not None else None,
            vendor_code=self.vendor_code or None,
        )


class ProductRepository:
    """Поиск карточек товаров по баркоду."""

    def __init__(self) -> None:
        self._cards: dict[int | str, ProductCard] = {}
        self._by_barcode: dict[str, ProductCard] = {}

    async def upsert_many(self, cards: list[ProductCard]) -> int:
        """
        Добавить или заменить карточки.

        Returns:
            Количество обработанных карточек
        """
        for card in cards:
            key = card.nm_id if card.nm_id is not None else card.vendor_code
            self._cards[key] = card
            for size_data in card.sizes:
                for sku in size_data.skus:
                    self._by_barcode[sku] = card

        logger.info(f"[PRODUCTS] Обновлено карточек: {len(cards)}, всего: {len(self._cards)}")
        return len(cards)

    async def find_by_barcode(self, barcode: str) -> ProductCard | None:
        """Найти карточку по баркоду."""
        return self._by_barcode.get(barcode)


@dataclass
class ScanRecord:
    """Запись истории сканирования."""

    code: str
    count: int
    scanned_at: datetime


class ScanHistoryRepository:
    """История сканирований кодов маркировки (контроль повторной печати)."""

    def __init__(self) -> None:
        self._records: dict[str, ScanRecord] = {}

    async def record(self, code: str) -> ScanRecord:
        """Зафиксировать сканирование, увеличив счётчик."""
        now = datetime.now(UTC)
        record = self._records.get(code)
        if record is None:
            record = ScanRecord(code=code, count=1, scanned_at=now)
            self._records[code] = record
        else:
            record.count += 1
            record.scanned_at = now
        return record

    async def find(self, code: str) -> ScanRecord | None:
        """Последнее сканирование кода или None."""
        return self._records.get(code)
