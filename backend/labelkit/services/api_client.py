"""
HTTP клиент станции сканирования для Backend API.

Генерация PDF и поиск товара по баркоду. Повторных попыток нет:
каждая ошибка сети — окончательная для этой попытки печати.
"""

import logging
from dataclasses import dataclass

import httpx

from labelkit.config import get_settings
from labelkit.models.label_types import PrintPayload, ProductInfo

logger = logging.getLogger(__name__)

GENERATE_PDF_PATH = "/api/v1/generate-pdf"


@dataclass
class DocumentResult:
    """Результат генерации документа."""

    success: bool
    content: bytes | None = None
    error: str | None = None
    status_code: int = 200


class DocumentAPIClient:
    """
    Клиент API генерации документов.

    Использование:
        client = DocumentAPIClient()
        result = await client.generate(PrintPayload(scanned_data="..."))
        if result.success:
            pdf = result.content
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.api_timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def generate(self, payload: PrintPayload) -> DocumentResult:
        """
        Запросить PDF для печати.

        Args:
            payload: Данные сканирования и подписи товара

        Returns:
            DocumentResult с PDF или текстом ошибки
        """
        try:
            async with self._client() as client:
                response = await client.post(GENERATE_PDF_PATH, json=payload.to_request())
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"[API] Генерация PDF недоступна: {type(e).__name__}: {e}")
            return DocumentResult(success=False, error=str(e), status_code=0)

        if not response.is_success:
            return DocumentResult(
                success=False,
                error=self._extract_error(response, "Ошибка генерации PDF"),
                status_code=response.status_code,
            )

        return DocumentResult(success=True, content=response.content)

    async def get_product(self, barcode: str) -> ProductInfo | None:
        """
        Найти товар по баркоду.

        Returns:
            ProductInfo или None, если товар не найден или API недоступен
        """
        try:
            async with self._client() as client:
                response = await client.get(GENERATE_PDF_PATH, params={"barcode": barcode})
            data = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.error(f"[API] Поиск товара {barcode} не удался: {type(e).__name__}: {e}")
            return None

        product = data.get("product") if data.get("success") else None
        if not product or not product.get("title"):
            return None

        return ProductInfo(
            title=product["title"],
            size=product.get("size") or "",
            nm_id=product.get("nmId"),
            vendor_code=product.get("vendorCode"),
        )

    @staticmethod
    def _extract_error(response: httpx.Response, default: str) -> str:
        """Текст ошибки из JSON ответа {error}."""
        try:
            data = response.json()
        except ValueError:
            return f"{default}: HTTP {response.status_code}"
        return data.get("error") or default
