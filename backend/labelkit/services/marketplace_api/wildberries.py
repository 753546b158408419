"""
Клиент Wildberries Content API.

Загружает карточки товаров в каталог, чтобы подписывать дубликаты
этикеток названием и размером.

Документация: https://dev.wildberries.ru/openapi/api-information
"""

import logging

import httpx

from labelkit.repositories import ProductCard, ProductRepository, ProductSize

logger = logging.getLogger(__name__)

# WB Content API
WB_API_URL = "https://content-api.wildberries.ru"
CARDS_LIST_PATH = "/content/v2/get/cards/list"


class WildberriesAPIError(Exception):
    """Ошибка WB API."""

    pass


def parse_card(card: dict) -> ProductCard:
    """Карточка WB -> ProductCard."""
    sizes = [
        ProductSize(
            tech_size=str(size_data.get("techSize") or ""),
            wb_size=str(size_data.get("wbSize") or ""),
            skus=[str(sku) for sku in size_data.get("skus", [])],
        )
        for size_data in card.get("sizes", [])
    ]
    vendor_code = card.get("vendorCode", "")

    return ProductCard(
        nm_id=card.get("nmID"),
        vendor_code=vendor_code,
        title=card.get("title") or card.get("subjectName") or vendor_code,
        sizes=sizes,
    )


class WildberriesAPI:
    """
    Клиент Wildberries Content API.

    Использование:
        api = WildberriesAPI(api_key="...")
        cards = await api.get_all_cards()
    """

    def __init__(self, api_key: str, transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = api_key
        self.headers = {"Authorization": api_key}
        self._transport = transport

    async def get_all_cards(self, limit: int = 100) -> list[ProductCard]:
        """
        Получить все карточки с пагинацией по курсору.

        Args:
            limit: Карточек за запрос (max 100)

        Returns:
            Список карточек

        Raises:
            WildberriesAPIError: При ошибке HTTP или сети
        """
        cards: list[ProductCard] = []
        cursor: dict = {"limit": min(limit, 100)}

        async with httpx.AsyncClient(
            base_url=WB_API_URL, timeout=30, transport=self._transport
        ) as client:
            while True:
                try:
                    response = await client.post(
                        CARDS_LIST_PATH,
                        headers=self.headers,
                        json={"settings": {"cursor": cursor, "filter": {"withPhoto": -1}}},
                    )
                    response.raise_for_status()
                    data = response.json()
                except httpx.HTTPStatusError as e:
                    raise WildberriesAPIError(f"HTTP {e.response.status_code}") from e
                except httpx.HTTPError as e:
                    raise WildberriesAPIError(str(e)) from e

                page = data.get("cards", [])
                cards.extend(parse_card(card) for card in page)

                cursor_data = data.get("cursor", {})
                # Последняя страница: карточек меньше лимита
                if len(page) < cursor["limit"] or not cursor_data.get("nmID"):
                    break

                cursor = {
                    "limit": cursor["limit"],
                    "nmID": cursor_data.get("nmID"),
                    "updatedAt": cursor_data.get("updatedAt"),
                }

        return cards


async def sync_catalog(api: WildberriesAPI, repository: ProductRepository) -> int:
    """
    Обновить каталог товаров из WB.

    Returns:
        Количество загруженных карточек
    """
    cards = await api.get_all_cards()
    logger.info(f"[WB] Получено карточек: {len(cards)}")
    return await repository.upsert_many(cards)
