"""
Репозитории шаблонов, товаров и истории сканирований.

Repository Pattern обеспечивает:
- Абстракцию доступа к данным
- Централизованную логику запросов
- Упрощённое тестирование
"""

from labelkit.repositories.product_repository import (
    ProductCard,
    ProductRepository,
    ProductSize,
    ScanHistoryRepository,
    ScanRecord,
)
from labelkit.repositories.template_repository import LabelTemplateRepository

__all__ = [
    "LabelTemplateRepository",
    "ProductCard",
    "ProductRepository",
    "ProductSize",
    "ScanHistoryRepository",
    "ScanRecord",
]
