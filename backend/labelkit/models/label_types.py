# backend/labelkit/models/label_types.py
"""
Типы данных шаблона этикетки и конвейера печати.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Literal


class ElementType(str, Enum):
    """Типы элементов этикетки."""

    PRODUCT_NAME = "productName"
    PRODUCT_SIZE = "productSize"
    NM_ID = "nmId"  # Артикул WB
    VENDOR_CODE = "vendorCode"  # Артикул продавца
    DATA_MATRIX = "dataMatrix"


@dataclass(frozen=True)
class LabelSize:
    """
    Размеры этикетки.

    Точки и миллиметры всегда согласованы: создавайте и меняйте размер
    только через функции labelkit.services.label_size.
    """

    width: int  # в точках
    height: int  # в точках
    width_mm: float
    height_mm: float
    dpi: int  # разрешение для конвертации


@dataclass
class ElementPosition:
    """Координаты элемента на этикетке (в точках)."""

    x: float
    y: float
    width: float | None = None
    height: float | None = None


@dataclass
class LabelElement:
    """Конфигурация элемента этикетки."""

    id: str
    type: ElementType
    position: ElementPosition
    font_size: int | None = None
    font_weight: Literal["normal", "bold"] | None = None
    visible: bool = True


@dataclass
class LabelTemplate:
    """Шаблон этикетки."""

    id: str
    owner_id: str
    name: str
    elements: list[LabelElement] = field(default_factory=list)
    label_size: LabelSize | None = None
    description: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass
class BarcodeOptions:
    """Параметры отрисовки кода в документе."""

    scale: int | None = None
    includetext: bool | None = None


@dataclass
class PrintPayload:
    """
    Данные одной печати.

    Создаётся на каждое сканирование, используется один раз.
    """

    scanned_data: str
    options: BarcodeOptions | None = None
    title: str | None = None
    product_name: str | None = None  # Название товара
    product_size: str | None = None  # Размер товара
    nm_id: str | None = None  # Артикул ВБ
    vendor_code: str | None = None  # Артикул продавца
    data_matrix_count: int | None = None  # Количество этикеток DataMatrix
    ean13_count: int | None = None  # Количество этикеток EAN-13
    diff_ean13: str | None = None  # EAN-13, отличный от кода в DataMatrix

    def to_request(self) -> dict:
        """JSON для API генерации документа (ключи в camelCase, пустые опускаются)."""
        data: dict = {"scannedData": self.scanned_data}
        if self.options is not None:
            options = {
                key: value
                for key, value in (
                    ("scale", self.options.scale),
                    ("includetext", self.options.includetext),
                )
                if value is not None
            }
            data["options"] = options
        optional = {
            "title": self.title,
            "productName": self.product_name,
            "productSize": self.product_size,
            "nmId": self.nm_id,
            "vendorCode": self.vendor_code,
            "dataMatrixCount": self.data_matrix_count,
            "ean13Count": self.ean13_count,
            "diffEAN13": self.diff_ean13,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        return data


@dataclass(frozen=True)
class ScanClassification:
    """Результат разбора одного сканирования."""

    canonical_code: str
    ean13_candidate: str | None = None


@dataclass
class ProductInfo:
    """Данные товара для подписи этикетки."""

    title: str
    size: str = ""
    nm_id: str | None = None
    vendor_code: str | None = None
