"""
Размеры этикетки и элементы шаблона по умолчанию.

Каждая функция возвращает новый LabelSize, в котором пересчитано
зависимое представление (точки из миллиметров или наоборот).
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from labelkit.config import LABEL
from labelkit.models.label_types import ElementPosition, ElementType, LabelElement, LabelSize
from labelkit.services.units import dots_to_mm, mm_to_dots

_SIZE_FIELDS = ("width", "height", "width_mm", "height_mm", "dpi")


@dataclass(frozen=True)
class PresetLabelSize:
    """Предустановленный размер этикетки."""

    name: str
    width_mm: float
    height_mm: float


PRESET_LABEL_SIZES: list[PresetLabelSize] = [
    PresetLabelSize(name=name, width_mm=width_mm, height_mm=height_mm)
    for name, width_mm, height_mm in LABEL.PRESET_SIZES
]


def create_label_size_from_mm(width_mm: float, height_mm: float, dpi: int = LABEL.DPI) -> LabelSize:
    """Создать LabelSize из размеров в мм."""
    return LabelSize(
        width=mm_to_dots(width_mm, dpi),
        height=mm_to_dots(height_mm, dpi),
        width_mm=width_mm,
        height_mm=height_mm,
        dpi=dpi,
    )


def update_label_size_from_mm(size: LabelSize, width_mm: float, height_mm: float) -> LabelSize:
    """Обновить LabelSize при изменении размеров в мм."""
    return create_label_size_from_mm(width_mm, height_mm, size.dpi)


def update_label_size_from_dots(size: LabelSize, width: int, height: int) -> LabelSize:
    """
    Обновить LabelSize при изменении размеров в точках.

    Миллиметры округляются до десятых, поэтому точки пересчитываются
    обратно из них: иначе пара (точки, мм) разъедется.
    """
    return create_label_size_from_mm(
        dots_to_mm(width, size.dpi),
        dots_to_mm(height, size.dpi),
        size.dpi,
    )


def update_label_size_dpi(size: LabelSize, dpi: int) -> LabelSize:
    """Обновить DPI и пересчитать точки."""
    return replace(
        size,
        width=mm_to_dots(size.width_mm, dpi),
        height=mm_to_dots(size.height_mm, dpi),
        dpi=dpi,
    )


def is_valid_label_size(size: LabelSize | Mapping[str, Any] | None) -> bool:
    """Проверить, что все пять полей размера заданы и положительны."""
    if size is None:
        return False

    if isinstance(size, Mapping):
        values = [size.get(name) for name in _SIZE_FIELDS]
    else:
        values = [getattr(size, name, None) for name in _SIZE_FIELDS]

    for value in values:
        if isinstance(value, bool) or not isinstance(value, int | float):
            return False
        if value <= 0:
            return False
    return True


def get_default_label_size() -> LabelSize:
    """Размер этикетки по умолчанию (58×40 мм)."""
    return create_label_size_from_mm(LABEL.LABEL_WIDTH_MM, LABEL.LABEL_HEIGHT_MM)


def create_default_elements() -> list[LabelElement]:
    """Набор элементов нового шаблона: по одному элементу каждого типа."""
    return [
        LabelElement(
            id="productName",
            type=ElementType.PRODUCT_NAME,
            position=ElementPosition(x=10, y=10),
            font_size=20,
        ),
        LabelElement(
            id="nmId",
            type=ElementType.NM_ID,
            position=ElementPosition(x=10, y=70),
            font_size=20,
        ),
        LabelElement(
            id="vendorCode",
            type=ElementType.VENDOR_CODE,
            position=ElementPosition(x=10, y=130),
            font_size=20,
        ),
        LabelElement(
            id="productSize",
            type=ElementType.PRODUCT_SIZE,
            position=ElementPosition(x=10, y=220),
            font_size=20,
        ),
        LabelElement(
            id="dataMatrix",
            type=ElementType.DATA_MATRIX,
            position=ElementPosition(x=270, y=120),
        ),
    ]
