"""
Генерация ZPL.

- compile_template: шаблон этикетки -> ZPL для предпросмотра (с заглушками
  вместо данных товара)
- build_print_job: данные сканирования -> задание для сетевого принтера
  (несколько этикеток в одной строке ZPL)
"""

import logging
import math
import re
from typing import assert_never

from labelkit.models.label_types import ElementType, LabelElement, LabelTemplate, PrintPayload

logger = logging.getLogger(__name__)

# Шрифт по умолчанию для каждого текстового элемента
DEFAULT_FONT_SIZES: dict[ElementType, int] = {
    ElementType.PRODUCT_NAME: 20,
    ElementType.PRODUCT_SIZE: 16,
    ElementType.NM_ID: 16,
    ElementType.VENDOR_CODE: 16,
}

# Смещение строки со значением артикула продавца под подписью
VENDOR_CODE_VALUE_OFFSET = 35

# DataMatrix: размер модуля по умолчанию и плотность (^BXN,<module>,<quality>)
DATAMATRIX_DEFAULT_MODULE = 5
DATAMATRIX_QUALITY = 200

# Заглушки для предпросмотра шаблона
PLACEHOLDER_PRODUCT_NAME = "Название товара"
PLACEHOLDER_PRODUCT_SIZE = "Размер: 42"
PLACEHOLDER_NM_ID = "123456"
PLACEHOLDER_VENDOR_CODE = "ART-001"
PLACEHOLDER_DATAMATRIX = (
    "thisIsDataMatrixExampleForBarMatrix. Next - random data: askuhjshfsdfjlsngkjlfwefggfdgd"
)

_EAN13_RE = re.compile(r"\d{13}", re.ASCII)


class TemplateError(ValueError):
    """Шаблон этикетки некорректен и не может быть скомпилирован."""

    pass


def _round(value: float) -> int:
    return math.floor(value + 0.5)


def _font(element: LabelElement) -> str:
    size = element.font_size or DEFAULT_FONT_SIZES[element.type]
    return f"^A0N,{size},{size}"


def _text_field(x: int, y: int, font: str, text: str) -> str:
    return f"^FO{x},{y}{font}^FD{text}^FS"


def _compile_element(element: LabelElement) -> str:
    x = _round(element.position.x)
    y = _round(element.position.y)

    match element.type:
        case ElementType.PRODUCT_NAME:
            return _text_field(x, y, _font(element), PLACEHOLDER_PRODUCT_NAME)
        case ElementType.PRODUCT_SIZE:
            return _text_field(x, y, _font(element), PLACEHOLDER_PRODUCT_SIZE)
        case ElementType.NM_ID:
            return _text_field(x, y, _font(element), f"Артикул: {PLACEHOLDER_NM_ID}")
        case ElementType.VENDOR_CODE:
            font = _font(element)
            return _text_field(x, y, font, "Артикул продавца: ") + _text_field(
                x, y + VENDOR_CODE_VALUE_OFFSET, font, PLACEHOLDER_VENDOR_CODE
            )
        case ElementType.DATA_MATRIX:
            module = _round(element.position.height or DATAMATRIX_DEFAULT_MODULE)
            return (
                f"^FO{x},{y}^BXN,{module},{DATAMATRIX_QUALITY}"
                f"^FD{PLACEHOLDER_DATAMATRIX}^FS"
            )
        case _:
            assert_never(element.type)


def compile_template(template: LabelTemplate) -> str:
    """
    Генерирует ZPL код из шаблона этикетки.

    Одинаковые шаблоны дают побайтно одинаковый результат.

    Args:
        template: Шаблон этикетки

    Returns:
        ZPL от ^XA до ^XZ

    Raises:
        TemplateError: Если в шаблоне не заданы размеры этикетки
    """
    if template.label_size is None:
        raise TemplateError("Размеры этикетки не определены в шаблоне")

    parts = [
        "^XA",
        f"^PW{_round(template.label_size.width)}",
        f"^LL{_round(template.label_size.height)}",
        "^CI28",
    ]

    visible = [element for element in template.elements if element.visible]
    if not visible:
        logger.warning(f"[ZPL] Шаблон {template.id!r} не содержит видимых элементов")

    parts.extend(_compile_element(element) for element in visible)
    parts.append("^XZ")

    return "".join(parts)


# === Задание для сетевого принтера ===


def _ean13_label(barcode: str) -> str:
    """Этикетка EAN-13. ^BEN сам считает контрольную цифру — передаём 12."""
    return f"^XA^FO55,20^BY4^BEN,240,Y,N^FD{barcode[:-1]}^FS^XZ"


def _data_matrix_label(payload: PrintPayload) -> str:
    return (
        "^XA"
        "^CI28"
        "^CF0,24"
        f"^FO10,10^FD{payload.product_name or ''}^FS"
        f"^FO270,120^BXN,{DATAMATRIX_DEFAULT_MODULE},{DATAMATRIX_QUALITY}"
        f"^FD{payload.scanned_data}^FS"
        f"^FO10,70^FDАртикул: {payload.nm_id or ''}^FS"
        "^FO10,130^FDАртикул продавца:^FS"
        f"^FO10,165^FD{payload.vendor_code or ''}^FS"
        f"^FO10,220^FDРазмер: {payload.product_size or ''}^FS"
        "^XZ"
    )


def build_print_job(payload: PrintPayload) -> str:
    """
    Собирает ZPL задание для печати по результату сканирования.

    Правила:
    - diff_ean13 задан: печатаем EAN-13 этого кода (ean13_count, минимум 1)
    - отсканирован сам EAN-13: печатаем его (ean13_count, минимум 1)
    - иначе DataMatrix с данными товара (data_matrix_count, минимум 1)
      и, если внутри кода есть EAN-13, ещё ean13_count этикеток EAN-13

    Args:
        payload: Данные сканирования и количество копий

    Returns:
        Строка ZPL со всеми этикетками задания
    """
    scanned = payload.scanned_data
    job = ""

    if payload.diff_ean13:
        count = max(1, payload.ean13_count or 1)
        job += _ean13_label(payload.diff_ean13) * count

    if _EAN13_RE.fullmatch(scanned) and not payload.diff_ean13:
        count = max(1, payload.ean13_count or 1)
        return _ean13_label(scanned) * count

    dm_count = max(1, payload.data_matrix_count or 1)
    job += _data_matrix_label(payload) * dm_count

    candidate = scanned[3:16]
    if _EAN13_RE.fullmatch(candidate) and not payload.diff_ean13:
        ean_count = max(0, payload.ean13_count or 0)
        job += _ean13_label(candidate) * ean_count

    return job
