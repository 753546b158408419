"""
Конвертация единиц: миллиметры, точки принтера, дюймы.

Округление везде «половина вверх» (101.5 -> 102), не банковское.
"""

import math

from labelkit.config import LABEL


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def mm_to_dots(mm: float, dpi: int = LABEL.DPI) -> int:
    """Конвертировать миллиметры в точки."""
    return int(_round_half_up(mm * dpi / LABEL.MM_PER_INCH))


def dots_to_mm(dots: float, dpi: int = LABEL.DPI) -> float:
    """Конвертировать точки в миллиметры (до одной десятой)."""
    return _round_half_up(dots * LABEL.MM_PER_INCH / dpi, 1)


def mm_to_inches(mm: float) -> float:
    """Конвертировать миллиметры в дюймы (три знака после запятой)."""
    return _round_half_up(mm / LABEL.MM_PER_INCH, 3)


def _format_number(value: float) -> str:
    # 2.0 -> "2", 2.283 -> "2.283"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_size_for_rasterizer(width_mm: float, height_mm: float) -> str:
    """
    Размер этикетки для пути Labelary API.

    Returns:
        Строка "ширинаxвысота" в дюймах, например "2.283x1.575"
    """
    return f"{_format_number(mm_to_inches(width_mm))}x{_format_number(mm_to_inches(height_mm))}"
