# backend/labelkit/services/document_generator.py
"""
Генератор PDF дубликата этикетки через ReportLab.

Одна страница 58x40 мм:
- 13 цифр: штрихкод EAN-13 почти на весь стикер
- иначе: DataMatrix слева вверху, справа название и размер товара
"""

import logging
import os
from io import BytesIO

from PIL import Image
from reportlab.graphics import renderPDF
from reportlab.graphics.barcode.eanbc import Ean13BarcodeWidget
from reportlab.graphics.shapes import Drawing
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from labelkit.config import LABEL
from labelkit.models.label_types import BarcodeOptions
from labelkit.services.scan_input import EAN13_RE, is_valid_ean13

logger = logging.getLogger(__name__)

# Шрифты с кириллицей: Docker (DejaVu), затем Windows для локальной разработки
FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "C:/Windows/Fonts/arial.ttf",
    "C:/Windows/Fonts/tahoma.ttf",
]
FONT_NAME = "DejaVuSans"
FALLBACK_FONT = "Helvetica"  # без кириллицы

# Все координаты в мм от левого верхнего угла
PAGE_WIDTH_MM = LABEL.LABEL_WIDTH_MM
PAGE_HEIGHT_MM = LABEL.LABEL_HEIGHT_MM

EAN13_BOX = {"x": 2, "y": 2, "width": 54, "height": 36}
DATAMATRIX_BOX = {"x": 2, "y": 2, "size": 16}
NAME_TEXT = {"x": 20, "y": 8, "size": 10, "max_width": 36}
SIZE_TEXT = {"x": 20, "y": 14, "size": 9, "max_width": 36}

DEFAULT_DATAMATRIX_SCALE = 3

_font_name: str | None = None


def _ensure_font_registered() -> str:
    """Регистрирует шрифт с кириллицей и возвращает его имя."""
    global _font_name
    if _font_name is not None:
        return _font_name

    for font_path in FONT_CANDIDATES:
        if os.path.exists(font_path):
            pdfmetrics.registerFont(TTFont(FONT_NAME, font_path))
            _font_name = FONT_NAME
            return _font_name

    logger.warning("[PDF] Шрифт с кириллицей не найден, используется Helvetica")
    _font_name = FALLBACK_FONT
    return _font_name


class DocumentGenerator:
    """Генератор PDF для печати дубликата этикетки."""

    def __init__(self) -> None:
        self.font_name = _ensure_font_registered()

    def generate(
        self,
        scanned_data: str,
        product_name: str | None = None,
        product_size: str | None = None,
        options: BarcodeOptions | None = None,
    ) -> bytes:
        """
        Генерирует PDF с одной этикеткой.

        Args:
            scanned_data: Код маркировки или 13 цифр EAN-13
            product_name: Название товара (только для DataMatrix)
            product_size: Размер товара (только для DataMatrix)
            options: scale — увеличение растра DataMatrix,
                includetext — цифры под EAN-13

        Returns:
            bytes: PDF файл

        Raises:
            ValueError: Если данные пустые или код не кодируется
        """
        if not scanned_data:
            raise ValueError("Отсутствуют данные для генерации")

        options = options or BarcodeOptions()
        is_ean13 = EAN13_RE.fullmatch(scanned_data) is not None
        if is_ean13 and not is_valid_ean13(scanned_data):
            raise ValueError(f"Неверная контрольная цифра EAN-13: {scanned_data}")

        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=(PAGE_WIDTH_MM * mm, PAGE_HEIGHT_MM * mm))
        c.setTitle("DataMatrix code")

        if is_ean13:
            self._draw_ean13(c, scanned_data, include_text=options.includetext is not False)
        else:
            self._draw_datamatrix(c, scanned_data, options.scale or DEFAULT_DATAMATRIX_SCALE)

            if product_name:
                self._draw_text(c, product_name, **NAME_TEXT)
            if product_size:
                self._draw_text(c, f"Размер: {product_size}", **SIZE_TEXT)

        c.showPage()
        c.save()

        logger.debug(f"[PDF] Сгенерирован документ ({'EAN-13' if is_ean13 else 'DataMatrix'})")
        return buffer.getvalue()

    def _draw_ean13(self, c: canvas.Canvas, value: str, include_text: bool) -> None:
        """EAN-13 штрихкод на всю этикетку с отступами 2 мм."""
        box = EAN13_BOX
        # Виджет сам добавляет контрольную цифру
        barcode = Ean13BarcodeWidget(value[:12])
        # EAN-13 имеет 95 модулей (+ зоны покоя учитываются виджетом)
        barcode.barWidth = (box["width"] * mm) / 113
        barcode.barHeight = box["height"] * mm * (0.8 if include_text else 1.0)
        barcode.humanReadable = include_text

        d = Drawing()
        d.add(barcode)
        y_bottom = PAGE_HEIGHT_MM - box["y"] - box["height"]
        renderPDF.draw(d, c, box["x"] * mm, y_bottom * mm)

    def _draw_datamatrix(self, c: canvas.Canvas, value: str, scale: int) -> None:
        """DataMatrix через pylibdmtx (GS1 поддержка для Честный Знак)."""
        from pylibdmtx.pylibdmtx import encode as dmtx_encode

        try:
            encoded = dmtx_encode(value.encode("utf-8"))
        except Exception as e:
            raise ValueError(f"Ошибка генерации DataMatrix: {e}") from e

        img = Image.frombytes("RGB", (encoded.width, encoded.height), encoded.pixels)
        # Чёрно-белый без градаций серого, масштаб без интерполяции
        img = img.convert("1")
        img = img.resize((img.width * scale, img.height * scale), Image.Resampling.NEAREST)

        img_buffer = BytesIO()
        img.save(img_buffer, format="PNG")
        img_buffer.seek(0)

        box = DATAMATRIX_BOX
        y_bottom = PAGE_HEIGHT_MM - box["y"] - box["size"]
        c.drawImage(
            ImageReader(img_buffer),
            box["x"] * mm,
            y_bottom * mm,
            width=box["size"] * mm,
            height=box["size"] * mm,
            preserveAspectRatio=True,
            anchor="sw",
        )

    def _draw_text(
        self,
        c: canvas.Canvas,
        text: str,
        x: float,
        y: float,
        size: float,
        max_width: float,
    ) -> None:
        """Текст с переносом по ширине; y — базовая линия первой строки от верха."""
        c.setFont(self.font_name, size)
        c.setFillColorRGB(0, 0, 0)

        lines = simpleSplit(text, self.font_name, size, max_width * mm)
        baseline = (PAGE_HEIGHT_MM - y) * mm
        for line in lines:
            c.drawString(x * mm, baseline, line)
            baseline -= size * 1.15
