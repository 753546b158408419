"""
Предпросмотр этикеток через Labelary API.

ZPL отправляется на внешний растеризатор, в ответ приходит PNG.
Ошибки сети и HTTP не пробрасываются наружу — возвращается PreviewResult.
"""

import base64
import logging
from dataclasses import dataclass

import httpx

from labelkit.config import LABEL, get_settings
from labelkit.models.label_types import LabelTemplate
from labelkit.repositories import LabelTemplateRepository
from labelkit.services.error_messages import (
    CUSTOM_TEMPLATE_NOT_FOUND,
    NO_PREVIEW_DATA,
    PREVIEW_FAILED,
)
from labelkit.services.units import format_size_for_rasterizer
from labelkit.services.zpl_compiler import TemplateError, compile_template

logger = logging.getLogger(__name__)

CUSTOM_TEMPLATE = "custom"


@dataclass
class PreviewResult:
    """Результат предпросмотра."""

    success: bool
    image_data: str | None = None  # data:image/png;base64,...
    content_type: str | None = None
    error: str | None = None
    not_found: bool = False

    def to_dict(self) -> dict:
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "imageData": self.image_data,
            "contentType": self.content_type,
        }


@dataclass
class TemplatePreviewResult(PreviewResult):
    """Предпросмотр шаблона вместе со сгенерированным ZPL."""

    zpl: str | None = None

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.zpl is not None:
            data["zpl"] = self.zpl
        return data


def dpi_to_dpmm(dpi: str | int) -> str:
    """
    DPI принтера -> точек на мм в терминах Labelary.

    Неизвестное значение — как 203 DPI (8dpmm).
    """
    dpmm = LABEL.DPMM_BY_DPI.get(str(dpi).strip())
    if dpmm is None:
        logger.debug(f"[PREVIEW] Неизвестный DPI {dpi!r}, используем {LABEL.DEFAULT_DPMM}dpmm")
        return LABEL.DEFAULT_DPMM
    return dpmm


class PreviewRenderer:
    """
    Клиент растеризатора ZPL.

    Использование:
        renderer = PreviewRenderer()
        result = await renderer.render("^XA...^XZ", "203", 58, 40)
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.rasterizer_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.rasterizer_timeout
        self._transport = transport

    def build_url(self, dpi: str | int, width_mm: float | None, height_mm: float | None) -> str:
        """URL запроса: {base}/{dpmm}dpmm/labels/{w}x{h}/0/"""
        label_size = format_size_for_rasterizer(
            width_mm or LABEL.LABEL_WIDTH_MM,
            height_mm or LABEL.LABEL_HEIGHT_MM,
        )
        return f"{self.base_url}/{dpi_to_dpmm(dpi)}dpmm/labels/{label_size}/0/"

    async def render(
        self,
        zpl: str | None,
        dpi: str | int | None,
        width_mm: float | None = None,
        height_mm: float | None = None,
    ) -> PreviewResult:
        """
        Получить PNG предпросмотр ZPL.

        Args:
            zpl: ZPL код
            dpi: Разрешение принтера ("203", "300", "600")
            width_mm: Ширина этикетки (по умолчанию 58 мм)
            height_mm: Высота этикетки (по умолчанию 40 мм)

        Returns:
            PreviewResult с data URI изображения или ошибкой
        """
        if not zpl or not dpi:
            return PreviewResult(success=False, error=NO_PREVIEW_DATA.message)

        url = self.build_url(dpi, width_mm, height_mm)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    url,
                    headers={
                        "Content-Type": "application/x-www-form-urlencoded",
                        "Accept": "image/png",
                    },
                    content=zpl.encode("utf-8"),
                )
        except httpx.HTTPError as e:
            logger.error(f"[PREVIEW] Ошибка запроса к растеризатору: {e}")
            return PreviewResult(success=False, error=PREVIEW_FAILED.message)

        if not response.is_success:
            logger.error(f"[PREVIEW] Растеризатор ответил HTTP {response.status_code}")
            return PreviewResult(success=False, error=PREVIEW_FAILED.message)

        encoded = base64.b64encode(response.content).decode("ascii")
        return PreviewResult(
            success=True,
            image_data=f"data:image/png;base64,{encoded}",
            content_type=response.headers.get("content-type") or "image/png",
        )

    async def render_template(
        self,
        template: LabelTemplate | str,
        dpi: str | int,
        owner_id: str | None = None,
        repository: LabelTemplateRepository | None = None,
    ) -> TemplatePreviewResult:
        """
        Сгенерировать ZPL из шаблона и получить предпросмотр.

        Args:
            template: Шаблон или строка "custom" — пользовательский шаблон владельца
            dpi: Разрешение принтера
            owner_id: Владелец (для "custom")
            repository: Хранилище шаблонов (для "custom")

        Returns:
            TemplatePreviewResult с изображением и ZPL
        """
        if isinstance(template, str):
            if template != CUSTOM_TEMPLATE or repository is None or owner_id is None:
                return TemplatePreviewResult(success=False, error="Неверный формат шаблона")

            stored = await repository.get_custom(owner_id)
            if stored is None:
                return TemplatePreviewResult(
                    success=False,
                    error=CUSTOM_TEMPLATE_NOT_FOUND.message,
                    not_found=True,
                )
            template = stored

        try:
            zpl = compile_template(template)
        except TemplateError as e:
            return TemplatePreviewResult(success=False, error=str(e))

        size = template.label_size
        result = await self.render(zpl, dpi, size.width_mm, size.height_mm)

        return TemplatePreviewResult(
            success=result.success,
            image_data=result.image_data,
            content_type=result.content_type,
            error=result.error,
            zpl=zpl,
        )
