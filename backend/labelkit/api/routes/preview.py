"""
API предпросмотра этикеток.

Принимает готовый ZPL или шаблон этикетки и возвращает PNG от растеризатора.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from labelkit.api.dependencies import (
    get_optional_owner_id,
    get_preview_renderer,
    get_template_repository,
)
from labelkit.models.schemas import LabelTemplateSchema, PreviewRequest
from labelkit.repositories import LabelTemplateRepository
from labelkit.services.error_messages import (
    INTERNAL_ERROR,
    INVALID_LABEL_SIZE,
    INVALID_PREVIEW_REQUEST,
    UNAUTHORIZED,
)
from labelkit.services.preview import CUSTOM_TEMPLATE, PreviewRenderer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/preview", tags=["Preview"])


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"success": False, "error": message}, status_code=status_code)


@router.post("")
async def preview(
    body: PreviewRequest,
    owner_id: str | None = Depends(get_optional_owner_id),
    renderer: PreviewRenderer = Depends(get_preview_renderer),
    repository: LabelTemplateRepository = Depends(get_template_repository),
) -> JSONResponse:
    """
    Предпросмотр этикетки.

    Варианты запроса:
    - zplString + dpi: готовый ZPL
    - template + dpi: шаблон (объект или "custom" — сохранённый шаблон владельца),
      в ответ дополнительно возвращается сгенерированный ZPL
    """
    try:
        if body.zpl_string and body.dpi:
            result = await renderer.render(
                body.zpl_string,
                body.dpi,
                body.label_width_mm,
                body.label_height_mm,
            )
            return JSONResponse(result.to_dict())

        if body.template and body.dpi:
            if body.template == CUSTOM_TEMPLATE:
                if owner_id is None:
                    return _error(UNAUTHORIZED.message, status.HTTP_401_UNAUTHORIZED)
                template = CUSTOM_TEMPLATE
            elif isinstance(body.template, dict):
                try:
                    template = LabelTemplateSchema.model_validate(body.template).to_domain()
                except ValidationError:
                    return _error("Неверный формат шаблона", status.HTTP_400_BAD_REQUEST)
                except ValueError:
                    return _error(INVALID_LABEL_SIZE.message, status.HTTP_400_BAD_REQUEST)
            else:
                return _error("Неверный формат шаблона", status.HTTP_400_BAD_REQUEST)

            result = await renderer.render_template(template, body.dpi, owner_id, repository)
            if result.not_found:
                return _error(result.error, status.HTTP_404_NOT_FOUND)
            if not result.success and result.zpl is None:
                return _error(result.error, status.HTTP_400_BAD_REQUEST)
            return JSONResponse(result.to_dict())

        return _error(INVALID_PREVIEW_REQUEST.message, status.HTTP_400_BAD_REQUEST)

    except Exception as e:
        logger.exception(f"[PREVIEW] Ошибка при предпросмотре ZPL: {e}")
        return _error(INTERNAL_ERROR.message, status.HTTP_500_INTERNAL_SERVER_ERROR)
