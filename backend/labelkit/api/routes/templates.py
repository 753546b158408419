"""
API шаблонов этикеток.

Шаблоны принадлежат владельцу (X-Owner-Id); новый шаблон получает
набор элементов по умолчанию и размер 58×40 мм.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from labelkit.api.dependencies import get_current_owner_id, get_template_repository
from labelkit.models.label_types import LabelTemplate
from labelkit.models.schemas import (
    LabelSizeSchema,
    PresetSizeResponse,
    TemplateCreate,
    TemplateResponse,
    TemplateUpdate,
)
from labelkit.repositories import LabelTemplateRepository
from labelkit.services.error_messages import INVALID_LABEL_SIZE, TEMPLATE_NOT_FOUND
from labelkit.services.label_size import PRESET_LABEL_SIZES, create_label_size_from_mm

router = APIRouter(prefix="/api/v1/templates", tags=["Templates"])


async def _get_owned_template(
    template_id: str,
    owner_id: str,
    repository: LabelTemplateRepository,
) -> LabelTemplate:
    """
    Шаблон владельца.

    Raises:
        HTTPException: 404 если шаблона нет или он чужой
    """
    template = await repository.get_by_id(template_id)
    if template is None or template.owner_id != owner_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=TEMPLATE_NOT_FOUND.message,
        )
    return template


@router.get("/presets", response_model=list[PresetSizeResponse])
async def list_presets() -> list[PresetSizeResponse]:
    """Предустановленные размеры этикеток."""
    return [
        PresetSizeResponse(
            name=preset.name,
            width_mm=preset.width_mm,
            height_mm=preset.height_mm,
            label_size=LabelSizeSchema.from_domain(
                create_label_size_from_mm(preset.width_mm, preset.height_mm)
            ),
        )
        for preset in PRESET_LABEL_SIZES
    ]


@router.get("", response_model=list[TemplateResponse])
async def list_templates(
    owner_id: str = Depends(get_current_owner_id),
    repository: LabelTemplateRepository = Depends(get_template_repository),
) -> list[TemplateResponse]:
    """Все шаблоны владельца, свежие первыми."""
    templates = await repository.list_by_owner(owner_id)
    return [TemplateResponse.from_domain(t) for t in templates]


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(
    data: TemplateCreate,
    owner_id: str = Depends(get_current_owner_id),
    repository: LabelTemplateRepository = Depends(get_template_repository),
) -> TemplateResponse:
    """Создать шаблон с элементами по умолчанию."""
    template = await repository.create(owner_id, data.name, data.description)
    return TemplateResponse.from_domain(template)


@router.get("/{template_id}", response_model=TemplateResponse)
async def get_template(
    template_id: str,
    owner_id: str = Depends(get_current_owner_id),
    repository: LabelTemplateRepository = Depends(get_template_repository),
) -> TemplateResponse:
    template = await _get_owned_template(template_id, owner_id, repository)
    return TemplateResponse.from_domain(template)


@router.patch("/{template_id}", response_model=TemplateResponse)
async def update_template(
    template_id: str,
    data: TemplateUpdate,
    owner_id: str = Depends(get_current_owner_id),
    repository: LabelTemplateRepository = Depends(get_template_repository),
) -> TemplateResponse:
    """Обновить название, описание, элементы или размер шаблона."""
    await _get_owned_template(template_id, owner_id, repository)

    label_size = None
    if data.label_size is not None:
        if not data.label_size.is_valid():
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=INVALID_LABEL_SIZE.message,
            )
        label_size = data.label_size.to_domain()

    template = await repository.update(
        template_id,
        name=data.name,
        description=data.description,
        elements=[e.to_domain() for e in data.elements] if data.elements is not None else None,
        label_size=label_size,
    )
    return TemplateResponse.from_domain(template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: str,
    owner_id: str = Depends(get_current_owner_id),
    repository: LabelTemplateRepository = Depends(get_template_repository),
) -> None:
    await _get_owned_template(template_id, owner_id, repository)
    await repository.delete(template_id)
