"""
Pydantic схемы для API.

Модели запросов и ответов. Поля в JSON — camelCase, как в редакторе этикеток.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from labelkit.models.label_types import (
    BarcodeOptions,
    ElementPosition,
    ElementType,
    LabelElement,
    LabelSize,
    LabelTemplate,
    PrintPayload,
)
from labelkit.services.label_size import create_label_size_from_mm, is_valid_label_size


class CamelModel(BaseModel):
    """Базовая модель: snake_case в Python, camelCase в JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === Шаблоны этикеток ===


class LabelSizeSchema(CamelModel):
    """Размеры этикетки."""

    width: float | None = Field(default=None, description="Ширина в точках")
    height: float | None = Field(default=None, description="Высота в точках")
    width_mm: float | None = Field(default=None, description="Ширина в мм")
    height_mm: float | None = Field(default=None, description="Высота в мм")
    dpi: int | None = Field(default=None, description="Разрешение принтера")

    def is_valid(self) -> bool:
        return is_valid_label_size(self.model_dump())

    def to_domain(self) -> LabelSize:
        """LabelSize с точками, пересчитанными из миллиметров."""
        return create_label_size_from_mm(self.width_mm, self.height_mm, self.dpi)

    @classmethod
    def from_domain(cls, size: LabelSize) -> "LabelSizeSchema":
        return cls(
            width=size.width,
            height=size.height,
            width_mm=size.width_mm,
            height_mm=size.height_mm,
            dpi=size.dpi,
        )


class ElementPositionSchema(CamelModel):
    x: float
    y: float
    width: float | None = None
    height: float | None = None


class LabelElementSchema(CamelModel):
    """Элемент этикетки."""

    id: str
    type: ElementType
    position: ElementPositionSchema
    font_size: int | None = None
    font_weight: Literal["normal", "bold"] | None = None
    visible: bool = True

    def to_domain(self) -> LabelElement:
        return LabelElement(
            id=self.id,
            type=self.type,
            position=ElementPosition(**self.position.model_dump()),
            font_size=self.font_size,
            font_weight=self.font_weight,
            visible=self.visible,
        )

    @classmethod
    def from_domain(cls, element: LabelElement) -> "LabelElementSchema":
        return cls(
            id=element.id,
            type=element.type,
            position=ElementPositionSchema(
                x=element.position.x,
                y=element.position.y,
                width=element.position.width,
                height=element.position.height,
            ),
            font_size=element.font_size,
            font_weight=element.font_weight,
            visible=element.visible,
        )


class LabelTemplateSchema(CamelModel):
    """Шаблон этикетки, присланный клиентом (для предпросмотра)."""

    id: str = ""
    owner_id: str = ""
    name: str = ""
    description: str | None = None
    elements: list[LabelElementSchema] = Field(default_factory=list)
    label_size: LabelSizeSchema | None = None

    def to_domain(self) -> LabelTemplate:
        """
        Raises:
            ValueError: Если размер этикетки задан не полностью
        """
        label_size = None
        if self.label_size is not None:
            if not self.label_size.is_valid():
                raise ValueError("Размер этикетки указан неверно")
            label_size = self.label_size.to_domain()

        return LabelTemplate(
            id=self.id,
            owner_id=self.owner_id,
            name=self.name,
            description=self.description,
            elements=[element.to_domain() for element in self.elements],
            label_size=label_size,
        )


class TemplateCreate(CamelModel):
    """Создание шаблона (элементы и размер — по умолчанию)."""

    name: str = Field(min_length=1, max_length=200)
    description: str | None = None


class TemplateUpdate(CamelModel):
    """Обновление шаблона: только переданные поля."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    elements: list[LabelElementSchema] | None = None
    label_size: LabelSizeSchema | None = None


class TemplateResponse(CamelModel):
    """Шаблон этикетки в ответе API."""

    id: str
    owner_id: str
    name: str
    description: str | None = None
    elements: list[LabelElementSchema]
    label_size: LabelSizeSchema | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, template: LabelTemplate) -> "TemplateResponse":
        return cls(
            id=template.id,
            owner_id=template.owner_id,
            name=template.name,
            description=template.description,
            elements=[LabelElementSchema.from_domain(e) for e in template.elements],
            label_size=(
                LabelSizeSchema.from_domain(template.label_size) if template.label_size else None
            ),
            created_at=template.created_at,
            updated_at=template.updated_at,
        )


class PresetSizeResponse(CamelModel):
    name: str
    width_mm: float
    height_mm: float
    label_size: LabelSizeSchema


# === Предпросмотр ===


class PreviewRequest(CamelModel):
    """
    Запрос предпросмотра.

    Либо zplString + dpi, либо template + dpi (template — объект или "custom").
    """

    zpl_string: str | None = None
    dpi: str | int | None = None
    label_width_mm: float | None = None
    label_height_mm: float | None = None
    template: dict | str | None = None


# === Документы и печать ===


class BarcodeOptionsSchema(CamelModel):
    scale: int | None = Field(default=None, ge=1, le=20)
    includetext: bool | None = None


class PrintRequest(CamelModel):
    """Данные сканирования для генерации PDF или прямой печати."""

    scanned_data: str | None = None
    options: BarcodeOptionsSchema | None = None
    title: str | None = None
    product_name: str | None = None
    product_size: str | None = None
    nm_id: str | int | None = None
    vendor_code: str | None = None
    data_matrix_count: int | None = None
    ean13_count: int | None = None
    diff_ean13: str | None = Field(default=None, alias="diffEAN13")

    def to_payload(self) -> PrintPayload:
        return PrintPayload(
            scanned_data=self.scanned_data or "",
            options=(
                BarcodeOptions(scale=self.options.scale, includetext=self.options.includetext)
                if self.options
                else None
            ),
            title=self.title,
            product_name=self.product_name,
            product_size=self.product_size,
            nm_id=str(self.nm_id) if self.nm_id is not None else None,
            vendor_code=self.vendor_code,
            data_matrix_count=self.data_matrix_count,
            ean13_count=self.ean13_count,
            diff_ean13=self.diff_ean13,
        )
