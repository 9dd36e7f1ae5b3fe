from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.constants import (
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
    DEFAULT_TEMPLATE_DESCRIPTION,
    DEFAULT_TEMPLATE_SUBTITLE,
    DEFAULT_TEMPLATE_TITLE,
    HEX_COLOR_PATTERN,
)
from app.core.datetime_utils import UTCDatetime


class TemplateSettings(BaseModel):
    layout: Literal["classic", "modern", "minimal", "elegant"] = "classic"
    orientation: Literal["landscape", "portrait"] = "landscape"
    show_date: bool = True
    show_course_hours: bool = True
    show_instructor_name: bool = True
    show_credential_id: bool = True
    border_style: Literal["none", "simple", "elegant", "ornate"] = "elegant"
    font_family: str | None = None


class CertificateTemplateCreate(BaseModel):
    title: str = Field(default=DEFAULT_TEMPLATE_TITLE, min_length=1, max_length=255)
    subtitle: str | None = Field(default=DEFAULT_TEMPLATE_SUBTITLE, max_length=255)
    description: str | None = DEFAULT_TEMPLATE_DESCRIPTION
    signature_text: str | None = Field(default=None, max_length=255)
    signature_image: str | None = None
    logo_url: str | None = None
    background_url: str | None = None
    primary_color: str = Field(default=DEFAULT_PRIMARY_COLOR, pattern=HEX_COLOR_PATTERN)
    secondary_color: str = Field(default=DEFAULT_SECONDARY_COLOR, pattern=HEX_COLOR_PATTERN)
    settings: TemplateSettings = Field(default_factory=TemplateSettings)
    is_active: bool = True


class CertificateTemplateUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    subtitle: str | None = Field(default=None, max_length=255)
    description: str | None = None
    signature_text: str | None = Field(default=None, max_length=255)
    signature_image: str | None = None
    logo_url: str | None = None
    background_url: str | None = None
    primary_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    secondary_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    settings: TemplateSettings | None = None
    is_active: bool | None = None


class CertificateTemplateResponse(BaseModel):
    id: UUID
    course_id: UUID
    title: str
    subtitle: str | None = None
    description: str | None = None
    signature_text: str | None = None
    signature_image: str | None = None
    logo_url: str | None = None
    background_url: str | None = None
    primary_color: str
    secondary_color: str
    settings: TemplateSettings
    is_active: bool
    created_at: UTCDatetime
    updated_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)
