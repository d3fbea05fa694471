"""Pydantic schemas for Template model."""

from datetime import datetime
from typing import Optional, Dict, Any, List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recruit_crm.models.template import TEMPLATE_TYPES


def _check_type(v):
    if v is not None and v not in TEMPLATE_TYPES:
        raise ValueError(f'type must be one of: {", ".join(TEMPLATE_TYPES)}')
    return v


class TemplateBase(BaseModel):
    """Fields shared by create and update."""

    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(default="email", description="email or message")
    content: str = Field(..., description="Body with {placeholder} variables")
    variables: Dict[str, Any] = Field(
        default_factory=dict,
        description="Placeholder name -> description or default value"
    )

    @field_validator("type")
    @classmethod
    def validate_type(cls, v):
        """Validate template type."""
        return _check_type(v)


class TemplateCreate(TemplateBase):
    """Schema for creating a template."""
    pass


class TemplateUpdate(TemplateBase):
    """Schema for replacing a template's editable fields."""
    pass


class TemplateResponse(BaseModel):
    """Schema for template response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    organization_id: UUID
    name: str
    type: str
    content: str
    variables: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime
    created_by: Optional[UUID] = None
    updated_by: Optional[UUID] = None


class TemplateRenderRequest(BaseModel):
    """Values substituted into a template preview."""

    values: Dict[str, Any] = Field(default_factory=dict)


class TemplateRenderResponse(BaseModel):
    """Rendered template body."""

    template_id: UUID
    content: str
    missing: List[str] = Field(default_factory=list, description="Placeholders left unresolved")
