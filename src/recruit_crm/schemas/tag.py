"""Pydantic schemas for Tag model."""

import re
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def _check_color(v):
    if v is not None and not HEX_COLOR.match(v):
        raise ValueError("color must be a hex value like #4f46e5")
    return v


class TagCreate(BaseModel):
    """Schema for creating a tag."""

    name: str = Field(..., min_length=1, max_length=100)
    color: Optional[str] = None

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        return _check_color(v)


class TagUpdate(BaseModel):
    """Schema for renaming or recoloring a tag."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    color: Optional[str] = None

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        return _check_color(v)


class TagResponse(BaseModel):
    """Schema for tag response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    color: Optional[str] = None
    created_at: Optional[datetime] = None
