"""Pydantic schemas for Activity model."""

from datetime import datetime
from typing import Optional, Dict, Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ActivityCreate(BaseModel):
    """Schema for logging an activity against a candidate."""

    type: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class ActivityResponse(BaseModel):
    """Schema for activity response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    candidate_id: Optional[UUID] = None
    organization_id: UUID
    type: str
    description: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = Field(None, validation_alias="details")
    created_at: datetime
    created_by: Optional[UUID] = None
