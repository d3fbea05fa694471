"""Pydantic schemas for Candidate model."""

from datetime import datetime
from typing import Optional, Dict, Any, List, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recruit_crm.models.candidate import RELATIONSHIP_TYPES
from .tag import TagResponse

JSONValue = Union[Dict[str, Any], List[Any]]


def _check_relationship_type(v):
    if v is not None and v not in RELATIONSHIP_TYPES:
        raise ValueError(f'relationship_type must be one of: {", ".join(RELATIONSHIP_TYPES)}')
    return v


def _check_location(v):
    if v is not None:
        category = v.get("category")
        if category is not None and not isinstance(category, str):
            raise ValueError("current_location.category must be a string")
    return v


class CandidateFields(BaseModel):
    """Optional candidate fields shared by create, update and response."""

    personal_email: Optional[str] = Field(None, max_length=255)
    work_email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    other_social_urls: Optional[JSONValue] = None
    resume_url: Optional[str] = None

    relationship_type: Optional[str] = Field(None, description="candidate, client or both")
    functional_role: Optional[str] = None
    current_location: Optional[Dict[str, Any]] = Field(None, description='{"city": ..., "category": ...}')

    current_job_title: Optional[str] = None
    past_job_titles: Optional[List[str]] = None
    current_industry: Optional[str] = None
    past_industries: Optional[List[str]] = None
    tech_stack: Optional[List[str]] = None
    current_company: Optional[str] = None
    past_companies: Optional[List[str]] = None
    current_company_size: Optional[str] = None
    past_company_sizes: Optional[List[str]] = None
    schools: Optional[JSONValue] = None

    compensation_expectations: Optional[Dict[str, Any]] = None
    must_haves: Optional[List[str]] = None
    workplace_preferences: Optional[Dict[str, Any]] = None
    urgency_level: Optional[str] = None
    motivation_factors: Optional[List[str]] = None
    employment_status: Optional[str] = None
    visa_requirements: Optional[Dict[str, Any]] = None
    nurturing_info: Optional[Dict[str, Any]] = None

    @field_validator("relationship_type")
    @classmethod
    def validate_relationship_type(cls, v):
        """Validate relationship type."""
        return _check_relationship_type(v)

    @field_validator("current_location")
    @classmethod
    def validate_current_location(cls, v):
        """Validate location shape."""
        return _check_location(v)


class CandidateCreate(CandidateFields):
    """Schema for creating a new candidate."""

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    is_active_looking: bool = False


class CandidateUpdate(CandidateFields):
    """Schema for a partial candidate update. Unset fields are left alone."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=255)
    last_name: Optional[str] = Field(None, min_length=1, max_length=255)
    is_active_looking: Optional[bool] = None

    @field_validator("first_name", "last_name", "is_active_looking")
    @classmethod
    def reject_null(cls, v, info):
        """Required columns can be changed but not cleared."""
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class CandidateResponse(CandidateFields):
    """Schema for candidate response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    organization_id: UUID
    first_name: str
    last_name: str
    is_active_looking: bool
    tags: List[TagResponse] = []
    created_at: datetime
    updated_at: datetime
    created_by: Optional[UUID] = None
    updated_by: Optional[UUID] = None
