"""Pydantic schemas for data validation and serialization."""

from .candidate import CandidateCreate, CandidateUpdate, CandidateResponse
from .tag import TagCreate, TagUpdate, TagResponse
from .template import (
    TemplateCreate,
    TemplateUpdate,
    TemplateResponse,
    TemplateRenderRequest,
    TemplateRenderResponse,
)
from .activity import ActivityCreate, ActivityResponse
from .dashboard import DashboardResponse, DashboardStats, RecentActivity, RecommendedAction
from .organization import OrganizationResponse, ProfileResponse

__all__ = [
    "CandidateCreate", "CandidateUpdate", "CandidateResponse",
    "TagCreate", "TagUpdate", "TagResponse",
    "TemplateCreate", "TemplateUpdate", "TemplateResponse",
    "TemplateRenderRequest", "TemplateRenderResponse",
    "ActivityCreate", "ActivityResponse",
    "DashboardResponse", "DashboardStats", "RecentActivity", "RecommendedAction",
    "OrganizationResponse", "ProfileResponse",
]
