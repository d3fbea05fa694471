"""Repository pattern implementations for organization-scoped data access."""

from .base import BaseRepository
from .candidate import CandidateRepository, CandidateFilters
from .activity import ActivityRepository
from .tag import TagRepository, CandidateTagRepository
from .template import TemplateRepository
from .organization import OrganizationRepository

__all__ = [
    "BaseRepository",
    "CandidateRepository",
    "CandidateFilters",
    "ActivityRepository",
    "TagRepository",
    "CandidateTagRepository",
    "TemplateRepository",
    "OrganizationRepository",
]
