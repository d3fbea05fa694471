"""Database models for the recruiting CRM."""

from .organization import Organization
from .profile import Profile
from .candidate import Candidate, RELATIONSHIP_TYPES
from .activity import Activity
from .tag import Tag, CandidateTag
from .template import Template, TEMPLATE_TYPES

__all__ = [
    "Organization", "Profile", "Candidate", "Activity", "Tag", "CandidateTag", "Template",
    "RELATIONSHIP_TYPES", "TEMPLATE_TYPES",
]
