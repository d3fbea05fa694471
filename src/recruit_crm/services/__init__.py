"""Business logic services."""

from .candidate_service import CandidateService
from .activity_service import ActivityService
from .tag_service import TagService
from .template_service import TemplateService, extract_placeholders, render_content
from .dashboard_service import DashboardService
from .recommendations import RecommendationRule, Priority, default_rules, recommend

__all__ = [
    "CandidateService",
    "ActivityService",
    "TagService",
    "TemplateService",
    "extract_placeholders",
    "render_content",
    "DashboardService",
    "RecommendationRule",
    "Priority",
    "default_rules",
    "recommend",
]
