"""Dashboard aggregation service."""

from typing import Callable, List, Optional, TypeVar

from sqlalchemy.orm import Session
import structlog

from recruit_crm.core.config import settings as app_settings, Settings
from recruit_crm.core.session_context import RequestContext
from recruit_crm.core.timestamps import utcnow
from recruit_crm.repositories.activity import ActivityRepository
from recruit_crm.repositories.candidate import CandidateRepository
from recruit_crm.schemas.dashboard import (
    DashboardResponse,
    DashboardStats,
    RecentActivity,
    RecommendedAction,
)
from .recommendations import Recommendation, RecommendationRule, default_rules, recommend

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class DashboardService:
    """Builds the dashboard from independently loaded sections.

    A section that fails is logged and named in ``errors``; the remaining
    sections are still returned.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        rules: Optional[List[RecommendationRule]] = None
    ):
        self.settings = settings or app_settings
        self.rules = rules if rules is not None else default_rules(self.settings)
        self.candidates = CandidateRepository()
        self.activities = ActivityRepository()

    def _section(
        self,
        db: Session,
        context: RequestContext,
        name: str,
        loader: Callable[[], T],
        errors: List[str],
        fallback: T
    ) -> T:
        try:
            return loader()
        except Exception as e:
            # Leave the session usable for the next section.
            db.rollback()
            logger.error(
                "Dashboard section failed",
                section=name,
                error=str(e),
                error_type=type(e).__name__,
                **context.log_fields()
            )
            errors.append(name)
            return fallback

    def load_stats(self, db: Session, context: RequestContext) -> DashboardStats:
        return DashboardStats(
            total_candidates=self.candidates.count(db, context),
            active_searching=self.candidates.count_active_looking(db, context),
        )

    def load_recent_activities(self, db: Session, context: RequestContext) -> List[RecentActivity]:
        activities = self.activities.recent(db, context, limit=self.settings.recent_activity_limit)
        return [
            RecentActivity(
                id=activity.id,
                candidate_id=activity.candidate_id,
                candidate_name=activity.candidate.full_name if activity.candidate else None,
                type=activity.type,
                description=activity.description,
                created_at=activity.created_at,
            )
            for activity in activities
        ]

    def load_recommendations(self, db: Session, context: RequestContext) -> List[Recommendation]:
        rows = self.candidates.get_with_last_activity(db, context)
        return recommend(
            rows,
            self.rules,
            now=utcnow(),
            limit=self.settings.max_recommendations,
        )

    def get_dashboard(self, db: Session, context: RequestContext) -> DashboardResponse:
        """Assemble stats, recent activities and recommended actions."""
        errors: List[str] = []

        stats = self._section(
            db, context, "stats",
            lambda: self.load_stats(db, context),
            errors, DashboardStats()
        )
        recent = self._section(
            db, context, "recent_activities",
            lambda: self.load_recent_activities(db, context),
            errors, []
        )
        recommendations = self._section(
            db, context, "recommended_actions",
            lambda: self.load_recommendations(db, context),
            errors, []
        )

        stats.recent_activities = len(recent)
        stats.pending_actions = len(recommendations)

        actions = [
            RecommendedAction(
                candidate_id=r.candidate.id,
                candidate_name=r.candidate.full_name,
                action_type=r.rule.action_type,
                reason=r.rule.reason(r.days_since_activity),
                priority=r.priority.label,
                rule=r.rule.name,
                days_since_activity=r.days_since_activity,
                due_date=r.due_date,
            )
            for r in recommendations
        ]

        logger.info(
            "Dashboard built",
            recent_activities=len(recent),
            recommended_actions=len(actions),
            failed_sections=errors,
            **context.log_fields()
        )
        return DashboardResponse(
            stats=stats,
            recent_activities=recent,
            recommended_actions=actions,
            errors=errors,
        )
