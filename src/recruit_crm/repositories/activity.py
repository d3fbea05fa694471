"""Activity repository for database operations."""

from typing import Optional, List, Dict, Any
from uuid import UUID

from sqlalchemy.orm import Session, joinedload
import structlog

from recruit_crm.core.session_context import RequestContext
from recruit_crm.models.activity import Activity
from .base import BaseRepository

logger = structlog.get_logger(__name__)


class ActivityRepository(BaseRepository[Activity]):
    """Append-only access to the activity log."""

    def __init__(self):
        super().__init__(Activity)

    def log(
        self,
        db: Session,
        context: RequestContext,
        candidate_id: UUID,
        type: str,
        description: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        commit: bool = True
    ) -> Activity:
        """Append an activity for a candidate in the caller's organization."""
        return self.create(
            db,
            context,
            commit=commit,
            candidate_id=candidate_id,
            type=type,
            description=description,
            details=details,
        )

    def list_for_candidate(
        self,
        db: Session,
        context: RequestContext,
        candidate_id: UUID,
        skip: int = 0,
        limit: int = 100
    ) -> List[Activity]:
        """Activities of one candidate, newest first."""
        return (
            self.query(db, context)
            .filter(Activity.candidate_id == candidate_id)
            .order_by(Activity.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def recent(self, db: Session, context: RequestContext, limit: int = 5) -> List[Activity]:
        """Newest activities across the organization, with their candidate."""
        return (
            self.query(db, context)
            .options(joinedload(Activity.candidate))
            .order_by(Activity.created_at.desc())
            .limit(limit)
            .all()
        )
