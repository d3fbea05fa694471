"""Activity log service."""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from recruit_crm.core.error_handling import NotFoundError
from recruit_crm.core.session_context import RequestContext
from recruit_crm.models.activity import Activity
from recruit_crm.repositories.activity import ActivityRepository
from recruit_crm.repositories.candidate import CandidateRepository


class ActivityService:
    """Logs and lists activities. Entries are never edited or removed."""

    def __init__(self):
        self.repository = ActivityRepository()
        self.candidates = CandidateRepository()

    def _require_candidate(self, db: Session, context: RequestContext, candidate_id: UUID) -> None:
        if self.candidates.get_by_id(db, context, candidate_id) is None:
            raise NotFoundError("Candidate")

    def log_activity(
        self,
        db: Session,
        context: RequestContext,
        candidate_id: UUID,
        type: str,
        description: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Activity:
        """Append an activity for a visible candidate.

        Raises:
            NotFoundError: If the candidate is not visible to the caller
        """
        self._require_candidate(db, context, candidate_id)
        return self.repository.log(db, context, candidate_id, type, description, metadata)

    def list_for_candidate(
        self,
        db: Session,
        context: RequestContext,
        candidate_id: UUID,
        skip: int = 0,
        limit: int = 100
    ) -> List[Activity]:
        self._require_candidate(db, context, candidate_id)
        return self.repository.list_for_candidate(db, context, candidate_id, skip, limit)
