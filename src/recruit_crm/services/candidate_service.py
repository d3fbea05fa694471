"""Candidate management service."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from recruit_crm.auth.policies import PolicyAction, require_permitted
from recruit_crm.core.error_handling import NotFoundError, database_errors
from recruit_crm.core.session_context import RequestContext
from recruit_crm.models.candidate import Candidate
from recruit_crm.models.tag import CandidateTag
from recruit_crm.repositories.activity import ActivityRepository
from recruit_crm.repositories.candidate import CandidateRepository, CandidateFilters
from recruit_crm.repositories.tag import TagRepository, CandidateTagRepository
from recruit_crm.schemas.candidate import CandidateCreate, CandidateUpdate

logger = structlog.get_logger(__name__)


class CandidateService:
    """Service for managing candidate operations."""

    def __init__(self):
        self.repository = CandidateRepository()
        self.activities = ActivityRepository()
        self.tags = TagRepository()
        self.candidate_tags = CandidateTagRepository()

    def create_candidate(
        self,
        db: Session,
        context: RequestContext,
        candidate_data: CandidateCreate
    ) -> Candidate:
        """Create a candidate in the caller's organization and log it.

        The candidate and its "created" activity are committed together.

        Raises:
            PolicyViolation: If the caller has no organization
            ConstraintViolationError: If the row breaks a schema constraint
        """
        try:
            candidate = self.repository.create(
                db, context, commit=False, **candidate_data.model_dump()
            )
            self.activities.log(
                db,
                context,
                candidate_id=candidate.id,
                type="created",
                description=f"{candidate.full_name} added",
                commit=False,
            )
            with database_errors(db, "create candidate"):
                db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(candidate)

        logger.info(
            "Candidate created",
            candidate_id=str(candidate.id),
            relationship_type=candidate.relationship_type,
            **context.log_fields()
        )
        return candidate

    def get_candidate(self, db: Session, context: RequestContext, candidate_id: UUID) -> Candidate:
        """Get a visible candidate.

        Raises:
            NotFoundError: If missing or outside the caller's organization
        """
        candidate = self.repository.get_by_id(db, context, candidate_id)
        if candidate is None:
            raise NotFoundError("Candidate")
        return candidate

    def search_candidates(
        self,
        db: Session,
        context: RequestContext,
        text: Optional[str] = None,
        filters: Optional[CandidateFilters] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Candidate]:
        """Free-text search plus filters, within the caller's organization."""
        candidates = self.repository.search(db, context, text, filters, skip, limit)
        logger.debug(
            "Candidate search",
            text=text,
            filters=filters,
            count=len(candidates),
            **context.log_fields()
        )
        return candidates

    def update_candidate(
        self,
        db: Session,
        context: RequestContext,
        candidate_id: UUID,
        candidate_data: CandidateUpdate
    ) -> Candidate:
        """Apply the fields present in the payload and log the change.

        The change and its "updated" activity are committed together; on
        failure the candidate keeps its previous values.

        Raises:
            NotFoundError: If missing or outside the caller's organization
            ConstraintViolationError: If the change breaks a schema constraint
        """
        changes = candidate_data.model_dump(exclude_unset=True)
        try:
            candidate = self.repository.update(db, context, candidate_id, commit=False, **changes)
            if candidate is None:
                raise NotFoundError("Candidate")

            if changes:
                self.activities.log(
                    db,
                    context,
                    candidate_id=candidate.id,
                    type="updated",
                    description=f"{candidate.full_name} updated",
                    details={"fields": sorted(changes)},
                    commit=False,
                )
            with database_errors(db, "update candidate"):
                db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(candidate)
        return candidate

    def delete_candidate(self, db: Session, context: RequestContext, candidate_id: UUID) -> None:
        """Candidates are never deleted.

        Raises:
            PolicyViolation: Always
        """
        require_permitted(context, self.repository.table, PolicyAction.DELETE)

    def assign_tag(
        self,
        db: Session,
        context: RequestContext,
        candidate_id: UUID,
        tag_id: UUID
    ) -> CandidateTag:
        """Attach one of the organization's tags to a candidate.

        Raises:
            NotFoundError: If either side is not visible to the caller
            ConstraintViolationError: If the tag is already assigned
        """
        candidate = self.get_candidate(db, context, candidate_id)
        tag = self.tags.get_by_id(db, context, tag_id)
        if tag is None:
            raise NotFoundError("Tag")
        return self.candidate_tags.assign(db, context, candidate, tag)

    def remove_tag(
        self,
        db: Session,
        context: RequestContext,
        candidate_id: UUID,
        tag_id: UUID
    ) -> None:
        """Detach a tag from a candidate.

        Raises:
            NotFoundError: If the association is not visible to the caller
        """
        if not self.candidate_tags.remove(db, context, candidate_id, tag_id):
            raise NotFoundError("Tag assignment")
