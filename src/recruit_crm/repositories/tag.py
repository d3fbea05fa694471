"""Tag and candidate-tag repositories."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from recruit_crm.auth.policies import PolicyAction, authorize, require_permitted, scope_predicate
from recruit_crm.core.error_handling import ConstraintViolationError, database_errors
from recruit_crm.core.session_context import RequestContext
from recruit_crm.models.candidate import Candidate
from recruit_crm.models.tag import Tag, CandidateTag
from .base import BaseRepository

logger = structlog.get_logger(__name__)


class TagRepository(BaseRepository[Tag]):
    """Repository for Tag model operations."""

    def __init__(self):
        super().__init__(Tag)

    def list_ordered(self, db: Session, context: RequestContext) -> List[Tag]:
        """All visible tags ordered by name."""
        return self.query(db, context).order_by(Tag.name).all()

    def is_referenced(self, db: Session, tag_id: UUID) -> bool:
        """Whether any candidate association still points at the tag."""
        return db.query(CandidateTag).filter(CandidateTag.tag_id == tag_id).first() is not None

    def delete(self, db: Session, context: RequestContext, id: UUID) -> bool:
        """Delete a tag that no candidate references.

        Raises:
            ConstraintViolationError: If associations still reference the tag
        """
        require_permitted(context, self.table, PolicyAction.DELETE)

        tag = self.get_by_id(db, context, id)
        if tag is None:
            return False

        if self.is_referenced(db, id):
            logger.warning("Tag delete rejected, still assigned", tag_id=str(id), **context.log_fields())
            raise ConstraintViolationError(
                "Tag is still assigned to candidates; remove the assignments first"
            )

        return super().delete(db, context, id)


class CandidateTagRepository:
    """Associations between candidates and tags.

    The table has no organization column; access is decided by the
    organization of the referenced candidate.
    """

    table = CandidateTag.__tablename__

    def query(self, db: Session, context: RequestContext):
        return db.query(CandidateTag).filter(scope_predicate(context, CandidateTag))

    def get(
        self,
        db: Session,
        context: RequestContext,
        candidate_id: UUID,
        tag_id: UUID
    ) -> Optional[CandidateTag]:
        return self.query(db, context).filter(
            CandidateTag.candidate_id == candidate_id,
            CandidateTag.tag_id == tag_id
        ).first()

    def assign(
        self,
        db: Session,
        context: RequestContext,
        candidate: Candidate,
        tag: Tag
    ) -> CandidateTag:
        """Attach a tag to a candidate of the same organization.

        Raises:
            PolicyViolation: If either side is outside the caller's organization
            ConstraintViolationError: If the pair is already associated
        """
        require_permitted(context, self.table, PolicyAction.INSERT)
        authorize(context, self.table, PolicyAction.INSERT, candidate.organization_id)
        authorize(context, "tags", PolicyAction.SELECT, tag.organization_id)

        if self.get(db, context, candidate.id, tag.id) is not None:
            raise ConstraintViolationError("Tag is already assigned to this candidate")

        association = CandidateTag(
            candidate_id=candidate.id,
            tag_id=tag.id,
            created_by=context.user_id,
        )
        with database_errors(db, "assign tag"):
            db.add(association)
            db.commit()

        logger.info(
            "Tag assigned",
            candidate_id=str(candidate.id),
            tag_id=str(tag.id),
            **context.log_fields()
        )
        return association

    def remove(
        self,
        db: Session,
        context: RequestContext,
        candidate_id: UUID,
        tag_id: UUID
    ) -> bool:
        """Detach a tag from a candidate.

        Returns:
            True if an association was removed, False if none was visible
        """
        require_permitted(context, self.table, PolicyAction.DELETE)

        association = self.get(db, context, candidate_id, tag_id)
        if association is None:
            return False

        authorize(context, self.table, PolicyAction.DELETE, association.candidate.organization_id)

        with database_errors(db, "remove tag"):
            db.delete(association)
            db.commit()

        logger.info(
            "Tag removed",
            candidate_id=str(candidate_id),
            tag_id=str(tag_id),
            **context.log_fields()
        )
        return True
