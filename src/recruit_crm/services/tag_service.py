"""Tag management service."""

from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from recruit_crm.core.error_handling import NotFoundError
from recruit_crm.core.session_context import RequestContext
from recruit_crm.models.tag import Tag
from recruit_crm.repositories.tag import TagRepository
from recruit_crm.schemas.tag import TagCreate, TagUpdate


class TagService:
    """Service for the organization's tag definitions."""

    def __init__(self):
        self.repository = TagRepository()

    def list_tags(self, db: Session, context: RequestContext) -> List[Tag]:
        return self.repository.list_ordered(db, context)

    def create_tag(self, db: Session, context: RequestContext, data: TagCreate) -> Tag:
        return self.repository.create(db, context, name=data.name, color=data.color)

    def update_tag(self, db: Session, context: RequestContext, tag_id: UUID, data: TagUpdate) -> Tag:
        tag = self.repository.update(db, context, tag_id, **data.model_dump(exclude_unset=True))
        if tag is None:
            raise NotFoundError("Tag")
        return tag

    def delete_tag(self, db: Session, context: RequestContext, tag_id: UUID) -> None:
        """Delete an unassigned tag.

        Raises:
            NotFoundError: If missing or outside the caller's organization
            ConstraintViolationError: If candidates still carry the tag
        """
        if not self.repository.delete(db, context, tag_id):
            raise NotFoundError("Tag")
