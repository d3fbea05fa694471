"""Tag definitions and their association with candidates."""

from uuid import uuid4

from sqlalchemy import Column, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from recruit_crm.core.base import Base
from recruit_crm.core.custom_types import GUID
from recruit_crm.core.timestamps import utcnow


class Tag(Base):
    """Organization-scoped label."""

    __tablename__ = "tags"

    id = Column(GUID(), primary_key=True, default=uuid4)
    organization_id = Column(GUID(), ForeignKey("organizations.id"), nullable=True, index=True)
    name = Column(Text, nullable=False)
    color = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    created_by = Column(GUID(), ForeignKey("profiles.id"), nullable=True)

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"


class CandidateTag(Base):
    """At most one association per (candidate, tag).

    Neither foreign key cascades: a tag or candidate that is still referenced
    cannot be deleted.
    """

    __tablename__ = "candidate_tags"

    candidate_id = Column(GUID(), ForeignKey("candidates.id"), primary_key=True, index=True)
    tag_id = Column(GUID(), ForeignKey("tags.id"), primary_key=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    created_by = Column(GUID(), ForeignKey("profiles.id"), nullable=True)

    candidate = relationship("Candidate")
    tag = relationship("Tag")

    def __repr__(self) -> str:
        return f"<CandidateTag(candidate_id={self.candidate_id}, tag_id={self.tag_id})>"
