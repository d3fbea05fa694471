"""Activity model: immutable log of interactions with a candidate."""

from uuid import uuid4

from sqlalchemy import Column, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from recruit_crm.core.base import Base
from recruit_crm.core.custom_types import GUID, JSONType
from recruit_crm.core.timestamps import utcnow


class Activity(Base):
    """Append-only activity entry. There is no ``updated_at``."""

    __tablename__ = "activities"

    id = Column(GUID(), primary_key=True, default=uuid4)
    candidate_id = Column(GUID(), ForeignKey("candidates.id"), nullable=True, index=True)
    organization_id = Column(GUID(), ForeignKey("organizations.id"), nullable=True, index=True)
    type = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    # "metadata" is reserved on declarative classes
    details = Column("metadata", JSONType, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    created_by = Column(GUID(), ForeignKey("profiles.id"), nullable=True)

    candidate = relationship("Candidate")

    def __repr__(self) -> str:
        return f"<Activity(id={self.id}, type='{self.type}', candidate_id={self.candidate_id})>"
