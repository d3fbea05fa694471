"""Organization model, the tenant boundary."""

from uuid import uuid4

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from recruit_crm.core.base import Base
from recruit_crm.core.custom_types import GUID
from recruit_crm.core.timestamps import utcnow


class Organization(Base):
    """Tenant organization. Every other row belongs to exactly one."""

    __tablename__ = "organizations"

    id = Column(GUID(), primary_key=True, default=uuid4)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    profiles = relationship("Profile", back_populates="organization")

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, name='{self.name}')>"
