"""Profile model: the authenticated principal and its organization."""

from uuid import uuid4

from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from recruit_crm.core.base import Base
from recruit_crm.core.custom_types import GUID
from recruit_crm.core.timestamps import utcnow


class Profile(Base):
    """User profile. ``organization_id`` stays null until provisioned."""

    __tablename__ = "profiles"

    id = Column(GUID(), primary_key=True, default=uuid4)
    organization_id = Column(GUID(), ForeignKey("organizations.id"), nullable=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    role = Column(String(50), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    organization = relationship("Organization", back_populates="profiles")

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, email='{self.email}')>"
