"""Message template model."""

from uuid import uuid4

from sqlalchemy import Column, Text, DateTime, ForeignKey

from recruit_crm.core.base import Base
from recruit_crm.core.custom_types import GUID, JSONType
from recruit_crm.core.timestamps import utcnow

TEMPLATE_TYPES = ("email", "message")


class Template(Base):
    """Reusable email or message body with ``{placeholder}`` variables."""

    __tablename__ = "templates"

    id = Column(GUID(), primary_key=True, default=uuid4)
    organization_id = Column(GUID(), ForeignKey("organizations.id"), nullable=True, index=True)
    name = Column(Text, nullable=False)
    type = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    variables = Column(JSONType, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
    created_by = Column(GUID(), ForeignKey("profiles.id"), nullable=True)
    updated_by = Column(GUID(), ForeignKey("profiles.id"), nullable=True)

    def __repr__(self) -> str:
        return f"<Template(id={self.id}, name='{self.name}', type='{self.type}')>"
