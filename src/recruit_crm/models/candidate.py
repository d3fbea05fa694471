"""Candidate model: job seekers, hiring clients, or both."""

from uuid import uuid4

from sqlalchemy import Column, String, Text, DateTime, Boolean, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from recruit_crm.core.base import Base
from recruit_crm.core.custom_types import GUID, JSONType, StringArray
from recruit_crm.core.timestamps import utcnow

RELATIONSHIP_TYPES = ("candidate", "client", "both")


class Candidate(Base):
    """Core CRM record for a person the organization recruits or sells to."""

    __tablename__ = "candidates"
    __table_args__ = (
        CheckConstraint(
            "relationship_type IN ('candidate', 'client', 'both')",
            name="ck_candidates_relationship_type"
        ),
    )

    id = Column(GUID(), primary_key=True, default=uuid4)
    organization_id = Column(GUID(), ForeignKey("organizations.id"), nullable=True, index=True)

    # Contact
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    personal_email = Column(Text, nullable=True)
    work_email = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    linkedin_url = Column(Text, nullable=True)
    github_url = Column(Text, nullable=True)
    other_social_urls = Column(JSONType, nullable=True)
    resume_url = Column(Text, nullable=True)

    # Classification
    relationship_type = Column(String(20), nullable=True)
    functional_role = Column(Text, nullable=True)
    current_location = Column(JSONType, nullable=True)  # {"city": ..., "category": ...}

    # Employment history
    current_job_title = Column(Text, nullable=True)
    past_job_titles = Column(StringArray, nullable=True)
    current_industry = Column(Text, nullable=True)
    past_industries = Column(StringArray, nullable=True)
    tech_stack = Column(StringArray, nullable=True)
    current_company = Column(Text, nullable=True)
    past_companies = Column(StringArray, nullable=True)
    current_company_size = Column(Text, nullable=True)
    past_company_sizes = Column(StringArray, nullable=True)
    schools = Column(JSONType, nullable=True)

    # Search preferences
    compensation_expectations = Column(JSONType, nullable=True)
    must_haves = Column(StringArray, nullable=True)
    workplace_preferences = Column(JSONType, nullable=True)
    urgency_level = Column(Text, nullable=True)
    is_active_looking = Column(Boolean, default=False, nullable=False)
    motivation_factors = Column(StringArray, nullable=True)
    employment_status = Column(Text, nullable=True)
    visa_requirements = Column(JSONType, nullable=True)
    nurturing_info = Column(JSONType, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
    created_by = Column(GUID(), ForeignKey("profiles.id"), nullable=True)
    updated_by = Column(GUID(), ForeignKey("profiles.id"), nullable=True)

    tags = relationship(
        "Tag",
        secondary="candidate_tags",
        viewonly=True,
        order_by="Tag.name",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def location_category(self):
        if isinstance(self.current_location, dict):
            return self.current_location.get("category")
        return None

    def __repr__(self) -> str:
        return f"<Candidate(id={self.id}, name='{self.full_name}', organization_id={self.organization_id})>"
