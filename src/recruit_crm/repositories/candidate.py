"""Candidate repository and search query composition."""

from dataclasses import dataclass, field
from typing import Optional, List, Sequence

from sqlalchemy import and_, or_, func
from sqlalchemy.orm import Session, Query, selectinload
import structlog

from recruit_crm.auth.policies import scope_predicate
from recruit_crm.core.session_context import RequestContext
from recruit_crm.models.candidate import Candidate
from recruit_crm.models.activity import Activity
from .base import BaseRepository

logger = structlog.get_logger(__name__)

SEARCH_FIELDS = ("first_name", "last_name", "current_company", "current_job_title")


@dataclass
class CandidateFilters:
    """Optional narrowing filters for candidate search.

    Empty selections apply no restriction. ``is_active_looking`` is
    tri-state: None leaves the flag unconstrained.
    """

    relationship_type: List[str] = field(default_factory=list)
    functional_role: List[str] = field(default_factory=list)
    is_active_looking: Optional[bool] = None
    location_category: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.relationship_type
            or self.functional_role
            or self.location_category
            or self.is_active_looking is not None
        )


def escape_like(value: str, escape: str = "\\") -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return (
        value.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


def text_search_condition(text: str):
    """Case-insensitive substring match across the searchable name/job fields."""
    pattern = f"%{escape_like(text)}%"
    return or_(*[
        getattr(Candidate, name).ilike(pattern, escape="\\")
        for name in SEARCH_FIELDS
    ])


def filter_conditions(filters: CandidateFilters) -> list:
    """SQL conditions for the active filters, to be AND-combined."""
    conditions = []

    if filters.relationship_type:
        conditions.append(Candidate.relationship_type.in_(filters.relationship_type))

    if filters.functional_role:
        conditions.append(Candidate.functional_role.in_(filters.functional_role))

    if filters.is_active_looking is not None:
        conditions.append(Candidate.is_active_looking.is_(filters.is_active_looking))

    if filters.location_category:
        conditions.append(
            Candidate.current_location["category"].as_string().in_(filters.location_category)
        )

    return conditions


class CandidateRepository(BaseRepository[Candidate]):
    """Repository for Candidate model operations."""

    def __init__(self):
        super().__init__(Candidate)

    def build_search_query(
        self,
        db: Session,
        context: RequestContext,
        text: Optional[str] = None,
        filters: Optional[CandidateFilters] = None
    ) -> Query:
        """Compose the single read query behind the candidate list.

        Every condition narrows the organization-scoped query, so filters can
        never reach another tenant's rows.

        Args:
            db: Database session
            context: Caller context
            text: Free text; blank means no text restriction
            filters: Optional narrowing filters

        Returns:
            Query ordered by most recently updated first
        """
        conditions = []

        text = (text or "").strip()
        if text:
            conditions.append(text_search_condition(text))

        if filters is not None:
            conditions.extend(filter_conditions(filters))

        query = self.query(db, context)
        if conditions:
            query = query.filter(and_(*conditions))

        return query.order_by(Candidate.updated_at.desc(), Candidate.id)

    def search(
        self,
        db: Session,
        context: RequestContext,
        text: Optional[str] = None,
        filters: Optional[CandidateFilters] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Candidate]:
        """Search candidates with tags loaded.

        Returns:
            List of matching candidates
        """
        return (
            self.build_search_query(db, context, text, filters)
            .options(selectinload(Candidate.tags))
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count_active_looking(self, db: Session, context: RequestContext) -> int:
        """Count candidates flagged as actively looking."""
        return self.count(db, context, Candidate.is_active_looking.is_(True))

    def get_with_last_activity(
        self,
        db: Session,
        context: RequestContext
    ) -> Sequence:
        """Every visible candidate paired with its latest activity time.

        Returns:
            Rows of ``(Candidate, last_activity_at or None)``
        """
        last_activity = (
            db.query(
                Activity.candidate_id.label("candidate_id"),
                func.max(Activity.created_at).label("last_activity_at"),
            )
            .filter(scope_predicate(context, Activity))
            .group_by(Activity.candidate_id)
            .subquery()
        )

        return (
            self.query(db, context)
            .outerjoin(last_activity, last_activity.c.candidate_id == Candidate.id)
            .with_entities(Candidate, last_activity.c.last_activity_at)
            .all()
        )
