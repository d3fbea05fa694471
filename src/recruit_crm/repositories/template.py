"""Template repository for database operations."""

from typing import List, Optional

from sqlalchemy.orm import Session

from recruit_crm.core.session_context import RequestContext
from recruit_crm.models.template import Template
from .base import BaseRepository
from .candidate import escape_like


class TemplateRepository(BaseRepository[Template]):
    """Repository for Template model operations."""

    def __init__(self):
        super().__init__(Template)

    def search(
        self,
        db: Session,
        context: RequestContext,
        name_query: Optional[str] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Template]:
        """Templates whose name contains ``name_query``, newest first."""
        query = self.query(db, context)

        name_query = (name_query or "").strip()
        if name_query:
            query = query.filter(Template.name.ilike(f"%{escape_like(name_query)}%", escape="\\"))

        return (
            query.order_by(Template.created_at.desc(), Template.id)
            .offset(skip)
            .limit(limit)
            .all()
        )
