"""Message template management and placeholder rendering."""

import copy
import re
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from recruit_crm.core.error_handling import NotFoundError
from recruit_crm.core.session_context import RequestContext
from recruit_crm.models.template import Template
from recruit_crm.repositories.template import TemplateRepository
from recruit_crm.schemas.template import TemplateCreate, TemplateUpdate

logger = structlog.get_logger(__name__)

PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")
COPY_SUFFIX = " (Copy)"


def extract_placeholders(content: str) -> List[str]:
    """Placeholder names in ``content``, in order of first appearance."""
    seen = []
    for match in PLACEHOLDER.finditer(content or ""):
        name = match.group(1)
        if name not in seen:
            seen.append(name)
    return seen


def _default_for(declared: Any) -> Optional[str]:
    # A variable entry is either a plain description string or a mapping
    # that may carry a "default".
    if isinstance(declared, dict) and declared.get("default") is not None:
        return str(declared["default"])
    return None


def render_content(
    content: str,
    variables: Optional[Dict[str, Any]],
    values: Optional[Dict[str, Any]] = None
) -> Tuple[str, List[str]]:
    """Substitute ``{name}`` placeholders.

    Supplied values win over defaults declared in ``variables``. Placeholders
    with neither are left in place and reported.

    Args:
        content: Template body
        variables: Declared variables of the template
        values: Values for this rendering

    Returns:
        Rendered text and the names of unresolved placeholders
    """
    variables = variables or {}
    values = values or {}
    missing = []

    def substitute(match):
        name = match.group(1)
        if name in values and values[name] is not None:
            return str(values[name])
        default = _default_for(variables.get(name))
        if default is not None:
            return default
        if name not in missing:
            missing.append(name)
        return match.group(0)

    return PLACEHOLDER.sub(substitute, content or ""), missing


def duplicate_name(name: str) -> str:
    return f"{name}{COPY_SUFFIX}"


class TemplateService:
    """Service for managing message templates."""

    def __init__(self):
        self.repository = TemplateRepository()

    def list_templates(
        self,
        db: Session,
        context: RequestContext,
        name_query: Optional[str] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Template]:
        return self.repository.search(db, context, name_query, skip, limit)

    def get_template(self, db: Session, context: RequestContext, template_id: UUID) -> Template:
        """Get a template.

        Raises:
            NotFoundError: If missing or outside the caller's organization
        """
        template = self.repository.get_by_id(db, context, template_id)
        if template is None:
            raise NotFoundError("Template")
        return template

    def create_template(
        self,
        db: Session,
        context: RequestContext,
        data: TemplateCreate
    ) -> Template:
        """Create a template, storing content and variables verbatim."""
        template = self.repository.create(
            db,
            context,
            name=data.name,
            type=data.type,
            content=data.content,
            variables=data.variables,
        )
        logger.info("Template created", template_id=str(template.id), **context.log_fields())
        return template

    def update_template(
        self,
        db: Session,
        context: RequestContext,
        template_id: UUID,
        data: TemplateUpdate
    ) -> Template:
        """Replace a template's editable fields.

        Raises:
            NotFoundError: If missing or outside the caller's organization
        """
        template = self.repository.update(
            db,
            context,
            template_id,
            name=data.name,
            type=data.type,
            content=data.content,
            variables=data.variables,
        )
        if template is None:
            raise NotFoundError("Template")
        return template

    def delete_template(self, db: Session, context: RequestContext, template_id: UUID) -> None:
        if not self.repository.delete(db, context, template_id):
            raise NotFoundError("Template")

    def duplicate_template(
        self,
        db: Session,
        context: RequestContext,
        template_id: UUID
    ) -> Template:
        """Copy a template under a new id and a ``(Copy)`` name.

        Content, variables and type are carried over unchanged.
        """
        source = self.get_template(db, context, template_id)
        duplicate = self.repository.create(
            db,
            context,
            name=duplicate_name(source.name),
            type=source.type,
            content=source.content,
            variables=copy.deepcopy(source.variables),
        )
        logger.info(
            "Template duplicated",
            source_id=str(source.id),
            template_id=str(duplicate.id),
            **context.log_fields()
        )
        return duplicate

    def render_template(
        self,
        db: Session,
        context: RequestContext,
        template_id: UUID,
        values: Optional[Dict[str, Any]] = None
    ) -> Tuple[str, List[str]]:
        """Render a stored template without modifying it."""
        template = self.get_template(db, context, template_id)
        return render_content(template.content, template.variables, values)
