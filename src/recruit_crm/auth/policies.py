"""Organization-scoped authorization policies.

The same matrix is installed as PostgreSQL row-level-security policies by the
initial migration. These functions evaluate it without touching storage, and
``scope_predicate`` turns the read rule into a SQLAlchemy filter.

Anything not granted here is denied.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional
from uuid import UUID

from sqlalchemy import false, select
from sqlalchemy.sql.elements import ColumnElement
import structlog

from recruit_crm.core.error_handling import PolicyViolation
from recruit_crm.core.session_context import RequestContext

logger = structlog.get_logger(__name__)


class PolicyAction(str, Enum):
    """Statement kinds a policy can grant."""
    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


_READ = frozenset({PolicyAction.SELECT})
_APPEND = frozenset({PolicyAction.SELECT, PolicyAction.INSERT})
_EDIT = frozenset({PolicyAction.SELECT, PolicyAction.INSERT, PolicyAction.UPDATE})
_ALL = frozenset(PolicyAction)

POLICIES: Dict[str, FrozenSet[PolicyAction]] = {
    "organizations": _READ,
    "profiles": _READ,
    # Candidates are retained as CRM history and never deleted.
    "candidates": _EDIT,
    "activities": _APPEND,
    "tags": _ALL,
    "candidate_tags": frozenset({PolicyAction.SELECT, PolicyAction.INSERT, PolicyAction.DELETE}),
    "templates": _ALL,
}


def is_permitted(table: str, action: PolicyAction) -> bool:
    """Whether any policy grants ``action`` on ``table``."""
    return action in POLICIES.get(table, frozenset())


def same_organization(context: RequestContext, row_organization_id: Optional[UUID]) -> bool:
    """The organization-match predicate shared by every policy.

    A caller without an organization matches nothing, and neither does a
    row without one.
    """
    if context is None or context.organization_id is None:
        return False
    if row_organization_id is None:
        return False
    return row_organization_id == context.organization_id


def check(
    context: RequestContext,
    table: str,
    action: PolicyAction,
    row_organization_id: Optional[UUID]
) -> bool:
    """Evaluate the policy for one row.

    Args:
        context: Caller context
        table: Table name
        action: Statement kind
        row_organization_id: Organization of the row. For ``organizations``
            this is the row's own id; for ``candidate_tags`` it is the
            organization of the referenced candidate.

    Returns:
        True if the statement is allowed on this row
    """
    return is_permitted(table, action) and same_organization(context, row_organization_id)


def can_read(context: RequestContext, table: str, row_organization_id: Optional[UUID]) -> bool:
    return check(context, table, PolicyAction.SELECT, row_organization_id)


def can_insert(context: RequestContext, table: str, row_organization_id: Optional[UUID]) -> bool:
    return check(context, table, PolicyAction.INSERT, row_organization_id)


def can_update(context: RequestContext, table: str, row_organization_id: Optional[UUID]) -> bool:
    # Updates are gated by the read predicate: an invisible row cannot be updated.
    return (
        check(context, table, PolicyAction.UPDATE, row_organization_id)
        and can_read(context, table, row_organization_id)
    )


def can_delete(context: RequestContext, table: str, row_organization_id: Optional[UUID]) -> bool:
    return (
        check(context, table, PolicyAction.DELETE, row_organization_id)
        and can_read(context, table, row_organization_id)
    )


def require_permitted(context: RequestContext, table: str, action: PolicyAction) -> None:
    """Reject an action no policy grants, before looking at any row.

    Raises:
        PolicyViolation: If the table has no policy for the action
    """
    if not is_permitted(table, action):
        logger.warning(
            "Action denied by default",
            table=table,
            action=action.value,
            **(context.log_fields() if context else {})
        )
        raise PolicyViolation()


def authorize(
    context: RequestContext,
    table: str,
    action: PolicyAction,
    row_organization_id: Optional[UUID]
) -> None:
    """Raise unless the policy allows ``action`` on the row.

    Raises:
        PolicyViolation: If the check fails
    """
    checks = {
        PolicyAction.SELECT: can_read,
        PolicyAction.INSERT: can_insert,
        PolicyAction.UPDATE: can_update,
        PolicyAction.DELETE: can_delete,
    }
    if not checks[action](context, table, row_organization_id):
        logger.warning(
            "Row access denied",
            table=table,
            action=action.value,
            row_organization_id=str(row_organization_id) if row_organization_id else None,
            **(context.log_fields() if context else {})
        )
        raise PolicyViolation()


def scope_predicate(context: RequestContext, model) -> ColumnElement:
    """SQL filter restricting ``model`` to rows the caller may read.

    Args:
        context: Caller context
        model: Mapped class of a protected table

    Returns:
        A boolean SQL expression; always false for an unprovisioned caller
    """
    table = model.__tablename__
    if not is_permitted(table, PolicyAction.SELECT):
        return false()
    if context is None or context.organization_id is None:
        return false()

    organization_id = context.organization_id
    if table == "organizations":
        return model.id == organization_id
    if table == "candidate_tags":
        from recruit_crm.models.candidate import Candidate
        return model.candidate_id.in_(
            select(Candidate.id).where(Candidate.organization_id == organization_id)
        )
    return model.organization_id == organization_id
