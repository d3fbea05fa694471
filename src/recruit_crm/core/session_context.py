"""Request-scoped caller context for organization-scoped data access."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy import event, text
from sqlalchemy.orm import Session
import structlog

from .config import settings
from .logging import log_request_context

logger = structlog.get_logger(__name__)

CONTEXT_KEY = "request_context"
USER_SETTING = "app.current_user_id"


@dataclass(frozen=True)
class RequestContext:
    """The signed-in principal, passed explicitly into every data-access call.

    ``organization_id`` is None for a profile that has not been provisioned
    into an organization; such a caller can see and write nothing.
    """

    user_id: UUID
    organization_id: Optional[UUID] = None
    role: Optional[str] = None

    @property
    def is_provisioned(self) -> bool:
        return self.organization_id is not None

    def log_fields(self) -> dict:
        return log_request_context(
            organization_id=str(self.organization_id) if self.organization_id else None,
            user_id=str(self.user_id),
        )


def _publish(connection, user_id: str) -> None:
    if connection.dialect.name != "postgresql":
        return
    connection.execute(
        text("SELECT set_config(:setting, :user_id, true)"),
        {"setting": USER_SETTING, "user_id": user_id}
    )
    if user_id:
        # Policies apply to this role; the connecting owner role bypasses them.
        connection.execute(text(f"SET LOCAL ROLE {settings.rls_role}"))
    else:
        connection.execute(text("RESET ROLE"))


class SessionContextManager:
    """Publishes the caller identity to the database for RLS policies.

    The setting is transaction-local, so it is re-applied at the start of
    every transaction the session begins.
    """

    @staticmethod
    def set_request_context(session: Session, context: RequestContext) -> None:
        """Bind the caller to the session.

        Args:
            session: Database session
            context: Caller context

        Raises:
            ValueError: If the context carries no user id
        """
        if context is None or context.user_id is None:
            raise ValueError("Request context requires a user id")

        session.info[CONTEXT_KEY] = context
        if session.in_transaction():
            try:
                _publish(session.connection(), str(context.user_id))
            except Exception as e:
                logger.error("Failed to set request context", error=str(e), **context.log_fields())
                raise
        logger.debug("Request context set", **context.log_fields())

    @staticmethod
    def clear_request_context(session: Session) -> None:
        """Unbind the caller from the session."""
        session.info.pop(CONTEXT_KEY, None)
        if session.in_transaction():
            _publish(session.connection(), "")
        logger.debug("Request context cleared")

    @staticmethod
    def get_request_context(session: Session) -> Optional[RequestContext]:
        """Caller bound to the session, if any."""
        return session.info.get(CONTEXT_KEY)


@event.listens_for(Session, "after_begin")
def _apply_request_context(session: Session, transaction, connection) -> None:
    context = session.info.get(CONTEXT_KEY)
    if context is not None:
        _publish(connection, str(context.user_id))


def set_request_context(session: Session, context: RequestContext) -> None:
    """Set the caller for RLS policies."""
    SessionContextManager.set_request_context(session, context)


def clear_request_context(session: Session) -> None:
    """Clear the caller from the session."""
    SessionContextManager.clear_request_context(session)


def get_request_context(session: Session) -> Optional[RequestContext]:
    """Get the caller bound to the session."""
    return SessionContextManager.get_request_context(session)
