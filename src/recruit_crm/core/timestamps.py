"""Automatic maintenance of ``created_at``/``updated_at`` columns.

Mirrors the ``BEFORE UPDATE`` triggers installed by the migration so the
same rules hold on databases without them (SQLite in tests).
"""

from datetime import datetime, timezone

from sqlalchemy import event
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import get_history, set_committed_value
import structlog

logger = structlog.get_logger(__name__)


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the ``TIMESTAMP`` columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _previous_value(instance, attribute: str):
    history = get_history(instance, attribute)
    if history.deleted:
        return history.deleted[0]
    if history.unchanged:
        return history.unchanged[0]
    return None


def touch_updated_at(instance) -> None:
    """Stamp ``updated_at`` with the current time, never moving it backwards."""
    previous = _previous_value(instance, "updated_at")
    now = utcnow()
    if previous is not None and previous > now:
        now = previous
    instance.updated_at = now


def protect_created_at(instance) -> None:
    """Revert any change made to ``created_at`` after insert."""
    history = get_history(instance, "created_at")
    if history.added and history.deleted:
        logger.warning(
            "Ignoring change to created_at",
            model=type(instance).__name__,
            id=str(getattr(instance, "id", None))
        )
        set_committed_value(instance, "created_at", history.deleted[0])


@event.listens_for(Session, "before_flush")
def maintain_timestamps(session: Session, flush_context, instances) -> None:
    """Apply timestamp rules to every modified row before it is written."""
    for instance in session.dirty:
        if not session.is_modified(instance, include_collections=False):
            continue
        if hasattr(instance, "created_at"):
            protect_created_at(instance)
        if hasattr(instance, "updated_at"):
            touch_updated_at(instance)
