"""Base repository with organization-scoped CRUD operations."""

from typing import Generic, TypeVar, Type, List, Optional, Any
from uuid import UUID

from sqlalchemy.orm import Session, Query
import structlog

from recruit_crm.auth.policies import (
    PolicyAction,
    authorize,
    require_permitted,
    scope_predicate,
)
from recruit_crm.core.base import Base
from recruit_crm.core.error_handling import ValidationError, database_errors
from recruit_crm.core.session_context import RequestContext

logger = structlog.get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)

# Columns a caller may never set through a create or update payload.
PROTECTED_FIELDS = frozenset({"id", "organization_id", "created_at", "created_by"})


class BaseRepository(Generic[ModelType]):
    """CRUD operations that always run under the caller's organization scope.

    Reads are filtered by the policy's read predicate, so rows of another
    organization behave exactly like rows that do not exist.
    """

    def __init__(self, model: Type[ModelType]):
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class with an ``organization_id`` column
        """
        self.model = model
        self.table = model.__tablename__

    def query(self, db: Session, context: RequestContext) -> Query:
        """Query over the rows the caller may read."""
        return db.query(self.model).filter(scope_predicate(context, self.model))

    def _reject_protected(self, fields: dict) -> None:
        protected = PROTECTED_FIELDS.intersection(fields)
        if protected:
            raise ValidationError(
                f"Fields cannot be set directly: {', '.join(sorted(protected))}",
                field=sorted(protected)[0]
            )

    def create(
        self,
        db: Session,
        context: RequestContext,
        commit: bool = True,
        **kwargs: Any
    ) -> ModelType:
        """Insert a row into the caller's organization.

        Args:
            db: Database session
            context: Caller context
            commit: Commit now, or only flush so the caller can commit the
                row together with related writes
            **kwargs: Model field values

        Returns:
            Created model instance

        Raises:
            PolicyViolation: If the caller may not insert into this table
            ConstraintViolationError: If a database constraint rejects the row
        """
        self._reject_protected(kwargs)
        require_permitted(context, self.table, PolicyAction.INSERT)
        authorize(context, self.table, PolicyAction.INSERT, context.organization_id)

        if hasattr(self.model, "created_by"):
            kwargs.setdefault("created_by", context.user_id)
        if hasattr(self.model, "updated_by"):
            kwargs.setdefault("updated_by", context.user_id)

        instance = self.model(organization_id=context.organization_id, **kwargs)
        with database_errors(db, f"create {self.model.__name__}"):
            db.add(instance)
            if commit:
                db.commit()
            else:
                db.flush()
        db.refresh(instance)

        logger.info(
            "Record created",
            model=self.model.__name__,
            id=str(instance.id),
            **context.log_fields()
        )
        return instance

    def get_by_id(self, db: Session, context: RequestContext, id: UUID) -> Optional[ModelType]:
        """Get a visible record by ID.

        Returns:
            Model instance, or None if missing or in another organization
        """
        return self.query(db, context).filter(self.model.id == id).first()

    def get_multi(
        self,
        db: Session,
        context: RequestContext,
        skip: int = 0,
        limit: int = 100,
        order_by=None
    ) -> List[ModelType]:
        """Get visible records with pagination."""
        query = self.query(db, context)
        if order_by is not None:
            query = query.order_by(order_by)
        return query.offset(skip).limit(limit).all()

    def count(self, db: Session, context: RequestContext, *criteria) -> int:
        """Count visible records matching optional SQL criteria."""
        return self.query(db, context).filter(*criteria).count()

    def update(
        self,
        db: Session,
        context: RequestContext,
        id: UUID,
        commit: bool = True,
        **kwargs: Any
    ) -> Optional[ModelType]:
        """Update a visible record by ID.

        ``updated_at`` is always refreshed by the session hook, whatever the
        payload says. With ``commit=False`` the change is only flushed.

        Returns:
            Updated instance, or None if the row is not visible

        Raises:
            PolicyViolation: If the table has no update policy
            ConstraintViolationError: If a database constraint rejects the change
        """
        self._reject_protected(kwargs)
        require_permitted(context, self.table, PolicyAction.UPDATE)

        instance = self.get_by_id(db, context, id)
        if not instance:
            logger.warning(
                "Record not found for update",
                model=self.model.__name__,
                id=str(id),
                **context.log_fields()
            )
            return None

        authorize(context, self.table, PolicyAction.UPDATE, instance.organization_id)

        for field, value in kwargs.items():
            if hasattr(instance, field):
                setattr(instance, field, value)
        if hasattr(instance, "updated_by"):
            instance.updated_by = context.user_id

        with database_errors(db, f"update {self.model.__name__}"):
            if commit:
                db.commit()
            else:
                db.flush()
        db.refresh(instance)

        logger.info(
            "Record updated",
            model=self.model.__name__,
            id=str(id),
            fields=sorted(kwargs),
            **context.log_fields()
        )
        return instance

    def delete(self, db: Session, context: RequestContext, id: UUID) -> bool:
        """Delete a visible record by ID.

        Returns:
            True if deleted, False if the row is not visible

        Raises:
            PolicyViolation: If the table has no delete policy
            ConstraintViolationError: If the row is still referenced
        """
        require_permitted(context, self.table, PolicyAction.DELETE)

        instance = self.get_by_id(db, context, id)
        if not instance:
            logger.warning(
                "Record not found for deletion",
                model=self.model.__name__,
                id=str(id),
                **context.log_fields()
            )
            return False

        authorize(context, self.table, PolicyAction.DELETE, instance.organization_id)

        with database_errors(db, f"delete {self.model.__name__}"):
            db.delete(instance)
            db.commit()

        logger.info(
            "Record deleted",
            model=self.model.__name__,
            id=str(id),
            **context.log_fields()
        )
        return True
