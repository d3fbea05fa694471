"""Error taxonomy and translation of storage failures into CRM errors."""

from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError, DBAPIError
from sqlalchemy.orm import Session

from .logging import get_logger

logger = get_logger(__name__)


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification and routing."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    CONSTRAINT = "constraint"
    DATABASE = "database"


class CRMError(Exception):
    """Base exception class for CRM errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.original_error = original_error
        self.timestamp = datetime.utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_error) if self.original_error else None,
            "original_error_type": type(self.original_error).__name__ if self.original_error else None,
        }


class ValidationError(CRMError):
    """Error for request data the domain rejects."""

    def __init__(self, message: str, field: str = None, **kwargs):
        super().__init__(message, ErrorCategory.VALIDATION, ErrorSeverity.LOW, **kwargs)
        self.field = field


class AuthenticationError(CRMError):
    """Error for missing or invalid credentials."""

    def __init__(self, message: str = "Could not validate credentials", **kwargs):
        super().__init__(message, ErrorCategory.AUTHENTICATION, ErrorSeverity.HIGH, **kwargs)


class PolicyViolation(CRMError):
    """A write the organization policy does not grant.

    The message is deliberately generic so it never reveals whether a row
    exists in another organization.
    """

    def __init__(self, message: str = "Operation not permitted", **kwargs):
        super().__init__(message, ErrorCategory.AUTHORIZATION, ErrorSeverity.HIGH, **kwargs)


class NotFoundError(CRMError):
    """Row missing or outside the caller's organization."""

    def __init__(self, resource: str, **kwargs):
        super().__init__(f"{resource} not found", ErrorCategory.NOT_FOUND, ErrorSeverity.LOW, **kwargs)
        self.resource = resource


class ConstraintViolationError(CRMError):
    """Check, unique or foreign key constraint failure. The row is unchanged."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCategory.CONSTRAINT, ErrorSeverity.MEDIUM, **kwargs)


class DatabaseError(CRMError):
    """Transient connectivity failure. Surfaced to the caller, never retried."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCategory.DATABASE, ErrorSeverity.HIGH, **kwargs)


STATUS_CODES = {
    ErrorCategory.VALIDATION: 422,
    ErrorCategory.AUTHENTICATION: 401,
    ErrorCategory.AUTHORIZATION: 403,
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.CONSTRAINT: 409,
    ErrorCategory.DATABASE: 503,
}


def translate_database_error(error: Exception, operation: str) -> CRMError:
    """Classify a SQLAlchemy failure into a CRM error.

    Args:
        error: Exception raised by SQLAlchemy or the DBAPI
        operation: Name of the operation that failed

    Returns:
        Matching CRM error
    """
    if isinstance(error, IntegrityError):
        return ConstraintViolationError(
            f"{operation} violates a database constraint",
            original_error=error
        )
    if isinstance(error, OperationalError):
        return DatabaseError(
            f"{operation} failed: database unavailable",
            original_error=error
        )
    if isinstance(error, DBAPIError) and "row-level security" in str(error).lower():
        return PolicyViolation(original_error=error)
    return DatabaseError(f"{operation} failed", original_error=error)


@contextmanager
def database_errors(db: Session, operation: str):
    """Roll back and translate storage failures raised inside the block.

    Args:
        db: Database session to roll back on failure
        operation: Name of the operation, used in messages and logs
    """
    try:
        yield
    except DBAPIError as e:
        db.rollback()
        error = translate_database_error(e, operation)
        log = logger.warning if error.category == ErrorCategory.CONSTRAINT else logger.error
        log("Database operation failed", operation=operation, **error.to_dict())
        raise error from e


def register_exception_handlers(app: FastAPI) -> None:
    """Map CRM errors to JSON responses."""

    @app.exception_handler(CRMError)
    async def crm_error_handler(request: Request, exc: CRMError):
        status_code = STATUS_CODES.get(exc.category, 500)
        if status_code >= 500:
            logger.error("Request failed", path=request.url.path, **exc.to_dict())
        else:
            logger.info(
                "Request rejected",
                path=request.url.path,
                category=exc.category.value,
                message=exc.message
            )
        headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
        return JSONResponse(
            status_code=status_code,
            content={"detail": exc.message, "category": exc.category.value},
            headers=headers
        )
