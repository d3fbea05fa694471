"""Structured logging configuration."""

import logging
import sys
import time
from typing import Any, Dict, Optional
from datetime import datetime
from contextlib import contextmanager

import structlog
from structlog.stdlib import LoggerFactory

from .config import settings


def configure_logging() -> None:
    """Configure structured logging for the application."""

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if settings.environment == "production"
            else structlog.dev.ConsoleRenderer(colors=True),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper()),
    )

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.log_level == "DEBUG" else logging.WARNING
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return structlog.get_logger(name)


def log_request_context(
    organization_id: Optional[str] = None,
    user_id: Optional[str] = None,
    **kwargs: Any
) -> Dict[str, Any]:
    """Create logging context for a tenant-scoped request.

    Args:
        organization_id: Organization identifier
        user_id: Profile identifier
        **kwargs: Additional context

    Returns:
        Context dictionary for logging
    """
    context = {}

    if organization_id:
        context["organization_id"] = organization_id
    if user_id:
        context["user_id"] = user_id

    context.update(kwargs)
    return context


class PerformanceLogger:
    """Logger for tracking operation timings."""

    def __init__(self, logger_name: str = "performance"):
        self.logger = get_logger(logger_name)

    @contextmanager
    def log_operation_time(
        self,
        operation: str,
        **context: Any
    ):
        """Context manager to log operation execution time.

        Args:
            operation: Name of the operation being timed
            **context: Additional context for logging
        """
        start_time = time.time()
        start_timestamp = datetime.utcnow()

        try:
            yield

            duration = time.time() - start_time
            self.logger.info(
                "Operation completed",
                operation=operation,
                duration_seconds=round(duration, 3),
                start_time=start_timestamp.isoformat(),
                **context
            )

        except Exception as e:
            duration = time.time() - start_time
            self.logger.warning(
                "Operation failed",
                operation=operation,
                duration_seconds=round(duration, 3),
                start_time=start_timestamp.isoformat(),
                error=str(e),
                error_type=type(e).__name__,
                **context
            )
            raise


performance_logger = PerformanceLogger()
