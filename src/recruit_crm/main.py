"""FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse
import structlog

from recruit_crm.core.config import settings
from recruit_crm.core.database import db_manager, init_db, close_db
from recruit_crm.core.error_handling import register_exception_handlers
from recruit_crm.core.logging import configure_logging
from recruit_crm.api.auth import router as auth_router
from recruit_crm.api.candidates import router as candidates_router
from recruit_crm.api.tags import router as tags_router
from recruit_crm.api.templates import router as templates_router
from recruit_crm.api.dashboard import router as dashboard_router

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Application started", environment=settings.environment)
    yield
    close_db()


def create_app(initialize_database: bool = True) -> FastAPI:
    """Build the application.

    Args:
        initialize_database: Connect and migrate on startup. Tests that bind
            their own engine pass False.
    """
    app = FastAPI(
        title="Recruit CRM API",
        description="Multi-tenant recruiting CRM",
        version="0.1.0",
        lifespan=lifespan if initialize_database else None
    )

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(candidates_router)
    app.include_router(tags_router)
    app.include_router(templates_router)
    app.include_router(dashboard_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        if db_manager.health_check():
            return {"status": "healthy", "service": "recruit-crm", "database": "ok"}
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "service": "recruit-crm", "database": "unavailable"}
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "recruit_crm.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.environment == "development"
    )
