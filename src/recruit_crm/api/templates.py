"""Message template API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import structlog

from recruit_crm.auth.dependencies import get_request_context
from recruit_crm.core.database import get_db
from recruit_crm.core.logging import performance_logger
from recruit_crm.core.session_context import RequestContext
from recruit_crm.schemas.template import (
    TemplateCreate,
    TemplateUpdate,
    TemplateResponse,
    TemplateRenderRequest,
    TemplateRenderResponse,
)
from recruit_crm.services.template_service import TemplateService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("/", response_model=List[TemplateResponse])
async def list_templates(
    q: Optional[str] = Query(None, description="Search by name"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    """List templates, newest first."""
    return TemplateService().list_templates(db, context, q, skip, limit)


@router.post("/", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(
    template_data: TemplateCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    return TemplateService().create_template(db, context, template_data)


@router.get("/{template_id}", response_model=TemplateResponse)
async def get_template(
    template_id: UUID,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    return TemplateService().get_template(db, context, template_id)


@router.put("/{template_id}", response_model=TemplateResponse)
async def update_template(
    template_id: UUID,
    template_data: TemplateUpdate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    return TemplateService().update_template(db, context, template_id, template_data)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: UUID,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    TemplateService().delete_template(db, context, template_id)


@router.post(
    "/{template_id}/duplicate",
    response_model=TemplateResponse,
    status_code=status.HTTP_201_CREATED
)
async def duplicate_template(
    template_id: UUID,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    """Create a copy of a template."""
    return TemplateService().duplicate_template(db, context, template_id)


@router.post("/{template_id}/render", response_model=TemplateRenderResponse)
async def render_template(
    template_id: UUID,
    render_request: TemplateRenderRequest,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    """Preview a template with placeholder values filled in.

    The stored template is not modified.
    """
    with performance_logger.log_operation_time(
        "render_template",
        template_id=str(template_id),
        **context.log_fields()
    ):
        content, missing = TemplateService().render_template(
            db, context, template_id, render_request.values
        )

    if missing:
        logger.info("Template rendered with unresolved placeholders", missing=missing)
    return TemplateRenderResponse(template_id=template_id, content=content, missing=missing)
