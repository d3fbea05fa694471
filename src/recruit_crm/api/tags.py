"""Tag API endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from recruit_crm.auth.dependencies import get_request_context
from recruit_crm.core.database import get_db
from recruit_crm.core.session_context import RequestContext
from recruit_crm.schemas.tag import TagCreate, TagUpdate, TagResponse
from recruit_crm.services.tag_service import TagService

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("/", response_model=List[TagResponse])
async def list_tags(
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    return TagService().list_tags(db, context)


@router.post("/", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    tag_data: TagCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    return TagService().create_tag(db, context, tag_data)


@router.patch("/{tag_id}", response_model=TagResponse)
async def update_tag(
    tag_id: UUID,
    tag_data: TagUpdate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    return TagService().update_tag(db, context, tag_id, tag_data)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: UUID,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    """Delete a tag that no candidate carries."""
    TagService().delete_tag(db, context, tag_id)
