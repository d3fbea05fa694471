"""Candidate management API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import structlog

from recruit_crm.auth.dependencies import get_request_context
from recruit_crm.core.config import settings
from recruit_crm.core.database import get_db
from recruit_crm.core.logging import performance_logger
from recruit_crm.core.session_context import RequestContext
from recruit_crm.repositories.candidate import CandidateFilters
from recruit_crm.schemas.activity import ActivityCreate, ActivityResponse
from recruit_crm.schemas.candidate import CandidateCreate, CandidateUpdate, CandidateResponse
from recruit_crm.services.activity_service import ActivityService
from recruit_crm.services.candidate_service import CandidateService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/candidates", tags=["candidates"])


@router.post("/", response_model=CandidateResponse, status_code=status.HTTP_201_CREATED)
async def create_candidate(
    candidate_data: CandidateCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    """Create a candidate in the caller's organization."""
    with performance_logger.log_operation_time("create_candidate", **context.log_fields()):
        return CandidateService().create_candidate(db, context, candidate_data)


@router.get("/", response_model=List[CandidateResponse])
async def list_candidates(
    q: Optional[str] = Query(None, description="Free text over name, company and job title"),
    relationship_type: List[str] = Query([], description="candidate, client or both"),
    functional_role: List[str] = Query([], description="Functional roles to include"),
    is_active_looking: Optional[bool] = Query(None, description="Filter by active search flag"),
    location_category: List[str] = Query([], description="Location categories to include"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(
        settings.search_default_limit,
        ge=1,
        le=settings.search_max_limit,
        description="Maximum number of records"
    ),
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    """Search candidates, most recently updated first.

    Filters combine with AND; values within one filter combine with OR.
    """
    filters = CandidateFilters(
        relationship_type=relationship_type,
        functional_role=functional_role,
        is_active_looking=is_active_looking,
        location_category=location_category,
    )
    with performance_logger.log_operation_time("list_candidates", **context.log_fields()):
        candidates = CandidateService().search_candidates(db, context, q, filters, skip, limit)

    logger.info(
        "Candidates listed via API",
        count=len(candidates),
        **context.log_fields()
    )
    return candidates


@router.get("/{candidate_id}", response_model=CandidateResponse)
async def get_candidate(
    candidate_id: UUID,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    """Get a candidate by ID."""
    return CandidateService().get_candidate(db, context, candidate_id)


@router.patch("/{candidate_id}", response_model=CandidateResponse)
async def update_candidate(
    candidate_id: UUID,
    candidate_data: CandidateUpdate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    """Update the fields present in the request body."""
    with performance_logger.log_operation_time(
        "update_candidate",
        candidate_id=str(candidate_id),
        **context.log_fields()
    ):
        return CandidateService().update_candidate(db, context, candidate_id, candidate_data)


@router.delete("/{candidate_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_candidate(
    candidate_id: UUID,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    """Candidates cannot be deleted; this always answers 403."""
    CandidateService().delete_candidate(db, context, candidate_id)


@router.post("/{candidate_id}/tags/{tag_id}", response_model=CandidateResponse)
async def assign_tag(
    candidate_id: UUID,
    tag_id: UUID,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    """Attach a tag to a candidate."""
    service = CandidateService()
    service.assign_tag(db, context, candidate_id, tag_id)
    return service.get_candidate(db, context, candidate_id)


@router.delete("/{candidate_id}/tags/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_tag(
    candidate_id: UUID,
    tag_id: UUID,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    """Detach a tag from a candidate."""
    CandidateService().remove_tag(db, context, candidate_id, tag_id)


@router.get("/{candidate_id}/activities", response_model=List[ActivityResponse])
async def list_activities(
    candidate_id: UUID,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    """Activities of a candidate, newest first."""
    return ActivityService().list_for_candidate(db, context, candidate_id, skip, limit)


@router.post(
    "/{candidate_id}/activities",
    response_model=ActivityResponse,
    status_code=status.HTTP_201_CREATED
)
async def log_activity(
    candidate_id: UUID,
    activity_data: ActivityCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    """Log an activity against a candidate."""
    return ActivityService().log_activity(
        db,
        context,
        candidate_id,
        type=activity_data.type,
        description=activity_data.description,
        metadata=activity_data.metadata,
    )
