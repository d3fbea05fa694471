"""Dashboard API endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from recruit_crm.auth.dependencies import get_request_context
from recruit_crm.core.database import get_db
from recruit_crm.core.logging import performance_logger
from recruit_crm.core.session_context import RequestContext
from recruit_crm.schemas.dashboard import DashboardResponse
from recruit_crm.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    """Stats, recent activities and recommended actions.

    Sections that fail to load are listed in ``errors``.
    """
    with performance_logger.log_operation_time("get_dashboard", **context.log_fields()):
        return DashboardService().get_dashboard(db, context)
