"""Authentication and organization endpoints."""

from datetime import timedelta

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
import structlog

from recruit_crm.auth.dependencies import get_current_profile, get_request_context
from recruit_crm.auth.models import Token
from recruit_crm.auth.utils import authenticate_profile, create_access_token
from recruit_crm.core.config import settings
from recruit_crm.core.database import get_db
from recruit_crm.core.error_handling import AuthenticationError, NotFoundError
from recruit_crm.core.session_context import RequestContext
from recruit_crm.models.profile import Profile
from recruit_crm.repositories.organization import OrganizationRepository
from recruit_crm.schemas.organization import OrganizationResponse, ProfileResponse

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/auth/login", response_model=Token)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """Authenticate a profile and return an access token."""
    profile = authenticate_profile(db, form_data.username, form_data.password)

    if not profile:
        logger.warning("Login failed", email=form_data.username)
        raise AuthenticationError("Incorrect email or password")

    access_token = create_access_token(
        data={"sub": str(profile.id), "email": profile.email},
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes)
    )

    logger.info("Profile logged in", user_id=str(profile.id), email=profile.email)

    return Token(
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60
    )


@router.get("/auth/me", response_model=ProfileResponse)
async def get_current_profile_info(
    current_profile: Profile = Depends(get_current_profile)
):
    """Get the authenticated profile."""
    return current_profile


@router.get("/organization", response_model=OrganizationResponse)
async def get_current_organization(
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context)
):
    """Get the caller's organization."""
    organization = OrganizationRepository().get_current(db, context)
    if organization is None:
        raise NotFoundError("Organization")
    return organization
