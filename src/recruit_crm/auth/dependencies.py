"""FastAPI dependencies for authentication and request context."""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
import structlog

from recruit_crm.core.database import get_db
from recruit_crm.core.error_handling import AuthenticationError
from recruit_crm.core.session_context import RequestContext, set_request_context
from recruit_crm.models.profile import Profile
from .utils import verify_token, get_profile_by_id

logger = structlog.get_logger(__name__)

security = HTTPBearer(auto_error=False)


def get_current_profile(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> Profile:
    """Resolve the bearer token to an active profile.

    Raises:
        AuthenticationError: If the token is missing, invalid, or names an
            unknown or inactive profile
    """
    if not credentials:
        logger.warning("No credentials provided")
        raise AuthenticationError()

    token_data = verify_token(credentials.credentials)
    if token_data is None or token_data.user_id is None:
        raise AuthenticationError()

    profile = get_profile_by_id(db, token_data.user_id)
    if profile is None:
        logger.warning("Profile not found or inactive", user_id=str(token_data.user_id))
        raise AuthenticationError()

    return profile


def get_request_context(
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
) -> RequestContext:
    """Build the caller context and bind it to the request's session."""
    context = RequestContext(
        user_id=profile.id,
        organization_id=profile.organization_id,
        role=profile.role,
    )
    set_request_context(db, context)
    if not context.is_provisioned:
        logger.info("Request from unprovisioned profile", **context.log_fields())
    return context
