"""Authentication utilities."""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID, uuid4
import hashlib
import os

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session
import structlog

from recruit_crm.core.config import settings
from recruit_crm.models.profile import Profile
from .models import TokenData

logger = structlog.get_logger(__name__)


def _testing() -> bool:
    return os.getenv("TESTING", "false").lower() in ("1", "true")


def get_pwd_context() -> CryptContext:
    """Get password context based on environment."""
    if _testing():
        return CryptContext(schemes=["plaintext"], deprecated="auto")
    return CryptContext(schemes=["bcrypt"], deprecated="auto")


def _prehash(password: str) -> str:
    # bcrypt only looks at the first 72 bytes
    if len(password.encode("utf-8")) > 72:
        return hashlib.sha256(password.encode("utf-8")).hexdigest()
    return password


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password from database

    Returns:
        True if password matches, False otherwise
    """
    return get_pwd_context().verify(_prehash(plain_password), hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password, pre-hashing passwords longer than bcrypt accepts."""
    return get_pwd_context().hash(_prehash(password))


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token.

    Args:
        data: Claims to encode; ``sub`` must be the profile id
        expires_delta: Token lifetime, defaults to the configured expiry

    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))

    to_encode.update({
        "exp": expire,
        "iat": now,
        "jti": str(uuid4()),
    })

    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)
    logger.debug("Access token created", expires_at=expire.isoformat())
    return encoded_jwt


def verify_token(token: str) -> Optional[TokenData]:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify

    Returns:
        TokenData if valid, None otherwise
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.warning("Token verification failed", error=str(e))
        return None

    user_id_str = payload.get("sub")
    if user_id_str is None:
        logger.warning("Token missing user ID")
        return None

    try:
        user_id = UUID(user_id_str)
    except ValueError as e:
        logger.warning("Invalid UUID in token", error=str(e))
        return None

    return TokenData(user_id=user_id, email=payload.get("email"))


def authenticate_profile(db: Session, email: str, password: str) -> Optional[Profile]:
    """Authenticate a profile by email and password.

    Args:
        db: Database session
        email: Login email
        password: Plain text password

    Returns:
        Profile if authentication succeeds, None otherwise
    """
    profile = db.query(Profile).filter(Profile.email == email).first()

    if not profile:
        logger.warning("Profile not found", email=email)
        return None

    if not profile.is_active:
        logger.warning("Profile is inactive", email=email)
        return None

    if not verify_password(password, profile.hashed_password):
        logger.warning("Invalid password", email=email)
        return None

    logger.info("Profile authenticated successfully", email=email, user_id=str(profile.id))
    return profile


def get_profile_by_id(db: Session, user_id: UUID) -> Optional[Profile]:
    """Get an active profile by ID."""
    return db.query(Profile).filter(Profile.id == user_id, Profile.is_active.is_(True)).first()


def create_profile(
    db: Session,
    email: str,
    password: str,
    organization_id: Optional[UUID] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    role: Optional[str] = None
) -> Profile:
    """Provision a profile. Administrative path, not exposed over the API."""
    profile = Profile(
        email=email,
        hashed_password=get_password_hash(password),
        organization_id=organization_id,
        first_name=first_name,
        last_name=last_name,
        role=role,
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)

    logger.info(
        "Profile created",
        email=email,
        user_id=str(profile.id),
        organization_id=str(organization_id) if organization_id else None
    )
    return profile
