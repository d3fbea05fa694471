"""Authentication and authorization module."""

from .dependencies import get_current_profile, get_request_context
from .models import Token, TokenData
from .policies import (
    PolicyAction,
    authorize,
    can_delete,
    can_insert,
    can_read,
    can_update,
    is_permitted,
    require_permitted,
    scope_predicate,
)
from .utils import create_access_token, verify_token, get_password_hash, verify_password

__all__ = [
    "get_current_profile",
    "get_request_context",
    "Token",
    "TokenData",
    "PolicyAction",
    "authorize",
    "can_delete",
    "can_insert",
    "can_read",
    "can_update",
    "is_permitted",
    "require_permitted",
    "scope_predicate",
    "create_access_token",
    "verify_token",
    "get_password_hash",
    "verify_password",
]
