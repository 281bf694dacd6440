"""Authentication module for mediaconf."""

from mediaconf.auth.types import ANONYMOUS_ADMINISTRATOR, TokenClaims, UserContext
from mediaconf.auth.password import PasswordService
from mediaconf.auth.jwt_service import JWTService
from mediaconf.auth.middleware import AuthMiddleware, get_user_context
from mediaconf.auth.dependencies import require_authenticated

__all__ = [
    "ANONYMOUS_ADMINISTRATOR",
    "AuthMiddleware",
    "JWTService",
    "PasswordService",
    "TokenClaims",
    "UserContext",
    "get_user_context",
    "require_authenticated",
]
