"""FastAPI dependencies for authentication."""

from fastapi import HTTPException, Request

from mediaconf.auth.middleware import get_user_context
from mediaconf.auth.types import UserContext


def require_authenticated(request: Request) -> UserContext:
    """Dependency that requires authentication.

    Raises:
        HTTPException 401 if not authenticated
    """
    user_context = get_user_context(request)
    if not user_context:
        raise HTTPException(
            status_code=401,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_context
