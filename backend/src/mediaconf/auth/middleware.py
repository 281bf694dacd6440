"""Authentication middleware for FastAPI."""

from collections.abc import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from mediaconf.auth.jwt_service import JWTError, JWTService
from mediaconf.auth.types import ANONYMOUS_ADMINISTRATOR, UserContext

TOKEN_HEADER = "X-Emby-Token"


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware that extracts an access token and sets the user context.

    The token is read from a Bearer Authorization header or from the
    X-Emby-Token header. If it decodes, request.state.user_context is set
    from its claims; otherwise it stays None. The middleware does NOT
    reject unauthenticated requests - that's handled by the endpoint
    dependencies.

    get_jwt_service is resolved per request because the service is built
    during application startup. When it returns None authentication is
    disabled and every request runs as an anonymous administrator.
    """

    def __init__(self, app, get_jwt_service: Callable[[], JWTService | None]):
        super().__init__(app)
        self._get_jwt_service = get_jwt_service

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.user_context = None

        jwt_service = self._get_jwt_service()
        if jwt_service is None:
            request.state.user_context = ANONYMOUS_ADMINISTRATOR
            return await call_next(request)

        token = _extract_token(request)
        if token:
            try:
                claims = jwt_service.decode_token(token)
                request.state.user_context = UserContext(
                    user_id=claims.user_id,
                    is_administrator=claims.is_administrator,
                )
            except JWTError:
                # Invalid token - leave user_context as None
                pass

        return await call_next(request)


def _extract_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:]
    return request.headers.get(TOKEN_HEADER)


def get_user_context(request: Request) -> UserContext | None:
    """Get the user context from the request state.

    Args:
        request: The FastAPI/Starlette request

    Returns:
        UserContext if authenticated, None otherwise
    """
    return getattr(request.state, "user_context", None)
