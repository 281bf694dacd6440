"""User API endpoints: authentication, user records, views and configuration."""

import logging
from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel, ConfigDict, Field

from mediaconf.auth.dependencies import require_authenticated
from mediaconf.auth.jwt_service import JWTService
from mediaconf.auth.password import PasswordService
from mediaconf.auth.types import UserContext
from mediaconf.configuration.errors import SchemaMismatchError
from mediaconf.configuration.types import coerce_to_schema
from mediaconf.users.store import UserStore
from mediaconf.users.types import UserConfiguration

logger = logging.getLogger(__name__)


class AuthenticateByNameRequest(BaseModel):
    """Request body for name/password authentication."""

    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(alias="Username")
    pw: str = Field(default="", alias="Pw")


def create_users_router(
    get_user_store: Callable[[], UserStore | None],
    get_jwt_service: Callable[[], JWTService | None],
    get_password_service: Callable[[], PasswordService | None],
) -> APIRouter:
    """Create the /Users router with injected dependencies."""
    router = APIRouter(prefix="/Users", tags=["users"])

    def _store() -> UserStore:
        store = get_user_store()
        if not store:
            raise HTTPException(500, "User store not initialized")
        return store

    def _check_access(user: UserContext, user_id: str) -> None:
        if not user.can_manage_user(user_id):
            raise HTTPException(403, "Access to this user is not allowed")

    @router.post("/AuthenticateByName")
    async def authenticate_by_name(request: AuthenticateByNameRequest) -> dict[str, Any]:
        """Authenticate a user by name and password and issue an access token.

        Raises:
            HTTPException 400 if authentication is disabled
            HTTPException 401 if credentials are invalid
        """
        store = _store()
        jwt_service = get_jwt_service()
        password_service = get_password_service()
        if not jwt_service or not password_service:
            raise HTTPException(400, "Authentication is disabled")

        credentials = store.get_credentials(request.username)
        if credentials is None:
            raise HTTPException(401, "Invalid username or password")
        user, password_hash = credentials
        if not password_service.verify(request.pw, password_hash):
            logger.warning("Failed login for user '%s'", request.username)
            raise HTTPException(401, "Invalid username or password")

        return {
            "AccessToken": jwt_service.generate_access_token(
                user.id, is_administrator=user.is_administrator
            ),
            "User": user.to_dict(),
        }

    @router.get("/{user_id}")
    async def get_user(
        user_id: str,
        user: UserContext = Depends(require_authenticated),
    ) -> dict[str, Any]:
        """Return a user with its configuration."""
        _check_access(user, user_id)
        record = _store().get_user(user_id)
        if record is None:
            raise HTTPException(404, f"User not found: {user_id}")
        return record.to_dict()

    @router.get("/{user_id}/Views")
    async def get_user_views(
        user_id: str,
        user: UserContext = Depends(require_authenticated),
    ) -> dict[str, Any]:
        """Return the user's library views, ordered by the user's preference."""
        _check_access(user, user_id)
        views = _store().get_user_views(user_id)
        if views is None:
            raise HTTPException(404, f"User not found: {user_id}")
        return {
            "Items": [view.to_dict() for view in views],
            "TotalRecordCount": len(views),
        }

    @router.post("/{user_id}/Configuration", status_code=204)
    async def update_user_configuration(
        user_id: str,
        http_request: Request,
        user: UserContext = Depends(require_authenticated),
    ) -> Response:
        """Replace the user's configuration as a whole."""
        _check_access(user, user_id)
        body = await http_request.body()
        try:
            configuration = coerce_to_schema(UserConfiguration, body)
        except SchemaMismatchError as e:
            raise HTTPException(400, str(e))

        if _store().update_configuration(user_id, configuration) is None:
            raise HTTPException(404, f"User not found: {user_id}")
        logger.info("Configuration updated for user '%s'", user_id)
        return Response(status_code=204)

    return router
