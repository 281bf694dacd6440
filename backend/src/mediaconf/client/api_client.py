"""Client-side API contract and its httpx implementation."""

import json
from collections.abc import Callable
from typing import Any, Protocol, TypeVar, runtime_checkable

import httpx
from pydantic import ValidationError

from mediaconf.client.errors import ApiClientError
from mediaconf.users.types import LibraryView, User, UserConfiguration

T = TypeVar("T")


@runtime_checkable
class ApiClient(Protocol):
    """Server operations the settings editor depends on.

    Implementations raise ApiClientError for every transport or HTTP
    failure.
    """

    async def get_user(self, user_id: str) -> User: ...

    async def get_user_views(self, user_id: str) -> list[LibraryView]: ...

    async def update_user_configuration(
        self, user_id: str, configuration: UserConfiguration
    ) -> None: ...

    def get_current_user_id(self) -> str | None: ...


class HttpApiClient:
    """ApiClient talking to a mediaconf server over HTTP.

    Example:
        async with HttpApiClient("http://localhost:8096") as api:
            await api.authenticate_by_name("alice", "secret")
            user = await api.get_user(api.get_current_user_id())
    """

    def __init__(
        self,
        base_url: str,
        access_token: str | None = None,
        user_id: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ):
        """Initialize the client.

        Args:
            base_url: Server root URL
            access_token: Existing access token, if already authenticated
            user_id: ID of the user the token belongs to
            transport: Custom httpx transport (tests use httpx.MockTransport)
            timeout: Request timeout in seconds
        """
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)
        self._access_token = access_token
        self._user_id = user_id

    async def __aenter__(self) -> "HttpApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def get_current_user_id(self) -> str | None:
        return self._user_id

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        headers = kwargs.pop("headers", {})
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        try:
            response = await self._http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise ApiClientError(f"{method} {url} failed: {e}") from e
        if response.is_error:
            raise ApiClientError(
                f"{method} {url} returned {response.status_code}",
                status_code=response.status_code,
            )
        return response

    def _decode(self, response: httpx.Response, parse: Callable[[Any], T]) -> T:
        """Parse a JSON response body, mapping malformed payloads to ApiClientError."""
        try:
            return parse(response.json())
        except (ValueError, KeyError, TypeError, ValidationError) as e:
            request = response.request
            raise ApiClientError(
                f"{request.method} {request.url.path} returned an unexpected body: {e}",
                status_code=response.status_code,
            ) from e

    async def authenticate_by_name(self, username: str, password: str) -> User:
        """Log in and remember the access token and current user."""
        response = await self._request(
            "POST",
            "/Users/AuthenticateByName",
            json={"Username": username, "Pw": password},
        )
        user, token = self._decode(
            response,
            lambda data: (User.model_validate(data["User"]), str(data["AccessToken"])),
        )
        self._access_token = token
        self._user_id = user.id
        return user

    async def get_user(self, user_id: str) -> User:
        response = await self._request("GET", f"/Users/{user_id}")
        return self._decode(response, User.model_validate)

    async def get_user_views(self, user_id: str) -> list[LibraryView]:
        response = await self._request("GET", f"/Users/{user_id}/Views")
        return self._decode(
            response,
            lambda data: [LibraryView.model_validate(item) for item in data["Items"]],
        )

    async def update_user_configuration(
        self, user_id: str, configuration: UserConfiguration
    ) -> None:
        await self._request(
            "POST",
            f"/Users/{user_id}/Configuration",
            content=json.dumps(configuration.to_dict()),
            headers={"Content-Type": "application/json"},
        )
