"""Type definitions for authentication."""

from dataclasses import dataclass


@dataclass
class TokenClaims:
    """Claims embedded in a JWT access token.

    Attributes:
        user_id: The authenticated user's ID
        is_administrator: Whether the user may manage server configuration
        exp: Token expiration timestamp
        iat: Token issued-at timestamp
    """

    user_id: str
    is_administrator: bool = False
    exp: int = 0
    iat: int = 0


@dataclass
class UserContext:
    """Identity of the caller attached to request.state by the middleware.

    Attributes:
        user_id: The authenticated user's ID (empty when auth is disabled)
        is_administrator: Whether the caller has administrator rights
    """

    user_id: str
    is_administrator: bool = False

    def can_manage_user(self, user_id: str) -> bool:
        """Administrators manage everyone; other users only themselves."""
        return self.is_administrator or self.user_id == user_id


# Context used for every request when authentication is disabled.
ANONYMOUS_ADMINISTRATOR = UserContext(user_id="", is_administrator=True)
