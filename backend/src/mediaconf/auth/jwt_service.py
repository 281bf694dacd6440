"""Access tokens issued by AuthenticateByName and checked by AuthMiddleware."""

import time

import jwt

from mediaconf.auth.types import TokenClaims

ISSUER = "mediaconf"
ACCESS_TOKEN_TYPE = "access"


class JWTError(Exception):
    """A token could not be accepted."""


class TokenExpiredError(JWTError):
    pass


class InvalidTokenError(JWTError):
    pass


class JWTService:
    """Signs and verifies mediaconf access tokens.

    A token names the user (sub), carries the administrator flag (admin)
    and is stamped with the mediaconf issuer. There are no refresh
    tokens: clients authenticate again when a token expires.
    """

    ACCESS_TOKEN_TTL = 24 * 60 * 60  # 1 day

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        self._secret_key = secret_key
        self._algorithm = algorithm

    def generate_access_token(self, user_id: str, is_administrator: bool = False) -> str:
        """Sign an access token for user_id valid for ACCESS_TOKEN_TTL seconds."""
        issued_at = int(time.time())
        return jwt.encode(
            {
                "iss": ISSUER,
                "sub": user_id,
                "admin": is_administrator,
                "type": ACCESS_TOKEN_TYPE,
                "iat": issued_at,
                "exp": issued_at + self.ACCESS_TOKEN_TTL,
            },
            self._secret_key,
            algorithm=self._algorithm,
        )

    def decode_token(self, token: str) -> TokenClaims:
        """Verify token and return its claims.

        Raises:
            TokenExpiredError: If exp has passed
            InvalidTokenError: If the signature, issuer or shape is wrong,
                or the token is not an access token
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                issuer=ISSUER,
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        if payload.get("type") != ACCESS_TOKEN_TYPE:
            raise InvalidTokenError("Not an access token")

        return TokenClaims(
            user_id=payload["sub"],
            is_administrator=bool(payload.get("admin", False)),
            exp=payload["exp"],
            iat=payload["iat"],
        )
