"""Password hashing service using bcrypt."""

import os

from passlib.context import CryptContext

DEFAULT_ROUNDS = 12


class PasswordService:
    """Hashes and verifies user passwords through passlib's CryptContext."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        """Initialize the password service.

        Args:
            rounds: bcrypt work factor (default 12, higher = slower + more secure)
        """
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    @classmethod
    def from_env(cls) -> "PasswordService":
        """Use MEDIACONF_BCRYPT_ROUNDS when set (tests lower it for speed)."""
        rounds = os.environ.get("MEDIACONF_BCRYPT_ROUNDS")
        return cls(int(rounds)) if rounds else cls()

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hash: str | None) -> bool:
        """Check password against hash. A user without a hash accepts only ""."""
        if not hash:
            return password == ""
        try:
            return self._context.verify(password, hash)
        except ValueError:
            return False
