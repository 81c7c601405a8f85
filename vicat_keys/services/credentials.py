"""Password hashing backed by bcrypt."""

from __future__ import annotations

import bcrypt

DEFAULT_ROUNDS = 10


class CredentialStore:
    """Hash and verify passwords with a salted, adaptive bcrypt work factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, plaintext: str) -> str:
        """Hash a password with a fresh salt."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def verify(plaintext: str, password_hash: str) -> bool:
        """Verify a password against its hash; malformed hashes never match."""
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), password_hash.encode("utf-8"))
        except (TypeError, ValueError, AttributeError):
            return False


__all__ = ["CredentialStore", "DEFAULT_ROUNDS"]
