"""Session issuance, validation, and expiry for logged-in users."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from vicat_keys.core.exceptions import AuthError, ErrorCode
from vicat_keys.core.identifiers import generate_session_token
from vicat_keys.core.logging import get_logger
from vicat_keys.core.models import Session, User, utc_now
from vicat_keys.core.ports import Clock
from vicat_keys.services.state import StateGateway

logger = get_logger(__name__)

DEFAULT_SESSION_TTL = timedelta(days=30)


@dataclass(slots=True, frozen=True)
class SessionValidation:
    """A validated session together with the user it belongs to."""

    user: User
    session: Session


class SessionService:
    """Business logic for user sessions."""

    def __init__(
        self,
        gateway: StateGateway,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Clock = utc_now,
    ) -> None:
        self._gateway = gateway
        self._ttl = ttl
        self._clock = clock

    def create_session(self, user_id: str) -> Session:
        """Issue and persist a new session for ``user_id``."""
        now = self._clock()
        session = Session(
            token=generate_session_token(),
            user_id=user_id,
            created_at=now,
            expires_at=now + self._ttl,
        )
        with self._gateway.transaction() as document:
            document.sessions.append(session)
        return session

    def validate_session(self, token: str | None) -> SessionValidation:
        """Resolve ``token`` to its user without mutating stored state.

        Raises:
            AuthError: MISSING_TOKEN, INVALID_TOKEN, SESSION_EXPIRED or
                USER_NOT_FOUND. Expired sessions are left for the sweep.
        """
        if not token:
            raise AuthError(ErrorCode.MISSING_TOKEN, "Session token required")

        document = self._gateway.snapshot()
        session = document.find_session(token)
        if session is None:
            raise AuthError(ErrorCode.INVALID_TOKEN, "Invalid session token")
        if session.is_expired(self._clock()):
            raise AuthError(ErrorCode.SESSION_EXPIRED, "Session expired")

        user = document.find_user(session.user_id)
        if user is None:
            raise AuthError(ErrorCode.USER_NOT_FOUND, "User not found")
        return SessionValidation(user=user, session=session)

    def destroy_session(self, token: str) -> bool:
        """Remove the session for ``token``; returns whether one existed."""
        with self._gateway.transaction() as document:
            remaining = [s for s in document.sessions if s.token != token]
            removed = len(remaining) != len(document.sessions)
            document.sessions = remaining
        return removed

    def sweep_expired(self) -> int:
        """Delete every session whose expiry has passed; returns the count."""
        now = self._clock()
        with self._gateway.transaction() as document:
            remaining = [s for s in document.sessions if not s.is_expired(now)]
            removed = len(document.sessions) - len(remaining)
            document.sessions = remaining
        if removed:
            logger.info("Cleaned up expired sessions", extra={"removed": removed})
        return removed


__all__ = ["DEFAULT_SESSION_TTL", "SessionService", "SessionValidation"]
