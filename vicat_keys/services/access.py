"""Admin and user guards evaluated on every protected request."""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from vicat_keys.core.exceptions import AuthError, ErrorCode
from vicat_keys.core.models import Admin
from vicat_keys.services.credentials import CredentialStore
from vicat_keys.services.sessions import SessionService, SessionValidation
from vicat_keys.services.state import StateGateway

PrincipalT = TypeVar("PrincipalT")


@dataclass(frozen=True)
class Authorized(Generic[PrincipalT]):
    """The presented credentials were accepted."""

    principal: PrincipalT


@dataclass(slots=True, frozen=True)
class Unauthorized:
    """The presented credentials were rejected."""

    reason: ErrorCode
    message: str

    def to_error(self) -> AuthError:
        return AuthError(self.reason, self.message)


AdminGuardResult = Union[Authorized[Admin], Unauthorized]
UserGuardResult = Union[Authorized[SessionValidation], Unauthorized]


class AccessGate:
    """Pure predicates over presented credentials; neither guard writes state."""

    def __init__(
        self,
        gateway: StateGateway,
        credentials: CredentialStore,
        sessions: SessionService,
    ) -> None:
        self._gateway = gateway
        self._credentials = credentials
        self._sessions = sessions

    def check_admin(self, username: str | None, password: str | None) -> AdminGuardResult:
        """Verify admin credentials, re-checking the bcrypt hash on every call."""
        if not username or not password:
            return Unauthorized(ErrorCode.MISSING_CREDENTIALS, "Admin credentials required")

        admin = self._gateway.snapshot().admin
        if (
            admin is None
            or not hmac.compare_digest(admin.username.encode(), username.encode())
            or not self._credentials.verify(password, admin.password_hash)
        ):
            return Unauthorized(ErrorCode.INVALID_CREDENTIALS, "Invalid admin credentials")
        return Authorized(admin)

    def check_user(self, token: str | None) -> UserGuardResult:
        """Resolve a session token to its user and session."""
        try:
            return Authorized(self._sessions.validate_session(token))
        except AuthError as exc:
            return Unauthorized(exc.code, exc.message)


__all__ = [
    "AccessGate",
    "AdminGuardResult",
    "Authorized",
    "Unauthorized",
    "UserGuardResult",
]
