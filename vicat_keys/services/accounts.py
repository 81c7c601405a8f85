"""Registration, login, and admin bootstrap."""

from __future__ import annotations

from vicat_keys.core.exceptions import AuthError, ConflictError, ErrorCode, ValidationError
from vicat_keys.core.identifiers import generate_user_id, is_valid_username
from vicat_keys.core.logging import get_logger
from vicat_keys.core.models import Admin, LoginResult, User, UserInfo, utc_now
from vicat_keys.core.ports import Clock
from vicat_keys.services.credentials import CredentialStore
from vicat_keys.services.sessions import SessionService
from vicat_keys.services.state import StateGateway

logger = get_logger(__name__)

# bcrypt ignores (or rejects) anything past 72 bytes
MAX_PASSWORD_BYTES = 72


def _require_password_length(password: str) -> None:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            ErrorCode.PASSWORD_TOO_LONG,
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
        )


class AccountService:
    """Business logic for the admin account and user accounts."""

    def __init__(
        self,
        gateway: StateGateway,
        credentials: CredentialStore,
        sessions: SessionService,
        clock: Clock = utc_now,
    ) -> None:
        self._gateway = gateway
        self._credentials = credentials
        self._sessions = sessions
        self._clock = clock

    def bootstrap_admin(self, username: str, password: str) -> bool:
        """Create the admin account if none exists; returns True when created."""
        if self._gateway.snapshot().admin is not None:
            return False
        _require_password_length(password)

        logger.info("Creating default admin...")
        with self._gateway.transaction() as document:
            if document.admin is not None:
                return False
            document.admin = Admin(
                username=username, password_hash=self._credentials.hash(password)
            )
        logger.warning(
            "Default admin created; rotate its password before exposing the service",
            extra={"admin_username": username},
        )
        return True

    def reset_admin(self, username: str, password: str) -> None:
        """Re-create the admin account with new credentials."""
        if not username or not password:
            raise ValidationError(ErrorCode.MISSING_FIELDS, "Username and password are required")
        _require_password_length(password)
        with self._gateway.transaction() as document:
            document.admin = Admin(
                username=username, password_hash=self._credentials.hash(password)
            )
        logger.info("Admin account re-created", extra={"admin_username": username})

    def register(self, username: str | None, password: str | None, email: str | None = None) -> User:
        """Create a new user account.

        Raises:
            ValidationError: If fields are missing or the username has
                characters other than letters, digits, and ``@``.
            ConflictError: If the username is taken.
        """
        if not username or not password:
            raise ValidationError(ErrorCode.MISSING_FIELDS, "Username and password are required")
        if not is_valid_username(username):
            raise ValidationError(
                ErrorCode.INVALID_USERNAME,
                "Username can only contain letters, numbers, and @",
            )
        _require_password_length(password)

        with self._gateway.transaction() as document:
            if document.find_user_by_username(username) is not None:
                raise ConflictError(ErrorCode.USERNAME_TAKEN, "Username already exists")
            user = User(
                id=generate_user_id(),
                username=username,
                password_hash=self._credentials.hash(password),
                email=email or None,
                created_at=self._clock(),
                keys=[],
            )
            document.users.append(user)

        logger.info("User registered", extra={"user_id": user.id})
        return user

    def login(self, username: str | None, password: str | None) -> LoginResult:
        """Authenticate as the admin or as a user.

        Admin logins return no session token; admin calls re-send credentials.

        Raises:
            ValidationError: If fields are missing.
            AuthError: If neither the admin nor a user matches.
        """
        if not username or not password:
            raise ValidationError(ErrorCode.MISSING_FIELDS, "Username and password are required")

        document = self._gateway.snapshot()
        admin = document.admin
        if (
            admin is not None
            and admin.username == username
            and self._credentials.verify(password, admin.password_hash)
        ):
            return LoginResult(role="admin", username=username)

        user = document.find_user_by_username(username)
        if user is None or not self._credentials.verify(password, user.password_hash):
            raise AuthError(ErrorCode.INVALID_LOGIN, "Invalid username or password")

        session = self._sessions.create_session(user.id)

        logger.info("User logged in", extra={"user_id": user.id})
        return LoginResult(role="user", username=user.username, session_token=session.token)

    def logout(self, token: str | None) -> None:
        """End the session for ``token``; unknown tokens are ignored."""
        if not token:
            raise ValidationError(ErrorCode.MISSING_TOKEN, "Session token required")
        self._sessions.destroy_session(token)

    def list_users(self) -> list[UserInfo]:
        """Return every user without password hashes."""
        return [UserInfo.from_user(user) for user in self._gateway.snapshot().users]


__all__ = ["AccountService", "MAX_PASSWORD_BYTES"]
