"""Core domain models for the persisted state document."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

KEY_STATUS_ACTIVE = "active"
MAX_REDEEM_BATCH = 100


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class RequestContext:
    """Metadata describing an inbound API request."""

    correlation_id: str
    path: str
    method: str
    user_agent: Optional[str] = None


class Admin(BaseModel):
    """The single administrator account."""

    username: str
    password_hash: str


class User(BaseModel):
    """A registered user and the keys they have redeemed."""

    id: str
    username: str
    password_hash: str
    email: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    keys: list[str] = Field(default_factory=list)


class Session(BaseModel):
    """Bearer session issued on user login.

    Persisted with camelCase field names so data files written by earlier
    deployments load unchanged.
    """

    model_config = ConfigDict(populate_by_name=True)

    token: str
    user_id: str = Field(alias="userId")
    created_at: datetime = Field(alias="createdAt")
    expires_at: datetime = Field(alias="expiresAt")

    def is_expired(self, now: datetime) -> bool:
        """True once ``now`` has reached the expiry timestamp."""
        return now >= self.expires_at


class RedeemCode(BaseModel):
    """Single-use code exchanged for exactly one key."""

    code: str
    redeemed: bool = False
    redeemed_by: str | None = None
    redeemed_at: datetime | None = None
    created_at: datetime = Field(default_factory=utc_now)


class ActiveKey(BaseModel):
    """A key issued through redemption and not yet blacklisted."""

    key: str
    user_id: str
    created_at: datetime = Field(default_factory=utc_now)
    status: str = KEY_STATUS_ACTIVE


class BlacklistEntry(BaseModel):
    """A permanently denied key."""

    key: str
    blacklisted_at: datetime = Field(default_factory=utc_now)


class StateDocument(BaseModel):
    """The whole persisted state, read and written as one unit."""

    admin: Admin | None = None
    users: list[User] = Field(default_factory=list)
    sessions: list[Session] = Field(default_factory=list)
    redeem_codes: list[RedeemCode] = Field(default_factory=list)
    active_keys: list[ActiveKey] = Field(default_factory=list)
    blacklist: list[BlacklistEntry] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready mapping written to storage."""
        return self.model_dump(mode="json", by_alias=True)

    def find_user(self, user_id: str) -> User | None:
        return next((u for u in self.users if u.id == user_id), None)

    def find_user_by_username(self, username: str) -> User | None:
        return next((u for u in self.users if u.username == username), None)

    def find_session(self, token: str) -> Session | None:
        return next((s for s in self.sessions if s.token == token), None)

    def find_redeem_code(self, code: str) -> RedeemCode | None:
        return next((c for c in self.redeem_codes if c.code == code), None)

    def find_active_key(self, key: str) -> ActiveKey | None:
        return next((k for k in self.active_keys if k.key == key), None)

    def is_blacklisted(self, key: str) -> bool:
        return any(entry.key == key for entry in self.blacklist)


class UserInfo(BaseModel):
    """User projection for admin listings (never carries the password hash)."""

    id: str
    username: str
    email: str | None
    created_at: datetime
    keys: list[str]

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
            keys=list(user.keys),
        )


class KeyInfo(BaseModel):
    """Key projection shown to the owning user."""

    key: str
    created_at: datetime
    status: str


class KeyListing(BaseModel):
    """Admin view of every active and blacklisted key."""

    keys: list[ActiveKey]
    blacklist: list[BlacklistEntry]


class KeyVerdict(BaseModel):
    """Outcome of a public key check."""

    status: Literal["ok", "denied"]
    reason: Literal["blacklisted", "invalid"] | None = None
    message: str

    @property
    def ok(self) -> bool:
        return self.status == "ok"


class LoginResult(BaseModel):
    """Outcome of a successful login; admins never receive a session token."""

    role: Literal["admin", "user"]
    username: str
    session_token: str | None = None


__all__ = [
    "KEY_STATUS_ACTIVE",
    "MAX_REDEEM_BATCH",
    "ActiveKey",
    "Admin",
    "BlacklistEntry",
    "KeyInfo",
    "KeyListing",
    "KeyVerdict",
    "LoginResult",
    "RedeemCode",
    "RequestContext",
    "Session",
    "StateDocument",
    "User",
    "UserInfo",
    "utc_now",
]
