"""API request/response models for the key server REST API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from vicat_keys.core.models import ActiveKey, BlacklistEntry, KeyInfo, RedeemCode, UserInfo

# Bodies accept loosely typed fields; the services own validation so that
# every rejection carries the same error envelope.


class RegisterRequest(BaseModel):
    """Request model for POST /auth/register."""

    username: str | None = None
    password: str | None = None
    email: str | None = None


class LoginRequest(BaseModel):
    """Request model for POST /auth/login."""

    username: str | None = None
    password: str | None = None


class CreateRedeemRequest(BaseModel):
    """Request model for POST /admin/create-redeem."""

    count: Any = Field(default=None, description="Number of codes to create (1-100)")


class KeyRequest(BaseModel):
    """Request model carrying a single key (POST /admin/blacklist, POST /check)."""

    key: str | None = Field(default=None, description="Key in vicat-xxxx-xxxx-xxxx format")


class RedeemRequest(BaseModel):
    """Request model for POST /user/redeem."""

    code: str | None = None


class StatusResponse(BaseModel):
    """Plain success envelope."""

    status: Literal["success"] = "success"
    message: str


class ErrorResponse(BaseModel):
    """Envelope returned for every failed request."""

    status: Literal["error"] = "error"
    message: str


class RegisterResponse(StatusResponse):
    """Response model for POST /auth/register."""

    user_id: str = Field(serialization_alias="userId")


class LoginResponse(BaseModel):
    """Response model for POST /auth/login (token only for users)."""

    status: Literal["success"] = "success"
    role: Literal["admin", "user"]
    username: str
    session_token: str | None = Field(default=None, serialization_alias="sessionToken")


class RedeemCodesCreatedResponse(BaseModel):
    """Response model for POST /admin/create-redeem."""

    status: Literal["success"] = "success"
    codes: list[str]


class RedeemCodesResponse(BaseModel):
    """Response model for GET /admin/redeem-codes."""

    status: Literal["success"] = "success"
    codes: list[RedeemCode]


class AllKeysResponse(BaseModel):
    """Response model for GET /admin/all-keys."""

    status: Literal["success"] = "success"
    keys: list[ActiveKey]
    blacklist: list[BlacklistEntry]


class AllUsersResponse(BaseModel):
    """Response model for GET /admin/all-users."""

    status: Literal["success"] = "success"
    users: list[UserInfo]


class RedeemResponse(BaseModel):
    """Response model for POST /user/redeem."""

    status: Literal["success"] = "success"
    key: str


class UserKeysResponse(BaseModel):
    """Response model for GET /user/keys."""

    status: Literal["success"] = "success"
    keys: list[KeyInfo]


class CheckKeyResponse(BaseModel):
    """Response model for POST /check."""

    status: Literal["ok", "denied"]
    message: str


__all__ = [
    "AllKeysResponse",
    "AllUsersResponse",
    "CheckKeyResponse",
    "CreateRedeemRequest",
    "ErrorResponse",
    "KeyRequest",
    "LoginRequest",
    "LoginResponse",
    "RedeemCodesCreatedResponse",
    "RedeemCodesResponse",
    "RedeemRequest",
    "RedeemResponse",
    "RegisterRequest",
    "RegisterResponse",
    "StatusResponse",
    "UserKeysResponse",
]
