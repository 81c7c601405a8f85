"""Registration, login, and logout routes."""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Header

from vicat_keys.apps.api.dependencies import Services
from vicat_keys.core.api_models import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    StatusResponse,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse)
def register(request: RegisterRequest, services: Services) -> RegisterResponse:
    """Create a user account (username: letters, digits, and @ only)."""
    user = services.accounts.register(request.username, request.password, request.email)
    return RegisterResponse(message="User registered successfully", user_id=user.id)


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
def login(request: LoginRequest, services: Services) -> LoginResponse:
    """Log in as the admin or as a user.

    Users receive a 30 day session token. The admin receives no token and must
    send ``x-admin-username``/``x-admin-password`` on every admin call.
    """
    result = services.accounts.login(request.username, request.password)
    return LoginResponse(
        role=result.role,
        username=result.username,
        session_token=result.session_token,
    )


@router.post("/logout", response_model=StatusResponse)
def logout(
    services: Services,
    x_session_token: Annotated[Optional[str], Header(alias="x-session-token")] = None,
) -> StatusResponse:
    """End the caller's session; unknown tokens still succeed."""
    services.accounts.logout(x_session_token)
    return StatusResponse(message="Logged out successfully")


__all__ = ["router"]
