"""Routes for logged-in users (``x-session-token`` required)."""

from __future__ import annotations

from fastapi import APIRouter

from vicat_keys.apps.api.dependencies import Services, UserDependency
from vicat_keys.core.api_models import RedeemRequest, RedeemResponse, UserKeysResponse

router = APIRouter(prefix="/user", tags=["user"])


@router.post("/redeem", response_model=RedeemResponse)
def redeem(request: RedeemRequest, services: Services, caller: UserDependency) -> RedeemResponse:
    """Exchange a redeem code for a new key."""
    key = services.keys.redeem(request.code, caller.user.id)
    return RedeemResponse(key=key)


@router.get("/keys", response_model=UserKeysResponse)
def list_keys(services: Services, caller: UserDependency) -> UserKeysResponse:
    """List the caller's active keys."""
    return UserKeysResponse(keys=services.keys.list_user_keys(caller.user.id))


__all__ = ["router"]
