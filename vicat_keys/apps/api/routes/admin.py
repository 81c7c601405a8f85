"""Administrative routes for redeem codes, keys, and users.

Every route requires ``x-admin-username`` and ``x-admin-password``.
"""

from __future__ import annotations

from fastapi import APIRouter

from vicat_keys.apps.api.dependencies import AdminDependency, Services
from vicat_keys.core.api_models import (
    AllKeysResponse,
    AllUsersResponse,
    CreateRedeemRequest,
    KeyRequest,
    RedeemCodesCreatedResponse,
    RedeemCodesResponse,
    StatusResponse,
)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/create-redeem", response_model=RedeemCodesCreatedResponse)
def create_redeem_codes(
    request: CreateRedeemRequest,
    services: Services,
    _: AdminDependency,
) -> RedeemCodesCreatedResponse:
    """Create between 1 and 100 single-use redeem codes."""
    codes = services.keys.issue_redeem_codes(request.count)
    return RedeemCodesCreatedResponse(codes=codes)


@router.post("/blacklist", response_model=StatusResponse)
def blacklist_key(
    request: KeyRequest,
    services: Services,
    _: AdminDependency,
) -> StatusResponse:
    """Permanently deny a key. This action cannot be undone."""
    services.keys.blacklist_key(request.key)
    return StatusResponse(message="Key blacklisted successfully")


@router.delete("/redeem/{code}", response_model=StatusResponse)
def delete_redeem_code(code: str, services: Services, _: AdminDependency) -> StatusResponse:
    """Delete a redeem code that has not been used yet."""
    services.keys.delete_redeem_code(code)
    return StatusResponse(message="Redeem code deleted successfully")


@router.get("/all-keys", response_model=AllKeysResponse)
def list_all_keys(services: Services, _: AdminDependency) -> AllKeysResponse:
    """List active keys and the blacklist."""
    listing = services.keys.list_all_keys()
    return AllKeysResponse(keys=listing.keys, blacklist=listing.blacklist)


@router.get("/all-users", response_model=AllUsersResponse)
def list_all_users(services: Services, _: AdminDependency) -> AllUsersResponse:
    """List users without their password hashes."""
    return AllUsersResponse(users=services.accounts.list_users())


@router.get("/redeem-codes", response_model=RedeemCodesResponse)
def list_redeem_codes(services: Services, _: AdminDependency) -> RedeemCodesResponse:
    return RedeemCodesResponse(codes=services.keys.list_redeem_codes())


__all__ = ["router"]
