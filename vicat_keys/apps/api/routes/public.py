"""Public key check used by the scripting client."""

from __future__ import annotations

from fastapi import APIRouter

from vicat_keys.apps.api.dependencies import Services
from vicat_keys.core.api_models import CheckKeyResponse, KeyRequest

router = APIRouter(tags=["public"])


@router.post("/check", response_model=CheckKeyResponse)
def check_key(request: KeyRequest, services: Services) -> CheckKeyResponse:
    """Report whether a key is usable; blacklisted keys are always denied."""
    verdict = services.keys.check_key(request.key)
    return CheckKeyResponse(status=verdict.status, message=verdict.message)


__all__ = ["router"]
