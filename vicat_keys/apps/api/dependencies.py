"""Shared FastAPI dependencies for admin/user guards and service access."""

import asyncio
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status

from vicat_keys.core.logging import bind_log_username
from vicat_keys.core.models import Admin
from vicat_keys.services import ServiceContainer, runtime
from vicat_keys.services.access import Unauthorized
from vicat_keys.services.sessions import SessionValidation


def get_service_container() -> ServiceContainer:
    """Resolve the globally configured service container."""
    try:
        return runtime.get_services()
    except RuntimeError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Service container not configured",
        ) from exc


Services = Annotated[ServiceContainer, Depends(get_service_container)]


def require_admin(
    container: Services,
    x_admin_username: Annotated[Optional[str], Header(alias="x-admin-username")] = None,
    x_admin_password: Annotated[Optional[str], Header(alias="x-admin-password")] = None,
) -> Admin:
    """Admin guard: credentials are re-verified on every request."""
    result = container.access.check_admin(x_admin_username, x_admin_password)
    if isinstance(result, Unauthorized):
        raise result.to_error()
    return result.principal


async def require_user(
    container: Services,
    x_session_token: Annotated[Optional[str], Header(alias="x-session-token")] = None,
) -> SessionValidation:
    """User guard: resolve the session token to the calling user."""
    # Session lookup takes the gateway lock and reads the data file.
    result = await asyncio.to_thread(container.access.check_user, x_session_token)
    if isinstance(result, Unauthorized):
        raise result.to_error()
    # Stays bound for the remainder of this request's task context.
    bind_log_username(result.principal.user.username)
    return result.principal


AdminDependency = Annotated[Admin, Depends(require_admin)]
UserDependency = Annotated[SessionValidation, Depends(require_user)]


__all__ = [
    "AdminDependency",
    "Services",
    "UserDependency",
    "get_service_container",
    "require_admin",
    "require_user",
]
