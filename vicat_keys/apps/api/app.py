"""FastAPI application factory, lifespan, and error mapping."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from vicat_keys.apps.api.middleware import CorrelationIdMiddleware
from vicat_keys.core.api_models import ErrorResponse
from vicat_keys.core.config import config
from vicat_keys.core.exceptions import PersistenceError, VicatError
from vicat_keys.core.logging import get_logger
from vicat_keys.services import ServiceContainer, runtime

logger = get_logger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(message=message).model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Bootstrap the admin account and run the session sweeper while serving."""
    services: ServiceContainer = app.state.services
    runtime.set_services(services)
    logger.info("Initializing vicat key server...")
    await asyncio.to_thread(
        services.accounts.bootstrap_admin,
        config.DEFAULT_ADMIN_USERNAME,
        config.DEFAULT_ADMIN_PASSWORD,
    )
    await services.sweeper.start()
    try:
        yield
    finally:
        await services.sweeper.stop()


async def _handle_vicat_error(_request: Request, exc: VicatError) -> JSONResponse:
    if isinstance(exc, PersistenceError):
        logger.error("Storage failure: %s", exc.message)
    return _error_response(exc.status_code, exc.public_message)


async def _handle_request_validation(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("Rejected malformed request body", extra={"errors": len(exc.errors())})
    return _error_response(400, "Invalid request body")


async def _handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", exc_info=exc)
    return _error_response(500, "Internal server error")


def create_app(services: ServiceContainer | None = None) -> FastAPI:
    """Build the FastAPI application with configured routers."""
    if services is None:
        raise RuntimeError("Service container must be provided when creating the app.")
    app = FastAPI(title="Vicat Key Server", lifespan=lifespan)
    app.state.services = services
    runtime.set_services(services)
    app.add_middleware(CorrelationIdMiddleware)

    app.add_exception_handler(VicatError, _handle_vicat_error)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, _handle_request_validation  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, _handle_unexpected)

    # Import lazily to avoid potential circular imports when routers grow.
    from .routes import admin, auth, health, public, user  # pylint: disable=import-outside-toplevel

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(admin.router)
    app.include_router(user.router)
    app.include_router(public.router)

    public_dir = config.PUBLIC_DIR
    if public_dir is not None and public_dir.is_dir():
        app.mount("/", StaticFiles(directory=public_dir, html=True), name="dashboard")
    return app


__all__ = ["create_app", "lifespan"]
