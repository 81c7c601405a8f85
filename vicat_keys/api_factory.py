"""API factory entrypoint wiring default adapters to the FastAPI app."""

from __future__ import annotations

from fastapi import FastAPI

from vicat_keys.apps.api.app import create_app as _create_app
from vicat_keys.bootstrap import build_default_service_container


def create_app() -> FastAPI:
    """Return a FastAPI app configured with the default service container."""

    return _create_app(build_default_service_container())


__all__ = ["create_app"]
