"""Application bootstrap helpers for assembling the service container."""

from __future__ import annotations

from pathlib import Path

from vicat_keys.adapters.document_store import TinyDBDocumentStore
from vicat_keys.services import ServiceContainer, build_default_services


def build_default_service_container(data_file: Path | None = None) -> ServiceContainer:
    """Return the default service container wired to the TinyDB data file."""

    return build_default_services(store=TinyDBDocumentStore(db_path=data_file))


__all__ = ["build_default_service_container"]
