"""Pytest configuration: ensure env vars and import path are set early.

This runs before any tests, so modules can import without local path hacks.
Shared fixtures build services around an in-memory TinyDB and a controllable
clock.
"""
from __future__ import annotations

import os
import sys
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Ensure repository root is on sys.path for local package imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

load_dotenv(override=False)

# Keep test runs away from real data and log locations
_TEST_ROOT = Path(tempfile.mkdtemp(prefix="vicat-tests-"))
os.environ.setdefault("DATA_DIR", str(_TEST_ROOT / "data"))
os.environ.setdefault("VICAT_LOG_DIR", str(_TEST_ROOT / "logs"))
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("PUBLIC_DIR", str(_TEST_ROOT / "no-dashboard"))

# pylint: disable=wrong-import-position,redefined-outer-name
from tinydb import TinyDB  # noqa: E402
from tinydb.storages import MemoryStorage  # noqa: E402

from vicat_keys.adapters.document_store import TinyDBDocumentStore  # noqa: E402
from vicat_keys.core.config import Settings  # noqa: E402
from vicat_keys.services import ServiceContainer, build_default_services, runtime  # noqa: E402

ADMIN_USERNAME = "rootadmin"
ADMIN_PASSWORD = "s3cret@admin"

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock for time-dependent rules."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> TinyDBDocumentStore:
    """Document store backed by TinyDB's in-memory storage."""
    return TinyDBDocumentStore(db=TinyDB(storage=MemoryStorage))


@pytest.fixture
def services(store, clock) -> ServiceContainer:
    """Service container with fast bcrypt and the fake clock."""
    container = build_default_services(
        store=store,
        app_settings=Settings(BCRYPT_ROUNDS=4, SESSION_SWEEP_INTERVAL_SECONDS=3600),
        clock=clock,
    )
    yield container
    runtime.clear_services()


@pytest.fixture
def admin(services) -> tuple[str, str]:
    """Create the admin account and return its credentials."""
    services.accounts.reset_admin(ADMIN_USERNAME, ADMIN_PASSWORD)
    return ADMIN_USERNAME, ADMIN_PASSWORD


@pytest.fixture
def admin_headers(admin) -> dict[str, str]:
    username, password = admin
    return {"x-admin-username": username, "x-admin-password": password}
