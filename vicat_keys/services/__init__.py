"""Application service layer and the container that wires it together."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from vicat_keys.core.config import Settings, settings
from vicat_keys.core.ports import Clock, DocumentStorePort
from vicat_keys.core.models import utc_now

from .access import AccessGate
from .accounts import AccountService
from .credentials import CredentialStore
from .keys import KeyLifecycleService
from .sessions import SessionService
from .state import StateGateway
from .sweeper import SessionSweeper


@dataclass(slots=True)
class ServiceContainer:
    """Aggregate of application-level services available to handlers."""

    gateway: StateGateway
    credentials: CredentialStore
    sessions: SessionService
    access: AccessGate
    accounts: AccountService
    keys: KeyLifecycleService
    sweeper: SessionSweeper


def build_default_services(
    *,
    store: DocumentStorePort,
    app_settings: Settings | None = None,
    clock: Clock = utc_now,
) -> ServiceContainer:
    """Return a service container wired around ``store``."""

    cfg = app_settings or settings
    gateway = StateGateway(store)
    credentials = CredentialStore(rounds=cfg.BCRYPT_ROUNDS)
    sessions = SessionService(
        gateway, ttl=timedelta(days=cfg.SESSION_TTL_DAYS), clock=clock
    )
    return ServiceContainer(
        gateway=gateway,
        credentials=credentials,
        sessions=sessions,
        access=AccessGate(gateway, credentials, sessions),
        accounts=AccountService(gateway, credentials, sessions, clock=clock),
        keys=KeyLifecycleService(gateway, clock=clock),
        sweeper=SessionSweeper(sessions, interval_seconds=cfg.SESSION_SWEEP_INTERVAL_SECONDS),
    )


__all__ = ["ServiceContainer", "build_default_services"]
