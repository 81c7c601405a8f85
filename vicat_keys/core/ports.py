"""Protocol definitions for infrastructure adapters."""

# pylint: disable=unnecessary-ellipsis

from __future__ import annotations

from datetime import datetime
from typing import Callable, Protocol

from vicat_keys.core.models import StateDocument

Clock = Callable[[], datetime]


class DocumentStorePort(Protocol):
    """Port exposing whole-document persistence of the service state."""

    def load(self) -> StateDocument:
        """Return the persisted document, or an empty one if nothing is stored."""
        ...

    def save(self, document: StateDocument) -> None:
        """Replace the persisted document with ``document`` in a single write."""
        ...


__all__ = ["Clock", "DocumentStorePort"]
