"""Single mutual-exclusion point for reading and mutating the state document."""

from __future__ import annotations

from contextlib import contextmanager
from threading import RLock
from typing import Iterator

from vicat_keys.core.models import StateDocument
from vicat_keys.core.ports import DocumentStorePort


class StateGateway:
    """Serialize every load/mutate/save cycle through one lock.

    Request handlers run in worker threads and the session sweep runs in its
    own thread, so all of them must go through this object to avoid
    interleaving read-modify-write cycles on the document.
    """

    def __init__(self, store: DocumentStorePort) -> None:
        self._store = store
        self._lock = RLock()

    def snapshot(self) -> StateDocument:
        """Return a freshly loaded copy of the document for read-only use."""
        with self._lock:
            return self._store.load()

    @contextmanager
    def transaction(self) -> Iterator[StateDocument]:
        """Load the document, yield it for mutation, then save it.

        Nothing is written when the block raises, so a failed operation leaves
        the stored document untouched.
        """
        with self._lock:
            document = self._store.load()
            yield document
            self._store.save(document)


__all__ = ["StateGateway"]
