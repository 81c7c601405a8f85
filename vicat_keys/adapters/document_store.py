"""TinyDB-backed adapter for the state document.

The whole state lives in one TinyDB record so that every save is a single
write of the JSON file.
"""

from __future__ import annotations

import json
from pathlib import Path

from tinydb import TinyDB
from tinydb.table import Document

from vicat_keys.core.config import config
from vicat_keys.core.exceptions import PersistenceError
from vicat_keys.core.models import StateDocument
from vicat_keys.core.ports import DocumentStorePort

STATE_TABLE = "state"
STATE_DOC_ID = 1


class TinyDBDocumentStore(DocumentStorePort):
    """Persist the state document in a TinyDB JSON file."""

    def __init__(self, db_path: Path | None = None, db: TinyDB | None = None) -> None:
        """Initialize the adapter.

        Args:
            db_path: Path to the JSON file. Defaults to the configured data file.
            db: Pre-built TinyDB instance (e.g. backed by ``MemoryStorage``).
        """
        if db is None:
            path = db_path or config.data_file_path()
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                db = TinyDB(str(path), indent=2, ensure_ascii=False)
            except (OSError, ValueError) as exc:
                raise PersistenceError(f"Unable to open data file {path}: {exc}") from exc
        self._db = db
        self._table = db.table(STATE_TABLE)

    def load(self) -> StateDocument:
        """Return the stored document, or an empty one on first boot."""
        try:
            raw = self._table.get(doc_id=STATE_DOC_ID)
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Unable to read state document: {exc}") from exc
        if raw is None:
            return StateDocument()
        try:
            return StateDocument.model_validate(dict(raw))
        except ValueError as exc:
            raise PersistenceError(f"Stored state document is malformed: {exc}") from exc

    def save(self, document: StateDocument) -> None:
        """Replace the stored document."""
        try:
            self._table.upsert(Document(document.to_payload(), doc_id=STATE_DOC_ID))
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Unable to write state document: {exc}") from exc

    def close(self) -> None:
        """Close the underlying TinyDB storage."""
        self._db.close()


def load_legacy_document(path: Path) -> StateDocument:
    """Parse a plain legacy ``data.json`` into a state document."""
    try:
        with path.open(encoding="utf-8") as handle:
            raw = json.load(handle)
    except (OSError, ValueError) as exc:
        raise PersistenceError(f"Unable to read legacy data file {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise PersistenceError(f"Legacy data file {path} does not hold a JSON object")
    try:
        return StateDocument.model_validate(raw)
    except ValueError as exc:
        raise PersistenceError(f"Legacy data file {path} is malformed: {exc}") from exc


__all__ = ["STATE_DOC_ID", "STATE_TABLE", "TinyDBDocumentStore", "load_legacy_document"]
