"""Tests for the TinyDB document store adapter."""

# pylint: disable=missing-function-docstring,redefined-outer-name

import json
from datetime import datetime, timezone

import pytest

from vicat_keys.adapters.document_store import TinyDBDocumentStore, load_legacy_document
from vicat_keys.core.exceptions import PersistenceError
from vicat_keys.core.models import Admin, BlacklistEntry, RedeemCode, StateDocument


@pytest.fixture
def file_store(tmp_path):
    """Create an adapter over a temporary JSON file."""
    return TinyDBDocumentStore(db_path=tmp_path / "nested" / "data.json")


class TestTinyDBDocumentStore:
    """Tests for load/save of the state document."""

    def test_missing_file_loads_empty_document(self, file_store):
        document = file_store.load()
        assert document == StateDocument()

    def test_save_then_load_returns_same_state(self, file_store):
        document = StateDocument(
            admin=Admin(username="root", password_hash="hash"),
            redeem_codes=[RedeemCode(code="ABC123XYZ000")],
            blacklist=[BlacklistEntry(key="vicat-aaaa-bbbb-cccc")],
        )
        file_store.save(document)

        loaded = file_store.load()

        assert loaded.admin is not None
        assert loaded.admin.username == "root"
        assert loaded.redeem_codes[0].code == "ABC123XYZ000"
        assert loaded.blacklist[0].key == "vicat-aaaa-bbbb-cccc"

    def test_save_replaces_previous_document(self, file_store):
        file_store.save(StateDocument(redeem_codes=[RedeemCode(code="AAAAAAAAAAAA")]))
        file_store.save(StateDocument())

        assert file_store.load().redeem_codes == []

    def test_file_is_human_readable_json(self, tmp_path):
        path = tmp_path / "data.json"
        store = TinyDBDocumentStore(db_path=path)
        store.save(StateDocument(redeem_codes=[RedeemCode(code="ABC123XYZ000")]))
        store.close()

        raw = json.loads(path.read_text(encoding="utf-8"))
        assert raw["state"]["1"]["redeem_codes"][0]["code"] == "ABC123XYZ000"

    def test_corrupt_file_raises_persistence_error(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")
        store = TinyDBDocumentStore(db_path=path)

        with pytest.raises(PersistenceError):
            store.load()

    def test_malformed_document_raises_persistence_error(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"state": {"1": {"users": "nope"}}}), encoding="utf-8")
        store = TinyDBDocumentStore(db_path=path)

        with pytest.raises(PersistenceError):
            store.load()

    def test_persistence_error_hides_details_from_clients(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(PersistenceError) as excinfo:
            TinyDBDocumentStore(db_path=path).load()

        assert excinfo.value.public_message == "Internal server error"


class TestLoadLegacyDocument:
    """Tests for importing a legacy data.json file."""

    def test_loads_legacy_shape(self, tmp_path):
        path = tmp_path / "legacy.json"
        path.write_text(
            json.dumps(
                {
                    "admin": {"username": "Meo73preb", "password_hash": "$2a$10$abc"},
                    "users": [
                        {
                            "id": "u1",
                            "username": "alice1",
                            "password_hash": "$2a$10$def",
                            "email": None,
                            "created_at": "2024-01-01T00:00:00.000Z",
                            "keys": ["vicat-aaaa-bbbb-cccc"],
                        }
                    ],
                    "sessions": [],
                    "redeem_codes": [],
                    "active_keys": [
                        {
                            "key": "vicat-aaaa-bbbb-cccc",
                            "user_id": "u1",
                            "created_at": "2024-01-01T00:00:00.000Z",
                            "status": "active",
                        }
                    ],
                    "blacklist": [],
                }
            ),
            encoding="utf-8",
        )

        document = load_legacy_document(path)

        assert document.users[0].created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert document.active_keys[0].user_id == "u1"

    def test_file_without_sessions_gets_empty_list(self, tmp_path):
        path = tmp_path / "legacy.json"
        path.write_text(json.dumps({"admin": None, "users": []}), encoding="utf-8")

        assert load_legacy_document(path).sessions == []

    def test_non_object_raises(self, tmp_path):
        path = tmp_path / "legacy.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(PersistenceError):
            load_legacy_document(path)
