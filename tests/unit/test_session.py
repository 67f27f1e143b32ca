"""Tests for the login session and its storage."""

import json

import pytest

from application.session import Session
from domain.exceptions import StorageError, UnknownRoleError
from infrastructure.session.storage import InMemoryStorage, JSONFileStorage

USERS = [
    {"id": 1, "nameUser": "admin", "password": "admin123", "role": "admin"},
    {"id": 2, "nameUser": "operario", "password": "operario123", "role": "operario"},
]


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def session(storage):
    return Session(storage, USERS)


class TestSession:
    def test_starts_logged_out(self, session) -> None:
        session.load()
        assert session.current_role() is None
        assert session.current_user() is None
        assert session.allowed_screens() == ()

    def test_login_persists_role_and_user(self, session, storage) -> None:
        assert session.login("admin", "admin123") is True
        assert storage.get("rol") == "admin"
        assert json.loads(storage.get("user"))["nameUser"] == "admin"
        assert session.current_role() == "admin"

    def test_login_rejects_bad_password(self, session, storage) -> None:
        assert session.login("admin", "nope") is False
        assert storage.get("rol") is None

    def test_load_restores_previous_login(self, storage) -> None:
        Session(storage, USERS).login("operario", "operario123")

        restored = Session(storage, USERS)
        restored.load()

        assert restored.current_role() == "operario"
        assert restored.current_user()["nameUser"] == "operario"

    def test_load_discards_corrupt_user(self, storage) -> None:
        storage.set("rol", "admin")
        storage.set("user", "{not json")
        session = Session(storage, USERS)
        session.load()

        assert session.current_role() == "admin"
        assert session.current_user() is None
        assert storage.get("user") is None

    def test_load_recovers_from_corrupt_file(self, tmp_path) -> None:
        path = tmp_path / "session.json"
        path.write_text("{not json", encoding="utf-8")
        session = Session(JSONFileStorage(path), USERS)

        session.load()

        assert session.current_role() is None
        assert json.loads(path.read_text(encoding="utf-8")) == {}
        assert session.login("admin", "admin123") is True

    def test_current_user_is_a_copy(self, session) -> None:
        session.login("admin", "admin123")
        user = session.current_user()
        user["role"] = "hacker"
        assert session.current_user()["role"] == "admin"

    def test_clear(self, session, storage) -> None:
        session.login("admin", "admin123")
        session.clear()
        assert session.current_role() is None
        assert storage.get("rol") is None
        assert storage.get("user") is None

    def test_set_role(self, session, storage) -> None:
        session.login("admin", "admin123")
        session.set_role("operario")
        assert storage.get("rol") == "operario"
        assert session.current_user()["role"] == "operario"

    def test_set_unknown_role(self, session) -> None:
        with pytest.raises(UnknownRoleError):
            session.set_role("root")

    def test_operator_screens(self, session) -> None:
        session.login("operario", "operario123")
        assert session.can_access("insumos")
        assert session.can_access("formulas")
        assert not session.can_access("analisis")
        assert not session.can_access("Gformulas")

    def test_admin_screens(self, session) -> None:
        session.login("admin", "admin123")
        assert session.can_access("analisis")
        assert session.can_access("Gformulas")
        assert session.can_access("ventas")


class TestJSONFileStorage:
    def test_roundtrip_across_instances(self, tmp_path) -> None:
        path = tmp_path / "session.json"
        JSONFileStorage(path).set("rol", "admin")
        assert JSONFileStorage(path).get("rol") == "admin"

    def test_missing_file_reads_empty(self, tmp_path) -> None:
        storage = JSONFileStorage(tmp_path / "none.json")
        assert storage.get("rol") is None
        storage.remove("rol")

    def test_remove(self, tmp_path) -> None:
        storage = JSONFileStorage(tmp_path / "session.json")
        storage.set("rol", "admin")
        storage.remove("rol")
        assert storage.get("rol") is None

    def test_corrupt_file(self, tmp_path) -> None:
        path = tmp_path / "session.json"
        path.write_text("[1, 2", encoding="utf-8")
        with pytest.raises(StorageError):
            JSONFileStorage(path).get("rol")

    def test_clear_overwrites_corrupt_file(self, tmp_path) -> None:
        path = tmp_path / "session.json"
        path.write_text("[1, 2", encoding="utf-8")
        storage = JSONFileStorage(path)
        storage.clear()
        assert storage.get("rol") is None
