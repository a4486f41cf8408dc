"""Tests for the key-value storage adapters."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from smartbudget.domain.errors import PersistenceError, PersistenceReadError
from smartbudget.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from smartbudget.infrastructure.key_value_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    SqlAlchemyKeyValueStore,
)


def test_sqlalchemy_store_round_trip(tmp_path) -> None:
    """Values should survive a new adapter on the same database."""
    db_url = f"sqlite:///{tmp_path / 'nested' / 'budget.db'}"
    store = SqlAlchemyKeyValueStore(SqlAlchemyDatabaseEngineAdapter(db_url))

    assert store.get("sb_transactions") is None
    store.set("sb_transactions", "[]")
    store.set("sb_transactions", '[{"id": "a"}]')

    reopened = SqlAlchemyKeyValueStore(SqlAlchemyDatabaseEngineAdapter(db_url))
    assert reopened.get("sb_transactions") == '[{"id": "a"}]'
    assert reopened.get("other") is None


def test_sqlalchemy_store_wraps_driver_errors() -> None:
    db_port = MagicMock()
    db_port.get_storage_engine.side_effect = OperationalError(
        "SELECT 1",
        {},
        Exception("database is locked"),
    )
    store = SqlAlchemyKeyValueStore(db_port)

    with pytest.raises(PersistenceReadError):
        store.get("key")
    with pytest.raises(PersistenceError):
        store.set("key", "value")


def test_json_file_store_round_trip(tmp_path) -> None:
    path = tmp_path / "data" / "budget.json"
    store = JsonFileKeyValueStore(path)

    assert store.get("sb_transactions") is None
    store.set("sb_transactions", "[]")
    store.set("sb_budget_limits", "{}")

    reopened = JsonFileKeyValueStore(path)
    assert reopened.get("sb_transactions") == "[]"
    assert reopened.get("sb_budget_limits") == "{}"


def test_json_file_store_reports_corrupt_file(tmp_path) -> None:
    path = tmp_path / "budget.json"
    path.write_text("{broken", encoding="utf-8")
    store = JsonFileKeyValueStore(path)

    with pytest.raises(PersistenceReadError):
        store.get("sb_transactions")
    with pytest.raises(PersistenceError):
        store.set("sb_transactions", "[]")
    assert path.read_text(encoding="utf-8") == "{broken"


def test_json_file_store_rejects_non_string_values(tmp_path) -> None:
    path = tmp_path / "budget.json"
    path.write_text('{"sb_transactions": [1, 2]}', encoding="utf-8")

    with pytest.raises(PersistenceReadError):
        JsonFileKeyValueStore(path).get("sb_transactions")


def test_in_memory_store() -> None:
    store = InMemoryKeyValueStore({"a": "1"})

    store.set("b", "2")

    assert store.get("a") == "1"
    assert store.get("b") == "2"
    assert store.get("c") is None
