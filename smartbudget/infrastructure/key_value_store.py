"""Key-value storage adapters implementing the persistence port."""

import json
import os
from pathlib import Path

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from smartbudget.application.ports.database import DatabaseEnginePort
from smartbudget.application.ports.key_value_store import KeyValueStorePort
from smartbudget.domain.errors import PersistenceError, PersistenceReadError


CREATE_KV_STORE_SQL = """
CREATE TABLE IF NOT EXISTS kv_store (
    store_key TEXT PRIMARY KEY,
    store_value TEXT NOT NULL
)
"""

SELECT_VALUE_SQL = text(
    """
    SELECT store_value
    FROM kv_store
    WHERE store_key = :store_key
    """
)

DELETE_VALUE_SQL = text(
    """
    DELETE FROM kv_store
    WHERE store_key = :store_key
    """
)

INSERT_VALUE_SQL = text(
    """
    INSERT INTO kv_store (store_key, store_value)
    VALUES (:store_key, :store_value)
    """
)


class SqlAlchemyKeyValueStore(KeyValueStorePort):
    """Key-value store kept in a single SQL table."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the adapter.

        Args:
            db_port: Port providing access to the storage engine.
        """
        self._db_port = db_port
        self._prepared = False

    def prepare_storage(self) -> None:
        """Ensure the key-value table exists."""
        engine = self._db_port.get_storage_engine()
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_KV_STORE_SQL)
        self._prepared = True

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None.

        Raises:
            PersistenceReadError: If the database cannot be queried.
        """
        try:
            if not self._prepared:
                self.prepare_storage()
            engine = self._db_port.get_storage_engine()
            with engine.connect() as conn:
                row = conn.execute(
                    SELECT_VALUE_SQL,
                    {"store_key": key},
                ).first()
        except SQLAlchemyError as exc:
            raise PersistenceReadError(
                f"Could not read key '{key}': {exc}"
            ) from exc
        return None if row is None else row.store_value

    def set(self, key: str, value: str) -> None:
        """Replace the value stored under ``key``.

        Raises:
            PersistenceError: If the write fails.
        """
        try:
            if not self._prepared:
                self.prepare_storage()
            engine = self._db_port.get_storage_engine()
            with engine.begin() as conn:
                conn.execute(DELETE_VALUE_SQL, {"store_key": key})
                conn.execute(
                    INSERT_VALUE_SQL,
                    {"store_key": key, "store_value": value},
                )
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Could not write key '{key}': {exc}"
            ) from exc


class JsonFileKeyValueStore(KeyValueStorePort):
    """Key-value store kept as one JSON object in a file."""

    def __init__(self, path: Path | str) -> None:
        """Initialize the adapter.

        Args:
            path: JSON file holding every key.
        """
        self._path = Path(path)

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None.

        Raises:
            PersistenceReadError: If the file is unreadable or corrupt.
        """
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise PersistenceReadError(
                f"Value under '{key}' in {self._path} is not a string"
            )
        return value

    def set(self, key: str, value: str) -> None:
        """Replace the value stored under ``key``.

        Raises:
            PersistenceError: If the file cannot be read back or written.
        """
        data = self._read_all()
        data[key] = value
        tmp_path = self._path.with_name(f"{self._path.name}.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise PersistenceError(
                f"Could not write {self._path}: {exc}"
            ) from exc

    def _read_all(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceReadError(
                f"Could not read {self._path}: {exc}"
            ) from exc
        if not isinstance(data, dict):
            raise PersistenceReadError(
                f"Storage file {self._path} does not hold a JSON object"
            )
        return data


class InMemoryKeyValueStore(KeyValueStorePort):
    """Dict-backed store; data lasts as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


__all__ = [
    "SqlAlchemyKeyValueStore",
    "JsonFileKeyValueStore",
    "InMemoryKeyValueStore",
]
