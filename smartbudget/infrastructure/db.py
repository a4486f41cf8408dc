"""Database infrastructure for SmartBudget.

This module creates and reuses SQLAlchemy engines for the storage database.
It belongs to the infrastructure layer because it deals with an external
system (SQLite by default, any SQLAlchemy URL otherwise).
"""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from smartbudget.application.ports.database import DatabaseEnginePort


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    SQLite file databases get their parent directory created first.

    Args:
        db_url: Fully qualified database URL.

    Returns:
        Engine: A SQLAlchemy engine with health checks enabled.
    """
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite" and url.database not in (
        None,
        "",
        ":memory:",
    ):
        Path(url.database).expanduser().parent.mkdir(
            parents=True,
            exist_ok=True,
        )
    return create_engine(db_url, pool_pre_ping=True, future=True)


_storage_engines: dict[str, Engine] = {}


def get_storage_engine(db_url: str) -> Engine:
    """Get a cached SQLAlchemy engine for ``db_url``.

    Returns:
        Engine: Lazily initialized engine connected to the storage backend.
    """
    engine = _storage_engines.get(db_url)
    if engine is None:
        engine = _create_engine(db_url)
        _storage_engines[db_url] = engine
    return engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by SQLAlchemy engines."""

    def __init__(self, db_url: str) -> None:
        """Initialize the adapter.

        Args:
            db_url: SQLAlchemy URL of the storage database.
        """
        self._db_url = db_url

    def get_storage_engine(self) -> Engine:
        """Get the engine for the storage database.

        Returns:
            Engine: SQLAlchemy engine connected to the storage backend.
        """
        return get_storage_engine(self._db_url)


__all__ = [
    "get_storage_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
