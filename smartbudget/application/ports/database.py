"""Database ports for SmartBudget.

This module defines the application-layer protocol for accessing the
storage engine. Infrastructure implementations provide concrete adapters
that satisfy it.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the storage database engine."""

    def get_storage_engine(self) -> Engine:
        """Get the engine for the storage database.

        Returns:
            Engine: SQLAlchemy engine connected to the storage backend.
        """


__all__ = ["DatabaseEnginePort"]
