"""Application ports package."""

from .database import DatabaseEnginePort
from .key_value_store import KeyValueStorePort

__all__ = [
    "DatabaseEnginePort",
    "KeyValueStorePort",
]
