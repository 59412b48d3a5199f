"""Ledger snapshot persistence backends."""

from .base import SnapshotStore
from .json_store import JsonFileSnapshotStore
from .memory_store import InMemorySnapshotStore
from .factory import create_store
from .sqlite_store import SqliteSnapshotStore

__all__ = [
    "SnapshotStore",
    "JsonFileSnapshotStore",
    "InMemorySnapshotStore",
    "SqliteSnapshotStore",
    "create_store",
]
