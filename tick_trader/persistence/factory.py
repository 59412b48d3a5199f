"""Snapshot store selection from configuration."""

from ..config.defaults import PersistenceParams
from .base import SnapshotStore
from .json_store import JsonFileSnapshotStore
from .memory_store import InMemorySnapshotStore
from .sqlite_store import SqliteSnapshotStore


def create_store(params: PersistenceParams) -> SnapshotStore:
    """Build the snapshot store selected by configuration."""
    if params.backend == "sqlite":
        return SqliteSnapshotStore(params.path)
    if params.backend == "memory":
        return InMemorySnapshotStore()
    return JsonFileSnapshotStore(params.path)
