"""SQLite snapshot store."""

import json
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

import structlog

from ..errors import PersistenceError
from ..state.models import LedgerSnapshot
from .base import SnapshotStore

SNAPSHOT_KEY = "ledger"


class SqliteSnapshotStore(SnapshotStore):
    """Keeps the snapshot document in a single keyed row."""

    name = "sqlite"

    def __init__(self, db_path: Union[str, Path] = "trading_state.db", key: str = SNAPSHOT_KEY):
        self.db_path = Path(db_path)
        self.key = key
        self.logger = structlog.get_logger("snapshot.store.sqlite")
        self._lock = threading.Lock()

        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema."""
        try:
            with self._get_connection() as conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS snapshots (
                        key TEXT PRIMARY KEY,
                        document TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                """)
                conn.commit()
        except sqlite3.Error as e:
            raise PersistenceError(
                f"Failed to initialize snapshot database: {e}",
                operation="init",
                target=str(self.db_path)
            ) from e

    @contextmanager
    def _get_connection(self):
        """Get database connection with proper error handling."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            conn.row_factory = sqlite3.Row
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error("Database error", error=str(e), db_path=str(self.db_path))
            raise
        finally:
            if conn:
                conn.close()

    def load(self) -> Optional[LedgerSnapshot]:
        try:
            with self._get_connection() as conn:
                row = conn.execute(
                    "SELECT document FROM snapshots WHERE key = ?", (self.key,)
                ).fetchone()

            if row is None:
                return None
            return LedgerSnapshot.from_dict(json.loads(row["document"]))

        except (sqlite3.Error, json.JSONDecodeError) as e:
            raise PersistenceError(
                f"Failed to read snapshot: {e}",
                operation="load",
                target=str(self.db_path)
            ) from e
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise PersistenceError(
                f"Snapshot document is malformed: {e}",
                operation="load",
                target=str(self.db_path)
            ) from e

    def save(self, snapshot: LedgerSnapshot) -> None:
        with self._lock:
            try:
                with self._get_connection() as conn:
                    conn.execute("""
                        INSERT OR REPLACE INTO snapshots (key, document, updated_at)
                        VALUES (?, ?, ?)
                    """, (
                        self.key,
                        json.dumps(snapshot.to_dict()),
                        datetime.now(timezone.utc).isoformat()
                    ))
                    conn.commit()

            except sqlite3.Error as e:
                raise PersistenceError(
                    f"Failed to write snapshot: {e}",
                    operation="save",
                    target=str(self.db_path)
                ) from e

        self.logger.debug(
            "Snapshot saved",
            db_path=str(self.db_path),
            trade_count=len(snapshot.trades)
        )

