"""JSON file snapshot store."""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog

from ..errors import PersistenceError
from ..state.models import LedgerSnapshot
from .base import SnapshotStore


class JsonFileSnapshotStore(SnapshotStore):
    """Stores the snapshot as one pretty-printed JSON document."""

    name = "json"

    def __init__(self, path: Union[str, Path] = "trading_log.json"):
        self.path = Path(path)
        self.logger = structlog.get_logger("snapshot.store.json")

    def load(self) -> Optional[LedgerSnapshot]:
        if not self.path.exists():
            return None

        try:
            with open(self.path, encoding="utf-8") as f:
                document = json.load(f)
            return LedgerSnapshot.from_dict(document)

        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(
                f"Failed to read snapshot: {e}",
                operation="load",
                target=str(self.path)
            ) from e
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise PersistenceError(
                f"Snapshot document is malformed: {e}",
                operation="load",
                target=str(self.path)
            ) from e

    def save(self, snapshot: LedgerSnapshot) -> None:
        """Write to a temp file in the same directory, then atomically replace."""
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(snapshot.to_dict(), f, indent=2)
            os.replace(tmp_name, self.path)
            tmp_name = None

        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(
                f"Failed to write snapshot: {e}",
                operation="save",
                target=str(self.path)
            ) from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        self.logger.debug(
            "Snapshot saved",
            path=str(self.path),
            trade_count=len(snapshot.trades)
        )
