"""In-process snapshot store."""

import json
from typing import Optional

from .base import SnapshotStore
from ..state.models import LedgerSnapshot


class InMemorySnapshotStore(SnapshotStore):
    """Keeps the serialized snapshot in memory, mirroring a real store's round trip."""

    name = "memory"

    def __init__(self):
        self._document: Optional[str] = None
        self.save_count = 0

    def load(self) -> Optional[LedgerSnapshot]:
        if self._document is None:
            return None
        return LedgerSnapshot.from_dict(json.loads(self._document))

    def save(self, snapshot: LedgerSnapshot) -> None:
        self._document = json.dumps(snapshot.to_dict())
        self.save_count += 1
