"""Base class for ledger snapshot stores."""

from abc import ABC, abstractmethod
from typing import Optional

from ..state.models import LedgerSnapshot


class SnapshotStore(ABC):
    """
    Durable load/save of the whole ledger snapshot.

    save() always overwrites the previous snapshot entirely. Both methods
    raise PersistenceError on I/O or decoding failure; load() returns None
    when nothing has been saved yet.
    """

    name = "snapshot"

    @abstractmethod
    def load(self) -> Optional[LedgerSnapshot]:
        """Return the last saved snapshot, or None if there is none."""

    @abstractmethod
    def save(self, snapshot: LedgerSnapshot) -> None:
        """Replace the stored snapshot."""
