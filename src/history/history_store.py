"""Bounded log of past generations, most-recent-first."""

import threading
from typing import Optional

import constants
from history.noop_storage import NoopStorage
from history.storage import HistoryStorage
from log import get_logger
from models.history_entry import HistoryEntry

logger = get_logger(__name__)


class HistoryStore:
    """Capacity bounded history of generations.

    New entries are put in front, the oldest entries are dropped once the
    capacity is reached. Mutations are serialized; readers always get an
    immutable snapshot, either the sequence before a mutation or the one
    after it, never a partial one.

    Every mutation is written through to the storage collaborator.
    """

    def __init__(
        self,
        max_entries: int = constants.DEFAULT_HISTORY_MAX_ENTRIES,
        storage: Optional[HistoryStorage] = None,
    ) -> None:
        """Initialize the store and load persisted entries.

        Args:
            max_entries: Capacity of the store.
            storage: Persistence collaborator, nothing is persisted when
                not provided.

        Raises:
            ValueError: When capacity is not positive.
            HistoryStorageError: When persisted history can not be loaded.
        """
        if max_entries < 1:
            raise ValueError("History capacity must be positive")
        self.max_entries = max_entries
        self.storage = storage if storage is not None else NoopStorage()
        self._lock = threading.Lock()
        self._entries: tuple[HistoryEntry, ...] = tuple(
            self.storage.load()[:max_entries]
        )
        logger.info("History loaded with %d entries", len(self._entries))

    def append(self, entry: HistoryEntry) -> None:
        """Put entry in front of history, evicting the oldest entries."""
        with self._lock:
            entries = (entry, *self._entries)[: self.max_entries]
            self.storage.save(list(entries))
            self._entries = entries
        logger.debug("History entry %s appended", entry.id)

    def list(self) -> tuple[HistoryEntry, ...]:
        """Return snapshot of all entries, most-recent-first."""
        return self._entries

    def find_by_id(self, entry_id: str) -> Optional[HistoryEntry]:
        """Return entry with given identification, None when not found."""
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def clear(self) -> int:
        """Remove all entries.

        Returns:
            Number of removed entries.
        """
        with self._lock:
            removed = len(self._entries)
            self.storage.save([])
            self._entries = ()
        logger.info("History cleared, %d entries removed", removed)
        return removed

    def __len__(self) -> int:
        """Return number of entries."""
        return len(self._entries)
