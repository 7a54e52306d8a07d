"""Abstract class that is parent for all history storage implementations."""

from abc import ABC, abstractmethod

from models.history_entry import HistoryEntry


class HistoryStorage(ABC):
    """Persistence collaborator of the history store.

    Storage works with the whole ordered sequence of entries,
    most-recent-first, never with individual entries.
    """

    @abstractmethod
    def load(self) -> list[HistoryEntry]:
        """Load persisted entries, most-recent-first.

        Raises:
            HistoryStorageError: When stored history can not be read.
        """

    @abstractmethod
    def save(self, entries: list[HistoryEntry]) -> None:
        """Replace persisted entries with given sequence.

        Raises:
            HistoryStorageError: When history can not be written.
        """
