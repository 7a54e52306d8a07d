"""History storage that does not persist anything."""

from history.storage import HistoryStorage
from models.history_entry import HistoryEntry


class NoopStorage(HistoryStorage):
    """History is kept in memory only and it is lost on restart."""

    def load(self) -> list[HistoryEntry]:
        """Return empty history."""
        return []

    def save(self, entries: list[HistoryEntry]) -> None:
        """Do nothing."""
