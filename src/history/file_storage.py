"""History storage that keeps entries in JSON document."""

import json
import os
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from history.storage import HistoryStorage
from history.storage_error import HistoryStorageError
from log import get_logger
from models.config import FileStorageConfiguration
from models.history_entry import HistoryEntry

logger = get_logger(__name__)

entries_adapter = TypeAdapter(list[HistoryEntry])


class FileStorage(HistoryStorage):
    """History storage backed by JSON file.

    The file contains a list of entries, most-recent-first, with timestamps
    in ISO-8601 format. The file is replaced atomically on every save.
    """

    def __init__(self, config: FileStorageConfiguration) -> None:
        """Create a new instance of file storage."""
        self.path = Path(config.path)

    def load(self) -> list[HistoryEntry]:
        """Load entries from the file, missing file means empty history."""
        if not self.path.exists():
            logger.info("History file %s does not exist yet", self.path)
            return []
        try:
            with open(self.path, encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            raise HistoryStorageError(
                f"Unable to read history file {self.path}: {e}"
            ) from e
        if not content.strip():
            return []
        try:
            return entries_adapter.validate_json(content)
        except ValidationError as e:
            raise HistoryStorageError(
                f"History file {self.path} is not valid: {e}"
            ) from e

    def save(self, entries: list[HistoryEntry]) -> None:
        """Write entries to the file."""
        data = [entry.model_dump(mode="json") for entry in entries]
        temporary = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temporary, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(temporary, self.path)
        except OSError as e:
            raise HistoryStorageError(
                f"Unable to write history file {self.path}: {e}"
            ) from e
        logger.debug("%d history entries written to %s", len(entries), self.path)
