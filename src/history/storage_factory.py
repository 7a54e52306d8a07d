"""History storage factory class."""

import constants
from history.file_storage import FileStorage
from history.noop_storage import NoopStorage
from history.sqlite_storage import SQLiteStorage
from history.storage import HistoryStorage
from log import get_logger
from models.config import HistoryConfiguration

logger = get_logger(__name__)


# pylint: disable=R0903
class HistoryStorageFactory:
    """History storage factory class."""

    @staticmethod
    def history_storage(config: HistoryConfiguration) -> HistoryStorage:
        """Create an instance of HistoryStorage based on loaded configuration.

        Returns:
            An instance of `HistoryStorage` (either `FileStorage`,
            `SQLiteStorage` or `NoopStorage`).
        """
        logger.info("Creating history storage of type %s", config.storage)
        match config.storage:
            case constants.HISTORY_STORAGE_NOOP:
                return NoopStorage()
            case constants.HISTORY_STORAGE_FILE:
                if config.file is not None:
                    return FileStorage(config.file)
                raise ValueError("Expecting configuration for file storage")
            case constants.HISTORY_STORAGE_SQLITE:
                if config.sqlite is not None:
                    return SQLiteStorage(config.sqlite)
                raise ValueError("Expecting configuration for SQLite storage")
            case _:
                raise ValueError(
                    f"Invalid history storage type: {config.storage}. "
                    f"Use '{constants.HISTORY_STORAGE_FILE}', "
                    f"'{constants.HISTORY_STORAGE_SQLITE}' or "
                    f"'{constants.HISTORY_STORAGE_NOOP}' options."
                )
