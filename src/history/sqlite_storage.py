"""History storage that uses SQLite database."""

import sqlite3
from datetime import datetime

from history.storage import HistoryStorage
from history.storage_error import HistoryStorageError
from log import get_logger
from models.config import SQLiteDatabaseConfiguration
from models.history_entry import HistoryEntry
from utils.connection_decorator import connection

logger = get_logger(__name__)


class SQLiteStorage(HistoryStorage):
    """History storage that uses SQLite database.

    History entries are stored in following table:

    ```
         Column      |  Type  | Nullable |
    -----------------+--------+----------+
     position        | int    | not null |
     id              | text   | not null |
     created_at      | text   | not null |
     prompt          | text   | not null |
     code            | text   | not null |
     language        | text   | not null |
    Indexes:
        "history_pkey" PRIMARY KEY (position)
    ```

    Position 0 is the most recent entry, timestamps are stored in ISO-8601
    format.
    """

    CREATE_HISTORY_TABLE = """
        CREATE TABLE IF NOT EXISTS history (
            position    int NOT NULL,
            id          text NOT NULL,
            created_at  text NOT NULL,
            prompt      text NOT NULL,
            code        text NOT NULL,
            language    text NOT NULL,
            PRIMARY KEY(position)
        );
        """

    SELECT_HISTORY_STATEMENT = """
        SELECT id, created_at, prompt, code, language
          FROM history
         ORDER BY position
        """

    DELETE_HISTORY_STATEMENT = """
        DELETE FROM history
        """

    INSERT_HISTORY_ENTRY_STATEMENT = """
        INSERT INTO history(position, id, created_at, prompt, code, language)
        VALUES (?, ?, ?, ?, ?, ?)
        """

    def __init__(self, config: SQLiteDatabaseConfiguration) -> None:
        """Create a new instance of SQLite storage."""
        self.sqlite_config = config

        # initialize connection to DB
        self.connect()

    # pylint: disable=W0201
    def connect(self) -> None:
        """Initialize connection to database."""
        logger.info("Connecting to storage")
        # make sure the connection will have known state
        # even if SQLite is not alive
        self.connection = None
        config = self.sqlite_config
        try:
            self.connection = sqlite3.connect(
                database=config.db_path, check_same_thread=False
            )
            self.initialize_storage()
        except sqlite3.Error as e:
            if self.connection is not None:
                self.connection.close()
                self.connection = None
            logger.exception("Error initializing SQLite storage:\n%s", e)
            raise HistoryStorageError(f"Unable to open SQLite storage: {e}") from e

    def connected(self) -> bool:
        """Check if connection to storage is alive."""
        if self.connection is None:
            logger.warning("Not connected, need to reconnect later")
            return False
        cursor = None
        try:
            cursor = self.connection.cursor()
            cursor.execute("SELECT 1")
            return True
        except sqlite3.Error as e:
            logger.error("Disconnected from storage: %s", e)
            return False
        finally:
            if cursor is not None:
                try:
                    cursor.close()
                except sqlite3.Error:
                    logger.warning("Unable to close cursor")

    def initialize_storage(self) -> None:
        """Create the history table when it does not exist."""
        if self.connection is None:
            logger.error("Storage is disconnected")
            raise HistoryStorageError("initialize_storage: storage is disconnected")

        cursor = self.connection.cursor()
        logger.info("Initializing table for history")
        cursor.execute(SQLiteStorage.CREATE_HISTORY_TABLE)
        cursor.close()
        self.connection.commit()

    @connection
    def load(self) -> list[HistoryEntry]:
        """Load entries ordered from the most recent one."""
        if self.connection is None:
            logger.error("Storage is disconnected")
            raise HistoryStorageError("load: storage is disconnected")

        try:
            cursor = self.connection.cursor()
            cursor.execute(self.SELECT_HISTORY_STATEMENT)
            rows = cursor.fetchall()
            cursor.close()
        except sqlite3.Error as e:
            raise HistoryStorageError(f"Unable to read history: {e}") from e

        result = []
        for row in rows:
            entry = HistoryEntry(
                id=row[0],
                timestamp=datetime.fromisoformat(row[1]),
                prompt=row[2],
                code=row[3],
                language=row[4],
            )
            result.append(entry)
        return result

    @connection
    def save(self, entries: list[HistoryEntry]) -> None:
        """Replace stored entries in one transaction."""
        if self.connection is None:
            logger.error("Storage is disconnected")
            raise HistoryStorageError("save: storage is disconnected")

        rows = [
            (
                position,
                entry.id,
                entry.timestamp.isoformat(),
                entry.prompt,
                entry.code,
                entry.language,
            )
            for position, entry in enumerate(entries)
        ]
        try:
            with self.connection:
                self.connection.execute(self.DELETE_HISTORY_STATEMENT)
                self.connection.executemany(self.INSERT_HISTORY_ENTRY_STATEMENT, rows)
        except sqlite3.Error as e:
            raise HistoryStorageError(f"Unable to write history: {e}") from e
