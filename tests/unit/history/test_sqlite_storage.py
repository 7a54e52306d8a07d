"""Unit tests for functions defined in src/history/sqlite_storage.py."""

import sqlite3
from datetime import UTC, datetime
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from history.sqlite_storage import SQLiteStorage
from history.storage_error import HistoryStorageError
from models.config import SQLiteDatabaseConfiguration
from models.history_entry import HistoryEntry


def create_storage(tmp_path: Path) -> SQLiteStorage:
    """Create SQLite storage in temporary directory."""
    return SQLiteStorage(SQLiteDatabaseConfiguration(db_path=str(tmp_path / "h.db")))


def test_create_storage(tmp_path: Path) -> None:
    """Test that storage is connected and initialized."""
    storage = create_storage(tmp_path)
    assert storage.connected()
    assert storage.load() == []


def test_connect_failure(tmp_path: Path) -> None:
    """Test that storage which can not be opened raises storage error."""
    config = SQLiteDatabaseConfiguration(db_path=str(tmp_path / "missing" / "h.db"))
    with pytest.raises(HistoryStorageError, match="Unable to open SQLite storage"):
        SQLiteStorage(config)


def test_save_and_load(tmp_path: Path) -> None:
    """Test that saved entries are loaded back with their order and timestamps."""
    entries = [
        HistoryEntry(
            prompt="second",
            code="b = 2",
            language="python",
            timestamp=datetime(2024, 5, 2, tzinfo=UTC),
        ),
        HistoryEntry(
            prompt="first",
            code="a = 1",
            language="python",
            timestamp=datetime(2024, 5, 1, tzinfo=UTC),
        ),
    ]
    storage = create_storage(tmp_path)
    storage.save(entries)

    assert create_storage(tmp_path).load() == entries


def test_save_replaces_entries(tmp_path: Path) -> None:
    """Test that save replaces the whole stored sequence."""
    storage = create_storage(tmp_path)
    storage.save([HistoryEntry(prompt="old", code="", language="css")])
    new = HistoryEntry(prompt="new", code="a {}", language="css")
    storage.save([new])

    assert storage.load() == [new]

    storage.save([])
    assert storage.load() == []


def test_reconnect(tmp_path: Path) -> None:
    """Test that closed connection is reopened on next operation."""
    storage = create_storage(tmp_path)
    entry = HistoryEntry(prompt="p", code="c", language="html")
    storage.save([entry])

    storage.connection.close()
    assert not storage.connected()
    assert storage.load() == [entry]
    assert storage.connected()


def test_disconnected_storage(tmp_path: Path) -> None:
    """Test that initialization of disconnected storage fails."""
    storage = create_storage(tmp_path)
    storage.connection = None
    assert not storage.connected()
    with pytest.raises(HistoryStorageError, match="storage is disconnected"):
        storage.initialize_storage()


def test_load_error(tmp_path: Path, mocker: MockerFixture) -> None:
    """Test that database error on read is reported as storage error."""
    storage = create_storage(tmp_path)
    connection = mocker.MagicMock()
    connection.cursor.return_value.execute.side_effect = [
        None,
        sqlite3.OperationalError("no such table"),
    ]
    storage.connection = connection

    with pytest.raises(HistoryStorageError, match="Unable to read history"):
        storage.load()
