"""Unit tests for the /history REST API endpoints."""

import pytest
from fastapi import HTTPException, status
from pytest_mock import MockerFixture

from app.endpoints.history import (
    check_valid_entry_id,
    clear_history_endpoint_handler,
    get_history_endpoint_handler,
    get_history_entry_endpoint_handler,
)
from history.history_store import HistoryStore
from history.storage_error import HistoryStorageError
from models.history_entry import HistoryEntry

UNKNOWN_ID = "123e4567-e89b-12d3-a456-426614174000"


@pytest.fixture(name="store")
def store_fixture(mocker: MockerFixture) -> HistoryStore:
    """Patch configuration to provide history store with two entries."""
    store = HistoryStore()
    store.append(HistoryEntry(prompt="first", code="a = 1", language="python"))
    store.append(HistoryEntry(prompt="second", code="<p/>", language="html"))

    mock_config = mocker.Mock()
    mock_config.is_loaded.return_value = True
    mock_config.history_store = store
    mocker.patch("app.endpoints.history.configuration", mock_config)
    return store


def test_get_history(store: HistoryStore) -> None:
    """Test that entries are returned most recent first."""
    response = get_history_endpoint_handler()
    assert [entry.prompt for entry in response.entries] == ["second", "first"]
    assert response.entries == list(store.list())


def test_get_history_entry(store: HistoryStore) -> None:
    """Test that entry is found by its identification."""
    entry = store.list()[1]
    assert get_history_entry_endpoint_handler(entry.id) is entry


def test_get_history_entry_not_found(store: HistoryStore) -> None:
    """Test that unknown entry is reported as HTTP 404."""
    assert store.find_by_id(UNKNOWN_ID) is None
    with pytest.raises(HTTPException) as e:
        get_history_entry_endpoint_handler(UNKNOWN_ID)
    assert e.value.status_code == status.HTTP_404_NOT_FOUND
    assert e.value.detail == {  # type: ignore
        "response": "History Entry not found",
        "cause": f"History Entry with ID {UNKNOWN_ID} does not exist.",
    }


def test_get_history_entry_invalid_id(store: HistoryStore) -> None:
    """Test that malformed identification is reported as HTTP 400."""
    assert len(store) == 2
    with pytest.raises(HTTPException) as e:
        get_history_entry_endpoint_handler("not-an-id")
    assert e.value.status_code == status.HTTP_400_BAD_REQUEST


def test_check_valid_entry_id() -> None:
    """Test the validation of entry identification."""
    # just call the function, it should not raise an exception
    check_valid_entry_id(UNKNOWN_ID)
    with pytest.raises(HTTPException) as e:
        check_valid_entry_id("abc")
    assert e.value.detail["cause"] == "History entry ID abc is not a valid UUID"  # type: ignore


def test_clear_history(store: HistoryStore) -> None:
    """Test that all entries are removed."""
    response = clear_history_endpoint_handler()
    assert response.removed == 2
    assert len(store) == 0


def test_clear_history_storage_error(
    store: HistoryStore, mocker: MockerFixture
) -> None:
    """Test that storage failure is reported as HTTP 500."""
    mocker.patch.object(
        store.storage, "save", side_effect=HistoryStorageError("disk full")
    )
    with pytest.raises(HTTPException) as e:
        clear_history_endpoint_handler()
    assert e.value.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert e.value.detail == {  # type: ignore
        "response": "Unable to clear history",
        "cause": "disk full",
    }
    assert len(store) == 2


def test_history_configuration_not_loaded(mocker: MockerFixture) -> None:
    """Test that missing configuration is reported."""
    mock_config = mocker.Mock()
    mock_config.is_loaded.return_value = False
    mocker.patch("app.endpoints.history.configuration", mock_config)

    for handler in (get_history_endpoint_handler, clear_history_endpoint_handler):
        with pytest.raises(HTTPException) as e:
            handler()
        assert e.value.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
