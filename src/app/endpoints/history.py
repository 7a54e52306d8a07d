"""Handlers for REST API calls to browse and clear generation history."""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, status

from configuration import configuration
from history.storage_error import HistoryStorageError
from models.history_entry import HistoryEntry
from models.responses import (
    HistoryClearedResponse,
    HistoryResponse,
    NotFoundResponse,
)
from utils.endpoints import check_configuration_loaded
from utils.suid import check_suid

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["history"])


history_list_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "entries": [
            {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "prompt": "Landing page for a bakery",
                "code": "<!DOCTYPE html>...",
                "language": "html",
                "timestamp": "2024-01-01T00:00:00Z",
            }
        ]
    },
}

history_entry_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "id": "123e4567-e89b-12d3-a456-426614174000",
        "prompt": "Landing page for a bakery",
        "code": "<!DOCTYPE html>...",
        "language": "html",
        "timestamp": "2024-01-01T00:00:00Z",
    },
    400: {
        "detail": {
            "response": "Invalid history entry ID format",
            "cause": "History entry ID abc is not a valid UUID",
        }
    },
    404: {
        "description": "History entry not found",
        "model": NotFoundResponse,
    },
}

history_clear_responses: dict[int | str, dict[str, Any]] = {
    200: {"removed": 12},
    500: {
        "detail": {
            "response": "Unable to clear history",
            "cause": "Unable to write history file /tmp/history.json",
        }
    },
}


@router.get("/history", responses=history_list_responses)
def get_history_endpoint_handler() -> HistoryResponse:
    """Handle request to retrieve generation history, most recent first."""
    check_configuration_loaded(configuration)

    entries = configuration.history_store.list()
    logger.info("Returning %d history entries", len(entries))
    return HistoryResponse(entries=list(entries))


@router.get("/history/{entry_id}", responses=history_entry_responses)
def get_history_entry_endpoint_handler(entry_id: str) -> HistoryEntry:
    """Handle request to retrieve one history entry by ID."""
    check_configuration_loaded(configuration)
    check_valid_entry_id(entry_id)

    entry = configuration.history_store.find_by_id(entry_id)
    if entry is None:
        logger.warning("History entry %s not found", entry_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=NotFoundResponse(
                resource="history entry", resource_id=entry_id
            ).dump_detail(),
        )
    return entry


@router.delete("/history", responses=history_clear_responses)
def clear_history_endpoint_handler() -> HistoryClearedResponse:
    """Handle request to remove all history entries."""
    check_configuration_loaded(configuration)

    try:
        removed = configuration.history_store.clear()
    except HistoryStorageError as e:
        logger.error("Unable to clear history: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"response": "Unable to clear history", "cause": str(e)},
        ) from e
    return HistoryClearedResponse(removed=removed)


def check_valid_entry_id(entry_id: str) -> None:
    """Check validity of history entry ID format."""
    if not check_suid(entry_id):
        logger.error("Invalid history entry ID format: %s", entry_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "response": "Invalid history entry ID format",
                "cause": f"History entry ID {entry_id} is not a valid UUID",
            },
        )
