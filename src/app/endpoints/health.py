"""Handlers for health REST API endpoints.

These endpoints are used to check if service is live and prepared to accept
requests.
"""

import logging
from typing import Any

from fastapi import APIRouter, Response, status

from app.state import app_state
from configuration import configuration
from models.responses import LivenessResponse, ReadinessResponse

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["health"])


def check_readiness() -> tuple[bool, str]:
    """
    Check that configuration is loaded and all startup steps succeeded.

    Returns:
        tuple[bool, str]: (is_ready, detailed_reason)
    """
    if not configuration.is_loaded():
        return False, "Configuration not loaded"

    if not app_state.is_fully_initialized:
        initialization_status = app_state.initialization_status
        if initialization_status["errors"]:
            return False, f"Initialization failed: {initialization_status['errors'][0]}"
        failed_checks = [
            check.replace("_", " ").title()
            for check, passed in initialization_status["checks"].items()
            if not passed
        ]
        if failed_checks:
            return False, f"Incomplete initialization: {', '.join(failed_checks)}"
        return False, "Application initialization not complete"

    if not configuration.providers:
        # generation still works, but only offline fallback is used
        return True, "Service ready, no provider configured"

    return True, "Service ready"


get_readiness_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Service is ready",
        "model": ReadinessResponse,
    },
    503: {
        "description": "Service is not ready",
        "model": ReadinessResponse,
    },
}


@router.get("/readiness", responses=get_readiness_responses)
async def readiness_probe_get_method(response: Response) -> ReadinessResponse:
    """
    Return the readiness status of the service.

    Returns 200 when fully ready, 503 when configuration is not loaded or
    any startup step failed.
    """
    logger.info("Response to /readiness endpoint")

    ready, reason = check_readiness()
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(ready=ready, reason=reason)


get_liveness_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Service is alive",
        "model": LivenessResponse,
    },
    # HTTP_503_SERVICE_UNAVAILABLE will never be returned when unreachable
}


@router.get("/liveness", responses=get_liveness_responses)
async def liveness_probe_get_method() -> LivenessResponse:
    """
    Return the liveness status of the service.

    Returns:
        LivenessResponse: Indicates that the service is alive.
    """
    logger.info("Response to /liveness endpoint")

    return LivenessResponse(alive=True)
