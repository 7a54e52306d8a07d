"""Utility functions for endpoint handlers."""

from fastapi import HTTPException, status

from app.state import app_state
from configuration import AppConfig
from generation.generator import CodeGenerator


def check_configuration_loaded(config: AppConfig) -> None:
    """
    Ensure the application configuration object is present.

    Raises:
        HTTPException: HTTP 500 Internal Server Error with detail `{"response":
        "Configuration is not loaded"}` when configuration is not loaded.
    """
    if config is None or not config.is_loaded():
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"response": "Configuration is not loaded"},
        )


def get_code_generator() -> CodeGenerator:
    """
    Return code generator created on service startup.

    Raises:
        HTTPException: HTTP 503 Service Unavailable when the generator has
        not been initialised yet.
    """
    if app_state.code_generator is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "response": "Service is not ready",
                "cause": "Code generator is not initialised",
            },
        )
    return app_state.code_generator
