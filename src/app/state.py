"""Application state tracking used for readiness reporting."""

import logging
from typing import Any, Optional

from generation.generator import CodeGenerator

logger = logging.getLogger("app.state")


class ApplicationState:
    """Track application initialization state for readiness reporting."""

    def __init__(self) -> None:
        """Initialize state with all startup checks pending."""
        self._initialization_complete = False
        self._initialization_errors: list[str] = []
        self._startup_checks: dict[str, bool] = {
            "configuration_loaded": False,
            "http_session_initialized": False,
            "history_loaded": False,
            "code_generator_initialized": False,
        }
        self.code_generator: Optional[CodeGenerator] = None

    def mark_check_complete(
        self, check_name: str, success: bool, error_message: Optional[str] = None
    ) -> None:
        """Mark a startup check as complete."""
        if check_name not in self._startup_checks:
            logger.warning("Unknown startup check: %s", check_name)
            return
        self._startup_checks[check_name] = success
        if success:
            logger.info("Initialization check passed: %s", check_name)
            return
        if error_message:
            self._initialization_errors.append(f"{check_name}: {error_message}")
            logger.error(
                "Initialization check failed: %s: %s", check_name, error_message
            )
        else:
            logger.error("Initialization check failed: %s", check_name)

    def mark_initialization_complete(self) -> None:
        """Mark the entire initialization as complete."""
        self._initialization_complete = True
        logger.info("Application initialization marked as complete")

    @property
    def is_fully_initialized(self) -> bool:
        """Check if application is fully initialized and ready."""
        return self._initialization_complete and all(self._startup_checks.values())

    @property
    def initialization_status(self) -> dict[str, Any]:
        """Get detailed initialization status."""
        return {
            "complete": self._initialization_complete,
            "checks": self._startup_checks.copy(),
            "errors": self._initialization_errors.copy(),
        }


# Global application state instance
app_state = ApplicationState()
