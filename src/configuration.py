"""Configuration loader."""

import logging
import os
import re
from typing import Any, Optional

import yaml

from history.history_store import HistoryStore
from history.storage_factory import HistoryStorageFactory
from models.config import (
    Configuration,
    ContextConfiguration,
    Customization,
    GenerationCacheConfiguration,
    HistoryConfiguration,
    ProviderConfiguration,
    RouterConfiguration,
    ServiceConfiguration,
)

logger = logging.getLogger(__name__)

# ${env.VARIABLE} or ${env.VARIABLE:=default}
ENV_VAR_PATTERN = re.compile(
    r"\$\{env\.(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::=(?P<default>[^}]*))?\}"
)


class LogicError(Exception):
    """Error in application logic."""


class EnvVarError(Exception):
    """Referenced environment variable is not set and has no default."""

    def __init__(self, var_name: str, path: str = "") -> None:
        """Initialize the error with variable name and configuration path."""
        self.var_name = var_name
        self.path = path
        super().__init__(
            f"Environment variable '{var_name}' not set or empty"
            + (f" at {path}" if path else "")
        )


def replace_env_vars(config: Any, path: str = "") -> Any:
    """Replace ${env.VAR} placeholders in configuration values.

    Placeholders may provide default value with `${env.VAR:=default}` syntax.
    A value consisting of placeholder only that resolves to empty string
    becomes None.

    Raises:
        EnvVarError: When variable is not set and no default is given.
    """
    if isinstance(config, dict):
        return {
            key: replace_env_vars(value, f"{path}.{key}" if path else str(key))
            for key, value in config.items()
        }
    if isinstance(config, list):
        return [
            replace_env_vars(value, f"{path}[{i}]") for i, value in enumerate(config)
        ]
    if not isinstance(config, str):
        return config

    def substitute(match: re.Match) -> str:
        name = match.group("name")
        value = os.environ.get(name)
        if value:
            return value
        default = match.group("default")
        if default is None:
            raise EnvVarError(name, path)
        return default

    result = ENV_VAR_PATTERN.sub(substitute, config)
    if result == "" and ENV_VAR_PATTERN.fullmatch(config):
        return None
    return result


class AppConfig:
    """Singleton class to load and store the configuration."""

    _instance = None

    def __new__(cls, *args: Any, **kwargs: Any) -> "AppConfig":
        """Create a new instance of the class."""
        if not isinstance(cls._instance, cls):
            cls._instance = super().__new__(cls, *args, **kwargs)
        return cls._instance

    def __init__(self) -> None:
        """Initialize the class instance."""
        self._configuration: Optional[Configuration] = None
        self._history_store: Optional[HistoryStore] = None

    def load_configuration(self, filename: str) -> None:
        """Load configuration from YAML file."""
        with open(filename, encoding="utf-8") as fin:
            config_dict = yaml.safe_load(fin)
            config_dict = replace_env_vars(config_dict)
            logger.info("Loaded configuration from %s", filename)
            self.init_from_dict(config_dict)

    def init_from_dict(self, config_dict: dict[Any, Any]) -> None:
        """Initialize configuration from a dictionary."""
        self._configuration = Configuration(**config_dict)
        self._history_store = None

    def is_loaded(self) -> bool:
        """Check if configuration has been loaded."""
        return self._configuration is not None

    @property
    def configuration(self) -> Configuration:
        """Return the whole configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration

    @property
    def service_configuration(self) -> ServiceConfiguration:
        """Return service configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.service

    @property
    def providers(self) -> list[ProviderConfiguration]:
        """Return configured code generation providers."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.providers

    @property
    def router_configuration(self) -> RouterConfiguration:
        """Return provider router configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.router

    @property
    def context_configuration(self) -> ContextConfiguration:
        """Return context gathering configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.context

    @property
    def generation_cache_configuration(self) -> GenerationCacheConfiguration:
        """Return generation cache configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.generation_cache

    @property
    def history_configuration(self) -> HistoryConfiguration:
        """Return history configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.history

    @property
    def customization(self) -> Optional[Customization]:
        """Return customization configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.customization

    @property
    def history_store(self) -> HistoryStore:
        """Return the history store, it is created on first access."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        if self._history_store is None:
            history_config = self._configuration.history
            self._history_store = HistoryStore(
                history_config.max_entries,
                HistoryStorageFactory.history_storage(history_config),
            )
        return self._history_store


configuration: AppConfig = AppConfig()
