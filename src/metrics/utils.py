"""Utility functions for metrics handling."""

import metrics
from log import get_logger
from models.config import ProviderConfiguration

logger = get_logger(__name__)


def setup_provider_metrics(providers: list[ProviderConfiguration]) -> None:
    """Publish configured provider/model combinations.

    The gauge value is the priority of the provider, models of providers
    accepting any model are published under "*" label.
    """
    logger.info("Setting up provider metrics")
    for provider in providers:
        for model in provider.models or ["*"]:
            metrics.provider_model_configuration.labels(provider.id, model).set(
                provider.priority
            )
    logger.info("Provider metrics setup complete")
