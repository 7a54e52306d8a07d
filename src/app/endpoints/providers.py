"""Handler for REST API call to list configured providers."""

import logging
from typing import Any

from fastapi import APIRouter

from configuration import configuration
from models.responses import ProvidersListResponse, ProviderSummary
from utils.endpoints import check_configuration_loaded

logger = logging.getLogger(__name__)
router = APIRouter(tags=["providers"])


providers_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "providers": [
            {
                "id": "huggingface",
                "url": "https://router.huggingface.co/v1/chat/completions",
                "models": ["Qwen/Qwen3-Coder-480B-A35B-Instruct"],
                "priority": 0,
                "auth_required": True,
                "api_key_configured": False,
            }
        ]
    },
    500: {"detail": {"response": "Configuration is not loaded"}},
}


@router.get("/providers", responses=providers_responses)
async def providers_endpoint_handler() -> ProvidersListResponse:
    """
    Handle GET requests to list configured providers.

    Providers are listed in the order they are tried, API keys are never
    returned.
    """
    check_configuration_loaded(configuration)

    providers = sorted(configuration.providers, key=lambda p: p.priority)
    logger.info("Returning %d configured providers", len(providers))
    return ProvidersListResponse(
        providers=[
            ProviderSummary(
                id=provider.id,
                url=str(provider.url),
                models=provider.models,
                priority=provider.priority,
                auth_required=provider.auth_required,
                api_key_configured=provider.api_key is not None,
            )
            for provider in providers
        ]
    )
