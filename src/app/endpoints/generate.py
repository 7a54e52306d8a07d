"""Handler for REST API call to generate code."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status

from configuration import configuration
from generation.errors import AuthError, RequestError
from generation.generator import CodeGenerator
from models.requests import GenerationRequest
from models.responses import (
    BadRequestResponse,
    GenerationResult,
    UnauthorizedResponse,
)
from utils.endpoints import check_configuration_loaded, get_code_generator

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["generate"])


generate_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Generated code",
        "model": GenerationResult,
    },
    400: {
        "description": "Generation request refused by provider",
        "model": BadRequestResponse,
    },
    401: {
        "description": "Missing or rejected provider API key",
        "model": UnauthorizedResponse,
    },
    500: {
        "detail": {
            "response": "Configuration is not loaded",
        }
    },
}


@router.post("/generate", responses=generate_responses)
async def generate_endpoint_handler(
    generation_request: GenerationRequest,
    generator: Annotated[CodeGenerator, Depends(get_code_generator)],
) -> GenerationResult:
    """
    Handle request to the /generate endpoint.

    Generates code for the prompt using configured providers. When no
    provider is available the response is produced by offline fallback and
    flagged as degraded.

    Raises:
        HTTPException:
            - 400 when the request is refused by provider,
            - 401 when provider API key is missing or rejected,
            - 500 if configuration is not loaded.
    """
    check_configuration_loaded(configuration)

    logger.info("Generation request for language %s", generation_request.language)
    try:
        return await generator.generate(generation_request)
    except AuthError as e:
        logger.error("Authentication to provider failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UnauthorizedResponse(cause=str(e)).dump_detail(),
        ) from e
    except RequestError as e:
        logger.error("Generation request refused: %s", e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=BadRequestResponse(cause=str(e)).dump_detail(),
        ) from e
