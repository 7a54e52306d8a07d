"""Models for REST API responses."""

from typing import Optional

from pydantic import BaseModel, Field

from models.history_entry import HistoryEntry


class GenerationResult(BaseModel):
    """Model representing the outcome of one code generation.

    Attributes:
        code: Generated code extracted from the model reply.
        language: Target language of the code.
        explanation: Optional prose that preceded the code in the reply.
        provider_used: Identification of the provider that produced the reply.
        model_used: Model that produced the reply.
        from_cache: Whether the result was shared from another identical request.
        degraded: Whether the result was produced by the offline fallback.

    Example:
        ```python
        result = GenerationResult(
            code="print('hello')",
            language="python",
            provider_used="huggingface",
            model_used="Qwen/Qwen3-Coder-480B-A35B-Instruct",
        )
        ```
    """

    code: str = Field(
        description="Generated code",
        examples=["<!DOCTYPE html>\n<html>...</html>"],
    )

    language: str = Field(
        description="Target language of the code",
        examples=["html", "python"],
    )

    explanation: Optional[str] = Field(
        None,
        description="Prose that preceded the code in the model reply",
        examples=["Here is a simple landing page:"],
    )

    provider_used: str = Field(
        description="Provider that produced the reply",
        examples=["huggingface", "offline"],
    )

    model_used: str = Field(
        description="Model that produced the reply",
        examples=["Qwen/Qwen3-Coder-480B-A35B-Instruct"],
    )

    from_cache: bool = Field(
        False,
        description="Whether the result was shared with an identical request",
    )

    degraded: bool = Field(
        False,
        description="Whether the result was produced without any live provider",
    )

    # provides examples for /docs endpoint
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "def add(a: int, b: int) -> int:\n    return a + b",
                    "language": "python",
                    "explanation": None,
                    "provider_used": "huggingface",
                    "model_used": "Qwen/Qwen3-Coder-480B-A35B-Instruct",
                    "from_cache": False,
                    "degraded": False,
                }
            ]
        }
    }


class HistoryResponse(BaseModel):
    """Model representing generation history, most recent entry first."""

    entries: list[HistoryEntry] = Field(
        default_factory=list,
        description="History entries, most recent first",
    )


class HistoryClearedResponse(BaseModel):
    """Model representing a response to history clearing request."""

    removed: int = Field(
        description="Number of removed history entries",
        examples=[12],
    )


class ProviderSummary(BaseModel):
    """Model representing one configured provider.

    The API key is never part of the summary, only the information whether
    it is configured.
    """

    id: str = Field(description="Provider identification", examples=["huggingface"])
    url: str = Field(
        description="Chat completions endpoint",
        examples=["https://router.huggingface.co/v1/chat/completions"],
    )
    models: list[str] = Field(
        description="Models served by the provider, empty for any model",
        examples=[["Qwen/Qwen3-Coder-480B-A35B-Instruct"]],
    )
    priority: int = Field(description="Provider priority, lower first", examples=[0])
    auth_required: bool = Field(description="Whether the provider requires a key")
    api_key_configured: bool = Field(
        description="Whether the service has its own key for the provider"
    )


class ProvidersListResponse(BaseModel):
    """Model representing a response to providers request."""

    providers: list[ProviderSummary] = Field(
        description="Configured providers in the order they are tried",
    )


class InfoResponse(BaseModel):
    """Model representing a response to an info request.

    Attributes:
        name: Service name.
        service_version: Service version.

    Example:
        ```python
        info_response = InfoResponse(
            name="AnyCoder",
            service_version="1.0.0",
        )
        ```
    """

    name: str = Field(
        description="Service name",
        examples=["AnyCoder"],
    )

    service_version: str = Field(
        description="Service version",
        examples=["0.1.0", "0.2.0", "1.0.0"],
    )

    # provides examples for /docs endpoint
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "AnyCoder",
                    "service_version": "1.0.0",
                }
            ]
        }
    }


class ReadinessResponse(BaseModel):
    """Model representing response to a readiness request.

    Attributes:
        ready: If service is ready.
        reason: The reason for the readiness.
    """

    ready: bool = Field(
        ...,
        description="Flag indicating if service is ready",
        examples=[True, False],
    )

    reason: str = Field(
        ...,
        description="The reason for the readiness",
        examples=["Service is ready"],
    )


class LivenessResponse(BaseModel):
    """Model representing a response to a liveness request."""

    alive: bool = Field(
        ...,
        description="Flag indicating that the app is alive",
        examples=[True, False],
    )


class DetailModel(BaseModel):
    """Nested detail model for error responses."""

    response: str = Field(..., description="Short summary of the error")
    cause: str = Field(..., description="Detailed explanation of what caused the error")


class AbstractErrorResponse(BaseModel):
    """Base class for all error responses.

    Contains a nested `detail` field.
    """

    detail: DetailModel

    def dump_detail(self) -> dict:
        """Return dict in FastAPI HTTPException format."""
        return self.detail.model_dump()


class BadRequestResponse(AbstractErrorResponse):
    """400 Bad Request - Provider refused the request."""

    def __init__(self, cause: str):
        """Initialize a BadRequestResponse for requests refused upstream."""
        super().__init__(
            detail=DetailModel(response="Invalid generation request", cause=cause)
        )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "detail": {
                        "response": "Invalid generation request",
                        "cause": "huggingface: The requested model is not supported",
                    }
                }
            ]
        }
    }


class UnauthorizedResponse(AbstractErrorResponse):
    """401 Unauthorized - Missing or invalid provider credentials."""

    def __init__(self, cause: str):
        """Initialize an UnauthorizedResponse when provider authentication fails."""
        super().__init__(
            detail=DetailModel(
                response="Authentication failed. Please provide a valid API key.",
                cause=cause,
            )
        )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "detail": {
                        "response": "Authentication failed. Please provide a valid API key.",
                        "cause": "huggingface: HTTP 401",
                    }
                }
            ]
        }
    }


class NotFoundResponse(AbstractErrorResponse):
    """404 Not Found - Resource does not exist."""

    def __init__(self, resource: str, resource_id: str):
        """Initialize a NotFoundResponse when a resource cannot be located."""
        super().__init__(
            detail=DetailModel(
                response=f"{resource.title()} not found",
                cause=f"{resource.title()} with ID {resource_id} does not exist.",
            )
        )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "detail": {
                        "response": "History Entry not found",
                        "cause": "History Entry with ID 123e4567-e89b-12d3-a456-426614174000 does not exist.",  # pylint: disable=line-too-long
                    }
                }
            ]
        }
    }
