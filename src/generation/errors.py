"""Errors raised while talking to code generation providers."""


class GenerationError(Exception):
    """Base class for provider errors.

    Attributes:
        provider_id: Provider that raised the error, when known.
        status_code: HTTP status code returned by the provider, when known.
    """

    def __init__(
        self,
        message: str,
        provider_id: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize the error with the message and upstream details."""
        super().__init__(message)
        self.message = message
        self.provider_id = provider_id
        self.status_code = status_code

    def __str__(self) -> str:
        """Return message prefixed by provider identification."""
        if self.provider_id is None:
            return self.message
        return f"{self.provider_id}: {self.message}"


class AuthError(GenerationError):
    """Credentials are missing or rejected by the provider (HTTP 401/403)."""


class RequestError(GenerationError):
    """Provider refused the request itself (HTTP 4xx other than 401/403)."""


class TransientError(GenerationError):
    """Server error, transport failure or timeout; worth trying elsewhere."""


class ProtocolError(GenerationError):
    """Provider answered with 2xx, but the payload could not be understood."""
