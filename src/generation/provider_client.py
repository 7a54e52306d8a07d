"""Client for one OpenAI compatible chat completion provider."""

import asyncio
import json
from typing import Any, Optional

import aiohttp
from pydantic import BaseModel

from generation.errors import AuthError, ProtocolError, RequestError, TransientError
from log import get_logger
from models.config import ProviderConfiguration
from utils.types import Messages

logger = get_logger(__name__)


class CompletionResult(BaseModel):
    """Raw reply returned by a provider.

    Attributes:
        content: Text of the first choice message.
        provider_id: Provider that produced the reply.
        model_id: Model that produced the reply.
    """

    content: str
    provider_id: str
    model_id: str


def extract_error_message(payload: Any) -> Optional[str]:
    """Extract human readable message from provider error payload."""
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    if isinstance(error, str):
        return error
    detail = payload.get("detail")
    if isinstance(detail, str):
        return detail
    return None


def extract_content(payload: Any) -> str:
    """Extract `choices[0].message.content` from completion payload.

    Raises:
        ProtocolError: When the payload does not have expected shape.
    """
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ProtocolError(f"Unexpected completion payload: {e!r}") from e
    if not isinstance(content, str):
        raise ProtocolError("Completion message content is not a text")
    return content


class ProviderClient:
    """Performs chat completion calls against single upstream provider.

    Outcomes are mapped to typed errors:

    - HTTP 401/403: `AuthError`
    - other HTTP 4xx: `RequestError`
    - HTTP 5xx, transport failure, timeout: `TransientError`
    - 2xx with unparsable payload: `ProtocolError`
    """

    def __init__(
        self,
        config: ProviderConfiguration,
        session: aiohttp.ClientSession,
        max_tokens: int,
        temperature: float,
    ) -> None:
        """Initialize the client for given provider."""
        self.config = config
        self.session = session
        self.max_tokens = max_tokens
        self.temperature = temperature

    @property
    def provider_id(self) -> str:
        """Return provider identification."""
        return self.config.id

    def resolve_api_key(self, api_key: Optional[str]) -> Optional[str]:
        """Return key to be used, the key from request wins over configured one."""
        if api_key:
            return api_key
        if self.config.api_key is not None:
            return self.config.api_key.get_secret_value() or None
        return None

    def build_headers(self, api_key: Optional[str]) -> dict[str, str]:
        """Build HTTP headers for completion call."""
        headers = {"Content-Type": "application/json", **self.config.extra_headers}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        return headers

    def build_body(self, messages: Messages, model_id: str) -> dict[str, Any]:
        """Build JSON body for completion call."""
        return {
            "model": model_id,
            "messages": messages,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "stream": False,
        }

    async def complete(
        self,
        messages: Messages,
        model_id: str,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> CompletionResult:
        """Perform one completion call.

        Args:
            messages: System and user messages.
            model_id: Model to be used.
            api_key: Optional key supplied by the caller.
            timeout: Request timeout in seconds.

        Returns:
            Content of the first choice.

        Raises:
            AuthError, RequestError, TransientError, ProtocolError
        """
        key = self.resolve_api_key(api_key)
        if key is None and self.config.auth_required:
            raise AuthError(
                "API key is required, but it is not provided", self.provider_id
            )

        try:
            async with self.session.post(
                str(self.config.url),
                json=self.build_body(messages, model_id),
                headers=self.build_headers(key),
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as resp:
                status = resp.status
                try:
                    body = await resp.text()
                except UnicodeDecodeError as e:
                    logger.warning(
                        "Provider %s sent undecodable reply: %s", self.provider_id, e
                    )
                    body = ""
        except asyncio.TimeoutError as e:
            raise TransientError("Request timed out", self.provider_id) from e
        except aiohttp.ClientError as e:
            raise TransientError(
                f"Unable to connect to provider: {e}", self.provider_id
            ) from e

        try:
            payload = json.loads(body) if body else None
        except ValueError:
            payload = None

        if status >= 400:
            message = extract_error_message(payload) or f"HTTP {status}"
            if status in (401, 403):
                raise AuthError(message, self.provider_id, status)
            if status < 500:
                raise RequestError(message, self.provider_id, status)
            raise TransientError(message, self.provider_id, status)

        if payload is None:
            raise ProtocolError(
                "Completion payload is not a valid JSON text", self.provider_id, status
            )
        try:
            content = extract_content(payload)
        except ProtocolError as e:
            e.provider_id = self.provider_id
            e.status_code = status
            raise
        return CompletionResult(
            content=content, provider_id=self.provider_id, model_id=model_id
        )
