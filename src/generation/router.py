"""Routing of completion calls over ordered provider candidates."""

import asyncio
from typing import NamedTuple, Optional

import metrics
from generation.errors import (
    AuthError,
    GenerationError,
    ProtocolError,
    RequestError,
    TransientError,
)
from generation.extractor import ResponseExtractor
from generation.fallback import offline_result
from generation.provider_client import CompletionResult, ProviderClient
from log import get_logger
from models.responses import GenerationResult
from utils.types import Messages

logger = get_logger(__name__)


class Candidate(NamedTuple):
    """Provider and model pair to be tried."""

    client: ProviderClient
    model_id: str


class ProviderRouter:
    """Tries provider candidates strictly in sequence.

    - success: the result is returned immediately
    - `AuthError` or `RequestError`: raised to the caller, no other candidate
      is tried as the problem is fixable by the caller only
    - `TransientError`: next candidate is tried
    - `ProtocolError`: the same candidate is retried once, then next
      candidate is tried

    When all candidates fail, deterministic offline result flagged as
    degraded is returned instead of raising an error.
    """

    def __init__(
        self,
        clients: list[ProviderClient],
        attempt_timeout: float,
        max_attempts: Optional[int] = None,
        extractor: Optional[ResponseExtractor] = None,
    ) -> None:
        """Initialize the router.

        Args:
            clients: Provider clients, ordered by provider priority later on.
            attempt_timeout: Timeout of one attempt in seconds.
            max_attempts: Maximum number of candidates tried in one call,
                defaults to number of candidates.
            extractor: Extractor of code from the provider reply.
        """
        # sorted() is stable, providers with the same priority keep their order
        self.clients = sorted(clients, key=lambda client: client.config.priority)
        self.attempt_timeout = attempt_timeout
        self.max_attempts = max_attempts
        self.extractor = extractor or ResponseExtractor()

    def candidates(self, model_id: str) -> list[Candidate]:
        """Return ordered candidates for given model.

        The requested model is tried first on every provider serving it,
        then other models configured for providers follow.
        """
        primary = [
            Candidate(client, model_id)
            for client in self.clients
            if client.config.serves(model_id)
        ]
        secondary = [
            Candidate(client, other_model_id)
            for client in self.clients
            for other_model_id in client.config.models
            if other_model_id != model_id
        ]
        return primary + secondary

    async def attempt(
        self, candidate: Candidate, messages: Messages, api_key: Optional[str]
    ) -> CompletionResult:
        """Perform one attempt with per-attempt timeout."""
        try:
            return await asyncio.wait_for(
                candidate.client.complete(
                    messages,
                    candidate.model_id,
                    api_key=api_key,
                    timeout=self.attempt_timeout,
                ),
                timeout=self.attempt_timeout,
            )
        except asyncio.TimeoutError as e:
            raise TransientError(
                f"No reply in {self.attempt_timeout} seconds",
                candidate.client.provider_id,
            ) from e

    async def route(
        self,
        messages: Messages,
        prompt: str,
        language: str,
        model_id: str,
        api_key: Optional[str] = None,
    ) -> GenerationResult:
        """Generate code using the first candidate that succeeds.

        Args:
            messages: Messages produced by the prompt builder.
            prompt: Original prompt, used by the offline fallback.
            language: Target language.
            model_id: Requested model.
            api_key: Optional key supplied by the caller.

        Returns:
            Generation result, degraded one when all candidates failed.

        Raises:
            AuthError: Credentials are missing or rejected.
            RequestError: Request was refused by the provider.
        """
        candidates = self.candidates(model_id)
        budget = self.max_attempts or len(candidates)
        if not candidates:
            logger.warning("No provider serves model %s", model_id)

        for number, candidate in enumerate(candidates[:budget], 1):
            provider_id = candidate.client.provider_id
            retried = False
            while True:
                logger.info(
                    "Attempt %d/%d: provider %s, model %s%s",
                    number,
                    budget,
                    provider_id,
                    candidate.model_id,
                    " (retry)" if retried else "",
                )
                try:
                    completion = await self.attempt(candidate, messages, api_key)
                except (AuthError, RequestError) as e:
                    self.record_failure(candidate, e)
                    logger.error("Provider %s refused the request: %s", provider_id, e)
                    raise
                except ProtocolError as e:
                    self.record_failure(candidate, e)
                    if not retried:
                        logger.warning("Provider %s sent invalid reply: %s", provider_id, e)
                        retried = True
                        continue
                    logger.warning(
                        "Provider %s sent invalid reply again, giving up: %s",
                        provider_id,
                        e,
                    )
                    break
                except TransientError as e:
                    self.record_failure(candidate, e)
                    logger.warning("Provider %s is not available: %s", provider_id, e)
                    break

                metrics.provider_attempts_total.labels(
                    provider_id, candidate.model_id, "success"
                ).inc()
                logger.info(
                    "Provider %s generated reply with model %s",
                    provider_id,
                    candidate.model_id,
                )
                extracted = self.extractor.extract(completion.content, language)
                return GenerationResult(
                    code=extracted.code,
                    language=language,
                    explanation=extracted.explanation,
                    provider_used=completion.provider_id,
                    model_used=completion.model_id,
                )

        logger.warning(
            "All %d provider candidates failed, using offline fallback",
            min(budget, len(candidates)),
        )
        metrics.degraded_results_total.inc()
        return offline_result(prompt, language, model_id)

    @staticmethod
    def record_failure(candidate: Candidate, error: GenerationError) -> None:
        """Update metrics for failed attempt."""
        metrics.provider_attempts_total.labels(
            candidate.client.provider_id,
            candidate.model_id,
            type(error).__name__,
        ).inc()
