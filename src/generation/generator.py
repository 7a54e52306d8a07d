"""The generate() entry point wiring all generation components together."""

import asyncio
import time

import aiohttp

import metrics
from cache.generation_cache import GenerationCache
from generation.context_gatherer import ContextGatherer
from generation.prompt_builder import PromptBuilder
from generation.provider_client import ProviderClient
from generation.router import ProviderRouter
from history.history_store import HistoryStore
from history.storage_error import HistoryStorageError
from log import get_logger
from models.config import Configuration
from models.history_entry import HistoryEntry
from models.requests import GenerationRequest
from models.responses import GenerationResult

logger = get_logger(__name__)


class CodeGenerator:
    """Turns generation requests into generation results.

    Identical concurrent requests are served by one computation. Each
    computation gathers context, builds the prompt, routes it over
    providers and records the outcome in history.
    """

    def __init__(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        prompt_builder: PromptBuilder,
        context_gatherer: ContextGatherer,
        router: ProviderRouter,
        cache: GenerationCache,
        history: HistoryStore,
    ) -> None:
        """Initialize the generator with its collaborators."""
        self.prompt_builder = prompt_builder
        self.context_gatherer = context_gatherer
        self.router = router
        self.cache = cache
        self.history = history

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Generate code for the request.

        Returns:
            Generation result, possibly degraded one when no provider is
            available.

        Raises:
            AuthError: Credentials are missing or rejected by provider.
            RequestError: Request was refused by provider.
        """
        return await self.cache.get_or_compute(request, self.compute)

    async def compute(self, request: GenerationRequest) -> GenerationResult:
        """Perform the whole generation without any caching."""
        start = time.monotonic()
        logger.info(
            "Generating %s code with model %s", request.language, request.model_id
        )
        context = await self.context_gatherer.gather(request)
        messages = self.prompt_builder.build(request, context)
        result = await self.router.route(
            messages,
            request.prompt,
            request.language,
            request.model_id,
            request.get_api_key(),
        )
        metrics.generation_duration_seconds.observe(time.monotonic() - start)

        entry = HistoryEntry(
            prompt=request.prompt, code=result.code, language=result.language
        )
        try:
            # storages perform blocking I/O
            await asyncio.to_thread(self.history.append, entry)
        except HistoryStorageError as e:
            logger.warning("Unable to persist history entry %s: %s", entry.id, e)
        logger.info(
            "Code generated by %s%s",
            result.provider_used,
            " (degraded)" if result.degraded else "",
        )
        return result


def create_code_generator(
    configuration: Configuration,
    session: aiohttp.ClientSession,
    history: HistoryStore,
) -> CodeGenerator:
    """Create code generator according to configuration."""
    router_config = configuration.router
    system_prompt = None
    if configuration.customization is not None:
        system_prompt = configuration.customization.system_prompt
    clients = [
        ProviderClient(
            provider,
            session,
            max_tokens=router_config.max_tokens,
            temperature=router_config.temperature,
        )
        for provider in configuration.providers
    ]
    return CodeGenerator(
        prompt_builder=PromptBuilder(system_prompt),
        context_gatherer=ContextGatherer(configuration.context, session=session),
        router=ProviderRouter(
            clients,
            attempt_timeout=router_config.attempt_timeout,
            max_attempts=router_config.max_attempts,
        ),
        cache=GenerationCache(configuration.generation_cache),
        history=history,
    )
