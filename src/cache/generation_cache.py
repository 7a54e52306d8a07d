"""Single-flight cache of generation results."""

import asyncio
from typing import Awaitable, Callable

from cachetools import TTLCache

import metrics
from log import get_logger
from models.config import GenerationCacheConfiguration
from models.requests import GenerationRequest
from models.responses import GenerationResult

logger = get_logger(__name__)

Compute = Callable[[GenerationRequest], Awaitable[GenerationResult]]


class GenerationCache:
    """Shares one upstream computation between identical requests.

    Requests are identified by fingerprint. While a computation for a
    fingerprint is in flight, every other caller with the same fingerprint
    attaches to it and receives the identical result or the identical
    error. Callers are released in arrival order.

    Successful results are retained for a short time, errors are never
    retained so the next request starts fresh computation.

    A caller cancelling its wait does not cancel the shared computation. The
    computation is cancelled only when the last attached caller leaves.
    """

    def __init__(self, config: GenerationCacheConfiguration) -> None:
        """Initialize the cache."""
        self.config = config
        self.in_flight: dict[str, asyncio.Task] = {}
        self.waiters: dict[asyncio.Task, int] = {}
        self.done: TTLCache = TTLCache(
            maxsize=config.max_entries, ttl=config.retention_seconds
        )

    @staticmethod
    def fingerprint(request: GenerationRequest) -> str:
        """Return key identifying equivalent requests."""
        return request.fingerprint

    def __contains__(self, fingerprint: str) -> bool:
        """Check if there is in-flight or retained entry for fingerprint."""
        return fingerprint in self.in_flight or fingerprint in self.done

    async def get_or_compute(
        self, request: GenerationRequest, compute: Compute
    ) -> GenerationResult:
        """Return result for the request, computing it only when needed.

        Args:
            request: Generation request.
            compute: Coroutine function performing the upstream computation.

        Returns:
            Generation result; `from_cache` is set for every caller except
            the one that started the computation.
        """
        key = self.fingerprint(request)

        retained = self.done.get(key)
        if retained is not None:
            logger.debug("Result for %s served from retention window", key)
            metrics.generation_cache_hits_total.inc()
            return retained.model_copy(update={"from_cache": True})

        task = self.in_flight.get(key)
        if task is not None:
            logger.debug("Attaching to in-flight computation %s", key)
            metrics.generation_cache_hits_total.inc()
            result = await self.wait(key, task)
            return result.model_copy(update={"from_cache": True})

        logger.debug("Starting computation %s", key)
        task = asyncio.ensure_future(compute(request))
        self.in_flight[key] = task
        self.waiters[task] = 0
        # registered before any waiter so the bookkeeping is finished
        # when waiters are woken up
        task.add_done_callback(lambda t: self.finished(key, t))
        return await self.wait(key, task)

    async def wait(self, key: str, task: asyncio.Task) -> GenerationResult:
        """Wait for shared computation without cancelling it."""
        self.waiters[task] = self.waiters.get(task, 0) + 1
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            if not task.done() and self.waiters.get(task) == 1:
                logger.info("Last caller of %s left, cancelling computation", key)
                task.cancel()
                # new callers must not attach to the cancelled computation
                if self.in_flight.get(key) is task:
                    del self.in_flight[key]
            raise
        finally:
            if task in self.waiters:
                self.waiters[task] -= 1

    def finished(self, key: str, task: asyncio.Task) -> None:
        """Move finished computation out of in-flight table."""
        if self.in_flight.get(key) is task:
            del self.in_flight[key]
        self.waiters.pop(task, None)
        if task.cancelled():
            logger.debug("Computation %s cancelled", key)
            return
        error = task.exception()
        if error is not None:
            logger.debug("Computation %s failed: %s", key, error)
            return
        self.done[key] = task.result()
