"""Shared HTTP session retrieval."""

import logging
from typing import Optional

import aiohttp

from utils.types import Singleton

logger = logging.getLogger(__name__)


class HttpSessionHolder(metaclass=Singleton):
    """Container for an initialised aiohttp ClientSession.

    One session is shared by provider clients, website fetching and web
    search for the whole service lifetime.
    """

    _session: Optional[aiohttp.ClientSession] = None

    async def load(self) -> None:
        """Create the session, it must be called from running event loop."""
        if self._session is not None and not self._session.closed:
            logger.info("HTTP session is already initialised")
            return
        logger.info("Creating HTTP session")
        self._session = aiohttp.ClientSession()

    def get_session(self) -> aiohttp.ClientSession:
        """Return an initialised ClientSession."""
        if self._session is None or self._session.closed:
            raise RuntimeError(
                "HTTP session has not been initialised. Ensure 'load(..)' has been called."
            )
        return self._session

    async def close(self) -> None:
        """Close the session when it is opened."""
        if self._session is not None:
            logger.info("Closing HTTP session")
            await self._session.close()
            self._session = None
