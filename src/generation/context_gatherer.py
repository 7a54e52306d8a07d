"""Gather optional supplementary context for code generation.

Three sources are supported: reference file content, website content and web
search results. Sources are resolved concurrently and independently; a
failing, slow or disabled source ends up absent and never aborts the
generation itself.
"""

import asyncio
from functools import partial
from typing import Awaitable, Callable, Optional

import aiohttp
from pydantic import BaseModel

from log import get_logger
from models.config import ContextConfiguration, SearchConfiguration, WebsiteConfiguration
from models.requests import GenerationRequest
from utils.html_text import html_to_text, is_valid_url

logger = get_logger(__name__)

# (url) -> text | absent
WebsiteFetcher = Callable[[str], Awaitable[Optional[str]]]

# (query, language) -> text | absent
WebSearcher = Callable[[str, str], Awaitable[Optional[str]]]

HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


class GatheredContext(BaseModel):
    """Supplementary context, None means the source is absent."""

    reference: Optional[str] = None
    website: Optional[str] = None
    search: Optional[str] = None


def truncate(text: str, limit: int) -> str:
    """Truncate text to given number of characters."""
    if len(text) <= limit:
        return text
    return text[:limit] + "\n[... truncated]"


def read_reference(content: str | bytes, max_chars: int) -> Optional[str]:
    """Read reference file content into text.

    Content that is not UTF-8 text or that looks binary is rejected.

    Returns:
        Text of the reference file or None when it can not be used.
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning("Reference file is not a valid UTF-8 text: %s", e)
            return None
    if "\x00" in content:
        logger.warning("Reference file looks like binary file, ignoring it")
        return None
    if not content.strip():
        logger.info("Reference file is empty, ignoring it")
        return None
    return truncate(content, max_chars)


async def fetch_website_text(
    session: aiohttp.ClientSession, config: WebsiteConfiguration, url: str
) -> Optional[str]:
    """Fetch website and extract its readable text.

    Returns:
        Website text or None when the website can not be retrieved.
    """
    if not is_valid_url(url):
        logger.warning("Invalid website URL %s, only HTTP(S) URLs are supported", url)
        return None
    try:
        async with session.get(
            url,
            headers={"User-Agent": config.user_agent},
            timeout=aiohttp.ClientTimeout(total=config.timeout),
        ) as resp:
            if resp.status >= 400:
                logger.warning("Website %s returned HTTP %d", url, resp.status)
                return None
            body = await resp.text()
            content_type = resp.content_type or ""
    except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
        logger.warning("Unable to retrieve website %s: %s", url, e)
        return None

    if content_type in HTML_CONTENT_TYPES:
        text = html_to_text(body)
    elif content_type.startswith("text/") or not content_type:
        text = body.strip()
    else:
        logger.warning("Website %s has unsupported content type %s", url, content_type)
        return None

    if not text:
        logger.info("No content retrieved from website %s", url)
        return None
    return truncate(text, config.max_chars)


def format_search_results(results: list[dict]) -> str:
    """Format search results as numbered list."""
    lines = []
    for i, item in enumerate(results, 1):
        title = item.get("title") or "Untitled"
        url = item.get("url")
        content = (item.get("content") or "").strip()
        heading = f"{i}. {title} ({url})" if url else f"{i}. {title}"
        lines.append(heading)
        if content:
            lines.append(f"   {content}")
    return "\n".join(lines)


async def search_web(
    session: aiohttp.ClientSession,
    config: SearchConfiguration,
    query: str,
    language: str,
) -> Optional[str]:
    """Query configured web search endpoint.

    Returns:
        Formatted search results or None when search is not available.
    """
    if config.url is None:
        logger.info("Web search requested, but search endpoint is not configured")
        return None

    headers = {"Content-Type": "application/json"}
    if config.api_key is not None:
        headers["Authorization"] = f"Bearer {config.api_key.get_secret_value()}"

    try:
        async with session.post(
            str(config.url),
            json={"query": f"{query} {language}", "max_results": config.max_results},
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=config.timeout),
        ) as resp:
            resp.raise_for_status()
            data = await resp.json()
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        logger.warning("Web search failed: %s", e)
        return None

    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list) or not results:
        logger.info("Web search returned no results")
        return None
    results = [item for item in results if isinstance(item, dict)]
    return format_search_results(results[: config.max_results]) or None


class ContextGatherer:
    """Resolves optional context sources concurrently.

    Website fetching and web searching are pluggable, by default they are
    implemented on top of shared aiohttp session.
    """

    def __init__(
        self,
        config: ContextConfiguration,
        session: Optional[aiohttp.ClientSession] = None,
        website_fetcher: Optional[WebsiteFetcher] = None,
        web_searcher: Optional[WebSearcher] = None,
    ) -> None:
        """Initialize the gatherer.

        Args:
            config: Context gathering configuration.
            session: Session used by default fetcher and searcher.
            website_fetcher: Custom website fetcher.
            web_searcher: Custom web searcher.
        """
        self.config = config
        if website_fetcher is None and session is not None and config.website.enabled:
            website_fetcher = partial(fetch_website_text, session, config.website)
        if web_searcher is None and session is not None:
            web_searcher = partial(search_web, session, config.search)
        self.website_fetcher = website_fetcher
        self.web_searcher = web_searcher

    async def read_reference(self, content: str) -> Optional[str]:
        """Read reference content, see `read_reference`."""
        return read_reference(content, self.config.max_reference_chars)

    async def fetch_website(self, url: str) -> Optional[str]:
        """Fetch website text, None when not possible."""
        if self.website_fetcher is None:
            logger.info("Website fetching is disabled, ignoring %s", url)
            return None
        return await self.website_fetcher(url)

    async def search(self, query: str, language: str) -> Optional[str]:
        """Search the web, None when not possible."""
        if self.web_searcher is None:
            logger.info("Web search is not available")
            return None
        return await self.web_searcher(query, language)

    async def gather(self, request: GenerationRequest) -> GatheredContext:
        """Resolve all context sources requested by the generation request.

        The sources are resolved as independent tasks joined with overall
        timeout. A source still pending at the deadline is cancelled and
        treated as absent. This method never raises.
        """
        tasks: dict[str, asyncio.Task] = {}
        if request.reference_content is not None:
            tasks["reference"] = asyncio.create_task(
                self.read_reference(request.reference_content)
            )
        if request.website_url:
            tasks["website"] = asyncio.create_task(
                self.fetch_website(request.website_url)
            )
        if request.web_search:
            tasks["search"] = asyncio.create_task(
                self.search(request.prompt, request.language)
            )
        if not tasks:
            return GatheredContext()

        logger.debug("Gathering context from sources: %s", ", ".join(tasks))
        _, pending = await asyncio.wait(tasks.values(), timeout=self.config.timeout)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        resolved: dict[str, Optional[str]] = {}
        for name, task in tasks.items():
            resolved[name] = None
            if task in pending:
                logger.warning(
                    "Context source %s did not finish in %.1f seconds",
                    name,
                    self.config.timeout,
                )
                continue
            error = task.exception()
            if error is not None:
                logger.warning("Context source %s failed: %s", name, error)
                continue
            resolved[name] = task.result()

        return GatheredContext(**resolved)
