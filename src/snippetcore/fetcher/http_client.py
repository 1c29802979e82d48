"""
Minimal HTTP page fetcher feeding raw HTML bytes to the extractor.

Caching, retries and header negotiation are left to the deployment; this
client only applies a timeout and a User-Agent.
"""

from __future__ import annotations

import asyncio
from typing import Optional
from urllib.parse import urlparse

import aiohttp
import structlog

from ..config.config import FetchConfig

logger = structlog.get_logger(__name__)

ALLOWED_SCHEMES = ("http", "https")


class FetchError(RuntimeError):
    """Raised when a page cannot be retrieved."""

    def __init__(self, url: str, message: str, status: Optional[int] = None):
        super().__init__(f"{message}: {url}")
        self.url = url
        self.status = status


class PageFetcher:
    """Fetches page bodies over a shared aiohttp session."""

    def __init__(self, config: Optional[FetchConfig] = None):
        self.config = config or FetchConfig()
        self.session: Optional[aiohttp.ClientSession] = None

    async def initialize(self) -> None:
        """Initialize the HTTP client session."""
        if self.session is None:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            self.session = aiohttp.ClientSession(timeout=timeout, headers={"User-Agent": self.config.user_agent})
            logger.debug("HTTP session initialized", user_agent=self.config.user_agent)

    async def close(self) -> None:
        if self.session:
            await self.session.close()
            self.session = None

    async def __aenter__(self) -> "PageFetcher":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def fetch(self, url: str) -> bytes:
        """
        Fetch a page body.

        Args:
            url: Absolute http(s) URL

        Returns:
            The raw response body

        Raises:
            FetchError: On invalid URLs, transport errors, timeouts and non-2xx statuses
        """
        # Parse URL safely, handle malformed URLs
        try:
            parsed = urlparse(url)
        except ValueError as e:
            logger.warning("Malformed URL", url=url, error=str(e))
            raise FetchError(url, "Malformed URL") from e
        if parsed.scheme not in ALLOWED_SCHEMES or not parsed.netloc:
            raise FetchError(url, "Unsupported URL")

        await self.initialize()
        assert self.session is not None

        try:
            async with self.session.get(url) as response:
                if not 200 <= response.status < 300:
                    raise FetchError(url, f"HTTP {response.status}", status=response.status)
                body = await response.read()
        except aiohttp.ClientError as e:
            raise FetchError(url, f"Request failed ({type(e).__name__})") from e
        except asyncio.TimeoutError as e:
            raise FetchError(url, f"Request timed out after {self.config.timeout}s") from e

        logger.debug("Fetched page", url=url, status=response.status, bytes=len(body))
        return body
