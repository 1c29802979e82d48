"""
Overlays extracted page paragraphs onto search result descriptions.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional, Protocol, Sequence

import structlog

from ..config.config import Config
from ..extractor.main_content import MainContentExtractor
from ..extractor.protocols import Extractor
from ..fetcher.http_client import FetchError
from .results import OrganicResult, SearchResult, SnippetEntry, to_entry

logger = structlog.get_logger(__name__)


class PageSource(Protocol):
    """Anything that can turn a URL into raw HTML bytes."""

    async def fetch(self, url: str) -> bytes: ...


def truncate(paragraphs: Sequence[str], max_chars: int) -> str:
    """Join paragraphs with single spaces and cut to ``max_chars`` characters."""
    return " ".join(paragraphs)[:max_chars]


class SnippetEnricher:
    """
    Fetches and extracts every link result concurrently.

    A failing page never affects its siblings: fetch and parse failures turn
    into an empty paragraph list and the provider's description is kept.
    """

    def __init__(
        self,
        fetcher: PageSource,
        extractor: Optional[Extractor] = None,
        config: Optional[Config] = None,
    ) -> None:
        self.config = config or Config()
        self.fetcher = fetcher
        self.extractor = extractor or MainContentExtractor(self.config)

    async def paragraphs_for(self, url: str) -> List[str]:
        """Extracted paragraphs of one page; empty when it cannot be fetched."""
        try:
            html = await self.fetcher.fetch(url)
        except FetchError as e:
            logger.warning("Page fetch failed", url=url, error=str(e), status=e.status)
            return []
        result = await self.extractor.extract(html, url=url)
        return list(result.paragraphs)

    async def enrich(self, keyword: str, results: Sequence[SearchResult]) -> List[SnippetEntry]:
        """Map results to entries, replacing link descriptions with page content."""
        entries = [to_entry(result, keyword) for result in results]
        organic = [i for i, result in enumerate(results) if isinstance(result, OrganicResult)]

        # asyncio primitives bind to the running loop; one semaphore per call.
        semaphore = asyncio.Semaphore(self.config.fetch.max_concurrency)

        async def bounded(url: str) -> List[str]:
            async with semaphore:
                return await self.paragraphs_for(url)

        extracted = await asyncio.gather(*(bounded(entries[i].url) for i in organic))

        max_chars = self.config.snippet.max_chars
        for i, paragraphs in zip(organic, extracted):
            if paragraphs:
                entries[i] = entries[i].with_description(truncate(paragraphs, max_chars))

        logger.info(
            "Results enriched",
            keyword=keyword,
            results=len(entries),
            fetched=len(organic),
            enriched=sum(1 for paragraphs in extracted if paragraphs),
        )
        return entries
