"""
Main content extraction: load, locate, segment.
"""

from __future__ import annotations

import asyncio
from functools import partial
from typing import List, Optional

import structlog

from ..config.config import Config
from .dom import DocumentTree, ParseError, load
from .locator import MainContentLocator, ScoredCandidate
from .models import ExtractResult
from .protocols import Extractor
from .scorer import ContentScorer
from .segmenter import TextSegmenter

logger = structlog.get_logger(__name__)


class MainContentPipeline:
    """Synchronous extraction over one document; holds no per-document state."""

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config or Config()
        settings = self.config.extraction
        self.scorer = ContentScorer(self.config.scoring, settings)
        self.locator = MainContentLocator(self.scorer, settings)
        self.segmenter = TextSegmenter(settings)

    def load(self, html: bytes | str) -> DocumentTree:
        settings = self.config.extraction
        return load(html, parser=settings.parser, noise_tags=settings.noise_tags)

    def locate(self, tree: DocumentTree) -> ScoredCandidate:
        return self.locator.locate(tree)

    def run(self, html: bytes | str, *, url: str | None = None) -> ExtractResult:
        """Extract the paragraphs of the page's main content.

        Raises:
            ParseError: If the document cannot be parsed
        """
        tree = self.load(html)
        best = self.locate(tree)
        paragraphs = self.segmenter.segment(tree.text(best.index))
        return ExtractResult(
            url=url,
            paragraphs=tuple(paragraphs),
            node_path=tree.path(best.index),
            score=best.score,
        )


def extract_main_content(html: bytes | str, config: Optional[Config] = None) -> List[str]:
    """Return the readable paragraphs of an HTML document in document order.

    Raises:
        ParseError: If the document cannot be parsed
    """
    return list(MainContentPipeline(config).run(html).paragraphs)


class MainContentExtractor(Extractor):
    """Async extractor that downgrades unparseable pages to an empty result."""

    name = "main_content"

    def __init__(self, config: Optional[Config] = None) -> None:
        self.pipeline = MainContentPipeline(config)

    async def extract(self, html: bytes | str, *, url: str | None = None) -> ExtractResult:
        """Extract paragraphs from HTML.

        Args:
            html: HTML content to extract from
            url: Optional URL for context

        Returns:
            ExtractResult with the page's paragraphs, empty on parse failure
        """
        if not html or (isinstance(html, str) and not html.strip()):
            logger.debug("Empty HTML, skipping extraction", url=url)
            return ExtractResult.empty(url)

        try:
            # Parsing and scoring are CPU-bound; run them in the thread pool.
            loop = asyncio.get_running_loop()
            result = await loop.run_in_executor(None, partial(self.pipeline.run, html, url=url))
        except ParseError as e:
            logger.warning("HTML parsing failed", url=url, error=str(e))
            return ExtractResult.empty(url)

        logger.info(
            "Extraction completed",
            url=url,
            node=result.node_path,
            score=round(result.score, 4),
            paragraphs=len(result.paragraphs),
        )
        return result
