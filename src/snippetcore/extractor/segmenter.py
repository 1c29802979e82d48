"""
Text normalization and paragraph segmentation for extracted content.
"""

from __future__ import annotations

import re
from typing import List, Optional

from ..config.config import ExtractionSettings

PARAGRAPH_BREAK_RE = re.compile(r"\n{2,}|[\s\u3000]{4,}")
WHITESPACE_RE = re.compile(r"\s+")
ZERO_WIDTH_RE = re.compile(r"[\u200b-\u200d\ufeff]")
ALPHANUMERIC_RE = re.compile(r"^[0-9a-zA-Z]+$")
QUALITY_MARKS = frozenset(".!?。；！？")


class TextSegmenter:
    """Turns the raw text of a content node into snippet-ready paragraphs."""

    def __init__(self, settings: Optional[ExtractionSettings] = None) -> None:
        self.settings = settings or ExtractionSettings()
        phrases = [p for p in self.settings.boilerplate_phrases if p]
        self._boilerplate_re = re.compile("|".join(re.escape(p) for p in phrases)) if phrases else None

    def normalize(self, text: str) -> str:
        """Collapse whitespace, drop zero-width characters and boilerplate phrases."""
        text = WHITESPACE_RE.sub(" ", text)
        text = ZERO_WIDTH_RE.sub("", text)
        if self._boilerplate_re is not None:
            text = self._boilerplate_re.sub("", text)
        return text

    def split(self, text: str) -> List[str]:
        """Raw paragraph candidates, cut at blank lines and long whitespace runs."""
        return PARAGRAPH_BREAK_RE.split(text)

    def segment(self, text: str) -> List[str]:
        """Split ``text`` into paragraphs that survive the length and quality filters.

        Paragraph boundaries are found on the raw text: collapsing whitespace
        first would erase every boundary.
        """
        paragraphs: List[str] = []
        for raw in self.split(text):
            paragraph = self.normalize(raw).strip()
            if self.is_candidate(paragraph) and self.is_quality(paragraph):
                paragraphs.append(paragraph)
        return paragraphs

    def is_candidate(self, paragraph: str) -> bool:
        if len(paragraph) < self.settings.min_paragraph_length:
            return False
        return ALPHANUMERIC_RE.match(paragraph) is None

    def is_quality(self, paragraph: str) -> bool:
        marks = sum(1 for char in paragraph if char in QUALITY_MARKS)
        return marks >= self.settings.min_terminal_marks and len(paragraph) > self.settings.min_quality_length
