"""
Data models for extraction results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True, frozen=True)
class ExtractResult:
    """Paragraphs extracted from one page, in document order."""

    url: str | None
    paragraphs: Tuple[str, ...]
    node_path: str | None = None
    score: float = 0.0

    def __post_init__(self) -> None:
        """Validate the result."""
        if not all(isinstance(p, str) for p in self.paragraphs):
            raise TypeError("paragraphs must be strings")

    @property
    def is_empty(self) -> bool:
        return not self.paragraphs

    @property
    def text(self) -> str:
        return " ".join(self.paragraphs)

    @classmethod
    def empty(cls, url: str | None = None) -> ExtractResult:
        return cls(url=url, paragraphs=())
