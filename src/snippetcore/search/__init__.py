from .enricher import PageSource, SnippetEnricher, truncate
from .results import (
    DictionaryResult,
    KnowledgePanelResult,
    OrganicResult,
    PanelMetadata,
    SearchResult,
    SnippetEntry,
    TimeResult,
    to_entry,
)

__all__ = [
    "DictionaryResult",
    "KnowledgePanelResult",
    "OrganicResult",
    "PanelMetadata",
    "SearchResult",
    "SnippetEntry",
    "TimeResult",
    "to_entry",
    "PageSource",
    "SnippetEnricher",
    "truncate",
]
