"""
Search result variants and their mapping to snippet entries.

Each result kind the search provider can return is its own frozen dataclass;
``SearchResult`` is the union of all of them and ``to_entry`` handles every
member explicitly.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Dict, Tuple, Union, assert_never
from urllib.parse import quote_plus

SEARCH_URL = "https://google.com/search?q={query}"


@dataclass(frozen=True, slots=True)
class OrganicResult:
    """A plain link result; the only kind whose page is fetched and extracted."""

    title: str
    link: str
    description: str = ""


@dataclass(frozen=True, slots=True)
class DictionaryResult:
    word: str
    phonetic: str = ""
    meanings: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TimeResult:
    time: str
    time_in_words: str = ""
    location: str = ""


@dataclass(frozen=True, slots=True)
class PanelMetadata:
    label: str
    value: str


@dataclass(frozen=True, slots=True)
class KnowledgePanelResult:
    title: str
    description: str = ""
    label: str = ""
    metadata: Tuple[PanelMetadata, ...] = field(default_factory=tuple)


SearchResult = Union[OrganicResult, DictionaryResult, TimeResult, KnowledgePanelResult]


@dataclass(frozen=True, slots=True)
class SnippetEntry:
    """The common shape every result kind is reduced to."""

    title: str
    url: str
    description: str

    def with_description(self, description: str) -> SnippetEntry:
        return replace(self, description=description)

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def search_url(keyword: str) -> str:
    return SEARCH_URL.format(query=quote_plus(keyword))


def to_entry(result: SearchResult, keyword: str) -> SnippetEntry:
    """Reduce any search result variant to a ``SnippetEntry``."""
    if isinstance(result, OrganicResult):
        return SnippetEntry(title=result.title, url=result.link, description=result.description)
    if isinstance(result, DictionaryResult):
        return SnippetEntry(
            title=result.word,
            url=search_url(keyword),
            description=" ".join([result.phonetic, *result.meanings]),
        )
    if isinstance(result, TimeResult):
        return SnippetEntry(
            title=keyword,
            url=search_url(keyword),
            description=" ".join([result.time, result.time_in_words, result.location]),
        )
    if isinstance(result, KnowledgePanelResult):
        metadata = "\n".join(f"{item.label}: {item.value}" for item in result.metadata)
        return SnippetEntry(
            title=result.title,
            url=search_url(keyword),
            description="\n".join([result.description, result.label, metadata]),
        )
    assert_never(result)
