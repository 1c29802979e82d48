"""
SnippetCore - main content extraction for search result snippets.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .extractor import ExtractResult, MainContentExtractor, ParseError, extract_main_content

__all__ = ["__version__", "Config", "ExtractResult", "MainContentExtractor", "ParseError", "extract_main_content"]
