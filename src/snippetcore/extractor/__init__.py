"""
SnippetCore Content Extraction Module - Heuristic Main Content Locator

Pipeline over one HTML document at a time:
1. DOM loading into an index-addressed arena with noise elements removed
2. Candidate selection via a fixed selector list, then a full-tree scan
3. Heuristic scoring on text density, punctuation, structure and class/id hints
4. Ancestor promotion while a parent clearly outscores the current best
5. Normalization and paragraph segmentation with quality filters
"""

from .dom import DocumentTree, Node, ParseError, load
from .locator import MainContentLocator, ScoredCandidate
from .main_content import MainContentExtractor, MainContentPipeline, extract_main_content
from .models import ExtractResult
from .protocols import Extractor
from .scorer import ContentScorer, ScoreBreakdown
from .segmenter import TextSegmenter
from .selectors import SimpleSelector, select_all, select_candidates

__all__ = [
    "DocumentTree",
    "Node",
    "ParseError",
    "load",
    "select_candidates",
    "select_all",
    "SimpleSelector",
    "ContentScorer",
    "ScoreBreakdown",
    "MainContentLocator",
    "ScoredCandidate",
    "TextSegmenter",
    "ExtractResult",
    "Extractor",
    "MainContentExtractor",
    "MainContentPipeline",
    "extract_main_content",
]
