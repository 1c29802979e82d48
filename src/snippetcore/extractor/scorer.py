"""
Heuristic desirability score for a candidate content node.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, Optional

from ..config.config import ExtractionSettings, ScoringWeights
from .dom import DocumentTree

WHITESPACE_RE = re.compile(r"\s+")
WHITESPACE_RUN_RE = re.compile(r"\s{2,}")
CJK_RE = re.compile(r"[\u4e00-\u9fff]")
TERMINAL_MARKS = frozenset("。.?!；;")
HEADING_TAGS = ("h1", "h2", "h3")


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """Every factor that went into a node's score."""

    text_length: int = 0
    html_length: int = 1
    text_density: float = 0.0
    space_ratio: float = 0.0
    link_density: float = 0.0
    semantic_bonus: float = 0.0
    cjk_ratio: float = 0.0
    punctuation_density: float = 0.0
    heading_score: float = 0.0
    paragraph_score: float = 0.0
    vetoed: bool = False
    total: float = 0.0

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


class ContentScorer:
    """
    Scores DOM nodes on text density, punctuation, structure and class/id hints.

    Scoring is pure: the tree is never modified and identical inputs always
    give identical scores.
    """

    def __init__(
        self,
        weights: Optional[ScoringWeights] = None,
        settings: Optional[ExtractionSettings] = None,
    ) -> None:
        self.weights = weights or ScoringWeights()
        settings = settings or ExtractionSettings()
        self.negative_pattern = settings.negative_pattern
        self.semantic_tags = frozenset(settings.semantic_tags)

    def score(self, tree: DocumentTree, index: int) -> float:
        return self.explain(tree, index).total

    def explain(self, tree: DocumentTree, index: int) -> ScoreBreakdown:
        """Compute the score of ``index`` along with its individual factors."""
        w = self.weights
        node = tree.node(index)

        text = tree.text(index).strip()
        text_length = len(text)
        if text_length < w.min_text_length:
            return ScoreBreakdown(text_length=text_length)

        markup = tree.inner_html(index)
        html_length = max(1, len(WHITESPACE_RE.sub("", markup)))
        text_density = text_length / html_length

        space_ratio = sum(len(run) for run in WHITESPACE_RUN_RE.findall(markup)) / text_length

        # Anchors are stripped at load time, so this is zero for loaded documents.
        link_text = sum(len(tree.text(a).strip()) for a in tree.find_all(index, ("a",)))
        link_density = link_text / text_length

        semantic_bonus = w.semantic_bonus if node.tag in self.semantic_tags else 0.0

        class_id = node.get("class") + node.get("id")
        if self.negative_pattern.search(class_id):
            return ScoreBreakdown(
                text_length=text_length,
                html_length=html_length,
                text_density=text_density,
                space_ratio=space_ratio,
                link_density=link_density,
                semantic_bonus=semantic_bonus,
                vetoed=True,
            )

        cjk_ratio = len(CJK_RE.findall(text)) / text_length
        punctuation_density = _count_marks(text, TERMINAL_MARKS) / text_length

        heading_score = min(w.heading_cap, w.heading_step * len(tree.find_all(index, HEADING_TAGS)))
        paragraph_score = min(w.paragraph_cap, w.paragraph_step * len(tree.find_all(index, ("p",))))

        total = (
            w.text_density * text_density
            + w.cjk_ratio * cjk_ratio
            + w.punctuation_density * punctuation_density
            + w.link_density * link_density
            + semantic_bonus
            + heading_score
            + paragraph_score
            + w.space_ratio * space_ratio
        )

        return ScoreBreakdown(
            text_length=text_length,
            html_length=html_length,
            text_density=text_density,
            space_ratio=space_ratio,
            link_density=link_density,
            semantic_bonus=semantic_bonus,
            cjk_ratio=cjk_ratio,
            punctuation_density=punctuation_density,
            heading_score=heading_score,
            paragraph_score=paragraph_score,
            total=total,
        )


def _count_marks(text: str, marks: Iterable[str]) -> int:
    wanted = frozenset(marks)
    return sum(1 for char in text if char in wanted)
