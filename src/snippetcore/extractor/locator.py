"""
Main content location: selector pass, full-tree fallback and ancestor promotion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import structlog

from ..config.config import ExtractionSettings
from .dom import DocumentTree
from .scorer import ContentScorer
from .selectors import SimpleSelector, compile_selectors, select_all, select_candidates

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ScoredCandidate:
    """A node reference paired with its score."""

    index: int
    score: float


class MainContentLocator:
    """
    Picks the single node most likely to hold the readable content of a page.

    The search starts at the body with a best score of 0 and only moves on a
    strictly better score, so the body is returned when nothing qualifies.
    """

    def __init__(
        self,
        scorer: Optional[ContentScorer] = None,
        settings: Optional[ExtractionSettings] = None,
    ) -> None:
        self.settings = settings or ExtractionSettings()
        self.scorer = scorer or ContentScorer(settings=self.settings)
        self.selectors: Sequence[SimpleSelector] = compile_selectors(self.settings.candidate_selectors)

    def locate(self, tree: DocumentTree) -> ScoredCandidate:
        best = ScoredCandidate(tree.body, 0.0)

        candidates = select_candidates(tree, self.selectors)
        best = self._best_of(tree, candidates, best)
        logger.debug("Selector pass complete", candidates=len(candidates), best_score=best.score)

        if best.score < self.settings.fallback_threshold:
            elements = select_all(tree, self.settings.fallback_skip_tags)
            best = self._best_of(tree, elements, best)
            logger.debug("Fallback scan complete", elements=len(elements), best_score=best.score)

        return self.promote(tree, best)

    def promote(self, tree: DocumentTree, best: ScoredCandidate) -> ScoredCandidate:
        """Climb toward the body while each parent clearly outscores the current best."""
        body = tree.body
        while True:
            parent = tree.parent_element(best.index)
            if parent is None or parent == body:
                return best
            parent_score = self.scorer.score(tree, parent)
            if parent_score <= best.score * self.settings.promotion_factor:
                return best
            logger.debug("Promoted to ancestor", path=tree.path(parent), score=parent_score)
            best = ScoredCandidate(parent, parent_score)

    def _best_of(self, tree: DocumentTree, indices: Sequence[int], best: ScoredCandidate) -> ScoredCandidate:
        for index in indices:
            score = self.scorer.score(tree, index)
            if score > best.score:
                best = ScoredCandidate(index, score)
        return best
