"""Score distribution analysis for adaptive result filtering.

Looks at the shape of a set of similarity scores and picks a cutoff
(threshold + result cap) that suits it. A single "best gap" scan stands in for
elbow detection, and a five-branch cascade covers the distribution shapes
nearest-neighbour search tends to produce: peaked, long-tail, and flat.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from veda.constants import search as c

logger = logging.getLogger(__name__)


class DistributionShape(str, Enum):
    """Which branch of the cascade produced a decision."""

    EMPTY = "empty"
    SHARP_CUTOFF = "sharp_cutoff"
    EARLY_GAP = "early_gap"
    DENSE_CLUSTER = "dense_cluster"
    WIDE_SPREAD = "wide_spread"
    FLAT = "flat"


@dataclass(frozen=True)
class Gap:
    """Drop between two adjacent scores in descending order."""

    position: int
    gap_size: float
    score_after_gap: float


@dataclass(frozen=True)
class DistributionStats:
    """Summary statistics over a descending-sorted score list."""

    count: int
    q1: float
    q2: float
    q3: float
    top_score: float
    score_range: float
    gaps: list[Gap] = field(default_factory=list)

    @property
    def best_gap(self) -> Gap | None:
        """Largest gap, or None when fewer than two scores exist."""
        return self.gaps[0] if self.gaps else None


@dataclass(frozen=True)
class FilterDecision:
    """Working cutoff before query-complexity adjustment."""

    threshold: float
    max_results: int
    shape: DistributionShape = DistributionShape.EMPTY


def _quartile(sorted_scores: list[float], fraction: float) -> float:
    # Plain index lookup, no interpolation
    return sorted_scores[int(len(sorted_scores) * fraction)]


def describe(scores: Sequence[float]) -> DistributionStats | None:
    """Compute distribution statistics for a set of scores.

    Args:
        scores: Confidence scores in any order.

    Returns:
        DistributionStats, or None if scores is empty.
    """
    if not scores:
        return None

    sorted_scores = sorted(scores, reverse=True)
    n = len(sorted_scores)

    gaps = [
        Gap(
            position=i,
            gap_size=sorted_scores[i] - sorted_scores[i + 1],
            score_after_gap=sorted_scores[i + 1],
        )
        for i in range(min(c.GAP_SCAN_LIMIT, n - 1))
    ]
    # sorted() is stable, so equal gaps keep the earliest position first
    gaps = sorted(gaps, key=lambda gap: -gap.gap_size)

    return DistributionStats(
        count=n,
        q1=_quartile(sorted_scores, c.Q1_FRACTION),
        q2=_quartile(sorted_scores, c.Q2_FRACTION),
        q3=_quartile(sorted_scores, c.Q3_FRACTION),
        top_score=sorted_scores[0],
        score_range=sorted_scores[0] - sorted_scores[-1],
        gaps=gaps,
    )


class DistributionAnalyzer:
    """Derives a (threshold, max_results) pair from a score distribution.

    Stateless; a single instance can be shared across concurrent requests.
    """

    def analyze(self, scores: Sequence[float]) -> FilterDecision:
        """Pick a cutoff for the given scores.

        Branches are evaluated in priority order and the first match wins.

        Args:
            scores: Confidence scores in any order. May be empty.

        Returns:
            FilterDecision for the distribution.
        """
        stats = describe(scores)
        if stats is None:
            return FilterDecision(
                threshold=c.DEFAULT_THRESHOLD,
                max_results=c.DEFAULT_MAX_RESULTS,
                shape=DistributionShape.EMPTY,
            )

        decision = self._decide(stats)
        logger.debug(
            f"Distribution of {stats.count} scores classified as {decision.shape.value}: "
            f"threshold={decision.threshold:.3f}, max_results={decision.max_results}"
        )
        return decision

    def _decide(self, stats: DistributionStats) -> FilterDecision:
        n = stats.count
        best = stats.best_gap

        if (
            best is not None
            and stats.top_score >= c.SHARP_TOP_SCORE
            and best.gap_size > c.SHARP_MIN_GAP
        ):
            return FilterDecision(
                threshold=max(c.SHARP_THRESHOLD_FLOOR, best.score_after_gap),
                max_results=min(c.SHARP_MAX_RESULTS, best.position + c.SHARP_POSITION_PADDING),
                shape=DistributionShape.SHARP_CUTOFF,
            )

        if (
            best is not None
            and best.gap_size > c.EARLY_MIN_GAP
            and best.position < c.EARLY_MAX_POSITION
        ):
            return FilterDecision(
                threshold=max(c.EARLY_THRESHOLD_FLOOR, best.score_after_gap),
                max_results=min(c.EARLY_MAX_RESULTS, best.position + c.EARLY_POSITION_PADDING),
                shape=DistributionShape.EARLY_GAP,
            )

        if stats.q1 >= c.DENSE_MIN_Q1 and (stats.q1 - stats.q3) < c.DENSE_MAX_SPREAD:
            return FilterDecision(
                threshold=max(c.DENSE_THRESHOLD_FLOOR, stats.q3 - c.DENSE_Q3_OFFSET),
                max_results=min(
                    c.DENSE_MAX_RESULTS, int(n * c.Q3_FRACTION) + c.DENSE_COUNT_PADDING
                ),
                shape=DistributionShape.DENSE_CLUSTER,
            )

        if stats.score_range > c.WIDE_MIN_RANGE:
            return FilterDecision(
                threshold=max(c.WIDE_THRESHOLD_FLOOR, stats.q2),
                max_results=min(c.WIDE_MAX_RESULTS, int(n * c.Q2_FRACTION) + c.WIDE_COUNT_PADDING),
                shape=DistributionShape.WIDE_SPREAD,
            )

        return FilterDecision(
            threshold=max(c.FLAT_THRESHOLD_FLOOR, stats.q3),
            max_results=min(c.FLAT_MAX_RESULTS, n),
            shape=DistributionShape.FLAT,
        )
