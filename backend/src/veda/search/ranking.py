"""Confidence-based ranking and filtering of semantic search results."""

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from veda.constants import search as c
from veda.search.distribution import DistributionAnalyzer

logger = logging.getLogger(__name__)

# A raw backend record with a "confidence" key attached
ScoredResult = dict[str, Any]


@dataclass(frozen=True)
class RankedOutcome:
    """Filtered results plus the counts a caller needs to summarise them."""

    filtered_results: list[ScoredResult] = field(default_factory=list)
    total_fetched: int = 0
    high_confidence_count: int = 0
    average_confidence: float = 0.0
    used_fallback: bool = False


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def query_complexity_adjustment(query: str) -> tuple[float, int]:
    """Get (threshold, max_results) adjustments for a query.

    Args:
        query: Free-text query as typed by the user.

    Returns:
        Tuple of (threshold_adjustment, max_results_adjustment).
    """
    word_count = len(query.split())
    if word_count <= c.SHORT_QUERY_MAX_WORDS:
        return c.SHORT_QUERY_THRESHOLD_ADJUSTMENT, c.SHORT_QUERY_MAX_RESULTS_ADJUSTMENT
    if word_count >= c.LONG_QUERY_MIN_WORDS:
        return c.LONG_QUERY_THRESHOLD_ADJUSTMENT, c.LONG_QUERY_MAX_RESULTS_ADJUSTMENT
    return 0.0, 0


def attach_confidence(result: dict[str, Any]) -> ScoredResult:
    """Copy a raw result and attach its confidence.

    A missing or zero similarity score falls back to DEFAULT_CONFIDENCE.
    Out-of-range scores are passed through unchanged.
    """
    scored = dict(result)
    scored["confidence"] = result.get("similarity_score") or c.DEFAULT_CONFIDENCE
    return scored


class ResultRanker:
    """Sorts results by confidence and applies an adaptive cutoff.

    The cutoff comes from the score distribution (see DistributionAnalyzer),
    nudged by how specific the query is. If the cutoff is too strict, a
    looser second pass is run over the full sorted list.
    """

    def __init__(self, analyzer: DistributionAnalyzer | None = None) -> None:
        """Initialize the ranker.

        Args:
            analyzer: Distribution analyzer to use. Defaults to a new instance.
        """
        self._analyzer = analyzer or DistributionAnalyzer()

    def rank(self, results: Sequence[dict[str, Any]], query: str) -> RankedOutcome:
        """Rank and filter raw search results.

        Args:
            results: Raw backend records, each optionally carrying similarity_score.
                Records are copied, never modified.
            query: The query that produced the results.

        Returns:
            RankedOutcome with the surviving results in confidence order.
        """
        if not results:
            return RankedOutcome()

        # sorted() is stable: equal confidences keep backend order
        ranked = sorted(
            (attach_confidence(result) for result in results),
            key=lambda result: -result["confidence"],
        )

        decision = self._analyzer.analyze([result["confidence"] for result in ranked])
        threshold_adjustment, max_results_adjustment = query_complexity_adjustment(query)

        min_confidence = _clamp(
            decision.threshold + threshold_adjustment,
            c.MIN_CONFIDENCE_FLOOR,
            c.MIN_CONFIDENCE_CEILING,
        )
        max_results = _clamp(
            decision.max_results + max_results_adjustment,
            c.MAX_RESULTS_FLOOR,
            c.MAX_RESULTS_CEILING,
        )

        filtered = self._apply_cutoff(ranked, min_confidence, max_results)

        used_fallback = False
        if len(filtered) < c.FALLBACK_MIN_RESULTS and len(ranked) >= c.FALLBACK_MIN_RESULTS:
            relaxed_confidence = max(
                c.FALLBACK_THRESHOLD_FLOOR,
                min_confidence - c.FALLBACK_THRESHOLD_RELAXATION,
            )
            relaxed_max_results = max(c.FALLBACK_MAX_RESULTS_FLOOR, max_results)
            logger.debug(
                f"Only {len(filtered)} of {len(ranked)} results passed "
                f"min_confidence={min_confidence:.3f}; retrying at {relaxed_confidence:.3f}"
            )
            filtered = self._apply_cutoff(ranked, relaxed_confidence, relaxed_max_results)
            used_fallback = True

        logger.debug(
            f"Ranked {len(ranked)} results for {query!r}: kept {len(filtered)} "
            f"({decision.shape.value}, min_confidence={min_confidence:.3f}, "
            f"max_results={max_results})"
        )

        return RankedOutcome(
            filtered_results=filtered,
            total_fetched=len(results),
            high_confidence_count=sum(
                1 for result in filtered if result["confidence"] >= c.HIGH_CONFIDENCE_THRESHOLD
            ),
            average_confidence=(
                sum(result["confidence"] for result in filtered) / len(filtered)
                if filtered
                else 0.0
            ),
            used_fallback=used_fallback,
        )

    @staticmethod
    def _apply_cutoff(
        ranked: list[ScoredResult], min_confidence: float, max_results: int
    ) -> list[ScoredResult]:
        return [result for result in ranked if result["confidence"] >= min_confidence][
            :max_results
        ]
