"""Semantic verse search with adaptive confidence filtering."""

from veda.search.distribution import (
    DistributionAnalyzer,
    DistributionShape,
    DistributionStats,
    FilterDecision,
    Gap,
)
from veda.search.errors import InvalidQueryError, SearchBackendError, VedaError
from veda.search.ranking import RankedOutcome, ResultRanker

__all__ = [
    "DistributionAnalyzer",
    "DistributionShape",
    "DistributionStats",
    "FilterDecision",
    "Gap",
    "InvalidQueryError",
    "SearchBackendError",
    "VedaError",
    "RankedOutcome",
    "ResultRanker",
]
