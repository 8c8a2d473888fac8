"""Semantic verse search service."""

import logging
from typing import Any

from veda.config import Config
from veda.constants import (
    MIN_SIMILARITY_SCORE,
    RANDOM_EXPLORATION_INTENT,
    RANDOM_QUERY_LABEL,
    RANDOM_SUMMARY_TEMPLATE,
    RANDOM_VERSE_CONFIDENCE,
    SEARCH_SUMMARY_TEMPLATE,
    SEMANTIC_SEARCH_INTENT,
)
from veda.search.errors import InvalidQueryError, SearchBackendError
from veda.search.ranking import RankedOutcome, ResultRanker
from veda.search.schemas import SearchMetadata, SearchResponse, VerseResult
from veda.vectorstore.store import VectorStore

logger = logging.getLogger(__name__)


def distance_to_similarity(distance: float | None) -> float | None:
    """Convert a cosine distance into a similarity score.

    The result is never 0.0, so unrelated verses always rank below
    related ones instead of being read as unscored.
    """
    if distance is None:
        return None
    return max(MIN_SIMILARITY_SCORE, min(1.0, 1.0 - distance))


def _records_from_query(result: dict[str, Any]) -> list[dict[str, Any]]:
    """Flatten a single-query ChromaDB result into verse records."""
    ids = (result.get("ids") or [[]])[0]
    documents = (result.get("documents") or [[]])[0] or []
    metadatas = (result.get("metadatas") or [[]])[0] or []
    distances = (result.get("distances") or [[]])[0] or []

    records = []
    for i, verse_id in enumerate(ids):
        record: dict[str, Any] = dict(metadatas[i] or {}) if i < len(metadatas) else {}
        record["id"] = verse_id
        record["text"] = documents[i] if i < len(documents) else ""
        record["similarity_score"] = distance_to_similarity(
            distances[i] if i < len(distances) else None
        )
        records.append(record)
    return records


def _records_from_get(result: dict[str, Any]) -> list[dict[str, Any]]:
    """Flatten a ChromaDB get() result into verse records."""
    ids = result.get("ids") or []
    documents = result.get("documents") or []
    metadatas = result.get("metadatas") or []

    records = []
    for i, verse_id in enumerate(ids):
        record: dict[str, Any] = dict(metadatas[i] or {}) if i < len(metadatas) else {}
        record["id"] = verse_id
        record["text"] = documents[i] if i < len(documents) else ""
        records.append(record)
    return records


class SemanticSearchService:
    """Fetches candidate verses and filters them for display.

    The vector store supplies raw, unranked candidates; ResultRanker decides
    how many of them are worth showing.
    """

    def __init__(
        self,
        vectorstore: VectorStore,
        settings: Config,
        ranker: ResultRanker | None = None,
    ) -> None:
        """Initialize the search service.

        Args:
            vectorstore: Verse index to search.
            settings: Application settings.
            ranker: Result ranker. Defaults to a new ResultRanker.
        """
        self._vectorstore = vectorstore
        self._settings = settings
        self._ranker = ranker or ResultRanker()

    def search(self, query: str, top_k: int | None = None) -> SearchResponse:
        """Search the verse index and filter the results.

        Surrounding whitespace is stripped from the query before it is sent to
        the index, and the stripped form is what the summary quotes.

        Args:
            query: Free-text query.
            top_k: Raw candidates to fetch. Defaults to settings.search.top_k.

        Returns:
            SearchResponse with the filtered verses.

        Raises:
            InvalidQueryError: If the query is blank.
            SearchBackendError: If the verse index query fails.
        """
        query = self._validate_query(query)
        n_results = top_k or self._settings.search.top_k

        try:
            raw = self._vectorstore.query(query, n_results=n_results)
        except Exception as e:
            logger.error(f"Verse index query failed for {query!r}: {e}")
            raise SearchBackendError(f"Failed to search verses: {e}") from e

        records = _records_from_query(raw)
        logger.info(f"Fetched {len(records)} candidate verses for {query!r}")
        return self._build_response(query, self._ranker.rank(records, query))

    def rank_results(self, results: list[dict[str, Any]], query: str) -> SearchResponse:
        """Filter caller-supplied raw results.

        Args:
            results: Raw records, each optionally carrying similarity_score.
            query: Query that produced the results. Stripped like in search().

        Returns:
            SearchResponse with the filtered verses.

        Raises:
            InvalidQueryError: If the query is blank.
        """
        query = self._validate_query(query)
        return self._build_response(query, self._ranker.rank(results, query))

    def random_verses(self, count: int | None = None) -> SearchResponse:
        """Pick verses at random for exploration.

        Args:
            count: Number of verses. Defaults to settings.search.random_count.

        Returns:
            SearchResponse with every verse at full confidence.

        Raises:
            SearchBackendError: If the verse index cannot be read.
        """
        n = count or self._settings.search.random_count

        try:
            raw = self._vectorstore.sample(n)
        except Exception as e:
            logger.error(f"Random verse sampling failed: {e}")
            raise SearchBackendError(f"Failed to fetch random verses: {e}") from e

        verses = [
            VerseResult(**{**record, "confidence": RANDOM_VERSE_CONFIDENCE})
            for record in _records_from_get(raw)
        ]
        return SearchResponse(
            intent=RANDOM_EXPLORATION_INTENT,
            query=RANDOM_QUERY_LABEL,
            summary=RANDOM_SUMMARY_TEMPLATE.format(count=len(verses)),
            verses=verses,
        )

    @staticmethod
    def _validate_query(query: str) -> str:
        stripped = query.strip()
        if not stripped:
            raise InvalidQueryError("Query must not be empty")
        return stripped

    @staticmethod
    def _build_response(query: str, outcome: RankedOutcome) -> SearchResponse:
        verses = [VerseResult(**record) for record in outcome.filtered_results]
        return SearchResponse(
            intent=SEMANTIC_SEARCH_INTENT,
            query=query,
            summary=SEARCH_SUMMARY_TEMPLATE.format(count=len(verses), query=query),
            verses=verses,
            search_metadata=SearchMetadata(
                total_fetched=outcome.total_fetched,
                display_count=len(verses),
                high_confidence_count=outcome.high_confidence_count,
                average_confidence=outcome.average_confidence,
            ),
        )
