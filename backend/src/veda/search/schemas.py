"""Semantic search request and response schemas."""

from pydantic import BaseModel, ConfigDict, Field

from veda.constants import DEFAULT_TOP_K, MAX_TOP_K


class RawResult(BaseModel):
    """Unranked record as returned by the verse index.

    Only similarity_score is read by the filter; any other fields (mandala,
    hymn, translation, audio URL...) are carried through untouched.
    """

    model_config = ConfigDict(extra="allow")

    text: str = Field("", description="Verse text")
    similarity_score: float | None = Field(
        None, description="Similarity to the query, nominally 0.0-1.0"
    )


class VerseResult(RawResult):
    """Verse with its attached confidence."""

    confidence: float = Field(..., description="Confidence used for ranking")


class SearchRequest(BaseModel):
    """Request for the semantic search endpoint."""

    query: str = Field(..., min_length=1, description="Free-text search query")
    top_k: int = Field(
        default=DEFAULT_TOP_K,
        ge=1,
        le=MAX_TOP_K,
        description="Raw candidates to fetch before filtering",
    )


class RankRequest(BaseModel):
    """Request to filter caller-supplied raw results."""

    query: str = Field(..., min_length=1, description="Query that produced the results")
    results: list[RawResult] = Field(default_factory=list, description="Raw results")


class SearchMetadata(BaseModel):
    """Counts describing what the filter kept."""

    total_fetched: int = Field(..., description="Raw results before filtering")
    display_count: int = Field(..., description="Results after filtering")
    high_confidence_count: int = Field(..., description="Kept results with confidence >= 0.75")
    average_confidence: float = Field(..., description="Mean confidence of kept results")


class SearchResponse(BaseModel):
    """Verses ready for display, with a summary line."""

    intent: str = Field(..., description="semantic_search or random_exploration")
    query: str = Field(..., description="Query shown to the user")
    summary: str = Field(..., description="Human-readable summary line")
    verses: list[VerseResult] = Field(default_factory=list)
    search_metadata: SearchMetadata | None = Field(
        None, description="Filter statistics (absent for random verses)"
    )
