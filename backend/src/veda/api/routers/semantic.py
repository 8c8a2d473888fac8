"""Semantic search endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from veda.api.deps import get_search_service
from veda.constants import MAX_RANDOM_COUNT
from veda.search.errors import InvalidQueryError, SearchBackendError
from veda.search.schemas import RankRequest, SearchRequest, SearchResponse
from veda.search.service import SemanticSearchService

router = APIRouter(prefix="/api/semantic", tags=["semantic"])


@router.post("/search", response_model=SearchResponse)
async def semantic_search(
    request: SearchRequest,
    service: SemanticSearchService = Depends(get_search_service),
) -> SearchResponse:
    """Search verses by meaning and keep only the confident matches."""
    try:
        return service.search(request.query, top_k=request.top_k)
    except InvalidQueryError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SearchBackendError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.get("/random", response_model=SearchResponse)
async def random_verses(
    count: int | None = Query(None, ge=1, le=MAX_RANDOM_COUNT),
    service: SemanticSearchService = Depends(get_search_service),
) -> SearchResponse:
    """Return randomly selected verses."""
    try:
        return service.random_verses(count)
    except SearchBackendError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.post("/rank", response_model=SearchResponse)
async def rank_results(
    request: RankRequest,
    service: SemanticSearchService = Depends(get_search_service),
) -> SearchResponse:
    """Filter raw results supplied by the caller."""
    results = [result.model_dump() for result in request.results]
    try:
        return service.rank_results(results, request.query)
    except InvalidQueryError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
