"""FastAPI dependency injection functions."""

from functools import lru_cache

from fastapi import Depends

from veda.config import Config, load_settings
from veda.search.ranking import ResultRanker
from veda.search.service import SemanticSearchService
from veda.vectorstore.store import VectorStore


@lru_cache
def get_settings() -> Config:
    """Get cached application settings."""
    return load_settings()


_vectorstore_instance: VectorStore | None = None


def get_vectorstore(settings: Config = Depends(get_settings)) -> VectorStore:
    """Get the shared verse index, opening it on first use."""
    global _vectorstore_instance
    if _vectorstore_instance is None:
        settings.index_path.mkdir(parents=True, exist_ok=True)
        _vectorstore_instance = VectorStore(
            settings.index_path, collection_name=settings.paths.collection_name
        )
    return _vectorstore_instance


def _reset_vectorstore_instance() -> None:
    """Reset vectorstore instance (for testing only)."""
    global _vectorstore_instance
    if _vectorstore_instance is not None:
        _vectorstore_instance.close()
        _vectorstore_instance = None


# The ranker keeps no per-request state, so one instance serves every request
_ranker = ResultRanker()


def get_search_service(
    vectorstore: VectorStore = Depends(get_vectorstore),
    settings: Config = Depends(get_settings),
) -> SemanticSearchService:
    """Get semantic search service instance."""
    return SemanticSearchService(vectorstore, settings, ranker=_ranker)
