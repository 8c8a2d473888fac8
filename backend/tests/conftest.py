"""Shared pytest fixtures for all tests.

These fixtures properly clean up resources to prevent file descriptor leaks.
"""

import gc

import pytest

from veda.vectorstore.store import VectorStore


@pytest.fixture(autouse=True)
def cleanup_after_test():
    """Clean up resources after each test to prevent file descriptor leaks.

    This runs automatically after every test to help garbage collect
    any lingering ChromaDB connections.
    """
    yield
    # Force garbage collection to release file handles
    gc.collect()


@pytest.fixture
def temp_vectorstore(tmp_path):
    """Create a temporary vector store that cleans up properly.

    This fixture should be used instead of creating VectorStore instances
    directly in tests to ensure ChromaDB connections are released.
    """
    index_path = tmp_path / "index"
    index_path.mkdir()
    store = VectorStore(index_path)
    yield store
    # Clean up to release file handles
    store.close()
    gc.collect()


@pytest.fixture
def make_results():
    """Build raw backend records from a list of similarity scores."""

    def _make(scores):
        return [
            {"id": f"verse-{i}", "text": f"Verse {i}", "similarity_score": score}
            for i, score in enumerate(scores)
        ]

    return _make
