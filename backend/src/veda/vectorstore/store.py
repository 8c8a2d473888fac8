"""ChromaDB vector store implementation."""

import gc
import logging
import random
from pathlib import Path
from typing import Any

import chromadb
from chromadb.config import Settings

logger = logging.getLogger(__name__)


class VectorStore:
    """Vector store wrapper for ChromaDB.

    Holds the embedded verse index. Similarity scoring is left entirely to
    ChromaDB; callers get raw distances back and decide what to do with them.
    """

    DEFAULT_COLLECTION_NAME = "rig_veda_verses"

    def __init__(self, persist_path: Path, collection_name: str | None = None) -> None:
        """Initialize vector store with persistent storage.

        Args:
            persist_path: Directory path for ChromaDB persistence.
            collection_name: Collection holding the verses.
        """
        self._collection_name = collection_name or self.DEFAULT_COLLECTION_NAME
        self._client = chromadb.PersistentClient(
            path=str(persist_path),
            settings=Settings(anonymized_telemetry=False),
        )
        self._collection = self._get_or_create_collection()

    def _get_or_create_collection(self) -> chromadb.Collection:
        # Cosine distance keeps 1 - distance meaningful as a similarity
        return self._client.get_or_create_collection(
            name=self._collection_name,
            metadata={"hnsw:space": "cosine"},
        )

    @property
    def collection(self) -> chromadb.Collection:
        """Get the underlying ChromaDB collection."""
        return self._collection

    def add_verses(
        self,
        ids: list[str],
        documents: list[str],
        metadatas: list[dict[str, Any]] | None = None,
        embeddings: list[list[float]] | None = None,
    ) -> None:
        """Add verses to the index.

        Args:
            ids: Unique identifiers for each verse (e.g. "1.1.1").
            documents: Verse text.
            metadatas: Optional metadata (mandala, hymn, deity...) for each verse.
            embeddings: Precomputed embeddings. If None, ChromaDB embeds the documents.
        """
        self._collection.add(
            ids=ids,
            documents=documents,
            metadatas=metadatas,  # type: ignore[arg-type]
            embeddings=embeddings,  # type: ignore[arg-type]
        )

    def count(self) -> int:
        """Number of verses in the index."""
        return self._collection.count()

    def query(self, query_text: str, n_results: int = 10) -> dict[str, Any]:
        """Query the index for verses similar to the text.

        Args:
            query_text: Text to search for.
            n_results: Maximum number of results to return.

        Returns:
            Query results including ids, documents, metadatas, and distances.
        """
        result = self._collection.query(
            query_texts=[query_text],
            n_results=n_results,
        )
        return dict(result)

    def sample(self, count: int) -> dict[str, Any]:
        """Pick verses uniformly at random.

        Args:
            count: Number of verses wanted. Fewer are returned if the index is smaller.

        Returns:
            Results including ids, documents and metadatas (flat lists).
        """
        all_ids = self._collection.get(include=[])["ids"]
        if not all_ids:
            return {"ids": [], "documents": [], "metadatas": []}

        chosen = random.sample(all_ids, min(count, len(all_ids)))
        result = self._collection.get(ids=chosen, include=["documents", "metadatas"])
        return dict(result)

    def clear(self) -> None:
        """Clear all verses from the collection."""
        # ChromaDB doesn't have a direct clear method, so we delete and recreate
        self._client.delete_collection(name=self._collection_name)
        self._collection = self._get_or_create_collection()

    def close(self) -> None:
        """Close the vector store and release resources."""
        # PersistentClient has no close(); stop its internal systems instead
        if self._client is not None:
            try:
                if hasattr(self._client, "_identifier_to_system"):
                    for system in list(self._client._identifier_to_system.values()):
                        if hasattr(system, "stop"):
                            system.stop()
            except Exception as e:
                logger.debug(f"Ignoring error while stopping ChromaDB systems: {e}")

        self._collection = None  # type: ignore[assignment]
        self._client = None  # type: ignore[assignment]

        # Force garbage collection to release file handles
        gc.collect()
