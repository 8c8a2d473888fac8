"""Vector store module for semantic verse search."""

from veda.vectorstore.store import VectorStore

__all__ = ["VectorStore"]
