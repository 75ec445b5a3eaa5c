# src/ragdesk/embedder/base.py
"""Embedder abstract base class."""

from abc import ABC, abstractmethod


class Embedder(ABC):
    """Abstract base class for embedding generation.

    Subclasses must implement embed_texts; embed_text defaults to a
    single-item batch.
    """

    @abstractmethod
    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (batched)."""
        ...

    def embed_text(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text."""
        return self.embed_texts([text])[0]
