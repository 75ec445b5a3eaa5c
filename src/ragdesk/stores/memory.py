# src/ragdesk/stores/memory.py
"""In-memory document store for tests and demos."""

from datetime import UTC, datetime

import numpy as np

from ragdesk.embedder import Embedder
from ragdesk.exceptions import StoreReadError, StoreWriteError
from ragdesk.models import Chunk
from ragdesk.stores.base import DocumentStore, MetadataFilter
from ragdesk.stores.filters import matches


class InMemoryDocumentStore(DocumentStore):
    """Keeps chunks and their embeddings in Python lists and searches by brute force.

    A batch is embedded and checked in full before anything is appended, so
    a failed add_documents leaves the store untouched.
    """

    def __init__(self, embedder: Embedder) -> None:
        self._embedder = embedder
        self._chunks: list[Chunk] = []
        self._vectors: list[np.ndarray] = []

    def add_documents(self, chunks: list[Chunk]) -> list[str]:
        if not chunks:
            return []

        try:
            embeddings = self._embedder.embed_texts([c.content for c in chunks])
        except Exception as e:
            raise StoreWriteError(
                f"Failed to embed {len(chunks)} chunks: {e}", attempted=len(chunks)
            ) from e
        if len(embeddings) != len(chunks):
            raise StoreWriteError(
                f"Embedder returned {len(embeddings)} vectors for {len(chunks)} chunks",
                attempted=len(chunks),
            )

        now = datetime.now(UTC)
        stored = [
            chunk.model_copy(update={"embedding": list(vector), "created_at": now})
            for chunk, vector in zip(chunks, embeddings, strict=True)
        ]
        self._chunks.extend(stored)
        self._vectors.extend(np.asarray(v, dtype=float) for v in embeddings)
        return [c.id for c in stored]

    def similarity_search_with_score(
        self,
        query: str,
        k: int = 4,
        filter: MetadataFilter | None = None,
    ) -> list[tuple[Chunk, float]]:
        if k <= 0 or not self._chunks:
            return []

        try:
            query_vector = np.asarray(self._embedder.embed_text(query), dtype=float)
        except Exception as e:
            raise StoreReadError(f"Failed to embed query: {e}") from e
        scored: list[tuple[Chunk, float]] = []
        for chunk, vector in zip(self._chunks, self._vectors, strict=True):
            if not matches(chunk.metadata.to_store(), filter):
                continue
            scored.append(
                (chunk.model_copy(update={"embedding": None}), _cosine(query_vector, vector))
            )

        # Stable: equal scores keep insertion order
        scored.sort(key=lambda item: item[1], reverse=True)
        return scored[:k]

    def list_distinct_metadata_values(self, key: str) -> set[str]:
        values = set()
        for chunk in self._chunks:
            value = chunk.metadata.to_store().get(key)
            if value not in (None, ""):
                values.add(str(value))
        return values

    def count(self, filter: MetadataFilter | None = None) -> int:
        return sum(1 for c in self._chunks if matches(c.metadata.to_store(), filter))

    def list_documents(
        self,
        source: str | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[Chunk]:
        selected = [c for c in self._chunks if source is None or c.source == source]
        # Insertion order doubles as write order
        selected.reverse()
        return [c.model_copy(update={"embedding": None}) for c in selected[offset : offset + limit]]


def _cosine(a: np.ndarray, b: np.ndarray) -> float:
    denom = float(np.linalg.norm(a) * np.linalg.norm(b))
    if denom == 0.0:
        return 0.0
    return float(np.dot(a, b) / denom)
