# src/ragdesk/stores/chroma.py
"""ChromaDB document store implementation."""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import chromadb

from ragdesk.embedder import Embedder
from ragdesk.exceptions import StoreReadError, StoreWriteError
from ragdesk.models import Chunk, ChunkMetadata
from ragdesk.stores.base import DocumentStore, MetadataFilter
from ragdesk.stores.filters import to_chroma_where

CREATED_AT_KEY = "_created_at"


class ChromaDocumentStore(DocumentStore):
    """ChromaDB-backed document store using cosine distance.

    Chunk content is embedded with the injected Embedder on write; queries
    are embedded the same way. Scores are reported as 1 - cosine distance.

    Writes go through a single collection.add call per batch. No rollback
    is attempted if Chroma fails part-way through a batch.
    """

    def __init__(
        self,
        persist_dir: str,
        embedder: Embedder,
        collection_name: str = "documents",
    ) -> None:
        """Initialize the ChromaDB store."""
        Path(persist_dir).mkdir(parents=True, exist_ok=True)
        self._embedder = embedder
        self._client = chromadb.PersistentClient(path=persist_dir)
        self._collection = self._client.get_or_create_collection(
            name=collection_name,
            metadata={"hnsw:space": "cosine"},
        )

    def close(self) -> None:
        """Close the store and release resources.

        ChromaDB doesn't have an official close method, so we call the internal
        _system.stop() to release file handles.

        See: https://github.com/chroma-core/chroma/issues/5868
        """
        self._collection = None  # type: ignore[assignment]

        try:
            if self._client is not None and hasattr(self._client, "_system"):
                self._client._system.stop()
        except Exception:
            pass  # Best effort cleanup

        self._client = None  # type: ignore[assignment]

    @staticmethod
    def _to_chroma_metadata(chunk: Chunk, created_at: datetime) -> dict[str, Any]:
        """Flatten chunk metadata into Chroma's scalar-only metadata."""
        metadata: dict[str, Any] = {}
        for key, value in chunk.metadata.to_store().items():
            if isinstance(value, str | int | float | bool):
                metadata[key] = value
            else:
                metadata[key] = json.dumps(value, default=str)
        metadata[CREATED_AT_KEY] = created_at.isoformat()
        return metadata

    @staticmethod
    def _to_chunk(chunk_id: str, content: str | None, metadata: dict[str, Any] | None) -> Chunk:
        metadata = dict(metadata or {})
        created_at = metadata.pop(CREATED_AT_KEY, None)
        return Chunk(
            id=chunk_id,
            content=content or "",
            metadata=ChunkMetadata.model_validate(metadata),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )

    def add_documents(self, chunks: list[Chunk]) -> list[str]:
        """Embed and add chunks in one batch."""
        if not chunks:
            return []

        now = datetime.now(UTC)
        try:
            embeddings = self._embedder.embed_texts([c.content for c in chunks])
            self._collection.add(
                ids=[c.id for c in chunks],
                embeddings=embeddings,  # type: ignore[arg-type]
                documents=[c.content for c in chunks],
                metadatas=[self._to_chroma_metadata(c, now) for c in chunks],
            )
        except Exception as e:
            raise StoreWriteError(
                f"Failed to write {len(chunks)} chunks: {e}", attempted=len(chunks)
            ) from e

        return [c.id for c in chunks]

    def similarity_search_with_score(
        self,
        query: str,
        k: int = 4,
        filter: MetadataFilter | None = None,
    ) -> list[tuple[Chunk, float]]:
        """Search for chunks similar to query."""
        try:
            total = self._collection.count()
            if total == 0 or k <= 0:
                return []

            results = self._collection.query(
                query_embeddings=[self._embedder.embed_text(query)],  # type: ignore[arg-type]
                n_results=min(k, total),
                where=to_chroma_where(filter),  # type: ignore[arg-type]
                include=["documents", "metadatas", "distances"],
            )
        except Exception as e:
            raise StoreReadError(f"Similarity search failed: {e}") from e

        ids = results["ids"][0]
        documents = results["documents"][0]  # type: ignore[index]
        metadatas = results["metadatas"][0]  # type: ignore[index]
        distances = results["distances"][0]  # type: ignore[index]

        scored = []
        for chunk_id, content, meta, dist in zip(ids, documents, metadatas, distances, strict=True):
            # For cosine distance: similarity = 1 - distance
            scored.append((self._to_chunk(chunk_id, content, dict(meta)), 1.0 - dist))
        return scored

    def list_distinct_metadata_values(self, key: str) -> set[str]:
        """List distinct values of a metadata key."""
        try:
            if self._collection.count() == 0:
                return set()
            results = self._collection.get(include=["metadatas"])
        except Exception as e:
            raise StoreReadError(f"Failed to list metadata values for '{key}': {e}") from e

        metadatas = results["metadatas"] or []
        return {str(meta[key]) for meta in metadatas if meta and meta.get(key) not in (None, "")}

    def count(self, filter: MetadataFilter | None = None) -> int:
        """Count stored chunks."""
        try:
            if not filter:
                return self._collection.count()
            results = self._collection.get(
                where=to_chroma_where(filter),  # type: ignore[arg-type]
                include=[],  # Only need IDs
            )
        except Exception as e:
            raise StoreReadError(f"Failed to count documents: {e}") from e
        return len(results["ids"])

    def list_documents(
        self,
        source: str | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[Chunk]:
        """List chunks newest first.

        Chroma has no ordering, so the matching records are fetched and
        sorted client-side. Fine for the small corpora this targets.
        """
        where = to_chroma_where({"source": source}) if source else None
        try:
            results = self._collection.get(
                where=where,  # type: ignore[arg-type]
                include=["documents", "metadatas"],
            )
        except Exception as e:
            raise StoreReadError(f"Failed to list documents: {e}") from e

        chunks = [
            self._to_chunk(chunk_id, content, dict(meta or {}))
            for chunk_id, content, meta in zip(
                results["ids"],
                results["documents"] or [],
                results["metadatas"] or [],
                strict=True,
            )
        ]
        chunks.sort(
            key=lambda c: (
                c.created_at.isoformat() if c.created_at else "",
                c.metadata.chunk if c.metadata.chunk is not None else 0,
            ),
            reverse=True,
        )
        return chunks[offset : offset + limit]
