# src/ragdesk/stores/base.py
"""Abstract base classes for storage."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from ragdesk.models import Chunk, QueryLogEntry

MetadataFilter = Mapping[str, Any]


class DocumentStore(ABC):
    """Abstract base class for a vector-capable chunk store.

    Implementations embed chunk content on write and answer similarity
    queries with a score where higher means more similar. Failures are
    raised as StoreReadError / StoreWriteError.
    """

    @abstractmethod
    def add_documents(self, chunks: list[Chunk]) -> list[str]:
        """Embed and store chunks in one batch. Returns the stored IDs in order."""
        ...

    @abstractmethod
    def similarity_search_with_score(
        self,
        query: str,
        k: int = 4,
        filter: MetadataFilter | None = None,
    ) -> list[tuple[Chunk, float]]:
        """Search for chunks similar to query.

        Args:
            query: Natural-language query text
            k: Maximum number of results
            filter: Optional metadata filter. Keys are metadata keys; values
                are either a literal (equality) or an operator mapping such
                as {"$in": [...]} or {"$gte": 2}.

        Returns:
            (Chunk, score) pairs ordered by descending score.
        """
        ...

    @abstractmethod
    def list_distinct_metadata_values(self, key: str) -> set[str]:
        """List the distinct values of a metadata key across all chunks."""
        ...

    @abstractmethod
    def count(self, filter: MetadataFilter | None = None) -> int:
        """Count stored chunks, optionally restricted by a metadata filter."""
        ...

    @abstractmethod
    def list_documents(
        self,
        source: str | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[Chunk]:
        """List stored chunks, newest first, optionally for one source."""
        ...


class QueryLogStore(ABC):
    """Abstract base class for the append-only question/answer log."""

    @abstractmethod
    def append(self, question: str, answer: str) -> QueryLogEntry:
        """Persist one answered question. Raises LoggingError on failure."""
        ...

    @abstractmethod
    def list_recent(self, limit: int = 10) -> list[QueryLogEntry]:
        """Return the most recent entries, newest first."""
        ...

    @abstractmethod
    def count(self) -> int:
        """Count the entries in the log."""
        ...
