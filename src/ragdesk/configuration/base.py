# src/ragdesk/configuration/base.py
"""Protocol definitions for configuration objects.

Provider and storage configurations are structural: any frozen dataclass
with the right build_* methods satisfies them, no inheritance needed. The
stores themselves (ragdesk.stores.base) are ABCs instead, since they share
behavior through inheritance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ragdesk.embedder import Embedder
    from ragdesk.providers import LLMClient
    from ragdesk.settings import Settings
    from ragdesk.stores import DocumentStore, QueryLogStore


@runtime_checkable
class ProviderConfig(Protocol):
    """Protocol for provider configurations.

    Provider configurations build the AI/ML components:
    - Embedder: Creates vector embeddings for the document store
    - LLMClient: Generates answers
    """

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build an embedder for creating vector embeddings."""
        ...

    def build_llm_client(self, settings: Settings | None = None) -> LLMClient:
        """Build an LLM client for answer generation."""
        ...


@runtime_checkable
class StorageConfig(Protocol):
    """Protocol for storage configurations.

    Storage configurations build the data stores:
    - DocumentStore: Chunks and their embeddings
    - QueryLogStore: Append-only question/answer log
    """

    def build_stores(self, embedder: Embedder) -> tuple[DocumentStore, QueryLogStore]:
        """Build both storage components.

        Args:
            embedder: Embedder the document store uses on write and search

        Returns:
            Tuple of (document_store, query_log)
        """
        ...
