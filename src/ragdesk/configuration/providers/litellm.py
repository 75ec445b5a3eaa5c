# src/ragdesk/configuration/providers/litellm.py
"""LiteLLM provider configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ragdesk.embedder import Embedder
    from ragdesk.providers import LLMClient
    from ragdesk.settings import Settings


@dataclass(frozen=True)
class LiteLLMProvider:
    """Provider configuration using LiteLLM for LLM and embedding calls.

    LiteLLM provides a unified interface to 100+ LLM providers including
    OpenAI, Anthropic, Azure, Bedrock, Ollama and more.

    Args:
        llm: LiteLLM model identifier for answer generation.
             Examples: "openai/gpt-4o-mini", "anthropic/claude-haiku-4-5-20251001"
        embedding: LiteLLM model identifier for embeddings.
                   Examples: "openai/text-embedding-3-small", "ollama/nomic-embed-text"
        llm_api_key: Optional API key for the LLM. If None, LiteLLM reads
                     the provider's standard environment variable.
        embedding_api_key: Optional API key for the embedding model.

    Example:
        provider = LiteLLMProvider(
            llm="openai/gpt-4o-mini",
            embedding="openai/text-embedding-3-small",
        )
    """

    llm: str
    embedding: str
    llm_api_key: str | None = None
    embedding_api_key: str | None = None

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build a ClientEmbedder using LiteLLM embedding client.

        Args:
            settings: Settings containing num_retries for rate limit handling.
        """
        from ragdesk.embedder import ClientEmbedder
        from ragdesk.providers.litellm import LiteLLMEmbeddingClient

        embedding_client = LiteLLMEmbeddingClient(
            model=self.embedding,
            num_retries=settings.num_retries,
            api_key=self.embedding_api_key,
        )
        return ClientEmbedder(embedding_client=embedding_client)

    def build_llm_client(self, settings: Settings | None = None) -> LLMClient:
        """Build a LiteLLMClient for answer generation.

        Args:
            settings: Optional settings containing num_retries. If None,
                     uses default retry value.
        """
        from ragdesk.providers.litellm import LiteLLMClient

        num_retries = settings.num_retries if settings else 3
        return LiteLLMClient(model=self.llm, num_retries=num_retries, api_key=self.llm_api_key)
