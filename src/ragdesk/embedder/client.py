# src/ragdesk/embedder/client.py
"""Client-based embedder implementation."""

from ragdesk.embedder.base import Embedder
from ragdesk.providers.base import EmbeddingClient


class ClientEmbedder(Embedder):
    """Embedder that uses an EmbeddingClient for generating embeddings.

    Example:
        from ragdesk.providers.litellm import LiteLLMEmbeddingClient
        from ragdesk.embedder import ClientEmbedder

        client = LiteLLMEmbeddingClient(model="openai/text-embedding-3-small")
        embedder = ClientEmbedder(embedding_client=client)
    """

    def __init__(self, embedding_client: EmbeddingClient) -> None:
        """Initialize the embedder.

        Args:
            embedding_client: Any EmbeddingClient implementation
        """
        self._client = embedding_client

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (batched)."""
        if not texts:
            return []
        embeddings = self._client.embed(texts)
        if len(embeddings) != len(texts):
            raise RuntimeError(
                f"Embedding count mismatch: {len(texts)} texts, {len(embeddings)} embeddings"
            )
        return embeddings
