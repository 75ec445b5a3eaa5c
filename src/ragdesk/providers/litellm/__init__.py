# src/ragdesk/providers/litellm/__init__.py
"""LiteLLM provider clients for ragdesk.

- LiteLLMClient: LLM completion using LiteLLM
- LiteLLMEmbeddingClient: Embeddings using LiteLLM
- ChatModels / EmbeddingModels: Curated model constants
"""

from ragdesk.providers.litellm.client import LiteLLMClient, LiteLLMEmbeddingClient
from ragdesk.providers.litellm.models import ChatModels, EmbeddingModels

__all__ = [
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # Clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
