# src/ragdesk/providers/__init__.py
"""Provider implementations for ragdesk.

This module contains LLM and embedding provider abstractions:
- LLMClient: Abstract base class for LLM completion providers
- EmbeddingClient: Abstract base class for embedding providers
- LiteLLM implementations

Usage:
    from ragdesk.providers import LLMClient, EmbeddingClient
    from ragdesk.providers.litellm import LiteLLMClient, ChatModels
"""

from ragdesk.providers.base import ChatMessage, EmbeddingClient, LLMClient
from ragdesk.providers.litellm import (
    ChatModels,
    EmbeddingModels,
    LiteLLMClient,
    LiteLLMEmbeddingClient,
)

__all__ = [
    # ABCs and message type
    "ChatMessage",
    "LLMClient",
    "EmbeddingClient",
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # LiteLLM clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
