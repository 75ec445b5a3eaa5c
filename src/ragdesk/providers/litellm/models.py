# src/ragdesk/providers/litellm/models.py
"""Curated model constants for the LiteLLM provider.

These are convenience constants for IDE autocomplete. Any valid LiteLLM
model string can be passed directly instead.
"""


class ChatModels:
    """Chat/completion models for answer generation (via LiteLLMClient)."""

    # OpenAI
    GPT_4O_MINI = "openai/gpt-4o-mini"
    GPT_4O = "openai/gpt-4o"
    GPT_5_MINI = "openai/gpt-5-mini"

    # Anthropic
    CLAUDE_HAIKU_45 = "anthropic/claude-haiku-4-5-20251001"
    CLAUDE_SONNET_45 = "anthropic/claude-sonnet-4-5-20250929"

    # Google Gemini
    GEMINI_25_FLASH = "gemini/gemini-2.5-flash"

    # Local
    OLLAMA_LLAMA32 = "ollama/llama3.2"


class EmbeddingModels:
    """Embedding models for LiteLLMEmbeddingClient / ClientEmbedder."""

    # OpenAI (1536 dimensions)
    TEXT_3_SMALL = "openai/text-embedding-3-small"
    # OpenAI (3072 dimensions)
    TEXT_3_LARGE = "openai/text-embedding-3-large"

    # Google Gemini
    GEMINI_EMBEDDING_001 = "gemini/gemini-embedding-001"

    # Local
    OLLAMA_NOMIC = "ollama/nomic-embed-text"
