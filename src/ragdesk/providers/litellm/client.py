# src/ragdesk/providers/litellm/client.py
"""LiteLLM client implementations for LLM and embedding APIs."""

from typing import Any

import litellm

from ragdesk.providers.base import ChatMessage, EmbeddingClient, LLMClient
from ragdesk.providers.litellm.models import ChatModels, EmbeddingModels


class LiteLLMClient(LLMClient):
    """LiteLLM-based LLM client for text generation.

    Supports any model available through LiteLLM (OpenAI, Anthropic, Gemini,
    Ollama, etc.).

    Example:
        from ragdesk.providers.litellm import LiteLLMClient, ChatModels

        client = LiteLLMClient(model=ChatModels.GPT_4O_MINI)
        response = client.complete([{"role": "user", "content": "Hello"}])
    """

    def __init__(
        self,
        model: str = ChatModels.GPT_4O_MINI,
        num_retries: int = 3,
        api_key: str | None = None,
    ) -> None:
        """Initialize the LiteLLM client.

        Args:
            model: Default LiteLLM model identifier, overridable per call.
            num_retries: Number of retries on rate limit errors. LiteLLM handles
                        exponential backoff automatically. Default: 3.
            api_key: Optional API key. If None, LiteLLM reads the provider's
                     standard environment variable.
        """
        self.model = model
        self.num_retries = num_retries
        self.api_key = api_key

    def _completion_kwargs(
        self,
        messages: list[ChatMessage],
        temperature: float | None,
        model: str | None,
    ) -> dict[str, Any]:
        completion_kwargs: dict[str, Any] = {
            "model": model or self.model,
            "messages": messages,
            "drop_params": True,
            "num_retries": self.num_retries,
        }
        if temperature is not None:
            completion_kwargs["temperature"] = temperature
        if self.api_key:
            completion_kwargs["api_key"] = self.api_key
        return completion_kwargs

    @staticmethod
    def _extract_content(response: Any, model: str) -> str:
        if not response.choices:
            raise ValueError(f"LLM returned no choices for model {model}")
        content = response.choices[0].message.content
        if content is None:
            raise ValueError(f"LLM returned None content for model {model}")
        return str(content)

    def complete(
        self,
        messages: list[ChatMessage],
        temperature: float | None = None,
        model: str | None = None,
    ) -> str:
        """Generate a completion using LiteLLM."""
        kwargs = self._completion_kwargs(messages, temperature, model)
        response = litellm.completion(**kwargs)
        return self._extract_content(response, kwargs["model"])

    async def acomplete(
        self,
        messages: list[ChatMessage],
        temperature: float | None = None,
        model: str | None = None,
    ) -> str:
        """Generate a completion using LiteLLM (async)."""
        kwargs = self._completion_kwargs(messages, temperature, model)
        response = await litellm.acompletion(**kwargs)
        return self._extract_content(response, kwargs["model"])


class LiteLLMEmbeddingClient(EmbeddingClient):
    """LiteLLM-based embedding client.

    Example:
        from ragdesk.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

        client = LiteLLMEmbeddingClient(model=EmbeddingModels.TEXT_3_SMALL)
        embeddings = client.embed(["Hello world", "How are you?"])
    """

    def __init__(
        self,
        model: str = EmbeddingModels.TEXT_3_SMALL,
        num_retries: int = 3,
        api_key: str | None = None,
    ) -> None:
        """Initialize the LiteLLM embedding client.

        Args:
            model: LiteLLM embedding model identifier.
            num_retries: Number of retries on rate limit errors. Default: 3.
            api_key: Optional API key.
        """
        self.model = model
        self.num_retries = num_retries
        self.api_key = api_key

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM."""
        if not texts:
            return []

        embedding_kwargs: dict[str, Any] = {
            "model": self.model,
            "input": texts,
            "num_retries": self.num_retries,
        }
        if self.api_key:
            embedding_kwargs["api_key"] = self.api_key

        response = litellm.embedding(**embedding_kwargs)
        # Sort by index to maintain order
        sorted_data = sorted(response.data, key=lambda x: x["index"])
        return [item["embedding"] for item in sorted_data]
