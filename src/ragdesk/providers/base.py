# src/ragdesk/providers/base.py
"""Abstract base classes for LLM and embedding providers."""

from abc import ABC, abstractmethod
from typing import TypedDict


class ChatMessage(TypedDict):
    """One chat turn as sent to a completion provider."""

    role: str
    content: str


class LLMClient(ABC):
    """Generates answer text from a single-turn prompt.

    Answer generation sends the whole prompt as a single user message and
    reads back the whole reply, so there is no streaming or tool calling here.
    """

    @abstractmethod
    def complete(
        self,
        messages: list[ChatMessage],
        temperature: float | None = None,
        model: str | None = None,
    ) -> str:
        """Return the model's reply to ``messages``.

        Args:
            messages: Chat turns, e.g. [{"role": "user", "content": "Hello"}]
            temperature: Sampling temperature (0.0-2.0); provider default if None
            model: Per-call model override; the configured model if None
        """
        ...

    async def acomplete(
        self,
        messages: list[ChatMessage],
        temperature: float | None = None,
        model: str | None = None,
    ) -> str:
        """Async variant of complete(); falls back to the blocking call."""
        return self.complete(messages, temperature, model)


class EmbeddingClient(ABC):
    """Turns a batch of texts into vectors, one per text, in input order."""

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        ...
