# src/ragdesk/settings.py
"""Behavioral settings for ragdesk.

Settings apply regardless of which LLM provider or store is used. They are
passed programmatically - the library itself does not read environment
variables. ragdesk.config reads ragdesk.yaml and RAGDESK_* variables at
the application layer and builds a Settings from them.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from ragdesk.parser import ResponseLabels


class Settings(BaseModel):
    """Behavioral settings for ragdesk.

    Example:
        settings = Settings(chunk_size=500, chunk_overlap=50, default_k=6)

        # Sources searched when the store cannot list its own
        settings = Settings(fallback_sources=["handbook", "faq"])
    """

    # Chunking
    chunk_size: int = Field(default=800, gt=0)
    chunk_overlap: int = Field(default=100, ge=0)

    # Retrieval
    default_k: int = Field(default=4, ge=1, le=20)
    max_k: int = Field(default=20, ge=1, le=20)
    fallback_sources: list[str] = Field(default_factory=list)
    parallel_source_search: bool = False  # Fan per-source searches out concurrently

    # Answer generation
    llm_model: str = "openai/gpt-4o-mini"
    temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    answer_prompt: str | None = None
    response_labels: ResponseLabels = Field(default_factory=ResponseLabels)
    max_context_chars: int = Field(default=1000, gt=0)
    snippet_chars: int = Field(default=200, gt=0)

    # Retry configuration (LiteLLM handles exponential backoff for RateLimitError)
    num_retries: int = Field(default=3, ge=0)

    @model_validator(mode="after")
    def _check_ranges(self) -> Settings:
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be less than "
                f"chunk_size ({self.chunk_size})"
            )
        if self.default_k > self.max_k:
            raise ValueError(f"default_k ({self.default_k}) must not exceed max_k ({self.max_k})")
        return self
