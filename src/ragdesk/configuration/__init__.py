# src/ragdesk/configuration/__init__.py
"""Configuration objects for ragdesk.

Instead of factory methods, you pass configuration objects that know how to
build their components.

Provider configurations (build AI/ML components):
- LiteLLMProvider: Uses LiteLLM for LLM and embedding calls

Storage configurations (build data stores):
- LocalStorage: Chroma + SQLite on the local filesystem

Example:
    from ragdesk import RagDesk, LiteLLMProvider, LocalStorage

    desk = RagDesk(
        provider=LiteLLMProvider(llm="openai/gpt-4o-mini", embedding="openai/text-embedding-3-small"),
        storage=LocalStorage("./data"),
    )
"""

from ragdesk.configuration.base import ProviderConfig, StorageConfig
from ragdesk.configuration.providers import LiteLLMProvider
from ragdesk.configuration.storage import LocalStorage

__all__ = [
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
]
