"""Provider configurations."""

from ragdesk.configuration.providers.litellm import LiteLLMProvider

__all__ = ["LiteLLMProvider"]
