# tests/providers/test_litellm_client.py
"""Tests for the LiteLLM clients."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ragdesk.providers import EmbeddingClient, LLMClient
from ragdesk.providers.litellm import (
    ChatModels,
    EmbeddingModels,
    LiteLLMClient,
    LiteLLMEmbeddingClient,
)

MESSAGES = [{"role": "user", "content": "Hello"}]


def mock_completion_response(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


def mock_embedding_response(embeddings):
    response = MagicMock()
    response.data = [{"index": i, "embedding": emb} for i, emb in enumerate(embeddings)]
    return response


class TestLiteLLMClient:
    def test_is_llm_client(self):
        assert isinstance(LiteLLMClient(), LLMClient)

    def test_default_model(self):
        assert LiteLLMClient().model == ChatModels.GPT_4O_MINI

    @patch("ragdesk.providers.litellm.client.litellm.completion")
    def test_complete(self, mock_completion):
        mock_completion.return_value = mock_completion_response("Hi there")

        result = LiteLLMClient(model="openai/gpt-4o").complete(MESSAGES, temperature=0.2)

        assert result == "Hi there"
        mock_completion.assert_called_once_with(
            model="openai/gpt-4o",
            messages=MESSAGES,
            drop_params=True,
            num_retries=3,
            temperature=0.2,
        )

    @patch("ragdesk.providers.litellm.client.litellm.completion")
    def test_model_override_and_api_key(self, mock_completion):
        mock_completion.return_value = mock_completion_response("ok")

        LiteLLMClient(api_key="sk-test", num_retries=1).complete(MESSAGES, model="gemini/x")

        kwargs = mock_completion.call_args.kwargs
        assert kwargs["model"] == "gemini/x"
        assert kwargs["api_key"] == "sk-test"
        assert kwargs["num_retries"] == 1
        assert "temperature" not in kwargs

    @patch("ragdesk.providers.litellm.client.litellm.completion")
    def test_no_choices(self, mock_completion):
        response = MagicMock()
        response.choices = []
        mock_completion.return_value = response
        with pytest.raises(ValueError, match="no choices"):
            LiteLLMClient().complete(MESSAGES)

    @patch("ragdesk.providers.litellm.client.litellm.completion")
    def test_none_content(self, mock_completion):
        mock_completion.return_value = mock_completion_response(None)
        with pytest.raises(ValueError, match="None content"):
            LiteLLMClient().complete(MESSAGES)

    @pytest.mark.asyncio
    @patch("ragdesk.providers.litellm.client.litellm.acompletion", new_callable=AsyncMock)
    async def test_acomplete(self, mock_acompletion):
        mock_acompletion.return_value = mock_completion_response("async hi")

        result = await LiteLLMClient().acomplete(MESSAGES, temperature=0.5)

        assert result == "async hi"
        assert mock_acompletion.call_args.kwargs["temperature"] == 0.5


class TestLiteLLMEmbeddingClient:
    def test_is_embedding_client(self):
        assert isinstance(LiteLLMEmbeddingClient(), EmbeddingClient)

    def test_default_model(self):
        assert LiteLLMEmbeddingClient().model == EmbeddingModels.TEXT_3_SMALL

    @patch("ragdesk.providers.litellm.client.litellm.embedding")
    def test_embed(self, mock_embedding):
        mock_embedding.return_value = mock_embedding_response([[1.0, 0.0], [0.0, 1.0]])

        result = LiteLLMEmbeddingClient().embed(["a", "b"])

        assert result == [[1.0, 0.0], [0.0, 1.0]]
        mock_embedding.assert_called_once_with(
            model=EmbeddingModels.TEXT_3_SMALL,
            input=["a", "b"],
            num_retries=3,
        )

    @patch("ragdesk.providers.litellm.client.litellm.embedding")
    def test_embed_empty(self, mock_embedding):
        assert LiteLLMEmbeddingClient().embed([]) == []
        mock_embedding.assert_not_called()

    @patch("ragdesk.providers.litellm.client.litellm.embedding")
    def test_preserves_order(self, mock_embedding):
        response = MagicMock()
        response.data = [
            {"index": 1, "embedding": [0.0, 1.0]},
            {"index": 0, "embedding": [1.0, 0.0]},
        ]
        mock_embedding.return_value = response

        assert LiteLLMEmbeddingClient().embed(["first", "second"]) == [[1.0, 0.0], [0.0, 1.0]]

    @patch("ragdesk.providers.litellm.client.litellm.embedding")
    def test_api_key(self, mock_embedding):
        mock_embedding.return_value = mock_embedding_response([[0.5]])
        LiteLLMEmbeddingClient(api_key="sk-embed").embed(["x"])
        assert mock_embedding.call_args.kwargs["api_key"] == "sk-embed"
