# tests/commands/test_check_command.py
"""Tests for the check command."""

from conftest import DIMENSIONS, FailingEmbedder, FakeProvider
from ragdesk.commands import check
from ragdesk.exceptions import StoreReadError
from ragdesk.ragdesk import RagDesk
from ragdesk.stores import InMemoryDocumentStore


class TestCheckCommand:
    def test_embedding_and_search(self, corpus):
        result = check.check(text="When are refunds issued?", k=2, desk=corpus)

        assert result.success is True
        assert result.error is None
        assert result.dimensions == DIMENSIONS
        assert len(result.sample) == check.SAMPLE_SIZE
        assert result.query == "When are refunds issued?"
        assert len(result.hits) == 2
        assert result.hits[0].source == "policy"
        assert result.hits[0].score >= result.hits[1].score

    def test_separate_search_query(self, corpus):
        result = check.check(query="office hours", desk=corpus)
        assert result.test_text == check.DEFAULT_TEST_TEXT
        assert result.query == "office hours"
        assert result.hits[0].source == "handbook"

    def test_empty_store(self, desk):
        result = check.check(desk=desk)
        assert result.success is True
        assert result.dimensions == DIMENSIONS
        assert result.hits == []

    def test_embedding_failure_is_reported(self):
        embedder = FailingEmbedder()
        desk = RagDesk.from_stores(
            provider=FakeProvider(embedder=embedder),
            document_store=InMemoryDocumentStore(embedder),
        )

        result = check.check(desk=desk)

        assert result.success is False
        assert "embedding service unavailable" in result.embedding_error
        assert result.search_error is None
        assert "embedding service unavailable" in result.error

    def test_search_failure_is_reported(self, corpus, monkeypatch):
        def offline(query, k=4, filter=None):
            raise StoreReadError("store offline")

        monkeypatch.setattr(corpus.document_store, "similarity_search_with_score", offline)

        result = check.check(desk=corpus)

        assert result.success is False
        assert result.embedding_error is None
        assert result.dimensions == DIMENSIONS
        assert result.search_error == "store offline"

    def test_blank_text_rejected(self, desk):
        result = check.check(text="  ", desk=desk)
        assert result.success is False
        assert "empty" in result.error

    def test_invalid_k(self, desk):
        result = check.check(k=0, desk=desk)
        assert result.success is False
        assert "k" in result.error
