# tests/test_ragdesk.py
"""Tests for the RagDesk central class."""

import os

import pytest

from conftest import FakeProvider, HashingEmbedder, ScriptedLLM
from ragdesk.answering import AnswerOrchestrator
from ragdesk.configuration import LocalStorage
from ragdesk.ingestor import Ingestor
from ragdesk.parser import ResponseLabels
from ragdesk.ragdesk import RagDesk
from ragdesk.retriever import FederatedRetriever
from ragdesk.settings import Settings
from ragdesk.stores import ChromaDocumentStore, InMemoryDocumentStore, SQLiteQueryLogStore


class TestConstruction:
    def test_requires_stores(self, embedder):
        with pytest.raises(ValueError, match="Must provide"):
            RagDesk(provider=FakeProvider(embedder=embedder))

    def test_cannot_mix_storage_and_stores(self, embedder, memory_store, temp_dir):
        with pytest.raises(ValueError, match="Cannot mix"):
            RagDesk(
                provider=FakeProvider(embedder=embedder),
                storage=LocalStorage(temp_dir),
                document_store=memory_store,
            )

    def test_storage_bundle(self, temp_dir):
        desk = RagDesk(provider=FakeProvider(embedder=HashingEmbedder()), storage=LocalStorage(temp_dir))
        try:
            assert isinstance(desk.document_store, ChromaDocumentStore)
            assert isinstance(desk.query_log, SQLiteQueryLogStore)
            assert os.path.exists(os.path.join(temp_dir, "query_log.db"))
        finally:
            desk.close()

    def test_from_stores(self, desk, memory_store, query_log):
        assert desk.document_store is memory_store
        assert desk.query_log is query_log

    def test_default_settings(self, embedder, memory_store):
        desk = RagDesk.from_stores(provider=FakeProvider(embedder=embedder), document_store=memory_store)
        assert desk.settings == Settings()
        assert desk.query_log is None

    def test_llm_client_built_lazily_once(self, embedder, memory_store):
        llm = ScriptedLLM()
        desk = RagDesk.from_stores(
            provider=FakeProvider(embedder=embedder, llm=llm), document_store=memory_store
        )
        assert desk.llm_client is llm
        assert desk.llm_client is desk.llm_client


class TestFactories:
    def test_ingestor_uses_settings(self, desk):
        ingestor = desk.ingestor()
        assert isinstance(ingestor, Ingestor)
        assert ingestor.chunk_size == 60
        assert ingestor.chunk_overlap == 10
        assert ingestor.store is desk.document_store

    def test_retriever(self, desk):
        retriever = desk.retriever()
        assert isinstance(retriever, FederatedRetriever)
        assert retriever.default_k == desk.settings.default_k
        assert desk.retriever(default_k=7).default_k == 7

    def test_source_discovery_fallback(self, embedder, memory_store):
        desk = RagDesk.from_stores(
            provider=FakeProvider(embedder=embedder),
            document_store=memory_store,
            settings=Settings(fallback_sources=["faq"]),
        )
        assert desk.source_discovery().fallback_sources == ["faq"]

    def test_orchestrator_uses_settings(self, embedder):
        labels = ResponseLabels(answer="A:", confidence="C:", reasoning="R:")
        desk = RagDesk.from_stores(
            provider=FakeProvider(embedder=embedder),
            document_store=InMemoryDocumentStore(embedder),
            settings=Settings(
                default_k=3,
                max_k=10,
                temperature=0.4,
                response_labels=labels,
                answer_prompt="{context}\n{question}",
                snippet_chars=50,
            ),
        )
        orchestrator = desk.orchestrator()

        assert isinstance(orchestrator, AnswerOrchestrator)
        assert orchestrator.default_k == 3
        assert orchestrator.max_k == 10
        assert orchestrator.temperature == 0.4
        assert orchestrator.parser.labels == labels
        assert orchestrator.prompt_template == "{context}\n{question}"
        assert orchestrator.snippet_chars == 50

    def test_orchestrator_overrides(self, desk):
        other = ScriptedLLM()
        orchestrator = desk.orchestrator(llm_client=other, use_query_log=False)
        assert orchestrator.llm_client is other
        assert orchestrator.query_log is None


class TestEndToEnd:
    def test_ingest_and_answer_with_local_storage(self, temp_dir):
        llm = ScriptedLLM()
        desk = RagDesk(
            provider=FakeProvider(embedder=HashingEmbedder(), llm=llm),
            storage=LocalStorage(temp_dir),
            settings=Settings(chunk_size=60, chunk_overlap=10),
        )
        try:
            desk.ingestor().ingest_text(
                "Refunds are issued within 14 days of purchase.", metadata={"source": "policy"}
            )
            desk.ingestor().ingest_text("Parking is free for visitors.", metadata={"source": "faq"})

            response = desk.orchestrator().answer("When are refunds issued?", k=2)

            assert response.sources[0].metadata["source"] == "policy"
            assert response.logged is True
            assert desk.query_log.count() == 1
        finally:
            desk.close()

    def test_custom_prompt_template(self, embedder, memory_store):
        llm = ScriptedLLM()
        desk = RagDesk.from_stores(
            provider=FakeProvider(embedder=embedder, llm=llm),
            document_store=memory_store,
            settings=Settings(answer_prompt="Q={question}\nDOCS={context}"),
        )
        desk.orchestrator().answer("what?")
        assert llm.last_prompt == "Q=what?\nDOCS="
