"""Shared pytest fixtures."""

import contextlib
import os
import re
import tempfile
import zlib
from dataclasses import dataclass, field
from typing import Any

import pytest

from ragdesk.embedder import Embedder
from ragdesk.providers import LLMClient
from ragdesk.ragdesk import RagDesk
from ragdesk.settings import Settings
from ragdesk.stores import InMemoryDocumentStore, SQLiteQueryLogStore

DIMENSIONS = 64
_WORD = re.compile(r"[a-z0-9]+")

STRUCTURED_RESPONSE = (
    "ANSWER: Refunds are issued within 14 days.\n"
    "CONFIDENCE: 8\n"
    "REASONING: The refund policy states the 14 day window."
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir

        # Cleanup ChromaDB's shared system cache to release file handles
        # See: https://github.com/chroma-core/chroma/issues/5868
        try:
            from chromadb.api.shared_system_client import SharedSystemClient

            if hasattr(SharedSystemClient, "_identifier_to_system"):
                identifiers_to_remove = [
                    identifier
                    for identifier in list(SharedSystemClient._identifier_to_system.keys())
                    if tmpdir in str(identifier)
                ]
                for identifier in identifiers_to_remove:
                    if identifier in SharedSystemClient._identifier_to_system:
                        system = SharedSystemClient._identifier_to_system.pop(identifier)
                        with contextlib.suppress(Exception):
                            system.stop()
        except Exception:
            pass  # Best effort cleanup - ChromaDB internals may change


class HashingEmbedder(Embedder):
    """Bag-of-words embedder: each word increments one hashed dimension.

    Texts sharing words get a high cosine similarity, which is all the
    retrieval tests need.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self._vector(text) for text in texts]

    @staticmethod
    def _vector(text: str) -> list[float]:
        vector = [0.0] * DIMENSIONS
        for word in _WORD.findall(text.lower()):
            vector[zlib.crc32(word.encode()) % DIMENSIONS] += 1.0
        return vector


class FailingEmbedder(Embedder):
    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        raise RuntimeError("embedding service unavailable")


class ScriptedLLM(LLMClient):
    """LLM client returning a fixed response and recording every call."""

    def __init__(self, response: str | None = STRUCTURED_RESPONSE, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def complete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        model: str | None = None,
    ) -> str:
        self.calls.append({"messages": messages, "temperature": temperature, "model": model})
        if self.error is not None:
            raise self.error
        return self.response  # type: ignore[return-value]

    @property
    def last_prompt(self) -> str:
        return self.calls[-1]["messages"][-1]["content"]


@dataclass(frozen=True)
class FakeProvider:
    """Provider that hands out pre-built test components."""

    embedder: Embedder
    llm: LLMClient = field(default_factory=ScriptedLLM)

    def build_embedder(self, settings: Any) -> Embedder:
        return self.embedder

    def build_llm_client(self, settings: Any = None) -> LLMClient:
        return self.llm


@pytest.fixture
def embedder():
    return HashingEmbedder()


@pytest.fixture
def llm():
    return ScriptedLLM()


@pytest.fixture
def memory_store(embedder):
    return InMemoryDocumentStore(embedder)


@pytest.fixture
def query_log(tmp_path):
    return SQLiteQueryLogStore(os.path.join(tmp_path, "query_log.db"))


@pytest.fixture
def desk(embedder, llm, memory_store, query_log):
    """RagDesk over an in-memory store, a real SQLite log and a scripted LLM."""
    return RagDesk.from_stores(
        provider=FakeProvider(embedder=embedder, llm=llm),
        document_store=memory_store,
        query_log=query_log,
        settings=Settings(chunk_size=60, chunk_overlap=10),
    )


@pytest.fixture
def corpus(desk):
    """Two sources with a few chunks each."""
    ingestor = desk.ingestor()
    ingestor.ingest_text(
        "Refunds are issued within 14 days of purchase.\n\n"
        "Refund requests need the original receipt.",
        metadata={"source": "policy"},
    )
    ingestor.ingest_text(
        "The office opens at 9am on weekdays.\n\nParking is free for visitors.",
        metadata={"source": "handbook"},
    )
    return desk
