"""ragdesk - retrieval-augmented answers over a small document corpus.

Documents are chunked and embedded into a vector store; questions are
answered by a language model over the most similar chunks, searched per
source, with a confidence estimate and the sources used.

Quick Start (LiteLLM + Local Storage):
    from ragdesk import RagDesk, LiteLLMProvider, LocalStorage

    desk = RagDesk(
        provider=LiteLLMProvider(
            llm="openai/gpt-4o-mini",
            embedding="openai/text-embedding-3-small",
        ),
        storage=LocalStorage("./data"),
    )

    # Ingest documents
    desk.ingestor().ingest_file("handbook.pdf")

    # Ask
    response = desk.orchestrator().answer("What is...?", k=4)
    print(response.answer, response.metrics.overall_confidence)
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("ragdesk")
except PackageNotFoundError:
    # Development / source-tree fallback (e.g. running tests without installing the wheel).
    try:
        import tomllib
        from pathlib import Path

        def _read_version_from_pyproject() -> str | None:
            for parent in Path(__file__).resolve().parents:
                pyproject = parent / "pyproject.toml"
                if pyproject.exists():
                    data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
                    version = data.get("project", {}).get("version")
                    return str(version) if version is not None else None
            return None

        __version__ = _read_version_from_pyproject() or "unknown"
    except (OSError, tomllib.TOMLDecodeError):
        __version__ = "unknown"

# Pipelines
from ragdesk.answering import AnswerOrchestrator, AnswerStage, QueryRequest, format_documents
from ragdesk.chunker import TextChunker

# Configuration objects
from ragdesk.configuration import (
    LiteLLMProvider,
    LocalStorage,
    ProviderConfig,
    StorageConfig,
)
from ragdesk.embedder import Embedder

# Errors
from ragdesk.exceptions import (
    GenerationError,
    LoggingError,
    RagDeskError,
    StoreError,
    StoreReadError,
    StoreWriteError,
    ValidationError,
)
from ragdesk.ingestor import IngestRequest, IngestStats, Ingestor

# File loading
from ragdesk.loaders import Loader, LoaderRegistry, TextLoader

# Core models
from ragdesk.models import (
    Chunk,
    ChunkMetadata,
    ConfidenceMetrics,
    ParsedAnswer,
    QueryLogEntry,
    QueryResponse,
    RetrievedDocument,
    SourceReference,
)
from ragdesk.parser import ResponseLabels, ResponseParser

# Provider ABCs
from ragdesk.providers import EmbeddingClient, LLMClient

# Central configuration
from ragdesk.ragdesk import RagDesk
from ragdesk.retriever import FederatedRetriever

# Configuration
from ragdesk.settings import Settings
from ragdesk.sources import SourceDiscovery

# Storage
from ragdesk.stores import (
    ChromaDocumentStore,
    DocumentStore,
    InMemoryDocumentStore,
    QueryLogStore,
    SQLiteQueryLogStore,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "Chunk",
    "ChunkMetadata",
    "ConfidenceMetrics",
    "ParsedAnswer",
    "QueryLogEntry",
    "QueryResponse",
    "RetrievedDocument",
    "SourceReference",
    # Errors
    "RagDeskError",
    "ValidationError",
    "StoreError",
    "StoreReadError",
    "StoreWriteError",
    "GenerationError",
    "LoggingError",
    # Config
    "Settings",
    # Configuration objects
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
    # Storage
    "DocumentStore",
    "QueryLogStore",
    "ChromaDocumentStore",
    "InMemoryDocumentStore",
    "SQLiteQueryLogStore",
    # Embedding ABC
    "Embedder",
    # Provider ABCs
    "LLMClient",
    "EmbeddingClient",
    # Pipelines
    "TextChunker",
    "Ingestor",
    "IngestRequest",
    "IngestStats",
    "SourceDiscovery",
    "FederatedRetriever",
    "ResponseLabels",
    "ResponseParser",
    "AnswerOrchestrator",
    "AnswerStage",
    "QueryRequest",
    "format_documents",
    # Central configuration
    "RagDesk",
    # File loading
    "Loader",
    "LoaderRegistry",
    "TextLoader",
]
