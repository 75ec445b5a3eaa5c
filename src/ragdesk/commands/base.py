# src/ragdesk/commands/base.py
"""Base types for the commands layer.

Every command returns a dataclass deriving from CommandResult: success is
the discriminant, error carries a human-readable message on failure, and
the remaining fields hold the structured payload.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from ragdesk.models import ConfidenceMetrics, QueryLogEntry, SourceReference

if TYPE_CHECKING:
    from ragdesk.ragdesk import RagDesk


@dataclass
class CommandResult:
    """Base result type for commands."""

    success: bool
    error: str | None = None


@dataclass
class FileIngestResult:
    """Result for a single ingested file or text."""

    filepath: str
    source: str = ""
    chunks: int = 0
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class IngestResult(CommandResult):
    """Result of the ingest command.

    Attributes:
        files_processed: Number of files (or texts) successfully ingested
        files_failed: Number of files that failed
        total_chunks: Total chunks written
        file_results: Per-file results
    """

    files_processed: int = 0
    files_failed: int = 0
    total_chunks: int = 0
    file_results: list[FileIngestResult] = field(default_factory=list)


@dataclass
class QueryResult(CommandResult):
    """Result of the query command."""

    question: str = ""
    answer: str | None = None
    llm_confidence: int = 0
    reasoning: str = ""
    metrics: ConfidenceMetrics | None = None
    sources: list[SourceReference] = field(default_factory=list)
    logged: bool = False
    log_error: str | None = None


@dataclass
class DocumentInfo:
    """One stored chunk as shown in listings."""

    id: str
    source: str
    chunk: int | None
    chunk_count: int | None
    preview: str
    created_at: str | None = None


@dataclass
class DocumentsResult(CommandResult):
    """Result of the documents command.

    Attributes:
        documents: Chunks on the requested page, newest first
        page: 1-based page number
        limit: Page size
        total: Chunks matching the source filter
        sources: All known sources
        source: The source filter applied, if any
    """

    documents: list[DocumentInfo] = field(default_factory=list)
    page: int = 1
    limit: int = 20
    total: int = 0
    sources: list[str] = field(default_factory=list)
    source: str | None = None

    @property
    def pages(self) -> int:
        return max(1, -(-self.total // self.limit)) if self.limit else 1


@dataclass
class SourcesResult(CommandResult):
    """Result of the sources command."""

    sources: list[str] = field(default_factory=list)


@dataclass
class SourceInfo:
    """Information about an indexed source."""

    source: str
    chunk_count: int


@dataclass
class StatusResult(CommandResult):
    """Result of the status command.

    Attributes:
        total_sources: Number of indexed sources
        total_chunks: Total chunks in the document store
        query_log_entries: Entries in the query log
        sources: Per-source breakdown
    """

    data_dir: str = ""
    total_sources: int = 0
    total_chunks: int = 0
    query_log_entries: int = 0
    sources: list[SourceInfo] = field(default_factory=list)


@dataclass
class SearchHit:
    """One raw search result shown by the check command."""

    id: str
    source: str
    score: float
    preview: str


@dataclass
class CheckResult(CommandResult):
    """Result of the check command.

    The embedding and search checks run independently; each records its own
    error, and success is True only when both pass.

    Attributes:
        test_text: Text sent to the embedding service
        dimensions: Length of the returned vector
        sample: First values of the vector
        embedding_error: Why the embedding check failed, if it did
        query: Text used for the unfiltered search
        hits: Raw search results, best first
        search_error: Why the search check failed, if it did
    """

    test_text: str = ""
    dimensions: int = 0
    sample: list[float] = field(default_factory=list)
    embedding_error: str | None = None
    query: str = ""
    hits: list[SearchHit] = field(default_factory=list)
    search_error: str | None = None


@dataclass
class HistoryResult(CommandResult):
    """Result of the history command."""

    entries: list[QueryLogEntry] = field(default_factory=list)


def open_ragdesk(
    desk: RagDesk | None,
    data_dir: str | None,
    config_path: str | Path | None,
) -> RagDesk | str:
    """Return the given instance, or build one from configuration.

    Returns:
        A RagDesk instance, or an error message
    """
    if desk is not None:
        return desk

    from ragdesk.config import ConfigError, create_ragdesk, get_ragdesk_config

    config = get_ragdesk_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        if config.suggestion:
            return f"{config.message} {config.suggestion}"
        return config.message

    try:
        return create_ragdesk(config)
    except Exception as e:
        return f"Failed to create RagDesk: {e}"
