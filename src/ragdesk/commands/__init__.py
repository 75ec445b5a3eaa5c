# src/ragdesk/commands/__init__.py
"""UI-agnostic command layer for ragdesk.

Commands return data structures, allowing UIs to render results appropriately.

Usage:
    from ragdesk.commands import ingest, query, status

    # Ingest files
    result = ingest.ingest("./docs")

    # Ask a question
    result = query.query("How does authentication work?")

    # Get database status
    result = status.status()
"""

# Import command modules for easy access
from ragdesk.commands import check, documents, history, ingest, query, status
from ragdesk.commands.base import (
    CheckResult,
    CommandResult,
    DocumentInfo,
    DocumentsResult,
    FileIngestResult,
    HistoryResult,
    IngestResult,
    QueryResult,
    SourceInfo,
    SourcesResult,
    StatusResult,
)

__all__ = [
    # Base types
    "CommandResult",
    # Result types
    "IngestResult",
    "FileIngestResult",
    "QueryResult",
    "DocumentsResult",
    "DocumentInfo",
    "SourcesResult",
    "StatusResult",
    "SourceInfo",
    "HistoryResult",
    "CheckResult",
    # Command modules
    "ingest",
    "query",
    "documents",
    "status",
    "history",
    "check",
]
