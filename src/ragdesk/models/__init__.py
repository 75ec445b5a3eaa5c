# src/ragdesk/models/__init__.py
"""Data models for ragdesk."""

from ragdesk.models.chunk import Chunk, ChunkMetadata
from ragdesk.models.query_log import QueryLogEntry
from ragdesk.models.results import (
    ConfidenceMetrics,
    ParsedAnswer,
    QueryResponse,
    RetrievedDocument,
    SourceReference,
)

__all__ = [
    "Chunk",
    "ChunkMetadata",
    "ConfidenceMetrics",
    "ParsedAnswer",
    "QueryLogEntry",
    "QueryResponse",
    "RetrievedDocument",
    "SourceReference",
]
