# src/ragdesk/commands/documents.py
"""Documents and sources commands - browse what has been ingested."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ragdesk.commands.base import DocumentInfo, DocumentsResult, SourcesResult, open_ragdesk
from ragdesk.exceptions import RagDeskError

if TYPE_CHECKING:
    from ragdesk.models import Chunk
    from ragdesk.ragdesk import RagDesk

PREVIEW_CHARS = 200


def list_documents(
    source: str | None = None,
    page: int = 1,
    limit: int = 20,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    desk: RagDesk | None = None,
) -> DocumentsResult:
    """List stored chunks, newest first, one page at a time.

    Args:
        source: Only list chunks from this source
        page: 1-based page number
        limit: Chunks per page
        data_dir: Override data directory
        config_path: Override config file path
        desk: Existing RagDesk instance (skips config loading)

    Returns:
        DocumentsResult with the page, the total and all known sources
    """
    if page < 1 or limit < 1:
        return DocumentsResult(success=False, error="page and limit must be positive")

    opened = open_ragdesk(desk, data_dir, config_path)
    if isinstance(opened, str):
        return DocumentsResult(success=False, error=opened)

    store = opened.document_store
    try:
        chunks = store.list_documents(source=source, offset=(page - 1) * limit, limit=limit)
        total = store.count({"source": source} if source else None)
        sources = sorted(store.list_distinct_metadata_values("source"))
    except RagDeskError as e:
        return DocumentsResult(success=False, error=f"Failed to list documents: {e}")

    return DocumentsResult(
        success=True,
        documents=[_to_info(c) for c in chunks],
        page=page,
        limit=limit,
        total=total,
        sources=sources,
        source=source,
    )


def list_sources(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    desk: RagDesk | None = None,
) -> SourcesResult:
    """List the sources a federated search would cover.

    Falls back to the configured fallback sources if the store can't be read.
    """
    opened = open_ragdesk(desk, data_dir, config_path)
    if isinstance(opened, str):
        return SourcesResult(success=False, error=opened)
    return SourcesResult(success=True, sources=opened.source_discovery().list_sources())


def _to_info(chunk: Chunk) -> DocumentInfo:
    preview = chunk.content[:PREVIEW_CHARS]
    if len(chunk.content) > PREVIEW_CHARS:
        preview += "..."
    return DocumentInfo(
        id=chunk.id,
        source=chunk.source or "",
        chunk=chunk.metadata.chunk,
        chunk_count=chunk.metadata.chunk_count,
        preview=preview,
        created_at=chunk.created_at.isoformat() if chunk.created_at else None,
    )
