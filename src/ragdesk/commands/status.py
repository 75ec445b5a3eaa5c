# src/ragdesk/commands/status.py
"""Status command - show database statistics."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ragdesk.commands.base import SourceInfo, StatusResult, open_ragdesk
from ragdesk.exceptions import RagDeskError

if TYPE_CHECKING:
    from ragdesk.ragdesk import RagDesk


def status(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    desk: RagDesk | None = None,
) -> StatusResult:
    """Get document store and query log statistics.

    Args:
        data_dir: Override data directory
        config_path: Override config file path
        desk: Existing RagDesk instance (skips config loading)

    Returns:
        StatusResult with totals and a per-source breakdown
    """
    opened = open_ragdesk(desk, data_dir, config_path)
    if isinstance(opened, str):
        return StatusResult(success=False, error=opened)

    store = opened.document_store
    try:
        sources = sorted(store.list_distinct_metadata_values("source"))
        source_infos = [
            SourceInfo(source=source, chunk_count=store.count({"source": source}))
            for source in sources
        ]
        total_chunks = store.count()
        log_entries = opened.query_log.count() if opened.query_log is not None else 0
    except RagDeskError as e:
        return StatusResult(success=False, error=f"Failed to read status: {e}")

    return StatusResult(
        success=True,
        data_dir=data_dir or "",
        total_sources=len(sources),
        total_chunks=total_chunks,
        query_log_entries=log_entries,
        sources=source_infos,
    )
