# src/ragdesk/commands/history.py
"""History command - show recently answered questions."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ragdesk.commands.base import HistoryResult, open_ragdesk
from ragdesk.exceptions import RagDeskError

if TYPE_CHECKING:
    from ragdesk.ragdesk import RagDesk


def history(
    limit: int = 10,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    desk: RagDesk | None = None,
) -> HistoryResult:
    """Return the most recent query log entries, newest first."""
    if limit < 1:
        return HistoryResult(success=False, error="limit must be positive")

    opened = open_ragdesk(desk, data_dir, config_path)
    if isinstance(opened, str):
        return HistoryResult(success=False, error=opened)
    if opened.query_log is None:
        return HistoryResult(success=False, error="No query log is configured")

    try:
        entries = opened.query_log.list_recent(limit)
    except RagDeskError as e:
        return HistoryResult(success=False, error=f"Failed to read query log: {e}")
    return HistoryResult(success=True, entries=entries)
