# src/ragdesk/commands/ingest.py
"""Ingest command - add documents to the knowledge base.

This module provides the core ingest logic the CLI uses.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ragdesk.commands.base import FileIngestResult, IngestResult, open_ragdesk
from ragdesk.exceptions import RagDeskError

if TYPE_CHECKING:
    from ragdesk.ingestor import Ingestor
    from ragdesk.ragdesk import RagDesk


def ingest(
    path: str | Path | None = None,
    text: str | None = None,
    source: str | None = None,
    description: str | None = None,
    chunk_size: int | None = None,
    chunk_overlap: int | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    desk: RagDesk | None = None,
    on_file_complete: Callable[[FileIngestResult], None] | None = None,
) -> IngestResult:
    """Ingest raw text, a file, or every supported file under a directory.

    Args:
        path: File or directory to ingest
        text: Raw text to ingest instead of a path
        source: Source label for every chunk (default: file name, or
            "manual-input" for raw text)
        description: Optional description stored on every chunk
        chunk_size: Override the configured chunk size
        chunk_overlap: Override the configured chunk overlap
        data_dir: Override data directory
        config_path: Override config file path
        desk: Existing RagDesk instance (skips config loading)
        on_file_complete: Callback when a file is done

    Returns:
        IngestResult with aggregated statistics and per-file results
    """
    if (path is None) == (text is None):
        return IngestResult(success=False, error="Provide exactly one of a path or text")

    target = Path(path) if path is not None else None
    if target is not None and not target.exists():
        return IngestResult(success=False, error=f"Path not found: {target}")

    opened = open_ragdesk(desk, data_dir, config_path)
    if isinstance(opened, str):
        return IngestResult(success=False, error=opened)
    ingestor = opened.ingestor()

    metadata: dict[str, Any] = {}
    if source:
        metadata["source"] = source
    if description:
        metadata["description"] = description

    if target is not None:
        return _ingest_path(
            target, ingestor, metadata, chunk_size, chunk_overlap, on_file_complete
        )

    file_result = _ingest_one(
        lambda: ingestor.ingest_text(text or "", metadata, chunk_size, chunk_overlap),
        "<text>",
    )
    return _aggregate([file_result], on_file_complete)


def _ingest_path(
    path: Path,
    ingestor: Ingestor,
    metadata: dict[str, Any],
    chunk_size: int | None,
    chunk_overlap: int | None,
    on_file_complete: Callable[[FileIngestResult], None] | None,
) -> IngestResult:
    if path.is_file():
        files = [str(path)]
    else:
        files = _find_files(path, ingestor)
        if not files:
            return IngestResult(success=True, error="No supported files found")

    results = (
        _ingest_one(
            lambda f=filepath: ingestor.ingest_file(f, metadata, chunk_size, chunk_overlap),
            filepath,
        )
        for filepath in files
    )
    return _aggregate(results, on_file_complete)


def _find_files(directory: Path, ingestor: Ingestor) -> list[str]:
    """Find all supported files under a directory, in a stable order."""
    files = []
    for root, _, filenames in os.walk(directory):
        for filename in sorted(filenames):
            filepath = os.path.join(root, filename)
            if ingestor.loaders.find_loader(filepath):
                files.append(filepath)
    return sorted(files)


def _ingest_one(run: Callable[[], Any], filepath: str) -> FileIngestResult:
    try:
        stats = run()
    except (RagDeskError, OSError, ValueError) as e:
        return FileIngestResult(filepath=filepath, error=f"{type(e).__name__}: {e}")
    return FileIngestResult(filepath=filepath, source=stats.source, chunks=stats.inserted_count)


def _aggregate(
    file_results: Iterable[FileIngestResult],
    on_file_complete: Callable[[FileIngestResult], None] | None,
) -> IngestResult:
    result = IngestResult(success=True)
    for file_result in file_results:
        result.file_results.append(file_result)
        if file_result.failed:
            result.files_failed += 1
        else:
            result.files_processed += 1
            result.total_chunks += file_result.chunks
        if on_file_complete:
            on_file_complete(file_result)

    if result.files_failed and result.files_processed == 0:
        result.success = False
        failures = result.file_results
        result.error = failures[0].error if len(failures) == 1 else "All files failed"
    return result
