# src/ragdesk/commands/check.py
"""Check command - verify the embedding service and the document store."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ragdesk.commands.base import CheckResult, SearchHit, open_ragdesk
from ragdesk.exceptions import RagDeskError

if TYPE_CHECKING:
    from ragdesk.ragdesk import RagDesk

logger = logging.getLogger(__name__)

DEFAULT_TEST_TEXT = "Hello world"
SAMPLE_SIZE = 5
PREVIEW_CHARS = 100


def check(
    text: str = DEFAULT_TEST_TEXT,
    query: str | None = None,
    k: int = 4,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    desk: RagDesk | None = None,
) -> CheckResult:
    """Embed a test string and run one unfiltered search.

    Args:
        text: Text to embed
        query: Search text (default: the test text)
        k: Number of search results
        data_dir: Override data directory
        config_path: Override config file path
        desk: Existing RagDesk instance (skips config loading)

    Returns:
        CheckResult with the vector size and sample plus the raw search hits
    """
    if not text.strip():
        return CheckResult(success=False, error="text must not be empty")
    if k < 1:
        return CheckResult(success=False, error="k must be positive")

    opened = open_ragdesk(desk, data_dir, config_path)
    if isinstance(opened, str):
        return CheckResult(success=False, error=opened)

    result = CheckResult(success=True, test_text=text, query=query or text)

    # The embedding client may raise anything its transport raises
    try:
        vector = opened.embedder.embed_text(text)
    except Exception as e:
        logger.warning("Embedding check failed: %s", e)
        result.embedding_error = f"{type(e).__name__}: {e}"
    else:
        result.dimensions = len(vector)
        result.sample = [float(v) for v in vector[:SAMPLE_SIZE]]

    try:
        scored = opened.document_store.similarity_search_with_score(result.query, k=k)
    except RagDeskError as e:
        logger.warning("Search check failed: %s", e)
        result.search_error = str(e)
    else:
        result.hits = [
            SearchHit(
                id=chunk.id,
                source=chunk.source or "",
                score=round(score, 4),
                preview=chunk.content[:PREVIEW_CHARS],
            )
            for chunk, score in scored
        ]

    failures = [e for e in (result.embedding_error, result.search_error) if e]
    if failures:
        result.success = False
        result.error = "; ".join(failures)
    return result
