# src/ragdesk/commands/query.py
"""Query command - answer a question from the knowledge base.

This module provides the core query logic the CLI uses.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ragdesk.commands.base import QueryResult, open_ragdesk
from ragdesk.exceptions import RagDeskError

if TYPE_CHECKING:
    from ragdesk.answering import StageCallback
    from ragdesk.ragdesk import RagDesk


def query(
    question: str,
    k: int | None = None,
    filter: dict[str, Any] | None = None,
    model: str | None = None,
    temperature: float | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    desk: RagDesk | None = None,
    on_stage: StageCallback | None = None,
) -> QueryResult:
    """Answer a question with the configured language model.

    Args:
        question: The question to ask
        k: Number of documents to retrieve (None for default)
        filter: Metadata filter; without one every source is searched
        model: Override the configured LLM model for this call
        temperature: Override the configured temperature for this call
        data_dir: Override data directory
        config_path: Override config file path
        desk: Existing RagDesk instance (skips config loading)
        on_stage: Optional callback observing answer stages

    Returns:
        QueryResult with answer, confidence and sources
    """
    opened = open_ragdesk(desk, data_dir, config_path)
    if isinstance(opened, str):
        return QueryResult(success=False, question=question, error=opened)

    orchestrator = opened.orchestrator()
    try:
        if opened.settings.parallel_source_search:
            response = asyncio.run(
                orchestrator.aanswer(question, k, filter, model, temperature, on_stage=on_stage)
            )
        else:
            response = orchestrator.answer(
                question, k, filter, model, temperature, on_stage=on_stage
            )
    except RagDeskError as e:
        return QueryResult(
            success=False,
            question=question,
            error=f"Query failed: {e}",
        )

    return QueryResult(
        success=True,
        question=response.question,
        answer=response.answer,
        llm_confidence=response.llm_confidence,
        reasoning=response.reasoning,
        metrics=response.metrics,
        sources=response.sources,
        logged=response.logged,
        log_error=response.log_error,
    )
