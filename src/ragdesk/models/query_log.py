# src/ragdesk/models/query_log.py
"""Query log data model."""

from datetime import datetime

from pydantic import BaseModel


class QueryLogEntry(BaseModel):
    """One answered question. Append-only."""

    id: int
    question: str
    answer: str
    created_at: datetime
