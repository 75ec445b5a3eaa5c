# src/ragdesk/models/results.py
"""Result data models for ragdesk queries."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from ragdesk.models.chunk import Chunk

RelevanceTier = Literal["High", "Medium", "Low"]


class RetrievedDocument(BaseModel):
    """A chunk paired with its similarity score for one query. Never persisted."""

    chunk: Chunk
    similarity_score: float

    @property
    def id(self) -> str:
        return self.chunk.id

    @property
    def content(self) -> str:
        return self.chunk.content

    @property
    def source(self) -> str | None:
        return self.chunk.source


class ConfidenceMetrics(BaseModel):
    """Statistics over the similarity scores of one retrieval."""

    avg_similarity: float = 0.0
    max_similarity: float = 0.0
    min_similarity: float = 0.0
    score_variance: float = 0.0
    document_count: int = 0
    overall_confidence: float = 0.0  # Normalized to [0, 1]

    @property
    def consistency(self) -> float:
        """Score consistency factor (1.0 = all scores equal)."""
        return max(0.0, 1.0 - self.score_variance * 10)

    @property
    def recommendation(self) -> str:
        if self.overall_confidence > 0.7:
            return "High confidence answer"
        if self.overall_confidence > 0.4:
            return "Moderate confidence answer"
        return "Low confidence answer - consider rephrasing question"

    @property
    def explanation(self) -> str:
        return (
            f"Confidence based on: average similarity {self.avg_similarity * 100:.1f}%, "
            f"score consistency, and number of relevant documents ({self.document_count})"
        )


class ParsedAnswer(BaseModel):
    """Fields extracted from the language model's response."""

    answer: str
    confidence: int = Field(ge=0, le=10)
    reasoning: str
    structured: bool = True  # False when the unlabelled fallback was used


class SourceReference(BaseModel):
    """Display record for one retrieved document."""

    id: str
    metadata: dict[str, Any]
    snippet: str
    similarity_score: float
    relevance: RelevanceTier


class QueryResponse(BaseModel):
    """Full response to a user question."""

    question: str
    answer: str
    llm_confidence: int
    reasoning: str
    metrics: ConfidenceMetrics
    sources: list[SourceReference]
    logged: bool = True
    log_error: str | None = None

    @property
    def documents_found(self) -> int:
        return len(self.sources)
