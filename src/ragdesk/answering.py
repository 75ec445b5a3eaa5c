"""Question answering over retrieved documents."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

import pydantic
from pydantic import BaseModel, Field, field_validator

from ragdesk import confidence
from ragdesk.exceptions import GenerationError, ValidationError
from ragdesk.models import (
    ConfidenceMetrics,
    ParsedAnswer,
    QueryResponse,
    RetrievedDocument,
    SourceReference,
)
from ragdesk.parser import ResponseLabels, ResponseParser
from ragdesk.providers import ChatMessage, LLMClient
from ragdesk.retriever import FederatedRetriever
from ragdesk.stores import QueryLogStore

logger = logging.getLogger(__name__)

ANSWER_PROMPT = """Answer the question using only the CONTENT below.
If the answer is not in the content, reply: "I could not find the answer in the documents."

Reply in exactly this format:
{answer_label} [main answer]
{confidence_label} [confidence from 1-10, where 10 = very sure]
{reasoning_label} [short explanation of why this answer follows from the documents]

CONTENT:
{context}

QUESTION: {question}
"""

DEFAULT_MAX_CONTEXT_CHARS = 1000
DEFAULT_SNIPPET_CHARS = 200
MAX_K = 20


class AnswerStage(str, Enum):
    """Stages of one answer run, in order. FAILED can follow any stage."""

    RETRIEVING = "retrieving"
    SCORING = "scoring"
    GENERATING = "generating"
    PARSING = "parsing"
    LOGGING = "logging"
    DONE = "done"
    FAILED = "failed"


StageCallback = Callable[[AnswerStage], None]


class QueryRequest(BaseModel):
    """Validated input for one question."""

    question: str
    k: int = Field(default=4, ge=1, le=MAX_K)
    filter: dict[str, Any] | None = None
    model: str | None = None
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)

    @field_validator("question")
    @classmethod
    def _question_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("question must not be empty")
        return value.strip()


def format_documents(
    documents: Sequence[RetrievedDocument],
    max_chars: int = DEFAULT_MAX_CONTEXT_CHARS,
) -> str:
    """Render retrieved documents as a numbered context block.

    Each document is headed "#i source (Score: x.xxxx)" and its content is
    cut to max_chars with a trailing "..." when longer.
    """
    blocks = []
    for i, doc in enumerate(documents, 1):
        content = doc.content
        if len(content) > max_chars:
            content = content[:max_chars] + "..."
        blocks.append(f"#{i} {doc.source or ''} (Score: {doc.similarity_score:.4f})\n{content}")
    return "\n\n".join(blocks)


class AnswerOrchestrator:
    """Runs one question through retrieve, score, generate, parse and log.

    Retrieval and generation failures propagate as typed errors. The query
    log write is best-effort: a failure is logged and reported on the
    response, never raised.
    """

    def __init__(
        self,
        retriever: FederatedRetriever,
        llm_client: LLMClient,
        query_log: QueryLogStore | None = None,
        parser: ResponseParser | None = None,
        prompt_template: str | None = None,
        default_k: int = 4,
        max_k: int = MAX_K,
        temperature: float | None = 0.0,
        max_context_chars: int = DEFAULT_MAX_CONTEXT_CHARS,
        snippet_chars: int = DEFAULT_SNIPPET_CHARS,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            retriever: Retriever used for every question
            llm_client: Language model client
            query_log: Optional question/answer log
            parser: Response parser (default labels: ANSWER/CONFIDENCE/REASONING)
            prompt_template: Prompt with {context} and {question} placeholders,
                and optionally {answer_label}, {confidence_label}, {reasoning_label}
            default_k: Number of documents when k is not given
            max_k: Largest k accepted (never above 20)
            temperature: Default sampling temperature
            max_context_chars: Per-document truncation in the prompt
            snippet_chars: Length of the snippet on each SourceReference
        """
        self.retriever = retriever
        self.llm_client = llm_client
        self.query_log = query_log
        self.parser = parser or ResponseParser()
        self.prompt_template = prompt_template or ANSWER_PROMPT
        self.default_k = default_k
        self.max_k = min(max_k, MAX_K)
        self.temperature = temperature
        self.max_context_chars = max_context_chars
        self.snippet_chars = snippet_chars

    def answer(
        self,
        question: str,
        k: int | None = None,
        filter: dict[str, Any] | None = None,
        model: str | None = None,
        temperature: float | None = None,
        on_stage: StageCallback | None = None,
    ) -> QueryResponse:
        """Answer a question from the document store.

        Raises:
            ValidationError: If the request is malformed
            StoreReadError: If a filtered search fails
            GenerationError: If the language model call fails
        """
        stage = _StageTracker(on_stage)
        try:
            request = self._validate(question, k, filter, model, temperature)

            stage.enter(AnswerStage.RETRIEVING)
            documents = self.retriever.retrieve(request.question, k=request.k, filter=request.filter)

            stage.enter(AnswerStage.SCORING)
            metrics = confidence.score(documents)

            stage.enter(AnswerStage.GENERATING)
            messages = self._messages(request.question, documents)
            try:
                raw = self.llm_client.complete(
                    messages, temperature=self._temperature(request), model=request.model
                )
            except Exception as e:
                raise GenerationError(f"Language model call failed: {e}") from e
            raw = _require_text(raw)

            stage.enter(AnswerStage.PARSING)
            parsed = self.parser.parse(raw)

            stage.enter(AnswerStage.LOGGING)
            log_error = self._log(request.question, parsed.answer)
        except Exception:
            stage.enter(AnswerStage.FAILED)
            raise

        stage.enter(AnswerStage.DONE)
        return self._response(request.question, parsed, metrics, documents, log_error)

    async def aanswer(
        self,
        question: str,
        k: int | None = None,
        filter: dict[str, Any] | None = None,
        model: str | None = None,
        temperature: float | None = None,
        on_stage: StageCallback | None = None,
    ) -> QueryResponse:
        """Answer a question without blocking the event loop."""
        stage = _StageTracker(on_stage)
        try:
            request = self._validate(question, k, filter, model, temperature)

            stage.enter(AnswerStage.RETRIEVING)
            documents = await self.retriever.aretrieve(
                request.question, k=request.k, filter=request.filter
            )

            stage.enter(AnswerStage.SCORING)
            metrics = confidence.score(documents)

            stage.enter(AnswerStage.GENERATING)
            messages = self._messages(request.question, documents)
            try:
                raw = await self.llm_client.acomplete(
                    messages, temperature=self._temperature(request), model=request.model
                )
            except Exception as e:
                raise GenerationError(f"Language model call failed: {e}") from e
            raw = _require_text(raw)

            stage.enter(AnswerStage.PARSING)
            parsed = self.parser.parse(raw)

            stage.enter(AnswerStage.LOGGING)
            log_error = await asyncio.to_thread(self._log, request.question, parsed.answer)
        except Exception:
            stage.enter(AnswerStage.FAILED)
            raise

        stage.enter(AnswerStage.DONE)
        return self._response(request.question, parsed, metrics, documents, log_error)

    def _validate(
        self,
        question: str,
        k: int | None,
        filter: dict[str, Any] | None,
        model: str | None,
        temperature: float | None,
    ) -> QueryRequest:
        try:
            request = QueryRequest(
                question=question,
                k=self.default_k if k is None else k,
                filter=filter or None,
                model=model,
                temperature=temperature,
            )
        except pydantic.ValidationError as e:
            raise ValidationError.from_pydantic(e) from e
        if request.k > self.max_k:
            raise ValidationError(f"k: must be at most {self.max_k}, got {request.k}")
        return request

    def _temperature(self, request: QueryRequest) -> float | None:
        return self.temperature if request.temperature is None else request.temperature

    def _messages(
        self, question: str, documents: Sequence[RetrievedDocument]
    ) -> list[ChatMessage]:
        labels: ResponseLabels = self.parser.labels
        prompt = self.prompt_template.format(
            context=format_documents(documents, self.max_context_chars),
            question=question,
            answer_label=labels.answer,
            confidence_label=labels.confidence,
            reasoning_label=labels.reasoning,
        )
        return [{"role": "user", "content": prompt}]

    def _log(self, question: str, answer: str) -> str | None:
        """Append to the query log. Returns the error message on failure."""
        if self.query_log is None:
            return None
        try:
            self.query_log.append(question, answer)
        except Exception as e:
            logger.warning("Failed to write query log entry: %s", e)
            return str(e)
        return None

    def _response(
        self,
        question: str,
        parsed: ParsedAnswer,
        metrics: ConfidenceMetrics,
        documents: Sequence[RetrievedDocument],
        log_error: str | None,
    ) -> QueryResponse:
        return QueryResponse(
            question=question,
            answer=parsed.answer,
            llm_confidence=parsed.confidence,
            reasoning=parsed.reasoning,
            metrics=metrics,
            sources=[self._reference(doc) for doc in documents],
            logged=self.query_log is not None and log_error is None,
            log_error=log_error,
        )

    def _reference(self, doc: RetrievedDocument) -> SourceReference:
        return SourceReference(
            id=doc.id,
            metadata=doc.chunk.metadata.to_store(),
            snippet=doc.content[: self.snippet_chars],
            similarity_score=round(doc.similarity_score, 3),
            relevance=confidence.relevance_tier(doc.similarity_score),
        )


class _StageTracker:
    """Reports stage transitions to an optional callback."""

    def __init__(self, callback: StageCallback | None) -> None:
        self._callback = callback

    def enter(self, stage: AnswerStage) -> None:
        logger.debug("Answer stage: %s", stage.value)
        if self._callback is not None:
            self._callback(stage)


def _require_text(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise GenerationError("Language model returned an empty response")
    return raw
