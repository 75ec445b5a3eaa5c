# src/ragdesk/exceptions.py
"""Exceptions raised by the ragdesk pipelines."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pydantic


class RagDeskError(Exception):
    """Base class for all ragdesk errors."""


class ValidationError(RagDeskError, ValueError):
    """Raised when caller input is malformed or missing.

    Never retried; surfaced to the caller immediately.
    """

    @classmethod
    def from_pydantic(cls, error: "pydantic.ValidationError") -> "ValidationError":
        """Flatten a pydantic validation error into one readable message."""
        parts = []
        for item in error.errors():
            location = ".".join(str(p) for p in item["loc"]) or "input"
            parts.append(f"{location}: {item['msg']}")
        return cls("; ".join(parts))


class StoreError(RagDeskError):
    """Base class for document store and query log failures."""


class StoreReadError(StoreError):
    """Raised when a store search or listing fails."""


class StoreWriteError(StoreError):
    """Raised when a store write fails.

    Attributes:
        attempted: Number of records the failed write tried to persist.
    """

    def __init__(self, message: str, attempted: int = 0) -> None:
        super().__init__(message)
        self.attempted = attempted


class GenerationError(RagDeskError):
    """Raised when the language model call fails or returns nothing usable."""


class LoggingError(RagDeskError):
    """Raised when a query log entry cannot be persisted.

    The answer pipeline reports this but never lets it mask an answer.
    """
