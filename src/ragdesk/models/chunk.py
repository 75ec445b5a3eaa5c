# src/ragdesk/models/chunk.py
"""Chunk data model."""

from datetime import datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class ChunkMetadata(BaseModel):
    """Key/value bag attached to every chunk.

    A handful of keys are recognised and typed; anything else passes through
    untouched. Keys are stored under their camelCase aliases so that records
    written by other tools over the same collection stay readable.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    source: str | None = None
    chunk: int | None = None  # Zero-based position within the ingested document
    chunk_count: int | None = Field(default=None, alias="chunkCount")
    filename: str | None = None
    file_size: int | None = Field(default=None, alias="fileSize")
    file_type: str | None = Field(default=None, alias="fileType")
    description: str | None = None
    uploaded_at: str | None = Field(default=None, alias="uploadedAt")
    processed_at: str | None = Field(default=None, alias="processedAt")

    def to_store(self) -> dict[str, Any]:
        """Dump by alias, dropping unset values."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Chunk(BaseModel):
    """A bounded piece of a source document, as held by the document store."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    content: str
    metadata: ChunkMetadata = Field(default_factory=ChunkMetadata)
    embedding: list[float] | None = Field(default=None, repr=False)
    created_at: datetime | None = None

    @property
    def source(self) -> str | None:
        return self.metadata.source
