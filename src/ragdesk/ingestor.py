"""Ingestion pipeline for ragdesk."""

import logging
import mimetypes
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pydantic
from pydantic import BaseModel, Field, field_validator

from ragdesk.chunker import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE, TextChunker
from ragdesk.exceptions import ValidationError
from ragdesk.loaders import LoaderRegistry
from ragdesk.models import Chunk, ChunkMetadata
from ragdesk.stores import DocumentStore

logger = logging.getLogger(__name__)

MANUAL_SOURCE = "manual-input"


class IngestRequest(BaseModel):
    """Validated input for one ingestion."""

    text: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)
    chunk_overlap: int = Field(default=DEFAULT_CHUNK_OVERLAP, ge=0)

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text must not be empty")
        return value

    @field_validator("metadata")
    @classmethod
    def _normalise_metadata(cls, value: dict[str, Any]) -> dict[str, Any]:
        return ChunkMetadata.model_validate(value).to_store()


class IngestStats(BaseModel):
    """Outcome of one successful ingestion."""

    inserted_count: int
    chunk_count: int
    source: str


class Ingestor:
    """Turns raw text or files into chunks and writes them to the document store.

    Every chunk receives the caller's metadata plus its position
    (chunk, chunkCount) and a processedAt timestamp. All chunks of one
    ingestion are written in a single add_documents call. Identical text
    ingested twice produces two independent sets of chunks.
    """

    def __init__(
        self,
        store: DocumentStore,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
        loaders: LoaderRegistry | None = None,
    ) -> None:
        """Initialize the ingestor.

        Args:
            store: Document store receiving the chunks
            chunk_size: Default maximum characters per chunk
            chunk_overlap: Default characters shared by adjacent chunks
            loaders: File loaders (default: text + PDF)
        """
        self.store = store
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.loaders = loaders or LoaderRegistry.default()

    def ingest_text(
        self,
        text: str,
        metadata: dict[str, Any] | None = None,
        chunk_size: int | None = None,
        chunk_overlap: int | None = None,
    ) -> IngestStats:
        """Chunk and store raw text.

        Args:
            text: Document text (must contain non-whitespace characters)
            metadata: Caller metadata copied onto every chunk. source
                defaults to "manual-input".
            chunk_size: Override the default chunk size
            chunk_overlap: Override the default chunk overlap

        Raises:
            ValidationError: If the input is malformed
            StoreWriteError: If the batch write fails
        """
        request = self._validate(text, metadata, chunk_size, chunk_overlap)
        return self._ingest(request, default_source=MANUAL_SOURCE)

    def ingest_file(
        self,
        path: str,
        metadata: dict[str, Any] | None = None,
        chunk_size: int | None = None,
        chunk_overlap: int | None = None,
    ) -> IngestStats:
        """Load a file from disk and ingest its text.

        source defaults to the file name.

        Raises:
            FileNotFoundError: If the file does not exist
            ValidationError: If the file type is unsupported or yields no text
            StoreWriteError: If the batch write fails
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return self.ingest_upload(
            filename=file_path.name,
            data=file_path.read_bytes(),
            metadata=metadata,
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
        )

    def ingest_upload(
        self,
        filename: str,
        data: bytes,
        content_type: str | None = None,
        metadata: dict[str, Any] | None = None,
        chunk_size: int | None = None,
        chunk_overlap: int | None = None,
    ) -> IngestStats:
        """Ingest an in-memory upload.

        Adds filename, fileSize, fileType and uploadedAt to the metadata.
        source defaults to the file name.
        """
        if not filename:
            raise ValidationError("filename is required")
        text = self.loaders.decode(data, filename)

        file_type = content_type or mimetypes.guess_type(filename)[0] or "application/octet-stream"
        file_metadata: dict[str, Any] = {
            "filename": filename,
            "fileSize": len(data),
            "fileType": file_type,
            "uploadedAt": _now_iso(),
        }
        file_metadata.update(metadata or {})

        request = self._validate(text, file_metadata, chunk_size, chunk_overlap)
        return self._ingest(request, default_source=filename)

    def _validate(
        self,
        text: str,
        metadata: dict[str, Any] | None,
        chunk_size: int | None,
        chunk_overlap: int | None,
    ) -> IngestRequest:
        try:
            return IngestRequest(
                text=text,
                metadata=metadata or {},
                chunk_size=self.chunk_size if chunk_size is None else chunk_size,
                chunk_overlap=self.chunk_overlap if chunk_overlap is None else chunk_overlap,
            )
        except pydantic.ValidationError as e:
            raise ValidationError.from_pydantic(e) from e

    def _ingest(self, request: IngestRequest, default_source: str) -> IngestStats:
        chunker = TextChunker(chunk_size=request.chunk_size, chunk_overlap=request.chunk_overlap)
        pieces = chunker.split(request.text)

        base = dict(request.metadata)
        if not base.get("source"):
            base["source"] = default_source
        source = str(base["source"])

        processed_at = _now_iso()
        chunks = [
            Chunk(
                content=piece,
                metadata=ChunkMetadata.model_validate(
                    {**base, "chunk": i, "chunkCount": len(pieces), "processedAt": processed_at}
                ),
            )
            for i, piece in enumerate(pieces)
        ]

        ids = self.store.add_documents(chunks)
        logger.info("Ingested %d chunks from %s", len(ids), source)
        return IngestStats(inserted_count=len(ids), chunk_count=len(chunks), source=source)


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()

