# src/ragdesk/configuration/storage/local.py
"""Local filesystem storage configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ragdesk.embedder import Embedder
    from ragdesk.stores import DocumentStore, QueryLogStore


@dataclass(frozen=True)
class LocalStorage:
    """Local filesystem storage using Chroma and SQLite.

    All data is persisted to the specified directory:
    - chroma/: Chunks and embeddings (ChromaDB)
    - query_log.db: Question/answer log (SQLite)

    Args:
        data_dir: Base directory for all storage files.
                  Created if it doesn't exist.
        collection_name: Chroma collection holding the chunks.

    Example:
        storage = LocalStorage("./my_data")
    """

    data_dir: str
    collection_name: str = "documents"

    def build_stores(self, embedder: Embedder) -> tuple[DocumentStore, QueryLogStore]:
        """Build the document store and query log.

        Creates the data directory if it doesn't exist.

        Returns:
            Tuple of (document_store, query_log)
        """
        from ragdesk.stores import ChromaDocumentStore, SQLiteQueryLogStore

        Path(self.data_dir).mkdir(parents=True, exist_ok=True)

        document_store = ChromaDocumentStore(
            os.path.join(self.data_dir, "chroma"),
            embedder=embedder,
            collection_name=self.collection_name,
        )
        query_log = SQLiteQueryLogStore(os.path.join(self.data_dir, "query_log.db"))
        return document_store, query_log
