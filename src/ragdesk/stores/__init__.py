"""Storage abstractions for ragdesk."""

from ragdesk.stores.base import DocumentStore, MetadataFilter, QueryLogStore
from ragdesk.stores.chroma import ChromaDocumentStore
from ragdesk.stores.memory import InMemoryDocumentStore
from ragdesk.stores.sqlite_query_log import SQLiteQueryLogStore

__all__ = [
    "DocumentStore",
    "QueryLogStore",
    "MetadataFilter",
    "ChromaDocumentStore",
    "InMemoryDocumentStore",
    "SQLiteQueryLogStore",
]
