"""Discovery of the sources present in the document store."""

import logging
from collections.abc import Sequence

from ragdesk.exceptions import StoreReadError
from ragdesk.stores import DocumentStore

logger = logging.getLogger(__name__)

SOURCE_KEY = "source"


class SourceDiscovery:
    """Lists the distinct metadata.source values of the document store.

    Discovery is soft-fail: when the store cannot be read, the configured
    fallback list is returned instead of an error.
    """

    def __init__(self, store: DocumentStore, fallback_sources: Sequence[str] = ()) -> None:
        self.store = store
        self.fallback_sources = list(fallback_sources)

    def list_sources(self) -> list[str]:
        """Return the known sources in sorted order."""
        try:
            values = self.store.list_distinct_metadata_values(SOURCE_KEY)
        except StoreReadError as e:
            logger.warning(
                "Source discovery failed, using %d fallback sources: %s",
                len(self.fallback_sources),
                e,
            )
            return list(self.fallback_sources)
        return sorted(v for v in values if v)
