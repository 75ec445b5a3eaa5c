"""Retrieval pipeline for ragdesk."""

import asyncio
import logging

from ragdesk.exceptions import StoreError, ValidationError
from ragdesk.models import Chunk, RetrievedDocument
from ragdesk.sources import SOURCE_KEY, SourceDiscovery
from ragdesk.stores import DocumentStore, MetadataFilter

logger = logging.getLogger(__name__)


class FederatedRetriever:
    """Finds the chunks most similar to a query.

    With a filter, the store is searched once. Without one, every known
    source is searched separately for max(1, k // n) results and the pooled
    results are ranked by score, so one large source cannot crowd out the
    others. If the pool is empty, a single unfiltered search is tried.

    The merge is a stable sort: ties keep source order, then store order.
    """

    def __init__(
        self,
        store: DocumentStore,
        discovery: SourceDiscovery | None = None,
        default_k: int = 4,
    ) -> None:
        """Initialize the retriever.

        Args:
            store: Document store to search
            discovery: Source discovery (default: no fallback sources)
            default_k: Number of results when k is not given
        """
        self.store = store
        self.discovery = discovery or SourceDiscovery(store)
        self.default_k = default_k

    def retrieve(
        self,
        query: str,
        k: int | None = None,
        filter: MetadataFilter | None = None,
    ) -> list[RetrievedDocument]:
        """Return at most k documents ordered by descending similarity.

        Raises:
            ValidationError: If k is less than 1
            StoreReadError: Only in filtered mode; federated searches recover
        """
        k = self._check_k(k)
        if filter:
            return _to_documents(self.store.similarity_search_with_score(query, k=k, filter=filter))

        sources = self.discovery.list_sources()
        per_source = _per_source_k(k, sources)
        batches = [self._search_source(query, source, per_source) for source in sources]
        return self._merge(query, k, batches)

    async def aretrieve(
        self,
        query: str,
        k: int | None = None,
        filter: MetadataFilter | None = None,
    ) -> list[RetrievedDocument]:
        """Async retrieve: per-source searches run concurrently in worker threads.

        Results are identical to retrieve().
        """
        k = self._check_k(k)
        if filter:
            results = await asyncio.to_thread(
                self.store.similarity_search_with_score, query, k, filter
            )
            return _to_documents(results)

        sources = await asyncio.to_thread(self.discovery.list_sources)
        per_source = _per_source_k(k, sources)
        # gather preserves argument order, so the merge sees source order
        batches = await asyncio.gather(
            *(
                asyncio.to_thread(self._search_source, query, source, per_source)
                for source in sources
            )
        )
        if not any(batches):
            return await asyncio.to_thread(self._broad_search, query, k)
        return self._merge(query, k, list(batches))

    def _check_k(self, k: int | None) -> int:
        k = self.default_k if k is None else k
        if k < 1:
            raise ValidationError(f"k: must be at least 1, got {k}")
        return k

    def _search_source(self, query: str, source: str, k: int) -> list[tuple[Chunk, float]]:
        try:
            return self.store.similarity_search_with_score(query, k=k, filter={SOURCE_KEY: source})
        except StoreError as e:
            logger.warning("Search in source %r failed, skipping: %s", source, e)
            return []

    def _merge(
        self,
        query: str,
        k: int,
        batches: list[list[tuple[Chunk, float]]],
    ) -> list[RetrievedDocument]:
        pool = [item for batch in batches for item in batch]
        if not pool:
            return self._broad_search(query, k)
        pool.sort(key=lambda item: item[1], reverse=True)
        return _to_documents(pool[:k])

    def _broad_search(self, query: str, k: int) -> list[RetrievedDocument]:
        logger.info("No per-source results, falling back to an unfiltered search")
        try:
            results = self.store.similarity_search_with_score(query, k=k)
        except StoreError as e:
            logger.warning("Unfiltered fallback search failed: %s", e)
            return []
        return _to_documents(results[:k])


def _per_source_k(k: int, sources: list[str]) -> int:
    return max(1, k // len(sources)) if sources else k


def _to_documents(results: list[tuple[Chunk, float]]) -> list[RetrievedDocument]:
    return [RetrievedDocument(chunk=chunk, similarity_score=score) for chunk, score in results]
