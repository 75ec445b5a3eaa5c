# src/ragdesk/ragdesk.py
"""Central configuration class for ragdesk."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ragdesk.answering import AnswerOrchestrator
    from ragdesk.configuration import ProviderConfig, StorageConfig
    from ragdesk.ingestor import Ingestor
    from ragdesk.loaders import LoaderRegistry
    from ragdesk.providers import LLMClient
    from ragdesk.retriever import FederatedRetriever
    from ragdesk.sources import SourceDiscovery
    from ragdesk.stores import DocumentStore, QueryLogStore

from ragdesk.settings import Settings


class RagDesk:
    """Central configuration for ragdesk stores and components.

    RagDesk bundles the document store, query log, embedder and LLM client
    so you can configure once and create Ingestors, Retrievers and
    AnswerOrchestrators from it.

    There are two ways to create a RagDesk instance:

    1. With a storage bundle (developer-friendly):

        from ragdesk import RagDesk, LiteLLMProvider, LocalStorage

        desk = RagDesk(
            provider=LiteLLMProvider(
                llm="openai/gpt-4o-mini",
                embedding="openai/text-embedding-3-small",
            ),
            storage=LocalStorage("./data"),
        )
        desk.ingestor().ingest_text("...", metadata={"source": "handbook"})
        response = desk.orchestrator().answer("What is...?")

    2. With explicit stores:

        provider = LiteLLMProvider(llm=..., embedding=...)
        embedder = provider.build_embedder(Settings())
        desk = RagDesk.from_stores(
            provider=provider,
            document_store=ChromaDocumentStore("./data/chroma", embedder=embedder),
            query_log=SQLiteQueryLogStore("./data/query_log.db"),
        )
    """

    def __init__(
        self,
        *,
        provider: ProviderConfig,
        # EITHER storage bundle...
        storage: StorageConfig | None = None,
        # ...OR explicit stores
        document_store: DocumentStore | None = None,
        query_log: QueryLogStore | None = None,
        # Common
        settings: Settings | None = None,
        loader_registry: LoaderRegistry | None = None,
    ) -> None:
        """Create a RagDesk instance.

        Args:
            provider: Provider configuration (builds embedder and LLM client).
            storage: Storage bundle (convenience). Mutually exclusive with explicit stores.
                     Example: LocalStorage("./data")
            document_store: Explicit document store. Must embed with its own embedder.
            query_log: Explicit query log (optional with explicit stores).
            settings: Behavioral settings (chunk sizes, k, prompt, labels, etc.)
            loader_registry: Optional loader registry for file loading. If None, uses default.

        Raises:
            ValueError: If neither storage bundle nor a document store is provided,
                       or if both are provided.
        """
        self._settings = settings if settings is not None else Settings()

        self.embedder = provider.build_embedder(self._settings)

        # Path 1: Storage bundle (convenience)
        if storage is not None:
            if document_store is not None or query_log is not None:
                raise ValueError("Cannot mix 'storage' bundle with explicit stores")
            self.document_store, self.query_log = storage.build_stores(self.embedder)

        # Path 2: Explicit stores
        elif document_store is not None:
            self.document_store = document_store
            self.query_log = query_log

        else:
            raise ValueError("Must provide either 'storage' bundle or an explicit 'document_store'")

        self._provider = provider
        self._llm_client: LLMClient | None = None
        self._loader_registry = loader_registry

    @classmethod
    def from_stores(
        cls,
        *,
        provider: ProviderConfig,
        document_store: DocumentStore,
        query_log: QueryLogStore | None = None,
        settings: Settings | None = None,
        loader_registry: LoaderRegistry | None = None,
    ) -> RagDesk:
        """Create RagDesk with explicit stores.

        This is the explicit alternative to using a StorageConfig bundle.
        """
        return cls(
            provider=provider,
            document_store=document_store,
            query_log=query_log,
            settings=settings,
            loader_registry=loader_registry,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def llm_client(self) -> LLMClient:
        """LLM client, built from the provider on first use."""
        if self._llm_client is None:
            self._llm_client = self._provider.build_llm_client(self._settings)
        return self._llm_client

    def _get_loader_registry(self) -> LoaderRegistry:
        """Get or create the loader registry."""
        if self._loader_registry is None:
            from ragdesk.loaders import LoaderRegistry

            self._loader_registry = LoaderRegistry.default()
        return self._loader_registry

    def ingestor(self) -> Ingestor:
        """Create an Ingestor writing to this instance's document store."""
        from ragdesk.ingestor import Ingestor

        return Ingestor(
            store=self.document_store,
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.chunk_overlap,
            loaders=self._get_loader_registry(),
        )

    def source_discovery(self) -> SourceDiscovery:
        """Create a SourceDiscovery with the configured fallback sources."""
        from ragdesk.sources import SourceDiscovery

        return SourceDiscovery(self.document_store, self._settings.fallback_sources)

    def retriever(self, *, default_k: int | None = None) -> FederatedRetriever:
        """Create a FederatedRetriever over this instance's document store.

        Args:
            default_k: Number of results to return. If None, uses settings default.
        """
        from ragdesk.retriever import FederatedRetriever

        return FederatedRetriever(
            store=self.document_store,
            discovery=self.source_discovery(),
            default_k=default_k if default_k is not None else self._settings.default_k,
        )

    def orchestrator(
        self,
        *,
        llm_client: LLMClient | None = None,
        use_query_log: bool = True,
    ) -> AnswerOrchestrator:
        """Create an AnswerOrchestrator.

        Args:
            llm_client: Override the provider's LLM client.
            use_query_log: Set False to skip writing the query log.
        """
        from ragdesk.answering import AnswerOrchestrator
        from ragdesk.parser import ResponseParser

        return AnswerOrchestrator(
            retriever=self.retriever(),
            llm_client=llm_client or self.llm_client,
            query_log=self.query_log if use_query_log else None,
            parser=ResponseParser(self._settings.response_labels),
            prompt_template=self._settings.answer_prompt,
            default_k=self._settings.default_k,
            max_k=self._settings.max_k,
            temperature=self._settings.temperature,
            max_context_chars=self._settings.max_context_chars,
            snippet_chars=self._settings.snippet_chars,
        )

    def close(self) -> None:
        """Release store resources that hold file handles."""
        close = getattr(self.document_store, "close", None)
        if callable(close):
            close()
