# tests/test_sources.py
"""Tests for source discovery."""

from unittest.mock import MagicMock

from ragdesk.exceptions import StoreReadError
from ragdesk.sources import SourceDiscovery


class TestSourceDiscovery:
    def test_lists_sorted_sources(self, corpus):
        discovery = corpus.source_discovery()
        assert discovery.list_sources() == ["handbook", "policy"]

    def test_empty_store(self, memory_store):
        assert SourceDiscovery(memory_store).list_sources() == []

    def test_blank_values_dropped(self):
        store = MagicMock()
        store.list_distinct_metadata_values.return_value = {"b", "", "a"}
        assert SourceDiscovery(store).list_sources() == ["a", "b"]

    def test_read_failure_uses_fallback(self, caplog):
        store = MagicMock()
        store.list_distinct_metadata_values.side_effect = StoreReadError("offline")

        with caplog.at_level("WARNING", logger="ragdesk.sources"):
            sources = SourceDiscovery(store, fallback_sources=["faq", "handbook"]).list_sources()

        assert sources == ["faq", "handbook"]
        assert "fallback" in caplog.text

    def test_read_failure_without_fallback_is_empty(self):
        store = MagicMock()
        store.list_distinct_metadata_values.side_effect = StoreReadError("offline")
        assert SourceDiscovery(store).list_sources() == []
