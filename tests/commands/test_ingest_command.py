# tests/commands/test_ingest_command.py
"""Tests for the ingest command."""

from ragdesk.commands import ingest, query


class TestIngestCommand:
    def test_requires_path_or_text(self, desk):
        result = ingest.ingest(desk=desk)
        assert result.success is False
        assert "exactly one" in result.error

    def test_rejects_both_path_and_text(self, desk, tmp_path):
        result = ingest.ingest(path=tmp_path, text="hello", desk=desk)
        assert result.success is False

    def test_missing_path(self, desk, tmp_path):
        result = ingest.ingest(path=tmp_path / "missing.md", desk=desk)
        assert result.success is False
        assert "not found" in result.error.lower()

    def test_ingest_text(self, desk):
        result = ingest.ingest(text="Parking is free for visitors.", source="faq", desk=desk)

        assert result.success is True
        assert result.files_processed == 1
        assert result.total_chunks == 1
        assert result.file_results[0].source == "faq"
        assert desk.document_store.count({"source": "faq"}) == 1

    def test_text_defaults_to_manual_input(self, desk):
        result = ingest.ingest(text="Parking is free for visitors.", desk=desk)
        assert result.file_results[0].source == "manual-input"

    def test_description_stored(self, desk):
        ingest.ingest(text="Parking is free.", description="visitor info", desk=desk)
        chunk = desk.document_store.list_documents()[0]
        assert chunk.metadata.description == "visitor info"

    def test_blank_text_fails(self, desk):
        result = ingest.ingest(text="   ", desk=desk)
        assert result.success is False
        assert "ValidationError" in result.error

    def test_ingest_single_file(self, desk, tmp_path):
        path = tmp_path / "policy.md"
        path.write_text("Refunds are issued within 14 days.", encoding="utf-8")

        result = ingest.ingest(path=path, desk=desk)

        assert result.success is True
        assert result.file_results[0].source == "policy.md"

    def test_ingest_directory(self, desk, tmp_path):
        (tmp_path / "a.md").write_text("Refunds are issued within 14 days.", encoding="utf-8")
        (tmp_path / "nested").mkdir()
        (tmp_path / "nested" / "b.txt").write_text("Parking is free.", encoding="utf-8")
        (tmp_path / "image.png").write_bytes(b"\x89PNG")

        seen = []
        result = ingest.ingest(path=tmp_path, desk=desk, on_file_complete=seen.append)

        assert result.success is True
        assert result.files_processed == 2
        assert result.files_failed == 0
        assert [r.source for r in seen] == ["a.md", "b.txt"]
        assert desk.document_store.list_distinct_metadata_values("source") == {"a.md", "b.txt"}

    def test_directory_without_supported_files(self, desk, tmp_path):
        (tmp_path / "image.png").write_bytes(b"\x89PNG")
        result = ingest.ingest(path=tmp_path, desk=desk)
        assert result.success is True
        assert result.files_processed == 0
        assert result.error == "No supported files found"

    def test_partial_failure(self, desk, tmp_path):
        (tmp_path / "good.md").write_text("Refunds are issued within 14 days.", encoding="utf-8")
        (tmp_path / "empty.md").write_text("", encoding="utf-8")

        result = ingest.ingest(path=tmp_path, desk=desk)

        assert result.success is True
        assert result.files_processed == 1
        assert result.files_failed == 1
        failed = [r for r in result.file_results if r.failed]
        assert failed[0].filepath.endswith("empty.md")

    def test_all_files_fail(self, desk, tmp_path):
        path = tmp_path / "empty.md"
        path.write_text("", encoding="utf-8")
        result = ingest.ingest(path=path, desk=desk)
        assert result.success is False
        assert result.error is not None

    def test_chunk_overrides(self, desk):
        result = ingest.ingest(
            text="Alpha beta gamma delta.", chunk_size=10, chunk_overlap=2, desk=desk
        )
        assert result.total_chunks == 3

    def test_corrupt_pdf_does_not_stop_directory(self, desk, tmp_path):
        (tmp_path / "good.md").write_text("Refunds are issued within 14 days.", encoding="utf-8")
        (tmp_path / "broken.pdf").write_bytes(b"%PDF-1.4\n" + b"0" * 200)

        result = ingest.ingest(path=tmp_path, desk=desk)

        assert result.success is True
        assert result.files_processed == 1
        assert result.files_failed == 1
        failed = next(r for r in result.file_results if r.failed)
        assert failed.filepath.endswith("broken.pdf")
        assert "Unreadable PDF" in failed.error
        assert desk.document_store.list_distinct_metadata_values("source") == {"good.md"}


class TestIngestThenQuery:
    def test_small_chunks_are_indexed_and_retrievable(self, desk):
        result = ingest.ingest(
            text="Alpha beta gamma delta.",
            source="greek",
            chunk_size=10,
            chunk_overlap=2,
            desk=desk,
        )
        assert result.success is True
        n = result.total_chunks
        assert n == 3

        stored = desk.document_store.list_documents(source="greek")
        assert sorted(c.metadata.chunk for c in stored) == list(range(n))
        assert all(c.metadata.chunk_count == n for c in stored)

        answered = query.query("gamma", k=1, desk=desk)

        assert answered.success is True
        assert len(answered.sources) == 1
        found = answered.sources[0]
        assert found.metadata["source"] == "greek"
        assert 0 <= found.metadata["chunk"] <= n - 1
