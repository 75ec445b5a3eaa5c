# tests/test_cli.py
"""Tests for the CLI."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from ragdesk import __version__
from ragdesk.cli import app


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("RAGDESK_LITELLM_EMBEDDING_MODEL", raising=False)
    monkeypatch.delenv("RAGDESK_DATA_DIR", raising=False)


class TestCliBasics:
    def test_help(self, runner):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "ragdesk" in result.output.lower()
        for command in ("ingest", "query", "documents", "sources", "status", "history", "check"):
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestIngestCommand:
    def test_nonexistent_path(self, runner):
        result = runner.invoke(app, ["ingest", "/nonexistent/file.md"])
        assert result.exit_code == 1
        assert "not found" in result.output.lower()

    def test_needs_path_or_text(self, runner):
        result = runner.invoke(app, ["ingest"])
        assert result.exit_code == 1
        assert "exactly one" in result.output

    def test_ingest_text(self, runner, desk):
        with patch("ragdesk.commands.ingest.open_ragdesk", return_value=desk):
            result = runner.invoke(
                app, ["ingest", "--text", "Parking is free.", "--source", "faq", "--plain"]
            )
        assert result.exit_code == 0
        assert "Ingested 1 documents (1 chunks)" in result.output
        assert desk.document_store.count({"source": "faq"}) == 1

    def test_ingest_directory(self, runner, desk, tmp_path):
        docs = tmp_path / "docs"
        docs.mkdir()
        (docs / "a.md").write_text("Refunds are issued within 14 days.", encoding="utf-8")
        with patch("ragdesk.commands.ingest.open_ragdesk", return_value=desk):
            result = runner.invoke(app, ["ingest", str(docs)])
        assert result.exit_code == 0
        assert "a.md" in result.output


class TestQueryCommand:
    def test_missing_configuration(self, runner, tmp_path):
        result = runner.invoke(app, ["query", "test question", "--data-dir", str(tmp_path / "d")])
        assert result.exit_code == 1
        assert "embedding_model" in result.output

    def test_plain_answer(self, runner, corpus):
        with patch("ragdesk.commands.query.open_ragdesk", return_value=corpus):
            result = runner.invoke(app, ["query", "When are refunds issued?", "--plain"])
        assert result.exit_code == 0
        assert "Answer: Refunds are issued within 14 days." in result.output
        assert "Model confidence: 8/10" in result.output
        assert "Sources (" in result.output

    def test_rich_answer(self, runner, corpus):
        with patch("ragdesk.commands.query.open_ragdesk", return_value=corpus):
            result = runner.invoke(app, ["query", "When are refunds issued?"])
        assert result.exit_code == 0
        assert "Answer" in result.output
        assert "policy" in result.output

    def test_filter_option(self, runner, corpus, llm):
        with patch("ragdesk.commands.query.open_ragdesk", return_value=corpus):
            result = runner.invoke(
                app, ["query", "hours?", "--source", "handbook", "-k", "1", "--plain"]
            )
        assert result.exit_code == 0
        assert "Sources (1)" in result.output
        assert "handbook" in result.output

    def test_bad_filter(self, runner, corpus):
        with patch("ragdesk.commands.query.open_ragdesk", return_value=corpus):
            result = runner.invoke(app, ["query", "hours?", "--filter", "no-equals-sign"])
        assert result.exit_code != 0

    def test_invalid_k(self, runner, corpus):
        with patch("ragdesk.commands.query.open_ragdesk", return_value=corpus):
            result = runner.invoke(app, ["query", "hours?", "-k", "99"])
        assert result.exit_code == 1
        assert "Query failed" in result.output


class TestBrowseCommands:
    def test_documents(self, runner, corpus):
        with patch("ragdesk.commands.documents.open_ragdesk", return_value=corpus):
            result = runner.invoke(app, ["documents", "--plain", "--limit", "2"])
        assert result.exit_code == 0
        assert "page 1/2, 4 total" in result.output

    def test_documents_empty(self, runner, desk):
        with patch("ragdesk.commands.documents.open_ragdesk", return_value=desk):
            result = runner.invoke(app, ["documents"])
        assert result.exit_code == 0
        assert "No documents found" in result.output

    def test_sources(self, runner, corpus):
        with patch("ragdesk.commands.documents.open_ragdesk", return_value=corpus):
            result = runner.invoke(app, ["sources", "--plain"])
        assert result.exit_code == 0
        assert "handbook" in result.output
        assert "policy" in result.output

    def test_status(self, runner, corpus):
        with patch("ragdesk.commands.status.open_ragdesk", return_value=corpus):
            result = runner.invoke(app, ["status", "--plain"])
        assert result.exit_code == 0
        assert "Chunks: 4" in result.output
        assert "Sources: 2" in result.output

    def test_status_shows_env_data_dir(self, runner, corpus, monkeypatch):
        monkeypatch.setenv("RAGDESK_DATA_DIR", "/srv/desk-data")
        with patch("ragdesk.commands.status.open_ragdesk", return_value=corpus):
            result = runner.invoke(app, ["status", "--plain"])
        assert result.exit_code == 0
        assert "Data directory: /srv/desk-data" in result.output

    def test_history(self, runner, corpus):
        corpus.orchestrator().answer("When are refunds issued?")
        with patch("ragdesk.commands.history.open_ragdesk", return_value=corpus):
            result = runner.invoke(app, ["history", "--plain"])
        assert result.exit_code == 0
        assert "Q: When are refunds issued?" in result.output


class TestCheckCommand:
    def test_plain(self, runner, corpus):
        with patch("ragdesk.commands.check.open_ragdesk", return_value=corpus):
            result = runner.invoke(app, ["check", "--query", "refunds", "--plain"])
        assert result.exit_code == 0
        assert "Embedding: OK (64 dimensions)" in result.output
        assert "Search: OK" in result.output
        assert "policy" in result.output

    def test_rich(self, runner, corpus):
        with patch("ragdesk.commands.check.open_ragdesk", return_value=corpus):
            result = runner.invoke(app, ["check"])
        assert result.exit_code == 0
        assert "Embedding OK" in result.output

    def test_missing_configuration(self, runner, tmp_path):
        result = runner.invoke(app, ["check", "--data-dir", str(tmp_path / "d")])
        assert result.exit_code == 1
        assert "embedding_model" in result.output
