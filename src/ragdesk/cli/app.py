# src/ragdesk/cli/app.py
"""Command-line interface for ragdesk.

This module provides a thin Typer wrapper around the commands layer.
Each command:
1. Parses args (via Typer)
2. Creates progress callbacks (for Rich display)
3. Calls commands module functions
4. Renders results with Rich
"""

from __future__ import annotations

from typing import Any

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from ragdesk import __version__
from ragdesk.answering import AnswerStage
from ragdesk.commands import check, documents, history, ingest, query, status
from ragdesk.commands.base import FileIngestResult, IngestResult
from ragdesk.config import load_config, load_env_file, resolve_data_dir
from ragdesk.logging_config import configure_logging

app = typer.Typer(
    name="ragdesk",
    help="ragdesk - ask questions about your documents.",
    no_args_is_help=True,
)
console = Console()

DATA_DIR_OPTION = typer.Option(
    None, "--data-dir", "-d", help="Data directory (default: from settings)"
)
CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to config file")
PLAIN_OPTION = typer.Option(False, "--plain", help="Plain output (no colors/formatting)")

# Stage names for progress display
STAGE_NAMES = {
    AnswerStage.RETRIEVING: "Searching documents",
    AnswerStage.SCORING: "Scoring matches",
    AnswerStage.GENERATING: "Generating answer",
    AnswerStage.PARSING: "Reading answer",
    AnswerStage.LOGGING: "Saving to history",
}


def version_callback(value: bool) -> None:
    if value:
        console.print(f"ragdesk {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log pipeline activity to stderr.",
    ),
) -> None:
    """ragdesk - ask questions about your documents."""
    load_env_file()
    configure_logging("INFO" if verbose else None)


def _fail(message: str | None) -> None:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


@app.command(name="ingest")
def ingest_cmd(
    path: str = typer.Argument(None, help="File or directory to ingest"),
    text: str = typer.Option(None, "--text", "-t", help="Ingest this text instead of a path"),
    source: str = typer.Option(None, "--source", "-s", help="Source label for the chunks"),
    description: str = typer.Option(None, "--description", help="Description stored on chunks"),
    chunk_size: int = typer.Option(None, "--chunk-size", help="Maximum characters per chunk"),
    chunk_overlap: int = typer.Option(None, "--chunk-overlap", help="Characters shared by chunks"),
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Ingest a file, a directory, or raw text."""

    def on_file_complete(file_result: FileIngestResult) -> None:
        if plain:
            return
        if file_result.failed:
            console.print(f"[red]Failed {file_result.filepath}: {file_result.error}[/red]")
        else:
            console.print(
                f"[green]Ingested {file_result.filepath}[/green] "
                f"[dim]({file_result.chunks} chunks, source: {file_result.source})[/dim]"
            )

    result = ingest.ingest(
        path=path,
        text=text,
        source=source,
        description=description,
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        data_dir=data_dir,
        config_path=config_file,
        on_file_complete=on_file_complete,
    )
    _render_ingest_result(result, plain=plain)


def _render_ingest_result(result: IngestResult, plain: bool) -> None:
    """Render ingest result to console."""
    if not result.success:
        _fail(result.error)

    if result.error:
        console.print(result.error if plain else f"[yellow]{result.error}[/yellow]")
        return

    summary = f"Ingested {result.files_processed} documents ({result.total_chunks} chunks)"
    if plain:
        console.print(summary)
        for file_result in result.file_results:
            if file_result.failed:
                console.print(f"Failed {file_result.filepath}: {file_result.error}")
    else:
        console.print()
        console.print(f"[green]{summary}[/green]")
    if result.files_failed:
        console.print(f"{result.files_failed} failed" if plain else f"[red]{result.files_failed} failed[/red]")


def _parse_filter(pairs: list[str] | None, source: str | None) -> dict[str, Any] | None:
    """Build a metadata filter from KEY=VALUE pairs and --source."""
    parsed: dict[str, Any] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected KEY=VALUE, got '{pair}'", param_hint="--filter")
        parsed[key.strip()] = value.strip()
    if source:
        parsed["source"] = source
    return parsed or None


@app.command(name="query")
def query_cmd(
    question: str = typer.Argument(..., help="Question to ask"),
    k: int = typer.Option(None, "--k", "-k", help="Number of documents to retrieve (1-20)"),
    source: str = typer.Option(None, "--source", "-s", help="Only search this source"),
    filter_pairs: list[str] = typer.Option(
        None, "--filter", "-f", help="Metadata filter KEY=VALUE (repeatable)"
    ),
    model: str = typer.Option(None, "--model", "-m", help="Override the LLM model"),
    temperature: float = typer.Option(None, "--temperature", help="Sampling temperature (0-2)"),
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Ask a question about the ingested documents."""
    metadata_filter = _parse_filter(filter_pairs, source)
    kwargs: dict[str, Any] = {
        "question": question,
        "k": k,
        "filter": metadata_filter,
        "model": model,
        "temperature": temperature,
        "data_dir": data_dir,
        "config_path": config_file,
    }

    if plain or not console.is_terminal:
        result = query.query(**kwargs)
    else:
        with console.status("Searching documents...") as spinner:

            def on_stage(stage: AnswerStage) -> None:
                if stage in STAGE_NAMES:
                    spinner.update(f"{STAGE_NAMES[stage]}...")

            result = query.query(**kwargs, on_stage=on_stage)

    if not result.success:
        _fail(result.error)

    metrics = result.metrics
    overall = metrics.overall_confidence if metrics else 0.0

    if plain:
        console.print(f"Answer: {result.answer}")
        console.print(f"Model confidence: {result.llm_confidence}/10")
        console.print(f"Retrieval confidence: {overall:.2f}")
        if result.reasoning:
            console.print(f"Reasoning: {result.reasoning}")
        console.print()
        console.print(f"Sources ({len(result.sources)}):")
        for i, ref in enumerate(result.sources, 1):
            console.print(
                f"  [{i}] {ref.metadata.get('source', '')} "
                f"(score: {ref.similarity_score:.3f}, {ref.relevance})"
            )
    else:
        console.print(Panel(Markdown(result.answer or ""), title="Answer", border_style="green"))
        console.print(
            f"[bold]Model confidence:[/bold] {result.llm_confidence}/10   "
            f"[bold]Retrieval confidence:[/bold] {overall:.2f}"
        )
        if metrics:
            console.print(f"[dim]{metrics.recommendation}. {metrics.explanation}[/dim]")
        if result.reasoning:
            console.print(f"[bold]Reasoning:[/bold] {result.reasoning}")
        console.print()

        if not result.sources:
            console.print("[yellow]No documents matched.[/yellow]")
        else:
            console.print("[bold]Sources:[/bold]")
            for i, ref in enumerate(result.sources, 1):
                console.print(
                    f"  [{i}] [cyan]{ref.metadata.get('source', '')}[/cyan] "
                    f"[dim](score: {ref.similarity_score:.3f}, {ref.relevance})[/dim]"
                )
                preview = ref.snippet[:100].replace("\n", " ")
                if len(ref.snippet) > 100:
                    preview += "..."
                console.print(f"      [dim]{preview}[/dim]")

    if not result.logged and result.log_error:
        console.print(f"[yellow]Warning: answer not saved to history: {result.log_error}[/yellow]")


@app.command(name="documents")
def documents_cmd(
    source: str = typer.Option(None, "--source", "-s", help="Only list this source"),
    page: int = typer.Option(1, "--page", "-p", help="Page number"),
    limit: int = typer.Option(20, "--limit", "-n", help="Chunks per page"),
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """List stored chunks, newest first."""
    result = documents.list_documents(
        source=source,
        page=page,
        limit=limit,
        data_dir=data_dir,
        config_path=config_file,
    )
    if not result.success:
        _fail(result.error)

    if not result.documents:
        console.print("No documents found." if plain else "[dim]No documents found.[/dim]")
        raise typer.Exit(0)

    header = f"Documents (page {result.page}/{result.pages}, {result.total} total)"
    if plain:
        console.print(header)
        for doc in result.documents:
            position = f"{doc.chunk + 1}/{doc.chunk_count}" if doc.chunk is not None else "-"
            console.print(f"  {doc.source} [{position}] {doc.id}")
            console.print(f"      {doc.preview.replace(chr(10), ' ')}")
        return

    table = Table(title=header)
    table.add_column("Source", style="cyan")
    table.add_column("Chunk", justify="right")
    table.add_column("Preview")
    table.add_column("Added", style="dim")
    for doc in result.documents:
        position = f"{doc.chunk + 1}/{doc.chunk_count}" if doc.chunk is not None else "-"
        table.add_row(
            doc.source,
            position,
            doc.preview[:80].replace("\n", " "),
            (doc.created_at or "")[:19],
        )
    console.print(table)


@app.command(name="sources")
def sources_cmd(
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """List the sources a search covers."""
    result = documents.list_sources(data_dir=data_dir, config_path=config_file)
    if not result.success:
        _fail(result.error)

    if not result.sources:
        console.print("No sources indexed." if plain else "[dim]No sources indexed.[/dim]")
        raise typer.Exit(0)

    if plain:
        console.print(f"Sources ({len(result.sources)}):")
    else:
        console.print(f"[bold]Sources ({len(result.sources)}):[/bold]")
    for source in result.sources:
        console.print(f"  {source}" if plain else f"  [cyan]{source}[/cyan]")


@app.command(name="status")
def status_cmd(
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Show database statistics."""
    effective_data_dir = resolve_data_dir(data_dir, load_config(config_file))

    result = status.status(data_dir=data_dir, config_path=config_file)
    if not result.success:
        _fail(result.error)

    if plain:
        console.print("Database Status:")
        console.print(f"  Data directory: {effective_data_dir}")
        console.print(f"  Sources: {result.total_sources}")
        console.print(f"  Chunks: {result.total_chunks}")
        console.print(f"  Answered questions: {result.query_log_entries}")
        for info in result.sources:
            console.print(f"  {info.source}: {info.chunk_count} chunks")
        return

    table = Table(title="Database Status")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_row("Data directory", effective_data_dir)
    table.add_row("Sources", str(result.total_sources))
    table.add_row("Chunks", str(result.total_chunks))
    table.add_row("Answered questions", str(result.query_log_entries))
    console.print(table)

    if result.sources:
        console.print()
        detail_table = Table(title="Chunks by Source")
        detail_table.add_column("Source", style="cyan")
        detail_table.add_column("Chunks", justify="right")
        for info in result.sources:
            detail_table.add_row(info.source, str(info.chunk_count))
        console.print(detail_table)


@app.command(name="history")
def history_cmd(
    limit: int = typer.Option(10, "--limit", "-n", help="Number of entries"),
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Show recently answered questions."""
    result = history.history(limit=limit, data_dir=data_dir, config_path=config_file)
    if not result.success:
        _fail(result.error)

    if not result.entries:
        console.print("No questions answered yet." if plain else "[dim]No questions answered yet.[/dim]")
        raise typer.Exit(0)

    if plain:
        for entry in result.entries:
            console.print(f"[{entry.created_at:%Y-%m-%d %H:%M}] Q: {entry.question}")
            console.print(f"    A: {entry.answer}")
        return

    table = Table(title=f"Recent Questions ({len(result.entries)})")
    table.add_column("When", style="dim")
    table.add_column("Question", style="cyan")
    table.add_column("Answer")
    for entry in result.entries:
        table.add_row(f"{entry.created_at:%Y-%m-%d %H:%M}", entry.question, entry.answer)
    console.print(table)


@app.command(name="check")
def check_cmd(
    text: str = typer.Option(check.DEFAULT_TEST_TEXT, "--text", "-t", help="Text to embed"),
    search: str = typer.Option(None, "--query", "-q", help="Search text (default: --text)"),
    k: int = typer.Option(4, "-k", help="Number of search results"),
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Check the embedding service and run a raw unfiltered search."""
    result = check.check(text=text, query=search, k=k, data_dir=data_dir, config_path=config_file)
    # Failed before either check ran (bad input or configuration)
    if not result.success and not (result.embedding_error or result.search_error):
        _fail(result.error)

    sample = ", ".join(f"{v:.4f}" for v in result.sample)
    if plain:
        if result.embedding_error:
            console.print(f"Embedding: FAILED ({result.embedding_error})")
        else:
            console.print(f"Embedding: OK ({result.dimensions} dimensions)")
            console.print(f"  Sample: {sample}")
        if result.search_error:
            console.print(f"Search: FAILED ({result.search_error})")
        else:
            console.print(f"Search: OK ({len(result.hits)} results)")
            for hit in result.hits:
                console.print(f"  {hit.score:.4f} {hit.source}: {hit.preview}")
    else:
        if result.embedding_error:
            console.print(f"[red]Embedding failed:[/red] {result.embedding_error}")
        else:
            console.print(f"[green]Embedding OK[/green] - {result.dimensions} dimensions")
            console.print(f"  [dim]Sample: {sample}[/dim]")
        if result.search_error:
            console.print(f"[red]Search failed:[/red] {result.search_error}")
        else:
            table = Table(title=f"Unfiltered search: {result.query}")
            table.add_column("Score", justify="right", style="green")
            table.add_column("Source", style="cyan")
            table.add_column("Preview")
            for hit in result.hits:
                table.add_row(f"{hit.score:.4f}", hit.source, hit.preview)
            console.print(table)

    if not result.success:
        raise typer.Exit(1)
