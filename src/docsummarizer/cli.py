"""CLI entrypoints for DocSummarizer."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from docsummarizer.config import load_settings
from docsummarizer.errors import DocSummarizerError
from docsummarizer.logging import configure_logging, get_logger
from docsummarizer.orchestrator.runner import SummarizeInputs, summarize as run_summarize
from docsummarizer.tools.book_builder import compute_book_stats

app = typer.Typer(add_completion=False, help="Summarize documentation pages into books")
logger = get_logger(__name__)


@app.callback()
def main() -> None:
    """DocSummarizer command line."""


@app.command()
def summarize(
    url: str = typer.Argument(..., help="Documentation page to summarize."),
    book_name: str | None = typer.Option(None, "--book-name", "-n", help="Book name (defaults to the page title)"),
    language: str | None = typer.Option(
        None,
        "--language",
        "-l",
        help="Output language: 'id' or 'en' (overrides DOCSUMMARIZER_DEFAULT_LANGUAGE)",
    ),
    model: str | None = typer.Option(None, "--model", "-m", help="Model identifier (overrides DOCSUMMARIZER_DEFAULT_MODEL)"),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        envvar="DOCSUMMARIZER_API_KEY",
        help="Completion API key",
        show_default=False,
    ),
    output: Path = typer.Option(Path("book.json"), "--output", "-o", help="Output JSON file"),
) -> None:
    """Fetch URL, summarize it and write the generated book as JSON."""

    if language is not None and language not in ("id", "en"):
        raise typer.BadParameter("language must be 'id' or 'en'", param_hint="--language")

    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info("CLI summarize requested")

    inputs = SummarizeInputs(url=url, book_name=book_name, language=language, model=model, api_key=api_key)
    try:
        book = run_summarize(inputs, settings=settings)
    except (DocSummarizerError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    stats = compute_book_stats(book)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        json.dumps({**book.model_dump(mode="json"), "stats": stats.model_dump(mode="json")}, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    typer.echo(
        f"{output} ({stats.total_chapters} chapters, {stats.total_pages} pages, "
        f"~{stats.estimated_read_time} min read)"
    )


if __name__ == "__main__":
    app()
