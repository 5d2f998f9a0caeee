"""
Command-line interface for og-extract.

Uses Typer to provide a CLI with options for the main configuration
settings. Supports loading .env files for the site base URL.
"""

from __future__ import annotations

import json
from pathlib import Path

from dotenv import load_dotenv
import typer
from rich.console import Console
from rich.markup import escape

from .config import load_config, load_hugo_site, validate_config
from .core.errors import ExtractionError
from .core.extractor import extract
from .runner import render_summary, run_pipeline

app = typer.Typer(add_completion=False)
console = Console()
err_console = Console(stderr=True)


@app.command()
def run(
    content: Path = typer.Argument(..., exists=True, file_okay=False, readable=True),
    output: Path = typer.Option(Path("out"), "--output", "-o"),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    site_config: Path | None = typer.Option(
        None,
        "--site-config",
        exists=True,
        dir_okay=False,
        help="Hugo config.toml supplying site title, description and base URL.",
    ),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        envvar="OG_EXTRACT_BASE_URL",
        help="Override the site base URL (or set OG_EXTRACT_BASE_URL / .env).",
    ),
    include_drafts: bool | None = typer.Option(
        None, "--include-drafts/--no-include-drafts", help="Process draft documents."
    ),
    concurrency: int | None = typer.Option(None, "--concurrency", min=1, help="Worker threads."),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log file format: jsonl or plain."
    ),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Extract Open Graph previews for every document under CONTENT.

    Writes OG meta partials, image card requests and a manifest to the
    output directory. Exits with status 1 when any document failed.

    Args:
        content: Root of the Markdown content tree
        output: Directory for generated artifacts
        config: Optional path to YAML config file
        site_config: Optional Hugo config.toml for site metadata
        base_url: Override for the site base URL
        include_drafts: Whether to process drafts
        concurrency: Number of extraction workers
        progress: Whether to show progress bar
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Log file format (jsonl, plain)
        log_file: Enable/disable file logging
    """
    load_dotenv()

    try:
        cfg = load_config(str(config) if config else None)
        if site_config is not None:
            cfg.site = load_hugo_site(site_config, cfg.site)
    except ValueError as exc:
        err_console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2)

    # Override with CLI options
    if base_url:
        cfg.site.base_url = base_url
    if include_drafts is not None:
        cfg.content.include_drafts = include_drafts
    if concurrency is not None:
        cfg.workers.concurrency = concurrency
    if log_level:
        cfg.logging.level = log_level
    if log_format:
        cfg.logging.format = log_format
    if log_file is not None:
        cfg.logging.file = log_file
    validate_config(cfg)

    summary = run_pipeline(content, output, cfg, show_progress=progress, console=console)
    render_summary(summary, console)
    console.print(f"Card requests written: {summary.cards_path}")

    if summary.stats.errors:
        raise typer.Exit(code=1)


@app.command()
def show(
    document: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
):
    """Print the title and teaser extracted from a single DOCUMENT."""
    try:
        text = document.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        err_console.print(f"[red]{document}:[/red] read failed: {escape(str(exc))}")
        raise typer.Exit(code=1)

    try:
        result = extract(text)
    except ExtractionError as exc:
        err_console.print(f"[red]{document}:[/red] {exc}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps({"title": result.title, "teaser": result.teaser}, ensure_ascii=False))
        return
    console.print(f"[bold]Title:[/bold] {escape(result.title)}", highlight=False)
    console.print("[bold]Teaser:[/bold]")
    console.print(result.teaser, markup=False, highlight=False)


if __name__ == "__main__":
    app()
