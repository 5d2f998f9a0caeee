"""
Pipeline orchestration for og-extract.

This module coordinates the workflow:
1. Discover Markdown documents under the content root
2. Extract title and teaser for each document in a worker pool
3. Apply the configured fallback policy for missing titles/teasers
4. Render OG meta partials, card requests and the run manifest

The extractor itself is pure; all file access happens here and in the
input/output stages.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
import logging
from pathlib import Path
import re
from typing import Any, Callable

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from .config import AppConfig
from .core.errors import ExtractionError, MissingFieldError, MissingMarkerError
from .core.extractor import extract_teaser, extract_title, parse_front_matter
from .core.pages import humanize_stem, page_key, page_url
from .core.scanner import scan
from .core.types import PagePreview, ScannedDocument
from .input.content_store import discover_documents, read_document
from .output.renderer import write_card_requests, write_manifest, write_meta_partials
from .utils.logging import log_event, setup_logging, truncate_text


_HTML_TAG_RE = re.compile(r"<[^>]+>")
_FENCE_PREFIXES = ("```", "~~~")


@dataclass
class RunStats:
    """Counts collected over one pipeline run.

    Attributes:
        total: Documents discovered
        ok: Documents whose title and teaser were both extracted
        fallback: Documents published with at least one fallback value
        skipped: Drafts left out of the run
        errors: Documents that could not be published
    """
    total: int = 0
    ok: int = 0
    fallback: int = 0
    skipped: int = 0
    errors: int = 0


@dataclass
class RunSummary:
    """Everything a caller needs after a run."""
    output_dir: Path
    stats: RunStats
    previews: list[PagePreview] = field(default_factory=list)
    meta_paths: list[Path] = field(default_factory=list)
    cards_path: Path | None = None
    manifest_path: Path | None = None


def run_pipeline(
    content_dir: Path,
    output_dir: Path,
    cfg: AppConfig,
    show_progress: bool = True,
    console: Console | None = None,
) -> RunSummary:
    """Run the complete extraction pipeline over a content tree.

    Args:
        content_dir: Root of the Markdown content tree
        output_dir: Directory for generated artifacts and logs
        cfg: Application configuration
        show_progress: Whether to display a progress bar
        console: Rich console for output (creates default if None)

    Returns:
        RunSummary with stats, previews and the written artifact paths
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    logger = setup_logging(cfg.logging, output_dir)
    log_event(
        logger,
        "Pipeline start",
        event="pipeline_start",
        content_dir=str(content_dir),
        output=str(output_dir),
    )

    documents = discover_documents(content_dir, cfg.content.glob)
    log_event(logger, "Documents discovered", event="documents_discovered", count=len(documents))

    if show_progress and documents:
        console = console or Console()
        progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=console,
        )
        with progress:
            task = progress.add_task("Extract", total=len(documents))
            previews = extract_documents(
                content_dir, documents, cfg, on_done=lambda: progress.advance(task, 1)
            )
    else:
        previews = extract_documents(content_dir, documents, cfg)

    flag_key_collisions(previews)
    stats = RunStats(total=len(documents))
    for preview in previews:
        _record(stats, preview, logger)

    meta_paths = write_meta_partials(previews, cfg.site, output_dir / cfg.output.meta_dir)
    cards_path = write_card_requests(
        previews, cfg.site, output_dir / cfg.output.cards_file, cfg.output.max_quote_chars
    )
    manifest_path = write_manifest(previews, output_dir / cfg.output.manifest_file)

    log_event(
        logger,
        "Pipeline complete",
        event="pipeline_complete",
        total=stats.total,
        ok=stats.ok,
        fallback=stats.fallback,
        skipped=stats.skipped,
        errors=stats.errors,
    )
    return RunSummary(
        output_dir=output_dir,
        stats=stats,
        previews=previews,
        meta_paths=meta_paths,
        cards_path=cards_path,
        manifest_path=manifest_path,
    )


def extract_documents(
    content_dir: Path,
    documents: list[Path],
    cfg: AppConfig,
    on_done: Callable[[], None] | None = None,
) -> list[PagePreview]:
    """Build previews for ``documents`` using a thread pool.

    Results keep the order of ``documents`` regardless of completion order.

    Args:
        content_dir: Root of the content tree
        documents: Paths relative to ``content_dir``
        cfg: Application configuration
        on_done: Called on the calling thread after each document finishes

    Returns:
        One PagePreview per document
    """
    results: list[PagePreview | None] = [None] * len(documents)
    with ThreadPoolExecutor(max_workers=cfg.workers.concurrency) as executor:
        future_map = {
            executor.submit(process_document, content_dir, rel_path, cfg): idx
            for idx, rel_path in enumerate(documents)
        }
        for future in as_completed(future_map):
            results[future_map[future]] = future.result()
            if on_done is not None:
                on_done()

    if any(r is None for r in results):
        raise RuntimeError("Extraction results incomplete")
    return [r for r in results if r is not None]


def process_document(content_dir: Path, rel_path: Path, cfg: AppConfig) -> PagePreview:
    """Read one document and build its preview.

    Read failures are reported on the preview rather than raised.
    """
    try:
        text = read_document(content_dir / rel_path)
    except (OSError, UnicodeDecodeError) as exc:
        return PagePreview(source=rel_path, status="error", error=f"read failed: {exc}")
    return build_preview(rel_path, text, cfg)


def build_preview(rel_path: Path, text: str, cfg: AppConfig) -> PagePreview:
    """Extract a page preview from document text, applying fallbacks.

    Args:
        rel_path: Document path relative to the content root
        text: Full document text
        cfg: Application configuration

    Returns:
        A PagePreview with status "ok", "fallback", "skipped" or "error"
    """
    scanned = scan(text)
    fields = parse_front_matter(scanned)
    preview = PagePreview(source=rel_path, fields=fields)
    if _is_draft(fields) and not cfg.content.include_drafts:
        preview.status = "skipped"
        return preview

    preview.url = page_url(rel_path, fields, cfg.site.base_url)
    try:
        preview.title = _resolve_title(rel_path, scanned, cfg, preview.fallbacks)
        preview.teaser = _resolve_teaser(scanned, fields, cfg, preview.fallbacks)
    except ExtractionError as exc:
        preview.status = "error"
        preview.error = str(exc)
        return preview

    preview.status = "fallback" if preview.fallbacks else "ok"
    return preview


def _resolve_title(rel_path: Path, scanned: ScannedDocument, cfg: AppConfig, applied: list[str]) -> str:
    try:
        return extract_title(scanned)
    except MissingFieldError:
        policy = cfg.fallback.title
        if policy == "fail":
            raise
        if policy == "site" and cfg.site.title:
            applied.append("title:site")
            return cfg.site.title
        applied.append("title:filename")
        return humanize_stem(rel_path)


def _resolve_teaser(
    scanned: ScannedDocument, fields: dict[str, Any], cfg: AppConfig, applied: list[str]
) -> str:
    try:
        return extract_teaser(scanned)
    except MissingMarkerError:
        policy = cfg.fallback.teaser
        if policy == "fail":
            raise
        if policy == "summary":
            applied.append("teaser:summary")
            return auto_summary(scanned.teaser, cfg.fallback.summary_words)
        if policy == "description":
            description = fields.get("description")
            if isinstance(description, str) and description.strip():
                applied.append("teaser:description")
                return description.strip()
            if cfg.site.description:
                applied.append("teaser:site")
                return cfg.site.description
        applied.append("teaser:empty")
        return ""


def flag_key_collisions(previews: list[PagePreview]) -> None:
    """Mark published previews whose output key is already taken as errors.

    Keys flatten the content path, so ``posts/foo.md`` and ``posts-foo.md``
    share ``posts-foo``. The first document in discovery order keeps the key.
    """
    owners: dict[str, PagePreview] = {}
    for preview in previews:
        if preview.status not in ("ok", "fallback"):
            continue
        key = page_key(preview.source)
        owner = owners.setdefault(key, preview)
        if owner is not preview:
            preview.status = "error"
            preview.error = f"output key {key!r} already used by {owner.source.as_posix()}"


def auto_summary(body: str, words: int) -> str:
    """Return the first ``words`` words of a Markdown body.

    Fenced code blocks, HTML tags and heading/quote markers are dropped. An
    ellipsis is appended when the body was cut.
    """
    kept = []
    in_fence = False
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith(_FENCE_PREFIXES):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        kept.append(stripped.lstrip("#>").strip())
    tokens = _HTML_TAG_RE.sub(" ", " ".join(kept)).split()
    summary = " ".join(tokens[:words])
    return f"{summary}…" if len(tokens) > words else summary


def _is_draft(fields: dict[str, Any]) -> bool:
    draft = fields.get("draft")
    if isinstance(draft, bool):
        return draft
    return str(draft).strip().lower() == "true"


def _record(stats: RunStats, preview: PagePreview, logger: logging.Logger) -> None:
    source = preview.source.as_posix()
    if preview.status == "ok":
        stats.ok += 1
        log_event(logger, f"Extracted {source}", level=logging.DEBUG, event="document_ok", source=source)
    elif preview.status == "fallback":
        stats.fallback += 1
        log_event(
            logger,
            f"Fallback used for {source}: {', '.join(preview.fallbacks)}",
            event="document_fallback",
            source=source,
            fallbacks=preview.fallbacks,
        )
    elif preview.status == "skipped":
        stats.skipped += 1
        log_event(logger, f"Skipped draft {source}", event="document_skipped", source=source)
    else:
        stats.errors += 1
        log_event(
            logger,
            f"Failed {source}: {preview.error}",
            level=logging.WARNING,
            event="document_error",
            source=source,
            error=truncate_text(preview.error or ""),
        )


def render_summary(summary: RunSummary, console: Console) -> None:
    """Display run statistics and any failed documents.

    Args:
        summary: Result of run_pipeline
        console: Rich console for output
    """
    stats = summary.stats
    console.print(
        "[bold]Extraction summary[/bold]: "
        f"total={stats.total}, ok={stats.ok}, fallback={stats.fallback}, "
        f"skipped={stats.skipped}, errors={stats.errors}"
    )
    failed = [p for p in summary.previews if p.status == "error"]
    if not failed:
        return
    table = Table(title="Failed documents")
    table.add_column("Source")
    table.add_column("Error", style="red")
    for preview in failed:
        table.add_row(preview.source.as_posix(), preview.error or "")
    console.print(table)
