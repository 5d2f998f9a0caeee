"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- SiteConfig: Site-wide metadata used for fallbacks and OG tags
- ContentConfig: Which documents to process
- FallbackConfig: What to publish when a title or teaser is missing
- OutputConfig: Output file names and limits
- WorkerConfig: Extraction worker pool settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container

Site metadata can also be read from a Hugo ``config.toml`` via
``load_hugo_site``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
import tomllib
from typing import Any

import yaml


TITLE_FALLBACKS = ("site", "filename", "fail")
TEASER_FALLBACKS = ("description", "summary", "empty", "fail")


@dataclass
class SiteConfig:
    """Site-wide metadata.

    Attributes:
        title: Site title, used as og:site_name and as the default page title
        description: Site description, the last-resort teaser
        base_url: Absolute site URL used to build page URLs
        author: Site author, passed to card requests
        image: Default og:image URL or root-relative path
        locale: og:locale value (e.g. "en_US")
    """

    title: str = ""
    description: str = ""
    base_url: str = ""
    author: str = ""
    image: str = ""
    locale: str = "en_US"


@dataclass
class ContentConfig:
    """Configuration for document discovery.

    Attributes:
        glob: Pattern, relative to the content root, selecting documents
        include_drafts: Whether to process documents marked ``draft: true``
    """

    glob: str = "**/*.md"
    include_drafts: bool = False


@dataclass
class FallbackConfig:
    """Caller-side policy for missing titles and teasers.

    Attributes:
        title: "site" (site title), "filename" (humanised file stem) or "fail"
        teaser: "description" (front-matter, then site description),
            "summary" (leading words of the body), "empty" or "fail"
        summary_words: Number of words used by the "summary" fallback
    """

    title: str = "site"
    teaser: str = "description"
    summary_words: int = 70


@dataclass
class OutputConfig:
    """Configuration for output generation.

    Attributes:
        meta_dir: Directory (under the output root) for OG meta partials
        cards_file: File name of the image-generation request list
        manifest_file: File name of the JSONL run manifest
        max_quote_chars: Maximum length of the quote in card requests
    """

    meta_dir: str = "og"
    cards_file: str = "cards.json"
    manifest_file: str = "manifest.jsonl"
    max_quote_chars: int = 200


@dataclass
class WorkerConfig:
    """Configuration for the extraction worker pool.

    Attributes:
        concurrency: Number of worker threads
    """

    concurrency: int = 4


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file in the output directory
    """

    level: str = "INFO"
    console: bool = True
    file: bool = True
    format: str = "jsonl"
    filename: str = "run.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    site: SiteConfig = field(default_factory=SiteConfig)
    content: ContentConfig = field(default_factory=ContentConfig)
    fallback: FallbackConfig = field(default_factory=FallbackConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    workers: WorkerConfig = field(default_factory=WorkerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults.

    Raises:
        ValueError: If the file is not valid YAML, is not a mapping, or
            names an unsupported fallback policy
    """
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Malformed YAML in {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping of config sections")

    cfg = _merge_config(AppConfig(), raw)
    validate_config(cfg)
    return cfg


def validate_config(cfg: AppConfig) -> None:
    """Reject fallback policies and limits the pipeline cannot honour."""
    if cfg.fallback.title not in TITLE_FALLBACKS:
        raise ValueError(
            f"Unsupported title fallback {cfg.fallback.title!r}; expected one of {TITLE_FALLBACKS}"
        )
    if cfg.fallback.teaser not in TEASER_FALLBACKS:
        raise ValueError(
            f"Unsupported teaser fallback {cfg.fallback.teaser!r}; expected one of {TEASER_FALLBACKS}"
        )
    if cfg.workers.concurrency < 1:
        raise ValueError("workers.concurrency must be at least 1")


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig.

    Unknown sections and unknown keys inside a section are ignored.
    """
    data = asdict(base)
    for key, value in raw.items():
        if key not in data or not isinstance(value, dict):
            continue
        known = {k: v for k, v in value.items() if k in data[key]}
        data[key].update(known)
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        site=SiteConfig(**data["site"]),
        content=ContentConfig(**data["content"]),
        fallback=FallbackConfig(**data["fallback"]),
        output=OutputConfig(**data["output"]),
        workers=WorkerConfig(**data["workers"]),
        logging=LoggingConfig(**data["logging"]),
    )


def load_hugo_site(path: str | Path, base: SiteConfig | None = None) -> SiteConfig:
    """Overlay site metadata from a Hugo ``config.toml`` onto ``base``.

    Reads ``title``, ``baseurl``, ``languageCode``, ``params.description``,
    ``params.author`` and ``params.authorImage``. Empty values in the TOML
    file do not override values already set in ``base``.

    Raises:
        ValueError: If the file is not valid TOML
    """
    with open(path, "rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Malformed TOML in {path}: {exc}") from exc

    params = raw.get("params") or {}
    updates = {
        "title": raw.get("title"),
        "base_url": raw.get("baseurl") or raw.get("baseURL"),
        "locale": _locale_from_language(raw.get("languageCode")),
        "description": params.get("description"),
        "author": params.get("author"),
        "image": params.get("authorImage"),
    }
    updates = {k: str(v) for k, v in updates.items() if v}
    return replace(base or SiteConfig(), **updates)


def _locale_from_language(code: str | None) -> str | None:
    # Hugo uses "en-us"; Open Graph expects "en_US".
    if not code:
        return None
    parts = code.replace("_", "-").split("-")
    if len(parts) == 1:
        return parts[0].lower()
    return f"{parts[0].lower()}_{parts[1].upper()}"
