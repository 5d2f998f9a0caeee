"""
Core data types for og-extract.

This module defines the data structures shared by the extractor and the
pipeline:
- ExtractionResult: The (title, teaser) pair derived from one document
- ScannedDocument: The line scanner's view of a document
- PagePreview: One document's extraction after fallbacks, ready to render
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ExtractionResult:
    """Title and teaser extracted from a single document.

    Attributes:
        title: Value of the front-matter ``title`` field, without the prefix
        teaser: Body text preceding the teaser marker, trimmed
    """
    title: str
    teaser: str


@dataclass(frozen=True)
class ScannedDocument:
    """Result of a single line-by-line pass over a document.

    Attributes:
        front_matter: Lines between the two delimiter lines (no delimiters)
        teaser: Body text before the first marker, or the whole body when
            no marker was found
        has_front_matter: Whether the document opened with a delimiter line
        marker_found: Whether the teaser marker occurs in the body
    """
    front_matter: tuple[str, ...]
    teaser: str
    has_front_matter: bool
    marker_found: bool


@dataclass
class PagePreview:
    """Preview metadata for one content page.

    Attributes:
        source: Path of the Markdown file, relative to the content root
        url: Absolute or root-relative page URL
        title: Title to publish (extracted or fallback)
        teaser: Teaser to publish (extracted or fallback)
        fields: Pass-through front-matter fields
        status: "ok", "fallback", "skipped", or "error"
        fallbacks: Names of the fallbacks applied, e.g. ["teaser:summary"]
        error: Error message when status is "error"
    """
    source: Path
    url: str = ""
    title: str = ""
    teaser: str = ""
    fields: dict[str, Any] = field(default_factory=dict)
    status: str = "ok"
    fallbacks: list[str] = field(default_factory=list)
    error: str | None = None
