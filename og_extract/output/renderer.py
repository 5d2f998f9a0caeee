"""
Output rendering for page previews.

This module produces the artifacts consumed downstream:
- Open Graph meta tag partials, rendered with a Jinja2 template
- Card requests (JSON) for a social-preview image generator
- A JSONL manifest describing every processed document
"""

from __future__ import annotations

import json
from datetime import date, datetime
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..config import SiteConfig
from ..core.pages import page_key
from ..core.types import PagePreview


_PUBLISHED = ("ok", "fallback")


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
        autoescape=select_autoescape(["html"]),
    )


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace, including line breaks, to single spaces."""
    return " ".join(text.split())


def shorten(text: str, max_chars: int) -> str:
    """Cap ``text`` at ``max_chars`` on a word boundary, adding an ellipsis.

    Examples:
        >>> shorten("one two three", 9)
        "one two…"
    """
    if max_chars <= 0 or len(text) <= max_chars:
        return text
    cut = text[: max_chars - 1]
    if " " in cut:
        cut = cut.rsplit(" ", 1)[0]
    return cut.rstrip(" ,.;:") + "…"


def _absolute_image(image: str, base_url: str) -> str:
    if not image or "://" in image or not base_url:
        return image
    return f"{base_url.rstrip('/')}/{image.lstrip('/')}"


def _page_image(fields: dict[str, Any]) -> str:
    image = fields.get("image")
    if isinstance(image, str):
        return image
    images = fields.get("images")
    if isinstance(images, list) and images and isinstance(images[0], str):
        return images[0]
    return ""


def render_meta_tags(preview: PagePreview, site: SiteConfig) -> str:
    """Render the Open Graph and Twitter meta tags for one page.

    Values are HTML-escaped by the template. The description is the teaser
    with whitespace collapsed.

    Args:
        preview: The page preview to render
        site: Site metadata supplying og:site_name, og:locale and og:image

    Returns:
        The rendered tags, one per line
    """
    image = _page_image(preview.fields) or site.image
    template = _environment().get_template("og_meta.html")
    return template.render(
        title=preview.title,
        description=collapse_whitespace(preview.teaser),
        og_type="website" if preview.source.stem in ("_index", "index") else "article",
        url=preview.url,
        site_name=site.title,
        locale=site.locale,
        image=_absolute_image(image or "", site.base_url),
    )


def write_meta_partials(previews: list[PagePreview], site: SiteConfig, out_dir: Path) -> list[Path]:
    """Write one meta tag partial per published preview.

    Returns:
        Paths of the written partials, in preview order
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for preview in previews:
        if preview.status not in _PUBLISHED:
            continue
        path = out_dir / f"{page_key(preview.source)}.html"
        path.write_text(render_meta_tags(preview, site), encoding="utf-8")
        written.append(path)
    return written


def build_card_request(preview: PagePreview, site: SiteConfig, max_quote_chars: int = 200) -> dict[str, Any]:
    """Build the payload an image generator needs to draw a preview card."""
    return {
        "key": page_key(preview.source),
        "title": preview.title,
        "quote": shorten(collapse_whitespace(preview.teaser), max_quote_chars),
        "url": preview.url,
        "site_name": site.title,
        "author": str(preview.fields.get("author") or site.author),
    }


def write_card_requests(
    previews: list[PagePreview], site: SiteConfig, path: Path, max_quote_chars: int = 200
) -> Path:
    """Write card requests for all published previews as a JSON array."""
    cards = [
        build_card_request(p, site, max_quote_chars) for p in previews if p.status in _PUBLISHED
    ]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"{json.dumps(cards, ensure_ascii=False, indent=2)}\n", encoding="utf-8")
    return path


def write_manifest(previews: list[PagePreview], path: Path) -> Path:
    """Write one JSON line per preview, including skipped and failed ones."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        for preview in previews:
            record = {
                "source": preview.source.as_posix(),
                "status": preview.status,
                "url": preview.url,
                "title": preview.title,
                "teaser": preview.teaser,
                "fallbacks": preview.fallbacks,
                "error": preview.error,
                "fields": preview.fields,
            }
            handle.write(json.dumps(record, ensure_ascii=False, default=_json_default))
            handle.write("\n")
    return path


def _json_default(value: Any) -> str:
    # YAML front-matter yields date/datetime objects for date fields.
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)
