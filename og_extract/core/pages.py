"""Page naming helpers: slugs, output keys and Hugo-style page URLs.

These functions work on paths and strings only; they never touch the
filesystem.
"""

from __future__ import annotations

from pathlib import PurePosixPath, PurePath
import re
from typing import Any


_INDEX_STEMS = {"index", "_index"}


def slugify(text: str) -> str:
    """Convert text to URL-safe slug.

    Args:
        text: The text to slugify

    Returns:
        A lowercase, hyphenated slug limited to 80 characters
    """
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug[:80] or "untitled"


def humanize_stem(path: PurePath) -> str:
    """Turn a file name like ``my_first-post.md`` into ``My First Post``.

    Index files take the name of their directory.
    """
    stem = path.stem
    if stem in _INDEX_STEMS and path.parent.name:
        stem = path.parent.name
    words = re.split(r"[-_\s]+", stem)
    return " ".join(w.capitalize() for w in words if w) or "Untitled"


def urlize(part: str) -> str:
    """Lowercase a URL path segment and turn whitespace runs into hyphens.

    Mirrors Hugo's ``urlize`` for section names, file stems and slugs.
    """
    return re.sub(r"\s+", "-", part.strip()).lower()


def page_key(rel_path: PurePath) -> str:
    """Return a flat, filesystem-safe key for a content file.

    ``posts/hello-world.md`` becomes ``posts-hello-world``; a section
    ``posts/_index.md`` becomes ``posts``; the root ``_index.md`` becomes
    ``home``.
    """
    parts = list(PurePosixPath(rel_path.as_posix()).with_suffix("").parts)
    if parts and parts[-1] in _INDEX_STEMS:
        parts = parts[:-1]
    if not parts:
        return "home"
    return "-".join(slugify(p) for p in parts)


def page_url(rel_path: PurePath, fields: dict[str, Any], base_url: str = "") -> str:
    """Build the page URL the way Hugo does with pretty URLs.

    A front-matter ``url`` wins outright. Otherwise the URL is the section
    path followed by the ``slug`` field (or the file stem). ``index.md`` and
    ``_index.md`` map to their directory. Each path segment is passed
    through ``urlize``, so ``posts/My First Post.md`` maps to
    ``/posts/my-first-post/``.

    Args:
        rel_path: Content file path relative to the content root
        fields: Parsed front-matter fields
        base_url: Site base URL; when empty the URL is root-relative

    Returns:
        The page URL ending in ``/``
    """
    base = base_url.rstrip("/")
    explicit = fields.get("url")
    if isinstance(explicit, str) and explicit.strip():
        explicit = explicit.strip()
        if re.match(r"^[a-z][a-z0-9+.-]*://", explicit):
            return explicit
        return f"{base}/{explicit.lstrip('/')}"

    parts = list(PurePosixPath(rel_path.as_posix()).parts)
    stem = PurePosixPath(parts[-1]).stem
    sections = parts[:-1]
    if stem in _INDEX_STEMS:
        leaf = []
    else:
        slug = fields.get("slug")
        leaf = [str(slug).strip("/") if slug else stem]
    path = "/".join(urlize(p) for p in sections + leaf if p.strip())
    return f"{base}/{path}/" if path else f"{base}/"
