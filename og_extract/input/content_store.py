"""
File-backed content store.

Discovers Markdown documents under a content root and reads their text.
This is the only place in the package that reads content files; the
extractor itself receives text.
"""

from __future__ import annotations

from pathlib import Path


def discover_documents(content_dir: Path, pattern: str = "**/*.md") -> list[Path]:
    """Find documents under ``content_dir`` matching ``pattern``.

    Hidden files and files inside hidden directories are skipped.

    Args:
        content_dir: Root of the content tree
        pattern: Glob pattern relative to ``content_dir``

    Returns:
        Paths relative to ``content_dir``, sorted for stable output
    """
    found = []
    for path in content_dir.glob(pattern):
        if not path.is_file():
            continue
        rel = path.relative_to(content_dir)
        if any(part.startswith(".") for part in rel.parts):
            continue
        found.append(rel)
    return sorted(found, key=lambda p: p.as_posix())


def read_document(path: Path) -> str:
    """Read a document as UTF-8 text."""
    return path.read_text(encoding="utf-8")
