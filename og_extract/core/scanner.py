"""
Line-by-line scanner for front-matter documents.

The scanner walks a document once, tracking which region it is in:

    BEFORE_FRONTMATTER -> IN_FRONTMATTER -> IN_BODY_BEFORE_MARKER -> IN_BODY_AFTER_MARKER

Blank lines before the opening delimiter are skipped. If the first non-empty
line is not a delimiter, the document has no front-matter and scanning starts
directly in the body. A delimiter-like line inside the body is plain text.
Scanning stops at the first teaser marker.
"""

from __future__ import annotations

from enum import Enum

from .types import ScannedDocument


FRONT_MATTER_DELIMITER = "---"
TEASER_MARKER = "<!--more-->"


class ScanState(Enum):
    BEFORE_FRONTMATTER = "before_frontmatter"
    IN_FRONTMATTER = "in_frontmatter"
    IN_BODY_BEFORE_MARKER = "in_body_before_marker"
    IN_BODY_AFTER_MARKER = "in_body_after_marker"


def is_delimiter(line: str) -> bool:
    """Return True for a line holding only the front-matter delimiter."""
    return line.strip() == FRONT_MATTER_DELIMITER


def scan(document: str) -> ScannedDocument:
    """Split a document into front-matter lines and the pre-marker body.

    An opening delimiter without a closing one leaves the rest of the
    document in the front-matter region, so the body is empty.

    Args:
        document: Full document text

    Returns:
        A ScannedDocument describing the regions found
    """
    state = ScanState.BEFORE_FRONTMATTER
    front_matter: list[str] = []
    body: list[str] = []
    has_front_matter = False

    for line in document.lstrip("\ufeff").splitlines(keepends=True):
        if state is ScanState.BEFORE_FRONTMATTER:
            if not line.strip():
                continue
            if is_delimiter(line):
                has_front_matter = True
                state = ScanState.IN_FRONTMATTER
                continue
            # First non-empty line is content: no front-matter block.
            state = ScanState.IN_BODY_BEFORE_MARKER

        if state is ScanState.IN_FRONTMATTER:
            if is_delimiter(line):
                state = ScanState.IN_BODY_BEFORE_MARKER
            else:
                front_matter.append(line.rstrip("\r\n"))
            continue

        index = line.find(TEASER_MARKER)
        if index == -1:
            body.append(line)
            continue
        body.append(line[:index])
        state = ScanState.IN_BODY_AFTER_MARKER
        break

    return ScannedDocument(
        front_matter=tuple(front_matter),
        teaser="".join(body),
        has_front_matter=has_front_matter,
        marker_found=state is ScanState.IN_BODY_AFTER_MARKER,
    )
