"""
Front-matter/body extractor.

Derives the page title and teaser quote used for Open Graph preview cards.
All functions operate on in-memory text and hold no state, so they are safe
to call concurrently from worker threads.

Every function accepts either document text or a ``ScannedDocument`` from
``scan``, so callers needing several values can scan a document once.

Example:
    >>> extract("---\\ntitle: Hello World\\n---\\nThis is the intro.\\n<!--more-->\\nRest.")
    ExtractionResult(title='Hello World', teaser='This is the intro.')
"""

from __future__ import annotations

from functools import lru_cache
import re
from typing import Any, Iterable

import yaml

from .errors import MissingFieldError, MissingMarkerError
from .scanner import TEASER_MARKER, scan
from .types import ExtractionResult, ScannedDocument


_DOUBLE_QUOTE_ESCAPE_RE = re.compile(r'\\(["\\])')


@lru_cache(maxsize=32)
def _field_pattern(name: str) -> re.Pattern[str]:
    # Optional indent, "name:", at least one space/tab, then a non-blank value.
    return re.compile(rf"^[ \t]*{re.escape(name)}:[ \t]+(?P<value>\S.*?)[ \t]*$")


def _unquote(value: str) -> str:
    if len(value) < 2 or value[0] != value[-1]:
        return value
    if value[0] == '"':
        return _DOUBLE_QUOTE_ESCAPE_RE.sub(r"\1", value[1:-1]).strip()
    if value[0] == "'":
        return value[1:-1].replace("''", "'").strip()
    return value


def _scanned(document: str | ScannedDocument) -> ScannedDocument:
    if isinstance(document, ScannedDocument):
        return document
    return scan(document)


def _find_field(lines: Iterable[str], name: str) -> str:
    pattern = _field_pattern(name)
    for line in lines:
        match = pattern.match(line)
        if match:
            value = _unquote(match.group("value"))
            if not value:
                break
            return value
    raise MissingFieldError(name)


def extract_field(document: str | ScannedDocument, name: str) -> str:
    """Return the first value of a scalar front-matter field.

    Only lines inside the front-matter block are considered; matching text in
    the body is ignored. A value wrapped in quotes is unquoted the way YAML
    reads it: ``\\"`` inside double quotes and ``''`` inside single quotes
    become plain quote characters.

    Raises:
        MissingFieldError: If the field does not appear in the front-matter
    """
    return _find_field(_scanned(document).front_matter, name)


def extract_title(document: str | ScannedDocument) -> str:
    """Return the trimmed ``title`` value from the front-matter block.

    Raises:
        MissingFieldError: If no ``title:`` line exists in the front-matter
    """
    return extract_field(document, "title")


def extract_teaser(document: str | ScannedDocument) -> str:
    """Return the body text preceding the first teaser marker.

    Leading and trailing whitespace is trimmed; internal line breaks are
    preserved. An empty teaser region yields an empty string. The
    front-matter delimiters never reach the teaser, but a ``---`` line
    inside the body (a Markdown horizontal rule) is body text and is kept.

    Raises:
        MissingMarkerError: If the body contains no teaser marker
    """
    scanned = _scanned(document)
    if not scanned.marker_found:
        raise MissingMarkerError(TEASER_MARKER)
    return scanned.teaser.strip()


def extract(document: str | ScannedDocument) -> ExtractionResult:
    """Extract title and teaser in a single pass over the document.

    Raises:
        MissingFieldError: If the front-matter has no title
        MissingMarkerError: If the body has no teaser marker
    """
    scanned = _scanned(document)
    title = _find_field(scanned.front_matter, "title")
    if not scanned.marker_found:
        raise MissingMarkerError(TEASER_MARKER)
    return ExtractionResult(title=title, teaser=scanned.teaser.strip())


def parse_front_matter(document: str | ScannedDocument) -> dict[str, Any]:
    """Parse the front-matter block into a dict of pass-through fields.

    Malformed YAML or a block that is not a mapping yields an empty dict.
    """
    scanned = _scanned(document)
    if not scanned.front_matter:
        return {}
    try:
        data = yaml.safe_load("\n".join(scanned.front_matter))
    except yaml.YAMLError:
        return {}
    return data if isinstance(data, dict) else {}
