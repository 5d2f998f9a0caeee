"""
Core extraction logic.

This package contains the pure front-matter/body extractor. It performs no
file I/O: it receives document text and returns structured results.
"""

from .errors import ExtractionError, MissingFieldError, MissingMarkerError
from .extractor import extract, extract_field, extract_teaser, extract_title, parse_front_matter
from .scanner import FRONT_MATTER_DELIMITER, TEASER_MARKER, ScanState, scan
from .pages import humanize_stem, page_key, page_url, slugify, urlize
from .types import ExtractionResult, PagePreview, ScannedDocument

__all__ = [
    "ExtractionError",
    "MissingFieldError",
    "MissingMarkerError",
    "extract",
    "extract_field",
    "extract_teaser",
    "extract_title",
    "parse_front_matter",
    "FRONT_MATTER_DELIMITER",
    "TEASER_MARKER",
    "ScanState",
    "humanize_stem",
    "page_key",
    "page_url",
    "slugify",
    "urlize",
    "scan",
    "ExtractionResult",
    "PagePreview",
    "ScannedDocument",
]
