"""
og-extract - Open Graph preview extraction for static-site content.

This package derives a page title and a teaser quote from Markdown documents
with YAML front-matter, for use in Open Graph meta tags and social-preview
image requests. The extractor is pure; the pipeline around it discovers
documents, applies fallbacks and renders the outputs.

Main entry point is the CLI via `og-extract run` command.

Example:
    $ og-extract run content/ -o public/og --site-config config.toml
"""

__all__ = [
    "__version__",
    "extract",
    "extract_title",
    "extract_teaser",
    "ExtractionResult",
    "ExtractionError",
    "MissingFieldError",
    "MissingMarkerError",
    "FRONT_MATTER_DELIMITER",
    "TEASER_MARKER",
]
__version__ = "0.1.0"

from .core.errors import ExtractionError, MissingFieldError, MissingMarkerError
from .core.extractor import extract, extract_teaser, extract_title
from .core.scanner import FRONT_MATTER_DELIMITER, TEASER_MARKER
from .core.types import ExtractionResult
