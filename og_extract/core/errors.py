"""Errors raised by the front-matter/body extractor."""

from __future__ import annotations


class ExtractionError(ValueError):
    """Base class for extraction failures."""


class MissingFieldError(ExtractionError):
    """A requested front-matter field is absent.

    Attributes:
        field: Name of the field that could not be found
    """

    def __init__(self, field: str):
        super().__init__(f"front-matter field {field!r} not found")
        self.field = field


class MissingMarkerError(ExtractionError):
    """The body contains no teaser marker.

    Attributes:
        marker: The sentinel token that was searched for
    """

    def __init__(self, marker: str):
        super().__init__(f"teaser marker {marker!r} not found in body")
        self.marker = marker
