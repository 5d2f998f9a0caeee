"""Input stage: content discovery and reading."""

from .content_store import discover_documents, read_document

__all__ = ["discover_documents", "read_document"]
