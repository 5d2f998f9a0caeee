"""Output rendering: OG meta partials, card requests and run manifest."""

from .renderer import (
    build_card_request,
    collapse_whitespace,
    render_meta_tags,
    shorten,
    write_card_requests,
    write_manifest,
    write_meta_partials,
)

__all__ = [
    "build_card_request",
    "collapse_whitespace",
    "render_meta_tags",
    "shorten",
    "write_card_requests",
    "write_manifest",
    "write_meta_partials",
]
