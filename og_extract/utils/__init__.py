"""
Shared utility functions.

This package contains utility code used across multiple
pipeline stages.
"""

from .logging import (
    LOGGER_NAME,
    JsonlFormatter,
    log_event,
    setup_logging,
    truncate_text,
)

__all__ = [
    "LOGGER_NAME",
    "setup_logging",
    "log_event",
    "truncate_text",
    "JsonlFormatter",
]
