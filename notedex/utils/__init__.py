"""
Utilities module for the notedex CLI tool.
"""

from notedex.utils.logging import (
    StructuredLogFormatter,
    get_logger,
    log_with_context,
    setup_logging,
)

__all__ = [
    "StructuredLogFormatter",
    "get_logger",
    "log_with_context",
    "setup_logging",
]
