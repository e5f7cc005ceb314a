# Area: Shared
"""
Shared utilities used by the core and the session layer.

This package contains:
- Logging configuration
"""

from .logging_config import (
    JSONFormatter,
    TerminalFormatter,
    log_host_error,
    setup_logging,
)

__all__ = [
    "JSONFormatter",
    "TerminalFormatter",
    "log_host_error",
    "setup_logging",
]
