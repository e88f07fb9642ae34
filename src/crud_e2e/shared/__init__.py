"""Shared modules for crud-e2e.

This module provides functionality used across the runner:
- Auth (bearer header helpers)
- Logging (structlog configuration)
"""

from .auth import auth_headers, extract_bearer_token
from .logging import configure_logging, get_logger

__all__ = [
    # Auth
    "auth_headers",
    "extract_bearer_token",
    # Logging
    "configure_logging",
    "get_logger",
]
