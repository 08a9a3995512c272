"""Common utilities for URL shortener."""

from .validators import is_valid_url, is_valid_short_code, normalize_url
from .logging_config import setup_logging

__all__ = [
    "is_valid_url",
    "is_valid_short_code",
    "normalize_url",
    "setup_logging",
]
