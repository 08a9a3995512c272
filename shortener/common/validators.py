"""Validation utilities for URL shortener."""

import re
from urllib.parse import urlparse
from typing import Optional, Tuple

MAX_URL_LENGTH = 2048

SHORT_CODE_PATTERN = re.compile(r'^[a-zA-Z0-9]+$')


def normalize_url(url: Optional[str]) -> str:
    """Trim surrounding whitespace; the only normalization applied to URLs."""
    return (url or "").strip()


def is_valid_url(url: Optional[str]) -> Tuple[bool, str]:
    """Validate a URL.

    Args:
        url: The URL to validate (already trimmed)

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    try:
        result = urlparse(url)

        # Check if scheme is http or https
        if result.scheme not in ["http", "https"]:
            return False, "URL must use http or https protocol"

        # Check if netloc (domain) exists
        if not result.netloc or not result.hostname:
            return False, "URL must have a valid domain"

        result.port  # raises ValueError for a malformed port

        return True, ""

    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"


def is_valid_short_code(short_code: str, min_length: int = 1, max_length: int = 32) -> Tuple[bool, str]:
    """Validate the shape of a short code taken from a request path.

    Args:
        short_code: The short code to validate
        min_length: Minimum length for short code
        max_length: Maximum length for short code

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"

    if len(short_code) < min_length:
        return False, f"Short code must be at least {min_length} characters"

    if len(short_code) > max_length:
        return False, f"Short code must be at most {max_length} characters"

    if not SHORT_CODE_PATTERN.match(short_code):
        return False, "Short code can only contain letters and numbers"

    return True, ""
