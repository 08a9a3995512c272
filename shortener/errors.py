"""Exceptions raised by the URL shortener core and its stores.

Expected outcomes of a lookup (unknown code, expired link) are not
exceptions; see ``shortener.database.models`` for the result types.
"""


class ShortenerError(Exception):
    """Base class for URL shortener errors."""
    pass


class InvalidInputError(ShortenerError):
    """Raised when client input (usually the URL) is malformed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StoreError(ShortenerError):
    """Raised when the backing store is unreachable or rejects an operation."""
    pass


class StoreTimeoutError(StoreError):
    """Raised when a store call does not complete within its timeout."""

    def __init__(self, operation: str, timeout_seconds: float):
        super().__init__(f"Store operation '{operation}' timed out after {timeout_seconds}s")
        self.operation = operation
        self.timeout_seconds = timeout_seconds


class ShortCodeExhaustedError(StoreError):
    """Raised when no free short code was found within the retry budget."""

    def __init__(self, attempts: int):
        super().__init__(f"Unable to allocate a unique short code after {attempts} attempts")
        self.attempts = attempts


class ShortCodeConflictError(StoreError):
    """Insert rejected because the short code is already taken."""

    def __init__(self, short_code: str):
        super().__init__(f"Short code already exists: {short_code}")
        self.short_code = short_code


class OriginalUrlConflictError(StoreError):
    """Insert rejected because a record for the URL already exists."""

    def __init__(self, original_url: str):
        super().__init__(f"A short code already exists for URL: {original_url}")
        self.original_url = original_url
