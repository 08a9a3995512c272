"""Abstract base class for URL shortener store implementations."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List, Dict, Any

from .models import UrlRecord


class URLStoreBase(ABC):
    """Abstract base class for URL record storage.

    Implementations must enforce two uniqueness constraints (``short_code`` and
    ``original_url``) and perform click increments as a single atomic add.
    Every failure surfaces as ``StoreError`` (``StoreTimeoutError`` when a
    call exceeds its timeout).
    """

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Store connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def insert(self, record: UrlRecord) -> None:
        """Insert a new URL record.

        Args:
            record: The record to persist

        Raises:
            ShortCodeConflictError: If ``record.short_code`` is already taken
            OriginalUrlConflictError: If a record for ``record.original_url`` exists
            StoreError: On any other failure
        """
        pass

    @abstractmethod
    async def get_by_short_code(self, short_code: str) -> Optional[UrlRecord]:
        """Get the record for a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_original_url(self, original_url: str) -> Optional[UrlRecord]:
        """Get the record whose original URL equals ``original_url`` exactly.

        Args:
            original_url: The (already trimmed) URL

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def increment_click_count(self, short_code: str, now: datetime) -> bool:
        """Atomically add one to the click count of a live short code.

        The expiration check is part of the same atomic step: a record whose
        ``expires_at`` is at or before ``now`` is left untouched.

        Args:
            short_code: The short code to update
            now: Resolution instant (UTC)

        Returns:
            True if a record was updated
        """
        pass

    @abstractmethod
    async def list_urls(self, limit: int = 100) -> List[Dict[str, Any]]:
        """List short codes with their URLs, most recent first.

        Args:
            limit: Maximum number of rows to return

        Returns:
            List of ``{"short_code", "original_url"}`` dictionaries
        """
        pass

    @abstractmethod
    async def get_statistics(self) -> Dict[str, Any]:
        """Get store statistics.

        Returns:
            Dictionary with total_urls, total_clicks and the store name
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release store connections."""
        pass
