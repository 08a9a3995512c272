"""Code registry: allocates short codes and deduplicates URLs."""

import logging
from datetime import datetime
from typing import Callable, Optional

from .database.base import URLStoreBase
from .database.models import UrlRecord, ensure_utc, utc_now
from .errors import StoreError, ShortCodeConflictError, OriginalUrlConflictError, ShortCodeExhaustedError
from .shortcode import ShortCodeGenerator


class CodeRegistry:
    """Owns the short code -> URL mapping.

    One record exists per distinct trimmed URL. The check-then-insert sequence
    is not atomic; the store's uniqueness constraint on ``original_url`` is the
    serialization point, and a creator that loses the race re-reads the
    winning record instead of failing.
    """

    def __init__(
        self,
        store: URLStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        clock: Callable[[], datetime] = utc_now,
        max_collision_retries: int = 5,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize code registry.

        Args:
            store: Store holding URL records
            short_code_generator: Optional short code generator
            clock: Returns the current UTC time
            max_collision_retries: Insert attempts before giving up on code collisions
            logger: Optional logger
        """
        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator()
        self.clock = clock
        self.max_collision_retries = max_collision_retries
        self.logger = logger or logging.getLogger(__name__)

    async def create_short_url(self, url: str, expires_at: Optional[datetime] = None) -> str:
        """Return the short code for ``url``, allocating one if needed.

        Args:
            url: Absolute URL, validated by the caller
            expires_at: Optional expiration instant; ignored if the URL already has a code

        Returns:
            The short code

        Raises:
            ShortCodeExhaustedError: If every generated code collided
            StoreError: If the store fails
        """
        original_url = url.strip()

        existing = await self.store.get_by_original_url(original_url)
        if existing:
            self.logger.info(f"URL already exists, returning existing short code: {existing.short_code}")
            return existing.short_code

        expires_at = ensure_utc(expires_at)

        for attempt in range(1, self.max_collision_retries + 1):
            record = UrlRecord(
                short_code=self.generator.generate(),
                original_url=original_url,
                created_at=self.clock(),
                click_count=0,
                expires_at=expires_at,
            )
            try:
                await self.store.insert(record)
            except ShortCodeConflictError:
                self.logger.warning(f"Short code collision on attempt {attempt}: {record.short_code}")
                continue
            except OriginalUrlConflictError:
                return await self._existing_code(original_url)

            self.logger.info(f"New short code created: {record.short_code} -> {original_url}")
            return record.short_code

        self.logger.error(f"Gave up allocating a short code for {original_url}")
        raise ShortCodeExhaustedError(self.max_collision_retries)

    async def _existing_code(self, original_url: str) -> str:
        """Re-read the record created by a concurrent request for the same URL."""
        existing = await self.store.get_by_original_url(original_url)
        if existing is None:
            raise StoreError(f"URL conflict reported but no record found for {original_url}")
        self.logger.info(f"Concurrent create for {original_url} resolved to {existing.short_code}")
        return existing.short_code
