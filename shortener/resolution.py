"""Resolution service: short code lookup with expiration and click accounting."""

import logging
from datetime import datetime
from typing import Callable, Optional, Union

from .database.base import URLStoreBase
from .database.models import UrlRecord, Resolution, Resolved, Expired, NotFound, utc_now


class ResolutionService:
    """Resolves short codes to URL records."""

    def __init__(
        self,
        store: URLStoreBase,
        clock: Callable[[], datetime] = utc_now,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

    async def resolve(self, short_code: str) -> Resolution:
        """Resolve a short code and count the visit.

        The click is counted only for a live (non-expired) record, through the
        store's atomic increment, which repeats the expiration check against
        the same instant.

        Args:
            short_code: The short code to resolve

        Returns:
            ``Resolved`` with the record as read before the click was counted,
            ``Expired`` carrying the expiration instant, or ``NotFound``
        """
        record = await self.store.get_by_short_code(short_code)
        if record is None:
            self.logger.warning(f"Short code not found: {short_code}")
            return NotFound(short_code)

        now = self.clock()
        if record.is_expired(now):
            self.logger.info(
                f"Short code {short_code} expired at {record.expires_at.isoformat()} "
                f"(now {now.isoformat()})"
            )
            return Expired(short_code, record.expires_at)

        if not await self.store.increment_click_count(short_code, now):
            # The store's own view says the record is no longer live at ``now``
            current = await self.store.get_by_short_code(short_code)
            if current is None or current.expires_at is None:
                return NotFound(short_code)
            self.logger.info(f"Short code {short_code} expired before its click was counted")
            return Expired(short_code, current.expires_at)

        self.logger.debug(f"Resolved {short_code} -> {record.original_url}")
        return Resolved(record)

    async def get_stats(self, short_code: str) -> Union[UrlRecord, NotFound]:
        """Get the full record for a short code, expired or not."""
        record = await self.store.get_by_short_code(short_code)
        if record is None:
            return NotFound(short_code)
        return record

    async def exists(self, short_code: str) -> bool:
        """Check whether a short code was ever allocated. No expiry check, no click."""
        return await self.store.get_by_short_code(short_code) is not None
