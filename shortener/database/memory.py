"""In-memory store for URL shortener.

Holds the same constraints as the PostgreSQL store. Each operation runs
without an await point in its body, so it is atomic under asyncio.
Used by the test suite and by local runs with ``DATABASE_URL=memory://``.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, List, Dict, Any

from .base import URLStoreBase
from .models import UrlRecord
from ..errors import ShortCodeConflictError, OriginalUrlConflictError


class InMemoryURLStore(URLStoreBase):
    """Dictionary-backed implementation of ``URLStoreBase``."""

    def __init__(self, db_config: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self._by_code: Dict[str, UrlRecord] = {}
        self._code_by_url: Dict[str, str] = {}

    async def insert(self, record: UrlRecord) -> None:
        if record.short_code in self._by_code:
            raise ShortCodeConflictError(record.short_code)
        if record.original_url in self._code_by_url:
            raise OriginalUrlConflictError(record.original_url)

        self._by_code[record.short_code] = replace(record)
        self._code_by_url[record.original_url] = record.short_code
        self.logger.debug(f"Stored {record.short_code} -> {record.original_url}")

    async def get_by_short_code(self, short_code: str) -> Optional[UrlRecord]:
        record = self._by_code.get(short_code)
        # Copies keep callers from mutating stored state
        return replace(record) if record else None

    async def get_by_original_url(self, original_url: str) -> Optional[UrlRecord]:
        short_code = self._code_by_url.get(original_url)
        if short_code is None:
            return None
        return replace(self._by_code[short_code])

    async def increment_click_count(self, short_code: str, now: datetime) -> bool:
        record = self._by_code.get(short_code)
        if record is None or record.is_expired(now):
            return False
        record.click_count += 1
        return True

    async def list_urls(self, limit: int = 100) -> List[Dict[str, Any]]:
        records = sorted(self._by_code.values(), key=lambda r: r.created_at, reverse=True)
        return [
            {"short_code": r.short_code, "original_url": r.original_url}
            for r in records[:limit]
        ]

    async def get_statistics(self) -> Dict[str, Any]:
        return {
            "total_urls": len(self._by_code),
            "total_clicks": sum(r.click_count for r in self._by_code.values()),
            "database": "memory",
        }

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self._by_code.clear()
        self._code_by_url.clear()
