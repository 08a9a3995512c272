"""Business logic service for URL shortener."""

import logging
from datetime import datetime
from typing import Callable, Optional, Dict, Any, List, Union

from .database.base import URLStoreBase
from .database.models import UrlRecord, Resolution, NotFound, utc_now
from .registry import CodeRegistry
from .resolution import ResolutionService
from .shortcode import ShortCodeGenerator


class URLShortenerService:
    """Service layer wiring the code registry and resolution service to one store.

    Built once per process (see ``app.py``) and shared by every request.
    """

    def __init__(
        self,
        db: URLStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 5,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize URL shortener service.

        Args:
            db: Store instance
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_collision_retries: Maximum insert attempts on short code collision
            clock: Current-time source shared by creation and resolution
        """
        self.db = db
        self.logger = logger or logging.getLogger(__name__)
        self.registry = CodeRegistry(
            store=db,
            short_code_generator=short_code_generator,
            clock=clock,
            max_collision_retries=max_collision_retries,
            logger=self.logger,
        )
        self.resolver = ResolutionService(store=db, clock=clock, logger=self.logger)

    async def create_short_url(self, url: str, expires_at: Optional[datetime] = None) -> str:
        """Create (or reuse) the short code for a URL.

        Args:
            url: Validated absolute URL
            expires_at: Optional expiration instant

        Returns:
            The short code
        """
        return await self.registry.create_short_url(url, expires_at)

    async def resolve(self, short_code: str) -> Resolution:
        """Resolve a short code, counting the click when it is live."""
        return await self.resolver.resolve(short_code)

    async def get_stats(self, short_code: str) -> Union[UrlRecord, NotFound]:
        """Get the record for a short code regardless of expiration."""
        return await self.resolver.get_stats(short_code)

    async def url_exists(self, short_code: str) -> bool:
        """Check if a short code exists.

        Args:
            short_code: The short code to check

        Returns:
            True if exists
        """
        return await self.resolver.exists(short_code)

    async def list_urls(self, limit: int = 100) -> List[Dict[str, Any]]:
        """List short codes and their URLs.

        Args:
            limit: Maximum number to return

        Returns:
            List of ``{"short_code", "original_url"}`` dictionaries
        """
        return await self.db.list_urls(limit)

    async def get_statistics(self) -> Dict[str, Any]:
        """Get service statistics.

        Returns:
            Dictionary with statistics
        """
        return await self.db.get_statistics()

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.db.health_check()

        return {
            "database": db_healthy,
            "overall": db_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.db.close()
