"""Storage layer for URL shortener."""

from .base import URLStoreBase
from .memory import InMemoryURLStore
from .models import UrlRecord, Resolved, Expired, NotFound, Resolution
from .postgres import URLShortenerPostgres


def create_store(config, logger=None) -> URLStoreBase:
    """Build the store named by ``config.database_url``.

    ``memory://`` selects the in-process store; anything else is treated
    as a PostgreSQL connection URL.
    """
    if config.database_url.startswith("memory://"):
        return InMemoryURLStore(config.database_url, logger=logger)
    return URLShortenerPostgres(
        db_config=config.database_url,
        pool_min_size=config.pool_min_size,
        pool_max_size=config.pool_max_size,
        timeout_seconds=config.store_timeout_seconds,
        create_tables=config.create_tables,
        logger=logger,
    )


__all__ = [
    "URLStoreBase",
    "InMemoryURLStore",
    "URLShortenerPostgres",
    "UrlRecord",
    "Resolved",
    "Expired",
    "NotFound",
    "Resolution",
    "create_store",
]
