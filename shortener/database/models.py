"""Data models for URL shortener."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Union


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return ``value`` as an aware UTC datetime; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    """Default clock for the service."""
    return datetime.now(timezone.utc)


@dataclass
class UrlRecord:
    """Represents a URL record in the database."""

    short_code: str
    original_url: str
    created_at: datetime
    click_count: int = 0
    expires_at: Optional[datetime] = None

    def __post_init__(self):
        self.created_at = ensure_utc(self.created_at)
        self.expires_at = ensure_utc(self.expires_at)

    def is_expired(self, now: datetime) -> bool:
        """Check whether the record is past its expiration instant.

        A record expiring at ``T`` is valid strictly before ``T``.

        Args:
            now: Current time (UTC)

        Returns:
            True if expired
        """
        if self.expires_at is None:
            return False
        return ensure_utc(now) >= self.expires_at

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "short_code": self.short_code,
            "original_url": self.original_url,
            "click_count": self.click_count,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UrlRecord":
        """Create from dictionary (a store row or the output of ``to_dict``)."""
        return cls(
            short_code=data["short_code"],
            original_url=data["original_url"],
            created_at=_parse_datetime(data["created_at"]),
            click_count=data.get("click_count") or 0,
            expires_at=_parse_datetime(data.get("expires_at")),
        )


def _parse_datetime(value) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class Resolved:
    """Successful resolution; ``record`` is the snapshot read before the click was counted."""

    record: UrlRecord

    @property
    def original_url(self) -> str:
        return self.record.original_url


@dataclass(frozen=True)
class Expired:
    """The code exists but its expiration instant has passed."""

    short_code: str
    expires_at: datetime


@dataclass(frozen=True)
class NotFound:
    """The code was never allocated."""

    short_code: str


Resolution = Union[Resolved, Expired, NotFound]
