"""Data models and gateway result types for the short link store."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Union


@dataclass(frozen=True)
class ShortLink:
    """Represents a row of the ``url`` table."""

    id: str
    long_url: str
    created_at: datetime

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "long_url": self.long_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_record(cls, record) -> "ShortLink":
        """Create from a database record (or any mapping with the table columns)."""
        created_at = record["created_at"]
        if created_at.tzinfo is None:
            # Plain TIMESTAMP columns come back naive; the store always writes UTC
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(
            id=record["id"],
            long_url=record["long_url"],
            created_at=created_at,
        )


# Tagged results returned by gateways. The shortening loop branches on these
# instead of on exception types.

@dataclass(frozen=True)
class Inserted:
    """The row was written."""

    link: ShortLink


@dataclass(frozen=True)
class Found:
    """A row exists for the requested identifier."""

    link: ShortLink


@dataclass(frozen=True)
class Conflict:
    """The identifier is already taken (uniqueness violation)."""

    short_id: str


@dataclass(frozen=True)
class NotFound:
    """No row exists for the requested identifier."""

    short_id: str


@dataclass(frozen=True)
class GatewayFailure:
    """Infrastructure error: connectivity, timeout, bad query, other constraints."""

    operation: str
    message: str
    error: Optional[BaseException] = None

    def __str__(self) -> str:
        return f"{self.operation} failed: {self.message}"


InsertResult = Union[Inserted, Conflict, GatewayFailure]
LookupResult = Union[Found, NotFound, GatewayFailure]
