"""Abstract base class for short link persistence gateways."""

from abc import ABC, abstractmethod

from .models import InsertResult, LookupResult


class ShortLinkGatewayBase(ABC):
    """Abstract base class for short link database operations.

    Implementations never raise for expected datastore outcomes; they return
    one of the tagged results from ``models`` instead.
    """

    def __init__(self, db_config: str):
        """Initialize gateway.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def insert(self, short_id: str, long_url: str) -> InsertResult:
        """Create a new short link row.

        Args:
            short_id: Candidate identifier (primary key)
            long_url: The original long URL

        Returns:
            Inserted with the stored row (``created_at`` set by the store),
            Conflict if ``short_id`` is already taken,
            GatewayFailure for any other error
        """
        pass

    @abstractmethod
    async def lookup(self, short_id: str) -> LookupResult:
        """Fetch the short link stored under an identifier.

        Args:
            short_id: The identifier to look up

        Returns:
            Found, NotFound, or GatewayFailure
        """
        pass

    async def ensure_tables(self) -> None:
        """Create the schema if the backend needs one."""
        return None

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the datastore is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release datastore connections."""
        pass
