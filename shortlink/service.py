"""Business logic service for the short link service."""

import logging
from typing import Optional, Dict

from .shortcode import ShortCodeGenerator
from .database.base import ShortLinkGatewayBase
from .database.models import Conflict, Found, Inserted, NotFound, ShortLink
from .errors import GatewayError, RetriesExhaustedError, ShortLinkNotFoundError


class ShortLinkService:
    """Service layer for shortening and resolving URLs.

    Holds no state of its own between calls: every shorten goes through the
    gateway insert path and every resolve is a fresh read.
    """

    def __init__(
        self,
        db: ShortLinkGatewayBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 5,
    ):
        """Initialize short link service.

        Args:
            db: Persistence gateway
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_collision_retries: Total insert attempts before giving up
        """
        if max_collision_retries < 1:
            raise ValueError("max_collision_retries must be at least 1")

        self.db = db
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_collision_retries = max_collision_retries

    async def shorten(self, long_url: str) -> ShortLink:
        """Create a new short link for ``long_url``.

        The URL is stored as given; callers validate it beforehand.

        Args:
            long_url: The original long URL

        Returns:
            The stored ShortLink

        Raises:
            GatewayError: The datastore failed (not retried)
            RetriesExhaustedError: Every attempt collided with an existing id
        """
        for attempt in range(1, self.max_collision_retries + 1):
            candidate = self.generator.generate()
            result = await self.db.insert(candidate, long_url)

            if isinstance(result, Inserted):
                self.logger.info(f"Created short link: {result.link.id} -> {long_url}")
                return result.link

            if isinstance(result, Conflict):
                self.logger.debug(
                    f"Collision on {candidate} "
                    f"(attempt {attempt}/{self.max_collision_retries})"
                )
                continue

            raise GatewayError(result)

        self.logger.warning(
            f"Gave up after {self.max_collision_retries} collisions; "
            f"{self.generator.keyspace_size()} ids of length "
            f"{self.generator.length} may be close to exhausted"
        )
        raise RetriesExhaustedError(self.max_collision_retries, self.generator.length)

    async def resolve(self, short_id: str) -> str:
        """Get the original URL for a short id.

        Args:
            short_id: The identifier to look up

        Returns:
            The stored long URL, unmodified

        Raises:
            ShortLinkNotFoundError: No link with this id
            GatewayError: The datastore failed
        """
        link = await self.get_link(short_id)
        self.logger.debug(f"Resolved {short_id} -> {link.long_url}")
        return link.long_url

    async def get_link(self, short_id: str) -> ShortLink:
        """Get the full ShortLink row for a short id.

        Raises the same errors as ``resolve``.
        """
        result = await self.db.lookup(short_id)

        if isinstance(result, Found):
            return result.link

        if isinstance(result, NotFound):
            self.logger.info(f"Short link not found: {short_id}")
            raise ShortLinkNotFoundError(short_id)

        raise GatewayError(result)

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
