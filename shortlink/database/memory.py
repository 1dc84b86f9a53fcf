"""In-process gateway for development and tests.

Keeps rows in a dict keyed by identifier and enforces the same primary-key
semantics as the ``url`` table. Nothing survives a restart.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict, Optional

from .base import ShortLinkGatewayBase
from .models import Conflict, Found, InsertResult, Inserted, LookupResult, NotFound, ShortLink


class InMemoryShortLinkGateway(ShortLinkGatewayBase):
    """Dict-backed short link gateway."""

    def __init__(self, db_config: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self._rows: Dict[str, ShortLink] = {}
        self._lock = asyncio.Lock()

    async def insert(self, short_id: str, long_url: str) -> InsertResult:
        async with self._lock:
            if short_id in self._rows:
                return Conflict(short_id=short_id)
            link = ShortLink(
                id=short_id,
                long_url=long_url,
                created_at=datetime.now(timezone.utc),
            )
            self._rows[short_id] = link
        return Inserted(link=link)

    async def lookup(self, short_id: str) -> LookupResult:
        link = self._rows.get(short_id)
        if link is None:
            return NotFound(short_id=short_id)
        return Found(link=link)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self.logger.debug(f"Dropping {len(self._rows)} in-memory short links")

    def __len__(self) -> int:
        return len(self._rows)
