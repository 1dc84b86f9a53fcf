"""Database layer for the short link service."""

import logging
from typing import Optional

from .base import ShortLinkGatewayBase
from .memory import InMemoryShortLinkGateway
from .models import (
    Conflict,
    Found,
    GatewayFailure,
    Inserted,
    NotFound,
    ShortLink,
)
from .postgres import PostgresShortLinkGateway


def create_gateway(config, logger: Optional[logging.Logger] = None) -> ShortLinkGatewayBase:
    """Build the gateway selected by ``config.database_url``.

    ``memory://`` gives the in-process store; anything else is handed to
    asyncpg as a PostgreSQL DSN.
    """
    if config.database_url.startswith("memory://"):
        return InMemoryShortLinkGateway(db_config=config.database_url, logger=logger)

    return PostgresShortLinkGateway(
        db_config=config.database_url,
        pool_min_size=config.pool_min_size,
        pool_max_size=config.pool_max_size,
        timeout_seconds=config.pool_timeout_seconds,
        logger=logger,
    )


__all__ = [
    "ShortLinkGatewayBase",
    "PostgresShortLinkGateway",
    "InMemoryShortLinkGateway",
    "ShortLink",
    "Inserted",
    "Found",
    "Conflict",
    "NotFound",
    "GatewayFailure",
    "create_gateway",
]
