"""Core business logic for the short link service."""

from .shortcode import ShortCodeGenerator
from .service import ShortLinkService
from .errors import (
    ShortLinkError,
    GatewayError,
    RetriesExhaustedError,
    ShortLinkNotFoundError,
)

__all__ = [
    "ShortCodeGenerator",
    "ShortLinkService",
    "ShortLinkError",
    "GatewayError",
    "RetriesExhaustedError",
    "ShortLinkNotFoundError",
]
