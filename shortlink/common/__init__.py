"""Common utilities for the short link service."""

from .validators import is_valid_url
from .headers import build_base_url, get_client_timezone, get_forwarded_path_prefix
from .url_builder import build_short_url
from .logging_config import setup_logging, get_logger
from .timefmt import format_created_at

__all__ = [
    "is_valid_url",
    "build_base_url",
    "get_client_timezone",
    "get_forwarded_path_prefix",
    "build_short_url",
    "setup_logging",
    "get_logger",
    "format_created_at",
]
