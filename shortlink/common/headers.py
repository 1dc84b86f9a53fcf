"""Request header helpers for the short link service."""

from typing import Mapping, Optional


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup returning None for blank values."""
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            value = value.strip()
            return value or None
    return None


def build_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Build the scheme://host part of short URLs.

    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host (set by a reverse proxy)
    2. Request scheme + Host header
    3. Fallback base URL from config

    Returns:
        Base URL without trailing slash (e.g., https://example.com)
    """
    proto = _header(headers, "x-forwarded-proto")
    host = _header(headers, "x-forwarded-host")
    if proto and host:
        return f"{proto}://{host}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")


def get_forwarded_path_prefix(headers: Mapping[str, str]) -> str:
    """Get path prefix from X-Forwarded-Prefix (set by a proxy stripping e.g. /s).

    Returns normalized prefix with leading slash, no trailing (e.g. '/s'), or '' if not set.
    """
    value = _header(headers, "x-forwarded-prefix")
    if not value:
        return ""
    p = value.strip("/")
    return "/" + p if p else ""


def get_client_timezone(headers: Mapping[str, str]) -> Optional[str]:
    """IANA timezone name the browser sent in X-Timezone, if any."""
    return _header(headers, "x-timezone")
