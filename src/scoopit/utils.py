"""Utility functions for scoopit."""

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlsplit

from scoopit.exceptions import generate_correlation_id


def log_with_correlation(
    logger: logging.Logger,
    level: int,
    message: str,
    correlation_id: str | None = None,
    **kwargs: Any,
) -> None:
    """
    Log a message with correlation ID and additional context.

    Args:
        logger: Logger instance to use.
        level: Logging level (e.g., logging.INFO, logging.ERROR).
        message: Log message format string.
        correlation_id: Optional correlation ID. If None, generates a new one.
        **kwargs: Additional context to include in log extra fields.
    """
    corr_id = correlation_id or generate_correlation_id()
    extra = {"correlation_id": corr_id, **kwargs}
    logger.log(level, message, extra=extra)


def is_valid_url(url: str | None) -> bool:
    """
    Check that a URL is absolute and parseable.

    Args:
        url: URL string to check.

    Returns:
        True when the URL has both a scheme and a network location.
    """
    if not url or not isinstance(url, str):
        return False
    try:
        parts = urlsplit(url.strip())
        # Accessing port validates it (raises ValueError when out of range)
        parts.port
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc)


def normalise_route(route: str) -> str:
    """Ensure a route path starts with a slash."""
    return route if route.startswith("/") else f"/{route}"


def build_route_url(base_url: str, route: str) -> str:
    """
    Join a base URL and a route by plain concatenation.

    Args:
        base_url: Base URL (e.g., "https://example.com").
        route: Route path, with or without a leading slash.

    Returns:
        Full URL for the route.
    """
    return f"{base_url}{normalise_route(route)}"


def split_page_url(url: str) -> tuple[str, str]:
    """
    Split a full page URL into its origin and path.

    Query strings and fragments are not part of the route.

    Args:
        url: Absolute page URL.

    Returns:
        Tuple of (base_url, route). Route defaults to "/".
    """
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}", parts.path or "/"


def slugify(text: str) -> str:
    """
    Convert text to a lowercase, hyphen-separated slug.

    Args:
        text: Text to convert.

    Returns:
        Slug containing only word characters and hyphens.
    """
    slug = text.lower()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-").strip()


def route_slug(route: str) -> str:
    """Flatten a route path into a file-name-safe slug ("/a/b" -> "a-b")."""
    return route.removeprefix("/").replace("/", "-") or "index"


def generate_filename(
    route: str,
    title: str | None = None,
    *,
    stable: bool = False,
    now: datetime | None = None,
) -> str:
    """
    Generate an output file name (without extension) for a route.

    Uses the title slug when available, otherwise the route slug, followed by a
    YYYYMMDD-HHMMSS timestamp. Stable names skip the title and timestamp.

    Args:
        route: Normalised route path.
        title: Page title.
        stable: Use the route slug only (deterministic names).
        now: Timestamp to use (defaults to current UTC time).

    Returns:
        File name without extension.
    """
    base = route_slug(route)
    if stable:
        return base

    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%d-%H%M%S")
    title_slug = slugify(title) if title else ""
    return f"{title_slug or base}_{stamp}"


def stringify_scalar(value: Any) -> str:
    """
    Render a decoded JSON value the way it appears in JSON text.

    Booleans and null use JSON spelling and integral floats drop their
    fractional part, so values read back as they were written. Arrays and
    objects are pretty-printed JSON.

    Args:
        value: Decoded JSON value.

    Returns:
        String representation.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, ensure_ascii=False)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
