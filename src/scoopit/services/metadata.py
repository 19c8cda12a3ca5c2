"""Metadata extraction from HTML documents and JSON API responses."""

import json
import logging
from typing import Any

from bs4 import BeautifulSoup

from scoopit.models import Metadata
from scoopit.services.detector import HtmlPayload, JsonPayload, Payload
from scoopit.utils import stringify_scalar

LOGGER = logging.getLogger(__name__)

# Longest <h1> text accepted as a fallback title
MAX_H1_TITLE_LENGTH = 100


def _attr(tag: Any, name: str) -> str:
    """Read a tag attribute as a stripped string ("" when missing)."""
    if tag is None:
        return ""
    value = tag.get(name)
    # Multi-valued attributes come back as lists
    if isinstance(value, list):
        value = value[0] if value else ""
    return (value or "").strip()


def _text(tag: Any) -> str:
    return tag.get_text().strip() if tag is not None else ""


def _first(*values: str) -> str:
    """Return the first non-empty value."""
    for value in values:
        if value:
            return value
    return ""


def _scalar_text(value: Any) -> str:
    """Render a truthy JSON scalar as text; objects, arrays and empty values give ""."""
    if not value or isinstance(value, (dict, list)):
        return ""
    return stringify_scalar(value)


class MetadataExtractor:
    """Derive title, description, author and related fields from a payload.

    HTML documents are read through fallback chains over <meta> tags and page
    elements; JSON objects through common API field names. Extraction never
    raises; failures yield ``Metadata.minimal()``.
    """

    def __init__(self, parser: str = "html.parser", logger: logging.Logger | None = None):
        self._parser = parser
        self._logger = logger or LOGGER

    def extract(self, payload: Payload | None) -> Metadata:
        """Extract metadata from a classified payload.

        Args:
            payload: HtmlPayload or JsonPayload. None yields the minimal result.

        Returns:
            Metadata. Degenerate documents yield the minimal shape.
        """
        try:
            match payload:
                case JsonPayload(data=data):
                    return self._from_json(data)
                case HtmlPayload(html=html) if html:
                    return self._from_html(html)
                case _:
                    return Metadata.minimal()
        except Exception as e:
            self._logger.debug(f"Metadata extraction failed: {e}", exc_info=True)
            return Metadata.minimal()

    def _from_html(self, html: str) -> Metadata:
        soup = BeautifulSoup(html, self._parser)

        # Nothing to read title or description from
        if soup.find("title") is None and soup.find("meta") is None:
            return Metadata.minimal()

        def meta(name: str | None = None, prop: str | None = None) -> str:
            attrs = {"name": name} if name else {"property": prop}
            return _attr(soup.find("meta", attrs=attrs), "content")

        title = _first(meta(prop="og:title"), _text(soup.find("title")))
        if not title:
            h1_text = _text(soup.find("h1"))
            # A long "heading" is more likely a misidentified paragraph
            if len(h1_text) < MAX_H1_TITLE_LENGTH:
                title = h1_text

        description = _first(
            meta(name="description"),
            meta(prop="og:description"),
            meta(name="twitter:description"),
        )

        author = _first(
            meta(name="author"),
            meta(prop="article:author"),
            _text(soup.select_one(".author")),
            _text(soup.select_one("[rel='author']")),
        )

        date = _first(
            meta(prop="article:published_time"),
            _attr(soup.select_one("time[datetime]"), "datetime"),
            _text(soup.select_one(".date, .published, .time")),
        )

        keywords = [keyword.strip() for keyword in meta(name="keywords").split(",") if keyword.strip()]

        return Metadata(
            title=title,
            description=description,
            author=author,
            date=date,
            keywords=keywords,
            canonical_url=_attr(soup.find("link", attrs={"rel": "canonical"}), "href"),
            site_name=meta(prop="og:site_name"),
        )

    def _from_json(self, data: Any) -> Metadata:
        fields = data if isinstance(data, dict) else {}

        def field(*keys: str) -> str:
            return _first(*(_scalar_text(fields.get(key)) for key in keys))

        title = field("title", "name")
        if not title and field("id"):
            title = f"{field('type') or 'Item'} {field('id')}"

        author = _first(
            self._person_name(fields.get("author")),
            self._person_name(fields.get("user")),
            field("username"),
        )

        return Metadata(
            title=title or "JSON Data",
            description=field("body", "description", "summary"),
            author=author,
            date=field("date", "created_at", "createdAt"),
            keywords=[],
            canonical_url="",
            site_name="",
        )

    @staticmethod
    def _person_name(value: Any) -> str:
        """Read an author/user field given as a string or a {name, username} object."""
        if isinstance(value, dict):
            return _first(_scalar_text(value.get("name")), _scalar_text(value.get("username")))
        return _scalar_text(value)


def extract_metadata(content: str | None, is_json: bool = False) -> Metadata:
    """Extract metadata from raw content.

    Args:
        content: Raw HTML or JSON text.
        is_json: Treat the content as JSON.

    Returns:
        Metadata; the minimal shape for empty or unparseable input.
    """
    if not content:
        return Metadata.minimal()

    if is_json:
        try:
            payload: Payload = JsonPayload(raw=content, data=json.loads(content))
        except ValueError:
            return Metadata.minimal()
    else:
        payload = HtmlPayload(html=content)

    return MetadataExtractor().extract(payload)
