"""Main-content location.

Finds the DOM subtree most likely to hold the page's article/body text, or
flattens a JSON value into readable ``key: value`` text.

Selection runs in two phases:
1. Prioritised selectors. Every selector is tried and the matched element
   with the most text wins, so a lower-priority selector can beat an earlier
   one when it wraps more text.
2. Paragraph-density fallback. Only used when phase 1 left the default
   (<body>) in place: the <div> with more than 3 <p> descendants and the most
   text wins.
"""

import json
import logging
import re
from typing import Any

from bs4 import BeautifulSoup, Tag

from scoopit.models import ExtractedContent
from scoopit.services.detector import HtmlPayload, JsonPayload, Payload, detect_payload
from scoopit.services.sanitizer import HtmlSanitizer
from scoopit.utils import stringify_scalar

LOGGER = logging.getLogger(__name__)

# Minimum number of <p> descendants for a <div> to count as content
MIN_PARAGRAPHS = 3

DEFAULT_SELECTOR = "body"
HEURISTIC_SELECTOR = "div"


def pretty_json(data: Any) -> str:
    """Pretty-print a JSON value with 2-space indentation."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def _is_scalar(value: Any) -> bool:
    return not isinstance(value, (dict, list))


def _flatten_object(obj: dict[str, Any]) -> str:
    """Render one JSON object as ``key: value`` lines.

    Nested objects are pretty-printed; arrays only when every item is a scalar.
    Null values are skipped.
    """
    lines = []
    for key, value in obj.items():
        if value is None:
            continue
        if isinstance(value, dict):
            lines.append(f"{key}: {pretty_json(value)}")
        elif isinstance(value, list):
            if all(_is_scalar(item) for item in value):
                lines.append(f"{key}: {pretty_json(value)}")
        else:
            lines.append(f"{key}: {stringify_scalar(value)}")
    return "\n".join(lines)


def _flatten_item(item: Any) -> str:
    if isinstance(item, dict):
        return _flatten_object(item)
    if isinstance(item, list):
        return pretty_json(item) if all(_is_scalar(value) for value in item) else ""
    return stringify_scalar(item)


def flatten_json(data: Any) -> str:
    """Convert a JSON value into human-readable text.

    Arrays become one block per item separated by a blank line, objects become
    ``key: value`` lines, and scalars are stringified directly. Nested arrays
    inside a top-level array follow the same rule as array fields.
    """
    if isinstance(data, list):
        blocks = [_flatten_item(item) for item in data]
        return "\n\n".join(block for block in blocks if block).strip()
    if isinstance(data, dict):
        return _flatten_object(data).strip()
    return stringify_scalar(data)


def normalise_text(text: str) -> str:
    """Collapse whitespace runs to single spaces and 3+ newlines to two."""
    text = re.sub(r"\s+", " ", text.strip())
    text = re.sub(r"\n\s*\n\s*\n", "\n\n", text)
    return text.strip()


class ContentLocator:
    """Locate main content in a payload.

    Usage:
        locator = ContentLocator()
        content = locator.locate(detect_payload(body))
        print(content.used_selector, content.text_content)
    """

    # Main content selectors (in priority order)
    CONTENT_SELECTORS = [
        "main",
        "article",
        "#content",
        ".content",
        "#main-content",
        ".main-content",
        "#primary",
        ".primary",
        "#article",
        ".article",
        ".post-content",
        ".entry-content",
        "[role='main']",
        # Generic containers
        "section",
        ".container",
        "#container",
    ]

    def __init__(self, sanitizer: HtmlSanitizer | None = None, logger: logging.Logger | None = None):
        """Initialise locator.

        Args:
            sanitizer: Optional HtmlSanitizer (created if not provided)
            logger: Optional logger (defaults to the module logger)
        """
        self._logger = logger or LOGGER
        self._sanitizer = sanitizer or HtmlSanitizer(logger=self._logger)

    def locate(self, payload: Payload | None) -> ExtractedContent:
        """Locate the main content of a payload.

        Args:
            payload: HtmlPayload or JsonPayload.

        Returns:
            ExtractedContent; empty for empty input or on failure.
        """
        try:
            match payload:
                case JsonPayload(data=data):
                    return ExtractedContent(
                        html_fragment=pretty_json(data),
                        text_content=flatten_json(data),
                        used_selector="json",
                        is_json=True,
                    )
                case HtmlPayload(html=html) if html:
                    return self._locate_html(self._sanitizer.sanitize(html))
                case _:
                    return ExtractedContent()
        except Exception as e:
            self._logger.debug(f"Content location failed: {e}", exc_info=True)
            return ExtractedContent()

    def _locate_html(self, soup: BeautifulSoup) -> ExtractedContent:
        main_content: Tag = soup.body or soup
        main_score = 0
        used_selector = DEFAULT_SELECTOR

        for selector in self.CONTENT_SELECTORS:
            element = soup.select_one(selector)
            if element is None:
                continue
            score = len(element.get_text().strip())
            if score > main_score:
                main_content, main_score, used_selector = element, score, selector

        if used_selector == DEFAULT_SELECTOR:
            for div in soup.find_all("div"):
                if len(div.find_all("p")) <= MIN_PARAGRAPHS:
                    continue
                score = len(div.get_text().strip())
                if score > main_score:
                    main_content, main_score, used_selector = div, score, HEURISTIC_SELECTOR

        self._logger.debug(f"Main content selected with '{used_selector}' ({main_score} chars)")

        self._cleanup(soup, main_content)

        return ExtractedContent(
            html_fragment=main_content.decode_contents(),
            text_content=normalise_text(main_content.get_text()),
            used_selector=used_selector,
            is_json=False,
        )

    def _cleanup(self, soup: BeautifulSoup, element: Tag) -> None:
        """Drop empty paragraphs/divs and caption images with their alt text."""
        for block in element.find_all(["p", "div"]):
            if block.decomposed:
                continue
            # Images are never removed, even from otherwise empty blocks
            if not block.get_text().strip() and block.find("img") is None:
                block.decompose()

        for img in element.find_all("img"):
            alt = img.get("alt") or ""
            if isinstance(alt, list):
                alt = " ".join(alt)
            if alt.strip():
                caption = soup.new_tag("figcaption")
                caption.string = alt
                img.insert_after(caption)


def extract_content(content: str | None) -> ExtractedContent:
    """Detect the payload kind and locate its main content."""
    if not content:
        return ExtractedContent()
    return ContentLocator().locate(detect_payload(content))
