"""Service layer for scoopit.

This module provides the core services:
- HtmlSanitizer: Removes non-content elements and comments from HTML
- MetadataExtractor: Title, description and related fields from HTML or JSON
- ContentLocator: Main-content selection and JSON flattening
- MarkdownRenderer: HTML/JSON to Markdown conversion
- ContentFetcher: HTTP retrieval of route payloads
- RouteProcessor: Sequential fetch, extract, render and persist of routes
"""

from scoopit.services.converter import MarkdownRenderer, convert_to_markdown
from scoopit.services.detector import HtmlPayload, JsonPayload, Payload, detect_payload, is_json_content
from scoopit.services.fetcher import ContentFetcher
from scoopit.services.locator import ContentLocator, extract_content
from scoopit.services.metadata import MetadataExtractor, extract_metadata
from scoopit.services.routes import RouteProcessor
from scoopit.services.sanitizer import HtmlSanitizer, clean_html

__all__ = [
    "ContentFetcher",
    "ContentLocator",
    "HtmlPayload",
    "HtmlSanitizer",
    "JsonPayload",
    "MarkdownRenderer",
    "MetadataExtractor",
    "Payload",
    "RouteProcessor",
    "clean_html",
    "convert_to_markdown",
    "detect_payload",
    "extract_content",
    "extract_metadata",
    "is_json_content",
]
