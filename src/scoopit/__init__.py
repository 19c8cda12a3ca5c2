"""Scoopit: turn website routes into plain text, JSON and Markdown files."""

from scoopit.config import APP_VERSION as __version__
from scoopit.models import BatchResult, ExtractedContent, Metadata, RouteFailure, RouteResult
from scoopit.services import RouteProcessor
from scoopit.writer import OutputWriter

__all__ = [
    "BatchResult",
    "ExtractedContent",
    "Metadata",
    "OutputWriter",
    "RouteFailure",
    "RouteProcessor",
    "RouteResult",
    "__version__",
]
