"""Data models for scoopit."""

from datetime import datetime, timezone
from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Output formats accepted by the route orchestrator
OutputFormat: TypeAlias = Literal["text", "json", "markdown", "all"]


class Metadata(BaseModel):
    """Metadata extracted from a page or a JSON API response.

    Absent values are always empty strings (or an empty keyword list), never None.

    A degenerate document (no <title> and no <meta> tags) yields the minimal
    shape that only carries ``title`` and ``description``. The minimal shape is
    tracked through pydantic's set-fields bookkeeping, so ``to_dict()`` of a
    minimal instance is exactly ``{"title": "", "description": ""}``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: str = ""
    description: str = ""
    author: str = ""
    date: str = ""
    keywords: list[str] = Field(default_factory=list)
    canonical_url: str = ""
    site_name: str = ""

    @classmethod
    def minimal(cls) -> "Metadata":
        """Return the minimal empty result (title and description only)."""
        return cls(title="", description="")

    @property
    def is_minimal(self) -> bool:
        """True when only title/description were populated."""
        return self.model_fields_set <= {"title", "description"}

    def to_dict(self) -> dict[str, Any]:
        """Serialise with camelCase keys, honouring the minimal shape."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class ExtractedContent(BaseModel):
    """Main content located inside a document.

    Attributes:
        html_fragment: Inner HTML of the chosen element, or pretty-printed JSON
            when the source was JSON. Never a full document.
        text_content: Whitespace-normalised plain text, never containing tags.
        used_selector: Selector that won the main-content search (diagnostic only).
        is_json: Whether the source payload was JSON.
    """

    model_config = ConfigDict(frozen=True)

    html_fragment: str = ""
    text_content: str = ""
    used_selector: str = ""
    is_json: bool = False


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class RouteResult(BaseModel):
    """Everything produced for one successfully processed route."""

    model_config = ConfigDict(frozen=True)

    route: str
    url: str
    metadata: Metadata
    text_content: str = ""
    markdown_content: str = ""
    timestamp: str = Field(default_factory=_utc_timestamp)

    def to_document(self) -> dict[str, Any]:
        """Build the JSON document written for the ``json`` output format."""
        return {
            "url": self.url,
            "route": self.route,
            "title": self.metadata.title,
            "description": self.metadata.description,
            "textContent": self.text_content,
            "markdownContent": self.markdown_content,
            "timestamp": self.timestamp,
        }


class RouteFailure(BaseModel):
    """A route that could not be processed."""

    route: str
    url: str | None = None
    reason: str


class BatchResult(BaseModel):
    """Result of processing a batch of routes.

    Only successful routes appear in ``results``; failures are tracked
    separately for reporting.
    """

    base_url: str
    format: OutputFormat
    results: list[RouteResult] = Field(default_factory=list)
    failures: list[RouteFailure] = Field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> int:
        return len(self.failures)
