"""Payload format detection.

A fetched body is classified once, here, into a tagged payload. Every
downstream component dispatches on the payload type instead of re-checking
a boolean flag.
"""

import json
from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True)
class HtmlPayload:
    """An HTML (or otherwise non-JSON) body."""

    html: str


@dataclass(frozen=True)
class JsonPayload:
    """A body that parsed as JSON. Keeps the raw text alongside the value."""

    raw: str
    data: Any


Payload: TypeAlias = HtmlPayload | JsonPayload


def _try_parse_json(content: str | None) -> tuple[bool, Any]:
    if not content:
        return False, None

    # Cheap rejection before attempting a full parse
    trimmed = content.strip()
    if not (trimmed.startswith("{") or trimmed.startswith("[")):
        return False, None

    try:
        return True, json.loads(trimmed)
    except ValueError:
        return False, None


def is_json_content(content: str | None) -> bool:
    """Return True when content is a JSON object or array."""
    parsed, _ = _try_parse_json(content)
    return parsed


def detect_payload(content: str | None) -> Payload:
    """Classify a fetched body as JSON or HTML.

    Bodies that look like JSON but fail to parse (e.g. a JavaScript snippet
    starting with ``{``) fall through to HTML. Empty input is HTML.

    Args:
        content: Raw response body.

    Returns:
        JsonPayload when the body parses as JSON, otherwise HtmlPayload.
    """
    parsed, data = _try_parse_json(content)
    if parsed:
        return JsonPayload(raw=content or "", data=data)
    return HtmlPayload(html=content or "")
