"""HTML and JSON to Markdown rendering.

Located HTML fragments are converted with markdownify using these rules:
- ATX headings, fenced code blocks, "-" bullets, "*" emphasis, "**" strong
- Ordered list items are numbered from the list's ``start`` attribute plus the
  item's position, ignoring whatever numbering the source markup shows
- Links keep markdown syntax only for absolute http(s) URLs; fragments carry
  no base URL, so relative links collapse to their text
- Images without ``src`` are dropped
- Loose text directly inside <ol>/<ul> is dropped
- <pre> blocks become fenced code, labelled from a ``language-xxx`` class

JSON payloads are pretty-printed inside a ```json fence.
"""

import json
import logging
import re

from markdownify import MarkdownConverter as BaseMarkdownConverter
from markdownify import chomp

from scoopit.models import ExtractedContent

LOGGER = logging.getLogger(__name__)

ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)
LANGUAGE_CLASS = re.compile(r"language-(\w+)")

# Continuation lines of a list item
LIST_ITEM_INDENT = "    "


def _class_string(el) -> str:
    classes = el.get("class") or []
    return " ".join(classes) if isinstance(classes, list) else str(classes)


def code_language(el) -> str:
    """Find the fence language for a <pre> element.

    Checks the <pre> itself, then a nested <code>, for a ``language-xxx`` class.
    """
    candidates = [el]
    code = el.find("code")
    if code is not None:
        candidates.append(code)
    for candidate in candidates:
        match = LANGUAGE_CLASS.search(_class_string(candidate))
        if match:
            return match.group(1)
    return ""


class ContentMarkdownConverter(BaseMarkdownConverter):
    """Markdownify converter with scoopit's list, link and image rules."""

    def process_text(self, el, parent_tags=None):
        """Convert text nodes, dropping loose text between list items."""
        if el.parent is not None and el.parent.name in ("ol", "ul"):
            return ""
        return super().process_text(el, parent_tags=parent_tags)

    def convert_li(self, el, text, parent_tags):
        """Convert list items, numbering ordered items by position."""
        text = (text or "").lstrip("\n").rstrip()
        if not text:
            return ""

        parent = el.parent
        if parent is not None and parent.name == "ol":
            start = str(parent.get("start") or "").strip()
            first = int(start) if start.lstrip("-").isdigit() else 1
            prefix = f"{first + len(el.find_previous_siblings('li'))}. "
        else:
            prefix = f"{self.options['bullets'][0]} "

        text = text.replace("\n", f"\n{LIST_ITEM_INDENT}")
        return f"{prefix}{text}\n"

    def convert_a(self, el, text, parent_tags):
        """Convert anchors; only absolute http(s) links keep link syntax."""
        if "_noformat" in parent_tags:
            return text
        prefix, suffix, text = chomp(text)
        if not text:
            return ""

        href = (el.get("href") or "").strip()
        if not ABSOLUTE_URL.match(href):
            return f"{prefix}{text}{suffix}"
        return f"{prefix}[{text}]({href}){suffix}"

    def convert_img(self, el, text, parent_tags):
        """Convert images; images without a source are dropped."""
        src = (el.get("src") or "").strip()
        if not src:
            return ""

        alt = el.get("alt") or ""
        title = el.get("title") or ""
        title_part = f' "{title}"' if title else ""
        return f"![{alt}]({src}{title_part})"


class MarkdownRenderer:
    """Render located content as markdown.

    Usage:
        renderer = MarkdownRenderer()
        markdown = renderer.render(extracted)
        markdown = renderer.convert("<h1>Title</h1>")
    """

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or LOGGER
        self._converter = ContentMarkdownConverter(
            heading_style="atx",
            bullets="-",
            strong_em_symbol="*",
            code_language="",
            code_language_callback=code_language,
            wrap=False,
        )

    def render(self, content: ExtractedContent) -> str:
        """Render extracted content (HTML fragment or pretty JSON)."""
        return self.convert(content.html_fragment, is_json=content.is_json)

    def convert(self, content: str | None, is_json: bool = False) -> str:
        """Convert an HTML fragment or JSON text to markdown.

        Args:
            content: HTML fragment or JSON text.
            is_json: Render as a JSON code block.

        Returns:
            Markdown string; "" for empty input or on conversion failure.
        """
        if not content:
            return ""

        if is_json:
            return self._convert_json(content)

        try:
            markdown = self._converter.convert(content)
            return self._clean_whitespace(markdown)
        except Exception as e:
            self._logger.debug(f"Markdown conversion failed: {e}", exc_info=True)
            return ""

    def _convert_json(self, content: str) -> str:
        try:
            formatted = json.dumps(json.loads(content), indent=2, ensure_ascii=False)
        except ValueError:
            # Flagged as JSON but unparseable: keep the raw text
            return f"```\n{content}\n```\n\n"
        return f"```json\n{formatted}\n```\n\n"

    def _clean_whitespace(self, markdown: str) -> str:
        """Clean up excessive whitespace."""
        lines = []
        prev_empty = False

        for line in markdown.splitlines():
            stripped = line.rstrip()
            is_empty = not stripped

            if is_empty:
                if not prev_empty:
                    lines.append("")
                prev_empty = True
            else:
                lines.append(stripped)
                prev_empty = False

        return "\n".join(lines).strip()


def convert_to_markdown(content: str | None, is_json: bool = False) -> str:
    """Convert content to markdown with default settings."""
    return MarkdownRenderer().convert(content, is_json=is_json)
