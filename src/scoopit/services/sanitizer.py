"""HTML sanitising: strip non-content nodes before content extraction."""

import logging

from bs4 import BeautifulSoup, Comment

LOGGER = logging.getLogger(__name__)


class HtmlSanitizer:
    """Remove scripts, chrome and hidden elements from an HTML document.

    The result is a BeautifulSoup document that the rest of the pipeline
    queries with CSS selectors. Sanitising never raises: unparseable input
    yields an empty document.

    Usage:
        soup = HtmlSanitizer().sanitize(html)
        main = soup.select_one("main")
    """

    # Non-content tags and page chrome
    REMOVE_SELECTORS = [
        "script",
        "style",
        "iframe",
        "noscript",
        "svg",
        "form",
        "button",
        "input",
        "nav.navbar",
        "footer",
        ".sidebar",
        ".ads",
        ".comments",
        ".social-sharing",
    ]

    # Elements hidden from readers
    HIDDEN_SELECTORS = [
        "[style*='display:none']",
        "[style*='display: none']",
        "[hidden]",
        ".hidden",
        ".visually-hidden",
    ]

    def __init__(self, parser: str = "html.parser", logger: logging.Logger | None = None):
        """Initialise sanitizer.

        Args:
            parser: BeautifulSoup tree builder to use.
            logger: Optional logger (defaults to the module logger).
        """
        self._parser = parser
        self._logger = logger or LOGGER

    def sanitize(self, html: str | None) -> BeautifulSoup:
        """Parse and clean HTML.

        Args:
            html: Raw HTML. None is treated as an empty document.

        Returns:
            Cleaned BeautifulSoup document.
        """
        try:
            soup = BeautifulSoup(html or "", self._parser)
            self._remove_elements(soup, self.REMOVE_SELECTORS + self.HIDDEN_SELECTORS)
            # Comments last, so removed subtrees are not walked again
            self._remove_comments(soup)
            return soup
        except Exception as e:
            self._logger.debug(f"HTML sanitising failed, using empty document: {e}", exc_info=True)
            return BeautifulSoup("", self._parser)

    def _remove_elements(self, soup: BeautifulSoup, selectors: list[str]) -> None:
        """Remove every element matching any of the selectors."""
        for element in soup.select(", ".join(selectors)):
            # Descendants of an already removed match are gone with it
            if not element.decomposed:
                element.decompose()

    def _remove_comments(self, soup: BeautifulSoup) -> None:
        for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
            comment.extract()


def clean_html(html: str | None) -> BeautifulSoup:
    """Sanitise HTML with default settings."""
    return HtmlSanitizer().sanitize(html)
