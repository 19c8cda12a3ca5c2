"""Pytest configuration and shared fixtures for scoopit tests."""

from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

import httpx
import pytest

from scoopit.services.fetcher import ContentFetcher


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Pure logic tests with no I/O or network")
    config.addinivalue_line("markers", "integration: Filesystem or mocked-HTTP tests across several components")
    config.addinivalue_line(
        "markers",
        "e2e: End-to-end tests with live network or a real subprocess",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """
    Apply default markers to tests without explicit markers.

    Tests should use explicit markers (@pytest.mark.unit, @pytest.mark.e2e).
    Unmarked tests default to unit.
    """
    for item in items:
        marker_names = [m.name for m in item.iter_markers()]
        if any(m in marker_names for m in ("unit", "integration", "e2e")):
            continue

        # Default unmarked tests to unit
        item.add_marker(pytest.mark.unit)


@pytest.fixture
def sample_html() -> str:
    """A complete page with metadata, chrome and an article body."""
    return """<!DOCTYPE html>
<html>
<head>
  <title>Test Page</title>
  <meta name="description" content="A page used in tests">
  <meta name="author" content="Jane Doe">
  <meta name="keywords" content="alpha, beta, ,gamma">
  <meta property="og:site_name" content="Example Site">
  <link rel="canonical" href="https://example.com/test">
  <style>body { color: red; }</style>
</head>
<body>
  <nav class="navbar"><a href="/">Home</a></nav>
  <main>
    <h1>Welcome</h1>
    <p>This is the main content of the test page.</p>
    <p>It has a <a href="https://example.com/more">link</a> and a <a href="/relative">relative link</a>.</p>
    <img src="chart.png" alt="Sales chart">
    <script>console.log("tracking");</script>
  </main>
  <footer>Copyright notice</footer>
</body>
</html>"""


@pytest.fixture
def sample_json() -> str:
    """A JSON API response for a single post."""
    return '{"id": 1, "title": "First post", "body": "Post body", "author": {"name": "Ann"}, "tags": ["a", "b"]}'


HandlerMap: TypeAlias = dict[str, tuple[int, str, str]]


@pytest.fixture
def make_fetcher() -> Callable[[HandlerMap], ContentFetcher]:
    """Build a ContentFetcher served by httpx.MockTransport.

    The handler map goes from URL path to (status, body, content type).
    Unknown paths return 404.
    """

    def factory(pages: HandlerMap) -> ContentFetcher:
        def handler(request: httpx.Request) -> httpx.Response:
            status, body, content_type = pages.get(request.url.path, (404, "Not Found", "text/plain"))
            return httpx.Response(status, text=body, headers={"content-type": content_type})

        return ContentFetcher(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Empty output directory."""
    path = tmp_path / "output"
    path.mkdir()
    return path
