"""Tests for the HTTP content fetcher."""

import httpx
import pytest

from scoopit.config import USER_AGENT
from scoopit.services.fetcher import ContentFetcher


def _fetcher(handler) -> ContentFetcher:
    return ContentFetcher(transport=httpx.MockTransport(handler))


class TestContentFetcher:
    """Tests for ContentFetcher."""

    @pytest.mark.asyncio
    async def test_success_returns_body(self):
        """Test that a 200 response returns its body."""
        fetcher = _fetcher(lambda request: httpx.Response(200, text="<p>Hello</p>"))
        assert await fetcher.fetch("https://example.com/page") == "<p>Hello</p>"

    @pytest.mark.asyncio
    async def test_other_2xx_accepted(self):
        """Test that any 2xx status counts as success."""
        fetcher = _fetcher(lambda request: httpx.Response(203, text="partial"))
        assert await fetcher.fetch("https://example.com/") == "partial"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [301, 404, 500, 503])
    async def test_non_success_status_returns_none(self, status: int):
        """Test that non-2xx responses return None."""
        fetcher = _fetcher(lambda request: httpx.Response(status, text="nope"))
        assert await fetcher.fetch("https://example.com/missing") is None

    @pytest.mark.asyncio
    async def test_redirect_followed(self):
        """Test that redirects are followed to the final response."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/old":
                return httpx.Response(301, headers={"location": "https://example.com/new"})
            return httpx.Response(200, text="moved here")

        assert await _fetcher(handler).fetch("https://example.com/old") == "moved here"

    @pytest.mark.asyncio
    async def test_timeout_returns_none(self):
        """Test that a timeout is reported as None, not raised."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        assert await _fetcher(handler).fetch("https://example.com/slow") is None

    @pytest.mark.asyncio
    async def test_network_error_returns_none(self):
        """Test that connection failures return None."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        assert await _fetcher(handler).fetch("https://example.com/down") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", ["", "not a url", "/relative/path", "example.com/page"])
    async def test_invalid_url_returns_none_without_request(self, url: str):
        """Test that invalid URLs are rejected before any request is made."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, text="unexpected")

        assert await _fetcher(handler).fetch(url) is None
        assert calls == []

    @pytest.mark.asyncio
    async def test_sends_user_agent(self):
        """Test that the descriptive user agent is sent."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["ua"] = request.headers["user-agent"]
            return httpx.Response(200, text="ok")

        await _fetcher(handler).fetch("https://example.com/")
        assert seen["ua"] == USER_AGENT
        assert seen["ua"].startswith("Scoopit Content Generator/")

    @pytest.mark.asyncio
    async def test_custom_user_agent(self):
        """Test that a custom user agent can be configured."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["ua"] = request.headers["user-agent"]
            return httpx.Response(200, text="ok")

        fetcher = ContentFetcher(user_agent="custom/1.0", transport=httpx.MockTransport(handler))
        await fetcher.fetch("https://example.com/")
        assert seen["ua"] == "custom/1.0"
