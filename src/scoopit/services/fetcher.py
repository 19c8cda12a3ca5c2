"""HTTP retrieval of route payloads."""

import logging
import time

import httpx

from scoopit.config import DEFAULT_TIMEOUT, USER_AGENT
from scoopit.utils import is_valid_url

LOGGER = logging.getLogger(__name__)


class ContentFetcher:
    """Fetch a URL's body with a GET request.

    Only 2xx responses count as success. Invalid URLs, timeouts, network
    errors and any other status return None; no exception reaches the caller.

    Usage:
        fetcher = ContentFetcher()
        body = await fetcher.fetch("https://example.com/about")
        if body is None:
            ...
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ):
        """Initialise fetcher.

        Args:
            timeout: Request timeout in seconds
            user_agent: User-Agent header sent with every request
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
            logger: Optional logger (defaults to the module logger)
        """
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport
        self._logger = logger or LOGGER

    async def fetch(self, url: str) -> str | None:
        """Fetch a URL and return its body.

        Args:
            url: Absolute URL to fetch.

        Returns:
            Response body text, or None on any failure.
        """
        if not is_valid_url(url):
            self._logger.error(f"Invalid URL format: {url}")
            return None

        start = time.monotonic()
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": self._user_agent},
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            self._logger.error(f"Timed out fetching {url} after {self._timeout}s: {e}")
            return None
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self._logger.error(f"Failed to fetch {url}: {type(e).__name__}: {e}")
            return None

        duration_ms = int((time.monotonic() - start) * 1000)

        if not response.is_success:
            self._logger.error(f"Failed to fetch {url}: HTTP {response.status_code} {response.reason_phrase}")
            return None

        self._logger.info(
            f"Fetched {url} (HTTP {response.status_code}, {duration_ms}ms, "
            f"{response.headers.get('content-type', 'unknown content type')})"
        )
        return response.text
