"""Route orchestration: fetch, extract, render and persist routes one at a time."""

import logging
import time
from collections.abc import Sequence

from scoopit.config import DEFAULT_FORMAT, VALID_FORMATS
from scoopit.exceptions import ScoopitError, ValidationError, generate_correlation_id
from scoopit.models import BatchResult, RouteFailure, RouteResult
from scoopit.services.converter import MarkdownRenderer
from scoopit.services.detector import detect_payload
from scoopit.services.fetcher import ContentFetcher
from scoopit.services.locator import ContentLocator
from scoopit.services.metadata import MetadataExtractor
from scoopit.utils import build_route_url, is_valid_url, log_with_correlation, normalise_route, split_page_url
from scoopit.writer import OutputWriter

LOGGER = logging.getLogger(__name__)

FETCH_FAILED = "fetch_failed"


class RouteProcessor:
    """Process site routes into RouteResults.

    Routes are handled strictly sequentially. A route whose fetch fails, or
    whose processing raises, is recorded as a failure and the batch moves on.

    Usage:
        processor = RouteProcessor(writer=OutputWriter(Path("output")))
        batch = await processor.process_routes("https://example.com", ["/about"], "markdown")
        for failure in batch.failures:
            print(failure.route, failure.reason)
    """

    def __init__(
        self,
        fetcher: ContentFetcher | None = None,
        metadata_extractor: MetadataExtractor | None = None,
        locator: ContentLocator | None = None,
        renderer: MarkdownRenderer | None = None,
        writer: OutputWriter | None = None,
        logger: logging.Logger | None = None,
    ):
        """Initialise route processor.

        Args:
            fetcher: Optional ContentFetcher (created if not provided)
            metadata_extractor: Optional MetadataExtractor (created if not provided)
            locator: Optional ContentLocator (created if not provided)
            renderer: Optional MarkdownRenderer (created if not provided)
            writer: Optional OutputWriter; results are only persisted when given
            logger: Optional logger (defaults to the module logger)
        """
        self._logger = logger or LOGGER
        self._fetcher = fetcher or ContentFetcher(logger=self._logger)
        self._metadata = metadata_extractor or MetadataExtractor(logger=self._logger)
        self._locator = locator or ContentLocator(logger=self._logger)
        self._renderer = renderer or MarkdownRenderer(logger=self._logger)
        self._writer = writer

    async def generate_route(
        self,
        base_url: str,
        route: str,
        format: str = DEFAULT_FORMAT,
        correlation_id: str | None = None,
    ) -> RouteResult | None:
        """Fetch and process one route.

        Args:
            base_url: Site origin, e.g. "https://example.com".
            route: Route path; a leading slash is added when missing.
            format: Output format handed to the writer.
            correlation_id: Optional correlation ID for log lines.

        Returns:
            RouteResult, or None when the fetch failed.

        Raises:
            ValidationError: If base_url or route is empty, route is not a string,
                or format is unsupported.
            OutputError: If the writer cannot persist the result.
        """
        if not base_url:
            raise ValidationError("Base URL is required", field="base_url", value=base_url)
        if not isinstance(route, str):
            raise ValidationError("Route must be a string", field="route", value=route)
        if not route:
            raise ValidationError("Route is required", field="route", value=route)
        if format not in VALID_FORMATS:
            raise ValidationError(
                f"Invalid format: {format}. Valid formats are: {', '.join(VALID_FORMATS)}",
                field="format",
                value=format,
            )

        correlation_id = correlation_id or generate_correlation_id()
        normalised = normalise_route(route)
        url = build_route_url(base_url, normalised)
        start = time.monotonic()

        log_with_correlation(
            self._logger,
            logging.INFO,
            f"Processing {url}",
            correlation_id=correlation_id,
            url=url,
            output_format=format,
        )

        body = await self._fetcher.fetch(url)
        if not body:
            log_with_correlation(
                self._logger,
                logging.ERROR,
                f"Failed to fetch content for {url}",
                correlation_id=correlation_id,
                url=url,
                outcome=FETCH_FAILED,
            )
            return None

        try:
            payload = detect_payload(body)
            metadata = self._metadata.extract(payload)
            content = self._locator.locate(payload)
            markdown = self._renderer.render(content)

            self._logger.debug(
                f"Extracted {url}: title={metadata.title!r}, selector={content.used_selector}, "
                f"text={len(content.text_content)} chars, markdown={len(markdown)} chars"
            )

            result = RouteResult(
                route=normalised,
                url=url,
                metadata=metadata,
                text_content=content.text_content,
                markdown_content=markdown,
            )

            if self._writer is not None:
                self._writer.write(result, format)
        except Exception as e:
            log_with_correlation(
                self._logger,
                logging.ERROR,
                f"Error processing route {normalised}: {e}",
                correlation_id=correlation_id,
                url=url,
                outcome="error",
                error=str(e),
            )
            raise

        duration_ms = int((time.monotonic() - start) * 1000)
        log_with_correlation(
            self._logger,
            logging.INFO,
            f"Processed {url} in {duration_ms}ms",
            correlation_id=correlation_id,
            url=url,
            outcome="success",
            duration_ms=duration_ms,
        )
        return result

    async def process_routes(
        self,
        base_url: str,
        routes: Sequence[str],
        format: str = DEFAULT_FORMAT,
    ) -> BatchResult:
        """Process routes sequentially, continuing past failed routes.

        Args:
            base_url: Site origin.
            routes: Route paths to process.
            format: Output format; unsupported values fall back to the default.

        Returns:
            BatchResult with successful results and per-route failures.

        Raises:
            ValidationError: If base_url is empty or routes is empty or not a list.
        """
        if not base_url:
            raise ValidationError("Base URL is required", field="base_url", value=base_url)
        if isinstance(routes, str) or not isinstance(routes, Sequence) or not routes:
            raise ValidationError("Routes must be a non-empty list", field="routes", value=routes)

        if format not in VALID_FORMATS:
            self._logger.warning(f"Invalid format: {format}. Using default format: {DEFAULT_FORMAT}")
            format = DEFAULT_FORMAT

        correlation_id = generate_correlation_id()
        batch = BatchResult(base_url=base_url, format=format)

        log_with_correlation(
            self._logger,
            logging.INFO,
            f"Starting to process {len(routes)} routes from {base_url}",
            correlation_id=correlation_id,
            route_count=len(routes),
        )

        for index, route in enumerate(routes, start=1):
            self._logger.debug(f"Route {index}/{len(routes)}: {route}")
            url = build_route_url(base_url, route) if isinstance(route, str) and route else None
            try:
                result = await self.generate_route(base_url, route, format, correlation_id=correlation_id)
            except Exception as e:
                self._logger.error(f"Failed to process route {route}: {e}")
                reason = e.message if isinstance(e, ScoopitError) else str(e)
                batch.failures.append(RouteFailure(route=str(route), url=url, reason=reason))
                continue

            if result is None:
                batch.failures.append(RouteFailure(route=str(route), url=url, reason=FETCH_FAILED))
            else:
                batch.results.append(result)

        log_with_correlation(
            self._logger,
            logging.INFO,
            f"Completed processing {len(routes)} routes: {batch.succeeded} successful, {batch.failed} failed",
            correlation_id=correlation_id,
            successful=batch.succeeded,
            failed=batch.failed,
        )
        return batch

    async def process_single_page(self, url: str, format: str = DEFAULT_FORMAT) -> RouteResult | None:
        """Process one page given as a full URL.

        Raises:
            ValidationError: If the URL is not absolute, or format is unsupported.
        """
        if not is_valid_url(url):
            raise ValidationError(f"Invalid URL: {url}", field="url", value=url)

        base_url, route = split_page_url(url)
        self._logger.info(f"Processing single page: {url}")
        return await self.generate_route(base_url, route, format)
