"""Single page command."""

from pathlib import Path

import click

from scoopit.cli._common import app, console
from scoopit.config import VALID_FORMATS


@app.command("page", help="Process a single page given as a full URL.")
@click.argument("url")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(VALID_FORMATS, case_sensitive=False),
    default=None,
    help="Output format. Defaults to SCOOPIT_FORMAT or text.",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Output directory. Defaults to SCOOPIT_OUTPUT_DIR or ./output.",
)
def page(url: str, output_format: str | None, output_dir: Path | None) -> None:
    """Fetch one page and write its files.

    Examples:
        scoopit page https://example.com/about
        scoopit page https://example.com/about --format all
        scoopit page https://api.example.com/posts/1 --format json -o ./api-output
    """
    import asyncio

    from scoopit.config import load_config
    from scoopit.exceptions import ScoopitError
    from scoopit.services.fetcher import ContentFetcher
    from scoopit.services.routes import RouteProcessor
    from scoopit.writer import OutputWriter

    try:
        config = load_config()
    except ScoopitError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)

    fmt = (output_format or config.format).lower()
    writer = OutputWriter(output_dir or config.output_dir)
    processor = RouteProcessor(
        fetcher=ContentFetcher(timeout=config.timeout, user_agent=config.user_agent),
        writer=writer,
    )

    try:
        result = asyncio.run(processor.process_single_page(url, fmt))
    except ScoopitError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)

    if result is None:
        click.echo(f"Error: Failed to fetch content for {url}", err=True)
        raise SystemExit(1)

    console.print(f"[green]Processed[/green] {result.url}")
    if result.metadata.title:
        console.print(f"  Title: {result.metadata.title}")
    console.print(f"  Output: {writer.output_dir}")
