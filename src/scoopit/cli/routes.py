"""Batch route commands."""

from pathlib import Path

import click

from scoopit.cli._common import app, console, render_summary
from scoopit.config import DEFAULT_ROUTES, VALID_FORMATS


def _resolve_routes(routes_option: str | None, routes_file: Path | None) -> list[str]:
    """Pick routes from --routes, then a routes file, then the defaults."""
    from scoopit.config import find_routes_file, load_routes_from_file

    if routes_option:
        return [route.strip() for route in routes_option.split(",") if route.strip()]

    path = find_routes_file(routes_file)
    if routes_file and path is None:
        raise click.ClickException(f"Routes file not found at specified path: {routes_file}")
    if path is not None:
        console.print(f"Using routes from {path}")
        return load_routes_from_file(path)

    return list(DEFAULT_ROUTES)


@app.command("routes", help="Process a list of routes under a base URL.")
@click.option(
    "--base-url",
    "-b",
    type=str,
    default=None,
    help="Site origin, e.g. https://example.com. Defaults to SCOOPIT_BASE_URL.",
)
@click.option(
    "--routes",
    "-r",
    "routes_option",
    type=str,
    default=None,
    help="Comma-separated routes, e.g. /about,/contact. Overrides the routes file.",
)
@click.option(
    "--routes-file",
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file containing an array of routes. Defaults to ./routes.json when present.",
)
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
@click.option(
    "--clean/--no-clean",
    default=None,
    help="Delete previous output files first. Asks when omitted and outputs exist.",
)
@click.option(
    "--stable-names",
    is_flag=True,
    default=False,
    help="Name files after the route only, without title or timestamp.",
)
def routes(
    base_url: str | None,
    routes_option: str | None,
    routes_file: Path | None,
    output_format: str | None,
    output_dir: Path | None,
    clean: bool | None,
    stable_names: bool,
) -> None:
    """Process routes sequentially and print a summary.

    Examples:
        scoopit routes
        scoopit routes --base-url https://example.com --routes /about,/contact
        scoopit routes --routes-file ./my-routes.json --format all --clean
    """
    import asyncio

    from scoopit.config import load_config
    from scoopit.exceptions import ScoopitError
    from scoopit.services.fetcher import ContentFetcher
    from scoopit.services.routes import RouteProcessor
    from scoopit.writer import OutputWriter

    try:
        config = load_config()
        route_list = _resolve_routes(routes_option, routes_file)
    except ScoopitError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)

    writer = OutputWriter(output_dir or config.output_dir, stable_names=stable_names)
    if writer.has_previous_outputs():
        if clean is None:
            clean = click.confirm("Previous output files found. Delete them?", default=False, err=True)
        if clean:
            writer.delete_previous_outputs()

    processor = RouteProcessor(
        fetcher=ContentFetcher(timeout=config.timeout, user_agent=config.user_agent),
        writer=writer,
    )

    try:
        batch = asyncio.run(
            processor.process_routes(
                base_url or config.base_url,
                route_list,
                (output_format or config.format).lower(),
            )
        )
    except ScoopitError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)

    console.print(render_summary(batch))

    if batch.succeeded == 0:
        click.echo("Error: No routes were processed successfully", err=True)
        raise SystemExit(1)
