"""Common CLI utilities and the main app group."""

import logging
import os
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from scoopit.config import APP_VERSION
from scoopit.models import BatchResult

console = Console(stderr=True)
_configured = False


def _load_env_file(env_path: Path | None = None) -> None:
    """
    Load environment variables from .env file if it exists.

    Args:
        env_path: Optional path to .env file. If None, looks for .env in current directory.
    """
    if env_path is None:
        env_path = Path.cwd() / ".env"

    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip().removeprefix("export ").strip()
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        # Existing environment wins
        if key and key not in os.environ:
            os.environ[key] = value


def configure_logging(*, verbose: bool = False) -> None:
    """Configure logging with Rich handler. Call once at startup."""
    global _configured
    if _configured:
        return

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                rich_tracebacks=True,
                tracebacks_show_locals=verbose,
            )
        ],
        force=True,
    )

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    _configured = True


def render_summary(batch: BatchResult) -> Table:
    """Build a table of succeeded and failed routes."""
    table = Table(title=f"{batch.base_url} ({batch.format})")
    table.add_column("Route")
    table.add_column("Status")
    table.add_column("Title / Reason")

    for result in batch.results:
        table.add_row(result.route, "[green]ok[/green]", result.metadata.title)
    for failure in batch.failures:
        table.add_row(failure.route, "[red]failed[/red]", failure.reason)

    table.caption = f"{batch.succeeded} succeeded, {batch.failed} failed"
    return table


@click.group(help="Generate text, JSON and Markdown files from website routes.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
@click.version_option(APP_VERSION, prog_name="scoopit")
def app(verbose: bool) -> None:
    """
    Entry point for the scoopit CLI.

    Provides commands for processing a single page or a batch of routes.
    """
    _load_env_file()
    configure_logging(verbose=verbose)
