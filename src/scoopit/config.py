"""Configuration defaults, environment loading and routes files."""

import json
import logging
import os
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from scoopit.exceptions import ConfigurationError, RoutesFileError, generate_correlation_id

LOGGER = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://icjia.illinois.gov"
DEFAULT_ROUTES: tuple[str, ...] = ("/about", "researchHub")
DEFAULT_FORMAT = "text"
VALID_FORMATS: tuple[str, ...] = ("text", "json", "markdown", "all")
DEFAULT_TIMEOUT = 30.0
DEFAULT_ROUTES_FILE = "routes.json"
DEFAULT_OUTPUT_DIR = Path("output")

try:
    APP_VERSION = version("scoopit")
except PackageNotFoundError:  # running from a source checkout
    APP_VERSION = "0.0.0"

USER_AGENT = f"Scoopit Content Generator/{APP_VERSION}"


@dataclass(frozen=True)
class ScoopitConfig:
    """Immutable runtime configuration."""

    base_url: str = DEFAULT_BASE_URL
    format: str = DEFAULT_FORMAT
    output_dir: Path = DEFAULT_OUTPUT_DIR
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = USER_AGENT


def load_config() -> ScoopitConfig:
    """
    Load configuration from environment variables.

    Reads SCOOPIT_BASE_URL, SCOOPIT_FORMAT, SCOOPIT_OUTPUT_DIR and SCOOPIT_TIMEOUT.

    Returns:
        ScoopitConfig with defaults applied for unset variables.

    Raises:
        ConfigurationError: If SCOOPIT_TIMEOUT is not a positive number.
    """
    fmt = os.getenv("SCOOPIT_FORMAT", DEFAULT_FORMAT).lower()
    if fmt not in VALID_FORMATS:
        LOGGER.warning(f"Invalid SCOOPIT_FORMAT: {fmt}. Using default format: {DEFAULT_FORMAT}")
        fmt = DEFAULT_FORMAT

    timeout_str = os.getenv("SCOOPIT_TIMEOUT")
    timeout = DEFAULT_TIMEOUT
    if timeout_str:
        try:
            timeout = float(timeout_str)
        except ValueError:
            timeout = -1.0
        if timeout <= 0:
            raise ConfigurationError(
                f"Invalid SCOOPIT_TIMEOUT: {timeout_str}. Must be a positive number of seconds",
                correlation_id=generate_correlation_id(),
                context={"timeout": timeout_str},
            )

    output_dir = os.getenv("SCOOPIT_OUTPUT_DIR")

    return ScoopitConfig(
        base_url=os.getenv("SCOOPIT_BASE_URL") or DEFAULT_BASE_URL,
        format=fmt,
        output_dir=Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR,
        timeout=timeout,
    )


def find_routes_file(route_path: str | Path | None = None) -> Path | None:
    """
    Locate a routes file.

    Args:
        route_path: Explicit path. When given, only that path is considered.

    Returns:
        Path to an existing routes file, or None.
    """
    if route_path:
        path = Path(route_path)
        return path if path.exists() else None

    default_path = Path.cwd() / DEFAULT_ROUTES_FILE
    return default_path if default_path.exists() else None


def load_routes_from_file(file_path: str | Path) -> list[str]:
    """
    Load routes from a JSON file containing an array of path strings.

    Non-string entries are dropped. A file without any valid route yields ["/"].

    Args:
        file_path: Path to the routes file.

    Returns:
        List of route strings.

    Raises:
        RoutesFileError: If the file is missing, is not JSON, or is not an array.
    """
    path = Path(file_path)
    if not path.exists():
        raise RoutesFileError(f"Routes file not found: {path}", file_path=str(path))

    try:
        routes_data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise RoutesFileError(f"Failed to read routes file {path}: {e}", file_path=str(path)) from e

    if not isinstance(routes_data, list):
        raise RoutesFileError("Routes file must contain a JSON array of routes", file_path=str(path))

    valid_routes = [route for route in routes_data if isinstance(route, str)]
    if not valid_routes:
        LOGGER.warning(f"Routes file {path} exists but contains no valid routes. Using default route.")
        return ["/"]

    return valid_routes
