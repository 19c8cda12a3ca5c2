"""Command-line interface for scoopit.

Commands are organized into modules by functionality:

- page: Single page processing from a full URL
- routes: Batch processing of routes under a base URL
"""

# Import all command modules to register them with the app
from scoopit.cli import (
    page,  # noqa: F401
    routes,  # noqa: F401
)
from scoopit.cli._common import app

__all__ = ["app"]
