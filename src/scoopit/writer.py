"""Output file writer for processed routes.

Output structure:
    output/
    |-- text/       # <name>.txt  (plain text)
    |-- json/       # <name>.json (url, route, title, description, content, timestamp)
    |-- markdown/   # <name>.md   (markdown)
"""

import json
import logging
import shutil
from pathlib import Path

from scoopit.config import DEFAULT_OUTPUT_DIR
from scoopit.exceptions import OutputError
from scoopit.models import OutputFormat, RouteResult
from scoopit.utils import generate_filename

LOGGER = logging.getLogger(__name__)

# Format -> (subdirectory, extension)
FORMAT_TARGETS: dict[str, tuple[str, str]] = {
    "text": ("text", ".txt"),
    "json": ("json", ".json"),
    "markdown": ("markdown", ".md"),
}


class OutputWriter:
    """Persist route results as text, JSON and/or markdown files."""

    def __init__(
        self,
        output_dir: Path = DEFAULT_OUTPUT_DIR,
        stable_names: bool = False,
        logger: logging.Logger | None = None,
    ):
        """Initialise writer.

        Args:
            output_dir: Root output directory.
            stable_names: Name files after the route only (no title slug or timestamp).
            logger: Optional logger (defaults to the module logger).
        """
        self.output_dir = Path(output_dir)
        self._stable_names = stable_names
        self._logger = logger or LOGGER

    def write(self, result: RouteResult, fmt: OutputFormat) -> list[Path]:
        """Write the files for one route result.

        Args:
            result: Processed route.
            fmt: One of text, json, markdown or all.

        Returns:
            Paths of the written files.

        Raises:
            OutputError: If a file cannot be written.
        """
        formats = list(FORMAT_TARGETS) if fmt == "all" else [fmt]
        name = generate_filename(result.route, result.metadata.title, stable=self._stable_names)

        written = []
        for target in formats:
            subdir, extension = FORMAT_TARGETS[target]
            path = self.output_dir / subdir / f"{name}{extension}"
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(self._render(result, target), encoding="utf-8")
            except OSError as e:
                raise OutputError(f"Failed to save output file {path}: {e}", file_path=str(path)) from e

            self._logger.info(f"Generated {target} file: {path}")
            written.append(path)

        return written

    def _render(self, result: RouteResult, target: str) -> str:
        if target == "json":
            return json.dumps(result.to_document(), indent=2, ensure_ascii=False)
        if target == "markdown":
            return result.markdown_content
        return result.text_content

    def has_previous_outputs(self) -> bool:
        """Return True if any format directory already contains files."""
        for subdir, _ in FORMAT_TARGETS.values():
            directory = self.output_dir / subdir
            if directory.is_dir() and any(directory.iterdir()):
                return True
        return False

    def delete_previous_outputs(self) -> None:
        """Empty every format directory, leaving the directories in place."""
        self._logger.info("Deleting previous output files")
        for subdir, _ in FORMAT_TARGETS.values():
            directory = self.output_dir / subdir
            directory.mkdir(parents=True, exist_ok=True)
            for entry in directory.iterdir():
                if entry.is_dir():
                    shutil.rmtree(entry)
                else:
                    entry.unlink()
        self._logger.info("Previous output files deleted")
