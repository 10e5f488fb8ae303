"""Settings for a single import run."""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError

DEFAULT_EXTENSION = "png"
FILES_PER_WORKER = 256

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def is_valid_table_name(name: str) -> bool:
    """Table names are interpolated into SQL, so only plain identifiers pass."""
    return bool(name) and _IDENTIFIER.match(name) is not None


def default_workers() -> int:
    """Number of available processing units (at least 1)."""
    return os.cpu_count() or 1


@dataclass
class ImportSettings:
    """Everything an import run needs, built once and passed to each component.

    Args:
        source: Root directory of the tile tree
        destination: Output SQLite file (deleted first if it exists)
        table: Destination table name
        workers: Worker pool size (default: available processing units)
        batch_size: Files per transaction (default: workers * 256)
        extension: Recognized tile file extension, without the dot
        verbose: If True, print a line per committed batch
    """

    source: Optional[Path]
    destination: Optional[Path]
    table: Optional[str]
    workers: Optional[int] = None
    batch_size: Optional[int] = None
    extension: str = DEFAULT_EXTENSION
    verbose: bool = False
    _validated: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        if self.source is not None:
            self.source = Path(self.source)
        if self.destination is not None:
            self.destination = Path(self.destination)
        if self.workers is None:
            self.workers = default_workers()
        if self.batch_size is None:
            self.batch_size = self.workers * FILES_PER_WORKER

    def validate(self) -> "ImportSettings":
        """Check required options and value ranges.

        Raises:
            ConfigurationError: On the first problem found
        """
        missing = [
            name
            for name, value in (
                ("source", self.source),
                ("database", self.destination),
                ("table", self.table),
            )
            if value is None or value == ""
        ]
        if missing:
            raise ConfigurationError(
                "wrong arguments, be sure to pass source, database, table "
                f"(missing: {', '.join(missing)})"
            )

        if not self.source.is_dir():
            raise ConfigurationError(f"Source is not a directory: {self.source}")
        if self.destination.exists() and self.destination.is_dir():
            raise ConfigurationError(f"Database path is a directory: {self.destination}")
        if not is_valid_table_name(self.table):
            raise ConfigurationError(f"Invalid table name: {self.table!r}")
        if self.workers < 1:
            raise ConfigurationError(f"Thread count must be at least 1, got {self.workers}")
        if self.batch_size < 1:
            raise ConfigurationError(f"Batch size must be at least 1, got {self.batch_size}")

        self.extension = self.extension.lstrip(".")
        if not self.extension:
            raise ConfigurationError("Tile extension must not be empty")

        self._validated = True
        return self

    @property
    def validated(self) -> bool:
        return self._validated
