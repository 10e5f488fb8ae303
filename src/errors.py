"""Exceptions raised while importing a tile directory into a database."""

from pathlib import Path
from typing import Optional


class TileImportError(Exception):
    """Base class for all errors that abort an import run."""


class ConfigurationError(TileImportError):
    """A required option is missing or an option value is invalid."""


class StorageInitError(TileImportError):
    """The destination database could not be removed, opened or initialized."""


class StorageWriteError(TileImportError):
    """A bulk insert, commit or index build failed."""


class FileReadError(TileImportError):
    """A tile file could not be read."""

    def __init__(self, path: Path, reason: Optional[str] = None):
        self.path = Path(path)
        message = f"Failed to read tile {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
