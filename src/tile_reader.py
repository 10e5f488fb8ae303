"""Read a single tile file: coordinates from its path, bytes from its content."""

import os
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple, Union

from .config import DEFAULT_EXTENSION
from .errors import FileReadError

PathLike = Union[str, os.PathLike]


@dataclass(frozen=True)
class TileRecord:
    """One row of the tile table."""

    z: int
    x: int
    y: int
    data: bytes

    def as_row(self) -> Tuple[int, int, int, Optional[bytes]]:
        """Parameters for the insert statement; empty tiles are stored as NULL."""
        return (self.z, self.x, self.y, self.data if self.data else None)


@lru_cache(maxsize=None)
def _coordinate_pattern(extension: str) -> "re.Pattern":
    # Whole path components only: "<sep>z<sep>x<sep>y.ext" at the end of the path
    separators = re.escape(os.sep)
    if os.altsep:
        separators += re.escape(os.altsep)
    sep = f"[{separators}]"
    return re.compile(
        rf"(?:^|{sep})([0-9]+){sep}([0-9]+){sep}([0-9]+)\.{re.escape(extension)}\Z"
    )


def parse_tile_coordinates(
    path: PathLike, extension: str = DEFAULT_EXTENSION
) -> Optional[Tuple[int, int, int]]:
    """Extract (z, x, y) from a path ending in ``z/x/y.<extension>``.

    Args:
        path: Tile file path; relative paths are made absolute first
        extension: Recognized extension without the dot, matched exactly

    Returns:
        (z, x, y) tuple, or None if the path does not look like a tile
    """
    absolute = os.path.abspath(os.fspath(path))
    match = _coordinate_pattern(extension).search(absolute)
    if match is None:
        return None
    z, x, y = (int(group) for group in match.groups())
    return z, x, y


def load_tile_data(path: PathLike) -> bytes:
    """Read the whole tile file.

    Raises:
        FileReadError: If the file cannot be opened or read
    """
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise FileReadError(Path(path), e.strerror or str(e)) from e


def read_tile(path: PathLike, extension: str = DEFAULT_EXTENSION) -> Optional[TileRecord]:
    """Parse the coordinates and, for a tile path, load its bytes.

    Non-tile files are skipped without being opened.
    """
    coordinates = parse_tile_coordinates(path, extension)
    if coordinates is None:
        return None
    z, x, y = coordinates
    return TileRecord(z=z, x=x, y=y, data=load_tile_data(path))
