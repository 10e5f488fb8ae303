"""Depth-first enumeration of the files under a tile directory."""

import os
from pathlib import Path
from typing import Iterator, List, Optional, Set, Tuple, Union

DirectoryKey = Tuple[int, int]


def _list_entries(directory: Union[str, os.PathLike]) -> List[os.DirEntry]:
    # Unreadable or vanished directories count as empty
    try:
        with os.scandir(directory) as it:
            return list(it)
    except OSError:
        return []


def _is_directory(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


def _is_file(entry: os.DirEntry) -> bool:
    try:
        return entry.is_file()
    except OSError:
        return False


def _directory_key(stat_result: os.stat_result) -> DirectoryKey:
    return (stat_result.st_dev, stat_result.st_ino)


def _root_key(root: Union[str, os.PathLike]) -> Optional[DirectoryKey]:
    try:
        return _directory_key(os.stat(root))
    except OSError:
        return None


def _entry_key(entry: os.DirEntry) -> Optional[DirectoryKey]:
    try:
        return _directory_key(entry.stat())
    except OSError:
        return None


def walk_files(root: Union[str, os.PathLike]) -> Iterator[Path]:
    """Yield every regular file below ``root``, lazily and depth-first.

    Entries are visited in the order the filesystem lists them; a
    subdirectory is fully walked before the next sibling entry. Uses an
    explicit stack so deep trees cannot exhaust the call stack.

    Symlinked directories are followed. A directory that is already being
    walked further up the stack is skipped, so symlink loops end; the same
    directory reached through two separate links is walked both times.
    """
    stack: List[Tuple[Iterator[os.DirEntry], Optional[DirectoryKey]]] = [
        (iter(_list_entries(root)), _root_key(root))
    ]
    ancestors: Set[DirectoryKey] = {key for _, key in stack if key is not None}

    while stack:
        entries, key = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            ancestors.discard(key)
            continue

        if _is_directory(entry):
            child_key = _entry_key(entry)
            if child_key is None or child_key in ancestors:
                continue
            ancestors.add(child_key)
            stack.append((iter(_list_entries(entry.path)), child_key))
        elif _is_file(entry):
            yield Path(entry.path)
