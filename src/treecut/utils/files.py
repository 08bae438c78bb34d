"""Utility helpers for working with files."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Iterator, Tuple

from treecut.exceptions import SymlinkError


def iter_tree(root: Path) -> Iterator[Tuple[Path, os.stat_result]]:
    """Yield ``(path, lstat)`` for ``root`` and everything below it.

    Entries come in lexical pre-order and symlinks are never followed. Each
    directory is listed completely before its entries are yielded, so callers
    may delete the entry they were just handed. ``OSError`` propagates.
    """
    pending = [Path(root)]
    while pending:
        path = pending.pop()
        info = os.lstat(path)
        yield path, info
        if not stat.S_ISDIR(info.st_mode):
            continue

        with os.scandir(path) as entries:
            names = sorted(entry.name for entry in entries)
        # Reversed so the smallest name is popped first.
        pending.extend(path / name for name in reversed(names))


def is_symlink(info: os.stat_result) -> bool:
    return stat.S_ISLNK(info.st_mode)


def ensure_directory(path: Path) -> None:
    """Create ``path`` and its parents if needed."""
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SymlinkError(f"failed to create directory {path}: {exc}") from exc


def remove_existing(path: Path) -> bool:
    """Remove a symlink or file at ``path``. Returns True when something was removed."""
    try:
        os.lstat(path)
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise SymlinkError(f"failed to check symlink existence {path}: {exc}") from exc

    try:
        os.remove(path)
    except OSError as exc:
        raise SymlinkError(f"failed to remove existing symlink {path}: {exc}") from exc
    return True
