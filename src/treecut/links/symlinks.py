"""Symlink tree materialization and teardown."""

from __future__ import annotations

import logging
import os
from operator import attrgetter
from pathlib import Path
from typing import Callable, Dict, Sequence, TypeVar

from treecut.exceptions import InvalidConfigurationError, SymlinkError, TeardownError
from treecut.models import CategoryMap, FileRecord
from treecut.utils.files import ensure_directory, is_symlink, iter_tree, remove_existing

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def link_file(target: Path, link_dir: Path) -> Path:
    """Point ``link_dir/<basename of target>`` at ``target``, replacing what is there."""
    link_path = Path(link_dir) / Path(target).name
    remove_existing(link_path)
    ensure_directory(link_path.parent)
    try:
        os.symlink(target, link_path)
    except OSError as exc:
        raise SymlinkError(
            f"failed to create symlink from {target} to {link_path}: {exc}"
        ) from exc
    LOGGER.debug("Linked %s -> %s", link_path, target)
    return link_path


def create_symlinks(
    buckets: Sequence[Sequence[T]],
    output_dirs: Sequence[Path],
    get_path: Callable[[T], Path],
) -> Dict[Path, int]:
    """Link every item of ``buckets[i]`` into ``output_dirs[i]``.

    Stops at the first failure; links created before it are left in place.
    Returns the number of links written per output directory.
    """
    if len(buckets) > len(output_dirs):
        raise InvalidConfigurationError(
            f"{len(buckets)} buckets but only {len(output_dirs)} output directories"
        )

    counts: Dict[Path, int] = {}
    for bucket, output_dir in zip(buckets, output_dirs):
        output_dir = Path(output_dir)
        for item in bucket:
            link_file(get_path(item), output_dir)
        counts[output_dir] = counts.get(output_dir, 0) + len(bucket)
        LOGGER.info("Linked %d files into %s", len(bucket), output_dir)
    return counts


def create_symlink_tree(buckets: Sequence[Sequence[Path]], output_dirs: Sequence[Path]) -> Dict[Path, int]:
    return create_symlinks(buckets, output_dirs, Path)


def create_symlink_tree_by_size(
    buckets: Sequence[Sequence[FileRecord]], output_dirs: Sequence[Path]
) -> Dict[Path, int]:
    return create_symlinks(buckets, output_dirs, attrgetter("path"))


def create_symlink_tree_by_category(category_map: CategoryMap, dest_dir: Path) -> int:
    """Link each category's files into ``dest_dir/<category>``. Returns the link count."""
    total = 0
    for category, files in category_map.items():
        category_dir = Path(dest_dir) / category
        ensure_directory(category_dir)
        for path in files:
            link_file(path, category_dir)
        total += len(files)
        LOGGER.info("Linked %d %s files into %s", len(files), category, category_dir)
    return total


def remove_symlink_tree(output_dirs: Sequence[Path]) -> int:
    """Delete every symlink under each directory, leaving files and directories alone.

    Returns the number of symlinks removed.
    """
    removed = 0
    for output_dir in output_dirs:
        try:
            for path, info in iter_tree(Path(output_dir)):
                if not is_symlink(info):
                    continue
                os.remove(path)
                removed += 1
                LOGGER.debug("Removed symlink %s", path)
        except OSError as exc:
            raise TeardownError(
                f"failed to remove symlinks in directory {output_dir}: {exc}"
            ) from exc
    return removed
