"""Partitioning pipeline: collect, assign, link."""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Sequence

from treecut.config import PartitionConfig, Strategy
from treecut.exceptions import (
    CollectionError,
    InvalidConfigurationError,
    SymlinkError,
    TeardownError,
)
from treecut.ingestion.collector import collect_paths, collect_with_size
from treecut.ingestion.content import collect_with_category
from treecut.links.symlinks import (
    create_symlink_tree,
    create_symlink_tree_by_category,
    create_symlink_tree_by_size,
    remove_symlink_tree,
)
from treecut.partition.strategies import (
    distribute_categories,
    partition_by_count,
    partition_by_size,
)

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class PartitionResult:
    strategy: Strategy
    files_collected: int = 0
    links_per_dir: Dict[Path, int] = field(default_factory=dict)

    @property
    def links_created(self) -> int:
        return sum(self.links_per_dir.values())


def _validate(config: PartitionConfig) -> Path:
    if not config.output_dirs:
        raise InvalidConfigurationError("at least one output directory is required")
    if config.source_dir is None or not str(config.source_dir).strip():
        raise InvalidConfigurationError("a source directory is required")
    return config.source_dir


def _partition_by_count(source: Path, output_dirs: Sequence[Path]) -> PartitionResult:
    try:
        paths = collect_paths(source)
    except CollectionError as exc:
        raise CollectionError(f"failed to collect files from {source}: {exc}") from exc

    buckets = partition_by_count(paths, len(output_dirs))
    try:
        counts = create_symlink_tree(buckets, output_dirs)
    except SymlinkError as exc:
        raise SymlinkError(f"failed to create symlink tree: {exc}") from exc
    return PartitionResult(Strategy.BY_COUNT, len(paths), counts)


def _partition_by_size(source: Path, output_dirs: Sequence[Path]) -> PartitionResult:
    try:
        records = collect_with_size(source)
    except CollectionError as exc:
        raise CollectionError(
            f"failed to collect files with size from {source}: {exc}"
        ) from exc

    buckets = partition_by_size(records, len(output_dirs))
    try:
        counts = create_symlink_tree_by_size(buckets, output_dirs)
    except SymlinkError as exc:
        raise SymlinkError(f"failed to create symlink tree by size: {exc}") from exc
    return PartitionResult(Strategy.BY_SIZE, len(records), counts)


def _partition_by_category(source: Path, output_dirs: Sequence[Path]) -> PartitionResult:
    try:
        category_map = collect_with_category(source)
    except CollectionError as exc:
        raise CollectionError(
            f"failed to collect files by category from {source}: {exc}"
        ) from exc

    result = PartitionResult(Strategy.BY_CATEGORY)
    for output_dir, slot in zip(output_dirs, distribute_categories(category_map, len(output_dirs))):
        try:
            linked = create_symlink_tree_by_category(slot, output_dir)
        except SymlinkError as exc:
            raise SymlinkError(
                f"failed to create category symlinks in {output_dir}: {exc}"
            ) from exc
        result.files_collected += linked
        result.links_per_dir[output_dir] = result.links_per_dir.get(output_dir, 0) + linked
    return result


_STRATEGIES = {
    Strategy.BY_COUNT: _partition_by_count,
    Strategy.BY_SIZE: _partition_by_size,
    Strategy.BY_CATEGORY: _partition_by_category,
}


def make_partitions(config: PartitionConfig) -> PartitionResult:
    """Partition ``config.source_dir`` into symlink trees under ``config.output_dirs``."""
    source = _validate(config)
    strategy = config.strategy
    LOGGER.info(
        "Partitioning %s into %d directories by %s",
        source,
        len(config.output_dirs),
        strategy.value,
    )
    return _STRATEGIES[strategy](source, config.output_dirs)


def remove_partitions(output_dirs: Sequence[Path]) -> None:
    """Remove every symlink under ``output_dirs``, then the directories themselves.

    Directories that do not exist are skipped.
    """
    if not output_dirs:
        raise InvalidConfigurationError("at least one output directory is required")

    existing = [Path(item) for item in output_dirs if os.path.lexists(item)]
    try:
        remove_symlink_tree(existing)
    except TeardownError as exc:
        raise TeardownError(f"failed to remove symlink tree: {exc}") from exc

    for output_dir in existing:
        if not os.path.lexists(output_dir):
            continue
        LOGGER.info("Removing partition directory %s", output_dir)
        try:
            shutil.rmtree(output_dir)
        except OSError as exc:
            raise TeardownError(
                f"failed to remove partition directory {output_dir}: {exc}"
            ) from exc
