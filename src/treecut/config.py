"""Partition configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from treecut.exceptions import InvalidConfigurationError


class Strategy(str, Enum):
    BY_COUNT = "count"
    BY_SIZE = "size"
    BY_CATEGORY = "category"


@dataclass(slots=True)
class PartitionConfig:
    source_dir: Path | None = None
    output_dirs: list[Path] = field(default_factory=list)
    by_size: bool = False
    by_file: bool = False

    def __post_init__(self) -> None:
        if self.source_dir is not None:
            self.source_dir = Path(self.source_dir)
        self.output_dirs = [Path(item) for item in self.output_dirs]

    @property
    def strategy(self) -> Strategy:
        """Resolve the flags to a strategy: count wins over size, category is the default."""
        if self.by_file:
            return Strategy.BY_COUNT
        if self.by_size:
            return Strategy.BY_SIZE
        return Strategy.BY_CATEGORY


def parse_output_dirs(value: str) -> list[Path]:
    """Split a comma-separated list of output directories."""
    if not value or not value.strip():
        raise InvalidConfigurationError("output directories cannot be empty")

    parts = [part.strip() for part in value.split(",")]
    if any(not part for part in parts):
        raise InvalidConfigurationError("output directories cannot be empty")
    return [Path(part) for part in parts]
