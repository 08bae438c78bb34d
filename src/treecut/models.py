"""Core treecut data models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional


@dataclass(frozen=True, slots=True)
class FileRecord:
    """A collected file, optionally paired with its byte length."""

    path: Path
    size: Optional[int] = None


# Category label (e.g. "text", "image") to the files detected under it.
CategoryMap = Dict[str, List[Path]]
