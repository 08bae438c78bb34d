"""treecut - split a file tree into symlinked partitions."""

from treecut.config import PartitionConfig
from treecut.pipeline import make_partitions, remove_partitions

__version__ = "0.1.0"

__all__ = ["PartitionConfig", "make_partitions", "remove_partitions", "__version__"]
