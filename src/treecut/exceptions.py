"""Custom exceptions for treecut."""


class TreecutError(Exception):
    """Base exception for treecut errors."""
    pass


class CollectionError(TreecutError):
    """Raised when walking the source tree fails."""
    pass


class InvalidFilenameError(CollectionError):
    """Raised when a collected file has a name that fails validation."""

    def __init__(self, path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"invalid file name {path}: {reason}")


class InvalidConfigurationError(TreecutError):
    """Raised when a partition configuration cannot be used."""
    pass


class SymlinkError(TreecutError):
    """Raised when a symlink tree cannot be materialized."""
    pass


class TeardownError(TreecutError):
    """Raised when symlinks or partition directories cannot be removed."""
    pass
