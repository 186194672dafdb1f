"""Custom exceptions for regatta clash tooling.

The clash engine itself never raises; these cover loading snapshots from disk.
"""


class RegattaClashError(Exception):
    """Base exception for regatta clash errors."""

    pass


class SnapshotNotFoundError(RegattaClashError):
    """Snapshot directory does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Snapshot directory not found: {path}")


class CollectionFormatError(RegattaClashError):
    """A collection file could not be read or has the wrong shape."""

    def __init__(self, collection: str, path: str, reason: str):
        self.collection = collection
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid '{collection}' collection in {path}: {reason}")
