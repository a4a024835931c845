"""
Exceptions raised by the knowledge graph store.

Build and query operations never raise for data edge cases; only snapshot
persistence has a failure path.
"""


class PersistenceError(Exception):
    """Base exception for snapshot save/load operations"""
    pass


class SnapshotIOError(PersistenceError):
    """Raised when the snapshot file cannot be read or written"""
    pass


class SnapshotFormatError(PersistenceError):
    """Raised when snapshot content is not valid JSON or has the wrong shape"""
    pass
