"""
Session snapshot persistence.

The whole document is stored as one JSON object under a fixed key, with
portalocker-guarded reads and writes.
"""

from .session_store import STORAGE_KEY, SessionStore, SnapshotError

__all__ = ["STORAGE_KEY", "SessionStore", "SnapshotError"]
