"""
Utils Package

Serialization of documents to and from snapshot dictionaries.
"""

from .serialization import (
    document_to_dict,
    document_from_dict,
    SnapshotError,
)

__all__ = [
    "document_to_dict",
    "document_from_dict",
    "SnapshotError",
]
