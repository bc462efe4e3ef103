"""
Module: storage.session_store

Purpose:
    Persist the editing session's document as a JSON snapshot under the
    fixed key "quiz_maker_state", migrating legacy snapshots on load.

Key Classes:
    - SessionStore: Load/save/update a snapshot file

Dependencies:
    - storage.file_locking: portalocker-guarded JSON access
    - core.utils.serialization: Document <-> dict
    - core.schemas: Strict snapshot validation (jsonschema)

Used By:
    - cli: Every command that reads or writes a snapshot
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from quiz_toolkit.core.models import Document
from quiz_toolkit.core.numbering import renumber_questions
from quiz_toolkit.core.schemas import ValidationError, validate_snapshot
from quiz_toolkit.core.utils.serialization import SnapshotError, document_from_dict, document_to_dict

from .file_locking import locked_read_json, locked_read_modify_write_json, locked_write_json

logger = logging.getLogger(__name__)

STORAGE_KEY = "quiz_maker_state"

__all__ = ["STORAGE_KEY", "SessionStore", "SnapshotError"]


def _unwrap(payload: Any) -> Any:
    # A bare document (e.g. copied straight out of the browser) is accepted too
    if isinstance(payload, dict) and STORAGE_KEY in payload:
        return payload[STORAGE_KEY]
    return payload


class SessionStore:
    """
    Snapshot file for one editing session.

    A missing file is not an error: load() starts a blank document, as a
    fresh session would. A corrupt file is reported through `load_error`
    (or raised with strict=True) and never overwritten until save().

    Example:
        >>> store = SessionStore(Path("quiz.json"))
        >>> doc = store.load()
        >>> doc.title = "Week 3"
        >>> store.save(doc)
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.load_error: Optional[str] = None

    @property
    def exists(self) -> bool:
        return self.path.exists()

    def load(self, strict: bool = False) -> Document:
        """
        Load the snapshot, migrating legacy shapes.

        Args:
            strict: Validate against the snapshot schema and raise instead
                of falling back to a blank document

        Returns:
            The stored document, renumbered; a blank document when the file
            is missing or (non-strict) unreadable

        Raises:
            SnapshotError: If strict and the snapshot cannot be read
        """
        self.load_error = None
        if not self.path.exists():
            logger.debug(f"No snapshot at {self.path}, starting blank")
            return Document.blank()

        try:
            payload = _unwrap(locked_read_json(self.path))
            if strict:
                validate_snapshot(payload)
            document = document_from_dict(payload)
        except (OSError, ValueError, SnapshotError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            message = f"Failed to load snapshot {self.path}: {e}"
            if strict:
                raise SnapshotError(message) from e
            logger.warning(message)
            self.load_error = message
            return Document.blank()

        renumber_questions(document)
        logger.info(f"Loaded snapshot {self.path.name}: {document.question_count} questions")
        return document

    def save(self, document: Document) -> None:
        """
        Write the document under STORAGE_KEY, replacing the file.

        Raises:
            OSError: If the file cannot be written
        """
        locked_write_json(self.path, {STORAGE_KEY: document_to_dict(document)})
        logger.info(f"Saved snapshot {self.path.name}: {document.question_count} questions")

    def update(self, modifier: Callable[[Document], None]) -> Document:
        """
        Load, modify and save under a single exclusive lock.

        Args:
            modifier: Mutates the document in place

        Returns:
            The saved document

        Raises:
            SnapshotError: If the existing snapshot cannot be read
        """
        result: Dict[str, Document] = {}

        def apply(payload: Any) -> Dict[str, Any]:
            if payload:
                document = document_from_dict(_unwrap(payload))
                renumber_questions(document)
            else:
                document = Document.blank()
            modifier(document)
            result["document"] = document
            return {STORAGE_KEY: document_to_dict(document)}

        try:
            locked_read_modify_write_json(self.path, apply)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Failed to update snapshot {self.path}: {e}") from e

        logger.info(f"Updated snapshot {self.path.name}")
        return result["document"]
