"""
Module: storage.file_locking

Purpose:
    Portalocker-guarded JSON access for session snapshot files. A CLI
    run and an editor saving at the same moment take turns on the file
    instead of one reading the other's half-written snapshot.

Key Functions:
    - locked_read_json: Parse a snapshot holding a shared lock
    - locked_write_json: Overwrite a snapshot holding an exclusive lock
    - locked_read_modify_write_json: Load, transform and store under one lock

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - storage.session_store: Snapshot persistence
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, Callable, Iterator

import portalocker

logger = logging.getLogger(__name__)


@contextmanager
def _held(path: Path, exclusive: bool) -> Iterator[IO[str]]:
    """Open path and keep it locked for the duration of the block."""
    if exclusive:
        # Writers create the file up front; truncation waits for the lock.
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch(exist_ok=True)
        mode, flags = 'r+', portalocker.LOCK_EX
    else:
        mode, flags = 'r', portalocker.LOCK_SH

    handle = open(path, mode, encoding='utf-8')
    try:
        portalocker.lock(handle, flags)
        yield handle
    finally:
        portalocker.unlock(handle)
        handle.close()


def _overwrite(handle: IO[str], data: Any) -> None:
    handle.seek(0)
    handle.truncate()
    json.dump(data, handle, indent=2, ensure_ascii=False)
    handle.flush()


def locked_read_json(path: Path) -> Any:
    """
    Parse a snapshot file while holding a shared lock.

    Raises:
        FileNotFoundError: If path does not exist
        json.JSONDecodeError: If the content is not valid JSON
    """
    with _held(path, exclusive=False) as handle:
        return json.load(handle)


def locked_write_json(path: Path, data: Any) -> None:
    """
    Overwrite a snapshot file, creating it and its folders when missing.

    Example:
        >>> locked_write_json(Path("session.json"), {"quiz_maker_state": {...}})
    """
    with _held(path, exclusive=True) as handle:
        _overwrite(handle, data)
    logger.debug(f"Saved snapshot file {path.name}")


def locked_read_modify_write_json(
    path: Path,
    modifier: Callable[[Any], Any],
    default: Callable[[], Any] = dict,
) -> Any:
    """
    Load a snapshot, pass it through modifier and store the result.

    The exclusive lock spans the whole round trip, so two concurrent
    updates apply one after the other rather than losing an edit.

    Args:
        path: Snapshot file; created with default() content when absent.
        modifier: Receives the current data and returns what to store.
        default: Produces the starting data for a missing or empty file.

    Returns:
        Whatever modifier returned, as written to disk.

    Raises:
        json.JSONDecodeError: If the stored content is not valid JSON.
            The file is left untouched.
    """
    with _held(path, exclusive=True) as handle:
        raw = handle.read()
        current = json.loads(raw) if raw.strip() else default()
        updated = modifier(current)
        _overwrite(handle, updated)
    logger.debug(f"Updated snapshot file {path.name}")
    return updated
