"""
Schema Validation Utilities

Validates session snapshot payloads against the snapshot JSON schema.

Loading is tolerant by default (malformed optional fields fall back to
defaults during deserialization); validation is the strict path, used when
a caller wants a bad snapshot rejected instead of silently repaired.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

SCHEMA_DIR = Path(__file__).parent

# Parsed schema documents keyed by stem, filled on first use
_SCHEMA_CACHE: dict[str, dict] = {}


def _schema(stem: str) -> dict:
    """Return the parsed ``<stem>.schema.json`` that ships beside this module."""
    cached = _SCHEMA_CACHE.get(stem)
    if cached is None:
        source = SCHEMA_DIR / f"{stem}.schema.json"
        if not source.is_file():
            raise FileNotFoundError(f"Missing schema file {source.name} in {SCHEMA_DIR}")
        cached = _SCHEMA_CACHE[stem] = json.loads(source.read_text(encoding="utf-8"))
    return cached


def _location(error: jsonschema.ValidationError) -> str:
    return ".".join(str(part) for part in error.absolute_path)


class ValidationError(Exception):
    """
    A snapshot payload broke the schema.

    ``path`` points at the first offending field (dotted, empty for the
    root) and ``errors`` holds one line per violation found.
    """

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = list(errors) if errors else []


def validate_snapshot(data: Any) -> None:
    """
    Validate a snapshot document payload (the value under the storage key).

    Legacy fields (fontSize, showAnswers, includeAnswerKey,
    answerDisplayMode) are allowed so old snapshots still validate.

    Args:
        data: Parsed JSON payload

    Raises:
        ValidationError: If data is invalid; `errors` lists every violation
    """
    checker = jsonschema.Draft202012Validator(_schema("snapshot"))
    violations = sorted(checker.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    if not violations:
        return

    first = violations[0]
    raise ValidationError(
        f"Schema validation failed: {first.message}",
        path=_location(first),
        errors=[f"{_location(e) or '<root>'}: {e.message}" for e in violations],
    )
