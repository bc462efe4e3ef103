"""
Core Models Package

Data models for the quiz being edited.

Document, Section and Question are mutable: the editing session changes
them in place. Everything produced by layout (pages, render items, presets)
is frozen, so a computed layout can never drift from the document copy it
was computed from.
"""

from .questions import Question, QuestionKind, option_letter, MIN_OPTIONS, MAX_OPTIONS
from .sections import Section
from .document import (
    Document,
    DocumentSettings,
    NumberingStyle,
    AnswerKeyMode,
    PLACEHOLDER_BODY,
    DEFAULT_PRESET_ID,
)

__all__ = [
    "Question",
    "QuestionKind",
    "option_letter",
    "MIN_OPTIONS",
    "MAX_OPTIONS",
    "Section",
    "Document",
    "DocumentSettings",
    "NumberingStyle",
    "AnswerKeyMode",
    "PLACEHOLDER_BODY",
    "DEFAULT_PRESET_ID",
]
