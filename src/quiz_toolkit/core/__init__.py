"""
Quiz Toolkit Core Package

Shared data models and utilities: the document being edited, its
numbering rules, and JSON (de)serialization of session snapshots.
"""

from .models import Document, DocumentSettings, Section, Question, QuestionKind
from .numbering import renumber_questions, display_numbers

__all__ = [
    "Document",
    "DocumentSettings",
    "Section",
    "Question",
    "QuestionKind",
    "renumber_questions",
    "display_numbers",
]
