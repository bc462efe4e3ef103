"""
Module: builder.layout.answer_key

Purpose:
    Group answer-key entries into fixed-size chunks, one chunk per
    answer-key page.

    Unlike question pages this is count-based, not height-based. Answer
    rows are short and uniform, and existing documents' answer-key page
    counts depend on the fixed count, so the two rules stay separate.

Key Functions:
    - chunk_answer_key(): Flatten all questions and split into chunks

Key Classes:
    - AnswerKeyEntry: One row of the answer key

Dependencies:
    - core.models: Section, Question

Used By:
    - builder.output.answer_key: Answer-key pages
    - builder.preview: Reveal-answers mode
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from quiz_toolkit.core.models import Section

DEFAULT_CHUNK_SIZE = 30


@dataclass(frozen=True)
class AnswerKeyEntry:
    """
    One answer-key row.

    Attributes:
        question_id: Id of the question
        number: Stored (global) question number
        answer: Answer label ("A", "True", expected answer text)
        explanation: Optional explanation, "" if none
    """

    question_id: str
    number: int
    answer: str
    explanation: str = ""


def chunk_answer_key(
    sections: Sequence[Section],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Tuple[Tuple[AnswerKeyEntry, ...], ...]:
    """
    Split all questions into fixed-size answer-key chunks.

    Args:
        sections: Sections in document order
        chunk_size: Entries per chunk (must be positive)

    Returns:
        Chunks in order; the last one may be shorter. Empty when the
        document has no questions.

    Raises:
        ValueError: If chunk_size < 1

    Example:
        >>> [len(c) for c in chunk_answer_key(sections_with_65_questions)]
        [30, 30, 5]
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive: {chunk_size}")

    entries = [
        AnswerKeyEntry(
            question_id=question.id,
            number=question.number,
            answer=question.answer_label,
            explanation=question.explanation,
        )
        for section in sections
        for question in section.questions
    ]
    return tuple(
        tuple(entries[start:start + chunk_size])
        for start in range(0, len(entries), chunk_size)
    )
