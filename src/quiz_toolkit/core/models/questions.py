"""
Module: questions

Purpose:
    Provides the Question dataclass - one quiz question as edited by the
    user. Supports three kinds: multiple-choice, true-false and
    short-answer.

Key Classes:
    - QuestionKind: Enum of supported question kinds
    - Question: Editable question record

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.sections.Section
    - builder.layout.estimator: Height estimation
    - builder.output.renderer: PDF drawing
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


MIN_OPTIONS = 2
MAX_OPTIONS = 5


class QuestionKind(str, Enum):
    """Kind of quiz question."""
    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    SHORT_ANSWER = "short-answer"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Optional[str]) -> QuestionKind:
        """
        Parse a stored kind string.

        Missing or unknown values fall back to MULTIPLE_CHOICE, which is
        what snapshots written before question kinds existed contain.
        """
        try:
            return cls(value)
        except ValueError:
            return cls.MULTIPLE_CHOICE


@dataclass
class Question:
    """
    A single quiz question (mutable, owned by the editing session).

    Attributes:
        id: Unique identifier (uuid4 string)
        kind: Question kind
        number: 1-based display order across the whole document.
            Assigned by core.numbering.renumber_questions, never by layout.
        text: Question prompt
        options: Answer options (multiple-choice only, 2-5 entries)
        correct_option_index: Index of the correct option (multiple-choice)
        correct_boolean: Correct value (true-false)
        expected_answer: Model answer (short-answer)
        explanation: Optional explanation shown in the answer key

    Example:
        >>> q = Question(id="q1", kind=QuestionKind.TRUE_FALSE, number=1,
        ...              text="The sky is blue.", correct_boolean=True)
        >>> q.answer_label
        'True'
    """

    id: str
    kind: QuestionKind = QuestionKind.MULTIPLE_CHOICE
    number: int = 0
    text: str = ""
    options: List[str] = field(default_factory=list)
    correct_option_index: int = 0
    correct_boolean: Optional[bool] = None
    expected_answer: str = ""
    explanation: str = ""

    @property
    def is_multiple_choice(self) -> bool:
        return self.kind == QuestionKind.MULTIPLE_CHOICE

    @property
    def answer_label(self) -> str:
        """
        Short answer text for the answer key.

        Returns:
            Option letter for multiple-choice ("A".."E"), "True"/"False"
            for true-false, expected answer for short-answer. Empty string
            when no answer has been set.
        """
        if self.kind == QuestionKind.MULTIPLE_CHOICE:
            if 0 <= self.correct_option_index < len(self.options):
                return option_letter(self.correct_option_index)
            return ""
        if self.kind == QuestionKind.TRUE_FALSE:
            if self.correct_boolean is None:
                return ""
            return "True" if self.correct_boolean else "False"
        return self.expected_answer

    def validation_issues(self) -> List[str]:
        """
        List problems that would make this question unusable in an export.

        Does not raise: half-edited questions are a normal editing state.
        """
        issues: List[str] = []
        if not self.text.strip():
            issues.append("question text is empty")
        if self.kind == QuestionKind.MULTIPLE_CHOICE:
            if not (MIN_OPTIONS <= len(self.options) <= MAX_OPTIONS):
                issues.append(
                    f"multiple-choice needs {MIN_OPTIONS}-{MAX_OPTIONS} options, "
                    f"has {len(self.options)}"
                )
            if not (0 <= self.correct_option_index < len(self.options)):
                issues.append(f"correct option index {self.correct_option_index} out of range")
        elif self.kind == QuestionKind.TRUE_FALSE and self.correct_boolean is None:
            issues.append("true-false answer not set")
        return issues


def option_letter(index: int) -> str:
    """Letter label for an option index (0 -> "A")."""
    return chr(ord("A") + index)
