"""
Module: sections

Purpose:
    Provides the Section dataclass - a named, ordered group of questions
    rendered under its own header.

Key Classes:
    - Section: Editable question group

Dependencies:
    - dataclasses (std)
    - .questions.Question

Used By:
    - core.models.document.Document
    - builder.layout.paginator: Section-aware pagination
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .questions import Question


@dataclass
class Section:
    """
    Ordered group of questions (mutable).

    Attributes:
        id: Unique identifier
        title: Header title
        description: Optional text under the title
        questions: Questions in display order
    """

    id: str
    title: str = ""
    description: str = ""
    questions: List[Question] = field(default_factory=list)

    @property
    def question_count(self) -> int:
        return len(self.questions)

    def find_question(self, question_id: str) -> Optional[Question]:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None
