"""
Module: importing.templates

Purpose:
    Starter documents a new session can begin from.

Key Functions:
    - list_templates(): Available templates
    - create_from_template(): Fresh document for a template id

Used By:
    - cli: new command
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

from quiz_toolkit.core.models import (
    AnswerKeyMode,
    Document,
    DocumentSettings,
    Question,
    QuestionKind,
    Section,
)
from quiz_toolkit.core.numbering import renumber_questions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateInfo:
    """Template listing entry."""
    id: str
    name: str
    description: str
    question_count: int


def _new_id() -> str:
    return str(uuid.uuid4())


def _mc(text: str, options: Sequence[str], correct: int = 0) -> Question:
    return Question(
        id=_new_id(),
        kind=QuestionKind.MULTIPLE_CHOICE,
        text=text,
        options=list(options),
        correct_option_index=correct,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Template builders (each call returns new ids)
# ─────────────────────────────────────────────────────────────────────────────

def _weekly_practice() -> Document:
    questions = [
        _mc("What is the capital of France?", ["London", "Berlin", "Paris", "Madrid"], 2),
        _mc("Which planet is known as the Red Planet?", ["Venus", "Mars", "Jupiter", "Saturn"], 1),
        _mc("What is 2 + 2?", ["3", "4", "5", "6"], 1),
        _mc('Who wrote "Romeo and Juliet"?',
            ["Charles Dickens", "Jane Austen", "William Shakespeare", "Mark Twain"], 2),
        _mc("What is the chemical symbol for Gold?", ["Ag", "Fe", "Au", "Cu"], 2),
    ]
    return Document(
        title="Weekly Practice Quiz",
        body_content=(
            "<p>Welcome to this week's practice quiz. Complete all questions "
            "and check your answers at the end.</p>"
        ),
        sections=[Section(id=_new_id(), title="General Knowledge", questions=questions)],
        settings=DocumentSettings(
            selected_preset_id="standard",
            answer_key_mode=AnswerKeyMode.APPENDED,
            description="Weekly Practice Quiz",
        ),
    )


def _exam_style() -> Document:
    questions = [
        _mc(f"Question {i}: [Replace this with your question text]",
            ["Option A", "Option B", "Option C", "Option D"])
        for i in range(1, 11)
    ]
    return Document(
        title="Mid-Term Examination",
        body_content=(
            "<p><strong>Instructions:</strong> Please read each question carefully. "
            "You have 30 minutes to complete this exam.</p>"
        ),
        sections=[Section(id=_new_id(), title="Part A: Multiple Choice", questions=questions)],
        settings=DocumentSettings(
            selected_preset_id="standard",
            cover_page_enabled=True,
            answer_key_mode=AnswerKeyMode.APPENDED,
            description="Exam Style Quiz",
        ),
    )


def _short_review() -> Document:
    questions = [
        _mc("Review Question 1", ["True", "False"]),
        _mc("Review Question 2", ["Yes", "No"]),
        _mc("Review Question 3", ["A", "B", "C"]),
    ]
    return Document(
        title="Quick Review",
        body_content="",
        sections=[Section(id=_new_id(), title="Questions", questions=questions)],
        settings=DocumentSettings(
            selected_preset_id="compact",
            cover_page_enabled=False,
            show_section_titles=False,
            answer_key_mode=AnswerKeyMode.HIDDEN,
        ),
    )


_TEMPLATES: List[Tuple[TemplateInfo, Callable[[], Document]]] = [
    (TemplateInfo("weekly-practice", "Weekly Practice Quiz",
                  "A standard 5-question multiple choice quiz perfect for weekly reviews.", 5),
     _weekly_practice),
    (TemplateInfo("exam-style", "Exam Style Quiz",
                  "A comprehensive 10-question set with a formal cover page and answer key.", 10),
     _exam_style),
    (TemplateInfo("short-review", "Short Review",
                  "A quick 3-question checkup with minimal formatting.", 3),
     _short_review),
]

_BUILDERS: Dict[str, Callable[[], Document]] = {info.id: build for info, build in _TEMPLATES}


def list_templates() -> Tuple[TemplateInfo, ...]:
    """All templates in display order."""
    return tuple(info for info, _ in _TEMPLATES)


def create_from_template(template_id: str) -> Document:
    """
    Build a fresh document from a template.

    Every call returns new section and question ids, so two documents
    from the same template never collide.

    Raises:
        KeyError: If template_id is unknown

    Example:
        >>> doc = create_from_template("exam-style")
        >>> doc.question_count
        10
    """
    try:
        build = _BUILDERS[template_id]
    except KeyError:
        raise KeyError(f"Unknown template: {template_id!r}") from None
    document = renumber_questions(build())
    logger.debug(f"Created document from template {template_id!r}")
    return document
