"""
Module: builder.layout.normalizer

Purpose:
    Produce a canonical, independently-owned copy of a document before
    layout, so layout never observes or mutates live editor state.

Key Functions:
    - normalize_document(): Deep copy with trimmed text fields

Dependencies:
    - core.models: Document, Section, Question

Used By:
    - builder.controller: "preparing" stage
    - builder.preview: Full preview
"""

from __future__ import annotations

from typing import Any, Optional

from quiz_toolkit.core.models import Document, DocumentSettings, Question, QuestionKind, Section


def _clean(text: Optional[Any]) -> str:
    if not text:
        return ""
    return str(text).strip()


def normalize_document(document: Document) -> Document:
    """
    Deep-copy a document, trimming every user-entered text field.

    Trims the title, section titles and descriptions, question text,
    options, expected answers and explanations. Missing optional strings
    become "" and missing collections become empty lists. Body content is
    copied as-is (it is markup, not plain text).

    The input is never mutated and nothing in the result is shared with
    it. Calling it twice gives the same result as calling it once.

    Args:
        document: Live document

    Returns:
        New normalized Document
    """
    settings = document.settings or DocumentSettings()
    return Document(
        title=_clean(document.title),
        body_content=document.body_content or "",
        sections=[_normalize_section(s) for s in (document.sections or [])],
        settings=DocumentSettings(
            selected_preset_id=settings.selected_preset_id,
            cover_page_enabled=settings.cover_page_enabled,
            show_section_titles=settings.show_section_titles,
            show_question_numbers=settings.show_question_numbers,
            numbering_style=settings.numbering_style,
            answer_key_mode=settings.answer_key_mode,
            description=_clean(settings.description),
        ),
    )


def _normalize_section(section: Section) -> Section:
    return Section(
        id=section.id,
        title=_clean(section.title),
        description=_clean(section.description),
        questions=[_normalize_question(q) for q in (section.questions or [])],
    )


def _normalize_question(question: Question) -> Question:
    return Question(
        id=question.id,
        kind=question.kind or QuestionKind.MULTIPLE_CHOICE,
        number=question.number,
        text=_clean(question.text),
        options=[_clean(option) for option in (question.options or [])],
        correct_option_index=question.correct_option_index,
        correct_boolean=question.correct_boolean,
        expected_answer=_clean(question.expected_answer),
        explanation=_clean(question.explanation),
    )
