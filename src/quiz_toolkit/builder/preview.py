"""
Module: builder.preview

Purpose:
    Full on-screen preview. Paginates a normalized copy of the document
    with exactly the same algorithm as export, and turns each page into
    display-ready blocks, optionally revealing correct answers.

Key Functions:
    - build_preview(): Document -> PreviewModel

Key Classes:
    - PreviewModel: Everything a preview surface needs to draw
    - PreviewPage: One page of preview blocks

Dependencies:
    - builder.layout: Normalization, presets, pagination
    - core.numbering: Displayed question numbers

Used By:
    - cli: paginate command
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from quiz_toolkit.core.models import AnswerKeyMode, Document, QuestionKind, option_letter
from quiz_toolkit.core.numbering import display_numbers

from .layout import (
    PageGeometry,
    QuestionItem,
    SectionHeaderItem,
    StylePreset,
    chunk_answer_key,
    normalize_document,
    paginate,
    resolve_preset,
)
from .layout.answer_key import AnswerKeyEntry

logger = logging.getLogger(__name__)

TRUE_FALSE_CHOICES = ("True", "False")


@dataclass(frozen=True)
class PreviewSectionHeader:
    section_id: str
    title: str
    description: str = ""


@dataclass(frozen=True)
class PreviewQuestion:
    """
    A question as shown in the preview.

    Attributes:
        question_id: Question id
        label: Displayed number ("3."), "" when numbers are hidden
        text: Question text
        kind: Question kind
        choices: Option lines ("A) Paris") or True/False; empty for short-answer
        answer: Correct answer label, only set in reveal mode
        explanation: Explanation, only set in reveal mode
    """
    question_id: str
    label: str
    text: str
    kind: QuestionKind
    choices: Tuple[str, ...] = ()
    answer: Optional[str] = None
    explanation: str = ""


PreviewBlock = Union[PreviewSectionHeader, PreviewQuestion]


@dataclass(frozen=True)
class PreviewPage:
    index: int
    blocks: Tuple[PreviewBlock, ...]
    estimated_height: float = 0.0


@dataclass(frozen=True)
class PreviewModel:
    """
    Preview of a whole document (immutable).

    Attributes:
        title: Document title
        style: Style preset the pages were computed with
        pages: Question pages, identical in split to the export
        cover_page: Export would prefix a cover page
        preamble: Export would prefix a preamble page
        reveal_answers: Answers are included in question blocks
        answer_key: Answer-key chunks (empty when the key is hidden)
    """
    title: str
    style: StylePreset
    pages: Tuple[PreviewPage, ...]
    cover_page: bool = False
    preamble: bool = False
    reveal_answers: bool = False
    answer_key: Tuple[Tuple[AnswerKeyEntry, ...], ...] = ()

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def to_text(self) -> str:
        """Plain-text outline, one line per block."""
        lines: List[str] = [f"{self.title or 'Untitled Quiz'} [{self.style.id}]"]
        if self.cover_page:
            lines.append("  (cover page)")
        if self.preamble:
            lines.append("  (preamble page)")
        for page in self.pages:
            lines.append(f"Page {page.index + 1} (~{page.estimated_height:.0f}pt)")
            for block in page.blocks:
                if isinstance(block, PreviewSectionHeader):
                    lines.append(f"  == {block.title or 'Untitled Section'} ==")
                    continue
                suffix = f"  -> {block.answer}" if block.answer else ""
                lines.append(f"  {block.label}{block.text}{suffix}")
        if self.answer_key:
            lines.append(f"Answer key: {len(self.answer_key)} page(s)")
        return "\n".join(lines)


def build_preview(
    document: Document,
    *,
    preset_id: Optional[str] = None,
    reveal_answers: bool = False,
) -> PreviewModel:
    """
    Build the full preview of a document.

    Args:
        document: Live document; it is not mutated
        preset_id: Preview-only style override; None uses the document's
            selected preset
        reveal_answers: Include correct answers and explanations

    Returns:
        PreviewModel whose pages match what export would produce for
        the same preset

    Example:
        >>> preview = build_preview(doc, preset_id="compact")
        >>> preview.page_count
        2
    """
    normalized = normalize_document(document)
    settings = normalized.settings
    style = resolve_preset(preset_id or settings.selected_preset_id)
    geometry = PageGeometry.for_page_size(style.page_size)

    plans = paginate(normalized.sections, style, geometry=geometry)
    numbers = display_numbers(normalized.sections, settings.numbering_style)

    pages = []
    for plan in plans:
        blocks: List[PreviewBlock] = []
        for item in plan.items:
            if isinstance(item, SectionHeaderItem):
                if settings.show_section_titles:
                    blocks.append(PreviewSectionHeader(
                        section_id=item.section.id,
                        title=item.section.title,
                        description=item.section.description,
                    ))
            elif isinstance(item, QuestionItem):
                blocks.append(_preview_question(item, numbers, settings.show_question_numbers, reveal_answers))
        pages.append(PreviewPage(index=plan.index, blocks=tuple(blocks), estimated_height=plan.estimated_height))

    answer_key = ()
    if settings.answer_key_mode != AnswerKeyMode.HIDDEN:
        answer_key = chunk_answer_key(normalized.sections)

    logger.debug(f"Built preview: {len(pages)} pages with preset {style.id}")
    return PreviewModel(
        title=normalized.title,
        style=style,
        pages=tuple(pages),
        cover_page=settings.cover_page_enabled,
        preamble=normalized.has_body_content,
        reveal_answers=reveal_answers,
        answer_key=answer_key,
    )


def _preview_question(item: QuestionItem, numbers, show_numbers: bool, reveal_answers: bool) -> PreviewQuestion:
    question = item.question
    if question.kind == QuestionKind.MULTIPLE_CHOICE:
        choices = tuple(f"{option_letter(i)}) {option}" for i, option in enumerate(question.options))
    elif question.kind == QuestionKind.TRUE_FALSE:
        choices = TRUE_FALSE_CHOICES
    else:
        choices = ()

    number = numbers.get(question.id, question.number)
    return PreviewQuestion(
        question_id=question.id,
        label=f"{number}. " if show_numbers else "",
        text=question.text,
        kind=question.kind,
        choices=choices,
        answer=(question.answer_label or None) if reveal_answers else None,
        explanation=question.explanation if reveal_answers else "",
    )
