"""
Module: builder.output.renderer

Purpose:
    Render a paginated quiz to PDF using ReportLab.
    Cover page, preamble page, one PDF page per PagePlan, then the
    appended answer key.

Key Functions:
    - render_to_pdf(): Main rendering function

Dependencies:
    - reportlab: PDF generation
    - builder.output.drawing: Canvas and cursor
    - builder.output.rich_text: Body markup flattening
    - builder.layout.models: PagePlan, render items

Used By:
    - builder.controller: Export pipeline
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

from quiz_toolkit.builder.layout.answer_key import AnswerKeyEntry
from quiz_toolkit.builder.layout.config import DEFAULT_GEOMETRY, PageGeometry, StylePreset
from quiz_toolkit.builder.layout.models import PagePlan, QuestionItem, SectionHeaderItem
from quiz_toolkit.core.models import Document, Question, QuestionKind, Section, option_letter
from quiz_toolkit.core.numbering import display_numbers

from .answer_key import draw_answer_key_pages
from .drawing import FONT_BOLD, FONT_ITALIC, FONT_MONO, FONT_REGULAR, PageCursor, open_canvas
from .rich_text import html_to_blocks

logger = logging.getLogger(__name__)

UNTITLED = "Untitled Quiz"
GENERATED_BY = "Generated by Quiz Toolkit"
COVER_TITLE_FONT_SIZE = 24
OPTION_INDENT_PT = 18
BULLET = "•"
CORRECT_MARK = "  (correct)"

# Heading sizes relative to the preset's base font size
HEADING_SIZE_BUMP = {"h1": 8, "h2": 5, "h3": 2, "h4": 1, "h5": 0, "h6": 0}


def render_to_pdf(
    document: Document,
    pages: Sequence[PagePlan],
    style: StylePreset,
    output_path: Path,
    *,
    geometry: Optional[PageGeometry] = None,
    answer_chunks: Sequence[Tuple[AnswerKeyEntry, ...]] = (),
    show_footer: bool = True,
    reveal_answers: bool = False,
    generated_on: Optional[date] = None,
) -> int:
    """
    Render page plans to a PDF file.

    Args:
        document: Normalized document the pages were computed from
        pages: Page plans from paginate()
        style: Resolved style preset
        output_path: Path to write PDF
        geometry: Page geometry (defaults to A4)
        answer_chunks: Answer-key chunks to append; empty for none
        show_footer: Draw "n / total" page numbers
        reveal_answers: Mark correct answers inline
        generated_on: Date printed on the cover (defaults to today)

    Returns:
        Number of PDF pages written. May exceed the number of page plans
        (cover, preamble, answer key, overflow continuation pages).

    Raises:
        IOError: If PDF cannot be written

    Example:
        >>> pages = paginate(doc.sections, style)
        >>> render_to_pdf(doc, pages, style, Path("output/quiz.pdf"))
        3
    """
    geometry = geometry or DEFAULT_GEOMETRY
    settings = document.settings
    running_title = document.title or None

    c = open_canvas(output_path, geometry, title=document.title or UNTITLED, show_footer=show_footer)
    cursor = PageCursor(c, geometry, style)
    drew_any = False

    if settings.cover_page_enabled:
        _draw_cover(cursor, document, generated_on or date.today())
        drew_any = True

    if document.has_body_content:
        _draw_preamble(cursor, document.body_content, running_title)
        drew_any = True

    numbers = display_numbers(document.sections, settings.numbering_style)

    for page in pages:
        cursor.start_page(running_title)
        for item in page.items:
            if isinstance(item, SectionHeaderItem):
                if settings.show_section_titles:
                    _draw_section_header(cursor, item.section)
            elif isinstance(item, QuestionItem):
                number = numbers.get(item.question.id, item.question.number)
                label = f"{number}. " if settings.show_question_numbers else ""
                _draw_question(cursor, item.question, label, reveal_answers)
            else:
                logger.warning(f"Unknown render item on page {page.index}: {item!r}")
        drew_any = True

    if answer_chunks:
        draw_answer_key_pages(cursor, answer_chunks, running_title=running_title)
        drew_any = True

    if not drew_any:
        logger.warning("Nothing to render, creating blank page")
        cursor.start_page(running_title)

    cursor.finish_page()
    c.save()

    if cursor.continuation_pages:
        logger.warning(f"{cursor.continuation_pages} continuation page(s) added where content exceeded its estimate")
    logger.info(f"Rendered {c.page_count} pages to {output_path}")
    return c.page_count


# ─────────────────────────────────────────────────────────────────────────────
# Front matter
# ─────────────────────────────────────────────────────────────────────────────

def _draw_cover(cursor: PageCursor, document: Document, generated_on: date) -> None:
    size = cursor.style.base_font_size
    cursor.start_page(None)
    cursor.skip((cursor.top - cursor.bottom) / 4)

    cursor.draw_centred(document.title or UNTITLED, FONT_BOLD, COVER_TITLE_FONT_SIZE)
    cursor.skip(size)
    cursor.draw_centred(generated_on.strftime("%B %d, %Y"), FONT_REGULAR, size)

    count = document.question_count
    cursor.draw_centred(f"{count} question{'s' if count != 1 else ''}", FONT_REGULAR, size)

    if document.settings.description:
        cursor.skip(size)
        cursor.draw_lines(document.settings.description, FONT_ITALIC, size)

    cursor.y = min(cursor.y, cursor.bottom + size * 2)
    cursor.c.saveState()
    cursor.c.setFillGray(0.5)
    cursor.draw_centred(GENERATED_BY, FONT_REGULAR, size - 2)
    cursor.c.restoreState()


def _draw_preamble(cursor: PageCursor, body_content: str, running_title: Optional[str]) -> None:
    size = cursor.style.base_font_size
    cursor.start_page(running_title)
    for block in html_to_blocks(body_content):
        if block.kind in HEADING_SIZE_BUMP:
            cursor.draw_lines(block.text, FONT_BOLD, size + HEADING_SIZE_BUMP[block.kind])
        elif block.kind == "li":
            cursor.draw_lines(f"{BULLET} {block.text}", FONT_REGULAR, size, indent=OPTION_INDENT_PT / 2)
        elif block.kind == "blockquote":
            cursor.draw_lines(block.text, FONT_ITALIC, size, indent=OPTION_INDENT_PT)
        elif block.kind == "pre":
            for line in block.text.split("\n"):
                cursor.draw_lines(line, FONT_MONO, size - 1, indent=OPTION_INDENT_PT / 2)
        else:
            for line in block.text.split("\n"):
                cursor.draw_lines(line, FONT_REGULAR, size)
        cursor.skip(size / 2)


# ─────────────────────────────────────────────────────────────────────────────
# Question pages
# ─────────────────────────────────────────────────────────────────────────────

def _draw_section_header(cursor: PageCursor, section: Section) -> None:
    size = cursor.style.base_font_size
    cursor.draw_lines(section.title or "Untitled Section", FONT_BOLD, size + 3)
    if section.description:
        cursor.draw_lines(section.description, FONT_ITALIC, size, gray=0.33)
    cursor.draw_rule()
    cursor.skip(size / 2)


def _draw_question(cursor: PageCursor, question: Question, label: str, reveal_answers: bool) -> None:
    style = cursor.style
    size = style.base_font_size

    cursor.draw_lines(f"{label}{question.text}", FONT_BOLD, size)

    if question.kind == QuestionKind.MULTIPLE_CHOICE:
        for index, option in enumerate(question.options):
            correct = reveal_answers and index == question.correct_option_index
            text = f"{option_letter(index)}) {option}"
            if correct:
                text += CORRECT_MARK
            cursor.draw_lines(text, FONT_BOLD if correct else FONT_REGULAR, size, indent=OPTION_INDENT_PT)
            cursor.skip(4)
    elif question.kind == QuestionKind.TRUE_FALSE:
        cursor.draw_lines(_true_false_line(question, reveal_answers), FONT_REGULAR, size, indent=OPTION_INDENT_PT)
    elif question.kind == QuestionKind.SHORT_ANSWER:
        if reveal_answers and question.expected_answer:
            cursor.draw_lines(f"Answer: {question.expected_answer}", FONT_BOLD, size, indent=OPTION_INDENT_PT)
        else:
            for _ in range(2):
                cursor.skip(style.line_height - 4)
                cursor.draw_rule(indent=OPTION_INDENT_PT, gap=2)

    if reveal_answers and question.explanation:
        cursor.draw_lines(question.explanation, FONT_ITALIC, size - 1, indent=OPTION_INDENT_PT, gray=0.33)

    cursor.skip(style.question_spacing)


def _true_false_line(question: Question, reveal_answers: bool) -> str:
    marks: Dict[bool, str] = {True: " ", False: " "}
    if reveal_answers and question.correct_boolean is not None:
        marks[question.correct_boolean] = "x"
    return f"[{marks[True]}] True     [{marks[False]}] False"
