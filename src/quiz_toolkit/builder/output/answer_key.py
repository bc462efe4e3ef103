"""
Module: builder.output.answer_key

Purpose:
    Draw answer-key pages, either appended to the quiz PDF or as a
    separate PDF.

Key Functions:
    - draw_answer_key_pages(): One page per answer-key chunk
    - render_answer_key_pdf(): Standalone answer-key PDF

Dependencies:
    - reportlab: PDF generation
    - builder.layout.answer_key: AnswerKeyEntry chunks

Used By:
    - builder.output.renderer: Appended answer key
    - builder.controller: Separate answer key
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence, Tuple

from quiz_toolkit.builder.layout.answer_key import AnswerKeyEntry
from quiz_toolkit.builder.layout.config import PageGeometry, StylePreset

from .drawing import FONT_BOLD, FONT_ITALIC, FONT_REGULAR, PageCursor, open_canvas

logger = logging.getLogger(__name__)

ANSWER_KEY_TITLE = "Answer Key"
TITLE_FONT_SIZE = 16
ROW_FONT_SIZE = 10
NUMBER_COLUMN_PT = 30
ANSWER_COLUMN_PT = 70


def draw_answer_key_pages(
    cursor: PageCursor,
    chunks: Sequence[Tuple[AnswerKeyEntry, ...]],
    *,
    running_title: Optional[str] = None,
) -> None:
    """
    Draw one answer-key page per chunk.

    A row that is longer than expected (long explanation) may still spill
    onto a continuation page via the cursor.
    """
    for chunk in chunks:
        cursor.start_page(running_title)
        cursor.draw_lines(ANSWER_KEY_TITLE, FONT_BOLD, TITLE_FONT_SIZE)
        cursor.skip(6)
        for entry in chunk:
            _draw_row(cursor, entry)
    cursor.finish_page()


def _draw_row(cursor: PageCursor, entry: AnswerKeyEntry) -> None:
    leading = ROW_FONT_SIZE * 1.4
    cursor.ensure(leading)
    c = cursor.c
    answer = entry.answer or "-"

    c.setFont(FONT_BOLD, ROW_FONT_SIZE)
    c.drawString(cursor.left, cursor.y - ROW_FONT_SIZE, f"{entry.number}.")

    answer_fits_column = c.stringWidth(answer, FONT_BOLD, ROW_FONT_SIZE) < ANSWER_COLUMN_PT - 6
    if answer_fits_column:
        c.drawString(cursor.left + NUMBER_COLUMN_PT, cursor.y - ROW_FONT_SIZE, answer)
    else:
        # Long short-answer text gets its own wrapped lines
        cursor.draw_lines(answer, FONT_BOLD, ROW_FONT_SIZE, indent=NUMBER_COLUMN_PT, leading=leading)

    if not entry.explanation:
        if answer_fits_column:
            cursor.y -= leading
        return

    # Explanation shares the answer's line when the answer is short
    indent = NUMBER_COLUMN_PT + ANSWER_COLUMN_PT if answer_fits_column else NUMBER_COLUMN_PT
    cursor.draw_lines(
        f"- {entry.explanation}",
        FONT_ITALIC,
        ROW_FONT_SIZE,
        indent=indent,
        leading=leading,
        gray=0.33,
    )


def render_answer_key_pdf(
    chunks: Sequence[Tuple[AnswerKeyEntry, ...]],
    output_path: Path,
    style: StylePreset,
    geometry: PageGeometry,
    *,
    title: str = "",
    show_footer: bool = True,
) -> int:
    """
    Write the answer key to its own PDF.

    Args:
        chunks: Answer-key chunks from chunk_answer_key()
        output_path: Path to write PDF
        style: Resolved style preset (padding)
        geometry: Page geometry
        title: Document title, used as running title
        show_footer: Draw page numbers

    Returns:
        Number of pages written

    Raises:
        IOError: If the PDF cannot be written
    """
    c = open_canvas(output_path, geometry, title=f"{title} - {ANSWER_KEY_TITLE}" if title else ANSWER_KEY_TITLE,
                    show_footer=show_footer)
    cursor = PageCursor(c, geometry, style)

    if chunks:
        draw_answer_key_pages(cursor, chunks, running_title=title or None)
    else:
        logger.warning("No questions for answer key, writing blank page")
        cursor.start_page(title or None)
        cursor.draw_lines(ANSWER_KEY_TITLE, FONT_BOLD, TITLE_FONT_SIZE)
        cursor.draw_lines("No questions.", FONT_REGULAR, ROW_FONT_SIZE)
        cursor.finish_page()

    c.save()
    logger.info(f"Rendered {c.page_count} answer-key pages to {output_path}")
    return c.page_count
