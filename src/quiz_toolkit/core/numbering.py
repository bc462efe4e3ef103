"""
Module: core.numbering

Purpose:
    Question numbering. The stored number is always the global, contiguous
    1-based position across the document; the number shown on the page
    depends on the document's numbering style.

Key Functions:
    - renumber_questions(): Reassign stored numbers after structural edits
    - display_numbers(): Map question ids to their displayed number

Dependencies:
    - core.models: Document, Section, NumberingStyle

Used By:
    - core.models.document.Document: After add/remove/move
    - importing: After merging imported questions
    - builder.output.renderer: Question labels
"""

from __future__ import annotations

from typing import Dict, Sequence

from .models.document import Document, NumberingStyle
from .models.sections import Section


def renumber_questions(document: Document) -> Document:
    """
    Assign contiguous numbers starting at 1 across all sections.

    Mutates the document in place and returns it for chaining.

    Example:
        >>> renumber_questions(doc)
        >>> [q.number for q in doc.iter_questions()]
        [1, 2, 3]
    """
    for number, question in enumerate(document.iter_questions(), start=1):
        question.number = number
    return document


def display_numbers(
    sections: Sequence[Section],
    numbering_style: NumberingStyle = NumberingStyle.CONTINUOUS,
) -> Dict[str, int]:
    """
    Compute the number to display for each question id.

    Continuous numbering reuses the stored number. Per-section numbering
    restarts at 1 in every section.
    """
    numbers: Dict[str, int] = {}
    for section in sections:
        for position, question in enumerate(section.questions, start=1):
            if numbering_style == NumberingStyle.PER_SECTION:
                numbers[question.id] = position
            else:
                numbers[question.id] = question.number
    return numbers
