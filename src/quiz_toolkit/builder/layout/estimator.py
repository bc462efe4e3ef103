"""
Module: builder.layout.estimator

Purpose:
    Heuristic estimate of a question's rendered height in points.

Key Functions:
    - estimate_height(): Default estimator
    - chars_per_line(): Characters fitting on one line for a style

Key Classes:
    - HeightEstimator: Protocol for pluggable estimators

Algorithm:
    Not a text-shaping engine. Characters are assumed to be half the font
    size wide, so line counts are ceil(len / chars_per_line). The result
    only needs to be monotonic in text length and consistent between
    layout and rendering; a renderer that finds a question taller than
    estimated continues on a new page rather than truncating.

Dependencies:
    - math (std)
    - builder.layout.config: PageGeometry, StylePreset

Used By:
    - builder.layout.paginator: Page filling
"""

from __future__ import annotations

import math
from typing import Protocol

from quiz_toolkit.core.models import Question, QuestionKind

from .config import DEFAULT_GEOMETRY, PageGeometry, StylePreset

CHAR_WIDTH_FACTOR = 0.5


class HeightEstimator(Protocol):
    """Anything mapping (question, style) to a height in points."""

    def __call__(self, question: Question, style: StylePreset) -> float:
        ...


def chars_per_line(style: StylePreset, geometry: PageGeometry = DEFAULT_GEOMETRY) -> int:
    """
    Approximate number of characters on one full-width line.

    Args:
        style: Resolved style preset
        geometry: Page geometry (uses estimate_page_width)

    Returns:
        Characters per line, at least 1
    """
    usable_width = geometry.estimate_page_width - 2 * style.page_padding
    char_width = style.base_font_size * CHAR_WIDTH_FACTOR
    return max(1, math.floor(usable_width / char_width))


def _line_count(text: str, width_chars: int) -> int:
    return max(1, math.ceil(len(text) / max(1, width_chars)))


def estimate_height(
    question: Question,
    style: StylePreset,
    geometry: PageGeometry = DEFAULT_GEOMETRY,
) -> float:
    """
    Estimate the vertical extent of a question.

    Args:
        question: Question to measure
        style: Resolved style preset
        geometry: Page geometry

    Returns:
        Estimated height in points (>= 0)

    Example:
        >>> estimate_height(short_tf_question, resolve_preset("standard"))
        47.0  # 14 spacing + 1 text line (16.5) + 1 toggle line (16.5)
    """
    line_height = style.line_height
    per_line = chars_per_line(style, geometry)

    height = style.question_spacing
    height += _line_count(question.text, per_line) * line_height

    if question.kind == QuestionKind.MULTIPLE_CHOICE:
        option_width = per_line - geometry.option_indent_chars
        for option in question.options:
            height += _line_count(option, option_width) * line_height
            height += geometry.option_margin
    elif question.kind == QuestionKind.TRUE_FALSE:
        height += line_height
    elif question.kind == QuestionKind.SHORT_ANSWER:
        height += 2 * line_height

    return max(0.0, height)
