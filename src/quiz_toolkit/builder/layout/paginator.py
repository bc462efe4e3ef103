"""
Module: builder.layout.paginator

Purpose:
    Arrange section headers and questions onto pages using estimated
    heights. Greedy, section-aware, with atomic questions.

Key Functions:
    - paginate(): Main pagination function

Algorithm:
    1. Every section after the first starts on a fresh page
    2. A section header always opens its page; one taller than the page
       budget is still placed and logged
    3. Each question is placed whole; if it does not fit and the page
       already has items, start a new page first
    4. A question taller than a whole page is still placed (overflow is
       logged, never split)

Dependencies:
    - builder.layout.models: PagePlan, render items
    - builder.layout.config: PageGeometry, StylePreset
    - builder.layout.estimator: Default height estimator

Used By:
    - builder.controller: Export pipeline
    - builder.preview: Full preview
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from quiz_toolkit.core.models import Section

from .config import DEFAULT_GEOMETRY, PageGeometry, StylePreset
from .estimator import HeightEstimator, estimate_height
from .models import PagePlan, PageRenderItem, QuestionItem, SectionHeaderItem

logger = logging.getLogger(__name__)


def paginate(
    sections: Sequence[Section],
    style: StylePreset,
    *,
    geometry: PageGeometry = DEFAULT_GEOMETRY,
    estimator: Optional[HeightEstimator] = None,
) -> Tuple[PagePlan, ...]:
    """
    Arrange sections and their questions onto pages.

    Deterministic and pure: all running state is local, so independent
    callers (preview and export) may run it concurrently.

    Args:
        sections: Normalized sections in document order
        style: Resolved style preset
        geometry: Page geometry
        estimator: Height estimator, defaults to estimate_height with
            the given geometry

    Returns:
        Page plans in order. Empty when there are no sections.
    """
    if not sections:
        return ()

    if estimator is None:
        def estimator(question, preset):
            return estimate_height(question, preset, geometry)

    budget = geometry.usable_height(style)

    pages: List[PagePlan] = []
    current_items: List[PageRenderItem] = []
    current_height = geometry.header_reserve

    def close_page() -> None:
        nonlocal current_items, current_height
        pages.append(PagePlan(
            index=len(pages),
            items=tuple(current_items),
            estimated_height=current_height,
        ))
        current_items = []
        current_height = geometry.header_reserve

    for section_index, section in enumerate(sections):
        # Sections never share a page with the previous section's content
        if section_index > 0 and current_items:
            close_page()

        # The header always opens an empty page, so closing here would only
        # emit a blank page. An oversize header is placed and reported.
        header_height = geometry.section_header_height
        if current_height + header_height > budget:
            logger.warning(
                f"Section header '{section.title}' overflows page {len(pages)}: "
                f"{header_height:.0f}pt needed, "
                f"{budget - current_height:.0f}pt available"
            )

        current_items.append(SectionHeaderItem(section=section))
        current_height += header_height

        for question in section.questions:
            question_height = estimator(question, style)

            if current_height + question_height > budget and current_items:
                close_page()

            if current_height + question_height > budget:
                logger.warning(
                    f"Question {question.number} overflows page {len(pages)}: "
                    f"{question_height:.0f}pt needed, "
                    f"{budget - current_height:.0f}pt available"
                )

            current_items.append(QuestionItem(question=question, section_id=section.id))
            current_height += question_height

    if current_items:
        close_page()

    item_count = sum(len(page) for page in pages)
    logger.info(f"Paginated {item_count} items onto {len(pages)} pages")

    return tuple(pages)
