"""
Module: builder.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses representing render items and page plans.

Key Classes:
    - RenderItemKind: Discriminator for render items
    - SectionHeaderItem: A section header placed on a page
    - QuestionItem: A question placed on a page
    - PagePlan: Ordered render items for one output page

Dependencies:
    - dataclasses (std)
    - core.models: Section, Question

Used By:
    - builder.layout.paginator: Creates PagePlans
    - builder.output.renderer: Draws PagePlans
    - builder.preview: Full preview
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Tuple, Union

from quiz_toolkit.core.models import Question, Section


class RenderItemKind(str, Enum):
    """Tag distinguishing the two render item variants."""
    SECTION_HEADER = "section-header"
    QUESTION = "question"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SectionHeaderItem:
    """
    Section header render item.

    Attributes:
        section: Section whose title/description is drawn
    """

    section: Section
    kind: Literal[RenderItemKind.SECTION_HEADER] = field(
        default=RenderItemKind.SECTION_HEADER, init=False
    )

    @property
    def section_id(self) -> str:
        return self.section.id


@dataclass(frozen=True)
class QuestionItem:
    """
    Question render item.

    Attributes:
        question: Question to draw (placed whole, never split)
        section_id: Id of the owning section
    """

    question: Question
    section_id: str
    kind: Literal[RenderItemKind.QUESTION] = field(
        default=RenderItemKind.QUESTION, init=False
    )


PageRenderItem = Union[SectionHeaderItem, QuestionItem]


@dataclass(frozen=True)
class PagePlan:
    """
    Layout plan for a single page.

    Attributes:
        index: Page number (0-indexed, question pages only)
        items: Render items in drawing order
        estimated_height: Estimated vertical space used, including the
            header reserve

    Example:
        >>> page = PagePlan(index=0, items=(header, q1, q2), estimated_height=310.0)
        >>> len(page)
        3
    """

    index: int
    items: Tuple[PageRenderItem, ...]
    estimated_height: float = 0.0

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    @property
    def is_empty(self) -> bool:
        return len(self.items) == 0

    @property
    def questions(self) -> Tuple[Question, ...]:
        """Questions on this page, in order."""
        return tuple(item.question for item in self.items if isinstance(item, QuestionItem))

    @property
    def section_ids(self) -> Tuple[str, ...]:
        """Distinct ids of the sections with items on this page, in order."""
        seen = []
        for item in self.items:
            if item.section_id not in seen:
                seen.append(item.section_id)
        return tuple(seen)
