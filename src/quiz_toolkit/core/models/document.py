"""
Module: document

Purpose:
    Provides the Document dataclass - the whole quiz being edited: title,
    rich-text body, ordered sections and display settings.

Key Classes:
    - Document: Root of the editing state
    - DocumentSettings: Display/export settings
    - NumberingStyle: continuous or per-section numbering
    - AnswerKeyMode: hidden, appended or separate answer key

Dependencies:
    - dataclasses (std)
    - uuid (std)
    - core.numbering: Renumbering pass after structural edits

Used By:
    - builder.layout.normalizer: Produces normalized copies
    - builder.controller: Export pipeline
    - storage.session_store: Snapshot persistence

Design Note:
    Unlike layout outputs, these models are mutable. The editing session
    changes them continuously; layout only ever sees a normalized copy.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .questions import Question
from .sections import Section


PLACEHOLDER_BODY = "<p>Start typing your content here...</p>"
EMPTY_BODY = "<p></p>"
DEFAULT_PRESET_ID = "standard"


class NumberingStyle(str, Enum):
    """How question numbers are displayed."""
    CONTINUOUS = "continuous"
    PER_SECTION = "per-section"

    def __str__(self) -> str:
        return self.value


class AnswerKeyMode(str, Enum):
    """Where the answer key goes in the export."""
    HIDDEN = "hidden"
    APPENDED = "appended"    # Extra pages at the end of the quiz PDF
    SEPARATE = "separate"    # Its own PDF next to the quiz

    def __str__(self) -> str:
        return self.value


@dataclass
class DocumentSettings:
    """
    Display and export settings stored with the document.

    Attributes:
        selected_preset_id: Style preset id (resolved with fallback)
        cover_page_enabled: Prefix a cover page
        show_section_titles: Draw section headers
        show_question_numbers: Prefix questions with their number
        numbering_style: Continuous or per-section display numbers
        answer_key_mode: Answer key placement
        description: Free-text description
    """

    selected_preset_id: str = DEFAULT_PRESET_ID
    cover_page_enabled: bool = True
    show_section_titles: bool = True
    show_question_numbers: bool = True
    numbering_style: NumberingStyle = NumberingStyle.CONTINUOUS
    answer_key_mode: AnswerKeyMode = AnswerKeyMode.APPENDED
    description: str = ""


@dataclass
class Document:
    """
    A quiz document (mutable, owned by the editing session).

    Attributes:
        title: Document title
        body_content: Rich-text markup (HTML subset) shown before questions
        sections: Ordered question groups
        settings: Display and export settings
    """

    title: str = ""
    body_content: str = ""
    sections: List[Section] = field(default_factory=list)
    settings: DocumentSettings = field(default_factory=DocumentSettings)

    @classmethod
    def blank(cls) -> Document:
        """Initial state of a new editing session."""
        return cls(title="", body_content=PLACEHOLDER_BODY)

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def iter_questions(self) -> Iterator[Question]:
        """Iterate questions across all sections in document order."""
        for section in self.sections:
            yield from section.questions

    @property
    def question_count(self) -> int:
        return sum(len(section.questions) for section in self.sections)

    @property
    def has_questions(self) -> bool:
        return any(section.questions for section in self.sections)

    @property
    def has_body_content(self) -> bool:
        """True when the body holds something other than the placeholder."""
        body = self.body_content.strip()
        return bool(body) and body not in (PLACEHOLDER_BODY, EMPTY_BODY)

    def find_section(self, section_id: str) -> Optional[Section]:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def locate_question(self, question_id: str) -> Optional[Tuple[Section, int]]:
        """Return (owning section, index) for a question id, or None."""
        for section in self.sections:
            for index, question in enumerate(section.questions):
                if question.id == question_id:
                    return section, index
        return None

    # ─────────────────────────────────────────────────────────────────────────
    # Structural edits (each ends with a renumbering pass)
    # ─────────────────────────────────────────────────────────────────────────

    def add_section(self, title: str = "", description: str = "") -> Section:
        section = Section(id=str(uuid.uuid4()), title=title, description=description)
        self.sections.append(section)
        self._renumber()
        return section

    def remove_section(self, section_id: str) -> None:
        self.sections = [s for s in self.sections if s.id != section_id]
        self._renumber()

    def add_question(self, section_id: str, question: Question, index: Optional[int] = None) -> Question:
        """
        Insert a question into a section.

        Raises:
            KeyError: If section_id is unknown
        """
        section = self.find_section(section_id)
        if section is None:
            raise KeyError(f"Unknown section: {section_id}")
        if index is None:
            section.questions.append(question)
        else:
            section.questions.insert(index, question)
        self._renumber()
        return question

    def remove_question(self, question_id: str) -> None:
        location = self.locate_question(question_id)
        if location is None:
            return
        section, index = location
        del section.questions[index]
        self._renumber()

    def move_question(self, question_id: str, target_section_id: str, target_index: int) -> None:
        """
        Move a question to a position in a (possibly different) section.

        Raises:
            KeyError: If the question or target section is unknown
        """
        location = self.locate_question(question_id)
        target = self.find_section(target_section_id)
        if location is None:
            raise KeyError(f"Unknown question: {question_id}")
        if target is None:
            raise KeyError(f"Unknown section: {target_section_id}")
        section, index = location
        question = section.questions.pop(index)
        target_index = max(0, min(target_index, len(target.questions)))
        target.questions.insert(target_index, question)
        self._renumber()

    def _renumber(self) -> None:
        from quiz_toolkit.core.numbering import renumber_questions
        renumber_questions(self)
