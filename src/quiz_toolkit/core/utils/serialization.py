"""
Serialization Utilities

Provides to/from JSON-compatible dict conversion for documents.

The snapshot format uses the camelCase keys of the browser editor so that
snapshots can be exchanged with it:

    {"title", "content", "sections": [...], "settings": {...}}

Legacy snapshots are migrated on load:
- No ``selectedPresetId``: preset inferred from the old ``fontSize`` enum
  (small -> compact, large -> readable, anything else -> standard)
- No ``sections``: empty list
- Old ``answerDisplayMode`` (hidden, end_of_pdf, separate_pdf) or, before
  that, ``showAnswers`` / ``includeAnswerKey`` flags: mapped onto
  ``answerKeyMode``

Malformed optional fields never fail the load; they fall back to defaults.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..models.document import (
    AnswerKeyMode,
    DEFAULT_PRESET_ID,
    Document,
    DocumentSettings,
    NumberingStyle,
)
from ..models.questions import Question, QuestionKind
from ..models.sections import Section

logger = logging.getLogger(__name__)

LEGACY_FONT_SIZE_PRESETS = {
    "small": "compact",
    "medium": DEFAULT_PRESET_ID,
    "large": "readable",
}

LEGACY_ANSWER_DISPLAY_MODES = {
    "hidden": AnswerKeyMode.HIDDEN,
    "end_of_pdf": AnswerKeyMode.APPENDED,
    "separate_pdf": AnswerKeyMode.SEPARATE,
}


class SnapshotError(Exception):
    """Snapshot payload cannot be turned into a document."""
    pass


# ─────────────────────────────────────────────────────────────────────────────
# Document -> dict
# ─────────────────────────────────────────────────────────────────────────────

def document_to_dict(document: Document) -> Dict[str, Any]:
    """
    Serialize a Document to a JSON-compatible dictionary.

    Args:
        document: Document to serialize

    Returns:
        Dictionary in snapshot format
    """
    return {
        "title": document.title,
        "content": document.body_content,
        "sections": [_section_to_dict(s) for s in document.sections],
        "settings": _settings_to_dict(document.settings),
    }


def _section_to_dict(section: Section) -> Dict[str, Any]:
    return {
        "id": section.id,
        "title": section.title,
        "description": section.description,
        "questions": [_question_to_dict(q) for q in section.questions],
    }


def _question_to_dict(question: Question) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "id": question.id,
        "type": question.kind.value,
        "number": question.number,
        "text": question.text,
        "options": list(question.options),
        "correctAnswer": question.correct_option_index,
        "expectedAnswer": question.expected_answer,
        "explanation": question.explanation,
    }
    if question.correct_boolean is not None:
        d["correctBoolean"] = question.correct_boolean
    return d


def _settings_to_dict(settings: DocumentSettings) -> Dict[str, Any]:
    return {
        "selectedPresetId": settings.selected_preset_id,
        "coverPage": settings.cover_page_enabled,
        "showSectionTitles": settings.show_section_titles,
        "showQuestionNumbers": settings.show_question_numbers,
        "numberingStyle": settings.numbering_style.value,
        "answerKeyMode": settings.answer_key_mode.value,
        "description": settings.description,
    }


# ─────────────────────────────────────────────────────────────────────────────
# dict -> Document
# ─────────────────────────────────────────────────────────────────────────────

def document_from_dict(data: Any) -> Document:
    """
    Deserialize a Document from a snapshot dictionary, migrating legacy shapes.

    Args:
        data: Parsed JSON payload

    Returns:
        Document instance

    Raises:
        SnapshotError: If data is not a JSON object
    """
    if not isinstance(data, dict):
        raise SnapshotError(f"Snapshot must be an object, got {type(data).__name__}")

    sections_raw = data.get("sections")
    if not isinstance(sections_raw, list):
        if isinstance(data.get("questions"), list) and data["questions"]:
            logger.warning(
                f"Snapshot has {len(data['questions'])} legacy un-sectioned questions; "
                "they are not migrated"
            )
        sections_raw = []

    return Document(
        title=_text(data.get("title")),
        body_content=_text(data.get("content")),
        sections=[_section_from_dict(s) for s in sections_raw if isinstance(s, dict)],
        settings=_settings_from_dict(data.get("settings")),
    )


def _section_from_dict(data: Dict[str, Any]) -> Section:
    questions_raw = data.get("questions")
    if not isinstance(questions_raw, list):
        questions_raw = []
    return Section(
        id=_text(data.get("id")),
        title=_text(data.get("title")),
        description=_text(data.get("description")),
        questions=[_question_from_dict(q) for q in questions_raw if isinstance(q, dict)],
    )


def _question_from_dict(data: Dict[str, Any]) -> Question:
    options = data.get("options")
    correct_boolean = data.get("correctBoolean")
    return Question(
        id=_text(data.get("id")),
        kind=QuestionKind.parse(data.get("type")),
        number=_int(data.get("number"), 0),
        text=_text(data.get("text")),
        options=[_text(o) for o in options] if isinstance(options, list) else [],
        correct_option_index=_int(data.get("correctAnswer"), 0),
        correct_boolean=correct_boolean if isinstance(correct_boolean, bool) else None,
        expected_answer=_text(data.get("expectedAnswer")),
        explanation=_text(data.get("explanation")),
    )


def _settings_from_dict(raw: Any) -> DocumentSettings:
    if not isinstance(raw, dict):
        raw = {}
    defaults = DocumentSettings()

    preset_id = raw.get("selectedPresetId")
    if not preset_id:
        preset_id = LEGACY_FONT_SIZE_PRESETS.get(str(raw.get("fontSize")), DEFAULT_PRESET_ID)
        logger.debug(f"Migrated legacy settings to preset {preset_id!r}")

    return DocumentSettings(
        selected_preset_id=str(preset_id),
        cover_page_enabled=_bool(raw.get("coverPage"), defaults.cover_page_enabled),
        show_section_titles=_bool(raw.get("showSectionTitles"), defaults.show_section_titles),
        show_question_numbers=_bool(raw.get("showQuestionNumbers"), defaults.show_question_numbers),
        numbering_style=_numbering_style(raw.get("numberingStyle")),
        answer_key_mode=_answer_key_mode(raw),
        description=_text(raw.get("description")),
    )


def _answer_key_mode(raw: Dict[str, Any]) -> AnswerKeyMode:
    try:
        return AnswerKeyMode(raw.get("answerKeyMode"))
    except ValueError:
        pass

    legacy_mode = LEGACY_ANSWER_DISPLAY_MODES.get(str(raw.get("answerDisplayMode")))
    if legacy_mode is not None:
        return legacy_mode

    # Legacy flags: the key was shown only when both were on
    show_answers = _bool(raw.get("showAnswers"), True)
    include_key = _bool(raw.get("includeAnswerKey"), True)
    if not (show_answers and include_key):
        return AnswerKeyMode.HIDDEN
    return AnswerKeyMode.APPENDED


def _numbering_style(value: Any) -> NumberingStyle:
    try:
        return NumberingStyle(value)
    except ValueError:
        return NumberingStyle.CONTINUOUS


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        # JSON Infinity parses to float("inf")
        return default


def _bool(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default
