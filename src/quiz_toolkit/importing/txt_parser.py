"""
Module: importing.txt_parser

Purpose:
    Parse plain-text quizzes into a document section.

    Recognised lines:
        1. Question text        (or "1) Question text")
        A) Option text          (or "A. Option text", A-E, any case)
        Answer: B               (also Correct, Cevap, Yanıt, Doğru Cevap)

    Lines before the first question become body paragraphs. A question
    line that is followed by plain lines before any option is treated
    as a multi-line question.

Key Functions:
    - parse_txt(): Text -> ImportResult
    - read_txt_file(): File -> ImportResult
    - merge_import(): Append an ImportResult to a document

Key Classes:
    - ImportResult: Parsed body, section and warnings
    - TxtImportError: File cannot be read

Used By:
    - cli: import-txt command
"""

from __future__ import annotations

import html
import logging
import re
import uuid
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional, Tuple

from quiz_toolkit.core.models import MIN_OPTIONS, Document, Question, QuestionKind, Section
from quiz_toolkit.core.numbering import renumber_questions

logger = logging.getLogger(__name__)

QUESTION_RE = re.compile(r"^(\d+)[.)]\s+(.+)")
OPTION_RE = re.compile(r"^([A-E])[.)]\s+(.+)", re.IGNORECASE)
ANSWER_RE = re.compile(r"^(Answer|Correct|Cevap|Yanıt|Doğru Cevap)[\s:]*([A-E])", re.IGNORECASE)

BLANK_LINE_HTML = "<p><br/></p>"
DEFAULT_SECTION_TITLE = "Imported Questions"


class TxtImportError(Exception):
    """Import file cannot be read."""
    pass


@dataclass(frozen=True)
class ImportResult:
    """
    Result of parsing a text quiz.

    Attributes:
        body_content: Paragraph markup from lines before the first question
        section: New section holding the parsed questions
        warnings: One line per dropped block or suspicious answer
    """
    body_content: str
    section: Section
    warnings: Tuple[str, ...] = ()

    @property
    def question_count(self) -> int:
        return len(self.section.questions)


@dataclass
class _Block:
    line_no: int
    source_number: int
    text: str
    options: List[str] = field(default_factory=list)
    answer_index: Optional[int] = None


def parse_txt(text: str, *, section_title: str = DEFAULT_SECTION_TITLE) -> ImportResult:
    """
    Parse plain text into an ImportResult.

    Blocks without text or with fewer than two options are dropped and
    reported. A block without an answer line defaults to option A.

    Args:
        text: File contents
        section_title: Title of the new section

    Returns:
        ImportResult; never raises on malformed content

    Example:
        >>> result = parse_txt("1. Capital of France?\\nA) Paris\\nB) Rome\\nAnswer: A")
        >>> result.question_count
        1
    """
    body: List[str] = []
    blocks: List[_Block] = []
    current: Optional[_Block] = None

    for line_no, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            if current is None:
                body.append(BLANK_LINE_HTML)
            continue

        question_match = QUESTION_RE.match(line)
        if question_match:
            current = _Block(line_no=line_no, source_number=int(question_match.group(1)),
                             text=question_match.group(2))
            blocks.append(current)
            continue

        if current is None:
            body.append(f"<p>{html.escape(line, quote=False)}</p>")
            continue

        option_match = OPTION_RE.match(line)
        if option_match:
            current.options.append(option_match.group(2).strip())
            continue

        answer_match = ANSWER_RE.match(line)
        if answer_match:
            current.answer_index = ord(answer_match.group(2).upper()) - ord("A")
            continue

        if not current.options:
            current.text += " " + line
        else:
            logger.debug(f"Line {line_no} ignored: {line!r}")

    questions: List[Question] = []
    warnings: List[str] = []
    for block in blocks:
        question = _finalize(block, warnings)
        if question is not None:
            questions.append(question)

    for warning in warnings:
        logger.warning(warning)

    # Spacer-only body counts as no body
    body_content = "".join(body) if any(part != BLANK_LINE_HTML for part in body) else ""

    section = Section(id=str(uuid.uuid4()), title=section_title, questions=questions)
    _renumber_section(section)
    logger.info(f"Parsed {len(questions)} questions ({len(blocks) - len(questions)} dropped)")
    return ImportResult(body_content=body_content, section=section, warnings=tuple(warnings))


def _finalize(block: _Block, warnings: List[str]) -> Optional[Question]:
    where = f"Question {block.source_number} (line {block.line_no})"
    if not block.text.strip():
        warnings.append(f"{where} skipped: no question text")
        return None
    if len(block.options) < MIN_OPTIONS:
        warnings.append(f"{where} skipped: {len(block.options)} option(s), need at least {MIN_OPTIONS}")
        return None

    answer_index = block.answer_index if block.answer_index is not None else 0
    if answer_index >= len(block.options):
        warnings.append(f"{where}: answer {chr(ord('A') + answer_index)} has no matching option")

    return Question(
        id=str(uuid.uuid4()),
        kind=QuestionKind.MULTIPLE_CHOICE,
        number=block.source_number,
        text=block.text.strip(),
        options=block.options,
        correct_option_index=answer_index,
    )


def _renumber_section(section: Section) -> None:
    # Numbers are relative until the section joins a document
    for number, question in enumerate(section.questions, start=1):
        question.number = number


def read_txt_file(path: Path) -> ImportResult:
    """
    Read and parse a text file; the section is titled after the file.

    Raises:
        TxtImportError: If the file cannot be read or decoded
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise TxtImportError(f"Failed to read {path}: {e}") from e
    return parse_txt(text, section_title=path.stem or DEFAULT_SECTION_TITLE)


def merge_import(document: Document, result: ImportResult, *, fallback_title: str = "") -> Document:
    """
    Append an imported section to a document.

    The document keeps its title (taking fallback_title only when it has
    none) and its body unless the import brought body text. Numbering is
    recomputed across the whole document.

    Returns:
        The same document, mutated
    """
    if not document.title:
        document.title = fallback_title
    if result.body_content:
        document.body_content = result.body_content

    section = Section(
        id=str(uuid.uuid4()),
        title=result.section.title,
        description=result.section.description,
        questions=[
            replace(question, id=str(uuid.uuid4()), options=list(question.options))
            for question in result.section.questions
        ],
    )
    document.sections.append(section)
    renumber_questions(document)
    logger.info(f"Merged {result.question_count} imported questions as section {section.title!r}")
    return document
