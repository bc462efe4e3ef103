import pytest
import sys
import uuid
from pathlib import Path

# Add src to sys.path so we can import quiz_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from quiz_toolkit.core.models import (  # noqa: E402
    Document,
    DocumentSettings,
    Question,
    QuestionKind,
    Section,
)
from quiz_toolkit.core.numbering import renumber_questions  # noqa: E402


# Common test fixtures
@pytest.fixture
def question_factory():
    """Factory for questions; multiple-choice with 4 options by default."""
    def _create(
        text: str = "What is the capital of France?",
        kind: QuestionKind = QuestionKind.MULTIPLE_CHOICE,
        options=None,
        **kwargs,
    ) -> Question:
        if options is None:
            options = ["London", "Berlin", "Paris", "Madrid"] if kind == QuestionKind.MULTIPLE_CHOICE else []
        return Question(
            id=kwargs.pop("id", str(uuid.uuid4())),
            kind=kind,
            text=text,
            options=list(options),
            **kwargs,
        )
    return _create


@pytest.fixture
def section_factory(question_factory):
    """Factory for a section holding `count` default questions."""
    def _create(title: str = "Part A", count: int = 3, questions=None, **kwargs) -> Section:
        if questions is None:
            questions = [question_factory(text=f"Question {i + 1} text?") for i in range(count)]
        return Section(id=kwargs.pop("id", str(uuid.uuid4())), title=title, questions=list(questions), **kwargs)
    return _create


@pytest.fixture
def document_factory():
    """Factory for a renumbered document from sections."""
    def _create(sections=None, title: str = "Sample Quiz", **settings) -> Document:
        document = Document(
            title=title,
            body_content="",
            sections=list(sections or []),
            settings=DocumentSettings(**settings),
        )
        return renumber_questions(document)
    return _create


@pytest.fixture
def sample_document(section_factory, document_factory, question_factory):
    """Two sections mixing all three question kinds."""
    part_a = section_factory(title="Part A", count=3)
    part_b = section_factory(
        title="Part B",
        description="True or false, then short answers.",
        questions=[
            question_factory("The sky is blue.", kind=QuestionKind.TRUE_FALSE, correct_boolean=True),
            question_factory("Name a primary colour.", kind=QuestionKind.SHORT_ANSWER,
                             expected_answer="Red", explanation="Red, yellow and blue are primaries."),
        ],
    )
    return document_factory([part_a, part_b])
