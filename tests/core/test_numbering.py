"""
Unit tests for question numbering.
"""

from quiz_toolkit.core.models import NumberingStyle
from quiz_toolkit.core.numbering import display_numbers, renumber_questions


class TestRenumberQuestions:

    def test_renumber_when_numbers_stale_then_contiguous_from_one(self, sample_document):
        for question in sample_document.iter_questions():
            question.number = 42

        renumber_questions(sample_document)

        assert [q.number for q in sample_document.iter_questions()] == [1, 2, 3, 4, 5]

    def test_renumber_when_empty_section_between_then_skipped(self, section_factory, document_factory):
        document = document_factory([
            section_factory(count=2),
            section_factory(count=0),
            section_factory(count=2),
        ])

        assert [q.number for q in document.iter_questions()] == [1, 2, 3, 4]

    def test_renumber_when_called_then_returns_same_document(self, sample_document):
        assert renumber_questions(sample_document) is sample_document


class TestDisplayNumbers:

    def test_display_when_continuous_then_stored_numbers(self, sample_document):
        numbers = display_numbers(sample_document.sections)

        assert [numbers[q.id] for q in sample_document.iter_questions()] == [1, 2, 3, 4, 5]

    def test_display_when_per_section_then_restarts(self, sample_document):
        numbers = display_numbers(sample_document.sections, NumberingStyle.PER_SECTION)

        assert [numbers[q.id] for q in sample_document.iter_questions()] == [1, 2, 3, 1, 2]

    def test_display_when_per_section_then_stored_numbers_untouched(self, sample_document):
        display_numbers(sample_document.sections, NumberingStyle.PER_SECTION)

        assert [q.number for q in sample_document.iter_questions()] == [1, 2, 3, 4, 5]
