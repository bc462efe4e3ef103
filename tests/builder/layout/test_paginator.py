"""
Unit tests for the section-aware paginator.

Covers the structural guarantees (every header and question exactly once,
in order, never split), section isolation, the page budget, oversize
questions, and the normalize -> paginate round-trip.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from itertools import groupby

import pytest

from quiz_toolkit.builder.layout import (
    PageGeometry,
    PageSize,
    QuestionItem,
    RenderItemKind,
    SectionHeaderItem,
    normalize_document,
    paginate,
    resolve_preset,
)


def _flatten(pages):
    return [item for page in pages for item in page.items]


def _constant(height):
    def estimator(question, style):
        return height
    return estimator


@pytest.fixture
def standard():
    return resolve_preset("standard")


class TestScenarios:

    @pytest.mark.parametrize("preset_id", ["standard", "compact", "readable"])
    def test_paginate_when_no_sections_then_no_pages(self, preset_id):
        assert paginate([], resolve_preset(preset_id)) == ()

    def test_paginate_when_three_short_questions_then_one_page_header_first(self, standard, section_factory):
        section = section_factory(title="Part A", count=3)

        pages = paginate([section], standard)

        assert len(pages) == 1
        kinds = [item.kind for item in pages[0].items]
        assert kinds == [RenderItemKind.SECTION_HEADER] + [RenderItemKind.QUESTION] * 3
        assert [q.id for q in pages[0].questions] == [q.id for q in section.questions]

    def test_paginate_when_forty_questions_compact_then_many_pages_in_order(self, question_factory, section_factory):
        questions = [
            question_factory(
                f"Question {i}: which of the following statements about the topic is correct?",
                options=["The first option", "The second option", "The third option", "None of these"],
            )
            for i in range(40)
        ]
        section = section_factory(questions=questions)

        pages = paginate([section], resolve_preset("compact"))

        assert len(pages) > 1
        placed = [q.id for page in pages for q in page.questions]
        assert placed == [q.id for q in questions]
        assert len(set(placed)) == 40

    def test_paginate_when_two_single_question_sections_then_never_share_page(self, standard, section_factory):
        first = section_factory(title="Part A", count=1)
        second = section_factory(title="Part B", count=1)

        pages = paginate([first, second], standard)

        assert len(pages) == 2
        for page in pages:
            assert len(page.section_ids) == 1
        assert pages[0].section_ids == (first.id,)
        assert pages[1].section_ids == (second.id,)


class TestStructure:

    @pytest.mark.parametrize("preset_id", ["standard", "compact", "readable"])
    @pytest.mark.parametrize("counts", [[1], [0, 2], [12, 0, 5], [30, 30], [3, 1, 4, 1, 5]])
    def test_paginate_when_any_input_then_each_item_once_in_order(self, preset_id, counts, section_factory):
        sections = [section_factory(title=f"S{i}", count=n) for i, n in enumerate(counts)]

        items = _flatten(paginate(sections, resolve_preset(preset_id)))

        headers = [item.section_id for item in items if isinstance(item, SectionHeaderItem)]
        questions = [(item.section_id, item.question.id) for item in items if isinstance(item, QuestionItem)]
        assert headers == [s.id for s in sections]
        assert questions == [(s.id, q.id) for s in sections for q in s.questions]

    def test_paginate_when_questions_placed_then_grouped_after_own_header(self, section_factory, standard):
        sections = [section_factory(title=f"S{i}", count=8) for i in range(3)]

        items = _flatten(paginate(sections, standard))

        current_section = None
        for item in items:
            if isinstance(item, SectionHeaderItem):
                current_section = item.section_id
            else:
                assert item.section_id == current_section

    def test_paginate_when_empty_section_then_header_still_emitted(self, section_factory, standard):
        empty = section_factory(title="Empty", count=0)

        pages = paginate([empty], standard)

        assert len(pages) == 1
        assert isinstance(pages[0].items[0], SectionHeaderItem)
        assert pages[0].questions == ()

    def test_paginate_when_called_then_pages_indexed_from_zero(self, section_factory, standard):
        pages = paginate([section_factory(count=40)], standard)

        assert [page.index for page in pages] == list(range(len(pages)))
        assert all(not page.is_empty for page in pages)

    def test_paginate_when_called_then_input_numbers_untouched(self, sample_document, standard):
        before = [(q.id, q.number) for q in sample_document.iter_questions()]

        paginate(sample_document.sections, standard)

        assert [(q.id, q.number) for q in sample_document.iter_questions()] == before


class TestSectionIsolation:

    @pytest.mark.parametrize("counts", [[1, 1], [5, 5, 5], [20, 1, 20], [0, 3, 0, 3]])
    def test_paginate_when_multiple_sections_then_no_page_mixes_sections(self, counts, section_factory, standard):
        sections = [section_factory(title=f"S{i}", count=n) for i, n in enumerate(counts)]

        pages = paginate(sections, standard)

        assert all(len(page.section_ids) == 1 for page in pages)

    def test_paginate_when_next_section_starts_then_header_opens_new_page(self, section_factory, standard):
        sections = [section_factory(title=f"S{i}", count=2) for i in range(3)]

        pages = paginate(sections, standard)

        assert len(pages) == 3
        assert all(isinstance(page.items[0], SectionHeaderItem) for page in pages)


class TestBudget:

    def test_paginate_when_questions_fit_budget_then_single_page(self, section_factory):
        pages = paginate([section_factory(count=4)], resolve_preset("readable"))

        assert len(pages) == 1

    def test_paginate_when_constant_estimator_then_fills_to_budget(self, section_factory, standard):
        # Budget 841.89 - 80 - 30 = 731.89. First page: 40 reserve + 40 header + 6 x 100
        pages = paginate([section_factory(count=14)], standard, estimator=_constant(100))

        assert [len(page.questions) for page in pages] == [6, 6, 2]
        assert pages[0].estimated_height == pytest.approx(680)
        assert pages[1].estimated_height == pytest.approx(640)

    def test_paginate_when_page_filled_then_estimate_within_budget(self, section_factory, standard):
        geometry = PageGeometry()
        budget = geometry.usable_height(standard)

        pages = paginate([section_factory(count=60)], standard, geometry=geometry)

        assert all(page.estimated_height <= budget for page in pages)

    def test_paginate_when_letter_geometry_then_smaller_budget(self, section_factory, standard):
        section = section_factory(count=10)

        a4 = paginate([section], standard, estimator=_constant(125))
        letter = paginate([section], standard, geometry=PageGeometry.for_page_size(PageSize.LETTER),
                          estimator=_constant(125))

        assert len(a4[0].questions) == 5
        assert len(letter[0].questions) == 4

    def test_paginate_when_oversize_question_then_placed_whole_and_logged(self, section_factory, standard, caplog):
        section = section_factory(count=2)

        with caplog.at_level(logging.WARNING, logger="quiz_toolkit.builder.layout.paginator"):
            pages = paginate([section], standard, estimator=_constant(5000))

        question_pages = [page for page in pages if page.questions]
        assert [len(page.questions) for page in question_pages] == [1, 1]
        assert [q.id for page in question_pages for q in page.questions] == [q.id for q in section.questions]
        assert any("overflows" in record.getMessage() for record in caplog.records)

    def test_paginate_when_header_exceeds_budget_then_no_blank_page_and_logged(self, section_factory, standard, caplog):
        geometry = PageGeometry(section_header_height=2000)
        sections = [section_factory(title="Part A", count=1), section_factory(title="Part B", count=1)]

        with caplog.at_level(logging.WARNING, logger="quiz_toolkit.builder.layout.paginator"):
            pages = paginate(sections, standard, geometry=geometry, estimator=_constant(50))

        assert all(page.items for page in pages)
        assert [type(item) for item in pages[0].items] == [SectionHeaderItem]
        assert len(_flatten(pages)) == 4
        messages = [record.getMessage() for record in caplog.records]
        assert any("Section header 'Part A' overflows" in m for m in messages)
        assert any("Section header 'Part B' overflows" in m for m in messages)


class TestPurity:

    def test_paginate_when_repeated_then_identical(self, sample_document, standard):
        assert paginate(sample_document.sections, standard) == paginate(sample_document.sections, standard)

    def test_paginate_when_concurrent_callers_then_each_gets_same_result(self, section_factory, standard):
        sections = [section_factory(title=f"S{i}", count=15) for i in range(4)]
        expected = paginate(sections, standard)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: paginate(sections, standard), range(32)))

        assert all(result == expected for result in results)


class TestRoundTrip:

    def test_normalize_then_paginate_when_regrouped_then_matches_original(self, sample_document, section_factory):
        sample_document.sections.append(section_factory(title="Part C", count=25))
        from quiz_toolkit.core.numbering import renumber_questions
        renumber_questions(sample_document)

        normalized = normalize_document(sample_document)
        items = _flatten(paginate(normalized.sections, resolve_preset("compact")))
        question_items = [item for item in items if isinstance(item, QuestionItem)]

        regrouped = [
            (section_id, [(item.question.id, item.question.number) for item in group])
            for section_id, group in groupby(question_items, key=lambda item: item.section_id)
        ]
        expected = [
            (section.id, [(q.id, q.number) for q in section.questions])
            for section in sample_document.sections
            if section.questions
        ]
        assert regrouped == expected
