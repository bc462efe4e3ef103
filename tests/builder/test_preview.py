"""
Tests for the full on-screen preview.
"""

from quiz_toolkit.builder import build_preview
from quiz_toolkit.builder.layout import normalize_document, paginate, resolve_preset
from quiz_toolkit.builder.preview import PreviewQuestion, PreviewSectionHeader
from quiz_toolkit.core.models import AnswerKeyMode, NumberingStyle, QuestionKind


def _questions(preview):
    return [block for page in preview.pages for block in page.blocks if isinstance(block, PreviewQuestion)]


class TestBuildPreview:

    def test_preview_when_built_then_same_split_as_pagination(self, section_factory, document_factory):
        document = document_factory([section_factory(count=25), section_factory(count=12)],
                                    selected_preset_id="compact")

        preview = build_preview(document)

        plans = paginate(normalize_document(document).sections, resolve_preset("compact"))
        assert preview.page_count == len(plans)
        for page, plan in zip(preview.pages, plans):
            assert [b.question_id for b in page.blocks if isinstance(b, PreviewQuestion)] == \
                [q.id for q in plan.questions]

    def test_preview_when_preset_override_then_document_setting_untouched(self, section_factory,
                                                                          document_factory):
        document = document_factory([section_factory(count=40)])

        compact = build_preview(document, preset_id="compact")
        readable = build_preview(document, preset_id="readable")

        assert compact.style.id == "compact"
        assert readable.page_count > compact.page_count
        assert document.settings.selected_preset_id == "standard"

    def test_preview_when_default_then_answers_hidden(self, sample_document):
        preview = build_preview(sample_document)

        questions = _questions(preview)
        assert all(q.answer is None for q in questions)
        assert all(q.explanation == "" for q in questions)
        assert questions[0].choices == ("A) London", "B) Berlin", "C) Paris", "D) Madrid")
        assert questions[3].choices == ("True", "False")
        assert questions[4].choices == ()

    def test_preview_when_reveal_answers_then_answers_and_explanations(self, sample_document):
        preview = build_preview(sample_document, reveal_answers=True)

        questions = _questions(preview)
        assert [q.answer for q in questions] == ["A", "A", "A", "True", "Red"]
        assert questions[4].explanation == "Red, yellow and blue are primaries."
        assert preview.reveal_answers

    def test_preview_when_per_section_numbering_then_labels_restart(self, sample_document):
        sample_document.settings.numbering_style = NumberingStyle.PER_SECTION

        labels = [q.label for q in _questions(build_preview(sample_document))]

        assert labels == ["1. ", "2. ", "3. ", "1. ", "2. "]

    def test_preview_when_numbers_hidden_then_empty_labels(self, sample_document):
        sample_document.settings.show_question_numbers = False

        assert all(q.label == "" for q in _questions(build_preview(sample_document)))

    def test_preview_when_section_titles_hidden_then_no_header_blocks(self, sample_document):
        sample_document.settings.show_section_titles = False

        preview = build_preview(sample_document)

        assert not any(isinstance(b, PreviewSectionHeader) for page in preview.pages for b in page.blocks)
        assert preview.page_count == 2

    def test_preview_when_key_hidden_then_no_answer_key(self, sample_document):
        sample_document.settings.answer_key_mode = AnswerKeyMode.HIDDEN

        assert build_preview(sample_document).answer_key == ()

    def test_preview_when_key_appended_then_chunks(self, sample_document):
        preview = build_preview(sample_document)

        assert len(preview.answer_key) == 1
        assert len(preview.answer_key[0]) == 5

    def test_preview_when_built_then_document_not_mutated(self, sample_document):
        sample_document.sections[0].questions[0].text = "  Spaced  "

        build_preview(sample_document)

        assert sample_document.sections[0].questions[0].text == "  Spaced  "

    def test_preview_when_empty_document_then_no_pages(self, document_factory):
        preview = build_preview(document_factory([]))

        assert preview.page_count == 0
        assert preview.answer_key == ()


class TestPreviewText:

    def test_to_text_when_revealed_then_outline_with_answers(self, sample_document):
        text = build_preview(sample_document, reveal_answers=True).to_text()

        lines = text.splitlines()
        assert lines[0] == "Sample Quiz [standard]"
        assert "  (cover page)" in lines
        assert any(line.startswith("Page 1 (~") for line in lines)
        assert "  == Part A ==" in lines
        assert "  4. The sky is blue.  -> True" in lines
        assert lines[-1] == "Answer key: 1 page(s)"

    def test_to_text_when_untitled_then_placeholder(self, question_factory, section_factory, document_factory):
        document = document_factory([section_factory(questions=[
            question_factory("Describe.", kind=QuestionKind.SHORT_ANSWER),
        ])], title="")

        assert build_preview(document).to_text().splitlines()[0] == "Untitled Quiz [standard]"
