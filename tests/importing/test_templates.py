"""
Tests for starter document templates.
"""

import pytest

from quiz_toolkit.builder.layout import resolve_preset
from quiz_toolkit.core.models import AnswerKeyMode
from quiz_toolkit.importing import create_from_template, list_templates


class TestTemplates:

    def test_list_when_called_then_three_in_order(self):
        assert [t.id for t in list_templates()] == ["weekly-practice", "exam-style", "short-review"]

    @pytest.mark.parametrize("template", list_templates(), ids=lambda t: t.id)
    def test_create_when_known_then_matches_listing(self, template):
        document = create_from_template(template.id)

        assert document.question_count == template.question_count
        assert [q.number for q in document.iter_questions()] == list(range(1, template.question_count + 1))
        assert all(not q.validation_issues() for q in document.iter_questions())
        assert resolve_preset(document.settings.selected_preset_id).id == document.settings.selected_preset_id

    def test_create_when_called_twice_then_fresh_ids(self):
        first = create_from_template("weekly-practice")
        second = create_from_template("weekly-practice")

        assert first.sections[0].id != second.sections[0].id
        assert {q.id for q in first.iter_questions()}.isdisjoint(q.id for q in second.iter_questions())

    def test_create_when_short_review_then_minimal_settings(self):
        settings = create_from_template("short-review").settings

        assert settings.selected_preset_id == "compact"
        assert not settings.cover_page_enabled
        assert not settings.show_section_titles
        assert settings.answer_key_mode == AnswerKeyMode.HIDDEN

    def test_create_when_exam_style_then_cover_and_key(self):
        document = create_from_template("exam-style")

        assert document.title == "Mid-Term Examination"
        assert document.settings.cover_page_enabled
        assert document.settings.answer_key_mode == AnswerKeyMode.APPENDED
        assert document.has_body_content

    def test_create_when_unknown_then_key_error(self):
        with pytest.raises(KeyError):
            create_from_template("no-such-template")
