"""
Tests for the staged export pipeline.
"""

from datetime import date
from pathlib import Path

import pytest

from quiz_toolkit.builder import (
    ExportConfig,
    ExportError,
    ExportOrchestrator,
    ExportStage,
    export_document,
    export_filename,
)
from quiz_toolkit.builder.output import render_to_pdf
from quiz_toolkit.core.models import AnswerKeyMode

PIPELINE = [
    ExportStage.PREPARING,
    ExportStage.LAYOUT,
    ExportStage.RENDERING,
    ExportStage.FINALIZING,
    ExportStage.DONE,
]


@pytest.fixture
def config(tmp_path):
    return ExportConfig(output_dir=tmp_path / "out", filename="quiz.pdf")


@pytest.fixture
def stage_recorder():
    """Callback collecting (stage, message) pairs."""
    class Recorder:
        def __init__(self):
            self.events = []

        def __call__(self, stage, message):
            self.events.append((stage, message))

        @property
        def stages(self):
            return [stage for stage, _ in self.events]

    return Recorder()


class TestExportConfig:

    def test_config_when_defaults_then_valid(self, tmp_path):
        config = ExportConfig(output_dir=tmp_path)

        assert config.filename is None
        assert config.answer_key_chunk_size == 30
        assert config.show_footer is True

    @pytest.mark.parametrize("kwargs", [
        {"answer_key_chunk_size": 0},
        {"stage_delay": -0.1},
        {"filename": "  "},
        {"filename": "sub/quiz.pdf"},
        {"filename": "sub\\quiz.pdf"},
    ])
    def test_config_when_invalid_then_raises(self, tmp_path, kwargs):
        with pytest.raises(ValueError):
            ExportConfig(output_dir=tmp_path, **kwargs)


class TestExportFilename:

    def test_filename_when_title_then_title_and_iso_date(self):
        assert export_filename("Week 3", date(2024, 5, 1)) == "Week 3-2024-05-01.pdf"

    @pytest.mark.parametrize("title", ["", "   "])
    def test_filename_when_no_title_then_quiz(self, title):
        assert export_filename(title, date(2024, 5, 1)) == "quiz-2024-05-01.pdf"

    def test_filename_when_unsafe_characters_then_replaced(self):
        assert export_filename('Unit 1/2: "Forces"?', date(2024, 5, 1)) == "Unit 1-2- -Forces--2024-05-01.pdf"


class TestExportOrchestrator:

    def test_run_when_successful_then_stages_in_order(self, sample_document, config, stage_recorder):
        orchestrator = ExportOrchestrator(config, on_stage=stage_recorder)

        result = orchestrator.run(sample_document)

        assert stage_recorder.stages == PIPELINE
        assert orchestrator.stage == ExportStage.DONE
        assert result.pdf_path == config.output_dir / "quiz.pdf"
        assert result.pdf_path.exists()
        assert result.plan_count == 2
        assert result.question_count == 5
        assert result.preset_id == "standard"
        assert result.answer_key_pdf is None
        # cover + 2 question pages + 1 appended answer-key page
        assert result.page_count == 4

    def test_run_when_no_filename_then_title_and_date(self, sample_document, tmp_path):
        result = ExportOrchestrator(ExportConfig(output_dir=tmp_path)).run(sample_document)

        assert result.pdf_path.name == f"Sample Quiz-{date.today().isoformat()}.pdf"

    def test_run_when_hidden_key_then_no_answer_pages(self, sample_document, config):
        sample_document.settings.answer_key_mode = AnswerKeyMode.HIDDEN

        result = ExportOrchestrator(config).run(sample_document)

        assert result.page_count == 3
        assert result.answer_key_pdf is None

    def test_run_when_separate_key_then_second_pdf(self, sample_document, config):
        sample_document.settings.answer_key_mode = AnswerKeyMode.SEPARATE

        result = ExportOrchestrator(config).run(sample_document)

        assert result.page_count == 3
        assert result.answer_key_pdf == config.output_dir / "quiz-answer-key.pdf"
        assert result.answer_key_pdf.exists()

    def test_run_when_unknown_preset_then_default_used(self, sample_document, config):
        sample_document.settings.selected_preset_id = "retired-preset"

        assert ExportOrchestrator(config).run(sample_document).preset_id == "standard"

    def test_run_when_invalid_questions_then_warnings_not_failure(self, sample_document, config):
        sample_document.sections[0].questions[0].options = ["Only one"]

        result = ExportOrchestrator(config).run(sample_document)

        assert any(warning.startswith("Question 1:") for warning in result.warnings)

    def test_run_when_exported_then_document_not_mutated(self, sample_document, config):
        sample_document.title = "  Padded  "
        before = [(q.id, q.number, q.text) for q in sample_document.iter_questions()]

        ExportOrchestrator(config).run(sample_document)

        assert sample_document.title == "  Padded  "
        assert [(q.id, q.number, q.text) for q in sample_document.iter_questions()] == before

    def test_run_when_no_pages_for_questions_then_layout_error(self, sample_document, config, monkeypatch,
                                                               stage_recorder):
        monkeypatch.setattr("quiz_toolkit.builder.controller.paginate", lambda *args, **kwargs: ())
        orchestrator = ExportOrchestrator(config, on_stage=stage_recorder)

        with pytest.raises(ExportError) as excinfo:
            orchestrator.run(sample_document)

        assert excinfo.value.stage == ExportStage.LAYOUT
        assert excinfo.value.message == "Pagination failed to generate any pages."
        assert orchestrator.stage == ExportStage.ERROR
        assert orchestrator.error == excinfo.value.message
        assert stage_recorder.stages[-1] == ExportStage.ERROR

    def test_run_when_empty_document_then_still_exports(self, document_factory, config):
        result = ExportOrchestrator(config).run(document_factory([]))

        assert result.plan_count == 0
        assert result.page_count >= 1

    def test_retry_when_renderer_failed_once_then_succeeds(self, sample_document, config, stage_recorder):
        calls = []

        def flaky_renderer(*args, **kwargs):
            calls.append(1)
            if len(calls) == 1:
                raise OSError("disk full")
            return render_to_pdf(*args, **kwargs)

        orchestrator = ExportOrchestrator(config, on_stage=stage_recorder, renderer=flaky_renderer)

        with pytest.raises(ExportError) as excinfo:
            orchestrator.run(sample_document)
        assert excinfo.value.stage == ExportStage.RENDERING
        assert "disk full" in excinfo.value.message
        assert orchestrator.stage == ExportStage.ERROR

        result = orchestrator.retry(sample_document)

        assert result is not None
        assert orchestrator.stage == ExportStage.DONE
        assert orchestrator.error is None
        assert stage_recorder.stages[-len(PIPELINE):] == PIPELINE

    def test_run_when_answer_key_fails_then_finalizing_error(self, sample_document, config, monkeypatch):
        def broken(*args, **kwargs):
            raise OSError("read-only")

        monkeypatch.setattr("quiz_toolkit.builder.controller.render_answer_key_pdf", broken)
        sample_document.settings.answer_key_mode = AnswerKeyMode.SEPARATE

        with pytest.raises(ExportError) as excinfo:
            ExportOrchestrator(config).run(sample_document)

        assert excinfo.value.stage == ExportStage.FINALIZING

    def test_cancel_when_requested_mid_stage_then_stops_at_boundary(self, sample_document, config):
        stages = []
        orchestrator = ExportOrchestrator(config)

        def on_stage(stage, message):
            stages.append(stage)
            if stage == ExportStage.LAYOUT:
                orchestrator.cancel()

        orchestrator.on_stage = on_stage

        assert orchestrator.run(sample_document) is None
        assert stages == [ExportStage.PREPARING, ExportStage.LAYOUT]
        assert orchestrator.stage == ExportStage.IDLE
        assert not (config.output_dir / "quiz.pdf").exists()

    def test_cancel_when_idle_then_ignored(self, sample_document, config):
        orchestrator = ExportOrchestrator(config)

        orchestrator.cancel()

        assert not orchestrator.cancelled
        assert orchestrator.run(sample_document) is not None

    def test_run_when_previous_run_cancelled_then_flag_reset(self, sample_document, config):
        orchestrator = ExportOrchestrator(config)
        orchestrator.on_stage = lambda stage, message: orchestrator.cancel()
        assert orchestrator.run(sample_document) is None

        orchestrator.on_stage = None

        assert orchestrator.run(sample_document) is not None


class TestExportDocument:

    def test_export_when_called_then_result(self, sample_document, config):
        result = export_document(sample_document, config)

        assert isinstance(result.pdf_path, Path)
        assert result.pdf_path.exists()

    def test_export_when_cancelled_then_raises(self, sample_document, config, monkeypatch):
        class CancelledOrchestrator(ExportOrchestrator):
            def _boundary(self):
                return False

        monkeypatch.setattr("quiz_toolkit.builder.controller.ExportOrchestrator", CancelledOrchestrator)

        with pytest.raises(ExportError) as excinfo:
            export_document(sample_document, config)

        assert excinfo.value.stage == ExportStage.IDLE
