"""
Module: builder.controller

Purpose:
    Orchestrate the staged export pipeline.
    Prepare → Layout → Render → Finalize

Key Functions:
    - export_document(): One-shot export of a document

Key Classes:
    - ExportOrchestrator: Staged export with progress callback, cancel, retry
    - ExportStage: Pipeline stages reported to the callback
    - ExportResult: Complete export result
    - ExportError: Exception for export failures

Dependencies:
    - builder.layout: Normalization, presets, pagination, answer-key chunks
    - builder.output: PDF rendering

Used By:
    - cli: export command
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from quiz_toolkit.core.models import AnswerKeyMode, Document

from .config import ExportConfig
from .layout import PageGeometry, chunk_answer_key, normalize_document, paginate, resolve_preset
from .output.answer_key import render_answer_key_pdf
from .output.renderer import render_to_pdf

logger = logging.getLogger(__name__)

EMPTY_PAGINATION_MESSAGE = "Pagination failed to generate any pages."
DEFAULT_BASENAME = "quiz"


class ExportStage(str, Enum):
    """Pipeline stages, in order, plus the terminal states."""
    IDLE = "idle"
    PREPARING = "preparing"
    LAYOUT = "layout"
    RENDERING = "rendering"
    FINALIZING = "finalizing"
    DONE = "done"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


StageCallback = Callable[[ExportStage, str], None]


class ExportError(Exception):
    """Error during the export pipeline, tagged with the failing stage."""

    def __init__(self, message: str, stage: ExportStage):
        super().__init__(message)
        self.message = message
        self.stage = stage


@dataclass(frozen=True)
class ExportResult:
    """
    Complete export result (immutable).

    Attributes:
        pdf_path: Path to the generated quiz PDF
        answer_key_pdf: Path to the separate answer-key PDF (if generated)
        page_count: PDF pages written to pdf_path
        plan_count: Question pages produced by pagination
        question_count: Questions exported
        preset_id: Style preset actually used
        warnings: Questions with validation issues, one line each

    Example:
        >>> result = export_document(doc, ExportConfig(output_dir=Path("out")))
        >>> print(f"Wrote {result.page_count} pages to {result.pdf_path}")
    """
    pdf_path: Path
    answer_key_pdf: Optional[Path]
    page_count: int
    plan_count: int
    question_count: int
    preset_id: str
    warnings: tuple[str, ...] = ()


def export_filename(title: str, on: Optional[date] = None) -> str:
    """
    Default output name: "{title}-{YYYY-MM-DD}.pdf", "quiz" for no title.

    Path separators and characters most file systems reject become "-".

    Example:
        >>> export_filename("Week 3", date(2024, 5, 1))
        'Week 3-2024-05-01.pdf'
    """
    base = re.sub(r'[\\/:*?"<>|]+', "-", title.strip()) or DEFAULT_BASENAME
    return f"{base}-{(on or date.today()).isoformat()}.pdf"


class ExportOrchestrator:
    """
    Single-threaded staged export.

    Every transition is reported to `on_stage(stage, message)`. The pause
    between stages (`config.stage_delay`) is the only yield point; cancel()
    is honoured there, never inside a stage. One export at a time per
    orchestrator is the caller's responsibility.

    Example:
        >>> orchestrator = ExportOrchestrator(config, on_stage=print)
        >>> result = orchestrator.run(doc)
    """

    def __init__(
        self,
        config: ExportConfig,
        on_stage: Optional[StageCallback] = None,
        renderer: Callable[..., int] = render_to_pdf,
    ) -> None:
        self.config = config
        self.on_stage = on_stage
        self.renderer = renderer
        self.stage = ExportStage.IDLE
        self.error: Optional[str] = None
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop at the next stage boundary. The running stage completes."""
        if self.stage in (ExportStage.IDLE, ExportStage.DONE, ExportStage.ERROR):
            return
        logger.info(f"Export cancel requested during {self.stage}")
        self._cancelled = True

    def retry(self, document: Document) -> Optional[ExportResult]:
        """Start over from the preparing stage."""
        if self.stage == ExportStage.ERROR:
            logger.info(f"Retrying export after failure: {self.error}")
        return self.run(document)

    def run(self, document: Document) -> Optional[ExportResult]:
        """
        Export a document to PDF.

        Args:
            document: Live document; it is not mutated

        Returns:
            ExportResult, or None if cancelled between stages

        Raises:
            ExportError: If any stage fails (stage is then ERROR)
        """
        self._cancelled = False
        self.error = None
        start_time = time.perf_counter()

        try:
            result = self._run_stages(document)
        except ExportError as e:
            self._fail(e)
            raise
        except Exception as e:
            error = ExportError(f"Export failed during {self.stage}: {e}", self.stage)
            self._fail(error)
            raise error from e

        if result is None:
            logger.info("Export cancelled")
            self.stage = ExportStage.IDLE
            return None

        elapsed = time.perf_counter() - start_time
        logger.info(f"Export completed in {elapsed:.2f}s")
        return result

    # ─────────────────────────────────────────────────────────────────────────
    # Stages
    # ─────────────────────────────────────────────────────────────────────────

    def _run_stages(self, document: Document) -> Optional[ExportResult]:
        config = self.config

        # 1. Prepare
        self._transition(ExportStage.PREPARING, "Preparing document...")
        normalized = normalize_document(document)
        style = resolve_preset(normalized.settings.selected_preset_id)
        geometry = PageGeometry.for_page_size(style.page_size)
        warnings = self._collect_warnings(normalized)
        if not self._boundary():
            return None

        # 2. Layout
        self._transition(ExportStage.LAYOUT, "Calculating page layout...")
        pages = paginate(normalized.sections, style, geometry=geometry)
        if not pages and normalized.has_questions:
            raise ExportError(EMPTY_PAGINATION_MESSAGE, ExportStage.LAYOUT)
        mode = normalized.settings.answer_key_mode
        chunks = ()
        if mode != AnswerKeyMode.HIDDEN:
            chunks = chunk_answer_key(normalized.sections, config.answer_key_chunk_size)
        if not self._boundary():
            return None

        # 3. Render
        self._transition(ExportStage.RENDERING, f"Rendering {len(pages)} pages...")
        config.output_dir.mkdir(parents=True, exist_ok=True)
        pdf_path = config.output_dir / (config.filename or export_filename(normalized.title))
        try:
            page_count = self.renderer(
                normalized,
                pages,
                style,
                pdf_path,
                geometry=geometry,
                answer_chunks=chunks if mode == AnswerKeyMode.APPENDED else (),
                show_footer=config.show_footer,
                reveal_answers=config.reveal_answers,
            )
        except Exception as e:
            raise ExportError(f"Rendering failed: {e}", ExportStage.RENDERING) from e
        if not self._boundary():
            return None

        # 4. Finalize
        self._transition(ExportStage.FINALIZING, "Finalizing export...")
        answer_key_pdf = None
        if mode == AnswerKeyMode.SEPARATE:
            answer_key_pdf = pdf_path.with_name(f"{pdf_path.stem}-answer-key.pdf")
            try:
                render_answer_key_pdf(
                    chunks,
                    answer_key_pdf,
                    style,
                    geometry,
                    title=normalized.title,
                    show_footer=config.show_footer,
                )
            except Exception as e:
                raise ExportError(f"Answer key rendering failed: {e}", ExportStage.FINALIZING) from e

        result = ExportResult(
            pdf_path=pdf_path,
            answer_key_pdf=answer_key_pdf,
            page_count=page_count,
            plan_count=len(pages),
            question_count=normalized.question_count,
            preset_id=style.id,
            warnings=tuple(warnings),
        )
        self._transition(ExportStage.DONE, f"Exported {page_count} pages to {pdf_path}")
        return result

    def _collect_warnings(self, document: Document) -> List[str]:
        warnings = []
        for question in document.iter_questions():
            for issue in question.validation_issues():
                warnings.append(f"Question {question.number}: {issue}")
        for warning in warnings:
            logger.warning(warning)
        return warnings

    def _transition(self, stage: ExportStage, message: str) -> None:
        self.stage = stage
        logger.debug(f"Export stage: {stage} ({message})")
        if self.on_stage is not None:
            self.on_stage(stage, message)

    def _boundary(self) -> bool:
        """Pause between stages. Returns False if the export was cancelled."""
        if self.config.stage_delay > 0:
            time.sleep(self.config.stage_delay)
        return not self._cancelled

    def _fail(self, error: ExportError) -> None:
        self.error = error.message
        logger.error(f"Export failed at {error.stage}: {error.message}")
        self._transition(ExportStage.ERROR, error.message)


def export_document(
    document: Document,
    config: ExportConfig,
    on_stage: Optional[StageCallback] = None,
) -> ExportResult:
    """
    Export a document in one call.

    Args:
        document: Document to export
        config: Export configuration
        on_stage: Optional progress callback

    Returns:
        ExportResult with paths and page counts

    Raises:
        ExportError: If any stage fails

    Example:
        >>> result = export_document(doc, ExportConfig(output_dir=Path("output")))
        >>> print(result.pdf_path.name)
        'Week 3-2024-05-01.pdf'
    """
    result = ExportOrchestrator(config, on_stage=on_stage).run(document)
    if result is None:
        raise ExportError("Export was cancelled", ExportStage.IDLE)
    return result
