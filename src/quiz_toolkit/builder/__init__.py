"""
Module: builder

Purpose:
    Turns a quiz document into pages: layout (normalize, paginate), the
    full on-screen preview, and the staged PDF export pipeline.

Key Functions:
    - export_document(): Main entry point for exporting a quiz
    - build_preview(): Full preview model

Key Classes:
    - ExportConfig: Configuration for export
    - ExportOrchestrator: Staged export with cancel/retry
    - ExportError: Exception for export failures

Dependencies:
    - reportlab: PDF generation
    - quiz_toolkit.core.models: Document model

Used By:
    - quiz_toolkit.cli: Command-line interface
"""

from .config import ExportConfig
from .controller import (
    ExportError,
    ExportOrchestrator,
    ExportResult,
    ExportStage,
    export_document,
    export_filename,
)
from .preview import PreviewModel, build_preview

__all__ = [
    # Config
    "ExportConfig",
    # Controller
    "ExportError",
    "ExportOrchestrator",
    "ExportResult",
    "ExportStage",
    "export_document",
    "export_filename",
    # Preview
    "PreviewModel",
    "build_preview",
]
