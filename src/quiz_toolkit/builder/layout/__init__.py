"""
Module: builder.layout

Purpose:
    Page layout for quiz export and full preview.
    Converts a normalized document's sections into page plans.

Key Functions:
    - normalize_document(): Independent, trimmed copy of a document
    - resolve_preset(): Style preset lookup with default fallback
    - estimate_height(): Heuristic question height
    - paginate(): Arrange render items onto pages
    - chunk_answer_key(): Count-based answer-key grouping

Key Classes:
    - PageGeometry: Physical page geometry
    - StylePreset: Typographic layout parameters
    - PagePlan: Single page layout plan

Dependencies:
    - quiz_toolkit.core.models: Document, Section, Question

Used By:
    - builder.controller: Export pipeline
    - builder.preview: Full preview
"""

from .config import PageGeometry, PageSize, StylePreset, DEFAULT_GEOMETRY
from .presets import PRESETS, resolve_preset, list_presets
from .models import RenderItemKind, SectionHeaderItem, QuestionItem, PageRenderItem, PagePlan
from .estimator import HeightEstimator, estimate_height, chars_per_line
from .normalizer import normalize_document
from .paginator import paginate
from .answer_key import AnswerKeyEntry, chunk_answer_key, DEFAULT_CHUNK_SIZE

__all__ = [
    # Config
    "PageGeometry",
    "PageSize",
    "StylePreset",
    "DEFAULT_GEOMETRY",
    # Presets
    "PRESETS",
    "resolve_preset",
    "list_presets",
    # Models
    "RenderItemKind",
    "SectionHeaderItem",
    "QuestionItem",
    "PageRenderItem",
    "PagePlan",
    # Functions
    "HeightEstimator",
    "estimate_height",
    "chars_per_line",
    "normalize_document",
    "paginate",
    "AnswerKeyEntry",
    "chunk_answer_key",
    "DEFAULT_CHUNK_SIZE",
]
