"""
Module: builder.layout.presets

Purpose:
    Registry of style presets and total id -> preset resolution.

Key Functions:
    - resolve_preset(): Look up a preset, falling back to the default
    - list_presets(): All registered presets in display order

Dependencies:
    - types.MappingProxyType (std): Read-only registry
    - builder.layout.config: StylePreset, PageSize

Used By:
    - builder.controller: Export pipeline
    - builder.preview: Full preview
    - cli: `presets` command
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from quiz_toolkit.core.models.document import DEFAULT_PRESET_ID

from .config import PageSize, StylePreset

logger = logging.getLogger(__name__)


PRESETS: Mapping[str, StylePreset] = MappingProxyType({
    "standard": StylePreset(
        id="standard",
        display_name="Standard Exam",
        description="Balanced spacing and standard font size. Best for most quizzes.",
        page_size=PageSize.A4,
        base_font_size=11,
        line_height_multiplier=1.5,
        page_padding=40,
        question_spacing=14,
    ),
    "compact": StylePreset(
        id="compact",
        display_name="Compact",
        description="Smaller font and tighter spacing to save paper.",
        page_size=PageSize.A4,
        base_font_size=9,
        line_height_multiplier=1.3,
        page_padding=30,
        question_spacing=8,
    ),
    "readable": StylePreset(
        id="readable",
        display_name="Large & Readable",
        description="Larger text and generous spacing for accessibility.",
        page_size=PageSize.A4,
        base_font_size=14,
        line_height_multiplier=1.6,
        page_padding=40,
        question_spacing=20,
    ),
})


def resolve_preset(preset_id: Optional[str]) -> StylePreset:
    """
    Resolve a preset id to a StylePreset.

    Never fails: unknown ids (e.g. from stale saved documents) resolve to
    the default preset.

    Args:
        preset_id: Any string, or None

    Returns:
        Matching preset, or the default preset

    Example:
        >>> resolve_preset("compact").base_font_size
        9
        >>> resolve_preset("no-such-preset").id
        'standard'
    """
    preset = PRESETS.get(preset_id) if isinstance(preset_id, str) else None
    if preset is None:
        logger.debug(f"Unknown preset {preset_id!r}, using {DEFAULT_PRESET_ID!r}")
        return PRESETS[DEFAULT_PRESET_ID]
    return preset


def list_presets() -> Tuple[StylePreset, ...]:
    """All registered presets in registration order."""
    return tuple(PRESETS.values())
