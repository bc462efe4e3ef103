"""
Module: builder.layout.config

Purpose:
    Configuration for the page layout engine.
    Defines page geometry (physical size and reserved regions) and the
    StylePreset type controlling fonts and spacing.

Key Classes:
    - PageSize: Supported paper sizes
    - PageGeometry: Immutable page geometry injected into layout
    - StylePreset: Immutable bundle of typographic layout parameters

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.presets: Preset registry
    - builder.layout.estimator: Height estimation
    - builder.layout.paginator: Page budget
    - builder.output.renderer: Page drawing
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# Page dimensions in PDF points (1/72 inch)
A4_WIDTH_PT = 595.28
A4_HEIGHT_PT = 841.89
LETTER_WIDTH_PT = 612.0
LETTER_HEIGHT_PT = 792.0


class PageSize(str, Enum):
    """Paper size for output pages."""
    A4 = "A4"
    LETTER = "Letter"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PageGeometry:
    """
    Physical page geometry for layout (immutable).

    The paginator and estimator never hard-code page measurements; they
    read them from here, so other paper sizes only need another instance.

    Attributes:
        page_width: Physical page width in points
        page_height: Physical page height in points
        header_reserve: Height reserved at the top of every page (running title)
        footer_reserve: Height reserved at the bottom (page numbers)
        section_header_height: Fixed cost of a section header
            (title + description + separator rule)
        estimate_page_width: Page width used for characters-per-line
            estimation. Kept near A4 proportions regardless of paper size.
        option_indent_chars: Characters lost to option indentation
        option_margin: Vertical gap after each multiple-choice option

    Example:
        >>> geometry = PageGeometry()
        >>> geometry.page_height
        841.89
    """

    page_width: float = A4_WIDTH_PT
    page_height: float = A4_HEIGHT_PT
    header_reserve: float = 40.0
    footer_reserve: float = 30.0
    section_header_height: float = 40.0
    estimate_page_width: float = 595.0
    option_indent_chars: int = 5
    option_margin: float = 4.0

    def __post_init__(self) -> None:
        """Validate geometry on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.header_reserve < 0 or self.footer_reserve < 0:
            raise ValueError("header/footer reserve must be non-negative")
        if self.section_header_height < 0:
            raise ValueError(f"section_header_height must be non-negative: {self.section_header_height}")
        if self.estimate_page_width <= 0:
            raise ValueError(f"estimate_page_width must be positive: {self.estimate_page_width}")

    @classmethod
    def for_page_size(cls, page_size: PageSize) -> PageGeometry:
        """Geometry with the physical dimensions of a paper size."""
        if page_size == PageSize.LETTER:
            return cls(page_width=LETTER_WIDTH_PT, page_height=LETTER_HEIGHT_PT)
        return cls()

    def usable_height(self, style: StylePreset) -> float:
        """
        Height budget for render items on one page.

        page height - 2 x padding - footer reserve. The header reserve is
        not subtracted here; the paginator starts each page's running
        height at header_reserve instead.
        """
        return self.page_height - 2 * style.page_padding - self.footer_reserve


@dataclass(frozen=True)
class StylePreset:
    """
    Named bundle of layout parameters (immutable).

    Attributes:
        id: Registry key
        display_name: Human readable name
        description: One-line description
        page_size: Paper size
        base_font_size: Body font size in points
        line_height_multiplier: Line height as a multiple of font size
        page_padding: Padding on each page edge in points
        question_spacing: Fixed spacing cost per question in points
    """

    id: str
    display_name: str
    description: str
    page_size: PageSize
    base_font_size: float
    line_height_multiplier: float
    page_padding: float
    question_spacing: float

    def __post_init__(self) -> None:
        if self.base_font_size <= 0:
            raise ValueError(f"base_font_size must be positive: {self.base_font_size}")
        if self.line_height_multiplier <= 0:
            raise ValueError(f"line_height_multiplier must be positive: {self.line_height_multiplier}")
        if self.page_padding < 0 or self.question_spacing < 0:
            raise ValueError("page_padding and question_spacing must be non-negative")

    @property
    def line_height(self) -> float:
        """Height of one text line in points."""
        return self.base_font_size * self.line_height_multiplier


DEFAULT_GEOMETRY = PageGeometry()
