"""
Module: builder.output.drawing

Purpose:
    Shared ReportLab drawing primitives for quiz PDFs: a canvas that
    stamps "n / total" page numbers, and a cursor that tracks the vertical
    position on the current page and starts a continuation page instead of
    drawing past the bottom margin.

Key Classes:
    - NumberedCanvas: Canvas with deferred page-number footers
    - PageCursor: Top-down text flow on a canvas

Key Functions:
    - open_canvas(): Create a NumberedCanvas for an output path

Dependencies:
    - reportlab: PDF generation
    - builder.layout.config: PageGeometry, StylePreset

Used By:
    - builder.output.renderer: Quiz pages
    - builder.output.answer_key: Answer-key pages
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from quiz_toolkit.builder.layout.config import PageGeometry, StylePreset

logger = logging.getLogger(__name__)

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"
FONT_MONO = "Courier"

RUNNING_TITLE_FONT_SIZE = 9
FOOTER_FONT_SIZE = 9
FOOTER_OFFSET_PT = 20  # Footer baseline, from page bottom


class NumberedCanvas(canvas.Canvas):
    """
    Canvas that defers page output until save() so every page can carry
    "n / total" in its footer.

    The total is only known once all pages are drawn, so each finished
    page's state is kept and replayed on save().
    """

    def __init__(self, *args, show_footer: bool = True, **kwargs):
        super().__init__(*args, **kwargs)
        self.show_footer = show_footer
        self.page_count = 0
        self._saved_page_states: List[dict] = []

    def showPage(self) -> None:
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self) -> None:
        total = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            if self.show_footer:
                self._draw_page_number(total)
            super().showPage()
        self.page_count = total
        super().save()

    def _draw_page_number(self, total: int) -> None:
        page_width = self._pagesize[0]
        self.saveState()
        self.setFont(FONT_REGULAR, FOOTER_FONT_SIZE)
        self.setFillColorRGB(0.6, 0.6, 0.6)
        self.drawCentredString(page_width / 2, FOOTER_OFFSET_PT, f"{self._pageNumber} / {total}")
        self.restoreState()


def open_canvas(
    output_path: Path,
    geometry: PageGeometry,
    *,
    title: str = "",
    show_footer: bool = True,
) -> NumberedCanvas:
    """
    Create a NumberedCanvas writing to output_path.

    Creates parent directories as needed.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    c = NumberedCanvas(
        str(output_path),
        pagesize=(geometry.page_width, geometry.page_height),
        show_footer=show_footer,
    )
    if title:
        c.setTitle(title)
    return c


class PageCursor:
    """
    Top-down text flow on a NumberedCanvas.

    Coordinates are ReportLab's (origin bottom-left); `y` is the top of
    the next line to draw. Drawing never goes below `bottom`: a line that
    does not fit starts a continuation page, so content that was estimated
    too small spills over instead of being cut off.

    Attributes:
        left: Left content edge in points
        width: Content width in points
        top: First content y on a page (below the header reserve)
        bottom: Lowest y content may reach
        continuation_pages: Pages started because content overflowed
    """

    def __init__(self, c: canvas.Canvas, geometry: PageGeometry, style: StylePreset) -> None:
        self.c = c
        self.geometry = geometry
        self.style = style
        self.left = style.page_padding
        self.width = geometry.page_width - 2 * style.page_padding
        self.top = geometry.page_height - style.page_padding - geometry.header_reserve
        self.bottom = style.page_padding + geometry.footer_reserve
        self.y = self.top
        self.continuation_pages = 0
        self._running_title: Optional[str] = None
        self._page_open = False

    @property
    def right(self) -> float:
        return self.left + self.width

    def start_page(self, running_title: Optional[str] = None) -> None:
        """Finish the open page (if any) and start a new one."""
        self.finish_page()
        self._running_title = running_title
        self._page_open = True
        self.y = self.top
        if running_title:
            self.c.saveState()
            self.c.setFont(FONT_REGULAR, RUNNING_TITLE_FONT_SIZE)
            self.c.setFillColorRGB(0.6, 0.6, 0.6)
            title_y = self.geometry.page_height - self.style.page_padding - RUNNING_TITLE_FONT_SIZE
            self.c.drawCentredString(self.geometry.page_width / 2, title_y, running_title)
            self.c.restoreState()

    def finish_page(self) -> None:
        if self._page_open:
            self.c.showPage()
            self._page_open = False

    def ensure(self, height: float) -> None:
        """Start a continuation page if `height` does not fit below y."""
        if not self._page_open:
            self.start_page(self._running_title)
        elif self.y - height < self.bottom and self.y < self.top:
            self.continuation_pages += 1
            logger.debug(f"Content overflowed page {self.c.getPageNumber()}, continuing on next page")
            self.start_page(self._running_title)

    def skip(self, height: float) -> None:
        self.y -= height

    def draw_lines(
        self,
        text: str,
        font: str,
        size: float,
        *,
        indent: float = 0.0,
        leading: Optional[float] = None,
        gray: float = 0.0,
    ) -> int:
        """
        Draw wrapped text, one line per `leading`.

        Returns:
            Number of lines drawn
        """
        leading = leading if leading is not None else size * self.style.line_height_multiplier
        lines = simpleSplit(text, font, size, self.width - indent) or [""]
        for line in lines:
            self.ensure(leading)
            self.c.setFont(font, size)
            self.c.setFillGray(gray)
            self.c.drawString(self.left + indent, self.y - size, line)
            self.y -= leading
        self.c.setFillGray(0)
        return len(lines)

    def draw_centred(self, text: str, font: str, size: float, *, leading: Optional[float] = None) -> None:
        """Draw a single centred line (no wrapping)."""
        leading = leading if leading is not None else size * self.style.line_height_multiplier
        self.ensure(leading)
        self.c.setFont(font, size)
        self.c.drawCentredString(self.geometry.page_width / 2, self.y - size, text)
        self.y -= leading

    def draw_rule(self, *, indent: float = 0.0, gap: float = 4.0, gray: float = 0.8) -> None:
        """Horizontal line across the content width."""
        self.ensure(gap * 2)
        self.y -= gap
        self.c.saveState()
        self.c.setStrokeGray(gray)
        self.c.setLineWidth(0.5)
        self.c.line(self.left + indent, self.y, self.right, self.y)
        self.c.restoreState()
        self.y -= gap
