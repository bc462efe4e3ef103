"""
Module: builder.output

Purpose:
    PDF rendering for quiz export.
    Turns page plans and answer-key chunks into PDF files using ReportLab.

Key Functions:
    - render_to_pdf(): Render the quiz (cover, preamble, pages, answer key)
    - render_answer_key_pdf(): Standalone answer-key PDF
    - html_to_blocks(): Flatten body markup for drawing

Dependencies:
    - reportlab: PDF generation
    - bs4: Body markup parsing
    - builder.layout.models: PagePlan

Used By:
    - builder.controller: Export pipeline
"""

from .renderer import render_to_pdf
from .answer_key import render_answer_key_pdf, draw_answer_key_pages
from .rich_text import TextBlock, html_to_blocks

__all__ = [
    "render_to_pdf",
    "render_answer_key_pdf",
    "draw_answer_key_pages",
    "TextBlock",
    "html_to_blocks",
]
