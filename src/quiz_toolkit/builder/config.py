"""
Module: builder.config

Purpose:
    Configuration dataclass for the export pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - ExportConfig: Where and how an export is written

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - builder.controller: Export orchestrator
    - cli: export command
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from quiz_toolkit.builder.layout.answer_key import DEFAULT_CHUNK_SIZE


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for exporting a quiz (immutable).

    Attributes:
        output_dir: Directory the PDF(s) are written to
        filename: Output file name; None derives "{title}-{YYYY-MM-DD}.pdf"
        answer_key_chunk_size: Answer-key rows per page
        stage_delay: Pause in seconds between pipeline stages
        show_footer: Draw "n / total" page numbers
        reveal_answers: Mark correct answers on the question pages

    Example:
        >>> config = ExportConfig(output_dir=Path("output"))
        >>> config.filename is None
        True
    """

    output_dir: Path
    filename: Optional[str] = None
    answer_key_chunk_size: int = DEFAULT_CHUNK_SIZE
    stage_delay: float = 0.0
    show_footer: bool = True
    reveal_answers: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.answer_key_chunk_size < 1:
            raise ValueError(f"answer_key_chunk_size must be positive: {self.answer_key_chunk_size}")
        if self.stage_delay < 0:
            raise ValueError(f"stage_delay must be non-negative: {self.stage_delay}")
        if self.filename is not None:
            if not self.filename.strip():
                raise ValueError("filename must not be blank")
            if "/" in self.filename or "\\" in self.filename:
                raise ValueError(f"filename must not contain a path separator: {self.filename!r}")
