"""
Module: cli

Purpose:
    Command-line interface: list presets and templates, start a document
    from a template, import a text quiz, print the page plan, and run the
    staged PDF export.

Key Functions:
    - main(): Entry point for the quiz-toolkit console script

Dependencies:
    - argparse (std)
    - builder: Preview and export
    - storage: Snapshot files
    - importing: Text import and templates
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from quiz_toolkit import __version__
from quiz_toolkit.builder import ExportConfig, ExportError, ExportOrchestrator, ExportStage, build_preview
from quiz_toolkit.builder.layout import list_presets
from quiz_toolkit.core.models import Document
from quiz_toolkit.importing import (
    TxtImportError,
    create_from_template,
    list_templates,
    merge_import,
    read_txt_file,
)
from quiz_toolkit.storage import SessionStore, SnapshotError

logger = logging.getLogger(__name__)


def _load_snapshot(path: Path) -> Optional[Document]:
    if not path.exists():
        print(f"Snapshot not found: {path}", file=sys.stderr)
        return None
    try:
        return SessionStore(path).load(strict=True)
    except SnapshotError as e:
        print(str(e), file=sys.stderr)
        return None


# ─────────────────────────────────────────────────────────────────────────────
# Commands
# ─────────────────────────────────────────────────────────────────────────────

def cmd_presets(args: argparse.Namespace) -> int:
    for preset in list_presets():
        print(
            f"{preset.id:<10} {preset.display_name:<12} "
            f"{preset.base_font_size:g}pt x{preset.line_height_multiplier:g}, "
            f"padding {preset.page_padding:g}, spacing {preset.question_spacing:g}  "
            f"{preset.description}"
        )
    return 0


def cmd_templates(args: argparse.Namespace) -> int:
    for template in list_templates():
        print(f"{template.id:<16} {template.question_count:>2} questions  {template.description}")
    return 0


def cmd_new(args: argparse.Namespace) -> int:
    snapshot = Path(args.snapshot)
    if snapshot.exists() and not args.force:
        print(f"Snapshot already exists: {snapshot} (use --force to replace it)", file=sys.stderr)
        return 1
    try:
        document = create_from_template(args.template)
    except KeyError:
        available = ", ".join(t.id for t in list_templates())
        print(f"Unknown template {args.template!r}. Available: {available}", file=sys.stderr)
        return 1

    SessionStore(snapshot).save(document)
    print(f"Created {snapshot} from {args.template} ({document.question_count} questions)")
    return 0


def cmd_import_txt(args: argparse.Namespace) -> int:
    source = Path(args.file)
    try:
        result = read_txt_file(source)
    except TxtImportError as e:
        print(str(e), file=sys.stderr)
        return 1

    store = SessionStore(Path(args.snapshot))
    try:
        document = store.update(lambda doc: merge_import(doc, result, fallback_title=source.stem))
    except SnapshotError as e:
        print(str(e), file=sys.stderr)
        return 1

    for warning in result.warnings:
        print(f"warning: {warning}", file=sys.stderr)
    print(
        f"Imported {result.question_count} questions into section {result.section.title!r}; "
        f"document now has {document.question_count} questions"
    )
    return 0


def cmd_paginate(args: argparse.Namespace) -> int:
    document = _load_snapshot(Path(args.snapshot))
    if document is None:
        return 1
    preview = build_preview(document, preset_id=args.preset, reveal_answers=args.reveal_answers)
    print(preview.to_text())
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    document = _load_snapshot(Path(args.snapshot))
    if document is None:
        return 1
    if args.preset:
        document.settings.selected_preset_id = args.preset

    try:
        config = ExportConfig(
            output_dir=Path(args.output_dir),
            filename=args.filename,
            show_footer=not args.no_footer,
            reveal_answers=args.reveal_answers,
        )
    except ValueError as e:
        print(f"Invalid export option: {e}", file=sys.stderr)
        return 2

    def on_stage(stage: ExportStage, message: str) -> None:
        print(f"[{stage}] {message}")

    try:
        result = ExportOrchestrator(config, on_stage=on_stage).run(document)
    except ExportError as e:
        print(f"Export failed ({e.stage}): {e.message}", file=sys.stderr)
        return 1

    if result is None:
        return 1
    for warning in result.warnings:
        print(f"warning: {warning}", file=sys.stderr)
    print(f"Quiz: {result.pdf_path} ({result.page_count} pages)")
    if result.answer_key_pdf:
        print(f"Answer key: {result.answer_key_pdf}")
    return 0


# ─────────────────────────────────────────────────────────────────────────────
# Main entry point
# ─────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiz-toolkit",
        description="Paginate and export quiz documents to PDF.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    presets = subparsers.add_parser("presets", help="List style presets")
    presets.set_defaults(func=cmd_presets)

    templates = subparsers.add_parser("templates", help="List document templates")
    templates.set_defaults(func=cmd_templates)

    new = subparsers.add_parser("new", help="Start a snapshot from a template")
    new.add_argument("--template", required=True, help="Template id (see 'templates')")
    new.add_argument("--snapshot", required=True, help="Snapshot file to create")
    new.add_argument("--force", action="store_true", help="Replace an existing snapshot")
    new.set_defaults(func=cmd_new)

    import_txt = subparsers.add_parser("import-txt", help="Merge a plain-text quiz into a snapshot")
    import_txt.add_argument("file", help="Text file to import")
    import_txt.add_argument("--snapshot", required=True, help="Snapshot file (created if missing)")
    import_txt.set_defaults(func=cmd_import_txt)

    paginate = subparsers.add_parser("paginate", help="Print the page plan of a snapshot")
    paginate.add_argument("snapshot", help="Snapshot file")
    paginate.add_argument("--preset", help="Preview with another style preset")
    paginate.add_argument("--reveal-answers", action="store_true", help="Show correct answers")
    paginate.set_defaults(func=cmd_paginate)

    export = subparsers.add_parser("export", help="Export a snapshot to PDF")
    export.add_argument("snapshot", help="Snapshot file")
    export.add_argument("--output-dir", required=True, help="Directory for the PDF(s)")
    export.add_argument("--preset", help="Override the document's style preset")
    export.add_argument("--filename", help="Output file name (default: {title}-{date}.pdf)")
    export.add_argument("--reveal-answers", action="store_true", help="Mark correct answers inline")
    export.add_argument("--no-footer", action="store_true", help="Omit page numbers")
    export.set_defaults(func=cmd_export)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logger.debug(f"quiz-toolkit {__version__}: {args.command}")

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
