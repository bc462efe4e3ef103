"""
Ways to start or extend a document: plain-text import and starter templates.
"""

from .txt_parser import ImportResult, TxtImportError, merge_import, parse_txt, read_txt_file
from .templates import TemplateInfo, create_from_template, list_templates

__all__ = [
    "ImportResult",
    "TxtImportError",
    "merge_import",
    "parse_txt",
    "read_txt_file",
    "TemplateInfo",
    "create_from_template",
    "list_templates",
]
