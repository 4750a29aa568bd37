"""Markdown export of GitHub issues."""

from .exporter import RequirementExporter
from .filenames import requirement_filename, sanitize_filename
from .markdown import PREVIEW_EMPTY_BODY, format_requirement_markdown

__all__ = [
    "RequirementExporter",
    "format_requirement_markdown",
    "sanitize_filename",
    "requirement_filename",
    "PREVIEW_EMPTY_BODY",
]
