"""Conversation export."""

from .layout import (
    ExportBlock,
    ExportSettings,
    build_export_blocks,
    count_pages,
    format_record,
    wrap_record,
)
from .writer import body_font_size, render_document, render_pdf, save_export

__all__ = [
    "ExportBlock",
    "ExportSettings",
    "body_font_size",
    "build_export_blocks",
    "count_pages",
    "format_record",
    "render_document",
    "render_pdf",
    "save_export",
    "wrap_record",
]
