"""Render export blocks to a PDF or text document and write it to disk.

Layout units are millimetres on an A4 page, so blocks from
``build_export_blocks`` map straight onto PDF coordinates.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

import aiofiles  # type: ignore[import-untyped]
from fpdf import FPDF

from ..constants import EXPORT_TITLE, PAGE_BREAK, TEXT_EXPORT_EXTENSION
from ..domain.message import Message
from ..logging import log_event
from .layout import ExportBlock, ExportSettings, build_export_blocks, count_pages

PDF_LEFT_MM = 20
PDF_TITLE_Y_MM = 15
PDF_TEXT_WIDTH_MM = 170
PDF_TITLE_FONT_SIZE = 16
PDF_MAX_BODY_FONT_SIZE = 12.0

# Courier glyphs are 0.6 em wide; 1 mm is 72 / 25.4 pt.
COURIER_ADVANCE_EM = 0.6
PT_PER_MM = 72 / 25.4

# The PDF core fonts only cover Latin-1.
_LATIN1_LOOKALIKES = str.maketrans({
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "–": "-",
    "—": "-",
    "…": "...",
})


def _latin1(text: str) -> str:
    return text.translate(_LATIN1_LOOKALIKES).encode("latin-1", "replace").decode("latin-1")


def body_font_size(line_width: int) -> float:
    """Courier size at which ``line_width`` columns fill the text width."""
    fitted = PDF_TEXT_WIDTH_MM * PT_PER_MM / (line_width * COURIER_ADVANCE_EM)
    return min(PDF_MAX_BODY_FONT_SIZE, fitted)


def render_pdf(
    blocks: Sequence[ExportBlock],
    settings: ExportSettings = ExportSettings(),
    title: str = EXPORT_TITLE,
) -> bytes:
    """Draw blocks on A4 pages, starting a page wherever a block asks for one."""
    pdf = FPDF(unit="mm", format="A4")
    pdf.set_auto_page_break(False)
    pdf.add_page()
    pdf.set_font("Helvetica", style="B", size=PDF_TITLE_FONT_SIZE)
    pdf.text(PDF_LEFT_MM, PDF_TITLE_Y_MM, _latin1(title))

    pdf.set_font("Courier", size=body_font_size(settings.line_width))
    y = settings.top_margin
    for block in blocks:
        if block.page_break_before:
            pdf.add_page()
            y = settings.top_margin
        for line in block.lines:
            if line:
                pdf.text(PDF_LEFT_MM, y, _latin1(line))
            y += settings.line_height
    return bytes(pdf.output())


def render_document(blocks: Sequence[ExportBlock], title: str = EXPORT_TITLE) -> str:
    """Render blocks as plain text with form-feed page breaks."""
    lines = [title, ""]
    for block in blocks:
        if block.page_break_before:
            lines.append(PAGE_BREAK)
        lines.extend(block.lines)
    return "\n".join(lines) + "\n"


async def save_export(
    path: str,
    messages: Iterable[Message],
    settings: ExportSettings = ExportSettings(),
) -> int:
    """Write the conversation export to ``path`` and return its page count.

    A ``.txt`` path gets the plain-text rendering; any other path gets a PDF.

    Raises:
        NothingToExportError: If there are no messages
        OSError: If the file cannot be written
    """
    messages = list(messages)
    blocks = build_export_blocks(messages, settings)
    export_path = Path(path)
    export_path.parent.mkdir(parents=True, exist_ok=True)

    if export_path.suffix.lower() == TEXT_EXPORT_EXTENSION:
        export_format = "text"
        async with aiofiles.open(export_path, "w", encoding="utf-8") as f:
            await f.write(render_document(blocks))
    else:
        export_format = "pdf"
        async with aiofiles.open(export_path, "wb") as f:
            await f.write(render_pdf(blocks, settings))

    page_count = count_pages(blocks)
    log_event(
        "export_complete",
        level=logging.INFO,
        export_file=str(export_path),
        format=export_format,
        message_count=len(messages),
        page_count=page_count,
    )
    return page_count
