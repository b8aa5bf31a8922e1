"""Page layout for conversation exports.

The layout works in abstract document units: a cursor moves down the page
by ``line_height`` per line, starting at ``top_margin``, and a new page is
started before any record that would pass ``page_bottom``.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from ..constants import EXPORT_ASSISTANT_LABEL, EXPORT_USER_LABEL
from ..domain.message import Message
from ..errors import NothingToExportError


@dataclass(slots=True, frozen=True)
class ExportSettings:
    """Layout parameters for one export."""

    line_width: int = 90
    top_margin: int = 20
    line_height: int = 7
    page_bottom: int = 270

    @classmethod
    def from_profile(cls, export_config: Mapping[str, Any] | None) -> ExportSettings:
        """Build settings from the profile's ``export`` section."""
        if not export_config:
            return cls()
        line_width = export_config.get("line_width")
        if line_width is None:
            return cls()
        return cls(line_width=int(line_width))

    @property
    def lines_per_page(self) -> int:
        return max(1, (self.page_bottom - self.top_margin) // self.line_height)


@dataclass(slots=True, frozen=True)
class ExportBlock:
    """Lines of one record (or record chunk) placed on a page."""

    lines: tuple[str, ...]
    page_break_before: bool = False


def format_record(message: Message) -> str:
    """Speaker-labelled text for one message; image URLs are omitted."""
    label = EXPORT_USER_LABEL if message.is_user else EXPORT_ASSISTANT_LABEL
    return f"{label}: {message.content}"


def wrap_record(text: str, width: int) -> list[str]:
    """Wrap a record to ``width`` columns, keeping embedded newlines."""
    lines: list[str] = []
    for paragraph in text.split("\n"):
        lines.extend(textwrap.wrap(paragraph, width=width) or [""])
    return lines


def build_export_blocks(
    messages: Iterable[Message],
    settings: ExportSettings = ExportSettings(),
) -> list[ExportBlock]:
    """Lay out messages as page-aware blocks, in input order.

    Raises:
        NothingToExportError: If there are no messages
    """
    messages = list(messages)
    if not messages:
        raise NothingToExportError()

    per_page = settings.lines_per_page
    blocks: list[ExportBlock] = []
    cursor = settings.top_margin

    for message in messages:
        lines = wrap_record(format_record(message), settings.line_width)
        chunks = [lines[start:start + per_page] for start in range(0, len(lines), per_page)]

        for index, chunk in enumerate(chunks):
            height = len(chunk) * settings.line_height
            at_page_top = cursor == settings.top_margin
            if index > 0:
                page_break = True
            else:
                page_break = not at_page_top and cursor + height > settings.page_bottom

            if page_break:
                cursor = settings.top_margin
            blocks.append(ExportBlock(lines=tuple(chunk), page_break_before=page_break))
            cursor += height

    return blocks


def count_pages(blocks: Iterable[ExportBlock]) -> int:
    """Number of pages the blocks occupy."""
    pages = 0
    for block in blocks:
        if pages == 0 or block.page_break_before:
            pages += 1
    return pages
