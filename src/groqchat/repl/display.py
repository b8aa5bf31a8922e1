"""Text rendering of conversation messages for the terminal."""

from __future__ import annotations

from typing import Iterable

from .. import __version__
from ..constants import (
    BORDERLINE_CHAR,
    BORDERLINE_WIDTH,
    EMOJI_MODE_EDIT,
    EXPORT_ASSISTANT_LABEL,
    EXPORT_USER_LABEL,
)
from ..domain.message import Message
from ..engine import EditState


def format_message(message: Message) -> str:
    """One message with its id, speaker label and optional image URL."""
    label = EXPORT_USER_LABEL if message.is_user else EXPORT_ASSISTANT_LABEL
    text = f"[{message.id}] {label}: {message.content}"
    if message.image:
        text += f"\n  image: {message.image}"
    return text


def format_history(messages: Iterable[Message]) -> str:
    lines = [format_message(message) for message in messages]
    if not lines:
        return "No messages."
    return "\n".join(lines)


def format_edit_banner(editing: EditState) -> str:
    return (
        f"{EMOJI_MODE_EDIT} EDITING [{editing.message_id}] - "
        "Enter saves, Ctrl+C or empty input cancels"
    )


def print_startup_banner(
    *,
    model: str,
    timeout: str,
    store_label: str,
    message_count: int,
) -> None:
    """Print REPL startup context and key usage hints."""
    borderline = BORDERLINE_CHAR * BORDERLINE_WIDTH

    print(borderline)
    print(f"groqchat {__version__} - Groq CLI Chat")
    print(borderline)
    print(f"Model:    {model}")
    print(f"Timeout:  {timeout}")
    print(f"History:  {store_label} ({message_count} messages)")
    print()
    print("Enter sends | Option/Alt+Enter inserts new line")
    print("Include the word 'image' to generate a picture")
    print("Type /help for commands • /exit or Ctrl-D to quit")
    print(borderline)
