"""Prompt session for chat and edit input."""

from __future__ import annotations

from prompt_toolkit import PromptSession
from prompt_toolkit.history import DummyHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.key_processor import KeyPressEvent


def build_key_bindings() -> KeyBindings:
    """Enter sends, Alt+Enter inserts a new line, Ctrl+J always sends.

    Enter on a buffer holding only whitespace clears it instead of sending.
    """
    bindings = KeyBindings()

    @bindings.add("enter", eager=True)
    def _send_or_clear(event: KeyPressEvent) -> None:
        buffer = event.current_buffer
        if buffer.text.strip() or not buffer.text:
            buffer.validate_and_handle()
        else:
            buffer.reset()

    @bindings.add("escape", "enter", eager=True)
    def _newline(event: KeyPressEvent) -> None:
        event.current_buffer.newline(copy_margin=False)

    @bindings.add("c-j", eager=True)
    def _send(event: KeyPressEvent) -> None:
        event.current_buffer.validate_and_handle()

    return bindings


def create_prompt_session() -> PromptSession:
    # No history: past prompts would keep deleted or edited messages around.
    return PromptSession(
        history=DummyHistory(),
        key_bindings=build_key_bindings(),
        multiline=True,
    )
