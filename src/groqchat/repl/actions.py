"""Actions returned by REPL commands and interpreted by the loop."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class PrintAction:
    """Print a message and return to the prompt."""

    message: str


@dataclass(slots=True, frozen=True)
class BreakAction:
    """Leave the REPL."""


ReplAction = PrintAction | BreakAction
