"""Interactive prompt for groqchat."""

from .actions import BreakAction, PrintAction, ReplAction
from .commands import HELP_TEXT, CommandHandler
from .loop import repl_loop, run_edit_prompt

__all__ = [
    "BreakAction",
    "CommandHandler",
    "HELP_TEXT",
    "PrintAction",
    "ReplAction",
    "repl_loop",
    "run_edit_prompt",
]
