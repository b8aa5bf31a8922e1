"""Slash commands available at the groqchat prompt."""

from __future__ import annotations

from pathlib import Path
from typing import Awaitable, Callable

from ..constants import DEFAULT_EXPORT_FILENAME
from ..engine import ConversationEngine
from ..errors import NothingToExportError
from ..export import ExportSettings, save_export
from ..message_ids import resolve_message_id
from ..path_utils import map_path
from .actions import BreakAction, PrintAction, ReplAction
from .display import format_history

HELP_TEXT = """Commands:
  /history          Show the conversation with message ids
  /edit <id>        Edit a message (editing your own message re-asks the AI)
  /delete <id>      Delete one message
  /new              Start a new conversation (stored history is kept)
  /clear            Delete the whole stored history
  /export [path]    Export the conversation as PDF (.txt path: plain text)
  /help             Show this help
  /exit             Quit

Message ids may be abbreviated to any unique prefix."""


class CommandHandler:
    """Parses and executes slash commands against the conversation engine."""

    def __init__(
        self,
        engine: ConversationEngine,
        *,
        exports_dir: str,
        export_settings: ExportSettings = ExportSettings(),
    ):
        self.engine = engine
        self.exports_dir = exports_dir
        self.export_settings = export_settings
        self._handlers: dict[str, Callable[[str], Awaitable[ReplAction]]] = {
            "history": self.show_history,
            "edit": self.edit_message,
            "delete": self.delete_message,
            "new": self.new_conversation,
            "clear": self.clear_history,
            "export": self.export_conversation,
            "help": self.show_help,
            "exit": self.exit_app,
            "quit": self.exit_app,
        }

    def is_command(self, text: str) -> bool:
        return text.strip().startswith("/")

    def parse_command(self, text: str) -> tuple[str, str]:
        """Split ``/name args`` into a lowercase name and the raw argument text."""
        parts = text.strip()[1:].split(None, 1)
        if not parts:
            return "", ""
        return parts[0].lower(), parts[1].strip() if len(parts) > 1 else ""

    async def execute_command(self, text: str) -> ReplAction:
        """Run a command.

        Raises:
            ValueError: On unknown commands or invalid arguments
        """
        name, args = self.parse_command(text)
        handler = self._handlers.get(name)
        if handler is None:
            raise ValueError(f"Unknown command: /{name} (type /help for commands)")
        return await handler(args)

    def _resolve_id(self, args: str) -> str:
        if not args:
            raise ValueError("Message id is required")
        known_ids = [message.id for message in self.engine.messages]
        message_id = resolve_message_id(args, known_ids)
        if message_id is None:
            raise ValueError(f"No single message matches id '{args}'")
        return message_id

    async def show_history(self, args: str) -> ReplAction:
        return PrintAction(format_history(self.engine.messages))

    async def edit_message(self, args: str) -> ReplAction:
        message_id = self._resolve_id(args)
        message = self.engine.find_message(message_id)
        if message is None:
            raise ValueError(f"No single message matches id '{args}'")
        self.engine.begin_edit(message_id, message.content)
        return PrintAction(f"Editing [{message_id}]")

    async def delete_message(self, args: str) -> ReplAction:
        message_id = self._resolve_id(args)
        if await self.engine.delete_turn(message_id):
            return PrintAction(f"Deleted [{message_id}]")
        return PrintAction(f"Could not delete [{message_id}]; see log for details")

    async def new_conversation(self, args: str) -> ReplAction:
        self.engine.reset_conversation()
        return PrintAction("Started a new conversation (stored history kept; use /clear to delete it)")

    async def clear_history(self, args: str) -> ReplAction:
        deleted = await self.engine.clear_history()
        return PrintAction(f"Deleted {deleted} stored message(s)")

    async def export_conversation(self, args: str) -> ReplAction:
        if args:
            export_path = map_path(args)
        else:
            export_path = str(Path(self.exports_dir) / DEFAULT_EXPORT_FILENAME)
        try:
            pages = await save_export(export_path, self.engine.messages, self.export_settings)
        except NothingToExportError as e:
            return PrintAction(str(e))
        return PrintAction(f"Exported {len(self.engine.messages)} message(s), {pages} page(s): {export_path}")

    async def show_help(self, args: str) -> ReplAction:
        return PrintAction(HELP_TEXT)

    async def exit_app(self, args: str) -> ReplAction:
        return BreakAction()
