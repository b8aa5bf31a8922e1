"""Main groqchat REPL event loop."""

from __future__ import annotations

import logging
import time

from prompt_toolkit import PromptSession

from ..engine import ConversationEngine, TurnResult
from ..logging import log_event, summarize_command_args
from ..timeouts import format_timeout
from .actions import BreakAction, PrintAction
from .commands import CommandHandler
from .display import format_edit_banner, format_message, print_startup_banner
from .input import create_prompt_session


def print_turn(result: TurnResult | None) -> None:
    if result is None:
        print("Message was not saved; see log for details")
        return
    if result.reply is None:
        print("Reply could not be saved; see log for details")
        return
    print()
    print(format_message(result.reply))


async def run_edit_prompt(session: PromptSession, engine: ConversationEngine) -> None:
    """Prompt for the active edit's new text and commit it.

    Empty input or Ctrl+C cancels the edit. A failed commit keeps the edit
    active, so the loop prompts again.
    """
    editing = engine.editing
    if editing is None:
        return

    print(format_edit_banner(editing))
    try:
        text = await session.prompt_async("edit> ", default=editing.draft)
    except KeyboardInterrupt:
        engine.cancel_edit()
        print("Edit cancelled")
        return

    if not text.strip():
        engine.cancel_edit()
        print("Edit cancelled")
        return

    target = engine.find_message(editing.message_id)
    if target is None:
        engine.cancel_edit()
        print(f"Message [{editing.message_id}] no longer exists")
        return

    engine.update_draft(text)
    if not await engine.commit_edit(editing.message_id, text):
        print("Edit was not saved; try again or cancel with empty input")
        return

    print(f"Saved [{editing.message_id}]")
    if target.is_user:
        replies = [m for m in engine.messages if m.reply_to == editing.message_id]
        for reply in replies:
            print()
            print(format_message(reply))


async def repl_loop(
    engine: ConversationEngine,
    *,
    model: str,
    timeout: int | float,
    exports_dir: str,
    store_label: str,
    command_handler: CommandHandler | None = None,
) -> None:
    """Run the REPL loop."""
    await engine.load_history()
    cmd_handler = command_handler or CommandHandler(engine, exports_dir=exports_dir)

    prompt_session = create_prompt_session()
    print_startup_banner(
        model=model,
        timeout=format_timeout(timeout),
        store_label=store_label,
        message_count=len(engine.messages),
    )

    while True:
        try:
            print()
            if engine.editing is not None:
                await run_edit_prompt(prompt_session, engine)
                continue

            user_input = await prompt_session.prompt_async(
                "> ",
                multiline=True,
                prompt_continuation=lambda width, line_number, is_soft_wrap: "  ",
            )

            if not user_input.strip():
                continue

            if cmd_handler.is_command(user_input):
                command_name, command_args = cmd_handler.parse_command(user_input)
                try:
                    command_started = time.perf_counter()
                    action = await cmd_handler.execute_command(user_input)
                    log_event(
                        "command_exec",
                        level=logging.INFO,
                        command=command_name,
                        args_summary=summarize_command_args(command_args),
                        elapsed_ms=round((time.perf_counter() - command_started) * 1000, 1),
                    )
                except (ValueError, OSError) as error:
                    log_event(
                        "command_error",
                        level=logging.ERROR,
                        command=command_name,
                        args_summary=summarize_command_args(command_args),
                        error_type=type(error).__name__,
                        error=str(error),
                    )
                    print(f"Error: {error}")
                    continue

                if isinstance(action, BreakAction):
                    print("Goodbye!")
                    break
                if isinstance(action, PrintAction):
                    print(action.message)
                continue

            print_turn(await engine.submit_user_turn(user_input))

        except EOFError:
            print("Goodbye!")
            break

        except KeyboardInterrupt:
            # Ctrl+C at the prompt clears the current line and returns a
            # fresh prompt.
            continue

        except Exception as error:
            log_event(
                "repl_error",
                level=logging.ERROR,
                error_type=type(error).__name__,
                error=str(error),
            )
            logging.error("Unexpected REPL error: %s", error, exc_info=True)
            print(f"Error: {error}")
