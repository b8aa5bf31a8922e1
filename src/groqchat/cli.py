"""CLI bootstrap entry point for groqchat."""

import argparse
import asyncio
import logging
import sys
import time
from typing import NoReturn, cast

from . import profile
from .ai import GroqProvider, PollinationsImageProvider
from .domain.profile import RuntimeProfile
from .engine import ConversationEngine
from .errors import ProfileError
from .export import ExportSettings
from .keys import KeyConfig, load_api_key
from .logging import (
    build_run_log_path,
    log_event,
    sanitize_error_message,
    setup_logging,
)
from .path_utils import map_path
from .repl import CommandHandler, repl_loop
from .store import InMemoryMessageStore, JsonMessageStore, MessageStore

__all__ = ["build_engine", "load_runtime_profile", "main", "sanitize_error_message"]

USAGE_RUN = "groqchat -p <profile-path> [-l <log-path>] [--ephemeral]"
USAGE_INIT = "groqchat init -p <profile-path>"


def load_runtime_profile(profile_path: str) -> RuntimeProfile:
    """Load, validate and type the profile at ``profile_path``.

    Raises:
        ProfileError: If the profile is missing or invalid
    """
    try:
        return RuntimeProfile.from_dict(profile.load_profile(profile_path))
    except (FileNotFoundError, ValueError) as e:
        raise ProfileError(str(e)) from e


def build_engine(runtime_profile: RuntimeProfile, *, ephemeral: bool = False) -> ConversationEngine:
    """Wire store and providers for a run.

    Raises:
        ProfileError: If the API key cannot be loaded
    """
    try:
        api_key = load_api_key(cast(KeyConfig, runtime_profile.api_key))
    except (FileNotFoundError, ValueError) as e:
        raise ProfileError(str(e)) from e

    store: MessageStore
    if ephemeral:
        store = InMemoryMessageStore()
    else:
        store = JsonMessageStore(runtime_profile.store_file)

    completion_provider = GroqProvider(
        api_key=api_key,
        model=runtime_profile.model,
        timeout=runtime_profile.timeout,
        base_url=runtime_profile.base_url,
        system_prompt=runtime_profile.system_prompt,
    )
    return ConversationEngine(store, completion_provider, PollinationsImageProvider())


def _fail(*lines: str) -> NoReturn:
    for line in lines:
        print(line)
    sys.exit(1)


def _resolve_arg(path: str, arg_name: str) -> str:
    """``path`` mapped through ``~``/``@`` prefixes, naming ``arg_name`` on failure."""
    try:
        return cast(str, map_path(path))
    except ValueError as e:
        raise ValueError(f"Invalid {arg_name} path: {e}") from e


def _uptime_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 1)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="groqchat",
        description="Chat with Groq models and generate images from the terminal",
    )
    parser.add_argument("-p", "--profile", help="profile JSON file (init writes a template here)")
    parser.add_argument("-l", "--log", help="log file for this run (default: new file in logs_dir)")
    parser.add_argument(
        "--ephemeral",
        action="store_true",
        help="keep the conversation in memory; the store file is neither read nor written",
    )
    parser.add_argument("command", nargs="?", help="optional command; only 'init' is known")
    return parser


def _init_profile(profile_arg: str | None) -> NoReturn:
    if not profile_arg:
        _fail("Error: -p/--profile is required for init command", f"Usage: {USAGE_INIT}")
    try:
        _, messages = profile.create_profile(_resolve_arg(profile_arg, "profile"))
    except ValueError as e:
        _fail(f"Error: {e}")
    except OSError as e:
        _fail(f"Error creating profile: {e}")
    print("\n".join(messages))
    sys.exit(0)


def _chat(args: argparse.Namespace) -> None:
    profile_path = _resolve_arg(args.profile, "profile")
    log_path = _resolve_arg(args.log, "log") if args.log else None

    runtime_profile = load_runtime_profile(profile_path)
    log_path = log_path or build_run_log_path(runtime_profile.logs_dir)
    setup_logging(log_path)

    engine = build_engine(runtime_profile, ephemeral=args.ephemeral)
    store_file = None if args.ephemeral else runtime_profile.store_file
    log_event(
        "app_start",
        level=logging.INFO,
        provider="groq",
        model=runtime_profile.model,
        profile_file=profile_path,
        store_file=store_file,
        log_file=log_path,
        logs_dir=runtime_profile.logs_dir,
        exports_dir=runtime_profile.exports_dir,
        timeout=runtime_profile.timeout,
        ephemeral=args.ephemeral,
    )

    handler = CommandHandler(
        engine,
        exports_dir=runtime_profile.exports_dir,
        export_settings=ExportSettings.from_profile(runtime_profile.export),
    )
    asyncio.run(
        repl_loop(
            engine,
            model=runtime_profile.model,
            timeout=runtime_profile.timeout,
            exports_dir=runtime_profile.exports_dir,
            store_label=store_file or "memory only",
            command_handler=handler,
        )
    )


def main() -> None:
    """Entry point of the ``groqchat`` script."""
    args = _build_parser().parse_args()

    if args.command == "init":
        _init_profile(args.profile)
    if args.command:
        _fail(
            f"Error: unknown command '{args.command}'",
            "Supported commands: init",
            f"Usage:\n  {USAGE_INIT}\n  {USAGE_RUN}",
        )
    if not args.profile:
        _fail("Error: -p/--profile is required", f"Usage: {USAGE_RUN}")

    started = time.perf_counter()
    try:
        _chat(args)
    except KeyboardInterrupt:
        log_event("app_stop", level=logging.INFO, reason="keyboard_interrupt", uptime_ms=_uptime_ms(started))
        print("\nInterrupted")
        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}")
        log_event(
            "app_stop",
            level=logging.ERROR,
            reason="fatal_error",
            error_type=type(e).__name__,
            error=sanitize_error_message(str(e)),
            uptime_ms=_uptime_ms(started),
        )
        logging.error("Fatal error: %s", e, exc_info=True)
        sys.exit(1)
    log_event("app_stop", level=logging.INFO, reason="normal", uptime_ms=_uptime_ms(started))


if __name__ == "__main__":
    main()
