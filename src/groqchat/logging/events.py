"""Structured event emission and run-log setup.

Every event is one JSON object passed through stdlib logging; the run log's
formatter turns it back into a readable block.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from itertools import count
from pathlib import Path
from typing import Any, Optional

from ..constants import APP_NAME, DATETIME_FORMAT_FILENAME, LOG_FILE_EXTENSION
from .formatter import StructuredTextFormatter
from .schema import LOG_PATH_FIELDS

# Slash-command arguments are ids or export paths; longer input is clipped.
COMMAND_ARGS_MAX_CHARS = 120


def log_event(event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit a structured log event."""
    payload: dict[str, Any] = {
        "ts": datetime.now().astimezone().isoformat(),
        "event": event,
    }
    for key, value in fields.items():
        if key in LOG_PATH_FIELDS and isinstance(value, str) and value.strip():
            value = str(Path(value).expanduser().resolve())
        payload[key] = value
    logging.log(level, json.dumps(payload, ensure_ascii=False, default=str, separators=(",", ":")))


def summarize_command_args(args: str) -> str:
    """Whitespace-collapsed, length-capped command arguments for logs."""
    summary = " ".join(args.split())
    if len(summary) > COMMAND_ARGS_MAX_CHARS:
        return summary[: COMMAND_ARGS_MAX_CHARS - 3] + "..."
    return summary


def build_run_log_path(logs_dir: str) -> str:
    """New log file for this run: ``groqchat_<timestamp>[_<n>].log`` in ``logs_dir``."""
    directory = Path(logs_dir)
    directory.mkdir(parents=True, exist_ok=True)
    stem = f"{APP_NAME}_{datetime.now().strftime(DATETIME_FORMAT_FILENAME)}"

    candidate = directory / f"{stem}{LOG_FILE_EXTENSION}"
    for suffix in count(1):
        if not candidate.exists():
            break
        candidate = directory / f"{stem}_{suffix}{LOG_FILE_EXTENSION}"
    return str(candidate)


def setup_logging(log_file: Optional[str] = None) -> None:
    """Send all records to ``log_file``; without one, logging is switched off."""
    if not log_file:
        logging.disable(logging.CRITICAL)
        return

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(StructuredTextFormatter())
    logging.basicConfig(level=logging.INFO, handlers=[handler], force=True)
