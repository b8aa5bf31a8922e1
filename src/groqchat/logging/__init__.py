"""Structured logging primitives for groqchat."""

from .events import build_run_log_path, log_event, setup_logging, summarize_command_args
from .formatter import StructuredTextFormatter, decode_record
from .sanitization import sanitize_error_message
from .schema import EVENT_KEY_ORDER, LOG_PATH_FIELDS

__all__ = [
    "EVENT_KEY_ORDER",
    "LOG_PATH_FIELDS",
    "StructuredTextFormatter",
    "build_run_log_path",
    "decode_record",
    "log_event",
    "sanitize_error_message",
    "setup_logging",
    "summarize_command_args",
]
