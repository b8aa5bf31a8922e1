"""Field order of each groqchat log event in the run log."""

from __future__ import annotations

# Path-valued fields are logged as absolute paths.
LOG_PATH_FIELDS = frozenset({
    "profile_file",
    "store_file",
    "log_file",
    "logs_dir",
    "exports_dir",
    "export_file",
})

_ERROR = ("error_type", "error")

EVENT_KEY_ORDER: dict[str, tuple[str, ...]] = {
    # Lifecycle
    "app_start": (
        "provider",
        "model",
        "timeout",
        "ephemeral",
        "profile_file",
        "store_file",
        "log_file",
        "logs_dir",
        "exports_dir",
    ),
    "app_stop": ("reason", "uptime_ms", *_ERROR),
    # Conversation
    "history_load": ("message_count", "result"),
    "turn_submit": ("kind", "message_id", "input_chars"),
    "turn_complete": ("kind", "message_id", "reply_id", "result", "elapsed_ms"),
    "message_edit": ("message_id", "role", "invalidated_replies", "regenerated", "result"),
    "message_delete": ("message_id", "result"),
    "conversation_reset": ("message_count",),
    "history_clear": ("deleted_count", "result"),
    "store_error": ("operation", "message_id", *_ERROR),
    "export_complete": ("export_file", "format", "message_count", "page_count"),
    # REPL
    "command_exec": ("command", "args_summary", "elapsed_ms"),
    "command_error": ("command", "args_summary", *_ERROR),
    "repl_error": _ERROR,
    # Groq
    "ai_request": ("provider", "model", "input_chars", "has_system_prompt"),
    "ai_response": (
        "provider",
        "model",
        "latency_ms",
        "finish_reason",
        "output_chars",
        "input_tokens",
        "output_tokens",
        "total_tokens",
    ),
    "ai_retry": ("provider", "attempt", "sleep_sec", *_ERROR),
    "ai_error": (
        "provider",
        "model",
        "summary",
        "latency_ms",
        "http_method",
        "http_url",
        "http_status",
        *_ERROR,
    ),
    "httpx_request": ("http_method", "http_url", "http_status", "http_reason", "http_version"),
}
