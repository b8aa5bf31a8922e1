"""Run-log formatter: one readable block per event."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from .schema import EVENT_KEY_ORDER

# httpx logs each request as 'HTTP Request: %s %s "%s %d %s"'.
HTTPX_REQUEST_FORMAT = 'HTTP Request: %s %s "%s %d %s"'
HTTPX_REQUEST_FIELDS = ("http_method", "http_url", "http_version", "http_status", "http_reason")


def decode_record(record: logging.LogRecord) -> tuple[str, dict[str, Any]]:
    """Event name and fields carried by a record.

    JSON payloads from ``log_event`` are unpacked, httpx request lines are
    split into fields, and any other record becomes a ``message`` field under
    its logger name.
    """
    message = record.getMessage()
    if message.startswith("{"):
        try:
            payload = json.loads(message)
        except ValueError:
            payload = None
        if isinstance(payload, dict) and "event" in payload:
            fields = dict(payload)
            return str(fields.pop("event")), fields

    if record.name == "httpx" and record.msg == HTTPX_REQUEST_FORMAT:
        return "httpx_request", dict(zip(HTTPX_REQUEST_FIELDS, record.args or ()))

    return record.name, {"message": message}


def _one_line(value: Any) -> str:
    return str(value).replace("\n", "\\n")


class StructuredTextFormatter(logging.Formatter):
    """Renders each event as a header line followed by ``key: value`` lines.

    Keys listed for the event in ``EVENT_KEY_ORDER`` come first; the rest
    follow alphabetically. ``None`` values are skipped and newlines inside
    values are escaped so each field stays on one line.
    """

    def __init__(self) -> None:
        super().__init__()
        self._entries = 0

    def format(self, record: logging.LogRecord) -> str:
        event, fields = decode_record(record)
        ts = fields.pop("ts", None) or datetime.now().astimezone().isoformat()

        present = {key: value for key, value in fields.items() if value is not None}
        preferred = [key for key in EVENT_KEY_ORDER.get(event, ()) if key in present]
        rest = sorted(key for key in present if key not in preferred)

        lines = [f"[{ts}] {record.levelname} {event}"]
        lines += [f"  {key}: {_one_line(present[key])}" for key in preferred + rest]
        if record.exc_info:
            lines.append(self.formatException(record.exc_info))

        self._entries += 1
        block = "\n".join(lines)
        return block if self._entries == 1 else "\n" + block
