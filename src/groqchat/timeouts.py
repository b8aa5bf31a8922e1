"""Request timeouts and retry pacing for Groq completion calls.

The profile's ``timeout`` is the read limit for one completion request, in
seconds. ``0`` means the client waits for Groq indefinitely.
"""

from __future__ import annotations

import httpx


DEFAULT_PROFILE_TIMEOUT_SEC = 30

# Fixed limits for the parts of a request the profile does not control.
GROQ_CONNECT_TIMEOUT_SEC = 10.0
GROQ_WRITE_TIMEOUT_SEC = 15.0
GROQ_POOL_TIMEOUT_SEC = 5.0

COMPLETION_RETRY_ATTEMPTS = 3
COMPLETION_BACKOFF_INITIAL_SEC = 1.0
COMPLETION_BACKOFF_MAX_SEC = 30.0


def completion_timeout(read_timeout_sec: int | float) -> httpx.Timeout | None:
    """Client timeout for completion requests; None when the read limit is 0."""
    if read_timeout_sec <= 0:
        return None
    return httpx.Timeout(
        connect=GROQ_CONNECT_TIMEOUT_SEC,
        read=float(read_timeout_sec),
        write=GROQ_WRITE_TIMEOUT_SEC,
        pool=GROQ_POOL_TIMEOUT_SEC,
    )


def format_timeout(timeout: int | float) -> str:
    if timeout == 0:
        return "none (waits for Groq indefinitely)"
    return f"{timeout:g}s per reply"
