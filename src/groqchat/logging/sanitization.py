"""Redaction of credentials in log fields and error replies."""

import re

# (pattern, replacement); Groq keys first, then other bearer material that
# can surface in SDK or proxy error text.
_SECRET_PATTERNS = (
    (re.compile(r"gsk_[A-Za-z0-9]{10,}"), "[REDACTED_API_KEY]"),
    (re.compile(r"sk-[A-Za-z0-9]{10,}"), "[REDACTED_API_KEY]"),
    (re.compile(r"Bearer\s+[A-Za-z0-9_\-.]{20,}"), "Bearer [REDACTED_TOKEN]"),
    (re.compile(r"eyJ[\w-]+\.eyJ[\w-]+\.[\w-]+"), "[REDACTED_JWT]"),
)


def sanitize_error_message(error_msg: str) -> str:
    """``error_msg`` with API keys, bearer tokens and JWTs redacted."""
    for pattern, replacement in _SECRET_PATTERNS:
        error_msg = pattern.sub(replacement, error_msg)
    return error_msg
