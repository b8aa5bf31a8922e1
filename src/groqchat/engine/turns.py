"""Turn classification and the fixed reply texts the engine writes."""

from __future__ import annotations

import re
from typing import Literal

from ..constants import (
    EMPTY_COMPLETION_TEXT,
    ERROR_REPLY_TEMPLATE,
    IMAGE_CAPTION_TEMPLATE,
    IMAGE_STRIP_TOKENS,
    IMAGE_TRIGGER_TOKEN,
)

TurnKind = Literal["image", "completion"]

TURN_IMAGE: TurnKind = "image"
TURN_COMPLETION: TurnKind = "completion"

_STRIP_PATTERN = re.compile(
    "|".join(re.escape(token) for token in IMAGE_STRIP_TOKENS),
    re.IGNORECASE,
)


def is_image_request(text: str) -> bool:
    """Return True when the input asks for an image."""
    return IMAGE_TRIGGER_TOKEN in text.lower()


def classify_turn(text: str) -> TurnKind:
    """Classify user input as an image turn or a completion turn."""
    return TURN_IMAGE if is_image_request(text) else TURN_COMPLETION


def extract_image_subject(text: str) -> str:
    """Derive the image subject by removing the request tokens.

    Tokens are removed as plain substrings, wherever they occur.

    >>> extract_image_subject("Generate IMAGE of a cat")
    'a cat'
    """
    return _STRIP_PATTERN.sub("", text).strip()


def image_caption(subject: str) -> str:
    """Caption stored as the content of an image reply."""
    return IMAGE_CAPTION_TEMPLATE.format(subject=subject)


def error_reply(reason: str) -> str:
    """Visible assistant text for a failed completion."""
    return ERROR_REPLY_TEMPLATE.format(reason=reason)


def completion_reply(text: str | None) -> str:
    """Reply text for a successful completion; empty output is made visible."""
    return text if text else EMPTY_COMPLETION_TEXT
