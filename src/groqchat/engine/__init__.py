"""Conversation engine and turn handling."""

from .conversation import ConversationEngine, EditState, TurnResult
from .turns import (
    TURN_COMPLETION,
    TURN_IMAGE,
    TurnKind,
    classify_turn,
    completion_reply,
    error_reply,
    extract_image_subject,
    image_caption,
    is_image_request,
)

__all__ = [
    "ConversationEngine",
    "EditState",
    "TURN_COMPLETION",
    "TURN_IMAGE",
    "TurnKind",
    "TurnResult",
    "classify_turn",
    "completion_reply",
    "error_reply",
    "extract_image_subject",
    "image_caption",
    "is_image_request",
]
