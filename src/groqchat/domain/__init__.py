"""Typed domain models for messages and runtime configuration."""

from .message import ROLE_ASSISTANT, ROLE_USER, ROLES, Message, NewMessage, sort_key
from .profile import RuntimeProfile

__all__ = [
    "ROLE_ASSISTANT",
    "ROLE_USER",
    "ROLES",
    "Message",
    "NewMessage",
    "RuntimeProfile",
    "sort_key",
]
