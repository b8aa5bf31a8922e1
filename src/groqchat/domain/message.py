"""Typed message models and serialization helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
ROLES = (ROLE_USER, ROLE_ASSISTANT)

_KNOWN_MESSAGE_KEYS = {
    "id",
    "role",
    "content",
    "image",
    "created_utc",
    "reply_to",
}


def utc_now_roundtrip() -> str:
    """Return a high-precision UTC timestamp with explicit UTC marker."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace(
        "+00:00", "Z"
    )


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


@dataclass(slots=True, frozen=True)
class NewMessage:
    """Message draft handed to a store; the store assigns id and timestamp."""

    role: str
    content: str
    image: str | None = None
    reply_to: str | None = None

    @classmethod
    def user(cls, content: str) -> NewMessage:
        """Create a user message draft."""
        return cls(role=ROLE_USER, content=content)

    @classmethod
    def assistant(
        cls,
        content: str,
        *,
        reply_to: str | None = None,
        image: str | None = None,
    ) -> NewMessage:
        """Create an assistant message draft."""
        return cls(role=ROLE_ASSISTANT, content=content, image=image, reply_to=reply_to)


@dataclass(slots=True)
class Message:
    """Stored message in the conversation log."""

    id: str
    role: str
    content: str
    created_utc: str
    image: str | None = None
    reply_to: str | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    @property
    def is_user(self) -> bool:
        return self.role == ROLE_USER

    @property
    def is_assistant(self) -> bool:
        return self.role == ROLE_ASSISTANT

    @classmethod
    def from_draft(cls, draft: NewMessage, *, message_id: str, created_utc: str) -> Message:
        """Materialize a draft with store-assigned identity."""
        return cls(
            id=message_id,
            role=draft.role,
            content=draft.content,
            created_utc=created_utc,
            image=draft.image,
            reply_to=draft.reply_to,
        )

    @classmethod
    def from_raw(cls, raw_message: Any, *, index: int | None = None) -> Message:
        """Create a typed message from raw dict payload."""
        idx = f" at index {index}" if index is not None else ""
        if not isinstance(raw_message, dict):
            raise ValueError(f"Invalid message{idx}: expected object")
        if not raw_message.get("id"):
            raise ValueError(f"Invalid message{idx}: missing id")
        if "content" not in raw_message:
            raise ValueError(f"Invalid message{idx}: missing content")

        role = str(raw_message.get("role", ""))
        if role not in ROLES:
            raise ValueError(f"Invalid message{idx}: unknown role '{role}'")

        content = raw_message.get("content")
        if isinstance(content, list):
            # Line arrays are accepted and joined back into text.
            content = "\n".join(str(part) for part in content)
        elif not isinstance(content, str):
            raise ValueError(f"Invalid message{idx}: content must be a string")

        extras = {
            key: value
            for key, value in raw_message.items()
            if key not in _KNOWN_MESSAGE_KEYS
        }

        return cls(
            id=str(raw_message["id"]),
            role=role,
            content=content,
            created_utc=str(raw_message.get("created_utc") or ""),
            image=_optional_str(raw_message.get("image")),
            reply_to=_optional_str(raw_message.get("reply_to")),
            extras=extras,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize message to persisted dict shape."""
        payload: dict[str, Any] = {
            "id": self.id,
            "created_utc": self.created_utc,
            "role": self.role,
            "content": self.content,
        }
        if self.image is not None:
            payload["image"] = self.image
        if self.reply_to is not None:
            payload["reply_to"] = self.reply_to
        payload.update(self.extras)
        return payload

    def copy(self) -> Message:
        """Return a detached copy safe to hand out of a store."""
        return Message(
            id=self.id,
            role=self.role,
            content=self.content,
            created_utc=self.created_utc,
            image=self.image,
            reply_to=self.reply_to,
            extras=dict(self.extras),
        )


def sort_key(message: Message) -> str:
    """Ordering key for the conversation log (creation time)."""
    return message.created_utc
