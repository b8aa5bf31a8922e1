"""Message store contract shared by the engine and store backends."""

from __future__ import annotations

from typing import Protocol

from ..domain.message import Message, NewMessage, utc_now_roundtrip


class MessageStore(Protocol):
    """Durable ordered message log.

    Every method raises ``StoreError`` on failure; update and delete-by-id
    raise ``MessageNotFoundError`` for unknown ids.
    """

    async def append(self, draft: NewMessage) -> Message:
        """Persist a new message, assigning its id and creation timestamp."""

    async def update_content(self, message_id: str, content: str) -> Message:
        """Replace message content; id and timestamp are preserved."""

    async def delete_by_id(self, message_id: str) -> None:
        """Delete one message."""

    async def delete_by_relation(self, reply_to: str) -> int:
        """Delete every message whose ``reply_to`` equals the given id."""

    async def scan_ordered(self) -> list[Message]:
        """Return all messages ascending by creation timestamp."""


def next_created_utc(last_created_utc: str | None) -> str:
    """Return a creation timestamp never earlier than the last one issued."""
    now = utc_now_roundtrip()
    if last_created_utc and last_created_utc > now:
        return last_created_utc
    return now
