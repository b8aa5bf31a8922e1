"""Process-local message store."""

from __future__ import annotations

from ..domain.message import Message, NewMessage, sort_key
from ..errors import MessageNotFoundError, StoreError
from ..message_ids import generate_message_id
from .base import next_created_utc


class InMemoryMessageStore:
    """Message store kept in process memory.

    Used for ephemeral sessions and tests. ``fail_on`` names operations
    (``append``, ``update_content``, ``delete_by_id``, ``delete_by_relation``,
    ``scan_ordered``) that raise ``StoreError`` instead of running.
    """

    def __init__(
        self,
        messages: list[Message] | None = None,
        *,
        fail_on: set[str] | None = None,
    ):
        self._messages: list[Message] = [m.copy() for m in messages or []]
        self._issued_ids: set[str] = {m.id for m in self._messages}
        self._last_created_utc: str | None = max(
            (m.created_utc for m in self._messages), default=None
        )
        self.fail_on: set[str] = set(fail_on or ())

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise StoreError(f"{operation} failed (injected)")

    def _find(self, message_id: str) -> Message:
        for message in self._messages:
            if message.id == message_id:
                return message
        raise MessageNotFoundError(message_id)

    async def append(self, draft: NewMessage) -> Message:
        self._check("append")
        created_utc = next_created_utc(self._last_created_utc)
        message = Message.from_draft(
            draft,
            message_id=generate_message_id(self._issued_ids),
            created_utc=created_utc,
        )
        self._last_created_utc = created_utc
        self._messages.append(message)
        return message.copy()

    async def update_content(self, message_id: str, content: str) -> Message:
        self._check("update_content")
        message = self._find(message_id)
        message.content = content
        return message.copy()

    async def delete_by_id(self, message_id: str) -> None:
        self._check("delete_by_id")
        message = self._find(message_id)
        self._messages.remove(message)

    async def delete_by_relation(self, reply_to: str) -> int:
        self._check("delete_by_relation")
        kept = [m for m in self._messages if m.reply_to != reply_to]
        deleted = len(self._messages) - len(kept)
        self._messages = kept
        return deleted

    async def scan_ordered(self) -> list[Message]:
        self._check("scan_ordered")
        return [m.copy() for m in sorted(self._messages, key=sort_key)]
