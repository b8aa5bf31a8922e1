"""JSON document message store."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import aiofiles  # type: ignore[import-untyped]

from ..domain.message import Message, NewMessage, sort_key, utc_now_roundtrip
from ..errors import MessageNotFoundError, StoreError
from ..message_ids import generate_message_id
from .base import next_created_utc


@dataclass(slots=True)
class StoreDocument:
    """Persisted store payload: metadata, messages and every id ever issued."""

    messages: list[Message] = field(default_factory=list)
    issued_ids: set[str] = field(default_factory=set)
    created_utc: str | None = None
    updated_utc: str | None = None

    @classmethod
    def from_raw(cls, raw_document: Any) -> StoreDocument:
        """Create typed store document from raw persisted payload."""
        if not isinstance(raw_document, dict):
            raise ValueError("Invalid store file structure")
        if "messages" not in raw_document:
            raise ValueError("Invalid store file structure")

        raw_messages = raw_document.get("messages")
        if not isinstance(raw_messages, list):
            raise ValueError("Invalid store messages: expected list")
        messages = [
            Message.from_raw(item, index=index)
            for index, item in enumerate(raw_messages)
        ]

        raw_ids = raw_document.get("issued_ids", [])
        if not isinstance(raw_ids, list):
            raise ValueError("Invalid store issued_ids: expected list")
        # Ids of live messages always count as issued.
        issued_ids = {str(value) for value in raw_ids} | {m.id for m in messages}

        metadata = raw_document.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise ValueError("Invalid store metadata: expected object")

        return cls(
            messages=messages,
            issued_ids=issued_ids,
            created_utc=metadata.get("created_utc"),
            updated_utc=metadata.get("updated_utc"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize store document to dict form."""
        return {
            "metadata": {
                "created_utc": self.created_utc,
                "updated_utc": self.updated_utc,
            },
            "messages": [message.to_dict() for message in self.messages],
            "issued_ids": sorted(self.issued_ids),
        }

    @property
    def last_created_utc(self) -> str | None:
        return max((m.created_utc for m in self.messages), default=None)


def load_store_document(path: str) -> StoreDocument:
    """Load store document from JSON file (empty document when missing)."""
    store_path = Path(path)

    if not store_path.exists():
        return StoreDocument()

    try:
        with open(store_path, "r", encoding="utf-8") as f:
            data: Any = json.load(f)
    except json.JSONDecodeError as e:
        raise StoreError(f"Invalid JSON in store file: {e}")
    except UnicodeDecodeError as e:
        raise StoreError(f"Store file is not valid UTF-8: {e}")
    except OSError as e:
        raise StoreError(f"Cannot read store file: {e}")

    try:
        return StoreDocument.from_raw(data)
    except ValueError as e:
        raise StoreError(str(e))


async def save_store_document(path: str, document: StoreDocument) -> None:
    """Save store document to JSON file (async)."""
    store_path = Path(path)
    now_utc = utc_now_roundtrip()
    document.updated_utc = now_utc
    if not document.created_utc:
        document.created_utc = now_utc

    try:
        store_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(store_path, "w", encoding="utf-8") as f:
            json_str = json.dumps(document.to_dict(), indent=2, ensure_ascii=False)
            await f.write(json_str)
    except OSError as e:
        raise StoreError(f"Cannot write store file: {e}")


class JsonMessageStore:
    """Message store persisted as one JSON document on disk.

    The document is loaded lazily and cached. Each mutation is applied to a
    copy, written, and only then becomes the cached state, so a failed write
    leaves the store unchanged.
    """

    def __init__(self, path: str):
        self.path = path
        self._document: StoreDocument | None = None

    def _load(self) -> StoreDocument:
        if self._document is None:
            self._document = load_store_document(self.path)
        return self._document

    async def _commit(
        self,
        messages: list[Message],
        issued_ids: set[str] | None = None,
    ) -> None:
        current = self._load()
        candidate = StoreDocument(
            messages=messages,
            issued_ids=issued_ids if issued_ids is not None else set(current.issued_ids),
            created_utc=current.created_utc,
            updated_utc=current.updated_utc,
        )
        await save_store_document(self.path, candidate)
        self._document = candidate

    def _index_of(self, message_id: str) -> int:
        for index, message in enumerate(self._load().messages):
            if message.id == message_id:
                return index
        raise MessageNotFoundError(message_id)

    async def append(self, draft: NewMessage) -> Message:
        document = self._load()
        issued_ids = set(document.issued_ids)
        message = Message.from_draft(
            draft,
            message_id=generate_message_id(issued_ids),
            created_utc=next_created_utc(document.last_created_utc),
        )
        await self._commit([*document.messages, message], issued_ids)
        return message.copy()

    async def update_content(self, message_id: str, content: str) -> Message:
        index = self._index_of(message_id)
        messages = [m.copy() for m in self._load().messages]
        messages[index].content = content
        await self._commit(messages)
        return messages[index].copy()

    async def delete_by_id(self, message_id: str) -> None:
        index = self._index_of(message_id)
        messages = list(self._load().messages)
        del messages[index]
        await self._commit(messages)

    async def delete_by_relation(self, reply_to: str) -> int:
        messages = self._load().messages
        kept = [m for m in messages if m.reply_to != reply_to]
        deleted = len(messages) - len(kept)
        if deleted:
            await self._commit(kept)
        return deleted

    async def scan_ordered(self) -> list[Message]:
        return [m.copy() for m in sorted(self._load().messages, key=sort_key)]
