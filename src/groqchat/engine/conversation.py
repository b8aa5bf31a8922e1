"""Conversation engine: the in-memory log and its mirror in the message store.

The engine is the only writer to the store while the app runs. Each
operation awaits its store and provider calls in order and leaves the
in-memory log equal to the store log when it returns. Store and provider
failures are handled at the call site; none propagates to the caller.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from ..ai.base import CompletionProvider, ImageProvider
from ..domain.message import Message, NewMessage
from ..errors import CompletionError, StoreError
from ..logging import log_event, sanitize_error_message
from ..store.base import MessageStore
from .turns import (
    TURN_IMAGE,
    TurnKind,
    classify_turn,
    completion_reply,
    error_reply,
    extract_image_subject,
    image_caption,
)


@dataclass(slots=True, frozen=True)
class EditState:
    """Message currently being edited and its draft text."""

    message_id: str
    draft: str


@dataclass(slots=True, frozen=True)
class TurnResult:
    """Messages written by one submitted user turn."""

    user_message: Message
    reply: Optional[Message]
    kind: TurnKind


class ConversationEngine:
    """Owns the ordered message log shown to the user."""

    def __init__(
        self,
        store: MessageStore,
        completion_provider: CompletionProvider,
        image_provider: ImageProvider,
    ):
        self.store = store
        self.completion_provider = completion_provider
        self.image_provider = image_provider
        self._messages: list[Message] = []
        self.editing: Optional[EditState] = None
        self.loading = False
        self.input_buffer = ""

    @property
    def messages(self) -> tuple[Message, ...]:
        """Current log in creation order."""
        return tuple(self._messages)

    def find_message(self, message_id: str) -> Optional[Message]:
        for message in self._messages:
            if message.id == message_id:
                return message
        return None

    # ===================================================================
    # History
    # ===================================================================

    async def load_history(self) -> tuple[Message, ...]:
        """Replace the in-memory log with the stored log.

        A store read failure yields an empty conversation.
        """
        try:
            messages = await self.store.scan_ordered()
            result = "ok"
        except StoreError as e:
            self._log_store_error("scan_ordered", e)
            messages = []
            result = "store_error"

        self._messages = list(messages)
        log_event(
            "history_load",
            level=logging.INFO if result == "ok" else logging.WARNING,
            message_count=len(self._messages),
            result=result,
        )
        return self.messages

    def reset_conversation(self) -> None:
        """Clear the local view; the stored log is kept."""
        message_count = len(self._messages)
        self._messages = []
        self.editing = None
        self.input_buffer = ""
        log_event("conversation_reset", level=logging.INFO, message_count=message_count)

    async def clear_history(self) -> int:
        """Delete every stored message, then clear the view.

        Stops at the first store failure; messages already deleted are also
        removed from the view. Returns the number of deleted messages.
        """
        try:
            stored = await self.store.scan_ordered()
        except StoreError as e:
            self._log_store_error("scan_ordered", e)
            log_event("history_clear", level=logging.WARNING, deleted_count=0, result="store_error")
            return 0

        deleted_ids: set[str] = set()
        for message in stored:
            try:
                await self.store.delete_by_id(message.id)
            except StoreError as e:
                self._log_store_error("delete_by_id", e, message_id=message.id)
                self._messages = [m for m in self._messages if m.id not in deleted_ids]
                log_event(
                    "history_clear",
                    level=logging.WARNING,
                    deleted_count=len(deleted_ids),
                    result="store_error",
                )
                return len(deleted_ids)
            deleted_ids.add(message.id)

        self.reset_conversation()
        log_event("history_clear", level=logging.INFO, deleted_count=len(deleted_ids), result="ok")
        return len(deleted_ids)

    # ===================================================================
    # Turns
    # ===================================================================

    async def submit_user_turn(self, text: Optional[str] = None) -> Optional[TurnResult]:
        """Append a user message and its assistant reply.

        ``text`` defaults to the pending input buffer. Blank input, or a
        submission while another operation is in flight, is ignored and
        returns None. The input buffer and loading flag are cleared
        whichever branch is taken.
        """
        if text is None:
            text = self.input_buffer
        if not text.strip() or self.loading:
            return None

        self.loading = True
        started = time.perf_counter()
        try:
            user_message = await self._append(NewMessage.user(text))
            if user_message is None:
                return None

            kind = classify_turn(text)
            log_event(
                "turn_submit",
                level=logging.INFO,
                kind=kind,
                message_id=user_message.id,
                input_chars=len(text),
            )

            if kind == TURN_IMAGE:
                reply = await self._append_image_reply(user_message.id, text)
            else:
                reply = await self._append_completion_reply(user_message.id, text)

            log_event(
                "turn_complete",
                level=logging.INFO,
                kind=kind,
                message_id=user_message.id,
                reply_id=reply.id if reply else None,
                result="ok" if reply else "store_error",
                elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            return TurnResult(kind=kind, user_message=user_message, reply=reply)
        finally:
            self.input_buffer = ""
            self.loading = False

    async def _append(self, draft: NewMessage) -> Optional[Message]:
        try:
            stored = await self.store.append(draft)
        except StoreError as e:
            self._log_store_error("append", e, message_id=draft.reply_to)
            return None
        self._messages.append(stored)
        return stored

    async def _append_image_reply(self, user_message_id: str, text: str) -> Optional[Message]:
        subject = extract_image_subject(text)
        url = self.image_provider.url_for(subject)
        return await self._append(
            NewMessage.assistant(image_caption(subject), reply_to=user_message_id, image=url)
        )

    async def _append_completion_reply(self, user_message_id: str, text: str) -> Optional[Message]:
        # Only the triggering message is sent; earlier turns are not context.
        try:
            content = completion_reply(await self.completion_provider.complete(text))
        except CompletionError as e:
            content = error_reply(e.reason)
        except Exception as e:
            log_event(
                "ai_error",
                level=logging.ERROR,
                error_type=type(e).__name__,
                error=sanitize_error_message(str(e)),
            )
            content = error_reply(sanitize_error_message(str(e)) or type(e).__name__)
        return await self._append(NewMessage.assistant(content, reply_to=user_message_id))

    # ===================================================================
    # Editing
    # ===================================================================

    def begin_edit(self, message_id: str, current_text: str) -> None:
        """Mark a message as the edit target; the log is untouched."""
        self.editing = EditState(message_id=message_id, draft=current_text)

    def update_draft(self, text: str) -> None:
        """Replace the draft text of the active edit."""
        if self.editing is None:
            raise ValueError("No edit in progress")
        self.editing = EditState(message_id=self.editing.message_id, draft=text)

    def cancel_edit(self) -> None:
        """Drop the edit target and its draft."""
        self.editing = None

    async def commit_edit(self, message_id: str, draft_text: str) -> bool:
        """Persist an edit and re-answer edited user messages.

        Editing a user message deletes every reply linked to it and requests a
        new completion for the new text. Editing an assistant message only
        changes its content. On a store failure the edit target stays active
        and nothing further is attempted. Returns True on success.
        """
        target = self.find_message(message_id)
        if target is None:
            log_event("message_edit", level=logging.WARNING, message_id=message_id, result="not_found")
            return False
        if not draft_text.strip():
            log_event("message_edit", level=logging.WARNING, message_id=message_id, result="empty_draft")
            return False

        self.loading = True
        try:
            try:
                updated = await self.store.update_content(message_id, draft_text)
            except StoreError as e:
                self._log_store_error("update_content", e, message_id=message_id)
                log_event("message_edit", level=logging.WARNING, message_id=message_id, result="store_error")
                return False
            self._replace(updated)

            invalidated = 0
            if target.is_user:
                try:
                    invalidated = await self.store.delete_by_relation(message_id)
                except StoreError as e:
                    self._log_store_error("delete_by_relation", e, message_id=message_id)
                    log_event(
                        "message_edit",
                        level=logging.WARNING,
                        message_id=message_id,
                        role=target.role,
                        result="store_error",
                    )
                    return False
                self._messages = [m for m in self._messages if m.reply_to != message_id]
                await self._append_completion_reply(message_id, draft_text)

            self.editing = None
            log_event(
                "message_edit",
                level=logging.INFO,
                message_id=message_id,
                role=target.role,
                invalidated_replies=invalidated,
                regenerated=target.is_user,
                result="ok",
            )
            return True
        finally:
            self.loading = False

    def _replace(self, updated: Message) -> None:
        for index, message in enumerate(self._messages):
            if message.id == updated.id:
                self._messages[index] = updated
                return

    # ===================================================================
    # Deletion
    # ===================================================================

    async def delete_turn(self, message_id: str) -> bool:
        """Delete one message; replies linked to it are kept."""
        try:
            await self.store.delete_by_id(message_id)
        except StoreError as e:
            self._log_store_error("delete_by_id", e, message_id=message_id)
            log_event("message_delete", level=logging.WARNING, message_id=message_id, result="store_error")
            return False

        self._messages = [m for m in self._messages if m.id != message_id]
        if self.editing is not None and self.editing.message_id == message_id:
            self.editing = None
        log_event("message_delete", level=logging.INFO, message_id=message_id, result="ok")
        return True

    @staticmethod
    def _log_store_error(operation: str, error: Exception, message_id: Optional[str] = None) -> None:
        log_event(
            "store_error",
            level=logging.ERROR,
            operation=operation,
            message_id=message_id,
            error_type=type(error).__name__,
            error=str(error),
        )
