"""Provider contracts consumed by the conversation engine."""

from __future__ import annotations

from typing import Protocol


class CompletionProvider(Protocol):
    """Text-generation service.

    ``complete`` returns the reply text or raises ``CompletionError`` with a
    user-presentable reason.
    """

    async def complete(self, text: str) -> str:
        """Generate a reply to a single user message."""


class ImageProvider(Protocol):
    """Prompt-to-image-URL derivation (pure, no failure modeled)."""

    def url_for(self, prompt: str) -> str:
        """Return the image URL for a prompt."""
