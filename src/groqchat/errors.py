"""Typed exceptions for groqchat."""


class GroqChatError(Exception):
    """Base exception for groqchat failures."""


class ProfileError(GroqChatError):
    """Raised when the profile file is missing or invalid."""


class StoreError(GroqChatError):
    """Raised when the message store cannot be read or written."""


class MessageNotFoundError(StoreError):
    """Raised when a store operation targets an unknown message id."""

    def __init__(self, message_id: str):
        super().__init__(f"Message not found: {message_id}")
        self.message_id = message_id


class CompletionError(GroqChatError):
    """Raised when the completion service fails to produce a reply."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class NothingToExportError(GroqChatError):
    """Raised when an export is requested for an empty conversation."""

    def __init__(self, message: str = "No messages to export!"):
        super().__init__(message)
