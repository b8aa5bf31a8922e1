"""groqchat - single-conversation chat client with editable, persisted history."""

__version__ = "0.1.0"
