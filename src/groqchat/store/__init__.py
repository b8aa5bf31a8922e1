"""Message store backends."""

from .base import MessageStore, next_created_utc
from .json_store import JsonMessageStore, StoreDocument, load_store_document, save_store_document
from .memory_store import InMemoryMessageStore

__all__ = [
    "InMemoryMessageStore",
    "JsonMessageStore",
    "MessageStore",
    "StoreDocument",
    "load_store_document",
    "next_created_utc",
    "save_store_document",
]
