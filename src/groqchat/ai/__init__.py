"""Completion and image providers."""

from .base import CompletionProvider, ImageProvider
from .groq_provider import GroqProvider
from .image_provider import PollinationsImageProvider

__all__ = [
    "CompletionProvider",
    "GroqProvider",
    "ImageProvider",
    "PollinationsImageProvider",
]
