"""API key loading for the completion service."""

from .loader import KeyConfig, load_api_key

__all__ = ["KeyConfig", "load_api_key"]
