"""Resolve the profile's ``api_key`` section to a Groq API key."""

from typing import Callable, Required, TypedDict

from .backends import load_from_env, load_from_json, load_from_keyring


class KeyConfig(TypedDict, total=False):
    """``api_key`` section of a profile; ``type`` picks the other fields.

    ``{"type": "env", "key": "GROQ_API_KEY"}``,
    ``{"type": "json", "path": "~/.secrets/keys.json", "key": "groq"}``,
    ``{"type": "keychain", "service": "groqchat", "account": "groq"}``
    (``credential`` is an alias), or ``{"type": "direct", "value": "gsk_..."}``
    for tests.
    """

    type: Required[str]
    key: str
    value: str
    service: str
    account: str
    path: str


_LOADERS: dict[str, Callable[[KeyConfig], str]] = {
    "direct": lambda config: config["value"],
    "env": lambda config: load_from_env(config["key"]),
    "json": lambda config: load_from_json(config["path"], config["key"]),
    "keychain": lambda config: load_from_keyring(config["service"], config["account"]),
    "credential": lambda config: load_from_keyring(config["service"], config["account"]),
}


def load_api_key(config: KeyConfig) -> str:
    """Groq API key described by ``config``.

    Raises:
        ValueError: If the type is unknown or the key cannot be read
        FileNotFoundError: If a ``json`` key file does not exist
    """
    loader = _LOADERS.get(config.get("type", ""))
    if loader is None:
        raise ValueError(f"Unknown API key type '{config.get('type')}'")
    return loader(config)
