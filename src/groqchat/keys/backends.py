"""Where a Groq API key can live: an environment variable, a JSON file, or the OS keyring."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any

import keyring
from keyring.errors import KeyringError

# Display name and "add a key" command for each platform's keyring backend.
_KEYRING_HELP = {
    "darwin": (
        "macOS Keychain",
        "security add-generic-password -s {service} -a {account} -w <groq-api-key>",
    ),
    "win32": (
        "Windows Credential Manager",
        "cmdkey /generic:{service} /user:{account} /pass:<groq-api-key>",
    ),
}
_DEFAULT_KEYRING_HELP = (
    "system keyring",
    "secret-tool store --label='{service}' service {service} account {account}",
)


def load_from_env(var_name: str) -> str:
    """Groq API key from the environment variable ``var_name``."""
    value = os.environ.get(var_name, "").strip()
    if not value:
        raise ValueError(
            f"Environment variable '{var_name}' not set; "
            f"export {var_name}=<groq-api-key> before starting groqchat"
        )
    return value


def load_from_json(file_path: str, key_name: str) -> str:
    """Groq API key stored in a JSON file; ``key_name`` may be a dotted path."""
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"API key file not found: {file_path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValueError(f"Cannot parse API key file {file_path}: {e}")

    node: Any = data
    for part in key_name.split("."):
        if not isinstance(node, dict) or part not in node:
            top_level = ", ".join(sorted(data)) if isinstance(data, dict) else "none"
            raise ValueError(
                f"Key '{key_name}' not found in {file_path} (top-level keys: {top_level})"
            )
        node = node[part]

    if not isinstance(node, str):
        raise ValueError(f"Key '{key_name}' in {file_path} is not a string")
    return node.strip()


def load_from_keyring(service: str, account: str) -> str:
    """Groq API key saved in the OS keyring under ``service``/``account``."""
    store_name, add_command = _KEYRING_HELP.get(sys.platform, _DEFAULT_KEYRING_HELP)
    try:
        key = keyring.get_password(service, account)
    except KeyringError as e:
        raise ValueError(f"Cannot read {store_name} ({service}/{account}): {e}")

    if not key:
        raise ValueError(
            f"API key not found in {store_name} ({service}/{account}). "
            f"Add it with: {add_command.format(service=service, account=account)}"
        )
    return key
