"""Reading, checking and scaffolding profile JSON files.

Paths inside a profile go through :func:`groqchat.path_utils.map_path`, so
they may start with ``~`` or ``@`` but are never relative.
"""

import json
import math
from pathlib import Path
from typing import Any

from .constants import (
    DEFAULT_API_KEY_ENV,
    DEFAULT_EXPORTS_DIR,
    DEFAULT_LOGS_DIR,
    DEFAULT_MODEL,
    DEFAULT_STORE_FILE,
    GROQ_BASE_URL,
)
from .domain.profile import REQUIRED_PROFILE_KEYS
from .path_utils import map_path
from .timeouts import DEFAULT_PROFILE_TIMEOUT_SEC

_PATH_FIELDS = ("store_file", "logs_dir", "exports_dir")

# Fields each api_key type needs besides "type".
_KEY_FIELDS = {
    "env": ("key",),
    "json": ("path", "key"),
    "keychain": ("service", "account"),
    "credential": ("service", "account"),
    "direct": ("value",),
}

_DEFAULTS = {
    "timeout": DEFAULT_PROFILE_TIMEOUT_SEC,
    "exports_dir": DEFAULT_EXPORTS_DIR,
    "base_url": GROQ_BASE_URL,
}


def load_profile(path: str) -> dict[str, Any]:
    """Profile at ``path`` with defaults filled in and every path made absolute.

    Raises:
        FileNotFoundError: If there is no file at ``path``
        ValueError: If the file is not JSON or fails :func:`validate_profile`
    """
    source = Path(path).expanduser().resolve()
    if not source.exists():
        raise FileNotFoundError(
            f"Profile not found: {source}\n"
            f"Create a new profile with: groqchat init -p {path}"
        )

    try:
        profile = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in profile {source}: {e}") from e

    validate_profile(profile)
    for key, value in _DEFAULTS.items():
        profile.setdefault(key, value)

    for key in _PATH_FIELDS:
        profile[key] = map_path(profile[key])
    if profile["api_key"]["type"] == "json":
        profile["api_key"]["path"] = map_path(profile["api_key"]["path"])
    return profile


def validate_profile(profile: Any) -> None:
    """Raise ValueError naming the first problem found in ``profile``."""
    if not isinstance(profile, dict):
        raise ValueError("Profile must be a JSON object")

    absent = [key for key in REQUIRED_PROFILE_KEYS if key not in profile]
    if absent:
        raise ValueError(f"Profile missing required fields: {', '.join(absent)}")

    model = profile["model"]
    if not isinstance(model, str) or not model.strip():
        raise ValueError("'model' must be a non-empty string")

    for key in _PATH_FIELDS:
        if key in profile and not isinstance(profile[key], str):
            raise ValueError(f"'{key}' must be a string")

    if "timeout" in profile:
        _check_timeout(profile["timeout"])

    prompt = profile.get("system_prompt")
    if prompt is not None and not isinstance(prompt, str):
        raise ValueError("'system_prompt' must be a string")

    if "export" in profile and profile["export"] is not None:
        _check_export(profile["export"])

    _check_key_config(profile["api_key"])


def _check_timeout(timeout: Any) -> None:
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ValueError("'timeout' must be a number")
    if not math.isfinite(timeout) or timeout < 0:
        raise ValueError("'timeout' must be a finite, non-negative number")


def _check_export(export: Any) -> None:
    if not isinstance(export, dict):
        raise ValueError("'export' must be a dictionary when provided")
    width = export.get("line_width")
    if width is None:
        return
    if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
        raise ValueError("'export.line_width' must be a positive integer")


def _check_key_config(key_config: Any) -> None:
    if not isinstance(key_config, dict):
        raise ValueError("'api_key' must be a dictionary")
    if "type" not in key_config:
        raise ValueError("API key config missing 'type' field")

    key_type = key_config["type"]
    if key_type not in _KEY_FIELDS:
        raise ValueError(f"API key config has unknown type '{key_type}'")
    for name in _KEY_FIELDS[key_type]:
        if name not in key_config:
            raise ValueError(f"API key config (type={key_type}) missing '{name}' field")


def _template() -> dict[str, Any]:
    return {
        "model": DEFAULT_MODEL,
        "base_url": GROQ_BASE_URL,
        "timeout": DEFAULT_PROFILE_TIMEOUT_SEC,
        "store_file": DEFAULT_STORE_FILE,
        "logs_dir": DEFAULT_LOGS_DIR,
        "exports_dir": DEFAULT_EXPORTS_DIR,
        "api_key": {"type": "env", "key": DEFAULT_API_KEY_ENV},
        "export": {"line_width": 90},
    }


def create_profile(path: str) -> tuple[dict[str, Any], list[str]]:
    """Write a template profile to ``path``.

    Returns the template and the lines ``groqchat init`` prints.

    Raises:
        ValueError: If a file already exists at ``path``
    """
    target = Path(path).expanduser().resolve()
    if target.exists():
        raise ValueError(f"Profile already exists: {target}")

    profile = _template()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(profile, indent=2, ensure_ascii=False), encoding="utf-8")

    return profile, [
        f"Creating template profile: {target}",
        "",
        "Template profile created successfully!",
        "",
        "Next steps:",
        f"  1. Edit {target}",
        f"     Set {DEFAULT_API_KEY_ENV} or change the api_key entry",
        "",
        "  2. Start groqchat:",
        f"     groqchat -p {target}",
    ]
