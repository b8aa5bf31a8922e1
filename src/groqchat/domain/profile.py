"""Typed view of a loaded profile."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from ..constants import DEFAULT_EXPORTS_DIR, GROQ_BASE_URL
from ..timeouts import DEFAULT_PROFILE_TIMEOUT_SEC

REQUIRED_PROFILE_KEYS = ("model", "api_key", "store_file", "logs_dir")


def _section(profile: Mapping[str, Any], key: str, default: Any = None) -> dict[str, Any]:
    value = profile.get(key)
    if value is None:
        value = default
    if not isinstance(value, Mapping):
        raise ValueError(f"'{key}' must be a dictionary")
    return dict(value)


@dataclass(slots=True)
class RuntimeProfile:
    """Profile settings after path mapping and validation.

    Keys the app does not know are kept in ``extras`` so that ``to_dict``
    writes them back unchanged.
    """

    model: str
    api_key: dict[str, Any]
    store_file: str
    logs_dir: str
    timeout: int | float = DEFAULT_PROFILE_TIMEOUT_SEC
    exports_dir: str = DEFAULT_EXPORTS_DIR
    base_url: str = GROQ_BASE_URL
    system_prompt: str | None = None
    export: dict[str, Any] = field(default_factory=dict)
    extras: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, profile: Mapping[str, Any]) -> RuntimeProfile:
        """Raises ValueError when a required key is absent or a value has the wrong type."""
        if not isinstance(profile, Mapping):
            raise ValueError("Profile must be a dictionary-like mapping")

        absent = [key for key in REQUIRED_PROFILE_KEYS if key not in profile]
        if absent:
            raise ValueError(f"Profile missing required fields: {', '.join(absent)}")

        timeout = profile.get("timeout", DEFAULT_PROFILE_TIMEOUT_SEC)
        # bool is an int subclass
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise ValueError("'timeout' must be a number")

        prompt = profile.get("system_prompt")
        known = {f.name for f in fields(cls)}
        return cls(
            model=str(profile["model"]),
            api_key=_section(profile, "api_key"),
            store_file=str(profile["store_file"]),
            logs_dir=str(profile["logs_dir"]),
            timeout=timeout,
            exports_dir=str(profile.get("exports_dir") or DEFAULT_EXPORTS_DIR),
            base_url=str(profile.get("base_url") or GROQ_BASE_URL),
            system_prompt=None if prompt is None else str(prompt),
            export=_section(profile, "export", {}),
            extras={str(k): v for k, v in profile.items() if k not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        """Profile JSON shape; unset optional sections are left out."""
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "extras"}
        data["api_key"] = dict(self.api_key)
        if self.system_prompt is None:
            del data["system_prompt"]
        if self.export:
            data["export"] = dict(self.export)
        else:
            del data["export"]
        data.update(self.extras)
        return data
