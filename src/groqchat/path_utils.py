"""Resolution of the path forms accepted in profiles and on the command line.

``~`` and ``~/...`` resolve under the user's home directory, ``@`` and
``@/...`` under the installed groqchat package, and native absolute paths are
used as given. Bare relative paths are rejected because there is no
meaningful working directory for a chat profile.
"""

from __future__ import annotations

import unicodedata
from pathlib import Path, PureWindowsPath
from typing import Callable


def package_root() -> Path:
    """Directory of the installed ``groqchat`` package."""
    return Path(__file__).resolve().parent


# Prefix character -> (directory it stands for, name used in errors).
_PREFIX_ROOTS: dict[str, tuple[Callable[[], Path], str]] = {
    "~": (lambda: Path.home().resolve(), "home"),
    "@": (package_root, "app"),
}


def _split_prefix(path: str) -> tuple[str, str] | None:
    """``(prefix, remainder)`` for ``~``/``@`` forms, else None."""
    head, rest = path[:1], path[1:]
    if head in _PREFIX_ROOTS and (not rest or rest[0] in "/\\"):
        return head, rest[1:]
    return None


def map_path(path: str) -> str:
    """Absolute, normalized form of a profile or CLI path.

    Raises:
        ValueError: If the path is relative without a prefix, contains NUL,
            climbs out of its prefix directory, or is a Windows absolute path
            on another platform

    Examples:
        >>> map_path("~/.groqchat/chat_history.json")  # doctest: +SKIP
        '/home/me/.groqchat/chat_history.json'
    """
    if "\x00" in path:
        raise ValueError("Path contains NUL character")
    path = unicodedata.normalize("NFC", path)

    prefixed = _split_prefix(path)
    if prefixed is not None:
        prefix, remainder = prefixed
        root_of, label = _PREFIX_ROOTS[prefix]
        root = root_of()
        resolved = (root / remainder).resolve()
        if resolved != root and root not in resolved.parents:
            raise ValueError(f"Path escapes {label} directory: {path}")
        return str(resolved)

    native = Path(path)
    if native.is_absolute():
        return str(native.resolve())
    if PureWindowsPath(path).is_absolute():
        raise ValueError(f"Windows absolute paths are not supported on this platform: {path}")
    raise ValueError(
        f"Relative paths without prefix are not supported: {path} "
        "(use '~/' for your home directory, '@/' for the groqchat package, or an absolute path)"
    )
