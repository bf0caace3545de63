"""Frame key strategies for the coordinate map.

A frame key is the name a consumer uses to look up an image's rectangle
in the sprite sheet. Keys are derived from the POSIX form of the
identifier so they do not depend on the host platform.

Known limitation: two images with the same name (basename strategy) or the
same parent directory name and filename (parent strategy) collide, and the
later placement wins.
"""

import posixpath
from typing import Callable

from .errors import ConfigurationError
from .filters import to_posix

KeyStrategy = Callable[[str], str]


def basename_key(identifier: str) -> str:
    """Use the file name alone.

    Example:
        "assets/icons/home.png" -> "home.png"
    """
    return posixpath.basename(to_posix(identifier))


def parent_qualified_key(identifier: str) -> str:
    """Prefix the file name with its immediate parent directory.

    Example:
        "assets/icons/home.png" -> "icons_home.png"

    Identifiers without a parent directory fall back to the file name.
    """
    posix_path = to_posix(identifier)
    parent = posixpath.basename(posixpath.dirname(posix_path))
    name = posixpath.basename(posix_path)
    return f"{parent}_{name}" if parent else name


KEY_STRATEGIES: dict[str, KeyStrategy] = {
    "basename": basename_key,
    "parent": parent_qualified_key,
}


def get_key_strategy(name: str) -> KeyStrategy:
    """Look up a key strategy by name.

    Raises:
        ConfigurationError: If no strategy is registered under that name
    """
    try:
        return KEY_STRATEGIES[name]
    except KeyError:
        available = ", ".join(KEY_STRATEGIES)
        raise ConfigurationError(
            f"Unknown key strategy: '{name}'. Available strategies: {available}",
            option="key_strategy",
            actual_type=type(name).__name__,
        ) from None


def normalize(identifier: str, strategy: str = "basename") -> str:
    """Derive the frame key for an identifier using a named strategy."""
    return get_key_strategy(strategy)(identifier)
