"""Path filtering for sprite candidates.

A candidate qualifies for packing when it carries the image extension and
passes the configured include/exclude rule. Rules are evaluated against the
POSIX form of the path so the same patterns work on every platform.
"""

import os
import re
from collections.abc import Iterable
from typing import Literal, Union

from .errors import ConfigurationError

IMAGE_EXTENSION = ".png"

Polarity = Literal["include", "exclude"]
FilterRule = Union[None, re.Pattern, list[re.Pattern], tuple[re.Pattern, ...]]


def to_posix(path: str | os.PathLike | None) -> str:
    """Normalize path separators to '/'.

    Both the platform separator and backslashes are converted, so a
    Windows-style identifier gives the same result on any host.

    Args:
        path: Path to normalize (None becomes an empty string)

    Returns:
        Path string using '/' as the only separator
    """
    if not path:
        return ""
    text = os.fspath(path)
    if os.sep != "/":
        text = text.replace(os.sep, "/")
    return text.replace("\\", "/")


def is_image(path: str | os.PathLike | None, extension: str = IMAGE_EXTENSION) -> bool:
    """Case-sensitive suffix check for the packable image type."""
    if not path:
        return False
    return os.fspath(path).endswith(extension)


def matches_rules(
    path: str | os.PathLike,
    rules: FilterRule,
    polarity: Polarity = "exclude",
    option: str = "excludes",
) -> bool:
    """Evaluate a filter rule against a path.

    Args:
        path: Candidate path
        rules: None, a compiled pattern, or a list of compiled patterns
        polarity: How a single pattern is applied. List rules always
            exclude whatever they match.
        option: Option name used in error messages

    Returns:
        True if the path passes the rule

    Raises:
        ConfigurationError: If the rule, or any list element, is not a
            compiled pattern
    """
    if rules is None:
        return True

    posix_path = to_posix(path)

    if isinstance(rules, re.Pattern):
        matched = rules.search(posix_path) is not None
        return matched if polarity == "include" else not matched

    if isinstance(rules, (list, tuple)):
        # Validate the whole list before matching anything
        for idx, rule in enumerate(rules):
            if not isinstance(rule, re.Pattern):
                actual = type(rule).__name__
                raise ConfigurationError(
                    f'Item at {idx} of "{option}" must be a compiled pattern '
                    f'but received "{actual}"',
                    option=option,
                    actual_type=actual,
                    index=idx,
                )
        return not any(rule.search(posix_path) for rule in rules)

    actual = type(rules).__name__
    raise ConfigurationError(
        f'"{option}" can be a compiled pattern or a list of patterns only '
        f'but received "{actual}"',
        option=option,
        actual_type=actual,
    )


def qualifies(
    path: str | os.PathLike,
    rules: FilterRule = None,
    polarity: Polarity = "exclude",
    extension: str = IMAGE_EXTENSION,
) -> bool:
    """Return True if the path is an image that passes the rule."""
    option = "includes" if polarity == "include" else "excludes"
    return is_image(path, extension) and matches_rules(path, rules, polarity, option)


class PathFilter:
    """Filter holding a single rule surface.

    ``includes`` applies a single pattern with include polarity and
    ``excludes`` with exclude polarity. Only one of them may be set.
    The shape of the rule is checked lazily, when a path is evaluated.

    Example:
        >>> path_filter = PathFilter(excludes=re.compile(r"/vendor/"))
        >>> path_filter.qualifies("icons/home.png")
        True
    """

    def __init__(
        self,
        includes: FilterRule = None,
        excludes: FilterRule = None,
        extension: str = IMAGE_EXTENSION,
    ):
        if includes is not None and excludes is not None:
            raise ConfigurationError(
                '"includes" and "excludes" cannot be combined in one filter',
                option="includes",
            )
        self.extension = extension
        if includes is not None:
            self.rules = includes
            self.polarity: Polarity = "include"
            self.option = "includes"
        else:
            self.rules = excludes
            self.polarity = "exclude"
            self.option = "excludes"

    def qualifies(self, path: str | os.PathLike) -> bool:
        """Return True if the path should be packed."""
        if not is_image(path, self.extension):
            return False
        return matches_rules(path, self.rules, self.polarity, self.option)

    def select(self, paths: Iterable[str]) -> list[str]:
        """Return qualifying paths, preserving their discovery order."""
        return [path for path in paths if self.qualifies(path)]
