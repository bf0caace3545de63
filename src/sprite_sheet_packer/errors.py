"""Exception types raised by the sprite sheet pipeline.

Every error here is fatal to the current pack attempt. Nothing in the
pipeline catches and retries them.
"""


class SpriteSheetError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(SpriteSheetError, ValueError):
    """Malformed filter rule or option.

    Attributes:
        option: Name of the option that was malformed (e.g. "excludes")
        actual_type: Type name of the offending value
        index: Position of the offending element for list rules, else None
    """

    def __init__(
        self,
        message: str,
        option: str | None = None,
        actual_type: str | None = None,
        index: int | None = None,
    ):
        super().__init__(message)
        self.option = option
        self.actual_type = actual_type
        self.index = index


class PackerError(SpriteSheetError, RuntimeError):
    """The packer could not produce a sheet for the given candidates."""


class PreconditionError(SpriteSheetError, RuntimeError):
    """An operation was invoked before its watcher or scanner was ready."""
