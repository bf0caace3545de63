"""Options shared by every operating mode."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.types import FrameShape
from .filters import IMAGE_EXTENSION, FilterRule, PathFilter

SHEET_FILENAME = "sprite.png"
MANIFEST_FILENAME = "manifest.json"


def normalize_entry(entry: str | list[str] | tuple[str, ...] | None) -> list[str]:
    """Turn an entry option into a list of roots.

    Example:
        "assets/icons" -> ["assets/icons"]
        None -> []
    """
    if not entry:
        return []
    if isinstance(entry, (list, tuple)):
        return list(entry)
    return [entry]


@dataclass
class SpriteOptions:
    """Options recognized by the pipeline.

    Attributes:
        output_dir: Directory for standalone output, relative to cwd
        entry: Root(s) scanned or watched for candidates
        includes: Filter rule applied with include polarity
        excludes: Filter rule applied with exclude polarity
        key_strategy: "basename" or "parent"; None uses the source default
        frame_shape: "full" or "compact"; None uses the source default
        sheet_name: Fixed identifier for the sheet in build mode
        coordinate_path: Where build mode writes the coordinate map
        sheet_filename: Sheet file name in standalone mode
        manifest_filename: Manifest file name in standalone mode
        ignore: Glob patterns skipped while scanning
        debounce: Seconds a change must settle before a repack
        extension: Image suffix that qualifies for packing
    """

    output_dir: str | Path = "."
    entry: str | list[str] | None = None
    includes: FilterRule = None
    excludes: FilterRule = None
    key_strategy: str | None = None
    frame_shape: FrameShape | None = None
    sheet_name: str | None = None
    coordinate_path: str | Path | None = None
    sheet_filename: str = SHEET_FILENAME
    manifest_filename: str = MANIFEST_FILENAME
    ignore: tuple[str, ...] = ("node_modules/**",)
    debounce: float = 0.4
    extension: str = IMAGE_EXTENSION
    cwd: Path = field(default_factory=Path.cwd)

    @property
    def entries(self) -> list[str]:
        return normalize_entry(self.entry)

    @property
    def output_path(self) -> Path:
        return self.cwd / self.output_dir

    def resolve_output_dir(self) -> Path:
        """Return the absolute output directory, creating it if missing."""
        output_dir = self.output_path
        output_dir.mkdir(parents=True, exist_ok=True)
        return output_dir

    @property
    def sheet_path(self) -> Path:
        return self.output_path / self.sheet_filename

    @property
    def manifest_path(self) -> Path:
        return self.output_path / self.manifest_filename

    def resolve_coordinate_path(self) -> Path | None:
        if self.coordinate_path is None:
            return None
        return self.cwd / os.fspath(self.coordinate_path)

    def path_filter(self) -> PathFilter:
        """Build the path filter for these options.

        Raises:
            ConfigurationError: If both includes and excludes are set
        """
        return PathFilter(includes=self.includes, excludes=self.excludes, extension=self.extension)
