"""Coordinate metadata construction and change detection.

This module turns a packer result into the public coordinate map and
decides whether a freshly computed map differs from the last one that
was emitted.
"""

import copy
import json
from typing import TYPE_CHECKING, Callable

from ..errors import ConfigurationError
from .types import CompactFrame, CoordinateMetadata, Frame, FrameShape, Rect

if TYPE_CHECKING:
    from ..packer import PackResult

FRAME_SHAPES = ("full", "compact")


def to_frame(rect: Rect, frame_shape: FrameShape = "full") -> Frame:
    """Copy a placement rectangle into the requested frame shape.

    Args:
        rect: Rectangle reported by the packer
        frame_shape: "full" keeps width/height, "compact" uses w/h

    Returns:
        New frame dictionary (the input is never shared)

    Raises:
        ConfigurationError: If the frame shape is unknown
    """
    if frame_shape == "full":
        return Rect(x=rect["x"], y=rect["y"], width=rect["width"], height=rect["height"])
    if frame_shape == "compact":
        return CompactFrame(x=rect["x"], y=rect["y"], w=rect["width"], h=rect["height"])
    raise ConfigurationError(
        f"Unknown frame shape: '{frame_shape}'. Available shapes: {', '.join(FRAME_SHAPES)}",
        option="frame_shape",
        actual_type=type(frame_shape).__name__,
    )


def build_coordinate_metadata(
    result: "PackResult",
    key_fn: Callable[[str], str],
    frame_shape: FrameShape = "full",
) -> CoordinateMetadata:
    """Build the coordinate map for a pack result.

    Args:
        result: Packer output
        key_fn: Function mapping an identifier to its frame key
        frame_shape: Field naming used for each frame

    Returns:
        Coordinate metadata with the sheet size and one frame per placement
    """
    frames: dict[str, Frame] = {}
    for identifier, rect in result.placements.items():
        frames[key_fn(identifier)] = to_frame(rect, frame_shape)

    return CoordinateMetadata(width=result.width, height=result.height, frames=frames)


def dumps_metadata(metadata: CoordinateMetadata) -> str:
    """Serialize metadata to compact JSON."""
    return json.dumps(metadata, ensure_ascii=False, separators=(",", ":"))


def loads_metadata(text: str | bytes) -> CoordinateMetadata:
    """Parse metadata previously produced by dumps_metadata."""
    return json.loads(text)  # type: ignore[no-any-return]


class MetadataDiffer:
    """Remembers the last emitted coordinate map.

    The differ keeps its own deep copy, so callers may mutate the map they
    passed in without affecting later comparisons. It holds the only
    state that survives between pack attempts, and must only be used by one
    attempt at a time (see PackSession).

    Example:
        >>> differ = MetadataDiffer()
        >>> differ.is_unchanged({"width": 1, "height": 1, "frames": {}})
        False
        >>> differ.is_unchanged({"width": 1, "height": 1, "frames": {}})
        True
    """

    def __init__(self, previous: CoordinateMetadata | None = None):
        self.previous = copy.deepcopy(previous)

    def is_unchanged(self, candidate: CoordinateMetadata) -> bool:
        """Compare against the last emitted map, recording it if different.

        Args:
            candidate: Newly computed metadata

        Returns:
            True if the candidate equals the previous map
        """
        equal = self.previous is not None and self.previous == candidate
        if not equal:
            self.previous = copy.deepcopy(candidate)
        return equal

    def reset(self) -> None:
        """Forget the last emitted map so the next comparison reports a change."""
        self.previous = None
