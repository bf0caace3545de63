"""Type definitions for sprite sheet coordinate manifests.

This module defines TypedDict classes that mirror the JSON schema structure
defined in schemas/coordinate_map.schema.json.
"""

from typing import Literal, TypedDict, Union


class Rect(TypedDict):
    """Placement rectangle reported by the packer."""

    x: int
    y: int
    width: int
    height: int


class CompactFrame(TypedDict):
    """Frame entry in the standalone manifest shape."""

    x: int
    y: int
    w: int
    h: int


Frame = Union[Rect, CompactFrame]

# "full" keeps width/height field names, "compact" renames them to w/h
FrameShape = Literal["full", "compact"]


class CoordinateMetadata(TypedDict):
    """Complete coordinate map for one sprite sheet."""

    width: int  # Overall sheet width in pixels
    height: int  # Overall sheet height in pixels
    frames: dict[str, Frame]  # Frame key -> rectangle inside the sheet
