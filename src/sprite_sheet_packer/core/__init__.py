"""Core utilities for coordinate map generation.

This package contains schema validation, type definitions, and the
metadata builder and differ shared by every operating mode.
"""

from .metadata import (
    MetadataDiffer,
    build_coordinate_metadata,
    dumps_metadata,
    loads_metadata,
    to_frame,
)
from .types import CompactFrame, CoordinateMetadata, Frame, FrameShape, Rect
from .validator import validate_manifest, validate_manifest_with_error_details

__all__ = [
    "CompactFrame",
    "CoordinateMetadata",
    "Frame",
    "FrameShape",
    "MetadataDiffer",
    "Rect",
    "build_coordinate_metadata",
    "dumps_metadata",
    "loads_metadata",
    "to_frame",
    "validate_manifest",
    "validate_manifest_with_error_details",
]
