"""Sprite Sheet Packer.

This package packs the small PNG images discovered during a build into a
single sprite sheet and emits a coordinate map describing where each
image landed. It can replace the images inside a host build's asset set
or write the sheet and manifest as standalone files.
"""

# Core library interface
from .builder import SheetBuild, SheetBuilder
from .config import SpriteOptions
from .errors import ConfigurationError, PackerError, PreconditionError, SpriteSheetError
from .filters import PathFilter, is_image, matches_rules, qualifies, to_posix
from .keys import basename_key, normalize, parent_qualified_key
from .packer import BinaryTreePacker, Packer, PackResult
from .pipeline import BuildAssetsHook, SpritePipeline
from .registry import PipelineRegistry
from .session import PackSession
from .sources.base import AssetSet, CandidateSource, ImageCandidate, Watcher

# Core utilities
from .core import CoordinateMetadata, MetadataDiffer, Rect
from .core import validate_manifest, validate_manifest_with_error_details

# CLI interface
from .cli import main, pack_directory

__version__ = "0.1.0"

# Auto-discover and register all platforms
PipelineRegistry.discover_platforms()

__all__ = [
    # Primary library interface
    "SpritePipeline",
    "BuildAssetsHook",
    "PipelineRegistry",
    "PackSession",
    "SpriteOptions",
    "SheetBuilder",
    "SheetBuild",
    "CandidateSource",
    "Watcher",
    "AssetSet",
    "ImageCandidate",
    "Packer",
    "PackResult",
    "BinaryTreePacker",
    # Filtering and keys
    "PathFilter",
    "qualifies",
    "matches_rules",
    "is_image",
    "to_posix",
    "normalize",
    "basename_key",
    "parent_qualified_key",
    # Core utilities
    "CoordinateMetadata",
    "Rect",
    "MetadataDiffer",
    "validate_manifest",
    "validate_manifest_with_error_details",
    # Errors
    "SpriteSheetError",
    "ConfigurationError",
    "PackerError",
    "PreconditionError",
    # CLI
    "pack_directory",
    "main",
]
