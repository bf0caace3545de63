"""Host build platform for the sprite pipeline.

This platform packs images that a host build already staged in its
asset set, replacing them with a single sheet.
"""

from .source import AssetSetSource, InMemoryAssetSet

# Auto-register with the registry
from ...config import SpriteOptions
from ...registry import PipelineRegistry
from ...sources.base import AssetSet


def _create_build_source(assets: AssetSet, options: SpriteOptions, **kwargs) -> AssetSetSource:
    """Factory function for creating asset set sources.

    Args:
        assets: The host's in-flight asset set
        options: Pipeline options (unused by the source itself)
        **kwargs: Additional parameters (unused)

    Returns:
        AssetSetSource instance
    """
    return AssetSetSource(assets)


# Auto-register at module import
PipelineRegistry.register_factory("build", _create_build_source)

__all__ = ["AssetSetSource", "InMemoryAssetSet"]
