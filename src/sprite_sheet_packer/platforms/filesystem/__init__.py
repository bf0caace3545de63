"""Filesystem platform for the sprite pipeline.

This platform discovers candidates on disk, either with a one-shot scan
('filesystem') or a polling watcher ('watch'), and writes the sheet and
manifest as standalone files.
"""

from .source import GlobScanner, PollingWatcher, scan_entries, validate_path_safety

# Auto-register with the registry
from ...config import SpriteOptions
from ...registry import PipelineRegistry


def _create_scanner(options: SpriteOptions, **kwargs) -> GlobScanner:
    """Factory function for creating one-shot scanners.

    Args:
        options: Pipeline options providing the entry roots
        **kwargs: Additional parameters (unused)

    Returns:
        GlobScanner instance
    """
    return GlobScanner(options)


def _create_watcher(options: SpriteOptions, **kwargs) -> PollingWatcher:
    """Factory function for creating polling watchers."""
    return PollingWatcher(options)


# Auto-register at module import
PipelineRegistry.register_factory("filesystem", _create_scanner)
PipelineRegistry.register_factory("watch", _create_watcher)

__all__ = ["GlobScanner", "PollingWatcher", "scan_entries", "validate_path_safety"]
