"""Candidate sources for the sprite pipeline.

This package contains base classes and interfaces for candidate sources.
Concrete implementations live in the platforms/ directory.
"""

from .base import AssetSet, CandidateSource, ChangeEvent, ImageCandidate, Watcher

__all__ = ["AssetSet", "CandidateSource", "ChangeEvent", "ImageCandidate", "Watcher"]
