"""Source registry for factory-based pipeline creation.

This module provides a central registry for candidate source factories,
enabling mode-agnostic pipeline creation and automatic platform
discovery.
"""

import importlib
from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .pipeline import SpritePipeline
    from .sources.base import CandidateSource


class PipelineRegistry:
    """Central registry for candidate source factories.

    Platforms register a factory when imported, and the registry can
    automatically discover all available platforms. Each factory is called
    with the pipeline options plus any extra keyword arguments.
    """

    _factories: dict[str, Callable[..., "CandidateSource"]] = {}

    @classmethod
    def register_factory(cls, name: str, factory: Callable[..., "CandidateSource"]) -> None:
        """Register a factory function for creating sources.

        Args:
            name: Name of the mode (e.g., 'build', 'filesystem')
            factory: Callable that creates a CandidateSource instance

        Example:
            >>> def create_scanner(options: SpriteOptions, **kwargs) -> GlobScanner:
            ...     return GlobScanner(options)
            >>> PipelineRegistry.register_factory('filesystem', create_scanner)
        """
        cls._factories[name] = factory

    @classmethod
    def create_pipeline(cls, mode: str, **kwargs) -> "SpritePipeline":
        """Create a pipeline from a registered source factory.

        Args:
            mode: Name of the registered source
            **kwargs: Arguments passed to the source factory. 'options',
                     'session' and 'packer' are also passed to the pipeline.

        Returns:
            SpritePipeline configured with the requested source

        Raises:
            ValueError: If mode is not registered

        Example:
            >>> pipeline = PipelineRegistry.create_pipeline(
            ...     'filesystem',
            ...     options=SpriteOptions(entry='assets/icons'),
            ... )
        """
        # Import here to avoid circular dependency
        from .config import SpriteOptions
        from .pipeline import SpritePipeline

        if mode not in cls._factories:
            available = ", ".join(cls._factories.keys()) or "none"
            raise ValueError(f"Unknown mode: '{mode}'. Available modes: {available}")

        options = kwargs.pop("options", None) or SpriteOptions()
        session = kwargs.pop("session", None)
        packer = kwargs.pop("packer", None)

        source = cls._factories[mode](options=options, **kwargs)

        return SpritePipeline(source, options, session=session, packer=packer)

    @classmethod
    def list_modes(cls) -> list[str]:
        """List all registered mode names.

        Example:
            >>> PipelineRegistry.list_modes()
            ['build', 'filesystem', 'watch']
        """
        return list(cls._factories.keys())

    @classmethod
    def discover_platforms(cls) -> None:
        """Auto-discover and import all platforms.

        Every package under platforms/ is imported, which triggers its
        self-registration. Import errors propagate.
        """
        platforms_dir = Path(__file__).parent / "platforms"

        if not platforms_dir.exists():
            return

        for platform_path in sorted(platforms_dir.iterdir()):
            if not platform_path.is_dir():
                continue

            if not (platform_path / "__init__.py").exists():
                continue

            importlib.import_module(
                f".platforms.{platform_path.name}", package="sprite_sheet_packer"
            )
