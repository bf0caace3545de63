"""Sprite sheet pipeline.

This module provides the main interface for packing discovered images into
a sprite sheet. The pipeline is mode-agnostic: the candidate source decides
where files come from and which reconciler merges the sheet back.
"""

import sys
import time
from pathlib import Path
from typing import Callable

from .builder import SheetBuild, SheetBuilder
from .config import SpriteOptions
from .errors import PreconditionError
from .filters import is_image
from .packer import BinaryTreePacker, Packer
from .reconcilers.base import Done
from .session import PackSession
from .sources.base import AssetSet, CandidateSource, ChangeEvent, ImageCandidate, Watcher


class SpritePipeline:
    """Main interface for building a sprite sheet.

    One pipeline run is a pack attempt: list candidates, keep the
    qualifying ones, pack them, reconcile the sheet into the output and
    write the coordinate map if it changed.

    Example:
        >>> # Via registry (recommended)
        >>> from sprite_sheet_packer import PipelineRegistry
        >>> pipeline = PipelineRegistry.create_pipeline(
        ...     'filesystem', options=SpriteOptions(entry='assets/icons')
        ... )
        >>> build = pipeline.run()
        >>>
        >>> # Direct instantiation (advanced)
        >>> from sprite_sheet_packer.platforms.filesystem import GlobScanner
        >>> pipeline = SpritePipeline(GlobScanner(options), options)
    """

    def __init__(
        self,
        source: CandidateSource,
        options: SpriteOptions | None = None,
        session: PackSession | None = None,
        packer: Packer | None = None,
    ):
        """Initialize the pipeline.

        Args:
            source: Source supplying candidates and the reconciler
            options: Pipeline options (defaults apply if omitted)
            session: Session holding state shared across attempts
            packer: Packer to use (BinaryTreePacker by default)

        Raises:
            ConfigurationError: If the options are inconsistent
        """
        self.source = source
        self.options = options or SpriteOptions()
        self.session = session or PackSession()
        self.path_filter = self.options.path_filter()
        self.builder = SheetBuilder(
            packer or BinaryTreePacker(),
            self.session.differ,
            key_strategy=self.options.key_strategy or source.default_key_strategy,
            frame_shape=self.options.frame_shape or source.default_frame_shape,  # type: ignore[arg-type]
        )

    def select(self) -> list[str]:
        """Return the qualifying identifiers in discovery order.

        Raises:
            ConfigurationError: If the filter rule is malformed
        """
        return self.path_filter.select(self.source.list_files())

    def run(self, done: Done | None = None) -> SheetBuild | None:
        """Run one pack attempt.

        Args:
            done: Optional completion signal, fired once the sheet has been
                reconciled (or immediately when nothing qualifies)

        Returns:
            The SheetBuild, or None if no image qualified

        Raises:
            ConfigurationError: If the filter rule is malformed
            PackerError: If the packer fails
            OSError: If reading a candidate or writing output fails
        """
        identifiers = self.select()

        if not identifiers:
            if done:
                done()
            return None

        candidates = [
            ImageCandidate(identifier, self.source.read_bytes(identifier))
            for identifier in identifiers
        ]
        build = self.builder.build(candidates)
        if build is None:
            if done:
                done()
            return None

        reconciler = self.source.get_reconciler(self.options)
        reconciler.reconcile(build, identifiers, done)
        return build

    def is_relevant_change(self, event: ChangeEvent, path: str) -> bool:
        """Decide whether a watcher event should trigger a repack.

        Renames are ignored (they arrive as delete/add pairs), as are the
        pipeline's own output files.
        """
        if event == "renamed":
            return False
        if not is_image(path, self.options.extension):
            return False
        if not self.path_filter.qualifies(path):
            return False
        own_outputs = (self.options.sheet_path, self.options.manifest_path)
        return not any(_same_path(path, output) for output in own_outputs)

    def process_watched(self, watcher: Watcher | None) -> SheetBuild | None:
        """Pack everything a ready watcher currently knows about.

        Raises:
            PreconditionError: If the watcher is missing or not ready yet
        """
        if watcher is None or not watcher.ready:
            raise PreconditionError("Watcher is not initialized")
        return self.run()

    def watch(
        self,
        watcher: Watcher,
        interval: float = 0.5,
        should_stop: Callable[[], bool] = lambda: False,
        on_build: Callable[[SheetBuild | None], None] | None = None,
    ) -> None:
        """Pack once when the watcher is ready, then once per change batch.

        Changes are debounced: a batch is packed only after no further
        relevant change has arrived for ``options.debounce`` seconds. All
        changes seen while an attempt runs collapse into one follow-up.

        Args:
            watcher: Watcher to observe (started here if not ready)
            interval: Seconds between polls
            should_stop: Checked before every poll; return True to exit
            on_build: Called with the result of every attempt
        """
        if not watcher.ready:
            watcher.start()

        def attempt() -> None:
            build = self.process_watched(watcher)
            if on_build:
                on_build(build)

        self.session.request(attempt)

        dirty_since: float | None = None
        while not should_stop():
            time.sleep(interval)
            changes = [(e, p) for e, p in watcher.poll() if self.is_relevant_change(e, p)]
            now = time.monotonic()
            if changes:
                for event, path in changes:
                    print(f"Detected {event}: {path}", file=sys.stderr)
                dirty_since = now
                continue
            if dirty_since is not None and now - dirty_since >= self.options.debounce:
                dirty_since = None
                self.session.request(attempt)


class BuildAssetsHook:
    """Adapter between a host build's asset hook and the pipeline.

    The host calls process_assets() once per build with its in-flight
    asset set. The hook keeps one PackSession for its whole lifetime, so
    unchanged coordinate maps are not rewritten on rebuilds.
    """

    def __init__(
        self,
        options: SpriteOptions | None = None,
        session: PackSession | None = None,
        packer: Packer | None = None,
    ):
        self.options = options or SpriteOptions()
        self.session = session or PackSession()
        self.packer = packer or BinaryTreePacker()

    def process_assets(self, assets: AssetSet, done: Done) -> SheetBuild | None:
        """Pack the qualifying images of one build.

        ``done`` is called only after the asset set has been reconciled.
        Errors propagate to the host and ``done`` is not called.
        """
        # Import here to avoid circular dependency
        from .platforms.build import AssetSetSource

        pipeline = SpritePipeline(
            AssetSetSource(assets), self.options, self.session, self.packer
        )
        return pipeline.run(done)


def _same_path(path: str, other: Path) -> bool:
    return Path(path).resolve() == other.resolve()
