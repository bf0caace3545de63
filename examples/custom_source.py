"""Template for implementing a custom candidate source.

This example demonstrates the complete pattern for creating a custom source:
- CandidateSource implementation
- Reconciler implementation
- Registration with PipelineRegistry
"""

import sys
from pathlib import Path

from sprite_sheet_packer import CandidateSource, PipelineRegistry, SpriteOptions
from sprite_sheet_packer.builder import SheetBuild
from sprite_sheet_packer.core.metadata import dumps_metadata
from sprite_sheet_packer.reconcilers.base import Done, Reconciler


# Step 1: Implement a reconciler
class DirectoryReconciler(Reconciler):
    """Writes the sheet and coordinate map next to each other."""

    def __init__(self, output_dir: Path):
        self.output_dir = output_dir

    def reconcile(self, build: SheetBuild, identifiers: list[str], done: Done | None = None) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        (self.output_dir / "atlas.png").write_bytes(build.image)
        if build.metadata_changed:
            (self.output_dir / "atlas.json").write_text(
                dumps_metadata(build.metadata), encoding="utf-8"
            )
        if done:
            done()


# Step 2: Implement the CandidateSource interface
class ListSource(CandidateSource):
    """Source over an explicit list of image paths."""

    default_key_strategy = "basename"
    default_frame_shape = "compact"

    def __init__(self, paths: list[Path], output_dir: Path):
        self.paths = paths
        self.output_dir = output_dir

    def list_files(self) -> list[str]:
        return [str(path) for path in self.paths]

    def read_bytes(self, identifier: str) -> bytes:
        return Path(identifier).read_bytes()

    def get_reconciler(self, options: SpriteOptions) -> Reconciler:
        return DirectoryReconciler(self.output_dir)


# Step 3: Register with PipelineRegistry
def _create_list_source(paths: list[Path], options: SpriteOptions, **kwargs) -> ListSource:
    return ListSource(paths, options.cwd / options.output_dir)


PipelineRegistry.register_factory("list", _create_list_source)


def main():
    paths = [Path(arg) for arg in sys.argv[1:]]
    if not paths:
        print("Usage: custom_source.py IMAGE [IMAGE ...]", file=sys.stderr)
        return

    pipeline = PipelineRegistry.create_pipeline(
        "list", paths=paths, options=SpriteOptions(output_dir="atlas")
    )
    build = pipeline.run()
    if build:
        print(f"Packed {len(build.placements)} images", file=sys.stderr)


if __name__ == "__main__":
    main()
