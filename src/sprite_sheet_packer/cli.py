"""Command-line interface for the sprite sheet packer.

This module provides the CLI entry point for packing the PNG images under
one or more entry roots into a sprite sheet and manifest.
"""

import argparse
import json
import re
import sys
from pathlib import Path

from .builder import SheetBuild
from .config import SpriteOptions
from .core.types import CoordinateMetadata
from .core.validator import validate_manifest_with_error_details
from .errors import ConfigurationError
from .keys import KEY_STRATEGIES
from .registry import PipelineRegistry


def compile_patterns(patterns: list[str] | None, option: str) -> list[re.Pattern] | re.Pattern | None:
    """Compile CLI regex arguments into a filter rule.

    A single pattern stays a single rule, several become a list rule.

    Raises:
        ConfigurationError: If a pattern is not a valid regular expression
    """
    if not patterns:
        return None
    compiled = []
    for idx, pattern in enumerate(patterns):
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise ConfigurationError(
                f'Invalid regular expression at {idx} of "{option}": {e}',
                option=option,
                actual_type=type(pattern).__name__,
                index=idx,
            ) from e
    return compiled[0] if len(compiled) == 1 else compiled


def pack_directory(options: SpriteOptions) -> SheetBuild | None:
    """Pack every qualifying image under the entry roots once.

    The sheet and manifest writes are awaited, so write errors surface here.

    Args:
        options: Pipeline options

    Returns:
        The SheetBuild, or None if no image qualified

    Raises:
        ConfigurationError: If the options are malformed
        PackerError: If packing fails
        OSError: If reading or writing files fails
    """
    print(f"Scanning entries: {', '.join(options.entries) or '(none)'}", file=sys.stderr)
    pipeline = PipelineRegistry.create_pipeline("filesystem", options=options)

    build = pipeline.run(done=lambda: None)

    if build is None:
        print("No images to pack", file=sys.stderr)
        return None

    print(
        f"Packed {len(build.placements)} images into a "
        f"{build.metadata['width']}x{build.metadata['height']} sheet: {options.sheet_path}",
        file=sys.stderr,
    )
    if not build.metadata_changed:
        print("Manifest unchanged, not rewritten", file=sys.stderr)

    return build


def main() -> None:
    """Main entry point for the sprite-pack command."""
    parser = argparse.ArgumentParser(
        description="Pack PNG images into a sprite sheet with a JSON coordinate manifest",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Pack every PNG under assets/icons into dist/sprite.png + dist/manifest.json
  sprite-pack --entry assets/icons --output-dir dist

  # Glob entries and exclusions
  sprite-pack --entry "assets/**/*.png" --exclude "/raw/" --exclude "@2x"

  # Keep repacking while files change
  sprite-pack --entry assets/icons --output-dir dist --watch
        """,
    )

    parser.add_argument(
        "--entry",
        action="append",
        default=[],
        help="Directory, file or glob to scan (repeatable, relative to cwd)",
    )

    parser.add_argument("--output-dir", default=".", help="Directory for sprite.png and manifest.json")

    rules = parser.add_mutually_exclusive_group()
    rules.add_argument(
        "--exclude",
        action="append",
        help="Regex of paths to leave out (repeatable)",
    )
    rules.add_argument(
        "--include",
        help="Regex a path must match to be packed",
    )

    parser.add_argument(
        "--key-strategy",
        choices=sorted(KEY_STRATEGIES),
        default=None,
        help="How frame keys are derived (default: parent)",
    )

    parser.add_argument(
        "--frame-shape",
        choices=["compact", "full"],
        default=None,
        help="Frame field names in the manifest (default: compact)",
    )

    parser.add_argument("--watch", action="store_true", help="Repack whenever an image changes")

    parser.add_argument(
        "--interval", type=float, default=0.5, help="Seconds between polls in watch mode"
    )

    args = parser.parse_args()

    try:
        options = SpriteOptions(
            output_dir=Path(args.output_dir),
            entry=args.entry,
            excludes=compile_patterns(args.exclude, "excludes"),
            includes=compile_patterns([args.include] if args.include else None, "includes"),
            key_strategy=args.key_strategy,
            frame_shape=args.frame_shape,
        )

        if args.watch:
            pipeline = PipelineRegistry.create_pipeline("watch", options=options)
            print(f"Watching entries: {', '.join(options.entries)}", file=sys.stderr)
            pipeline.watch(
                pipeline.source,  # type: ignore[arg-type]
                interval=args.interval,
                on_build=_report_build,
            )
            return

        build = pack_directory(options)
        if build is None:
            return

        print("Validating manifest against schema...", file=sys.stderr)
        is_valid, error_msg = validate_manifest_with_error_details(build.metadata)

        if not is_valid:
            print("Error: Manifest validation failed:", file=sys.stderr)
            print(error_msg, file=sys.stderr)
            sys.exit(1)

        print("Validation successful!", file=sys.stderr)

        _dump(build.metadata)

    except KeyboardInterrupt:
        print("Stopped", file=sys.stderr)
    except Exception as e:
        print(f"Error: Failed to pack sprite sheet: {e}", file=sys.stderr)
        sys.exit(1)


def _report_build(build: SheetBuild | None) -> None:
    if build is None:
        print("No images to pack", file=sys.stderr)
    elif build.metadata_changed:
        print(f"Repacked {len(build.placements)} images", file=sys.stderr)
    else:
        print(f"Repacked {len(build.placements)} images, manifest unchanged", file=sys.stderr)


def _dump(metadata: CoordinateMetadata) -> None:
    json.dump(metadata, sys.stdout, indent=2)
    print()


if __name__ == "__main__":
    main()
