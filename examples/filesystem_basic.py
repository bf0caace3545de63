"""Basic standalone packing example.

This example demonstrates how to:
- Pack every PNG under a directory
- Write sprite.png and manifest.json
- Display summary statistics
"""

import sys
from pathlib import Path

from sprite_sheet_packer import PipelineRegistry, SpriteOptions


def main():
    # Pack a directory (change this to your icon directory)
    icon_dir = Path("assets") / "icons"

    if not icon_dir.exists():
        print(f"Directory not found: {icon_dir}", file=sys.stderr)
        print("Please update the icon_dir variable in this script", file=sys.stderr)
        return

    print(f"Packing directory: {icon_dir}", file=sys.stderr)

    options = SpriteOptions(entry=str(icon_dir), output_dir="dist")
    pipeline = PipelineRegistry.create_pipeline("filesystem", options=options)

    # Wait for both files to be written
    build = pipeline.run(done=lambda: None)

    if build is None:
        print("No images found", file=sys.stderr)
        return

    print("\n✓ Sprite sheet generated successfully", file=sys.stderr)
    print(f"  Images: {len(build.placements)}", file=sys.stderr)
    print(f"  Sheet size: {build.metadata['width']}x{build.metadata['height']}", file=sys.stderr)

    print(f"\nSheet saved to {options.sheet_path}", file=sys.stderr)
    print(f"Manifest saved to {options.manifest_path}", file=sys.stderr)


if __name__ == "__main__":
    main()
