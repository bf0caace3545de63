"""Filesystem sources.

This module provides a one-shot GlobScanner and a PollingWatcher that
discover candidates under the configured entry roots and write the sheet
as standalone files.
"""

import fnmatch
import glob
import os
import sys
from pathlib import Path

from ...config import SpriteOptions
from ...filters import to_posix
from ...reconcilers.standalone import StandaloneReconciler
from ...sources.base import CandidateSource, ChangeEvent, Watcher

GLOB_CHARS = set("*?[")


def validate_path_safety(path: Path, base_dir: Path) -> None:
    """Validate that a path stays within the base directory.

    Args:
        path: Path to validate
        base_dir: Base directory that path must be within

    Raises:
        ValueError: If path escapes the base directory
    """
    resolved_path = path.resolve()
    resolved_base = base_dir.resolve()

    if not resolved_path.is_relative_to(resolved_base):
        raise ValueError(f"Path {path} escapes base directory {base_dir}")


def is_ignored(path: Path, cwd: Path, ignore: tuple[str, ...]) -> bool:
    """Check a path against cwd-relative ignore globs."""
    try:
        relative = to_posix(path.relative_to(cwd))
    except ValueError:
        return False
    return any(fnmatch.fnmatch(relative, pattern) for pattern in ignore)


def _walk(root: Path) -> list[Path]:
    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        # Skip hidden directories and files
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
        for filename in sorted(filenames):
            if filename.startswith("."):
                continue
            file_path = Path(dirpath) / filename
            try:
                validate_path_safety(file_path, root)
            except ValueError as e:
                print(f"Warning: Failed to process {file_path}: {e}", file=sys.stderr)
                continue
            files.append(file_path)
    return files


def scan_entries(options: SpriteOptions) -> list[Path]:
    """Collect every file under the entry roots.

    Each entry is a directory (walked recursively), a glob pattern, or a
    single file, relative to the options' cwd. Results are absolute,
    deduplicated and in discovery order. The sheet and manifest outputs
    are never returned.

    Args:
        options: Pipeline options providing cwd, entries and ignore globs

    Returns:
        List of absolute file paths
    """
    cwd = options.cwd
    found: dict[Path, None] = {}
    # Never pack our own output back into the sheet
    outputs = {options.sheet_path.resolve(), options.manifest_path.resolve()}

    for entry in options.entries:
        root = cwd / entry
        if root.is_dir():
            paths = _walk(root)
        elif GLOB_CHARS & set(entry):
            # Absolute patterns are matched as-is, relative ones under cwd
            matches = glob.glob(entry, root_dir=cwd, recursive=True)
            paths = sorted(p for p in (cwd / m for m in matches) if p.is_file())
        elif root.is_file():
            paths = [root]
        else:
            print(f"Warning: Entry does not exist: {root}", file=sys.stderr)
            continue

        for path in paths:
            if path.resolve() in outputs:
                continue
            if not is_ignored(path, cwd, options.ignore):
                found[path.absolute()] = None

    return list(found)


class GlobScanner(CandidateSource):
    """One-shot source that scans the entry roots on every attempt.

    Frame keys default to the parent-qualified strategy and the manifest
    uses the compact frame shape.

    Example:
        >>> scanner = GlobScanner(SpriteOptions(entry="assets/**/*.png"))
        >>> scanner.list_files()
        ['/project/assets/icons/home.png', ...]
    """

    default_key_strategy = "parent"
    default_frame_shape = "compact"

    def __init__(self, options: SpriteOptions):
        self.options = options
        self._reconciler: StandaloneReconciler | None = None

    def list_files(self) -> list[str]:
        return [str(path) for path in scan_entries(self.options)]

    def read_bytes(self, identifier: str) -> bytes:
        return Path(identifier).read_bytes()

    def get_reconciler(self, options: SpriteOptions) -> StandaloneReconciler:
        if self._reconciler is None:
            options.resolve_output_dir()
            self._reconciler = StandaloneReconciler(options.sheet_path, options.manifest_path)
        return self._reconciler


class PollingWatcher(Watcher):
    """Watcher that detects changes by comparing stat snapshots.

    Each poll rescans the entry roots and compares modification time and
    size with the previous snapshot.

    Example:
        >>> watcher = PollingWatcher(SpriteOptions(entry="assets"))
        >>> watcher.start()
        >>> watcher.poll()
        [('changed', '/project/assets/icons/home.png')]
    """

    default_key_strategy = "parent"
    default_frame_shape = "compact"

    def __init__(self, options: SpriteOptions):
        self.options = options
        self._reconciler: StandaloneReconciler | None = None
        self._snapshot: dict[str, tuple[int, int]] | None = None

    @property
    def ready(self) -> bool:
        return self._snapshot is not None

    def start(self) -> None:
        self._snapshot = self._take_snapshot()

    def poll(self) -> list[tuple[ChangeEvent, str]]:
        if self._snapshot is None:
            self.start()
            return []

        previous = self._snapshot
        current = self._take_snapshot()
        self._snapshot = current

        events: list[tuple[ChangeEvent, str]] = []
        for path, stamp in current.items():
            if path not in previous:
                events.append(("added", path))
            elif previous[path] != stamp:
                events.append(("changed", path))
        for path in previous:
            if path not in current:
                events.append(("deleted", path))
        return events

    def watched(self) -> dict[str, list[str]]:
        grouped: dict[str, list[str]] = {}
        for path in self._snapshot or {}:
            grouped.setdefault(os.path.dirname(path), []).append(path)
        return grouped

    def read_bytes(self, identifier: str) -> bytes:
        return Path(identifier).read_bytes()

    def get_reconciler(self, options: SpriteOptions) -> StandaloneReconciler:
        if self._reconciler is None:
            options.resolve_output_dir()
            self._reconciler = StandaloneReconciler(options.sheet_path, options.manifest_path)
        return self._reconciler

    def _take_snapshot(self) -> dict[str, tuple[int, int]]:
        snapshot: dict[str, tuple[int, int]] = {}
        for path in scan_entries(self.options):
            try:
                stat_info = path.stat()
            except OSError as e:
                # File vanished between listing and stat
                print(f"Warning: Failed to process {path}: {e}", file=sys.stderr)
                continue
            snapshot[str(path)] = (stat_info.st_mtime_ns, stat_info.st_size)
        return snapshot
