"""Standalone reconciler.

Writes the sheet and its manifest as two files in an output directory,
for builds that have no asset set to mutate.
"""

import sys
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from pathlib import Path

from ..builder import SheetBuild
from ..core.metadata import dumps_metadata
from .base import Done, Reconciler


def _write_bytes(path: Path, contents: bytes) -> Path:
    path.write_bytes(contents)
    return path


def _write_text(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def _report_failure(future: Future) -> None:
    # Nobody waits on fire-and-forget writes, so surface failures here
    error = future.exception()
    if error is not None:
        print(f"Warning: Failed to write sprite output: {error}", file=sys.stderr)


class StandaloneReconciler(Reconciler):
    """Reconciler that writes the sheet and manifest to fixed paths.

    The writes run on a single-worker executor, so writes from
    consecutive attempts land in submission order. When a completion
    signal is given, both are awaited and ``done`` fires whether they
    succeeded or not; the first write error is then re-raised. Without a
    completion signal the writes are fired and forgotten, and failures are
    only reported on stderr.

    The sheet is always written. The manifest is written only when the
    coordinate map changed since the previous attempt.
    """

    def __init__(
        self,
        sheet_path: Path,
        manifest_path: Path,
        executor: Executor | None = None,
    ):
        """Initialize the reconciler.

        Args:
            sheet_path: Destination of the sheet image
            manifest_path: Destination of the JSON manifest
            executor: Executor for the writes (one worker thread by default)
        """
        self.sheet_path = sheet_path
        self.manifest_path = manifest_path
        self.executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="sprite-write"
        )

    def reconcile(
        self,
        build: SheetBuild,
        identifiers: list[str],
        done: Done | None = None,
    ) -> None:
        writes = [self.executor.submit(_write_bytes, self.sheet_path, build.image)]
        if build.metadata_changed:
            writes.append(
                self.executor.submit(
                    _write_text, self.manifest_path, dumps_metadata(build.metadata)
                )
            )

        if done is None:
            for future in writes:
                future.add_done_callback(_report_failure)
            return

        wait(writes)
        try:
            for future in writes:
                future.result()
        finally:
            done()
