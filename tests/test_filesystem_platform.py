"""Tests for the filesystem platform (scanner and watcher)."""

import json
import os
from pathlib import Path

import pytest

from sprite_sheet_packer import PipelineRegistry, SpriteOptions
from sprite_sheet_packer.platforms.filesystem import (
    GlobScanner,
    PollingWatcher,
    scan_entries,
    validate_path_safety,
)
from sprite_sheet_packer.reconcilers import StandaloneReconciler


@pytest.fixture
def project(tmp_path, make_png) -> Path:
    """A small project tree with icons, vendored files and non-images."""
    (tmp_path / "icons").mkdir()
    (tmp_path / "icons" / "a.png").write_bytes(make_png(10, 10))
    (tmp_path / "icons" / "b.png").write_bytes(make_png(8, 8))
    (tmp_path / "icons" / "notes.txt").write_text("not an image")
    (tmp_path / "icons" / ".hidden.png").write_bytes(make_png(2, 2))
    (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
    (tmp_path / "node_modules" / "pkg" / "logo.png").write_bytes(make_png(4, 4))
    return tmp_path


class TestValidatePathSafety:
    """Test path traversal prevention."""

    def test_allows_paths_within_base(self, tmp_path) -> None:
        validate_path_safety(tmp_path / "subdir" / "file.png", tmp_path)

    def test_rejects_path_traversal(self, tmp_path) -> None:
        with pytest.raises(ValueError, match="escapes base directory"):
            validate_path_safety(tmp_path / ".." / ".." / "etc" / "passwd", tmp_path)


class TestScanEntries:
    """Tests for entry scanning."""

    def test_walks_directory_entries(self, project) -> None:
        options = SpriteOptions(entry="icons", cwd=project)

        names = [p.name for p in scan_entries(options)]

        assert names == ["a.png", "b.png", "notes.txt"]

    def test_results_are_absolute(self, project) -> None:
        options = SpriteOptions(entry="icons", cwd=project)
        assert all(p.is_absolute() for p in scan_entries(options))

    def test_glob_entries(self, project) -> None:
        options = SpriteOptions(entry="icons/*.png", cwd=project)

        names = [p.name for p in scan_entries(options)]

        assert {"a.png", "b.png"} <= set(names)
        assert "notes.txt" not in names

    def test_absolute_glob_entries(self, project) -> None:
        """Test that a glob anchored at the filesystem root is accepted."""
        options = SpriteOptions(entry=str(project / "icons" / "*.png"), cwd=project)

        paths = scan_entries(options)

        assert [p.name for p in paths] == ["a.png", "b.png"]
        assert all(p.is_absolute() for p in paths)

    def test_recursive_glob_entries(self, project) -> None:
        options = SpriteOptions(entry="**/*.png", cwd=project)

        names = {p.name for p in scan_entries(options)}

        assert {"a.png", "b.png"} <= names
        assert "logo.png" not in names

    def test_absolute_glob_in_watch_mode(self, project) -> None:
        options = SpriteOptions(entry=str(project / "icons" / "*.png"), cwd=project)
        watcher = PollingWatcher(options)
        watcher.start()

        assert [os.path.basename(p) for p in watcher.list_files()] == ["a.png", "b.png"]

    def test_ignores_node_modules(self, project) -> None:
        options = SpriteOptions(entry=".", cwd=project)

        relative = [p.relative_to(project).parts for p in scan_entries(options)]

        assert relative
        assert not any("node_modules" in parts for parts in relative)

    def test_multiple_entries_deduplicated(self, project) -> None:
        options = SpriteOptions(entry=["icons", "icons/a.png"], cwd=project)

        assert [p.name for p in scan_entries(options)] == ["a.png", "b.png", "notes.txt"]

    def test_missing_entry_warns(self, project, capsys) -> None:
        options = SpriteOptions(entry="nope", cwd=project)

        assert scan_entries(options) == []
        assert "Warning: Entry does not exist" in capsys.readouterr().err

    def test_no_entries(self, project) -> None:
        assert scan_entries(SpriteOptions(cwd=project)) == []

    def test_own_outputs_skipped(self, project) -> None:
        (project / "sprite.png").write_bytes(b"old sheet")
        options = SpriteOptions(entry=".", cwd=project)

        assert "sprite.png" not in [p.name for p in scan_entries(options)]


class TestGlobScanner:
    """Tests for the one-shot scanner."""

    def test_defaults_to_standalone_shape(self, project) -> None:
        scanner = GlobScanner(SpriteOptions(cwd=project))

        assert scanner.default_key_strategy == "parent"
        assert scanner.default_frame_shape == "compact"

    def test_reads_bytes(self, project, make_png) -> None:
        scanner = GlobScanner(SpriteOptions(entry="icons", cwd=project))
        first = scanner.list_files()[0]

        assert scanner.read_bytes(first) == (project / "icons" / "a.png").read_bytes()

    def test_reconciler_targets_output_dir(self, project) -> None:
        options = SpriteOptions(output_dir="dist", cwd=project)
        reconciler = GlobScanner(options).get_reconciler(options)

        assert isinstance(reconciler, StandaloneReconciler)
        assert reconciler.sheet_path == project / "dist" / "sprite.png"
        assert reconciler.manifest_path == project / "dist" / "manifest.json"
        assert (project / "dist").is_dir()


class TestPollingWatcher:
    """Tests for the polling watcher."""

    def test_not_ready_before_start(self, project) -> None:
        watcher = PollingWatcher(SpriteOptions(entry="icons", cwd=project))
        assert not watcher.ready

        watcher.start()
        assert watcher.ready

    def test_watched_groups_by_directory(self, project) -> None:
        watcher = PollingWatcher(SpriteOptions(entry="icons", cwd=project))
        watcher.start()

        watched = watcher.watched()

        assert list(watched) == [str(project / "icons")]
        assert [os.path.basename(p) for p in watcher.list_files()] == [
            "a.png",
            "b.png",
            "notes.txt",
        ]

    def test_reports_changes(self, project, make_png) -> None:
        watcher = PollingWatcher(SpriteOptions(entry="icons", cwd=project))
        watcher.start()

        (project / "icons" / "a.png").write_bytes(make_png(30, 30))
        (project / "icons" / "c.png").write_bytes(make_png(3, 3))
        (project / "icons" / "b.png").unlink()

        events = sorted((e, os.path.basename(p)) for e, p in watcher.poll())

        assert events == [("added", "c.png"), ("changed", "a.png"), ("deleted", "b.png")]
        assert watcher.poll() == []

    def test_poll_before_start_starts(self, project) -> None:
        watcher = PollingWatcher(SpriteOptions(entry="icons", cwd=project))

        assert watcher.poll() == []
        assert watcher.ready


class TestFilesystemPipeline:
    """End-to-end tests for standalone output."""

    def test_writes_sheet_and_manifest(self, project) -> None:
        options = SpriteOptions(entry="icons", output_dir="dist", cwd=project)
        pipeline = PipelineRegistry.create_pipeline("filesystem", options=options)

        build = pipeline.run(done=lambda: None)

        manifest = json.loads((project / "dist" / "manifest.json").read_text(encoding="utf-8"))
        assert manifest == {
            "width": 18,
            "height": 10,
            "frames": {
                "icons_a.png": {"x": 0, "y": 0, "w": 10, "h": 10},
                "icons_b.png": {"x": 10, "y": 0, "w": 8, "h": 8},
            },
        }
        assert (project / "dist" / "sprite.png").read_bytes() == build.image

    def test_unchanged_manifest_not_rewritten(self, project) -> None:
        """Test that a second pass over unchanged images skips the manifest write."""
        options = SpriteOptions(entry="icons", output_dir="dist", cwd=project)
        pipeline = PipelineRegistry.create_pipeline("filesystem", options=options)
        manifest_path = project / "dist" / "manifest.json"

        pipeline.run(done=lambda: None)
        manifest_path.unlink()
        second = pipeline.run(done=lambda: None)

        assert second.metadata_changed is False
        assert not manifest_path.exists()
        assert (project / "dist" / "sprite.png").exists()

    def test_nothing_to_pack(self, tmp_path) -> None:
        options = SpriteOptions(entry=".", cwd=tmp_path)
        pipeline = PipelineRegistry.create_pipeline("filesystem", options=options)
        finished = []

        assert pipeline.run(done=lambda: finished.append(True)) is None
        assert finished == [True]
        assert not (tmp_path / "sprite.png").exists()
