"""Tests for RichSyncProgress."""

from __future__ import annotations

import io

from rich.console import Console

from draftsync.cli.progress import RichSyncProgress
from draftsync.core.engine import NullSyncProgress, SyncProgress


def _progress() -> RichSyncProgress:
    return RichSyncProgress(console=Console(file=io.StringIO(), force_terminal=False))


def test_implements_protocol() -> None:
    assert issubclass(RichSyncProgress, SyncProgress)
    assert issubclass(NullSyncProgress, SyncProgress)


def test_determinate_phase_completes() -> None:
    with _progress() as progress:
        progress.phase_start("Sync", total=3)
        progress.item_done("Sync")
        progress.phase_done("Sync")

        task = progress._progress.tasks[0]
        assert task.completed == 3
        assert task.total == 3


def test_repeated_resolve_phase_accumulates_total() -> None:
    with _progress() as progress:
        progress.phase_start("Resolve", total=2)
        progress.item_done("Resolve")
        progress.item_done("Resolve")
        progress.phase_start("Resolve", total=1)

        assert len(progress._progress.tasks) == 1
        assert progress._progress.tasks[0].total == 3
        assert progress._progress.tasks[0].completed == 2


def test_indeterminate_phase_and_unknown_phases_are_tolerated() -> None:
    with _progress() as progress:
        progress.phase_start("Sync", total=None)
        progress.phase_done("Sync")
        progress.item_done("Unknown")
        progress.phase_done("Unknown")
        progress.phase_error("Unknown", RuntimeError("boom"))

        assert progress._progress.tasks[0].completed == 1


def test_phase_error_marks_description() -> None:
    with _progress() as progress:
        progress.phase_start("Sync", total=1)
        progress.phase_error("Sync", RuntimeError("boom"))

        assert "✗" in progress._progress.tasks[0].description
