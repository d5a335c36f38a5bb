"""Unit tests for parallel rename execution."""

import queue
from pathlib import Path

from filename_change.core.exec_rename import (
    ProgressTick,
    RenameSummary,
    describe_failures,
    execute_rename,
    start_rename_thread,
)
from filename_change.core.models_fs import FileRecord


def _records(root: Path, count: int) -> list:
    return [FileRecord(original_path=root / f"f{i}.txt", new_name=f"g{i}.txt") for i in range(count)]


class TestExecuteRename:
    """Tests for execute_rename()."""

    def test_all_renamed_with_ticks(self, make_files) -> None:
        root = make_files(*[f"f{i}.txt" for i in range(5)])
        ticks = []

        result = execute_rename(_records(root, 5), progress_callback=ticks.append, max_workers=3)

        assert result.summary == RenameSummary(5, 0)
        assert ticks == [1, 2, 3, 4, 5]
        assert sorted(p.name for p in root.iterdir()) == [f"g{i}.txt" for i in range(5)]

    def test_missing_source_skipped_silently(self, make_files) -> None:
        root = make_files("f0.txt")
        (root / "f0.txt").unlink()
        ticks = []

        result = execute_rename(_records(root, 1), progress_callback=ticks.append)

        assert result.summary == RenameSummary(0, 0)
        assert result.skipped_count == 1
        assert ticks == []

    def test_failure_does_not_stop_siblings(self, make_files) -> None:
        root = make_files("f0.txt", "f1.txt", "g1.txt/inside.txt")

        result = execute_rename(_records(root, 2))

        assert result.summary == RenameSummary(1, 1)
        assert (root / "g0.txt").exists()
        assert (root / "f1.txt").exists()
        assert "f1.txt -> g1.txt" in describe_failures(result)

    def test_empty_input(self) -> None:
        assert execute_rename([]).summary == RenameSummary(0, 0)


def test_background_thread_posts_ticks_then_summary(make_files) -> None:
    root = make_files("f0.txt", "f1.txt", "f2.txt")
    channel: queue.Queue = queue.Queue(maxsize=8)

    thread = start_rename_thread(_records(root, 3), channel)
    thread.join(timeout=10)

    messages = []
    while not channel.empty():
        messages.append(channel.get())

    assert messages[:3] == [ProgressTick(1), ProgressTick(2), ProgressTick(3)]
    assert messages[3:] == [RenameSummary(3, 0)]
