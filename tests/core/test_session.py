"""Tests for RenameSession: refresh, preview, validation and apply."""

from pathlib import Path

import pytest

from filename_change.core.models_fs import RenameOptions
from filename_change.core.session import (
    STATUS_NOT_FOUND,
    STATUS_NOTHING_TO_RENAME,
    RenameSession,
)


@pytest.fixture
def session() -> RenameSession:
    return RenameSession(RenameOptions(max_workers=2))


def _snapshot(session: RenameSession) -> tuple:
    return (
        [(str(f.original_path), f.new_name) for f in session.files],
        [(str(f.original_path), f.new_name) for f in session.preview_files],
        session.status_message,
    )


class TestPreview:
    """Preview-time behaviour."""

    def test_missing_directory(self, session: RenameSession, tmp_path: Path) -> None:
        session.selected_dir = str(tmp_path / "missing")

        session.update_preview()

        assert session.status_message == STATUS_NOT_FOUND
        assert session.files == []
        assert session.preview_files == []

    def test_load_files_status(self, session: RenameSession, report_dir: Path) -> None:
        session.selected_dir = str(report_dir)

        session.load_files()

        assert session.status_message == "Loaded 3 file(s)"

    def test_identity(self, session: RenameSession, report_dir: Path) -> None:
        session.selected_dir = str(report_dir)

        session.update_preview()

        assert session.preview_files == []
        assert all(f.new_name == f.original_name for f in session.files)
        assert session.status_message == "Preview updated (0 changed)"

    def test_search_replace(self, session: RenameSession, report_dir: Path) -> None:
        session.selected_dir = str(report_dir)
        session.search_pattern = "report"
        session.replace_pattern = "doc"

        session.update_preview()

        assert {f.original_name: f.new_name for f in session.files} == {
            "Report.TXT": "doc.TXT",
            "report_old.txt": "doc_old.txt",
            "image.png": "image.png",
        }
        assert len(session.preview_files) == 2
        assert session.status_message == "Preview updated (2 changed)"

    def test_idempotent(self, session: RenameSession, report_dir: Path) -> None:
        session.selected_dir = str(report_dir)
        session.search_pattern = "report"
        session.replace_pattern = "doc"

        session.update_preview()
        first = _snapshot(session)
        session.update_preview()

        assert _snapshot(session) == first

    def test_exclusion_error_in_status(self, session: RenameSession, report_dir: Path) -> None:
        session.selected_dir = str(report_dir)
        session.exclude_pattern = "re:("

        session.update_preview()

        assert "Exclude regex error: (" in session.status_message
        assert len(session.files) == 3

    def test_exclusion_filters_records(self, session: RenameSession, make_files) -> None:
        root = make_files("cache.tmp", "notes.txt", "stale/notes.txt")
        session.selected_dir = str(root)
        session.include_subdirectories = True
        session.exclude_pattern = ".tmp, re:stale"

        session.update_preview()

        assert [str(f.original_path) for f in session.files] == [str(root / "notes.txt")]

    def test_search_error_in_status(self, session: RenameSession, report_dir: Path) -> None:
        session.options.regex_mode = True
        session.selected_dir = str(report_dir)
        session.search_pattern = "(["

        session.update_preview()

        assert session.preview_files == []
        assert "Search pattern error" in session.status_message

    def test_duplicates_reported(self, session: RenameSession, make_files) -> None:
        session.options.regex_mode = True
        session.selected_dir = str(make_files("a.txt", "b.txt"))
        session.search_pattern = "^[ab]"
        session.replace_pattern = "z"

        session.update_preview()

        assert session.status_message == "Preview updated (2 changed, 1 duplicate(s))"

    def test_auto_number(self, session: RenameSession, make_files) -> None:
        session.options.regex_mode = True
        session.selected_dir = str(make_files("a.txt", "b.txt"))
        session.search_pattern = "^[ab]"
        session.replace_pattern = "z"
        session.auto_number_on_conflict = True

        session.update_preview()

        assert [f.new_name for f in session.files] == ["z.txt", "z (2).txt"]
        assert session.status_message == "Preview updated (2 changed, 1 renumbered)"


class TestApply:
    """Apply-time behaviour."""

    def test_nothing_to_rename(self, session: RenameSession, report_dir: Path) -> None:
        session.selected_dir = str(report_dir)
        session.update_preview()

        assert not session.apply()
        assert session.status_message == STATUS_NOTHING_TO_RENAME

    def test_duplicate_targets_refused(self, session: RenameSession, make_files) -> None:
        root = make_files("a.txt", "b.txt")
        session.options.regex_mode = True
        session.selected_dir = str(root)
        session.search_pattern = "^[ab]"
        session.replace_pattern = "z"
        session.update_preview()

        assert not session.apply()

        assert session.last_conflicts.duplicate_count == 1
        assert session.status_message.startswith("Conflicts detected: 1 duplicate target(s), 0 collision")
        assert sorted(p.name for p in root.iterdir()) == ["a.txt", "b.txt"]
        assert not session.progress.in_progress

    def test_existing_file_refused(self, session: RenameSession, make_files) -> None:
        root = make_files("a.txt", "b.txt")
        session.selected_dir = str(root)
        session.exclude_pattern = "b.txt"
        session.search_pattern = "a"
        session.replace_pattern = "b"
        session.update_preview()

        assert not session.apply()

        assert session.last_conflicts.existing_count == 1
        assert (root / "a.txt").exists()

    def test_apply_completes(self, session: RenameSession, make_files) -> None:
        root = make_files("old1.txt", "old2.txt", "old3.txt")
        session.selected_dir = str(root)
        session.search_pattern = "old"
        session.replace_pattern = "new"
        session.update_preview()

        assert session.apply()
        assert session.progress.total == 3
        session.wait()

        assert session.progress.done == 3
        assert not session.progress.in_progress
        assert session.last_summary.success_count == 3
        assert session.last_summary.error_count == 0
        assert session.status_message == "Renamed 3 file(s), 0 error(s)"
        assert sorted(p.name for p in root.iterdir()) == ["new1.txt", "new2.txt", "new3.txt"]
        # Lists are refreshed after apply
        assert [f.original_name for f in session.files] == ["new1.txt", "new2.txt", "new3.txt"]

    def test_apply_auto_numbered(self, session: RenameSession, make_files) -> None:
        root = make_files("a.txt", "b.txt")
        session.options.regex_mode = True
        session.selected_dir = str(root)
        session.search_pattern = "^[ab]"
        session.replace_pattern = "z"
        session.auto_number_on_conflict = True
        session.update_preview()

        assert session.apply()
        session.wait()

        assert sorted(p.name for p in root.iterdir()) == ["z (2).txt", "z.txt"]

    def test_reentrant_apply_ignored(self, session: RenameSession, make_files) -> None:
        root = make_files("old1.txt", "old2.txt")
        session.selected_dir = str(root)
        session.search_pattern = "old"
        session.replace_pattern = "new"
        session.update_preview()

        assert session.apply()
        status = session.status_message

        assert not session.apply()
        assert session.status_message == status

        session.wait()
        assert session.last_summary.success_count == 2
