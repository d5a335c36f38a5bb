"""
session.py - Rename Session State

RenameSession owns the inputs, the scanned records, the status line and the
apply progress. Background rename work reports back only through messages
(ProgressTick / RenameSummary) handed to handle_message().
"""

from typing import List, Optional, Union
import logging
import queue
import threading

from .models_fs import FileRecord, ConversionProgress, RenameOptions
from .exclude_rules import ExclusionRules
from .text_match import NameTransformer
from .scan_files import scan_files
from .plan_rename import build_preview, find_conflicts, ConflictReport
from .exec_rename import (
    ProgressTick, RenameSummary, select_existing, start_rename_thread
)

logger = logging.getLogger(__name__)

STATUS_READY = "Ready"
STATUS_NOT_FOUND = "Directory not found"
STATUS_NOTHING_TO_RENAME = "No files to rename."


class RenameSession:
    """Exclusively owned application state"""

    def __init__(self, options: Optional[RenameOptions] = None):
        self.options = options or RenameOptions()

        # Inputs from the shell
        self.selected_dir: str = ""
        self.search_pattern: str = ""
        self.replace_pattern: str = ""
        self.exclude_pattern: str = ""
        self.case_sensitive: bool = False
        self.include_subdirectories: bool = False
        self.auto_number_on_conflict: bool = False

        # Outputs
        self.files: List[FileRecord] = []
        self.preview_files: List[FileRecord] = []
        self.status_message: str = STATUS_READY
        self.last_conflicts: Optional[ConflictReport] = None
        self.last_summary: Optional[RenameSummary] = None
        self.dir_found = False
        self.progress = ConversionProgress()

        self._channel: "queue.Queue" = queue.Queue(maxsize=self.options.channel_size)
        self._thread: Optional[threading.Thread] = None

    # ------------------------------------------------------------------
    # Scan / preview
    # ------------------------------------------------------------------
    def load_files(self) -> List[str]:
        """
        Rescan selected_dir, replacing the record list

        Returns:
            Advisory messages from exclusion compilation
        """
        rules = ExclusionRules.compile(self.exclude_pattern)
        result = scan_files(
            self.selected_dir,
            recurse=self.include_subdirectories,
            rules=rules,
            search_pattern=self.search_pattern,
            replace_pattern=self.replace_pattern,
            case_sensitive=self.case_sensitive,
        )
        self.files = result.records
        self.preview_files = []
        self.dir_found = result.found

        if not result.found:
            self.status_message = STATUS_NOT_FOUND
        else:
            self.status_message = _with_notes(f"Loaded {len(self.files)} file(s)", rules.errors)
        return rules.errors

    def update_preview(self) -> None:
        """Rescan and recompute proposed names, preview set and status"""
        notes = self.load_files()
        if not self.dir_found:
            return

        transformer = NameTransformer(
            self.search_pattern,
            self.replace_pattern,
            case_sensitive=self.case_sensitive,
            regex_mode=self.options.regex_mode,
        )
        preview = build_preview(
            self.files,
            transformer,
            auto_number_on_conflict=self.auto_number_on_conflict,
            case_insensitive=self.options.case_insensitive_paths,
        )
        self.preview_files = preview.changed

        if transformer.error:
            notes = notes + [transformer.error]
        if preview.invalid_count:
            notes = notes + [f"{preview.invalid_count} invalid name(s) ignored"]

        changed = len(self.preview_files)
        if self.auto_number_on_conflict and preview.renumbered_count:
            text = f"Preview updated ({changed} changed, {preview.renumbered_count} renumbered)"
        elif not self.auto_number_on_conflict and preview.duplicate_count:
            text = f"Preview updated ({changed} changed, {preview.duplicate_count} duplicate(s))"
        else:
            text = f"Preview updated ({changed} changed)"
        self.status_message = _with_notes(text, notes)

    # ------------------------------------------------------------------
    # Apply
    # ------------------------------------------------------------------
    def begin_apply(self) -> Optional[List[FileRecord]]:
        """
        Validate and reserve the apply

        Returns:
            Records to hand to the executor, or None when nothing starts
            (already running, nothing to rename, or conflicts)
        """
        if self.progress.in_progress:
            return None

        changed = [f for f in self.files if f.is_changed]
        # Already applied entries no longer exist and are dropped
        changed, _missing = select_existing(changed)
        if not changed:
            self.status_message = STATUS_NOTHING_TO_RENAME
            return None

        report = find_conflicts(changed, self.options.case_insensitive_paths)
        self.last_conflicts = report
        if report.has_conflicts:
            self.status_message = report.summary()
            return None

        self.progress.reset(len(changed))
        self.status_message = f"Renaming {len(changed)} file(s)..."
        logger.info("apply_started total=%d", len(changed))
        return changed

    def apply(self) -> bool:
        """
        Start renaming in the background

        Returns:
            Whether an apply was started
        """
        records = self.begin_apply()
        if records is None:
            return False
        self._thread = start_rename_thread(records, self._channel, self.options.max_workers)
        return True

    def handle_message(self, msg: Union[ProgressTick, RenameSummary]) -> None:
        """Apply one message from the rename workers"""
        if isinstance(msg, ProgressTick):
            self.progress.tick(msg.done)
        elif isinstance(msg, RenameSummary):
            self.progress.finish()
            self.last_summary = msg
            # Refresh the lists, then keep the completion message visible
            self.update_preview()
            self.status_message = msg.message()
            logger.info("apply_finished success=%d errors=%d", msg.success_count, msg.error_count)
        else:
            raise TypeError(f"Unknown message: {msg!r}")

    def process_pending(self, block: bool = False, timeout: Optional[float] = None) -> int:
        """
        Drain the session's own channel

        Returns:
            Number of handled messages
        """
        handled = 0
        while True:
            try:
                msg = self._channel.get(block=block and handled == 0, timeout=timeout)
            except queue.Empty:
                return handled
            self.handle_message(msg)
            handled += 1

    def wait(self) -> None:
        """Block until the running apply has delivered its summary"""
        while self.progress.in_progress:
            self.handle_message(self._channel.get())


def _with_notes(text: str, notes: List[str]) -> str:
    if not notes:
        return text
    return f"{text} - " + "; ".join(notes)
