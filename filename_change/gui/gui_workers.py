"""
gui_workers.py - GUI Worker Threads

Runs renames in the background so the UI is not blocked.
Ticks and the summary reach the window only through queued signals.
"""

from typing import Optional, List

from PySide6.QtCore import QThread, Signal, QObject

from ..core import FileRecord, RenameSummary, execute_rename


class RenameWorker(QThread):
    """Rename execution worker thread"""

    # Signals
    progress = Signal(int)              # Completed attempts so far
    finished_summary = Signal(object)   # RenameSummary
    error = Signal(str)                 # Error message

    def __init__(
        self,
        records: List[FileRecord],
        max_workers: Optional[int] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.records = records
        self.max_workers = max_workers

    def run(self):
        try:
            result = execute_rename(
                self.records,
                progress_callback=self.progress.emit,
                max_workers=self.max_workers,
            )
            self.finished_summary.emit(result.summary)
        except Exception as e:
            self.error.emit(str(e))
            # The session still needs a terminal message
            self.finished_summary.emit(RenameSummary(0, len(self.records)))
