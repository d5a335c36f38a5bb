"""
gui_mainwindow.py - GUI Main Window

Single window: folder, search/replace/exclude inputs, option checkboxes,
preview table, progress bar and status line. All state lives in a
RenameSession; the window only copies inputs in and renders outputs.
"""

from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QLineEdit, QPushButton, QCheckBox, QTableWidget,
    QTableWidgetItem, QProgressBar, QFileDialog, QMessageBox,
    QHeaderView, QGroupBox
)
from PySide6.QtCore import Slot
from PySide6.QtGui import QColor

from ..core import RenameSession, RenameOptions, RenameSummary, ProgressTick
from .gui_workers import RenameWorker


class RenamePanel(QWidget):
    """Search and Replace Rename Panel"""

    def __init__(self, session: Optional[RenameSession] = None, parent=None):
        super().__init__(parent)
        self.session = session or RenameSession()
        self.rename_worker: Optional[RenameWorker] = None
        # Message boxes are skipped when False (tests, scripted use)
        self.interactive = True

        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)

        # Settings group
        settings_group = QGroupBox("Settings")
        settings_layout = QGridLayout(settings_group)

        # Directory selection
        settings_layout.addWidget(QLabel("Folder:"), 0, 0)
        self.dir_edit = QLineEdit()
        self.dir_edit.setPlaceholderText("Select folder...")
        settings_layout.addWidget(self.dir_edit, 0, 1)
        self.browse_btn = QPushButton("Browse...")
        self.browse_btn.clicked.connect(self._browse_directory)
        settings_layout.addWidget(self.browse_btn, 0, 2)

        settings_layout.addWidget(QLabel("Search:"), 1, 0)
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Text to find (leave empty for no change)")
        settings_layout.addWidget(self.search_edit, 1, 1, 1, 2)

        settings_layout.addWidget(QLabel("Replace:"), 2, 0)
        self.replace_edit = QLineEdit()
        self.replace_edit.setPlaceholderText("Replacement (leave empty to delete)")
        settings_layout.addWidget(self.replace_edit, 2, 1, 1, 2)

        settings_layout.addWidget(QLabel("Exclude:"), 3, 0)
        self.exclude_edit = QLineEdit()
        self.exclude_edit.setPlaceholderText("e.g. .tmp, *.bak, build/, re:^draft")
        settings_layout.addWidget(self.exclude_edit, 3, 1, 1, 2)

        # Options
        options_layout = QHBoxLayout()
        self.case_check = QCheckBox("Case Sensitive")
        self.subdir_check = QCheckBox("Include Subfolders")
        self.autonum_check = QCheckBox("Number Duplicates")
        self.regex_check = QCheckBox("Regular Expression")
        for check in (self.case_check, self.subdir_check, self.autonum_check, self.regex_check):
            # Flag changes re-run the preview
            check.toggled.connect(self._do_preview)
            options_layout.addWidget(check)
        options_layout.addStretch()
        settings_layout.addLayout(options_layout, 4, 0, 1, 3)

        layout.addWidget(settings_group)

        # Preview table
        self.count_label = QLabel()
        layout.addWidget(self.count_label)
        self._update_counts()

        self.table = QTableWidget()
        self.table.setColumnCount(3)
        self.table.setHorizontalHeaderLabels(["Original Name", "New Name", "Folder"])
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        self.table.horizontalHeader().setSectionResizeMode(2, QHeaderView.ResizeMode.Stretch)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        layout.addWidget(self.table, 1)

        # Progress and execution
        bottom_layout = QHBoxLayout()

        self.progress_bar = QProgressBar()
        self.progress_bar.setVisible(False)
        bottom_layout.addWidget(self.progress_bar, 1)

        self.preview_btn = QPushButton("Preview")
        self.preview_btn.clicked.connect(self._do_preview)
        bottom_layout.addWidget(self.preview_btn)

        self.execute_btn = QPushButton("Apply")
        self.execute_btn.clicked.connect(self._do_execute)
        self.execute_btn.setStyleSheet("QPushButton { background-color: #4CAF50; color: white; font-weight: bold; padding: 8px 16px; }")
        bottom_layout.addWidget(self.execute_btn)

        layout.addLayout(bottom_layout)

        # Status label
        self.status_label = QLabel(self.session.status_message)
        layout.addWidget(self.status_label)

    def _browse_directory(self):
        """Browse and select directory"""
        directory = QFileDialog.getExistingDirectory(self, "Select Folder")
        if directory:
            self.dir_edit.setText(directory)
            self._do_preview()

    def _sync_inputs(self):
        """Copy widget values into the session"""
        s = self.session
        s.selected_dir = self.dir_edit.text().strip()
        s.search_pattern = self.search_edit.text()
        s.replace_pattern = self.replace_edit.text()
        s.exclude_pattern = self.exclude_edit.text()
        s.case_sensitive = self.case_check.isChecked()
        s.include_subdirectories = self.subdir_check.isChecked()
        s.auto_number_on_conflict = self.autonum_check.isChecked()
        s.options.regex_mode = self.regex_check.isChecked()

    @Slot()
    def _do_preview(self):
        """Recompute preview"""
        if self.session.progress.in_progress:
            return
        self._sync_inputs()
        self.session.update_preview()
        self._refresh_view()

    def _refresh_view(self):
        """Render session records and status"""
        files = self.session.files
        base_dir = Path(self.session.selected_dir)
        self.table.setRowCount(len(files))

        for i, f in enumerate(files):
            self.table.setItem(i, 0, QTableWidgetItem(f.original_name))
            new_name_item = QTableWidgetItem(f.new_name)
            if f.is_changed:
                new_name_item.setForeground(QColor(0, 150, 0))
            else:
                new_name_item.setForeground(QColor(150, 150, 150))
            self.table.setItem(i, 1, new_name_item)
            self.table.setItem(i, 2, QTableWidgetItem(f.relative_dir(base_dir)))

        self._update_counts()
        self.status_label.setText(self.session.status_message)

    def _update_counts(self):
        self.count_label.setText(
            f"Original files ({len(self.session.files)})    "
            f"Preview ({len(self.session.preview_files)})"
        )

    @Slot()
    def _do_execute(self):
        """Execute rename"""
        if self.session.progress.in_progress:
            return

        if self.interactive and self.session.preview_files:
            reply = QMessageBox.question(
                self, "Confirm",
                f"Rename {len(self.session.preview_files)} file(s)?\n\nThis action cannot be undone!",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
            )
            if reply != QMessageBox.StandardButton.Yes:
                return

        records = self.session.begin_apply()
        if records is None:
            self.status_label.setText(self.session.status_message)
            return

        self._set_busy(True)
        self.progress_bar.setRange(0, self.session.progress.total)
        self.progress_bar.setValue(0)
        self.status_label.setText(self.session.status_message)

        # Start execution thread
        self.rename_worker = RenameWorker(records, max_workers=self.session.options.max_workers)
        self.rename_worker.progress.connect(self._on_rename_progress)
        self.rename_worker.finished_summary.connect(self._on_rename_finished)
        self.rename_worker.error.connect(self._on_rename_error)
        self.rename_worker.start()

    def _set_busy(self, busy: bool):
        self.execute_btn.setEnabled(not busy)
        self.execute_btn.setText("Applying..." if busy else "Apply")
        self.preview_btn.setEnabled(not busy)
        self.browse_btn.setEnabled(not busy)
        self.progress_bar.setVisible(busy)

    @Slot(int)
    def _on_rename_progress(self, done: int):
        """Execution progress update"""
        self.session.handle_message(ProgressTick(done))
        self.progress_bar.setValue(self.session.progress.done)

    @Slot(object)
    def _on_rename_finished(self, summary: RenameSummary):
        """Execution complete"""
        self.session.handle_message(summary)
        self._set_busy(False)
        self._refresh_view()

        if self.interactive:
            QMessageBox.information(self, "Changes applied", summary.message())

    @Slot(str)
    def _on_rename_error(self, error: str):
        """Execution error"""
        if self.interactive:
            QMessageBox.critical(self, "Error", f"Execution failed: {error}")


class MainWindow(QMainWindow):
    """Main window"""

    def __init__(self, options: Optional[RenameOptions] = None):
        super().__init__()
        self.setWindowTitle("Filename Change")
        self.setMinimumSize(900, 600)

        self.panel = RenamePanel(RenameSession(options))
        self.setCentralWidget(self.panel)

        # Status bar
        self.statusBar().showMessage("Ready")
