"""
exec_rename.py - Rename Execution Module

Responsibilities:
- Parallel, independent renames on a bounded worker pool
- Progress ticks and a final (success, error) summary
- Background dispatch posting messages onto a channel
"""

from typing import List, Tuple, Optional, Callable
from dataclasses import dataclass, field
from concurrent.futures import ThreadPoolExecutor, as_completed
import logging
import os
import queue
import threading

from .models_fs import FileRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressTick:
    """Number of rename attempts completed so far"""
    done: int


@dataclass(frozen=True)
class RenameSummary:
    """Terminal apply message"""
    success_count: int
    error_count: int

    def message(self) -> str:
        return f"Renamed {self.success_count} file(s), {self.error_count} error(s)"


@dataclass
class RenameResult:
    """Rename execution result"""
    success: List[FileRecord] = field(default_factory=list)
    failed: List[Tuple[FileRecord, str]] = field(default_factory=list)  # (record, error_msg)
    skipped: List[FileRecord] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.success)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def summary(self) -> RenameSummary:
        return RenameSummary(self.success_count, self.failed_count)


def _rename_one(record: FileRecord) -> None:
    os.rename(record.original_path, record.target_path)


def select_existing(records: List[FileRecord]) -> Tuple[List[FileRecord], List[FileRecord]]:
    """Split records into (still existing, vanished since scan)"""
    present, missing = [], []
    for r in records:
        (present if r.original_path.exists() else missing).append(r)
    return present, missing


def execute_rename(
    records: List[FileRecord],
    progress_callback: Optional[Callable[[int], None]] = None,
    max_workers: Optional[int] = None
) -> RenameResult:
    """
    Execute renames in parallel

    Records whose original path no longer exists are skipped silently.
    There is no ordering between files and no rollback.

    Args:
        records: Validated changed records
        progress_callback: Called with the completed count after each attempt
        max_workers: Pool size (None means os.cpu_count())

    Returns:
        Execution result
    """
    result = RenameResult()
    todo, result.skipped = select_existing(records)

    if not todo:
        return result

    workers = max_workers or os.cpu_count() or 1
    done = 0

    with ThreadPoolExecutor(max_workers=min(workers, len(todo))) as pool:
        futures = {pool.submit(_rename_one, r): r for r in todo}
        # This thread is the only consumer of completions and the only source of ticks
        for future in as_completed(futures):
            record = futures[future]
            try:
                future.result()
                result.success.append(record)
            except OSError as e:
                result.failed.append((record, str(e)))
                logger.debug("rename_failed src=%s dst=%s err=%s",
                             record.original_path, record.new_name, e)
            done += 1
            if progress_callback:
                progress_callback(done)

    logger.info("rename_done success=%d errors=%d skipped=%d",
                result.success_count, result.failed_count, result.skipped_count)
    if result.failed:
        logger.warning("rename failures:\n%s", describe_failures(result))
    return result


def start_rename_thread(
    records: List[FileRecord],
    channel: "queue.Queue",
    max_workers: Optional[int] = None
) -> threading.Thread:
    """
    Run execute_rename in a background thread

    ProgressTick messages and one final RenameSummary are put on channel.

    Args:
        records: Records to rename
        channel: Message channel to the state owner
        max_workers: Pool size

    Returns:
        Started thread
    """
    def run():
        try:
            result = execute_rename(
                records,
                progress_callback=lambda done: channel.put(ProgressTick(done)),
                max_workers=max_workers,
            )
            summary = result.summary
        except Exception:
            logger.exception("rename_thread_failed")
            summary = RenameSummary(0, len(records))
        channel.put(summary)

    thread = threading.Thread(target=run, name="rename-executor", daemon=True)
    thread.start()
    return thread


def describe_failures(result: RenameResult, limit: int = 10) -> str:
    """Format per-file failures for logs and the CLI"""
    lines = []
    for record, error in result.failed[:limit]:
        lines.append(f"  - {record.original_name} -> {record.new_name}: {error}")
    if len(result.failed) > limit:
        lines.append(f"  ... and {len(result.failed) - limit} more failures")
    return "\n".join(lines)
