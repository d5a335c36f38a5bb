"""
scan_files.py - File Scanning Module

Provides recursive and non-recursive file scanning with exclusion filtering
"""

from pathlib import Path
from typing import List, Optional, Union
import logging
import os

from .models_fs import FileRecord, ScanResult, ScanStatus
from .exclude_rules import ExclusionRules

logger = logging.getLogger(__name__)


def scan_files(
    root: Union[str, Path],
    recurse: bool = False,
    rules: Optional[ExclusionRules] = None,
    search_pattern: str = "",
    replace_pattern: str = "",
    case_sensitive: bool = False,
) -> ScanResult:
    """
    Scan folder for regular files not matched by the exclusion rules

    Args:
        root: Root directory
        recurse: Whether to descend into subdirectories
        rules: Compiled exclusion rules
        search_pattern: Copied onto each record (display only)
        replace_pattern: Copied onto each record (display only)
        case_sensitive: Copied onto each record (display only)

    Returns:
        Scan result, status NOT_FOUND when root is missing or not a directory
    """
    if not root:
        return ScanResult(status=ScanStatus.NOT_FOUND)

    root = Path(root).expanduser()
    if not root.is_dir():
        return ScanResult(status=ScanStatus.NOT_FOUND)
    root = root.absolute()

    if rules is None:
        rules = ExclusionRules()

    result = ScanResult()
    records: List[FileRecord] = []

    def on_error(err: OSError):
        # Unreadable directories are skipped
        logger.debug("scan_skip path=%s err=%s", err.filename, err)

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        current_dir = Path(dirpath)

        if not recurse:
            # Stop os.walk from entering subdirectories
            dirnames[:] = []

        for filename in filenames:
            filepath = current_dir / filename

            try:
                # Symlinks are not regular files, even when they point at one
                if filepath.is_symlink() or not filepath.is_file():
                    continue
            except OSError as e:
                logger.debug("scan_skip path=%s err=%s", filepath, e)
                continue

            if rules.is_excluded(filepath):
                continue

            records.append(FileRecord.from_path(
                filepath,
                search_pattern=search_pattern,
                replace_pattern=replace_pattern,
                case_sensitive=case_sensitive,
            ))

    result.records = sort_by_name(records)
    logger.debug("loaded_files: %d", len(result.records))
    return result


def sort_by_name(records: List[FileRecord]) -> List[FileRecord]:
    """Sort by filename, full path breaks ties"""
    return sorted(records, key=lambda r: (r.original_name, str(r.original_path)))


def list_names_by_dir(records: List[FileRecord]) -> dict:
    """Group original filenames by parent directory"""
    names: dict = {}
    for r in records:
        names.setdefault(r.original_path.parent, set()).add(r.original_name)
    return names
