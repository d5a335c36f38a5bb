"""
models_fs.py - Core Data Structure Definitions

Contains:
- FileRecord: One scanned file and its proposed new name
- ScanResult: Ordered scan output plus directory status
- ConversionProgress: Apply progress counters
- RenameOptions: Engine configuration
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List
from enum import Enum


class ScanStatus(Enum):
    """Directory scan status"""
    OK = "ok"
    NOT_FOUND = "not_found"      # Root missing or not a directory


@dataclass
class FileRecord:
    """Scanned file with its proposed basename"""
    original_path: Path             # Absolute path at scan time
    new_name: str                   # Proposed basename (no separators)
    # Display only
    search_pattern: str = ""
    replace_pattern: str = ""
    case_sensitive: bool = False

    @classmethod
    def from_path(
        cls,
        p: Path,
        search_pattern: str = "",
        replace_pattern: str = "",
        case_sensitive: bool = False,
    ) -> "FileRecord":
        """Create an unchanged record from a path"""
        return cls(
            original_path=p,
            new_name=p.name,
            search_pattern=search_pattern,
            replace_pattern=replace_pattern,
            case_sensitive=case_sensitive,
        )

    @property
    def original_name(self) -> str:
        return self.original_path.name

    @property
    def is_changed(self) -> bool:
        """Whether the proposed name differs (case-sensitive comparison)"""
        return self.new_name != self.original_name

    @property
    def target_path(self) -> Path:
        """Sibling of the original path carrying the new name"""
        return self.original_path.with_name(self.new_name)

    def relative_dir(self, base: Path) -> str:
        """Get parent directory relative to base"""
        try:
            return str(self.original_path.parent.relative_to(base))
        except ValueError:
            return str(self.original_path.parent)


@dataclass
class ScanResult:
    """Ordered scan output"""
    records: List[FileRecord] = field(default_factory=list)
    status: ScanStatus = ScanStatus.OK

    @property
    def found(self) -> bool:
        return self.status is ScanStatus.OK


@dataclass
class ConversionProgress:
    """Apply progress, owned by the session"""
    total: int = 0
    done: int = 0
    in_progress: bool = False

    def reset(self, total: int) -> None:
        self.total = total
        self.done = 0
        self.in_progress = True

    def tick(self, done: int) -> None:
        # Ticks may arrive out of order, keep the counter monotonic
        if self.in_progress and done > self.done:
            self.done = min(done, self.total)

    def finish(self) -> None:
        self.in_progress = False


@dataclass
class RenameOptions:
    """Rename options configuration"""
    # Target paths are compared ignoring case (Windows/macOS default)
    case_insensitive_paths: bool = True

    # Treat the search pattern as a regular expression
    regex_mode: bool = False

    # Worker pool size (None means os.cpu_count())
    max_workers: Optional[int] = None

    # Bound of the progress channel between workers and the session
    channel_size: int = 256


def normalize_for_comparison(name: str, case_insensitive: bool) -> str:
    """Normalize filename or path for comparison"""
    if case_insensitive:
        return name.casefold()
    return name
