"""
plan_rename.py - Preview and Conflict Module

Responsibilities:
- Apply the name transformer to scanned records
- Conflict detection (duplicate targets, existing files)
- Optional auto-numbering: "name (2).ext", "name (3).ext"...
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Set, Tuple
from collections import defaultdict
import logging

from .models_fs import FileRecord, normalize_for_comparison
from .text_match import NameTransformer
from .scan_files import list_names_by_dir

logger = logging.getLogger(__name__)


@dataclass
class ConflictReport:
    """Hard validation result"""
    duplicates: Dict[str, List[Path]] = field(default_factory=dict)  # normalized target -> sources
    existing: List[Path] = field(default_factory=list)               # targets already on disk

    @property
    def duplicate_count(self) -> int:
        return len(self.duplicates)

    @property
    def existing_count(self) -> int:
        return len(self.existing)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.duplicates or self.existing)

    def summary(self) -> str:
        return (f"Conflicts detected: {self.duplicate_count} duplicate target(s), "
                f"{self.existing_count} collision(s) with existing files")


@dataclass
class PreviewResult:
    """Changed records plus preview counters"""
    changed: List[FileRecord] = field(default_factory=list)
    duplicate_count: int = 0
    renumbered_count: int = 0
    invalid_count: int = 0


def _target_key(record: FileRecord, case_insensitive: bool) -> str:
    return normalize_for_comparison(str(record.target_path), case_insensitive)


def group_duplicate_targets(
    records: List[FileRecord],
    case_insensitive: bool = True
) -> Dict[str, List[Path]]:
    """Group changed records sharing a normalized target path (groups of size > 1)"""
    by_target: Dict[str, List[Path]] = defaultdict(list)
    for r in records:
        by_target[_target_key(r, case_insensitive)].append(r.original_path)
    return {k: v for k, v in by_target.items() if len(v) > 1}


def find_conflicts(
    records: List[FileRecord],
    case_insensitive: bool = True
) -> ConflictReport:
    """
    Validate changed records before applying

    Args:
        records: Changed records
        case_insensitive: Whether target paths are compared ignoring case

    Returns:
        Conflict report; any conflict refuses the whole apply
    """
    report = ConflictReport()
    report.duplicates = group_duplicate_targets(records, case_insensitive)

    for r in records:
        target = r.target_path
        if not target.exists():
            continue
        # Case-only renames point at the file itself
        own = normalize_for_comparison(str(r.original_path), case_insensitive)
        if _target_key(r, case_insensitive) != own:
            report.existing.append(target)

    if report.has_conflicts:
        logger.error(
            "collision_detected duplicates=%s existing=%s",
            report.duplicates, [str(p) for p in report.existing]
        )
    return report


class ConflictResolver:
    """Per-directory used-name bookkeeping for auto-numbering"""

    def __init__(self, case_insensitive: bool = True):
        """
        Initialize conflict resolver

        Args:
            case_insensitive: Whether case-insensitive
        """
        self.case_insensitive = case_insensitive
        # key: normalized directory path, value: used names (normalized)
        self.used: Dict[str, Set[str]] = defaultdict(set)
        self.renumbered = 0

    def _normalize(self, name: str) -> str:
        return normalize_for_comparison(name, self.case_insensitive)

    def _dir_key(self, directory: Path) -> str:
        return self._normalize(str(directory))

    def seed(self, directory: Path, names: Set[str]) -> None:
        """Mark names as used in directory"""
        self.used[self._dir_key(directory)].update(self._normalize(n) for n in names)

    def is_used(self, directory: Path, name: str) -> bool:
        return self._normalize(name) in self.used[self._dir_key(directory)]

    def reserve(self, directory: Path, name: str) -> None:
        self.used[self._dir_key(directory)].add(self._normalize(name))

    def resolve(self, directory: Path, desired_name: str) -> Tuple[str, bool]:
        """
        Resolve conflict, return available filename

        Args:
            directory: Directory
            desired_name: Desired filename

        Returns:
            (actual filename, whether it was renumbered)
        """
        candidate = desired_name
        renumbered = False

        if self.is_used(directory, candidate):
            base, dot, ext = desired_name.rpartition('.')
            if not dot:
                base, ext = desired_name, ""
            else:
                ext = "." + ext

            n = 2
            while True:
                candidate = f"{base} ({n}){ext}"
                if not self.is_used(directory, candidate):
                    break
                n += 1
            renumbered = True
            self.renumbered += 1

        self.reserve(directory, candidate)
        return candidate, renumbered


def auto_number(
    records: List[FileRecord],
    changed: List[FileRecord],
    case_insensitive: bool = True
) -> int:
    """
    Disambiguate colliding new names in place

    Args:
        records: All scanned records (their original names seed the used sets)
        changed: Changed records, processed in list order
        case_insensitive: Whether names are compared ignoring case

    Returns:
        Number of renumbered records
    """
    resolver = ConflictResolver(case_insensitive=case_insensitive)
    for directory, names in list_names_by_dir(records).items():
        resolver.seed(directory, names)

    for r in changed:
        final_name, renumbered = resolver.resolve(r.original_path.parent, r.new_name)
        if renumbered:
            logger.debug("auto_number orig=%r desired=%r final=%r",
                         r.original_name, r.new_name, final_name)
        r.new_name = final_name

    return resolver.renumbered


def build_preview(
    records: List[FileRecord],
    transformer: NameTransformer,
    auto_number_on_conflict: bool = False,
    case_insensitive: bool = True
) -> PreviewResult:
    """
    Compute proposed names for records in place and derive the preview set

    Args:
        records: Scanned records
        transformer: Name transformer
        auto_number_on_conflict: Whether to disambiguate colliding names
        case_insensitive: Whether names are compared ignoring case

    Returns:
        Preview result
    """
    result = PreviewResult()

    for r in records:
        r.new_name = transformer.transform(r.original_name)
        r.search_pattern = transformer.search
        r.replace_pattern = transformer.replace
        r.case_sensitive = transformer.case_sensitive

    result.invalid_count = transformer.invalid_count
    result.changed = [r for r in records if r.is_changed]
    # Every record after the first on a shared target counts once
    result.duplicate_count = sum(
        len(sources) - 1
        for sources in group_duplicate_targets(result.changed, case_insensitive).values()
    )

    if auto_number_on_conflict and result.changed:
        # Records are shared with the full list, new names are written back directly
        result.renumbered_count = auto_number(records, result.changed, case_insensitive)

    return result
