"""
core - Filename Change Core Module

Provides directory scanning with exclusions, name transformation, conflict
detection/auto-numbering and parallel rename execution.
"""

from .models_fs import (
    FileRecord,
    ScanResult,
    ScanStatus,
    ConversionProgress,
    RenameOptions,
)

from .exclude_rules import (
    ExclusionKind,
    ExclusionRules,
    classify_token,
)

from .scan_files import (
    scan_files,
)

from .text_match import (
    NameTransformer,
    compile_search,
    replace_text,
    check_new_name,
)

from .plan_rename import (
    ConflictReport,
    ConflictResolver,
    PreviewResult,
    auto_number,
    build_preview,
    find_conflicts,
)

from .exec_rename import (
    ProgressTick,
    RenameSummary,
    RenameResult,
    execute_rename,
    start_rename_thread,
)

from .session import RenameSession

__all__ = [
    # Data models
    "FileRecord",
    "ScanResult",
    "ScanStatus",
    "ConversionProgress",
    "RenameOptions",

    # Exclusions
    "ExclusionKind",
    "ExclusionRules",
    "classify_token",

    # Scanning
    "scan_files",

    # Text processing
    "NameTransformer",
    "compile_search",
    "replace_text",
    "check_new_name",

    # Preview and conflicts
    "ConflictReport",
    "ConflictResolver",
    "PreviewResult",
    "auto_number",
    "build_preview",
    "find_conflicts",

    # Execution
    "ProgressTick",
    "RenameSummary",
    "RenameResult",
    "execute_rename",
    "start_rename_thread",

    # State
    "RenameSession",
]
