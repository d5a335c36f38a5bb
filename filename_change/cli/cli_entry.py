"""
cli_entry.py - CLI Entry Point

Subcommands:
- preview: show proposed names and the status line
- apply:   preview, confirm, then rename in the background with progress
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from ..core import RenameSession, RenameOptions
from ..log_setup import configure_logging


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="filename_change",
        description="Bulk filename search and replace",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Preview replacing "draft" with "final" below ./docs
  python -m filename_change --cli preview ./docs -s draft -r final --recursive

  # Apply, skipping temp files and anything under build/
  python -m filename_change --cli apply ./docs -s draft -r final -x ".tmp, build/" --yes

  # Regex search, number colliding names
  python -m filename_change --cli apply ./photos -s "IMG_\\d+" -r photo --regex --auto-number
"""
    )

    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    for name, help_text in (("preview", "Show proposed names"), ("apply", "Rename files")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("directory", type=str, help="Target directory")
        sub.add_argument("--search", "-s", type=str, default="", help="Text to find")
        sub.add_argument("--replace", "-r", type=str, default="", help="Replacement text")
        sub.add_argument("--exclude", "-x", type=str, default="",
                         help="Comma-separated exclusions (name text, path/, glob, re:regex)")
        sub.add_argument("--case-sensitive", action="store_true", help="Case-sensitive search")
        sub.add_argument("--recursive", "-R", action="store_true", help="Include subdirectories")
        sub.add_argument("--auto-number", "-n", action="store_true",
                         help="Number colliding names: name (2).ext")
        sub.add_argument("--regex", "-e", action="store_true", help="Search is a regular expression")
        sub.add_argument("--case-sensitive-paths", action="store_true",
                         help="Compare target paths with case (default ignores case)")
        sub.add_argument("--workers", type=int, default=None, help="Rename worker count")
        sub.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
        if name == "apply":
            sub.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    return parser


def build_session(args) -> RenameSession:
    """Map parsed arguments onto a session"""
    options = RenameOptions(
        case_insensitive_paths=not args.case_sensitive_paths,
        regex_mode=args.regex,
        max_workers=args.workers,
    )
    session = RenameSession(options)
    session.selected_dir = str(Path(args.directory).expanduser())
    session.search_pattern = args.search
    session.replace_pattern = args.replace
    session.exclude_pattern = args.exclude
    session.case_sensitive = args.case_sensitive
    session.include_subdirectories = args.recursive
    session.auto_number_on_conflict = args.auto_number
    return session


def print_preview(session: RenameSession, limit: int = 50) -> None:
    """Print changed records"""
    changed = session.preview_files
    if not changed:
        return
    base = Path(session.selected_dir)
    print("-" * 80)
    for f in changed[:limit]:
        folder = f.relative_dir(base)
        prefix = "" if folder == "." else f"{folder}/"
        print(f"  {prefix}{f.original_name:<40} -> {f.new_name}")
    if len(changed) > limit:
        print(f"  ... and {len(changed) - limit} more")
    print("-" * 80)


def cmd_preview(args) -> int:
    """Handle preview command"""
    session = build_session(args)
    session.update_preview()
    print_preview(session)
    print(session.status_message)
    return 0 if session.dir_found else 1


def cmd_apply(args) -> int:
    """Handle apply command"""
    session = build_session(args)
    session.update_preview()
    print_preview(session)
    print(session.status_message)

    if not session.dir_found:
        return 1
    if not session.preview_files:
        return 0

    if not args.yes:
        confirm = input("\nConfirm execution? (y/N): ").strip().lower()
        if confirm != 'y':
            print("Cancelled")
            return 0

    if not session.apply():
        # Refused (conflicts) or nothing left to rename
        print(session.status_message)
        return 1 if session.last_conflicts and session.last_conflicts.has_conflicts else 0

    total = session.progress.total
    while session.progress.in_progress:
        session.process_pending(block=True)
        print(f"\r[{session.progress.done}/{total}]", end="", flush=True)
    print()
    print(session.status_message)

    return 0 if session.last_summary.error_count == 0 else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    configure_logging(verbose=args.verbose)

    if args.command == "preview":
        return cmd_preview(args)
    elif args.command == "apply":
        return cmd_apply(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
