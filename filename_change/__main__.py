#!/usr/bin/env python3
"""
Filename Change - Main Entry

Supports:
- GUI mode (default startup)
- CLI mode (--cli or -c parameter)

Usage:
    python -m filename_change                         # GUI mode (default)
    python -m filename_change --cli preview ./dir -s old -r new
    python -m filename_change -c apply ./dir -s old -r new --yes
"""

import sys

from .log_setup import configure_logging


def main():
    """Main entry point"""
    # Check if CLI should be started
    if "--cli" in sys.argv or "-c" in sys.argv:
        # Remove --cli parameter
        sys.argv = [arg for arg in sys.argv if arg not in ("--cli", "-c")]

        # CLI mode
        from .cli import main as cli_main
        return cli_main()

    configure_logging()

    # Default to starting GUI
    try:
        from .gui import main as gui_main
    except ImportError as e:
        print(f"Error: Unable to start GUI, please ensure PySide6 is installed")
        print(f"Detailed error: {e}")
        print("\nInstall command: pip install PySide6")
        print("\nTo use CLI mode, run:")
        print("    python -m filename_change --cli")
        return 1
    return gui_main()


if __name__ == "__main__":
    sys.exit(main())
