"""
cli - Command Line Interface for Filename Change
"""

from .cli_entry import main

__all__ = ["main"]
