"""
gui - PySide6 Interface for Filename Change
"""

from .gui_entry import main

__all__ = ["main"]
