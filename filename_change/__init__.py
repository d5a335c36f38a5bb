"""
filename_change - Bulk filename search/replace with preview
"""

__version__ = "0.1.0"
