"""
Pattern-filtered directory listing.

Usage::

    from filefuncs.listing import list_directory

    entries = list_directory("docs", recursive=True, pattern="*.{md,txt}")
"""

from filefuncs.listing.engine import list_directory
from filefuncs.listing.glob import MATCH_ALL, GlobMatcher, compile_glob
from filefuncs.listing.visitor import TreeVisitor

__all__ = [
    "MATCH_ALL",
    "GlobMatcher",
    "TreeVisitor",
    "compile_glob",
    "list_directory",
]
