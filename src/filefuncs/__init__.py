"""
Filesystem functions for query engines: copy, is-file, pattern-filtered
directory listing, and text writes.

Usage::

    from filefuncs import PathResolver, list_directory, write_text

    resolver = PathResolver("/srv/data")
    write_text("notes/today.txt", "hello", resolver=resolver)
    entries = list_directory("notes", recursive=True, pattern="*.txt", resolver=resolver)
"""

from filefuncs.errors import (
    FileError,
    FileIOError,
    InvalidPathError,
    InvalidPatternError,
    IsDirectoryError,
    NotDirectoryError,
    PathExistsError,
    PathNotExistError,
    UnknownEncodingError,
)
from filefuncs.functions import FunctionCallError, FunctionLibrary
from filefuncs.listing import list_directory
from filefuncs.operations import copy, is_file, write_text, write_text_append
from filefuncs.paths import PathKind, PathResolver, ResolvedPath

__all__ = [
    "FileError",
    "FileIOError",
    "FunctionCallError",
    "FunctionLibrary",
    "InvalidPathError",
    "InvalidPatternError",
    "IsDirectoryError",
    "NotDirectoryError",
    "PathExistsError",
    "PathKind",
    "PathNotExistError",
    "PathResolver",
    "ResolvedPath",
    "UnknownEncodingError",
    "copy",
    "is_file",
    "list_directory",
    "write_text",
    "write_text_append",
]
