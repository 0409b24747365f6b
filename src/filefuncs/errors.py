"""
Error types raised by filefuncs operations.

Every error carries a stable `code` (in the `file:` namespace) so host
adapters can translate failures without inspecting messages.
"""

from __future__ import annotations


class FileError(Exception):
    """Base class for all filefuncs failures."""

    code: str = "file:io-error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message

    def __str__(self) -> str:
        return self.message


class PathNotExistError(FileError):
    """A path that must exist does not."""

    code = "file:not-found"


class PathExistsError(FileError):
    """A file or directory already occupies the target location."""

    code = "file:exists"


class NotDirectoryError(FileError):
    """Expected a directory but found a file or nothing."""

    code = "file:no-dir"


class IsDirectoryError(FileError):
    """Expected a file but found a directory."""

    code = "file:is-dir"


class InvalidPathError(FileError):
    code = "file:invalid-path"


class InvalidPatternError(FileError):
    code = "file:invalid-pattern"


class UnknownEncodingError(FileError):
    code = "file:unknown-encoding"


class FileIOError(FileError):
    """Catch-all for filesystem failures not otherwise classified."""

    code = "file:io-error"
