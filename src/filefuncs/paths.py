"""
Resolution of caller-supplied path strings into absolute filesystem paths.

Relative paths are anchored to a base directory (the working directory unless
configured otherwise). Normalization is lexical: `..` segments are collapsed
but symlinks are left alone.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from urllib.parse import unquote, urlsplit

from filefuncs.errors import InvalidPathError

_FILE_URI_PREFIX = "file:"


class PathKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"
    ABSENT = "absent"


@dataclass(frozen=True)
class ResolvedPath:
    """An absolute, normalized path and what was found there when resolved."""

    path: Path
    kind: PathKind

    @property
    def exists(self) -> bool:
        return self.kind is not PathKind.ABSENT

    @property
    def is_file(self) -> bool:
        return self.kind is PathKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind is PathKind.DIRECTORY

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def parent(self) -> Path:
        return self.path.parent

    def __str__(self) -> str:
        return str(self.path)


def classify(path: Path) -> PathKind:
    """Stat `path` (following symlinks) and report its kind."""
    try:
        mode = path.stat().st_mode
    except (OSError, ValueError):
        return PathKind.ABSENT
    if stat.S_ISDIR(mode):
        return PathKind.DIRECTORY
    if stat.S_ISREG(mode):
        return PathKind.FILE
    return PathKind.OTHER


class PathResolver:
    """
    Turns path strings (or `file:` URIs) into `ResolvedPath` values.

    `base_dir=None` means relative paths are anchored to the process working
    directory at the time of each call.
    """

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self._base_dir: Path | None = Path(os.path.abspath(base_dir)) if base_dir else None

    @property
    def base_dir(self) -> Path:
        return self._base_dir if self._base_dir is not None else Path.cwd()

    def to_path(self, raw: str | Path) -> Path:
        """Absolute, normalized path for `raw` without touching the filesystem."""
        text = os.fspath(raw)
        if not text or not text.strip():
            raise InvalidPathError("Path must not be empty")
        if "\0" in text:
            raise InvalidPathError(f"Path {text!r} contains a NUL character")
        if text.startswith(_FILE_URI_PREFIX):
            text = _file_uri_to_path(text)
        joined = os.path.join(self.base_dir, text)
        return Path(os.path.normpath(joined))

    def resolve(self, raw: str | Path) -> ResolvedPath:
        path = self.to_path(raw)
        return ResolvedPath(path=path, kind=classify(path))


def _file_uri_to_path(uri: str) -> str:
    parts = urlsplit(uri)
    if parts.netloc not in ("", "localhost"):
        raise InvalidPathError(f"URI {uri!r} does not point to a local file")
    path = unquote(parts.path)
    if not path:
        raise InvalidPathError(f"URI {uri!r} has no path")
    # `file:///C:/dir` on Windows parses to `/C:/dir`.
    if os.name == "nt" and len(path) > 2 and path[0] == "/" and path[2] == ":":
        path = path[1:]
    return path
