"""
Directory listing: validates the root, compiles the pattern, and collects
what the tree visitor finds.
"""

from __future__ import annotations

from pathlib import Path

from filefuncs.errors import FileIOError, NotDirectoryError
from filefuncs.listing.glob import compile_glob
from filefuncs.listing.visitor import TreeVisitor
from filefuncs.paths import PathResolver


def list_directory(
    path: str | Path,
    recursive: bool = False,
    pattern: str | None = None,
    *,
    resolver: PathResolver | None = None,
) -> list[str]:
    """
    List the entries of the directory at `path` as paths relative to it.

    With `recursive=True` the whole subtree is listed, directories ahead of
    their contents. With a `pattern`, only entries whose own name matches the
    glob are returned (directories that don't match are still descended into).
    Result order follows the filesystem's enumeration order.

    Raises `NotDirectoryError` if `path` is not an existing directory and
    `InvalidPatternError` if `pattern` is malformed, both before any entry
    is read.
    """
    resolver = resolver or PathResolver()
    root = resolver.resolve(path)
    if not root.is_dir:
        raise NotDirectoryError(f'Path "{root}" does not point to an existing directory')

    matcher = compile_glob(pattern)
    try:
        return list(TreeVisitor(root.path, recursive=recursive, matcher=matcher))
    except OSError as e:
        raise FileIOError(f'Could not list directory "{root}": {e}') from e
