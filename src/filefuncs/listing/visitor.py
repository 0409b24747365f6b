"""
Depth-first, pre-order directory walk that yields matching entries as paths
relative to the walk root.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from filefuncs.listing.glob import MATCH_ALL, GlobMatcher

log = logging.getLogger(__name__)


class TreeVisitor:
    """
    Walks the tree under `root` and yields the relative path of every file and
    directory whose name matches `matcher`.

    The root itself is never yielded. Directories come before their
    descendants, and entries within a directory follow the order the OS
    enumerates them in. With `recursive=False` only direct children are
    visited. Entries that cannot be read are skipped rather than aborting the
    walk, and symlinks are reported as files without being followed.

    Each call to `iter()` starts a fresh walk.
    """

    def __init__(
        self, root: str | Path, recursive: bool = False, matcher: GlobMatcher = MATCH_ALL
    ) -> None:
        self.root: str = os.fspath(root)
        self._prefix: str = os.path.join(self.root, "")
        self.recursive: bool = recursive
        self.matcher: GlobMatcher = matcher

    def __iter__(self) -> Iterator[str]:
        return self._walk()

    def _walk(self) -> Iterator[str]:
        root_entries = self._open(self.root)
        if root_entries is None:
            return

        # One open scandir iterator per directory on the current descent path.
        stack: list[Iterator[os.DirEntry[str]]] = [root_entries]
        try:
            while stack:
                entries = stack[-1]
                try:
                    entry = next(entries)
                except StopIteration:
                    _close(stack.pop())
                    continue
                except OSError as e:
                    log.debug("Skipping rest of unreadable directory: %s", e)
                    _close(stack.pop())
                    continue

                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError as e:
                    log.debug("Skipping entry that could not be examined: %s: %s", entry.path, e)
                    continue

                if not is_dir:
                    if self.matcher.matches(entry.name):
                        yield self._relative(entry.path)
                    continue

                children = self._open(entry.path)
                if children is None:
                    continue
                if self.matcher.matches(entry.name):
                    yield self._relative(entry.path)
                if self.recursive:
                    stack.append(children)
                else:
                    _close(children)
        finally:
            for entries in stack:
                _close(entries)

    def _open(self, path: str) -> Iterator[os.DirEntry[str]] | None:
        try:
            return os.scandir(path)
        except OSError as e:
            log.debug("Skipping directory that could not be opened: %s: %s", path, e)
            return None

    def _relative(self, path: str) -> str:
        # scandir joins the directory path and the entry name, so every entry
        # path starts with the root prefix.
        return path[len(self._prefix) :]


def _close(entries: Iterator[os.DirEntry[str]]) -> None:
    close = getattr(entries, "close", None)
    if close is not None:
        close()
