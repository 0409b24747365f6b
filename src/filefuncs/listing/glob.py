"""
Glob patterns for matching single path segments, compiled with pathspec.

Supported syntax: `*`, `?`, `**`, `[...]` and `[!...]` classes, backslash
escapes, and `{a,b}` alternation (not nested). Each alternative becomes one
gitignore-style line in a `PathSpec`; a segment matches if any line does.
"""

from __future__ import annotations

import re

import pathspec

from filefuncs.errors import InvalidPatternError


class GlobMatcher:
    """
    Tests file and directory names against a compiled glob.

    A matcher built from `None` accepts every name. Only the name itself is
    tested, so alternatives containing `/` can never match.
    """

    def __init__(self, pattern: str | None, spec: pathspec.PathSpec | None) -> None:
        self.pattern: str | None = pattern
        self._spec: pathspec.PathSpec | None = spec

    def matches(self, name: str) -> bool:
        if self.pattern is None:
            return True
        if self._spec is None or not name or "/" in name:
            return False
        return self._spec.match_file(name)

    __call__ = matches

    def __repr__(self) -> str:
        return f"GlobMatcher({self.pattern!r})"


MATCH_ALL = GlobMatcher(None, None)


def compile_glob(pattern: str | None) -> GlobMatcher:
    """
    Compile `pattern` into a `GlobMatcher`, or return `MATCH_ALL` for `None`.
    Raises `InvalidPatternError` for malformed patterns.
    """
    if pattern is None:
        return MATCH_ALL

    lines = [
        _escape_gitignore_syntax(alt)
        for alt in expand_braces(pattern)
        if alt and "/" not in alt
    ]
    if not lines:
        return GlobMatcher(pattern, None)
    try:
        spec = pathspec.PathSpec.from_lines("gitignore", lines)
    except (ValueError, re.error) as e:
        raise InvalidPatternError(f"Invalid glob pattern {pattern!r}: {e}") from e
    return GlobMatcher(pattern, spec)


def expand_braces(pattern: str) -> list[str]:
    """
    Expand `{a,b}` groups into separate patterns, validating the rest of the
    syntax on the way. Escapes and character classes are copied through as-is.
    """
    alternatives = [""]
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "\\":
            _check_escape(pattern, i)
            piece = pattern[i : i + 2]
            i += 2
        elif c == "[":
            end = _class_end(pattern, i)
            piece = pattern[i : end + 1]
            i = end + 1
        elif c == "{":
            end, options = _split_group(pattern, i)
            alternatives = [alt + option for alt in alternatives for option in options]
            i = end + 1
            continue
        elif c == "}":
            raise InvalidPatternError(f"Unmatched '}}' at index {i} in {pattern!r}")
        else:
            piece = c
            i += 1
        alternatives = [alt + piece for alt in alternatives]
    return alternatives


def _check_escape(pattern: str, index: int) -> None:
    if index + 1 >= len(pattern):
        raise InvalidPatternError(f"No character to escape at end of {pattern!r}")


def _class_end(pattern: str, start: int) -> int:
    """Index of the `]` closing the class opened at `start`."""
    n = len(pattern)
    j = start + 1
    if j < n and pattern[j] in "!^":
        j += 1
    # A `]` right after the opening bracket is a literal member.
    if j < n and pattern[j] == "]":
        j += 1
    while j < n and pattern[j] != "]":
        if pattern[j] == "\\":
            _check_escape(pattern, j)
            j += 1
        j += 1
    if j >= n:
        raise InvalidPatternError(f"Missing ']' for '[' at index {start} in {pattern!r}")
    return j


def _split_group(pattern: str, start: int) -> tuple[int, list[str]]:
    """Split the `{...}` group opened at `start`. Returns (closing index, options)."""
    options: list[str] = []
    current = ""
    n = len(pattern)
    j = start + 1
    while j < n:
        c = pattern[j]
        if c == "\\":
            _check_escape(pattern, j)
            current += pattern[j : j + 2]
            j += 2
            continue
        if c == "[":
            end = _class_end(pattern, j)
            current += pattern[j : end + 1]
            j = end + 1
            continue
        if c == "{":
            raise InvalidPatternError(f"Cannot nest groups at index {j} in {pattern!r}")
        if c == ",":
            options.append(current)
            current = ""
        elif c == "}":
            options.append(current)
            return j, options
        else:
            current += c
        j += 1
    raise InvalidPatternError(f"Missing '}}' for '{{' at index {start} in {pattern!r}")


def _escape_gitignore_syntax(line: str) -> str:
    """Make characters with special meaning in gitignore files literal."""
    if line[0] in "!#":
        line = "\\" + line
    stripped = line.rstrip(" ")
    trailing = len(line) - len(stripped)
    if trailing and not stripped.endswith("\\"):
        line = stripped + "\\ " * trailing
    return line
