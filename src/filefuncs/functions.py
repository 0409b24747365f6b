"""
Host-facing function table.

A query engine registers each `FileFunction` under its qualified name and
routes calls through `FunctionLibrary.call()`, which checks arity, runs the
operation against the library's `PathResolver`, and turns `FileError`s into
`FunctionCallError`s carrying the error code.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from filefuncs.errors import FileError
from filefuncs.listing import list_directory
from filefuncs.operations import copy, is_file, write_text, write_text_append
from filefuncs.paths import PathResolver

NAMESPACE_URI = "http://expath.org/ns/file"


class FunctionCallError(Exception):
    """A failure reported back to the host, keyed by an error code."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"[{code}] {message}")
        self.code: str = code
        self.message: str = message


@dataclass(frozen=True)
class FileFunction:
    """Registration metadata for one host-callable function."""

    name: str
    min_args: int
    max_args: int
    has_side_effects: bool
    impl: Callable[..., Any]

    @property
    def qualified_name(self) -> str:
        return f"{{{NAMESPACE_URI}}}{self.name}"

    def accepts(self, arg_count: int) -> bool:
        return self.min_args <= arg_count <= self.max_args


FUNCTIONS: tuple[FileFunction, ...] = (
    FileFunction("copy", 2, 2, True, copy),
    FileFunction("is-file", 1, 1, False, is_file),
    FileFunction("list", 1, 3, False, list_directory),
    FileFunction("write-text", 2, 3, True, write_text),
    FileFunction("write-text-append", 2, 3, True, write_text_append),
)


class FunctionLibrary:
    """The file functions bound to one base directory."""

    def __init__(self, resolver: PathResolver | None = None) -> None:
        self.resolver: PathResolver = resolver or PathResolver()
        self._functions: dict[str, FileFunction] = {f.name: f for f in FUNCTIONS}

    def names(self) -> list[str]:
        return list(self._functions)

    def get(self, name: str) -> FileFunction:
        try:
            return self._functions[name]
        except KeyError:
            raise FunctionCallError("err:XPST0017", f"Unknown function: {name}") from None

    def call(self, name: str, *args: Any) -> Any:
        """
        Invoke function `name` with positional `args`. Operations without a
        result return an empty list (the empty sequence).
        """
        function = self.get(name)
        if not function.accepts(len(args)):
            raise FunctionCallError(
                "err:XPST0017",
                f"{name} expects {_arity(function)} arguments, got {len(args)}",
            )
        try:
            result = function.impl(*args, resolver=self.resolver)
        except FileError as e:
            raise FunctionCallError(e.code, e.message) from e
        if result is None:
            return []
        return result


def _arity(function: FileFunction) -> str:
    if function.min_args == function.max_args:
        return str(function.min_args)
    return f"{function.min_args} to {function.max_args}"
