"""
Config file support for filefuncs.

The nearest `.filefuncs.toml`, `filefuncs.toml`, or `pyproject.toml` with a
`[tool.filefuncs]` table, looking in the current directory and then its
parents, may set two top-level keys:

    base-dir = "data"       # relative paths resolve here
    encoding = "ISO-8859-1" # default for write-text

Explicit CLI flags override the file.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

_CONFIG_FILENAMES = (".filefuncs.toml", "filefuncs.toml", "pyproject.toml")


@dataclass
class FileFuncsConfig:
    """Settings read from a config file; `None` means the key was absent."""

    base_dir: str | None = None
    encoding: str | None = None


class _ConfigurableOptions(Protocol):
    base_dir: str | None
    encoding: str | None


def find_config_file(start_dir: Path) -> Path | None:
    """
    Nearest config file at or above `start_dir`. Within one directory,
    `.filefuncs.toml` wins over `filefuncs.toml`, which wins over a
    `pyproject.toml` that has a `[tool.filefuncs]` table.
    """
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        for filename in _CONFIG_FILENAMES:
            candidate = directory / filename
            if not candidate.is_file():
                continue
            if filename != "pyproject.toml" or _filefuncs_table(candidate) is not None:
                return candidate
    return None


def _filefuncs_table(pyproject: Path) -> dict[str, Any] | None:
    try:
        data = tomllib.loads(pyproject.read_text())
    except (tomllib.TOMLDecodeError, OSError):
        return None
    table = data.get("tool", {}).get("filefuncs")
    return table if isinstance(table, dict) else None


def load_config(config_path: Path) -> FileFuncsConfig:
    """
    Read `config_path`. Only the top-level keys `base-dir` (or `base_dir`) and
    `encoding` are used; a relative `base-dir` is taken relative to the
    directory holding the file. Raises `ValueError` for non-string values.
    """
    if config_path.name == "pyproject.toml":
        table = _filefuncs_table(config_path) or {}
    else:
        table = tomllib.loads(config_path.read_text())

    base_dir = _string_setting(table, config_path, "base-dir", "base_dir")
    if base_dir is not None and not Path(base_dir).is_absolute():
        base_dir = str(config_path.resolve().parent / base_dir)
    return FileFuncsConfig(
        base_dir=base_dir,
        encoding=_string_setting(table, config_path, "encoding"),
    )


def _string_setting(table: dict[str, Any], source: Path, *keys: str) -> str | None:
    for key in keys:
        if key in table:
            value = table[key]
            if not isinstance(value, str):
                raise ValueError(f"{source}: `{key}` must be a string, got {value!r}")
            return value
    return None


def merge_cli_with_config(
    options: _ConfigurableOptions,
    config: FileFuncsConfig | None,
    explicit_flags: set[str],
) -> None:
    """
    Fill `base_dir` and `encoding` on `options` from `config`, except where
    the flag was given on the command line (named in `explicit_flags`).
    """
    if config is None:
        return
    if config.base_dir is not None and "base_dir" not in explicit_flags:
        options.base_dir = config.base_dir
    if config.encoding is not None and "encoding" not in explicit_flags:
        options.encoding = config.encoding
