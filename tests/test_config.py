"""Tests for config file loading and merging."""

from __future__ import annotations

from pathlib import Path

import pytest

from filefuncs.cli import Options
from filefuncs.config import FileFuncsConfig, find_config_file, load_config, merge_cli_with_config


def _options(**overrides: object) -> Options:
    opts = Options(command="list", base_dir=None, encoding=None, verbose=False, version=False)
    for key, value in overrides.items():
        setattr(opts, key, value)
    return opts


def test_find_config_filefuncs_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "filefuncs.toml"
    config_file.write_text('base-dir = "data"\n')
    assert find_config_file(tmp_path) == config_file


def test_find_config_dot_filefuncs_toml_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "filefuncs.toml").write_text('encoding = "UTF-8"\n')
    dot_config = tmp_path / ".filefuncs.toml"
    dot_config.write_text('encoding = "ISO-8859-1"\n')
    assert find_config_file(tmp_path) == dot_config


def test_find_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[tool.filefuncs]\nencoding = "UTF-16"\n')
    assert find_config_file(tmp_path) == config_file


def test_find_config_pyproject_without_section_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.ruff]\nline-length = 100\n")
    assert find_config_file(tmp_path) is None


def test_find_config_walks_up(tmp_path: Path) -> None:
    config_file = tmp_path / "filefuncs.toml"
    config_file.write_text('encoding = "UTF-8"\n')
    subdir = tmp_path / "sub" / "deep"
    subdir.mkdir(parents=True)
    assert find_config_file(subdir) == config_file


def test_load_config_relative_base_dir(tmp_path: Path) -> None:
    config_file = tmp_path / "filefuncs.toml"
    config_file.write_text('base-dir = "data"\n')
    config = load_config(config_file)
    assert config.base_dir == str(tmp_path.resolve() / "data")
    # Unset fields should be None (not set)
    assert config.encoding is None


def test_load_config_absolute_base_dir(tmp_path: Path) -> None:
    config_file = tmp_path / "filefuncs.toml"
    absolute = (tmp_path / "elsewhere").resolve()
    config_file.write_text(f"base_dir = \"{absolute.as_posix()}\"\n")
    assert Path(load_config(config_file).base_dir or "") == absolute


def test_load_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[tool.filefuncs]\nencoding = "ISO-8859-1"\nunknown-key = 3\n')
    config = load_config(config_file)
    assert config.encoding == "ISO-8859-1"
    assert config.base_dir is None


def test_load_config_ignores_nested_tables(tmp_path: Path) -> None:
    config_file = tmp_path / "filefuncs.toml"
    config_file.write_text('[anything]\nbase-dir = "data"\nencoding = "UTF-16"\n')
    config = load_config(config_file)
    assert config.base_dir is None
    assert config.encoding is None


def test_load_config_pyproject_subtable_ignored(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[tool.filefuncs.extra]\nbase-dir = "data"\n')
    assert load_config(config_file).base_dir is None


def test_load_config_rejects_non_string(tmp_path: Path) -> None:
    config_file = tmp_path / "filefuncs.toml"
    config_file.write_text("encoding = 8\n")
    with pytest.raises(ValueError):
        load_config(config_file)


def test_merge_config_fills_unset_options() -> None:
    opts = _options()
    merge_cli_with_config(opts, FileFuncsConfig(base_dir="/data", encoding="UTF-16"), set())
    assert opts.base_dir == "/data"
    assert opts.encoding == "UTF-16"


def test_merge_explicit_flags_win() -> None:
    opts = _options(encoding="ISO-8859-1")
    merge_cli_with_config(opts, FileFuncsConfig(encoding="UTF-16"), {"encoding"})
    assert opts.encoding == "ISO-8859-1"


def test_merge_without_config() -> None:
    opts = _options(base_dir="/x")
    merge_cli_with_config(opts, None, set())
    assert opts.base_dir == "/x"
    assert opts.encoding is None
