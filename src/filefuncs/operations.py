"""
Copy, file test, and text write operations.

Each operation checks all of its preconditions before touching the
filesystem, so a failed check never leaves partial output behind. Failures
after the first write are reported as `FileIOError` and are not rolled back.
"""

from __future__ import annotations

import codecs
import logging
import os
import shutil
from pathlib import Path

from strif import atomic_output_file

from filefuncs.errors import (
    FileIOError,
    IsDirectoryError,
    NotDirectoryError,
    PathExistsError,
    PathNotExistError,
    UnknownEncodingError,
)
from filefuncs.paths import PathKind, PathResolver, ResolvedPath, classify

log = logging.getLogger(__name__)

DEFAULT_ENCODING = "UTF-8"


def copy(source: str | Path, target: str | Path, *, resolver: PathResolver | None = None) -> None:
    """
    Copy a file or directory tree from `source` to `target`.

    - file onto a missing path or an existing file: `target` becomes a copy
    - file onto a directory: copied into it under the source name
    - directory onto a missing path: the tree is copied to `target`
    - directory onto a directory: the tree is copied into it under the source
      name, merging with anything already there
    """
    resolver = resolver or PathResolver()
    src = resolver.resolve(source)
    dst = resolver.resolve(target)

    if not src.exists:
        raise PathNotExistError(f'Source path "{src}" does not exist')
    if src.is_dir and dst.is_file:
        raise PathExistsError(
            f'Source "{src}" points to a directory and target "{dst}" points to an existing file'
        )
    if classify(src.parent) is PathKind.ABSENT:
        raise NotDirectoryError(f'Parent directory of source "{src}" does not exist')
    nested_target = dst.path / src.name
    if src.is_file and classify(nested_target) is PathKind.DIRECTORY:
        raise IsDirectoryError(
            f'Source "{src}" points to a file and target "{dst}" points to a directory, '
            "in which a subdirectory exists with the name of the source file"
        )

    try:
        if src.is_dir:
            _copy_directory(src, dst)
        elif dst.is_dir:
            log.debug("Copying file %s into directory %s", src, dst)
            _copy_file(src.path, nested_target)
        else:
            log.debug("Copying file %s to %s", src, dst)
            _copy_file(src.path, dst.path)
    except (OSError, shutil.Error) as e:
        raise FileIOError(f'Could not copy "{src}" to "{dst}": {e}') from e


def _copy_directory(src: ResolvedPath, dst: ResolvedPath) -> None:
    destination = dst.path / src.name if dst.is_dir else dst.path
    if destination == src.path or src.path in destination.parents:
        raise FileIOError(f'Cannot copy directory "{src}" into itself ("{destination}")')
    log.debug("Copying directory %s to %s", src, destination)
    shutil.copytree(src.path, destination, dirs_exist_ok=True)


def _copy_file(src: Path, dst: Path) -> None:
    real_dst = _replacement_target(dst)
    with atomic_output_file(real_dst, make_parents=True) as tmp_path:
        shutil.copy2(src, tmp_path)
        _keep_mode(real_dst, tmp_path)


def _replacement_target(path: Path) -> Path:
    """
    The file an atomic write to `path` should replace. Symlinks are resolved
    so the link stays in place and the file it points to gets the new content.
    """
    return Path(os.path.realpath(path))


def _keep_mode(existing: Path, tmp_path: str | Path) -> None:
    if existing.exists():
        shutil.copymode(existing, tmp_path)


def is_file(path: str | Path, *, resolver: PathResolver | None = None) -> bool:
    """True if `path` is an existing regular file (following symlinks)."""
    resolver = resolver or PathResolver()
    return resolver.resolve(path).is_file


def check_encoding(encoding: str) -> str:
    """
    Return the canonical codec name for `encoding`, or raise
    `UnknownEncodingError` if Python has no text codec by that name.
    """
    # str.encode() also rejects codecs such as base64 that don't encode text.
    try:
        "".encode(encoding)
    except (LookupError, TypeError) as e:
        raise UnknownEncodingError(
            f'Encoding "{encoding}" is invalid or not supported'
        ) from e
    return codecs.lookup(encoding).name


def write_text(
    path: str | Path,
    content: str,
    encoding: str = DEFAULT_ENCODING,
    *,
    append: bool = False,
    resolver: PathResolver | None = None,
) -> None:
    """
    Write `content` to the file at `path`, replacing it, or add it to the end
    when `append` is set. The parent directory must already exist.

    Characters the encoding can't represent are written as replacement
    characters. Newlines are written as given.
    """
    resolver = resolver or PathResolver()
    target = resolver.resolve(path)

    if classify(target.parent) is not PathKind.DIRECTORY:
        raise NotDirectoryError(f'Parent directory "{target.parent}" does not exist')
    if target.is_dir:
        raise IsDirectoryError(f'Path "{target}" points to a directory')
    codec = check_encoding(encoding)

    try:
        if append:
            with open(target.path, "a", encoding=codec, errors="replace", newline="") as f:
                f.write(content)
        else:
            real_target = _replacement_target(target.path)
            with atomic_output_file(real_target) as tmp_path:
                with open(tmp_path, "w", encoding=codec, errors="replace", newline="") as f:
                    f.write(content)
                _keep_mode(real_target, tmp_path)
    except OSError as e:
        raise FileIOError(f'Could not write to "{target}": {e}') from e


def write_text_append(
    path: str | Path,
    content: str,
    encoding: str = DEFAULT_ENCODING,
    *,
    resolver: PathResolver | None = None,
) -> None:
    """Append `content` to the file at `path`, creating it if needed."""
    write_text(path, content, encoding, append=True, resolver=resolver)

