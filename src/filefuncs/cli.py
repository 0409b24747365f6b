#!/usr/bin/env python3
"""
filefuncs: File functions for query engines, from the command line

Common usage:
  filefuncs list docs
  filefuncs list --recursive --pattern '*.{md,txt}' .
  filefuncs copy notes.txt backup/
  filefuncs is-file README.md
  filefuncs write-text out.txt 'hello' --append

Relative paths are resolved against --base-dir, the `base-dir` setting in
`.filefuncs.toml`, `filefuncs.toml` or `pyproject.toml [tool.filefuncs]`,
or the current directory, in that order.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from filefuncs.config import find_config_file, load_config, merge_cli_with_config
from filefuncs.functions import FunctionCallError, FunctionLibrary
from filefuncs.operations import DEFAULT_ENCODING
from filefuncs.paths import PathResolver


@dataclass
class Options:
    """Command-line options for the filefuncs tool."""

    command: str | None
    base_dir: str | None
    encoding: str | None
    verbose: bool
    version: bool
    # Command arguments
    path: str | None = None
    source: str | None = None
    target: str | None = None
    content: str | None = None
    recursive: bool = False
    pattern: str | None = None
    append: bool = False


def _build_parser() -> argparse.ArgumentParser:
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="filefuncs",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--base-dir",
        type=str,
        default=None,
        metavar="DIR",
        help="Directory that relative paths are resolved against (default: current directory)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug messages to stderr"
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    list_parser = subparsers.add_parser(
        "list", help="List the entries of a directory, relative to it"
    )
    list_parser.add_argument("path", type=str, help="Directory to list")
    list_parser.add_argument(
        "-r", "--recursive", action="store_true", help="Include the contents of subdirectories"
    )
    list_parser.add_argument(
        "-p",
        "--pattern",
        type=str,
        default=None,
        metavar="GLOB",
        help="Only list entries whose name matches this glob (e.g., '*.md' or '*.{md,txt}')",
    )

    copy_parser = subparsers.add_parser("copy", help="Copy a file or directory")
    copy_parser.add_argument("source", type=str, help="File or directory to copy")
    copy_parser.add_argument("target", type=str, help="Destination path or directory")

    is_file_parser = subparsers.add_parser(
        "is-file", help="Print 'true' if the path is an existing regular file"
    )
    is_file_parser.add_argument("path", type=str, help="Path to test")

    write_parser = subparsers.add_parser("write-text", help="Write text to a file")
    write_parser.add_argument("path", type=str, help="File to write")
    write_parser.add_argument("content", type=str, help="Text to write")
    write_parser.add_argument(
        "--encoding",
        type=str,
        default=None,
        help=f"Text encoding (default: {DEFAULT_ENCODING})",
    )
    write_parser.add_argument(
        "--append", action="store_true", help="Append to the file instead of replacing it"
    )
    return parser


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str], argparse.ArgumentParser]:
    """
    Parse command-line arguments.

    Returns the options, the set of config-backed flags that were given
    explicitly (for config merge precedence), and the parser for usage output.
    """
    parser = _build_parser()
    opts = parser.parse_args(args)

    # Config-backed flags default to None, so any other value was supplied.
    explicit_flags = {
        name for name in ("base_dir", "encoding") if getattr(opts, name, None) is not None
    }

    return (
        Options(
            command=opts.command,
            base_dir=opts.base_dir,
            encoding=getattr(opts, "encoding", None),
            verbose=opts.verbose,
            version=opts.version,
            path=getattr(opts, "path", None),
            source=getattr(opts, "source", None),
            target=getattr(opts, "target", None),
            content=getattr(opts, "content", None),
            recursive=getattr(opts, "recursive", False),
            pattern=getattr(opts, "pattern", None),
            append=getattr(opts, "append", False),
        ),
        explicit_flags,
        parser,
    )


def _run_command(library: FunctionLibrary, options: Options) -> Any:
    """Dispatch the selected subcommand through the function library."""
    if options.command == "list":
        return library.call("list", options.path, options.recursive, options.pattern)
    if options.command == "copy":
        return library.call("copy", options.source, options.target)
    if options.command == "is-file":
        return library.call("is-file", options.path)
    if options.command == "write-text":
        name = "write-text-append" if options.append else "write-text"
        encoding = options.encoding or DEFAULT_ENCODING
        return library.call(name, options.path, options.content, encoding)
    raise ValueError(f"Unknown command: {options.command}")


def _print_result(result: Any) -> None:
    if isinstance(result, bool):
        print("true" if result else "false")
    elif isinstance(result, list):
        for item in result:
            print(item)


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the filefuncs CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for file errors, 2 for anything else)
    """
    options, explicit_flags, parser = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("filefuncs")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    if options.command is None:
        parser.print_usage(sys.stderr)
        print("Error: No command given. Use --help for more options.", file=sys.stderr)
        return 1

    if options.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    # Load and merge config file settings
    config_path = find_config_file(Path.cwd())
    if config_path:
        try:
            config = load_config(config_path)
        except (ValueError, OSError) as e:
            print(f"Error: Invalid config file: {e}", file=sys.stderr)
            return 2
        merge_cli_with_config(options, config, explicit_flags)

    library = FunctionLibrary(PathResolver(options.base_dir))
    try:
        result = _run_command(library, options)
    except FunctionCallError as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return 1
    except Exception as e:
        # Catch other potential file or processing errors.
        print(f"Error: {e}", file=sys.stderr)
        return 2

    _print_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
