"""Pick binary or text mode for a file pair and run the comparison."""

from __future__ import annotations

from pathlib import PurePath, PureWindowsPath
from typing import Optional

from pyfc.compare.binary import MismatchCallback, compare_binary
from pyfc.compare.engine import BlockCallback, compare_text
from pyfc.compare.models import CompareResult
from pyfc.config.schema import CompareOptions

# Fixed list: files with these extensions are compared byte by byte.
BINARY_EXTENSIONS = frozenset({"exe", "com", "sys", "obj", "lib", "bin"})


def is_binary_extension(path: str) -> bool:
    """True if *path* ends in one of the binary extensions (case-insensitive).

    Both ``/`` and ``\\`` are accepted as directory separators.
    """
    name = PureWindowsPath(str(path)).name
    suffix = PurePath(name).suffix
    return suffix[1:].lower() in BINARY_EXTENSIONS


def has_wildcard(path: str) -> bool:
    return "*" in path or "?" in path


def use_binary_mode(path0: str, path1: str, options: CompareOptions) -> bool:
    if options.force_text:
        return False
    return (
        options.binary_forced
        or is_binary_extension(path0)
        or is_binary_extension(path1)
    )


def compare_files(
    path0: str,
    path1: str,
    options: CompareOptions,
    *,
    on_mismatch: Optional[MismatchCallback] = None,
    on_block: Optional[BlockCallback] = None,
) -> CompareResult:
    """Compare two files in the mode the options and extensions call for."""
    if use_binary_mode(path0, path1, options):
        return compare_binary(path0, path1, options, on_mismatch)
    return compare_text(path0, path1, options, on_block)
