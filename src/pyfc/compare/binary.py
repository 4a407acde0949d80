"""Binary-mode comparison over paired file windows."""

from __future__ import annotations

import logging
import os
from typing import Callable, Optional

from pyfc.compare.models import ByteMismatch, CompareResult, Outcome
from pyfc.config.schema import CompareOptions
from pyfc.files.view import ChunkedFileView, FileNotFound, FileUnreadable

logger = logging.getLogger(__name__)

MismatchCallback = Callable[[ByteMismatch], None]


def same_file(path0: str, path1: str) -> bool:
    """True if both paths resolve to the same file on disk."""
    try:
        return os.path.samefile(path0, path1)
    except OSError:
        return False


def _scan_window(
    base: int,
    left: bytes,
    right: bytes,
    on_mismatch: Optional[MismatchCallback],
) -> int:
    if left == right:
        return 0
    count = 0
    for i, (a, b) in enumerate(zip(left, right)):
        if a != b:
            count += 1
            if on_mismatch is not None:
                on_mismatch(ByteMismatch(offset=base + i, left=a, right=b))
    return count


def compare_binary(
    path0: str,
    path1: str,
    options: CompareOptions,
    on_mismatch: Optional[MismatchCallback] = None,
) -> CompareResult:
    """Compare two files byte by byte.

    Every differing offset within the common length is reported through
    *on_mismatch*; there is no cap. Files of different size yield
    ``ONE_LONGER`` even when the common prefix matches.
    """
    files = (str(path0), str(path1))
    result = CompareResult(outcome=Outcome.IDENTICAL, files=files, mode="binary")

    try:
        with ChunkedFileView(files[0], options.chunk_size) as view0, \
                ChunkedFileView(files[1], options.chunk_size) as view1:
            if same_file(*files):
                logger.debug("%s and %s are the same file", *files)
                return result

            common = min(view0.size, view1.size)
            offset = 0
            while offset < common:
                want = common - offset
                left = view0.next_window(want)
                right = view1.next_window(len(left))
                if len(right) != len(left):
                    raise FileUnreadable(view1.path, f"cannot read {view1.path}")
                result.mismatches += _scan_window(offset, left, right, on_mismatch)
                offset += len(left)

            if view0.size != view1.size:
                result.outcome = Outcome.ONE_LONGER
                if view0.size > view1.size:
                    result.longer, result.shorter = files
                else:
                    result.shorter, result.longer = files
            elif result.mismatches:
                result.outcome = Outcome.DIFFERENT
    except FileNotFound as exc:
        return result.fail(Outcome.NOT_FOUND, exc.path, str(exc))
    except FileUnreadable as exc:
        return result.fail(Outcome.UNREADABLE, exc.path, str(exc))
    except MemoryError:
        return result.fail(Outcome.OUT_OF_MEMORY, None, "out of memory")

    logger.debug("binary compare: %s, %d mismatches", result.outcome.value, result.mismatches)
    return result

