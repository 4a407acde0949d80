"""Comparison engine: binary and text modes, resync, dispatch."""

from pyfc.compare.binary import compare_binary
from pyfc.compare.dispatch import compare_files, has_wildcard, is_binary_extension
from pyfc.compare.engine import TextComparison, compare_text
from pyfc.compare.models import (
    ByteMismatch,
    CompareResult,
    DiffBlock,
    DivergentRun,
    ExitCode,
    Outcome,
)
from pyfc.compare.resync import ResyncEngine, ResyncPoint, SyncState

__all__ = [
    "ByteMismatch",
    "CompareResult",
    "DiffBlock",
    "DivergentRun",
    "ExitCode",
    "Outcome",
    "ResyncEngine",
    "ResyncPoint",
    "SyncState",
    "TextComparison",
    "compare_binary",
    "compare_files",
    "compare_text",
    "has_wildcard",
    "is_binary_extension",
]
