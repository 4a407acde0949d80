"""Comparison result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional

from pyfc.text.models import Line


class Outcome(str, Enum):
    IDENTICAL = "identical"
    DIFFERENT = "different"
    ONE_LONGER = "one_longer"
    RESYNC_FAILED = "resync_failed"
    NOT_FOUND = "not_found"
    UNREADABLE = "unreadable"
    OUT_OF_MEMORY = "out_of_memory"


class ExitCode(IntEnum):
    IDENTICAL = 0
    DIFFERENT = 1
    CANT_FIND = 2
    INVALID = 255


_EXIT_CODES = {
    Outcome.IDENTICAL: ExitCode.IDENTICAL,
    Outcome.DIFFERENT: ExitCode.DIFFERENT,
    Outcome.ONE_LONGER: ExitCode.DIFFERENT,
    Outcome.RESYNC_FAILED: ExitCode.DIFFERENT,
    Outcome.NOT_FOUND: ExitCode.CANT_FIND,
    Outcome.UNREADABLE: ExitCode.INVALID,
    Outcome.OUT_OF_MEMORY: ExitCode.INVALID,
}


@dataclass(frozen=True, slots=True)
class ByteMismatch:
    """One differing byte in binary mode."""

    offset: int
    left: int
    right: int


@dataclass(frozen=True)
class DivergentRun:
    """One side's half of a reported difference.

    ``lines`` is the divergent span itself. ``before`` is the last line both
    files agreed on and ``after`` the line the files resynchronised on; both
    are display context only and may be None.
    """

    label: str
    lines: List[Line] = field(default_factory=list)
    before: Optional[Line] = None
    after: Optional[Line] = None

    @property
    def displayed(self) -> List[Line]:
        shown: List[Line] = []
        if self.before is not None:
            shown.append(self.before)
        shown.extend(self.lines)
        if self.after is not None:
            shown.append(self.after)
        return shown


@dataclass(frozen=True)
class DiffBlock:
    """A pair of divergent runs reported together (left file, right file)."""

    left: DivergentRun
    right: DivergentRun
    final: bool = False  # True for the unresolved run that ends a failed resync


@dataclass
class CompareResult:
    """Complete result of one comparison."""

    outcome: Outcome
    files: tuple[str, str]
    mode: str = "text"  # 'text' | 'binary'
    longer: Optional[str] = None
    shorter: Optional[str] = None
    failed_path: Optional[str] = None
    error: Optional[str] = None
    mismatches: int = 0
    blocks: int = 0

    @property
    def exit_code(self) -> int:
        return int(_EXIT_CODES[self.outcome])

    def fail(self, outcome: Outcome, path: Optional[str], message: str) -> "CompareResult":
        """Record a fatal outcome (missing file, read error, out of memory)."""
        self.outcome = outcome
        self.failed_path = path
        self.error = message
        return self
