"""Resynchronisation engine: skip identical lines, realign after a divergence.

After the heads of the two stores stop matching, :meth:`ResyncEngine.resync`
searches a square window of ``resync_window`` entries on each side for any
pair of equal entries. Among all equal pairs it picks the one with the lowest
penalty ``i0 + 2*i1 + 3*|i1 - i0|``: short skips on the left are cheapest,
skips on the right cost more, and unbalanced skips cost most. Ties go to the
first pair found scanning the left side in the outer loop.

If no pair in the window is equal the files are declared too different.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from enum import Enum
from itertools import islice
from typing import Optional, Sequence

from pyfc.config.schema import CompareOptions
from pyfc.text.models import Entry, entries_equal

logger = logging.getLogger(__name__)


class SyncState(str, Enum):
    SCANNING = "scanning"
    SYNCED = "synced"
    DIVERGED = "diverged"
    RESYNC_FAILED = "resync_failed"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class ResyncPoint:
    """Offsets from each head of the first realigned pair."""

    left: int
    right: int

    @property
    def penalty(self) -> int:
        return resync_penalty(self.left, self.right)


def resync_penalty(i0: int, i1: int) -> int:
    return i0 + 2 * i1 + 3 * abs(i1 - i0)


class ResyncEngine:
    """Stateless comparison steps over the heads of two entry sequences."""

    def __init__(self, options: CompareOptions) -> None:
        self.window = options.resync_window
        self.ignore_case = options.ignore_case

    def equal(self, a: Entry, b: Entry) -> bool:
        return entries_equal(a, b, ignore_case=self.ignore_case)

    def skip_identical(self, left: Sequence[Entry], right: Sequence[Entry]) -> int:
        """Count leading pairs that compare equal.

        Stops at the first mismatch or when either sequence runs out.
        """
        count = 0
        for a, b in zip(left, right):
            if not self.equal(a, b):
                break
            count += 1
        return count

    def resync(
        self,
        left: Sequence[Entry],
        right: Sequence[Entry],
    ) -> Optional[ResyncPoint]:
        """Find the best realignment within the window, or None."""
        heads0 = list(islice(left, self.window))
        heads1 = list(islice(right, self.window))

        best: Optional[ResyncPoint] = None
        best_penalty = sys.maxsize
        for i0, a in enumerate(heads0):
            for i1, b in enumerate(heads1):
                penalty = resync_penalty(i0, i1)
                if penalty >= best_penalty:
                    continue
                if self.equal(a, b):
                    best = ResyncPoint(i0, i1)
                    best_penalty = penalty

        if best is None:
            logger.debug("resync failed within window %d", self.window)
        else:
            logger.debug("resync at +%d/+%d (penalty %d)", best.left, best.right, best_penalty)
        return best
