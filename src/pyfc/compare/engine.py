"""Text-mode comparison: drives both line stores through the resync cycle.

Exception safety: views and stores are released on every exit path, and
file or memory failures are turned into outcomes rather than propagated.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from pyfc.compare.binary import same_file
from pyfc.compare.models import CompareResult, DiffBlock, DivergentRun, Outcome
from pyfc.compare.resync import ResyncEngine, ResyncPoint, SyncState
from pyfc.config.schema import CompareOptions
from pyfc.files.view import ChunkedFileView, FileNotFound, FileUnreadable
from pyfc.text.encoding import policy_for
from pyfc.text.models import Line
from pyfc.text.normalizer import LineNormalizer
from pyfc.text.store import LineStore

logger = logging.getLogger(__name__)

BlockCallback = Callable[[DiffBlock], None]


class TextComparison:
    """One text comparison over two line stores.

    Each cycle refills the stores as needed, skips identical entries and
    evicts them, and on a mismatch resynchronises and reports the divergent
    runs. Both stores are only ever mutated here.
    """

    def __init__(
        self,
        left: LineStore,
        right: LineStore,
        options: CompareOptions,
        on_block: Optional[BlockCallback] = None,
    ) -> None:
        self.left = left
        self.right = right
        self.engine = ResyncEngine(options)
        self.window = options.resync_window
        self.on_block = on_block
        self.state = SyncState.SCANNING
        self.blocks = 0
        self._last: List[Optional[Line]] = [None, None]

    def run(self) -> Outcome:
        while True:
            self.left.fill(1)
            self.right.fill(1)
            if self.left.drained or self.right.drained:
                self._transition(SyncState.EXHAUSTED)
                return Outcome.DIFFERENT if self.blocks else Outcome.IDENTICAL

            skipped = self.engine.skip_identical(self.left, self.right)
            if skipped:
                self._consume(skipped, skipped)
                self._transition(SyncState.SYNCED)
                continue

            self._transition(SyncState.DIVERGED)
            self.left.fill(self.window)
            self.right.fill(self.window)
            point = self.engine.resync(self.left, self.right)
            if point is None:
                self._report(self.window, self.window, None)
                self._transition(SyncState.RESYNC_FAILED)
                return Outcome.RESYNC_FAILED

            self._report(point.left, point.right, point)
            self._consume(point.left + 1, point.right + 1)
            self._transition(SyncState.SYNCED)

    def _transition(self, state: SyncState) -> None:
        if state is not self.state:
            logger.debug("%s -> %s", self.state.value, state.value)
            self.state = state

    def _consume(self, count0: int, count1: int) -> None:
        for side, (store, count) in enumerate(((self.left, count0), (self.right, count1))):
            last = store[count - 1]
            self._last[side] = last if isinstance(last, Line) else None
            store.evict(count)

    def _run_for(self, side: int, store: LineStore, span: int, at: Optional[int]) -> DivergentRun:
        after = store[at] if at is not None else None
        return DivergentRun(
            label=store.label,
            lines=store.lines(0, span),
            before=self._last[side],
            after=after if isinstance(after, Line) else None,
        )

    def _report(self, span0: int, span1: int, point: Optional[ResyncPoint]) -> None:
        block = DiffBlock(
            left=self._run_for(0, self.left, span0, point.left if point else None),
            right=self._run_for(1, self.right, span1, point.right if point else None),
            final=point is None,
        )
        self.blocks += 1
        logger.debug(
            "difference #%d: %d vs %d lines",
            self.blocks, len(block.left.lines), len(block.right.lines),
        )
        if self.on_block is not None:
            self.on_block(block)


def compare_text(
    path0: str,
    path1: str,
    options: CompareOptions,
    on_block: Optional[BlockCallback] = None,
) -> CompareResult:
    """Compare two files line by line.

    Every difference is passed to *on_block* as it is found, so memory use
    stays bounded by the resync window and the read window size.
    """
    files = (str(path0), str(path1))
    result = CompareResult(outcome=Outcome.IDENTICAL, files=files, mode="text")

    try:
        policy = policy_for(options.wide_text, options.encoding)
        with ChunkedFileView(files[0], options.chunk_size) as view0, \
                ChunkedFileView(files[1], options.chunk_size) as view1:
            if same_file(*files):
                logger.debug("%s and %s are the same file", *files)
                return result
            if view0.size == 0 and view1.size == 0:
                return result

            normalizer = LineNormalizer(options)
            left = LineStore(view0, normalizer, policy)
            right = LineStore(view1, normalizer, policy)
            comparison = TextComparison(left, right, options, on_block)
            try:
                result.outcome = comparison.run()
            finally:
                result.blocks = comparison.blocks
                left.clear()
                right.clear()
    except FileNotFound as exc:
        return result.fail(Outcome.NOT_FOUND, exc.path, str(exc))
    except FileUnreadable as exc:
        return result.fail(Outcome.UNREADABLE, exc.path, str(exc))
    except MemoryError:
        return result.fail(Outcome.OUT_OF_MEMORY, None, "out of memory")

    return result
