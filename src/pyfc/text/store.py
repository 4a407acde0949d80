"""Per-side line store: refilled from a file view, evicted from the front."""

from __future__ import annotations

import logging
from collections import deque
from itertools import islice
from typing import Deque, Iterator, List

from pyfc.files.view import ChunkedFileView, FileUnreadable
from pyfc.text.encoding import EncodingPolicy
from pyfc.text.models import EOF, Entry, Line
from pyfc.text.normalizer import LineNormalizer
from pyfc.text.tokenizer import LineTokenizer

logger = logging.getLogger(__name__)


class LineStore:
    """Ordered, incrementally growing sequence of entries for one file.

    Entries are appended a window at a time by :meth:`refill` and dropped from
    the front by :meth:`evict`. Once the view is exhausted exactly one ``EOF``
    entry is appended and the store is *finished*. Indexing is relative to
    the current head.
    """

    def __init__(
        self,
        view: ChunkedFileView,
        normalizer: LineNormalizer,
        policy: EncodingPolicy,
    ) -> None:
        self.view = view
        self.label = view.path
        self._normalizer = normalizer
        self._tokenizer = LineTokenizer(policy)
        self._window = policy.align(view.chunk_size)
        self._entries: Deque[Entry] = deque()
        self._next_number = 1
        self._finished = False

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    @property
    def finished(self) -> bool:
        """True once the EOF entry has been appended."""
        return self._finished

    @property
    def drained(self) -> bool:
        """True when the store is finished and every entry has been evicted."""
        return self._finished and not self._entries

    def refill(self) -> int:
        """Parse the next window into entries. Returns the number appended."""
        if self._finished:
            return 0
        before = len(self._entries)
        window = self.view.next_window(self._window)
        try:
            texts = self._tokenizer.feed(window)
            if self.view.exhausted:
                texts.extend(self._tokenizer.finish())
        except UnicodeDecodeError as exc:
            raise FileUnreadable(
                self.label, f"cannot decode {self.label} as {exc.encoding}: {exc.reason}"
            ) from exc
        for raw in texts:
            self._entries.append(self._normalizer.make_line(self._next_number, raw))
            self._next_number += 1
        if self.view.exhausted:
            self._entries.append(EOF)
            self._finished = True
        added = len(self._entries) - before
        logger.debug(
            "%s: refilled %d entries (carry %d bytes, finished=%s)",
            self.label, added, self._tokenizer.pending, self._finished,
        )
        return added

    def fill(self, count: int) -> bool:
        """Refill until at least *count* entries are buffered or the file ends.

        Returns True if *count* entries are available.
        """
        while len(self._entries) < count and not self._finished:
            self.refill()
        return len(self._entries) >= count

    def evict(self, count: int) -> None:
        """Drop *count* entries from the front."""
        for _ in range(min(count, len(self._entries))):
            self._entries.popleft()

    def lines(self, start: int, stop: int) -> List[Line]:
        """Content lines in ``[start, stop)``, excluding the EOF entry."""
        return [e for e in islice(self._entries, start, stop) if isinstance(e, Line)]

    def clear(self) -> None:
        self._entries.clear()
