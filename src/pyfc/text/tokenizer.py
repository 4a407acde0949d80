"""Split byte windows into lines, carrying partial lines across windows."""

from __future__ import annotations

from typing import List

from pyfc.text.encoding import EncodingPolicy


class LineTokenizer:
    """Incremental line splitter for one file.

    Feed successive windows with :meth:`feed`; each call returns the decoded
    text of every line completed so far. Bytes after the last terminator are
    held back until more data arrives or :meth:`finish` is called at end of
    file, so lines straddling a window boundary are never cut.
    """

    def __init__(self, policy: EncodingPolicy) -> None:
        self.policy = policy
        self._carry = bytearray()

    @property
    def pending(self) -> int:
        """Number of carried bytes not yet emitted as a line."""
        return len(self._carry)

    def feed(self, window: bytes) -> List[str]:
        self._carry += window
        buf = self._carry
        lines: List[str] = []
        start = 0
        while True:
            end = self.policy.find_terminator(buf, start)
            if end == -1:
                break
            lines.append(self._decode(buf[start:end]))
            start = end + self.policy.unit
        if start:
            del buf[:start]
        return lines

    def finish(self) -> List[str]:
        """Flush the unterminated final line, if any."""
        if not self._carry:
            return []
        tail = self._decode(self._carry)
        self._carry.clear()
        return [tail]

    def _decode(self, raw: bytes | bytearray) -> str:
        cr = self.policy.carriage_return
        if raw.endswith(cr) and (len(raw) - len(cr)) % self.policy.unit == 0:
            raw = raw[: -len(cr)]
        return self.policy.decode(bytes(raw))
