"""Line normalisation: tab expansion, whitespace compression, comparison hash."""

from __future__ import annotations

import re

from pyfc.config.schema import CompareOptions
from pyfc.text.models import Line

TAB_WIDTH = 8

HASH_SEED = 0xDEADFACE
HASH_MASK = 0x7FFFFFFF
_WORD_MASK = 0xFFFFFFFF

_SPACE_RUN_RE = re.compile(r"[ \t]+")


def expand_tabs(text: str, tab_width: int = TAB_WIDTH) -> str:
    """Replace each tab with spaces up to the next multiple of *tab_width*."""
    if "\t" not in text:
        return text
    out: list[str] = []
    col = 0
    for ch in text:
        if ch == "\t":
            pad = tab_width - (col % tab_width)
            out.append(" " * pad)
            col += pad
        else:
            out.append(ch)
            col += 1
    return "".join(out)


def compress_whitespace(text: str) -> str:
    """Strip leading/trailing spaces and tabs; collapse interior runs to one space."""
    return _SPACE_RUN_RE.sub(" ", text.strip(" \t"))


def line_hash(text: str, ignore_case: bool = False) -> int:
    """Order-dependent rolling hash, 31 bits wide.

    The accumulator is kept to 32 bits while rolling and masked to 31 bits at
    the end.
    """
    if ignore_case:
        text = text.casefold()
    acc = HASH_SEED
    for ch in text:
        acc = ((acc + ord(ch)) << 2) & _WORD_MASK
    return acc & HASH_MASK


class LineNormalizer:
    """Build ``Line`` entries from raw text according to the compare options."""

    def __init__(self, options: CompareOptions) -> None:
        self._expand = not options.literal_tabs
        self._compress = options.compress_whitespace
        self._ignore_case = options.ignore_case

    def comparison_text(self, raw: str) -> str:
        text = raw
        if self._expand:
            text = expand_tabs(text)
        if self._compress:
            text = compress_whitespace(text)
        return text

    def make_line(self, number: int, raw: str) -> Line:
        comp = self.comparison_text(raw)
        return Line(
            number=number,
            raw_text=raw,
            comparison_text=comp,
            hash=line_hash(comp, self._ignore_case),
        )
