"""Line store entries: content lines and the end-of-file marker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class Line:
    """A single parsed line.

    ``raw_text`` is what the user sees; ``comparison_text`` is the normalised
    text equality is decided on, and ``hash`` is computed over it.
    """

    number: int
    raw_text: str
    comparison_text: str
    hash: int


class EndOfFile:
    """Terminal entry of a line store. Use the module-level ``EOF`` instance."""

    __slots__ = ()
    _instance: "EndOfFile | None" = None

    def __new__(cls) -> "EndOfFile":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EOF"


EOF = EndOfFile()

Entry = Union[Line, EndOfFile]


def entries_equal(a: Entry, b: Entry, *, ignore_case: bool = False) -> bool:
    """Return True if two store entries compare equal.

    Lines are equal only if their hashes match *and* their comparison texts
    match; a hash match alone is never trusted. ``EOF`` equals only ``EOF``.
    """
    if isinstance(a, EndOfFile) or isinstance(b, EndOfFile):
        return isinstance(a, EndOfFile) and isinstance(b, EndOfFile)
    if a.hash != b.hash:
        return False
    if ignore_case:
        return a.comparison_text.casefold() == b.comparison_text.casefold()
    return a.comparison_text == b.comparison_text
