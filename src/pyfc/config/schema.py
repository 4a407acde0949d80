"""Configuration schema: file sections and the immutable compare options."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from pyfc.files.view import DEFAULT_CHUNK_SIZE

OutputFormat = Literal["terminal", "json"]

DEFAULT_RESYNC_WINDOW = 100
DEFAULT_MIN_RESYNC_RUN = 2


@dataclass
class CompareConfig:
    ignore_case: bool = False
    compress_whitespace: bool = False
    literal_tabs: bool = False
    unicode: bool = False  # treat files as UTF-16LE
    abbreviate: bool = False
    line_numbers: bool = False
    resync_window: int = DEFAULT_RESYNC_WINDOW
    min_resync_run: int = DEFAULT_MIN_RESYNC_RUN  # accepted, not consulted
    encoding: str = "utf-8"
    chunk_size: int = DEFAULT_CHUNK_SIZE


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_caption: bool = True


@dataclass
class PyfcConfig:
    version: str = "1.0"
    compare: CompareConfig = field(default_factory=CompareConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


@dataclass(frozen=True)
class CompareOptions:
    """Everything the comparison engine needs to know. Never mutated.

    ``min_resync_run`` and ``offline`` are carried for completeness; the
    engine does not consult them.
    """

    binary_forced: bool = False
    force_text: bool = False
    ignore_case: bool = False
    compress_whitespace: bool = False
    literal_tabs: bool = False
    wide_text: bool = False
    abbreviate: bool = False
    line_numbers: bool = False
    resync_window: int = DEFAULT_RESYNC_WINDOW
    min_resync_run: int = DEFAULT_MIN_RESYNC_RUN
    offline: bool = False
    encoding: str = "utf-8"
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        for name in ("resync_window", "min_resync_run", "chunk_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
