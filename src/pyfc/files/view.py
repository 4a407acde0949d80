"""Bounded-window file reader.

A ``ChunkedFileView`` never holds more than one window of a file in memory.
The comparators pull successive windows from it instead of loading or mapping
whole files, so arbitrarily large inputs are handled in constant memory.
"""

from __future__ import annotations

import logging
import os
from typing import BinaryIO, Optional

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 32 * 1024 * 1024


class FileViewError(Exception):
    """Base class for file access failures. ``path`` names the offending file."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path


class FileNotFound(FileViewError):
    """Raised when a file cannot be opened."""


class FileUnreadable(FileViewError):
    """Raised when a file's size or contents cannot be read."""


class ChunkedFileView:
    """Read-only, sequentially advancing window over one file.

    Usage::

        with ChunkedFileView("a.txt", chunk_size=65536) as view:
            while not view.exhausted:
                window = view.next_window()
                ...
    """

    def __init__(self, path: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.path = str(path)
        self.chunk_size = chunk_size
        self.cursor = 0
        self._file: Optional[BinaryIO] = None

        try:
            self._file = open(self.path, "rb")
        except OSError as exc:
            raise FileNotFound(self.path, f"cannot open {self.path}: {exc.strerror}") from exc

        try:
            st = os.fstat(self._file.fileno())
        except OSError as exc:
            self.close()
            raise FileUnreadable(self.path, f"cannot read {self.path}: {exc.strerror}") from exc
        self.size = st.st_size

    def __enter__(self) -> "ChunkedFileView":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def remaining(self) -> int:
        return max(self.size - self.cursor, 0)

    @property
    def exhausted(self) -> bool:
        return self.cursor >= self.size

    def next_window(self, limit: Optional[int] = None) -> bytes:
        """Return the next window of at most ``chunk_size`` (and *limit*) bytes.

        Returns ``b""`` once the view is exhausted. A short read before the
        recorded size is reached is treated as unreadable.
        """
        if self._file is None:
            raise FileUnreadable(self.path, f"cannot read {self.path}: view is closed")
        want = min(self.chunk_size, self.remaining)
        if limit is not None:
            want = min(want, limit)
        if want <= 0:
            return b""

        try:
            data = self._file.read(want)
        except OSError as exc:
            raise FileUnreadable(self.path, f"cannot read {self.path}: {exc.strerror}") from exc
        if len(data) != want:
            raise FileUnreadable(
                self.path,
                f"cannot read {self.path}: expected {want} bytes at offset "
                f"{self.cursor}, got {len(data)}",
            )

        logger.debug("%s: window [%d, %d)", self.path, self.cursor, self.cursor + want)
        self.cursor += want
        return data

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
