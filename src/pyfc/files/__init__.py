"""File access layer: bounded-window readers."""

from pyfc.files.view import (
    DEFAULT_CHUNK_SIZE,
    ChunkedFileView,
    FileNotFound,
    FileUnreadable,
    FileViewError,
)

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "ChunkedFileView",
    "FileNotFound",
    "FileUnreadable",
    "FileViewError",
]
