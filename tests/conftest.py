"""Shared test fixtures: file builders and comparison runners."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Sequence, Tuple

import pytest

from pyfc.compare.engine import compare_text
from pyfc.compare.models import CompareResult, DiffBlock
from pyfc.config.schema import CompareOptions
from pyfc.text.normalizer import LineNormalizer
from pyfc.text.models import EOF, Entry


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., str]:
    """Write *content* (str or bytes) to tmp_path/name and return the path."""

    def _write(name: str, content: str | bytes, encoding: str = "utf-8") -> str:
        path = tmp_path / name
        data = content if isinstance(content, bytes) else content.encode(encoding)
        path.write_bytes(data)
        return str(path)

    return _write


@pytest.fixture
def write_lines(write_file) -> Callable[[str, Sequence[str]], str]:
    """Write newline-terminated lines."""

    def _write(name: str, lines: Sequence[str]) -> str:
        return write_file(name, "".join(f"{line}\n" for line in lines))

    return _write


@pytest.fixture
def run_text() -> Callable[..., Tuple[CompareResult, List[DiffBlock]]]:
    """Run compare_text with option overrides, collecting every block."""

    def _run(path0: str, path1: str, **overrides) -> Tuple[CompareResult, List[DiffBlock]]:
        blocks: List[DiffBlock] = []
        result = compare_text(path0, path1, CompareOptions(**overrides), blocks.append)
        return result, blocks

    return _run


@pytest.fixture
def make_entries() -> Callable[..., List[Entry]]:
    """Build store entries from raw strings, optionally ending with EOF."""

    def _make(texts: Sequence[str], *, eof: bool = True, **overrides) -> List[Entry]:
        normalizer = LineNormalizer(CompareOptions(**overrides))
        entries: List[Entry] = [normalizer.make_line(i, t) for i, t in enumerate(texts, 1)]
        if eof:
            entries.append(EOF)
        return entries

    return _make
