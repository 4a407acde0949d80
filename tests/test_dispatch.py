"""Tests for choosing binary or text mode."""

import pytest

from pyfc.compare.dispatch import compare_files, has_wildcard, is_binary_extension, use_binary_mode
from pyfc.compare.models import Outcome
from pyfc.config.schema import CompareOptions


class TestBinaryExtension:
    @pytest.mark.parametrize("name", ["a.exe", "B.COM", "x.Sys", "lib.obj", "c.lib", "fw.bin"])
    def test_binary_names(self, name):
        assert is_binary_extension(name)

    @pytest.mark.parametrize("name", ["a.txt", "exe", "a.exe.txt", "bin/readme", "a.binary"])
    def test_text_names(self, name):
        assert not is_binary_extension(name)

    def test_backslash_separator(self):
        assert is_binary_extension(r"C:\tools\fc.exe")
        assert not is_binary_extension(r"C:\dir.exe\notes")


class TestUseBinaryMode:
    def test_either_file_triggers_binary(self):
        assert use_binary_mode("a.txt", "b.bin", CompareOptions())

    def test_forced_binary(self):
        assert use_binary_mode("a.txt", "b.txt", CompareOptions(binary_forced=True))

    def test_text_overrides_everything(self):
        opts = CompareOptions(binary_forced=True, force_text=True)
        assert not use_binary_mode("a.exe", "b.exe", opts)

    def test_default_text(self):
        assert not use_binary_mode("a.txt", "b.txt", CompareOptions())


class TestWildcard:
    def test_detection(self):
        assert has_wildcard("*.txt")
        assert has_wildcard("a?.txt")
        assert not has_wildcard("a.txt")


class TestCompareFiles:
    def test_binary_extension_dispatches_binary(self, write_file):
        a = write_file("a.bin", b"ab\n")
        b = write_file("b.bin", b"aX\n")
        seen = []
        result = compare_files(a, b, CompareOptions(), on_mismatch=seen.append)
        assert result.mode == "binary"
        assert result.outcome is Outcome.DIFFERENT
        assert [m.offset for m in seen] == [1]

    def test_text_dispatch(self, write_file):
        a = write_file("a.txt", "ab\n")
        b = write_file("b.txt", "aX\n")
        blocks = []
        result = compare_files(a, b, CompareOptions(), on_block=blocks.append)
        assert result.mode == "text"
        assert len(blocks) == 1
