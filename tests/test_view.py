"""Tests for the bounded-window file view."""

import pytest

from pyfc.files import ChunkedFileView, FileNotFound, FileUnreadable


class TestChunkedFileView:
    def test_size_and_single_window(self, write_file):
        path = write_file("a.txt", b"hello")
        with ChunkedFileView(path) as view:
            assert view.size == 5
            assert view.next_window() == b"hello"
            assert view.exhausted
            assert view.remaining == 0

    def test_windows_never_exceed_chunk_size(self, write_file):
        path = write_file("a.txt", b"0123456789")
        with ChunkedFileView(path, chunk_size=4) as view:
            windows = []
            while not view.exhausted:
                windows.append(view.next_window())
        assert windows == [b"0123", b"4567", b"89"]

    def test_limit_caps_window(self, write_file):
        path = write_file("a.txt", b"0123456789")
        with ChunkedFileView(path, chunk_size=8) as view:
            assert view.next_window(3) == b"012"
            assert view.cursor == 3
            assert view.next_window() == b"3456789"

    def test_exhausted_returns_empty(self, write_file):
        path = write_file("a.txt", b"ab")
        with ChunkedFileView(path) as view:
            view.next_window()
            assert view.next_window() == b""

    def test_empty_file(self, write_file):
        path = write_file("empty.txt", b"")
        with ChunkedFileView(path) as view:
            assert view.size == 0
            assert view.exhausted
            assert view.next_window() == b""

    def test_missing_file(self, tmp_path):
        missing = str(tmp_path / "nope.txt")
        with pytest.raises(FileNotFound) as excinfo:
            ChunkedFileView(missing)
        assert excinfo.value.path == missing

    def test_directory_cannot_be_opened(self, tmp_path):
        with pytest.raises(FileNotFound):
            ChunkedFileView(str(tmp_path))

    def test_non_positive_chunk_size(self, write_file):
        path = write_file("a.txt", b"x")
        with pytest.raises(ValueError):
            ChunkedFileView(path, chunk_size=0)

    def test_read_after_close(self, write_file):
        path = write_file("a.txt", b"abc")
        view = ChunkedFileView(path)
        view.close()
        view.close()
        with pytest.raises(FileUnreadable):
            view.next_window()
