"""Tests for file backed character streams."""

from __future__ import annotations

from pathlib import Path

import pytest

from bracketcheck import CharacterSourceError, Verdict, match, open_char_stream


class TestOpenCharStream:
    """Tests for open_char_stream."""

    def test_yields_every_character(self, tmp_path: Path):
        path = tmp_path / "input.txt"
        path.write_text("ab(c)\nd", encoding="utf-8")
        assert "".join(open_char_stream(path)) == "ab(c)\nd"

    def test_small_chunks(self, tmp_path: Path):
        path = tmp_path / "input.txt"
        path.write_text("([{<>}])" * 10, encoding="utf-8")
        assert "".join(open_char_stream(path, chunk_size=3)) == "([{<>}])" * 10

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.txt"
        path.write_text("", encoding="utf-8")
        assert list(open_char_stream(path)) == []

    def test_missing_file_raises_on_open(self, tmp_path: Path):
        missing = tmp_path / "missing.txt"
        with pytest.raises(CharacterSourceError) as excinfo:
            open_char_stream(missing)
        assert excinfo.value.path == missing
        assert isinstance(excinfo.value, OSError)

    def test_directory_raises(self, tmp_path: Path):
        with pytest.raises(CharacterSourceError):
            "".join(open_char_stream(tmp_path))

    def test_invalid_chunk_size(self, tmp_path: Path):
        with pytest.raises(ValueError):
            open_char_stream(tmp_path / "x.txt", chunk_size=0)

    def test_undecodable_bytes_do_not_fail(self, tmp_path: Path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"(\xff\xfe[])")
        assert match(open_char_stream(path)) is Verdict.VALID

    def test_match_over_file(self, tmp_path: Path):
        good = tmp_path / "good.txt"
        bad = tmp_path / "bad.txt"
        good.write_text("(a[b]{c<d>})", encoding="utf-8")
        bad.write_text("(a[b)c]", encoding="utf-8")
        assert match(open_char_stream(good)) is Verdict.VALID
        assert match(open_char_stream(bad)) is Verdict.INVALID


class _FailingHandle:
    """Text handle whose reads fail after the first chunk."""

    def __init__(self, first_chunk: str) -> None:
        self._chunks = [first_chunk]
        self.closed = False

    def read(self, size: int = -1) -> str:
        if self._chunks:
            return self._chunks.pop()
        raise OSError(5, "Input/output error")

    def close(self) -> None:
        self.closed = True


class TestReadFailure:
    """A read error after the file opened."""

    def test_raises_source_error_and_closes_handle(self, tmp_path: Path, monkeypatch):
        path = tmp_path / "flaky.txt"
        handle = _FailingHandle("(a[")
        monkeypatch.setattr(Path, "open", lambda self, *args, **kwargs: handle)

        stream = open_char_stream(path)
        assert next(stream) == "("
        with pytest.raises(CharacterSourceError) as excinfo:
            list(stream)

        assert excinfo.value.path == path
        assert isinstance(excinfo.value.__cause__, OSError)
        assert handle.closed is True

    def test_match_propagates_instead_of_invalid(self, tmp_path: Path, monkeypatch):
        handle = _FailingHandle("(((")
        monkeypatch.setattr(Path, "open", lambda self, *args, **kwargs: handle)

        with pytest.raises(CharacterSourceError):
            match(open_char_stream(tmp_path / "flaky.txt"))
        assert handle.closed is True

    def test_handle_closed_after_early_stop(self, tmp_path: Path, monkeypatch):
        handle = _FailingHandle(")")
        monkeypatch.setattr(Path, "open", lambda self, *args, **kwargs: handle)

        stream = open_char_stream(tmp_path / "early.txt")
        assert match(stream) is Verdict.INVALID
        stream.close()
        assert handle.closed is True
