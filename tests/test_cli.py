"""End-to-end tests for the check-parenthesis command."""

from __future__ import annotations

from pathlib import Path

import pytest

from bracketcheck import cli


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestCheckCommand:
    """Tests for cli.main."""

    def test_valid_file_prints_ok(self, tmp_path: Path, capsys):
        path = _write(tmp_path, "good.txt", "(a[b]{c<d>})")
        assert cli.main([str(path)]) == 0
        captured = capsys.readouterr()
        assert captured.out == "ok\n"
        assert captured.err == ""

    def test_invalid_file_prints_bad_structure(self, tmp_path: Path, capsys):
        path = _write(tmp_path, "bad.txt", "(a[b)c]")
        assert cli.main([str(path)]) == 0
        captured = capsys.readouterr()
        assert captured.out == "bad structure\n"
        assert captured.err == ""

    def test_empty_file_is_ok(self, tmp_path: Path, capsys):
        path = _write(tmp_path, "empty.txt", "")
        assert cli.main([str(path)]) == 0
        assert capsys.readouterr().out == "ok\n"

    def test_unterminated_file(self, tmp_path: Path, capsys):
        path = _write(tmp_path, "open.txt", "{\n  (x)\n")
        assert cli.main([str(path)]) == 0
        assert capsys.readouterr().out == "bad structure\n"

    def test_missing_file_reports_error(self, tmp_path: Path, capsys):
        missing = tmp_path / "nope.txt"
        assert cli.main([str(missing)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == f"Error! trying to open the file {missing}\n"

    def test_no_arguments_prints_usage(self, capsys):
        assert cli.main([]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "Please supply a file!\nusage: CheckParenthesis <filename>\n"

    def test_too_many_arguments_prints_usage(self, tmp_path: Path, capsys):
        path = _write(tmp_path, "good.txt", "()")
        assert cli.main([str(path), str(path)]) == 1
        assert "usage: CheckParenthesis <filename>" in capsys.readouterr().err

    def test_run_exits_with_status(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.argv", ["check-parenthesis"])
        with pytest.raises(SystemExit) as excinfo:
            cli.run()
        assert excinfo.value.code == 1
        assert "Please supply a file!" in capsys.readouterr().err


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


class TestCheckCommandReadFailure:
    """A file that opens but fails while being read."""

    def test_reports_error_not_verdict(self, tmp_path: Path, monkeypatch, capsys):
        path = _write(tmp_path, "flaky.txt", "(a[b]")
        handle = _FailingHandle("(a[b]")
        monkeypatch.setattr(Path, "open", lambda self, *args, **kwargs: handle)

        assert cli.main([str(path)]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == f"Error! trying to open the file {path}\n"
        assert handle.closed is True
