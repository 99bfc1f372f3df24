"""Lazy character sources backed by text files."""

from __future__ import annotations

from pathlib import Path
from typing import IO, Iterator

CHUNK_SIZE = 4096


class CharacterSourceError(OSError):
    """The input file could not be opened or read."""

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)
        self.reason = reason


def _iter_chars(handle: IO[str], path: Path, chunk_size: int) -> Iterator[str]:
    try:
        while True:
            try:
                chunk = handle.read(chunk_size)
            except OSError as exc:
                raise CharacterSourceError(path, str(exc)) from exc
            if not chunk:
                return
            yield from chunk
    finally:
        handle.close()


def open_char_stream(
    path: str | Path,
    *,
    encoding: str = "utf-8",
    chunk_size: int = CHUNK_SIZE,
) -> Iterator[str]:
    """Open ``path`` and return an iterator over its characters.

    The file is opened immediately, so a missing or unreadable file raises
    :class:`CharacterSourceError` before any character is produced. Reading
    happens lazily in ``chunk_size`` pieces; the handle is closed once the
    iterator is exhausted or closed. Undecodable bytes are kept as surrogate
    escapes rather than failing, since only the ASCII bracket glyphs matter.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
    source_path = Path(path)
    try:
        handle = source_path.open("r", encoding=encoding, errors="surrogateescape", newline="")
    except OSError as exc:
        raise CharacterSourceError(source_path, exc.strerror or str(exc)) from exc
    return _iter_chars(handle, source_path, chunk_size)


__all__ = ["CHUNK_SIZE", "CharacterSourceError", "open_char_stream"]
