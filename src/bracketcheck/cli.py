"""Command line checker: ``check-parenthesis <filename>``."""

from __future__ import annotations

import sys
from contextlib import closing
from typing import Sequence

from .matcher import match
from .source import CharacterSourceError, open_char_stream

VALID_ARGUMENTS_NUMBER = 1
INVALID_ARGUMENTS_MESSAGE = "Please supply a file!\nusage: CheckParenthesis <filename>\n"
INVALID_FILE_MESSAGE = "Error! trying to open the file {path}\n"

EXIT_OK = 0
EXIT_ERROR = 1


def main(argv: Sequence[str] | None = None) -> int:
    """Check one file and print ``ok`` or ``bad structure``.

    Returns the process exit status: 0 whenever a verdict was printed, 1 for
    a wrong argument count or a file that could not be read.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != VALID_ARGUMENTS_NUMBER:
        sys.stderr.write(INVALID_ARGUMENTS_MESSAGE)
        return EXIT_ERROR

    path = args[0]
    try:
        with closing(open_char_stream(path)) as stream:
            verdict = match(stream)
    except CharacterSourceError:
        sys.stderr.write(INVALID_FILE_MESSAGE.format(path=path))
        return EXIT_ERROR

    sys.stdout.write(verdict.message + "\n")
    return EXIT_OK


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
