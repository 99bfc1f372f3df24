"""Bracket structure validation over a character stream."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List

from .symbols import CLOSE_TO_KIND, INVALID_SYMBOL, OPEN_TO_KIND, VALID_SYMBOL, BracketKind


class Verdict(Enum):
    """Outcome of a match attempt."""

    VALID = "ok"
    INVALID = "bad structure"

    @property
    def message(self) -> str:
        """Line printed by the command line checker."""
        return self.value

    @property
    def symbol(self) -> str:
        """Dataset label ('V' or 'X')."""
        return VALID_SYMBOL if self is Verdict.VALID else INVALID_SYMBOL


def match(stream: Iterable[str]) -> Verdict:
    """Check that every bracket in ``stream`` is closed in proper nesting order.

    Parameters
    ----------
    stream:
        Any iterable of characters. Items may also be longer strings (chunks),
        which are scanned character by character. Characters other than the
        eight bracket glyphs are ignored.

    Returns
    -------
    Verdict
        ``Verdict.VALID`` when all openers are matched and closed,
        ``Verdict.INVALID`` on a stray closer, a mismatched closer or an
        opener left unclosed at end of stream.

    Notes
    -----
    Scanning stops at the first stray or mismatched closer, so the rest of
    ``stream`` is not consumed. Errors raised by ``stream`` itself propagate.
    """
    open_stack: List[BracketKind] = []
    for chunk in stream:
        for ch in chunk:
            kind = OPEN_TO_KIND.get(ch)
            if kind is not None:
                open_stack.append(kind)
                continue
            kind = CLOSE_TO_KIND.get(ch)
            if kind is None:
                continue
            if not open_stack or open_stack.pop() is not kind:
                return Verdict.INVALID
    return Verdict.VALID if not open_stack else Verdict.INVALID


def is_balanced(symbols: Iterable[str]) -> bool:
    """Return True if ``symbols`` is a well nested bracket sequence."""
    return match(symbols) is Verdict.VALID


def target_symbol(symbols: Iterable[str]) -> str:
    """Return the label symbol ('V' or 'X') for a bracket sequence."""
    return match(symbols).symbol


__all__ = ["Verdict", "match", "is_balanced", "target_symbol"]
