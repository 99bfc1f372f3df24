"""Bracket kinds and glyph tables."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Sequence, Tuple


class BracketKind(Enum):
    """The four supported paired delimiters."""

    ROUND = "round"
    SQUARE = "square"
    TRIANGLE = "triangle"
    CURLY = "curly"


# kind -> (opening glyph, closing glyph)
BRACKET_PAIRS: Dict[BracketKind, Tuple[str, str]] = {
    BracketKind.ROUND: ("(", ")"),
    BracketKind.SQUARE: ("[", "]"),
    BracketKind.TRIANGLE: ("<", ">"),
    BracketKind.CURLY: ("{", "}"),
}

OPEN_TO_KIND: Dict[str, BracketKind] = {pair[0]: kind for kind, pair in BRACKET_PAIRS.items()}
CLOSE_TO_KIND: Dict[str, BracketKind] = {pair[1]: kind for kind, pair in BRACKET_PAIRS.items()}

ALL_KINDS: Sequence[BracketKind] = tuple(BracketKind)
OPEN_GLYPHS: Sequence[str] = tuple(OPEN_TO_KIND)
CLOSE_GLYPHS: Sequence[str] = tuple(CLOSE_TO_KIND)
BRACKET_GLYPHS: Sequence[str] = OPEN_GLYPHS + CLOSE_GLYPHS

# Dataset label symbols.
VALID_SYMBOL = "V"
INVALID_SYMBOL = "X"


def opening_glyph(kind: BracketKind) -> str:
    return BRACKET_PAIRS[kind][0]


def closing_glyph(kind: BracketKind) -> str:
    return BRACKET_PAIRS[kind][1]


def parse_kinds(text: str) -> Tuple[BracketKind, ...]:
    """Parse a comma separated list of kind names (``"round,curly"``).

    Raises
    ------
    ValueError
        On an empty list or an unknown kind name.
    """
    names = [part.strip().lower() for part in text.split(",") if part.strip()]
    if not names:
        raise ValueError("Expected at least one bracket kind")
    by_name = {kind.value: kind for kind in BracketKind}
    unknown = sorted({name for name in names if name not in by_name})
    if unknown:
        raise ValueError(f"Unknown bracket kinds: {unknown}; available: {sorted(by_name)}")
    # Keep declaration order, drop duplicates.
    return tuple(kind for kind in BracketKind if kind.value in names)


__all__ = [
    "BracketKind",
    "BRACKET_PAIRS",
    "OPEN_TO_KIND",
    "CLOSE_TO_KIND",
    "ALL_KINDS",
    "OPEN_GLYPHS",
    "CLOSE_GLYPHS",
    "BRACKET_GLYPHS",
    "VALID_SYMBOL",
    "INVALID_SYMBOL",
    "opening_glyph",
    "closing_glyph",
    "parse_kinds",
]
