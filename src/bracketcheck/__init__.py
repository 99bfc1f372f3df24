"""Bracket structure checking."""

from .generate import (
    depth_profile,
    generate_balanced_brackets,
    generate_unbalanced_brackets,
    max_depth,
)
from .matcher import Verdict, is_balanced, match, target_symbol
from .source import CharacterSourceError, open_char_stream
from .symbols import (
    ALL_KINDS,
    BRACKET_PAIRS,
    INVALID_SYMBOL,
    VALID_SYMBOL,
    BracketKind,
)

__all__ = [
    "match",
    "is_balanced",
    "target_symbol",
    "Verdict",
    "BracketKind",
    "BRACKET_PAIRS",
    "ALL_KINDS",
    "VALID_SYMBOL",
    "INVALID_SYMBOL",
    "open_char_stream",
    "CharacterSourceError",
    "generate_balanced_brackets",
    "generate_unbalanced_brackets",
    "depth_profile",
    "max_depth",
]
