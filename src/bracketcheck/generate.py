"""Random bracket sequence generators and depth statistics."""

from __future__ import annotations

import random
from typing import List, Sequence

import numpy as np

from .symbols import (
    ALL_KINDS,
    CLOSE_TO_KIND,
    OPEN_TO_KIND,
    BracketKind,
    closing_glyph,
    opening_glyph,
)

UNBALANCED_MODES: Sequence[str] = ("stray", "mismatch", "unterminated", "crossed")


def _check_kinds(kinds: Sequence[BracketKind]) -> List[BracketKind]:
    kinds = list(dict.fromkeys(kinds))
    if not kinds:
        raise ValueError("Expected at least one bracket kind")
    return kinds


def _balanced(pairs: int, rng: random.Random, kinds: Sequence[BracketKind]) -> List[str]:
    if pairs == 0:
        return []

    # Random shuffle of n openers and n closers, then fix prefix violations
    shape: List[bool] = [True] * pairs + [False] * pairs
    rng.shuffle(shape)
    shape = _fix_to_balanced(shape)

    result: List[str] = []
    stack: List[BracketKind] = []
    for is_open in shape:
        if is_open:
            kind = rng.choice(kinds)
            stack.append(kind)
            result.append(opening_glyph(kind))
        else:
            result.append(closing_glyph(stack.pop()))
    return result


def _fix_to_balanced(shape: List[bool]) -> List[bool]:
    """Rotate an equal open/close shuffle so that no prefix dips below zero."""
    best_start = 0
    min_depth = 0
    depth = 0

    for i, is_open in enumerate(shape):
        depth += 1 if is_open else -1
        if depth < min_depth:
            min_depth = depth
            best_start = i + 1

    return shape[best_start:] + shape[:best_start]


def _split_even(total: int, parts: int, rng: random.Random) -> List[int]:
    """Split an even ``total`` into ``parts`` random even sizes."""
    sizes = [0] * parts
    for _ in range(total // 2):
        sizes[rng.randrange(parts)] += 2
    return sizes


def _random_glyphs(count: int, rng: random.Random, kinds: Sequence[BracketKind]) -> List[str]:
    glyphs = [opening_glyph(k) for k in kinds] + [closing_glyph(k) for k in kinds]
    return [rng.choice(glyphs) for _ in range(count)]


def generate_balanced_brackets(
    length: int,
    rng: random.Random | None = None,
    kinds: Sequence[BracketKind] = ALL_KINDS,
) -> list[str]:
    """Generate a random balanced bracket sequence of given length.

    Parameters
    ----------
    length:
        Total number of brackets. Must be even and >= 2.
    rng:
        Optional random generator for reproducibility.
    kinds:
        Bracket kinds to draw from.

    Returns
    -------
    list[str]
        A balanced bracket sequence.

    Raises
    ------
    ValueError
        If length is odd or < 2, or ``kinds`` is empty.
    """
    if length < 2 or length % 2 != 0:
        raise ValueError(f"Length must be even and >= 2, got {length}")
    kinds = _check_kinds(kinds)
    if rng is None:
        rng = random.Random()
    return _balanced(length // 2, rng, kinds)


def feasible_unbalanced_modes(length: int, kinds: Sequence[BracketKind] = ALL_KINDS) -> list[str]:
    """Return the unbalanced modes that can produce a sequence of ``length``."""
    modes: list[str] = []
    if length >= 1:
        modes.extend(["stray", "unterminated"])
    distinct = len(set(kinds))
    if length >= 2 and distinct >= 2:
        modes.append("mismatch")
    if length >= 4 and distinct >= 2:
        modes.append("crossed")
    return [m for m in UNBALANCED_MODES if m in modes]


def generate_unbalanced_brackets(
    length: int,
    rng: random.Random | None = None,
    kinds: Sequence[BracketKind] = ALL_KINDS,
    mode: str | None = None,
) -> list[str]:
    """Generate a random unbalanced bracket sequence of given length.

    Parameters
    ----------
    length:
        Total number of brackets. Must be >= 1.
    rng:
        Optional random generator for reproducibility.
    kinds:
        Bracket kinds to draw from.
    mode:
        How the sequence is broken: ``"stray"`` (closer without opener),
        ``"mismatch"`` (closer of the wrong kind), ``"unterminated"``
        (opener never closed) or ``"crossed"`` (``([)]`` style). ``None``
        picks a feasible mode at random.

    Returns
    -------
    list[str]
        An unbalanced bracket sequence.
    """
    if length < 1:
        raise ValueError(f"Length must be >= 1, got {length}")
    kinds = _check_kinds(kinds)
    if rng is None:
        rng = random.Random()

    feasible = feasible_unbalanced_modes(length, kinds)
    if mode is None:
        mode = rng.choice(feasible)
    elif mode not in UNBALANCED_MODES:
        raise ValueError(f"Unknown mode '{mode}'; available: {list(UNBALANCED_MODES)}")
    elif mode not in feasible:
        raise ValueError(f"Mode '{mode}' cannot produce length {length} with kinds {[k.value for k in kinds]}")

    if mode == "unterminated":
        # B0 o1 B1 o2 ... with balanced blocks Bi leaves the openers unclosed
        unclosed = 1 if length % 2 else 2
        blocks = _split_even(length - unclosed, unclosed + 1, rng)
        result = _balanced(blocks[0] // 2, rng, kinds)
        for size in blocks[1:]:
            result.append(opening_glyph(rng.choice(kinds)))
            result.extend(_balanced(size // 2, rng, kinds))
        return result

    # The remaining modes break at a single point after a balanced prefix;
    # whatever follows the break does not change the verdict.
    if mode == "stray":
        core_len = 1
    elif mode == "mismatch":
        core_len = 2
    else:
        core_len = 4
    prefix_len = 2 * rng.randint(0, (length - core_len) // 2)
    result = _balanced(prefix_len // 2, rng, kinds)

    if mode == "stray":
        result.append(closing_glyph(rng.choice(kinds)))
    elif mode == "mismatch":
        first, second = rng.sample(kinds, 2)
        result.extend([opening_glyph(first), closing_glyph(second)])
    else:
        outer, inner = rng.sample(kinds, 2)
        result.extend(
            [opening_glyph(outer), opening_glyph(inner), closing_glyph(outer), closing_glyph(inner)]
        )

    result.extend(_random_glyphs(length - len(result), rng, kinds))
    return result


def depth_profile(symbols: Sequence[str]) -> np.ndarray:
    """Nesting depth after each character (kinds ignored, may go negative)."""
    steps = np.fromiter(
        (1 if ch in OPEN_TO_KIND else -1 if ch in CLOSE_TO_KIND else 0 for ch in symbols),
        dtype=np.int64,
        count=len(symbols),
    )
    return np.cumsum(steps)


def max_depth(symbols: Sequence[str]) -> int:
    """Deepest nesting reached, 0 for an empty or bracket-free sequence."""
    profile = depth_profile(symbols)
    if profile.size == 0:
        return 0
    return max(0, int(profile.max()))


__all__ = [
    "UNBALANCED_MODES",
    "generate_balanced_brackets",
    "generate_unbalanced_brackets",
    "feasible_unbalanced_modes",
    "depth_profile",
    "max_depth",
]
