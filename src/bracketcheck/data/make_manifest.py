"""Manifest generator for labelled bracket sequences."""

from __future__ import annotations

import argparse
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from .manifest import ManifestEntry, write_manifest
from ..config import non_negative_int, parse_args_with_config
from ..generate import (
    feasible_unbalanced_modes,
    generate_balanced_brackets,
    generate_unbalanced_brackets,
    max_depth,
)
from ..matcher import target_symbol
from ..symbols import ALL_KINDS, BracketKind, parse_kinds

DEFAULT_SPLIT_SIZES: Dict[str, int] = {
    "train": 800,
    "val": 200,
    "iid_test": 200,
    "ood_length": 200,
}


@dataclass(frozen=True)
class ManifestPreset:
    """Length ranges for a difficulty preset."""

    name: str
    iid_length_range: Tuple[int, int]  # min, max length (inclusive)
    ood_length_range: Tuple[int, int]


PRESETS: Dict[str, ManifestPreset] = {
    "full": ManifestPreset(
        name="full",
        iid_length_range=(2, 16),
        ood_length_range=(18, 32),
    ),
    "easy": ManifestPreset(
        name="easy",
        iid_length_range=(2, 8),
        ood_length_range=(10, 14),
    ),
    "tiny": ManifestPreset(
        name="tiny",
        iid_length_range=(2, 6),
        ood_length_range=(8, 10),
    ),
}


def _generate_sample(
    rng: random.Random,
    length: int,
    is_valid: bool,
    kinds: Sequence[BracketKind],
) -> Tuple[List[str], str | None]:
    """Generate a sequence of given length and validity, plus its break mode."""
    if is_valid:
        # Balanced requires even length >= 2
        if length < 2:
            length = 2
        if length % 2 != 0:
            length += 1
        return generate_balanced_brackets(length, rng, kinds), None
    mode = rng.choice(feasible_unbalanced_modes(length, kinds))
    return generate_unbalanced_brackets(length, rng, kinds, mode=mode), mode


def build_manifest(
    seed: int,
    split_sizes: Dict[str, int] | None = None,
    preset: str = "full",
    balance_valid: bool = True,
    kinds: Sequence[BracketKind] = ALL_KINDS,
) -> List[ManifestEntry]:
    """Build manifest entries.

    Parameters
    ----------
    seed:
        Random seed for reproducibility.
    split_sizes:
        Dict mapping split names to counts. Splits whose name starts with
        ``ood`` draw lengths from the preset's OOD range.
    preset:
        One of 'full', 'easy', 'tiny'.
    balance_valid:
        If True, alternate valid and invalid samples; otherwise draw validity
        at random.
    kinds:
        Bracket kinds to draw from.

    Returns
    -------
    List[ManifestEntry]
        Generated manifest entries.
    """
    if split_sizes is None:
        split_sizes = DEFAULT_SPLIT_SIZES.copy()

    if preset not in PRESETS:
        raise ValueError(f"Unknown preset '{preset}'; available: {sorted(PRESETS.keys())}")
    config = PRESETS[preset]

    rng = random.Random(seed)
    entries: List[ManifestEntry] = []

    for split, count in split_sizes.items():
        if count <= 0:
            continue

        is_ood = split.startswith("ood")
        length_range = config.ood_length_range if is_ood else config.iid_length_range
        difficulty_tag = "ood" if is_ood else "iid"

        for idx in range(count):
            if balance_valid:
                is_valid = idx % 2 == 0
            else:
                is_valid = rng.random() < 0.5

            length = rng.randint(length_range[0], length_range[1])

            seq_seed = rng.randint(0, 2**62)
            seq_rng = random.Random(seq_seed)
            symbols, mode = _generate_sample(seq_rng, length, is_valid, kinds)

            entry = ManifestEntry(
                split=split,
                symbols=symbols,
                length=len(symbols),
                difficulty_tag=difficulty_tag,
                example_id=f"{split}-{idx:06d}",
                seed=seed,
                sequence_seed=seq_seed,
                label=target_symbol(symbols),
                max_depth=max_depth(symbols),
                mode=mode,
            )
            entries.append(entry)

    return entries


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a labelled bracket manifest")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional YAML/JSON config file. CLI args override values from this file.",
    )
    parser.add_argument("--out", type=Path, required=True, help="Output JSONL path")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument(
        "--preset",
        type=str,
        choices=sorted(PRESETS.keys()),
        default="full",
        help="Difficulty preset",
    )
    parser.add_argument(
        "--train", type=non_negative_int, default=DEFAULT_SPLIT_SIZES["train"], help="Train split size"
    )
    parser.add_argument(
        "--val", type=non_negative_int, default=DEFAULT_SPLIT_SIZES["val"], help="Val split size"
    )
    parser.add_argument(
        "--iid-test",
        type=non_negative_int,
        default=DEFAULT_SPLIT_SIZES["iid_test"],
        help="IID test split size",
    )
    parser.add_argument(
        "--ood-length",
        type=non_negative_int,
        default=DEFAULT_SPLIT_SIZES["ood_length"],
        help="OOD length test split size",
    )
    parser.add_argument(
        "--kinds",
        type=str,
        default=",".join(kind.value for kind in ALL_KINDS),
        help="Comma separated bracket kinds (round,square,triangle,curly)",
    )
    parser.add_argument(
        "--balance-valid",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Alternate valid/invalid samples instead of drawing at random",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return parse_args_with_config(_build_parser, argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)

    try:
        kinds = parse_kinds(args.kinds)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    split_sizes = {
        "train": args.train,
        "val": args.val,
        "iid_test": args.iid_test,
        "ood_length": args.ood_length,
    }

    entries = build_manifest(
        seed=args.seed,
        split_sizes=split_sizes,
        preset=args.preset,
        balance_valid=args.balance_valid,
        kinds=kinds,
    )

    write_manifest(entries, args.out)
    print(f"Wrote {len(entries)} entries to {args.out}")


if __name__ == "__main__":
    main()
