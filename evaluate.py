"""Run the bracket matcher over a manifest and score it against the labels."""

from __future__ import annotations

import argparse
import json
import sys
from collections import defaultdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import numpy as np

from bracketcheck.config import non_negative_int, parse_args_with_config
from bracketcheck.data import ManifestEntry, read_manifest
from bracketcheck.generate import max_depth
from bracketcheck.matcher import match

SPLIT_ORDER: list[str] = ["train", "val", "iid_test", "ood_length"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Score the bracket matcher against a manifest.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional YAML/JSON config file. CLI args override values from this file.",
    )
    parser.add_argument(
        "--manifest",
        type=Path,
        required=True,
        help="Manifest JSONL with labelled bracket sequences.",
    )
    parser.add_argument(
        "--split",
        type=str,
        default=None,
        help="Optional split filter.",
    )
    parser.add_argument(
        "--limit",
        type=non_negative_int,
        default=None,
        help="Optional limit on number of samples evaluated per split.",
    )
    parser.add_argument(
        "--outdir",
        type=Path,
        default=None,
        help="Directory for predictions.jsonl and metrics.json (default: runs/eval_<timestamp>).",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return parse_args_with_config(_build_parser, argv)


def resolve_outdir(base: Path | None) -> Path:
    if base is not None:
        return base
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return Path("runs") / f"eval_{timestamp}"


def _ordered_splits(splits: Sequence[str]) -> List[str]:
    ordered = [s for s in SPLIT_ORDER if s in splits]
    ordered.extend(sorted(set(splits) - set(ordered)))
    return ordered


def evaluate_entries(
    entries: Sequence[ManifestEntry],
    limit: int | None = None,
) -> Tuple[List[dict], dict]:
    """Match every entry and compare the verdict with its label.

    Returns the per-entry prediction records and a metrics dict with
    per-split and overall accuracy plus depth statistics.
    """
    split_map: Dict[str, List[ManifestEntry]] = defaultdict(list)
    for entry in entries:
        split_map[entry.split].append(entry)

    predictions: List[dict] = []
    per_split: Dict[str, dict] = {}
    all_correct: List[bool] = []
    all_depths: List[int] = []

    for split_name in _ordered_splits(list(split_map)):
        items = split_map[split_name]
        if limit is not None:
            items = items[:limit]
        correct = np.zeros(len(items), dtype=bool)
        depths = np.zeros(len(items), dtype=np.int64)
        for idx, entry in enumerate(items):
            pred = match(entry.symbols).symbol
            correct[idx] = pred == entry.label
            depths[idx] = entry.max_depth if entry.max_depth is not None else max_depth(entry.symbols)
            predictions.append(
                {
                    "example_id": entry.example_id,
                    "split": entry.split,
                    "text": entry.text,
                    "gold_label": entry.label,
                    "pred_label": pred,
                    "correct": bool(correct[idx]),
                }
            )
        per_split[split_name] = {
            "count": int(correct.size),
            "accuracy": float(correct.mean()) if correct.size else 0.0,
            "mean_depth": float(depths.mean()) if depths.size else 0.0,
            "max_depth": int(depths.max()) if depths.size else 0,
        }
        all_correct.extend(correct.tolist())
        all_depths.extend(depths.tolist())

    overall = np.asarray(all_correct, dtype=bool)
    metrics = {
        "count": int(overall.size),
        "accuracy": float(overall.mean()) if overall.size else 0.0,
        "max_depth": int(max(all_depths)) if all_depths else 0,
        "per_split": per_split,
    }
    return predictions, metrics


def summarise(metrics: dict) -> None:
    for split, stats in metrics["per_split"].items():
        print(f"[{split}] Accuracy: {stats['accuracy']:.4f} ({stats['count']} samples)")
    if metrics["count"]:
        print(f"[overall] Accuracy: {metrics['accuracy']:.4f} ({metrics['count']} samples)")


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    if not args.manifest.exists():
        raise SystemExit(f"Manifest not found: {args.manifest}")

    entries = read_manifest(args.manifest, split=args.split)
    if not entries:
        target = args.split if args.split else "any split"
        raise SystemExit(f"No entries found for {target} in {args.manifest}")

    predictions, metrics = evaluate_entries(entries, limit=args.limit)
    metrics.update(
        {
            "manifest": str(args.manifest),
            "eval_split": args.split,
            "limit": args.limit,
            "config_file": str(args.config) if args.config else None,
            "cli_argv": list(sys.argv if argv is None else argv),
        }
    )

    outdir = resolve_outdir(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    preds_path = outdir / "predictions.jsonl"
    with preds_path.open("w", encoding="utf-8") as f:
        for record in predictions:
            f.write(json.dumps(record, ensure_ascii=False))
            f.write("\n")

    metrics_path = outdir / "metrics.json"
    with metrics_path.open("w", encoding="utf-8") as f:
        json.dump(metrics, f, ensure_ascii=False, indent=2)

    summarise(metrics)
    print(f"Wrote predictions to {preds_path}")
    print(f"Wrote metrics to {metrics_path}")


if __name__ == "__main__":
    main()
