"""YAML/JSON config files as argparse defaults.

A config file holds flat ``key: value`` pairs named after the parser's
options (``iid-test`` and ``iid_test`` are equivalent). Each value goes
through the same ``type=`` converter as the matching command line flag, so
a bad value in a file is rejected exactly like a bad flag would be. Flags
given on the command line override the file.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Callable, Dict, Sequence

_LITERALS: Dict[str, Any] = {
    "null": None,
    "none": None,
    "~": None,
    "true": True,
    "yes": True,
    "on": True,
    "false": False,
    "no": False,
    "off": False,
}


def non_negative_int(text: str) -> int:
    """argparse ``type=`` for counts and limits."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def _parse_scalar(text: str) -> Any:
    text = text.strip()
    if text.lower() in _LITERALS:
        return _LITERALS[text.lower()]
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    # Numbers stay strings here; the option's converter decides.
    return text


def load_simple_yaml(path: Path) -> dict[str, Any]:
    """Read top-level ``key: value`` pairs; ``#`` starts a comment outside quotes."""
    data: dict[str, Any] = {}
    with path.open("r", encoding="utf-8") as f:
        for line_no, raw in enumerate(f, start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            key, sep, value = line.partition(":")
            key = key.strip()
            if not sep or not key:
                raise ValueError(f"Invalid YAML at {path}:{line_no}: expected 'key: value'")
            value = value.strip()
            if not value.startswith(("'", '"')):
                value = value.split("#", 1)[0]
            data[key] = _parse_scalar(value)
    return data


def load_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        return load_simple_yaml(path)
    if suffix != ".json":
        raise ValueError(f"Unsupported config format: {path.suffix} (expected .yaml/.yml/.json)")
    with path.open("r", encoding="utf-8") as f:
        payload = json.load(f)
    if not isinstance(payload, dict):
        raise ValueError("JSON config must be an object at top-level")
    return payload


def _convert(action: argparse.Action, value: Any) -> Any:
    if value is None:
        return None
    if isinstance(action, argparse.BooleanOptionalAction):
        if isinstance(value, str):
            value = _LITERALS.get(value.strip().lower(), value)
        if not isinstance(value, bool):
            raise ValueError(f"Config key '{action.dest}' must be boolean")
        return value
    if action.type is None:
        return value
    try:
        converted = action.type(str(value))
    except (argparse.ArgumentTypeError, ValueError) as exc:
        raise ValueError(f"Invalid value for config key '{action.dest}': {exc}") from exc
    if action.choices is not None and converted not in action.choices:
        raise ValueError(
            f"Invalid value for config key '{action.dest}': {converted!r} (choices={list(action.choices)!r})"
        )
    return converted


def apply_config_defaults(parser: argparse.ArgumentParser, config: dict[str, Any]) -> None:
    actions = {a.dest: a for a in parser._actions if a.dest != "help"}  # noqa: SLF001
    normalised = {str(k).replace("-", "_"): v for k, v in config.items()}

    unknown = sorted(k for k in normalised if k not in actions)
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}")

    defaults = {dest: _convert(actions[dest], value) for dest, value in normalised.items()}
    parser.set_defaults(**defaults)
    # A value supplied by the config file satisfies a required option.
    for dest, value in defaults.items():
        if value is not None:
            actions[dest].required = False


def parse_args_with_config(
    build_parser: Callable[[], argparse.ArgumentParser],
    argv: Sequence[str] | None = None,
) -> argparse.Namespace:
    """Parse ``argv`` with defaults taken from an optional ``--config`` file."""
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", type=Path, default=None)
    known, _ = pre.parse_known_args(argv)

    parser = build_parser()
    if known.config is not None:
        try:
            apply_config_defaults(parser, load_config_file(known.config))
        except (OSError, ValueError) as exc:
            raise SystemExit(f"Failed to load config '{known.config}': {exc}") from exc

    return parser.parse_args(argv)


__all__ = [
    "non_negative_int",
    "load_simple_yaml",
    "load_config_file",
    "apply_config_defaults",
    "parse_args_with_config",
]
