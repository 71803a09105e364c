"""Command line interface for the typing mascot settings."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .paths import DEFAULT_APP_ID, AppConfigDirResolver, FixedDirResolver
from .log_utils import setup_logging
from .settings import Settings, SettingsError, SettingsStore, dumps_settings, loads_settings


def _parse_assignment(text: str) -> Dict[str, Any]:
    """Turn ``windowPosition.x=150`` into ``{"windowPosition": {"x": 150}}``."""
    key, sep, raw = text.partition("=")
    key = key.strip()
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {text!r}")
    try:
        value: Any = json.loads(raw)
    except ValueError:
        value = raw

    patch: Dict[str, Any] = {}
    node = patch
    parts = key.split(".")
    for part in parts[:-1]:
        node = node.setdefault(part, {})
    node[parts[-1]] = value
    return patch


def _merge_patches(patches: List[Dict[str, Any]]) -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    for patch in patches:
        for key, value in patch.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key].update(value)
            else:
                merged[key] = value
    return merged


def _warn_ranges(settings: Settings) -> None:
    for note in settings.range_warnings():
        print(f"[warn] {note}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="typing-mascot-settings",
        description="Inspect and edit the typing mascot display settings.",
    )
    ap.add_argument("--config-dir", type=str, default=None,
                    help="Use this directory instead of the per-user config directory")
    ap.add_argument("--app-id", type=str, default=DEFAULT_APP_ID,
                    help="Application identifier used to locate the config directory")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log store activity to stderr")

    sub = ap.add_subparsers(dest="command", required=True)
    sub.add_parser("path", help="Print the settings file path")
    sub.add_parser("show", help="Print the current settings as JSON")

    p_save = sub.add_parser("save", help="Replace the settings with a JSON document")
    p_save.add_argument("file", help="Path to a settings JSON file, or '-' for stdin")

    p_set = sub.add_parser("set", help="Change individual fields (dotted camelCase keys)")
    p_set.add_argument("assignments", nargs="+", type=_parse_assignment, metavar="KEY=VALUE")

    sub.add_parser("reset", help="Delete the settings file and print the defaults")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else logging.ERROR, stream=sys.stderr)

    if args.config_dir:
        store = SettingsStore(resolver=FixedDirResolver(Path(args.config_dir)))
    else:
        store = SettingsStore(resolver=AppConfigDirResolver(app_id=args.app_id))

    try:
        if args.command == "path":
            print(store.path())
        elif args.command == "show":
            print(dumps_settings(store.get()))
        elif args.command == "save":
            if args.file == "-":
                text = sys.stdin.read()
            else:
                try:
                    text = Path(args.file).read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as exc:
                    print(f"Cannot read {args.file}: {exc}", file=sys.stderr)
                    return 1
            settings = loads_settings(text)
            store.save(settings)
            _warn_ranges(settings)
        elif args.command == "set":
            settings = store.update(_merge_patches(args.assignments))
            _warn_ranges(settings)
            print(dumps_settings(settings))
        elif args.command == "reset":
            print(dumps_settings(store.reset()))
    except SettingsError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
