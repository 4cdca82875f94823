"""jsonmend CLI - repair almost-JSON from a file or stdin."""

import argparse
import logging
import sys
from typing import Optional, TextIO

from . import __version__
from .core.engine import RepairEngine
from .utils.config import PrefixPolicy, RepairConfig, RevivalSettings


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="jsonmend",
        description="Repair almost-JSON (JS/Python literals, comments, stray commas).",
    )
    p.add_argument("file", nargs="?", help="Input file (default: stdin)")

    layout = p.add_mutually_exclusive_group()
    layout.add_argument("--indent", type=int, default=2, help="Indent width (default 2)")
    layout.add_argument("--minify", action="store_true", help="Emit compact JSON")

    p.add_argument("--fixes", action="store_true", help="List applied repairs on stderr")
    p.add_argument(
        "--conservative",
        action="store_true",
        help="Skip repairs that guess at intent (bare values, missing commas, revival)",
    )
    p.add_argument(
        "--discard-prefix",
        action="store_true",
        help="Drop the label of 'label: {...}' strings instead of wrapping it",
    )
    p.add_argument("--no-revive", action="store_true", help="Leave embedded JSON strings alone")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p.add_argument("--version", action="version", version=f"jsonmend {__version__}")
    return p


def _config_from_args(args: argparse.Namespace) -> RepairConfig:
    if args.indent < 0:
        raise ValueError("--indent must not be negative")
    config = RepairConfig.conservative() if args.conservative else RepairConfig()
    assert config.revival is not None
    config.revival = RevivalSettings(
        enabled=config.revival.enabled and not args.no_revive,
        max_depth=config.revival.max_depth,
        prefix_policy=PrefixPolicy.DISCARD if args.discard_prefix else PrefixPolicy.WRAP,
    )
    config.indent = 0 if args.minify else args.indent
    return config


def _read_input(path: Optional[str], stdin: TextIO) -> str:
    if path is None or path == "-":
        return stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        text = _read_input(args.file, sys.stdin)
        config = _config_from_args(args)
    except (OSError, ValueError) as e:
        print(f"jsonmend: {e}", file=sys.stderr)
        return 2

    result = RepairEngine(config).repair(text)

    if args.fixes:
        for fix in result.fixes:
            print(f"fixed: {fix}", file=sys.stderr)

    if not result.success:
        for error in result.errors:
            print(f"error: {error}", file=sys.stderr)
        return 1

    print(result.formatted)
    return 0


if __name__ == "__main__":
    sys.exit(main())
