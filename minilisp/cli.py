#!/usr/bin/env python3
"""Command-line interface for minilisp."""

import argparse
import logging
import sys
from pathlib import Path

from minilisp.config import decode_escapes, get_settings, setup_logging
from minilisp.errors import MiniLispError
from minilisp.interpreter import Interpreter

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minilisp", description="Run a minilisp program file"
    )
    parser.add_argument("file", help="Path to the program to run")
    parser.add_argument(
        "--indent",
        help="Indent unit for tree output; \\t, \\s and similar escapes are expanded (default: two spaces)",
    )
    parser.add_argument(
        "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true",
        help="Only print evaluation results, not the tokens and parse trees",
    )
    parser.add_argument(
        "--color", action="store_true", help="Colour tree output with ANSI escapes"
    )
    return parser


def main(argv=None) -> int:
    """Main entry point for the minilisp command."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    if args.indent is not None:
        settings.indent = decode_escapes(args.indent)
    if args.log_level is not None:
        settings.log_level = args.log_level.upper()
    if args.color:
        settings.color = True
    if args.quiet:
        settings.show_tokens = False
        settings.show_tree = False

    try:
        setup_logging(settings.log_level)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        source = Path(args.file).read_text(encoding="utf-8")
    except OSError as e:
        print(f"error: cannot read {args.file}: {e.strerror or e}", file=sys.stderr)
        return 1

    logger.info("running %s", args.file)
    try:
        Interpreter(settings).run(source)
    except MiniLispError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except RecursionError:
        print("error: maximum nesting depth exceeded", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
