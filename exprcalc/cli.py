"""Command line interface for exprcalc."""

from __future__ import annotations

import argparse
import math
import sys
from pathlib import Path
from typing import TextIO

from .calculator import CalcOptions, calculate
from .core.config import Settings, get_settings
from .core.errors import CalcError
from .core.logging import close_history_logger, get_context_logger, get_history_logger, setup_logging
from .diagnostics import render_diagnostic
from .math.value import Float, Integer, Value


class InputTooLargeError(Exception):
    """Raised when STDIN holds more than the configured number of characters."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"input exceeds {limit} characters")


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {text}")
    return value


def _build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=settings.APP_NAME,
        description="Evaluate an arithmetic expression.",
    )
    parser.add_argument(
        "expression",
        nargs="?",
        help="Expression to evaluate (read from STDIN when omitted).",
    )
    parser.add_argument(
        "--tokens",
        dest="show_tokens",
        action="store_true",
        help="Print the token sequence to stderr.",
    )
    parser.add_argument(
        "--ast",
        dest="show_ast",
        action="store_true",
        help="Print the syntax tree to stderr.",
    )
    parser.add_argument(
        "--log",
        type=Path,
        default=None,
        help="Append each calculation to this file as a JSON line.",
    )
    parser.add_argument(
        "--max-depth",
        type=_positive_int,
        default=settings.MAX_NESTING_DEPTH,
        help=f"Maximum expression nesting (default: {settings.MAX_NESTING_DEPTH}).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {settings.APP_VERSION}",
    )
    return parser


def read_expression(stream: TextIO, limit: int) -> str:
    """Read at most ``limit`` characters; a longer input is rejected."""
    data = stream.read(limit + 1)
    if len(data) > limit:
        raise InputTooLargeError(limit)
    return data.rstrip("\r\n")


def format_result(value: Value) -> str:
    """Plain digits for integers, shortest round-trip repr for floats."""
    if isinstance(value, Integer):
        return str(value.value)
    return repr(value.value)


def history_result(value: Value) -> int | float | str:
    """JSON-safe result: inf and nan are written as strings."""
    if isinstance(value, Float) and not math.isfinite(value.value):
        return format_result(value)
    return value.value


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = _build_parser(settings)
    args = parser.parse_args(argv)

    setup_logging(settings)

    if args.expression is not None:
        expression = args.expression
    elif sys.stdin is None or sys.stdin.isatty():
        parser.print_usage(sys.stderr)
        print("Error: no expression given", file=sys.stderr)
        return 2
    else:
        try:
            expression = read_expression(sys.stdin, settings.MAX_INPUT_SIZE)
        except InputTooLargeError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 2

    history_path = args.log or settings.HISTORY_FILE
    try:
        history = get_history_logger(history_path) if history_path else None
    except OSError as exc:
        print(f"Error: cannot open log file {history_path}: {exc.strerror or exc}", file=sys.stderr)
        return 2

    options = CalcOptions(
        show_tokens=args.show_tokens,
        show_ast=args.show_ast,
        max_depth=args.max_depth,
    )
    log = get_context_logger(__name__, expression=expression)

    try:
        try:
            result = calculate(expression, options, out=sys.stderr)
        except CalcError as exc:
            log.info(
                "Calculation failed: %s",
                exc.kind.value,
                extra_data={"kind": exc.kind.value, "start": exc.start, "end": exc.end},
            )
            if history:
                history.info(
                    "calculation failed",
                    extra={"extra_data": {"expression": expression, "error": exc.message, "kind": exc.kind.value}},
                )
            print(render_diagnostic(expression, exc), file=sys.stderr)
            return 1

        log.debug("Calculation succeeded", extra_data={"type": result.type_name})
        if history:
            history.info(
                "calculation",
                extra={
                    "extra_data": {
                        "expression": expression,
                        "result": history_result(result),
                        "type": result.type_name,
                    }
                },
            )
    finally:
        if history:
            close_history_logger()

    print(format_result(result))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
