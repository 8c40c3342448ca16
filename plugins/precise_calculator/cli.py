"""Command line interface for the Precise Calculator plugin.

Without ``--expression`` this runs an interactive loop: one line is parsed,
evaluated and printed at a time, errors are reported and the loop carries
on. End of input or Ctrl-C leaves the loop.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable, TextIO

import yaml

from common.logging import get_logger

from .core import CalculatorError, CalculatorSettings, Evaluator, ParseError, RoundingMode, load_settings
from .core.settings import MAX_DISPLAY_DIGITS

PROMPT = "calq> "
CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / "config.yml"

logger = get_logger("cli")


def _load_config_settings(path: Path) -> CalculatorSettings:
    if not path.exists():
        return load_settings(None)
    with path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    plugins = raw.get("plugins", {}) or {}
    return load_settings(plugins.get("precise_calculator"))


def _report(error: CalculatorError, err: TextIO) -> None:
    if isinstance(error, ParseError):
        for issue in error.issues:
            print(f"Error: {issue}", file=err)
    else:
        print(f"Error: {error}", file=err)


def evaluate_line(evaluator: Evaluator, line: str, *, out: TextIO, err: TextIO) -> bool:
    """Evaluate one line and print the outcome. Returns ``True`` on success."""

    try:
        result = evaluator.run(line)
    except CalculatorError as exc:
        logger.debug("evaluation failed for %r: %s", line, exc)
        _report(exc, err)
        return False
    print(result.text, file=out)
    return True


def _enable_history() -> None:
    try:
        import readline  # noqa: F401  - line editing and history for input()
    except ImportError:  # pragma: no cover - not available on every platform
        logger.debug("readline unavailable; running without history")


def repl(
    evaluator: Evaluator,
    *,
    read: Callable[[str], str] = input,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> None:
    """Read, evaluate and print lines until end of input."""

    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    while True:
        try:
            line = read(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print(file=out)
            break
        if not line.strip():
            continue
        evaluate_line(evaluator, line, out=out, err=err)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="calq", description="Arbitrary-precision calculator")
    parser.add_argument("-e", "--expression", help="Evaluate a single expression and exit")
    parser.add_argument(
        "--rounding",
        choices=[mode.value for mode in RoundingMode],
        help="Rounding mode for decimal results (default from config.yml)",
    )
    parser.add_argument(
        "--display-digits",
        dest="display_digits",
        type=int,
        help=f"Significant digits shown for decimals (1-{MAX_DISPLAY_DIGITS})",
    )
    parser.add_argument("--config", type=Path, default=CONFIG_PATH, help="Path to config.yml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        get_logger(level=logging.DEBUG)

    settings = _load_config_settings(args.config)
    if args.rounding:
        settings = replace(settings, rounding=RoundingMode(args.rounding))
    if args.display_digits is not None:
        if not 1 <= args.display_digits <= MAX_DISPLAY_DIGITS:
            parser.error(f"--display-digits must be between 1 and {MAX_DISPLAY_DIGITS}")
        settings = replace(settings, display_digits=args.display_digits)
    evaluator = settings.evaluator()
    logger.debug("precision=%s rounding=%s", evaluator.precision.value, evaluator.rounding.value)

    if args.expression is not None:
        succeeded = evaluate_line(evaluator, args.expression, out=sys.stdout, err=sys.stderr)
        return 0 if succeeded else 1

    _enable_history()
    try:
        repl(evaluator)
    except OSError as exc:
        logger.error("input channel failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
