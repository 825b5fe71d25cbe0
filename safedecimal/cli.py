"""Evaluate and print exact decimal expressions from the command line."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional

from .config import load_format_options
from .errors import SafeDecimalError
from .format import DEFAULT_OPTIONS, FormatOptions, Rounding, resolve_options
from .safe_decimal import SafeDecimal

OPERATIONS = {
    "+": SafeDecimal.add,
    "-": SafeDecimal.sub,
    "*": SafeDecimal.mul,
    "/": SafeDecimal.div,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="safedecimal",
        description="Evaluate LEFT [OP RIGHT] exactly and print the result.",
        epilog="Put '--' before operands that start with '-' and are not plain decimals.",
    )
    parser.add_argument("left", help="Numeric literal, e.g. 0.1, -3, 0x1f.8 or 0b0.01")
    parser.add_argument("op", nargs="?", choices=sorted(OPERATIONS), help="Operation to apply")
    parser.add_argument("right", nargs="?", help="Right-hand literal")
    parser.add_argument("--radix", type=int, choices=[2, 8, 10, 16], help="Output radix")
    parser.add_argument(
        "--rounding",
        choices=[mode.value for mode in Rounding],
        help="Rounding mode applied when digits are cut off",
    )
    parser.add_argument("--max-decimals", dest="max_decimals", type=int, help="Maximum fractional digits")
    parser.add_argument("--fixed", type=int, metavar="N", help="Print exactly N fractional digits")
    parser.add_argument("--fraction", action="store_true", help="Print the stored numerator/denominator pair")
    parser.add_argument("--config", help="TOML file with a [format] table of defaults")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log precision diagnostics")
    return parser


def evaluate(left: str, op: Optional[str] = None, right: Optional[str] = None) -> SafeDecimal:
    value = SafeDecimal.from_text(left)
    if op is None:
        return value
    if right is None:
        raise ValueError(f"Operation {op!r} needs a right-hand operand")
    return OPERATIONS[op](value, SafeDecimal.from_text(right))


def resolve_cli_options(args: argparse.Namespace) -> FormatOptions:
    options = load_format_options(args.config) if args.config else DEFAULT_OPTIONS
    overrides: Dict[str, object] = {}
    for key in ("radix", "rounding", "max_decimals"):
        value = getattr(args, key)
        if value is not None:
            overrides[key] = value
    return resolve_options(options, **overrides)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = resolve_cli_options(args)
        result = evaluate(args.left, args.op, args.right)
        if args.fraction:
            output = result.to_fraction_string()
        elif args.fixed is not None:
            output = result.to_fixed(args.fixed, options)
        else:
            output = result.to_string(options)
    except (SafeDecimalError, ValueError, OverflowError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(output)
    return 0


__all__ = ["OPERATIONS", "build_parser", "evaluate", "main"]
