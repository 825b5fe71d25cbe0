"""Exact decimal arithmetic on pairs of doubles."""

from .errors import DivisionByZeroError, NegativeRootError, ParseError, SafeDecimalError
from .format import (
    DEFAULT_MAX_DECIMALS,
    FormatOptions,
    Radix,
    Rounding,
    to_decimal_string,
    to_fixed,
    to_fraction_string,
    to_number,
)
from .ops import absolute, add, cmp, div, eq, inv, mul, neg, power, sub
from .parsing import from_number, from_string
from .safe_decimal import SafeDecimal, as_decimal_array, safe_decimal, zeros, zeros_like
from .value import SafeFraction

__all__ = [
    "SafeDecimal",
    "SafeFraction",
    "safe_decimal",
    "as_decimal_array",
    "zeros",
    "zeros_like",
    "FormatOptions",
    "Radix",
    "Rounding",
    "DEFAULT_MAX_DECIMALS",
    "from_string",
    "from_number",
    "to_decimal_string",
    "to_fixed",
    "to_fraction_string",
    "to_number",
    "neg",
    "absolute",
    "inv",
    "add",
    "sub",
    "mul",
    "div",
    "power",
    "cmp",
    "eq",
    "SafeDecimalError",
    "DivisionByZeroError",
    "NegativeRootError",
    "ParseError",
]
