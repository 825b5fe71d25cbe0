"""Arbitrary-precision backend over :class:`fractions.Fraction`.

The double-based core trades digits for speed; this module keeps every digit
at the cost of unbounded integers. It shares the literal grammar and the
serializer with the core so that both engines read and print the same text.
"""
from __future__ import annotations

from fractions import Fraction
from typing import Any, Optional, Union

from .errors import DivisionByZeroError, NegativeRootError
from .format import FormatOptions, render, resolve_options
from .parsing import split_literal
from .value import SafeFraction

Exponent = Union[int, Fraction]


def from_literal(text: str) -> Fraction:
    """Parse *text* exactly, whatever the number of fractional digits."""
    literal = split_literal(text)
    value = Fraction(int(literal.integer or "0", literal.radix))
    if literal.fraction:
        scale = literal.radix ** len(literal.fraction)
        value += Fraction(int(literal.fraction, literal.radix), scale)
    return -value if literal.negative else value


def from_safe_fraction(value: SafeFraction) -> Fraction:
    """Return the exact rational held by a pair of doubles."""
    return Fraction(value.n) / Fraction(value.d)


def to_decimal_string(value: Fraction, options: Optional[FormatOptions] = None, **overrides: Any) -> str:
    options = resolve_options(options, **overrides)
    return render(value < 0, abs(value.numerator), value.denominator, options)


def approx(value: Fraction, depth: int) -> Fraction:
    """Truncate the continued fraction of *value* after *depth* terms.

    ``depth == 0`` keeps only the integer part; every extra term adds one
    level of ``a + 1 / (...)`` nesting.
    """
    sign = -1 if value < 0 else 1
    numerator, denominator = abs(value.numerator), value.denominator

    term, remainder = divmod(numerator, denominator)
    h_prev, h = 1, term
    k_prev, k = 0, 1
    for _ in range(depth):
        if remainder == 0:
            break
        numerator, denominator = denominator, remainder
        term, remainder = divmod(numerator, denominator)
        h_prev, h = h, term * h + h_prev
        k_prev, k = k, term * k + k_prev
    return sign * Fraction(h, k)


def _integer_root(value: int, degree: int) -> int:
    # Newton's method from an overestimate converges down onto the floor root.
    if value < 2 or degree == 1:
        return value
    x = 1 << -(-value.bit_length() // degree)
    while True:
        y = ((degree - 1) * x + value // x ** (degree - 1)) // degree
        if y >= x:
            return x
        x = y


def root(value: Fraction, degree: int) -> Fraction:
    """Return the *degree*-th root of numerator and denominator.

    Exact for perfect powers, a floor approximation of each component
    otherwise.
    """
    if degree < 1:
        raise ValueError("degree must be >= 1")
    value = Fraction(value)
    if value < 0:
        if degree % 2 == 0:
            raise NegativeRootError()
        return -root(-value, degree)
    return Fraction(
        _integer_root(value.numerator, degree),
        _integer_root(value.denominator, degree),
    )


def power(value: Fraction, exponent: Exponent) -> Fraction:
    """Raise *value* to a rational *exponent* ``p / q`` as ``root(value ** p, q)``."""
    value = Fraction(value)
    exponent = Fraction(exponent)
    if exponent < 0:
        if value == 0:
            raise DivisionByZeroError("0 cannot be raised to a negative power")
        value = 1 / value
        exponent = -exponent
    return root(value ** exponent.numerator, exponent.denominator)


__all__ = [
    "from_literal",
    "from_safe_fraction",
    "to_decimal_string",
    "approx",
    "root",
    "power",
]
