"""Conversion of literal text and native floats into exact fractions.

Literals look like ``[+-][0b|0o|0x]digits[.digits]``. Decimal fractions are
stored as ``(F / 2**k) / 5**k`` instead of ``F / 10**k``: dividing by a power
of two is exact in binary floating point and ``5**k`` stays an exact integer
double for ``k <= 22``. Binary, octal and hexadecimal fractions are written
straight into the mantissa of a double, which is lossless.
"""
from __future__ import annotations

import logging
import math
import numbers
from decimal import Decimal
from typing import NamedTuple, Union

from .double import MANTISSA_BITS, MIN_EXPONENT, construct_double, from_exponential_form
from .errors import ParseError
from .ops import add, inv, neg
from .value import SafeFraction, ZERO

logger = logging.getLogger(__name__)

# Largest k with 5**k exactly representable: 5**22 < 2**53 < 5**23.
MAX_DECIMAL_DIGITS = 22

DIGITS = "0123456789abcdef"

RADIX_PREFIXES = {"0b": 2, "0o": 8, "0x": 16}

_BITS_PER_DIGIT = {2: 1, 8: 3, 16: 4}


class Literal(NamedTuple):
    """A numeric literal split into its parts; digits are lowercase."""

    negative: bool
    radix: int
    integer: str
    fraction: str


def split_literal(text: str) -> Literal:
    """Split *text* into sign, radix and digit runs, validating every digit."""
    if not isinstance(text, str):
        raise TypeError(f"literal must be a string, got {type(text)!r}")
    body = text.strip().lower()
    negative = body.startswith("-")
    if body[:1] in ("-", "+"):
        body = body[1:]

    radix = RADIX_PREFIXES.get(body[:2], 10)
    if radix != 10:
        body = body[2:]

    integer, dot, fraction = body.partition(".")
    if not integer and not fraction:
        raise ParseError(f"no digits in literal {text!r}")

    allowed = DIGITS[:radix]
    for run in (integer, fraction):
        for char in run:
            if char not in allowed:
                raise ParseError(f"invalid digit {char!r} for radix {radix} in {text!r}")
    return Literal(negative, radix, integer, fraction)


def _decimal_fraction(digits: str) -> SafeFraction:
    if len(digits) > MAX_DECIMAL_DIGITS:
        logger.debug("decimal fraction trimmed to %d digits", MAX_DECIMAL_DIGITS)
        digits = digits[:MAX_DECIMAL_DIGITS]
    digits = digits.rstrip("0")
    if not digits:
        return ZERO

    places = len(digits)
    return SafeFraction(float(int(digits)) / 2.0 ** places, 5.0 ** places)


def _binary_fraction(digits: str, radix: int) -> SafeFraction:
    width = _BITS_PER_DIGIT[radix]
    bits = "".join(format(DIGITS.index(char), f"0{width}b") for char in digits)

    first_one = bits.find("1")
    if first_one < 0:
        return ZERO

    exponent = -(first_one + 1)
    if exponent < MIN_EXPONENT:
        chunk = bits[first_one:first_one + MANTISSA_BITS + 1]
        value = from_exponential_form(0, int(chunk, 2), exponent - len(chunk) + 1)
        return SafeFraction(value, 1.0)

    mantissa = bits[first_one + 1:first_one + 1 + MANTISSA_BITS].ljust(MANTISSA_BITS, "0")
    return SafeFraction(construct_double(0, exponent, int(mantissa, 2)), 1.0)


def from_literal(literal: Literal) -> SafeFraction:
    """Build the fraction described by an already split *literal*."""
    try:
        integer = float(int(literal.integer or "0", literal.radix))
    except OverflowError as exc:
        raise ParseError("integer part is outside the double range") from exc

    if literal.radix == 10:
        fraction = _decimal_fraction(literal.fraction)
    else:
        fraction = _binary_fraction(literal.fraction, literal.radix)

    parsed = add(SafeFraction(integer, 1.0), fraction)
    return neg(parsed) if literal.negative else parsed


def from_string(text: str) -> SafeFraction:
    """Parse a signed, optionally radix-prefixed literal into a fraction."""
    return from_literal(split_literal(text))


def _split_float(value: float) -> Literal:
    # repr() yields the shortest digits that round-trip to the same double.
    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = "".join(str(digit) for digit in digit_tuple)
    point = len(digits) + exponent

    if point <= 0:
        integer, fraction = "0", "0" * -point + digits
    elif point >= len(digits):
        integer, fraction = digits + "0" * (point - len(digits)), ""
    else:
        integer, fraction = digits[:point], digits[point:]
    return Literal(bool(sign), 10, integer, fraction.rstrip("0"))


def _resolve(literal: Literal) -> SafeFraction:
    if not literal.fraction:
        return from_literal(literal)

    # Simple repeating decimals (1/3, 1/7, ...) have a reciprocal with fewer
    # fractional digits. Each accepted step strictly shortens the fraction.
    inverse = 1.0 / float("0." + literal.fraction)
    if not math.isfinite(inverse):
        logger.debug("reciprocal of 0.%s overflows, using the digits as written", literal.fraction)
        return from_literal(literal)
    reciprocal = _split_float(inverse)
    if len(reciprocal.fraction) >= len(literal.fraction):
        logger.debug("using the decimal digits of 0.%s as written", literal.fraction)
        return from_literal(literal)

    whole = from_literal(literal._replace(negative=False, fraction=""))
    parsed = add(whole, inv(_resolve(reciprocal)))
    return neg(parsed) if literal.negative else parsed


def from_number(value: Union[float, numbers.Real]) -> SafeFraction:
    """Return the decimal fraction that *value* was most likely written as.

    ``from_number(0.1)`` is exactly one tenth, not the binary approximation
    the double actually stores.
    """
    if isinstance(value, numbers.Integral):
        return from_string(str(int(value)))
    if not isinstance(value, numbers.Real):
        raise TypeError(f"Cannot interpret {type(value)!r} as a number")
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        raise ValueError("cannot convert NaN or infinity to SafeFraction")
    return _resolve(_split_float(value))


__all__ = [
    "MAX_DECIMAL_DIGITS",
    "Literal",
    "split_literal",
    "from_literal",
    "from_string",
    "from_number",
]
