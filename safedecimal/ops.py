"""Arithmetic on :class:`~safedecimal.value.SafeFraction` values."""
from __future__ import annotations

import math

from .errors import DivisionByZeroError
from .simplify import reduce_exponent, simplify_factors
from .value import ONE, SafeFraction


def neg(value: SafeFraction) -> SafeFraction:
    return SafeFraction(-value.n, value.d)


def absolute(value: SafeFraction) -> SafeFraction:
    return SafeFraction(math.fabs(value.n), math.fabs(value.d))


def inv(value: SafeFraction) -> SafeFraction:
    """Return ``1 / value``; zero raises :class:`DivisionByZeroError`."""
    if value.n == 0:
        raise DivisionByZeroError("cannot invert zero")
    if value.n < 0:
        return SafeFraction(-value.d, -value.n)
    return SafeFraction(value.d, value.n)


def add(value: SafeFraction, rhs: SafeFraction) -> SafeFraction:
    # a / b are the factors of each denominator missing from the other one.
    a, b = simplify_factors(value.d, rhs.d)
    return reduce_exponent(SafeFraction(value.n * b + rhs.n * a, value.d * b))


def sub(value: SafeFraction, rhs: SafeFraction) -> SafeFraction:
    return add(value, neg(rhs))


def mul(value: SafeFraction, rhs: SafeFraction) -> SafeFraction:
    """Multiply after cancelling each numerator against the other denominator."""
    value_num, rhs_den = simplify_factors(value.n, rhs.d)
    rhs_num, value_den = simplify_factors(rhs.n, value.d)
    return reduce_exponent(SafeFraction(value_num * rhs_num, value_den * rhs_den))


def div(value: SafeFraction, rhs: SafeFraction) -> SafeFraction:
    if rhs.n == 0:
        raise DivisionByZeroError()
    return mul(value, inv(rhs))


def power(value: SafeFraction, exponent: int) -> SafeFraction:
    """Raise *value* to an integer power by repeated squaring."""
    if exponent < 0:
        if value.n == 0:
            raise DivisionByZeroError("0 cannot be raised to a negative power")
        value = inv(value)
        exponent = -exponent

    result = ONE
    while exponent:
        if exponent & 1:
            result = mul(result, value)
        exponent >>= 1
        if exponent:
            value = mul(value, value)
    return result


def cmp(a: SafeFraction, b: SafeFraction) -> int:
    """Return ``-1``, ``0`` or ``1`` as *a* is less than, equal to or greater than *b*.

    Both denominators must be positive. Normalized values keep the cross
    products inside the double range.
    """
    lhs = a.n * b.d
    rhs = a.d * b.n
    return (lhs > rhs) - (lhs < rhs)


def eq(a: SafeFraction, b: SafeFraction) -> bool:
    return cmp(a, b) == 0


__all__ = ["neg", "absolute", "inv", "add", "sub", "mul", "div", "power", "cmp", "eq"]
