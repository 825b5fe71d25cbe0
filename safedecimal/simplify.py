"""Magnitude control for numerator/denominator pairs.

Repeated products push doubles towards the ends of the exponent range. The
functions here re-factor a pair without changing its ratio: common odd
factors are divided out and powers of two are moved so that both exponents
sit as close to zero as possible.
"""
from __future__ import annotations

import logging
import math
from typing import Tuple

from .double import (
    MIN_EXPONENT,
    construct_double,
    exponential_form,
    from_exponential_form,
    parse_double,
)
from .value import SafeFraction, ZERO

logger = logging.getLogger(__name__)


def _centre(exponent_a: int, exponent_b: int) -> int:
    # Truncation towards zero keeps both shifted exponents inside the range.
    return math.trunc((exponent_a + exponent_b) / 2)


def simplify_factors(a: float, b: float) -> Tuple[float, float]:
    """Return ``(a', b')`` with ``a' / b' == a / b`` and no common odd factor.

    ``simplify_factors(0, b)`` is ``(0, 1)`` and ``simplify_factors(a, 0)`` is
    ``(1, 0)``.
    """
    if a == 0:
        return 0.0, 1.0
    if b == 0:
        return 1.0, 0.0

    a_sign, a_int, a_exp = exponential_form(a)
    b_sign, b_int, b_exp = exponential_form(b)

    divisor = math.gcd(a_int, b_int)
    a_int //= divisor
    b_int //= divisor

    change = _centre(a_exp, b_exp)
    return (
        from_exponential_form(a_sign, a_int, a_exp - change),
        from_exponential_form(b_sign, b_int, b_exp - change),
    )


def reduce_exponent(value: SafeFraction) -> SafeFraction:
    """Move the binary exponents of ``value.n`` and ``value.d`` towards zero."""
    if value.n == 0:
        return ZERO
    if not (math.isfinite(value.n) and math.isfinite(value.d)):
        raise OverflowError("result is outside the double range")

    n_sign, n_exp, n_mant = parse_double(value.n)
    d_sign, d_exp, d_mant = parse_double(value.d)

    if n_exp < MIN_EXPONENT or d_exp < MIN_EXPONENT:
        # Subnormal components have no implicit bit, so rescale by value.
        n_exp = math.frexp(value.n)[1]
        d_exp = math.frexp(value.d)[1]
        change = _centre(n_exp, d_exp)
        logger.debug("rebalancing subnormal fraction by 2**%d", -change)
        return SafeFraction(math.ldexp(value.n, -change), math.ldexp(value.d, -change))

    change = _centre(n_exp, d_exp)
    return SafeFraction(
        construct_double(n_sign, n_exp - change, n_mant),
        construct_double(d_sign, d_exp - change, d_mant),
    )


__all__ = ["simplify_factors", "reduce_exponent"]
