"""IEEE-754 double decomposition and reconstruction.

A double is stored as 1 sign bit, an 11-bit exponent biased by 1023 and a
52-bit mantissa whose leading ``1`` is implicit. The helpers in this module
expose those fields, and the *exponential form* ``(sign, significand,
exponent)`` where ``value == (-1) ** sign * significand * 2 ** exponent`` and
``significand`` is odd (or zero).
"""
from __future__ import annotations

import logging
import math
import struct
from typing import Tuple

logger = logging.getLogger(__name__)

EXPONENT_BIAS = 1023
MANTISSA_BITS = 52
MANTISSA_MASK = (1 << MANTISSA_BITS) - 1
EXPONENT_MASK = 0x7FF

# Unbiased exponent range of normal doubles. Zero and subnormals decompose to
# ``MIN_EXPONENT - 1``, infinities and NaN to ``MAX_EXPONENT + 1``.
MIN_EXPONENT = -1022
MAX_EXPONENT = 1023

DoubleFields = Tuple[int, int, int]


def float_to_bits(value: float) -> int:
    """Return the 64-bit pattern of *value* as an unsigned integer."""
    return struct.unpack("<Q", struct.pack("<d", value))[0]


def bits_to_float(bits: int) -> float:
    """Return the double whose 64-bit pattern is *bits*."""
    return struct.unpack("<d", struct.pack("<Q", bits))[0]


def parse_double(value: float) -> DoubleFields:
    """Split *value* into ``(sign, exponent, mantissa)``.

    The exponent is returned unbiased and the mantissa without its implicit
    leading bit, so ``0.0`` and subnormals report an exponent of ``-1023``.
    """
    bits = float_to_bits(value)
    mantissa = bits & MANTISSA_MASK
    exponent = ((bits >> MANTISSA_BITS) & EXPONENT_MASK) - EXPONENT_BIAS
    sign = bits >> 63
    return sign, exponent, mantissa


def construct_double(sign: int, exponent: int, mantissa: int) -> float:
    """Pack ``(sign, exponent, mantissa)`` back into a double.

    Exact inverse of :func:`parse_double`.
    """
    if sign not in (0, 1):
        raise ValueError(f"sign must be 0 or 1, got {sign!r}")
    biased = exponent + EXPONENT_BIAS
    if not 0 <= biased <= EXPONENT_MASK:
        raise ValueError(f"exponent {exponent} is outside the double range")
    if not 0 <= mantissa <= MANTISSA_MASK:
        raise ValueError("mantissa must fit in 52 bits")
    return bits_to_float((sign << 63) | (biased << MANTISSA_BITS) | mantissa)


def _trailing_zeros(value: int) -> int:
    return (value & -value).bit_length() - 1


def exponential_form(value: float) -> DoubleFields:
    """Return ``(sign, significand, exponent)`` with an odd ``significand``."""
    sign, exponent, mantissa = parse_double(value)
    if exponent == MIN_EXPONENT - 1:
        if mantissa == 0:
            return sign, 0, 0
        # Subnormal: no implicit bit and the exponent is pinned to the minimum.
        significand = mantissa
        exponent = MIN_EXPONENT - MANTISSA_BITS
    else:
        significand = mantissa | (1 << MANTISSA_BITS)
        exponent -= MANTISSA_BITS

    shift = _trailing_zeros(significand)
    return sign, significand >> shift, exponent + shift


def from_exponential_form(sign: int, significand: int, exponent: int) -> float:
    """Rebuild the double ``(-1) ** sign * significand * 2 ** exponent``.

    Results below the normal range degrade to the nearest subnormal; results
    above it raise :class:`OverflowError`.
    """
    if significand < 0:
        raise ValueError("significand must be non-negative")
    if significand == 0:
        return -0.0 if sign else 0.0
    if significand.bit_length() > MANTISSA_BITS + 1:
        raise ValueError("significand must fit in 53 bits")

    shift = MANTISSA_BITS + 1 - significand.bit_length()
    normalized = significand << shift
    double_exponent = exponent - shift + MANTISSA_BITS

    if double_exponent > MAX_EXPONENT:
        raise OverflowError(
            f"2**{double_exponent} is outside the double range"
        )
    if double_exponent < MIN_EXPONENT:
        logger.debug(
            "precision loss: 2**%d underflows the normal double range", double_exponent
        )
        value = math.ldexp(significand, exponent)
        return -value if sign else value

    return construct_double(sign, double_exponent, normalized & MANTISSA_MASK)


__all__ = [
    "EXPONENT_BIAS",
    "MANTISSA_BITS",
    "MIN_EXPONENT",
    "MAX_EXPONENT",
    "float_to_bits",
    "bits_to_float",
    "parse_double",
    "construct_double",
    "exponential_form",
    "from_exponential_form",
]
