"""The value type shared by the parser, arithmetic and serializer."""
from __future__ import annotations

from typing import NamedTuple


class SafeFraction(NamedTuple):
    """The exact rational ``n / d`` stored as a pair of doubles.

    ``d`` must be non-zero. The pair is not kept in lowest terms; arithmetic
    results are normalized so both components stay near unit magnitude.
    """

    n: float
    d: float


ZERO = SafeFraction(0.0, 1.0)
ONE = SafeFraction(1.0, 1.0)


__all__ = ["SafeFraction", "ZERO", "ONE"]
