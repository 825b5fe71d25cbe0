"""Rendering fractions as positional text in base 2, 8, 10 or 16."""
from __future__ import annotations

import enum
import math
import numbers
from dataclasses import dataclass, replace
from typing import Any, List, Optional, Union

from .value import SafeFraction

DIGITS = "0123456789abcdef"

DEFAULT_MAX_DECIMALS = 20


class Rounding(enum.Enum):
    """How a truncated expansion is resolved into its last kept digit."""

    UP = "up"  # away from zero
    DOWN = "down"  # towards zero
    CEIL = "ceil"  # towards +infinity
    FLOOR = "floor"  # towards -infinity
    EVEN = "even"
    HALF_UP = "half-up"
    HALF_DOWN = "half-down"
    HALF_CEIL = "half-ceil"
    HALF_FLOOR = "half-floor"
    HALF_EVEN = "half-even"


# Tie-break policy of every round-to-nearest mode.
_TIE_BREAKS = {
    Rounding.HALF_UP: Rounding.UP,
    Rounding.HALF_DOWN: Rounding.DOWN,
    Rounding.HALF_CEIL: Rounding.CEIL,
    Rounding.HALF_FLOOR: Rounding.FLOOR,
    Rounding.HALF_EVEN: Rounding.EVEN,
}


class Radix(enum.IntEnum):
    BINARY = 2
    OCTAL = 8
    DECIMAL = 10
    HEXADECIMAL = 16


@dataclass(frozen=True)
class FormatOptions:
    """Radix, rounding policy and digit limit of a rendering call."""

    radix: Radix = Radix.DECIMAL
    rounding: Rounding = Rounding.HALF_CEIL
    max_decimals: int = DEFAULT_MAX_DECIMALS

    def __post_init__(self) -> None:
        try:
            radix = Radix(self.radix)
        except ValueError:
            raise ValueError(f"radix must be one of 2, 8, 10 or 16, got {self.radix!r}") from None
        try:
            rounding = Rounding(self.rounding)
        except ValueError:
            raise ValueError(f"unknown rounding mode {self.rounding!r}") from None
        if isinstance(self.max_decimals, bool) or not isinstance(self.max_decimals, numbers.Integral):
            raise TypeError(f"max_decimals must be an integer, got {type(self.max_decimals)!r}")
        if self.max_decimals < 0:
            raise ValueError("max_decimals must be >= 0")
        object.__setattr__(self, "radix", radix)
        object.__setattr__(self, "rounding", rounding)
        object.__setattr__(self, "max_decimals", int(self.max_decimals))


DEFAULT_OPTIONS = FormatOptions()


def resolve_options(options: Optional[FormatOptions] = None, **overrides: Any) -> FormatOptions:
    """Return *options* (or the defaults) with keyword *overrides* applied."""
    base = DEFAULT_OPTIONS if options is None else options
    if not overrides:
        return base
    return replace(base, **overrides)


def _should_increment(rounding: Rounding, negative: bool, odd: bool, half_cmp: int) -> bool:
    if rounding in _TIE_BREAKS:
        if half_cmp < 0:
            return False
        if half_cmp > 0:
            return True
        rounding = _TIE_BREAKS[rounding]

    if rounding is Rounding.UP:
        return True
    if rounding is Rounding.DOWN:
        return False
    if rounding is Rounding.CEIL:
        return not negative
    if rounding is Rounding.FLOOR:
        return negative
    if rounding is Rounding.EVEN:
        return odd
    raise ValueError(f"unknown rounding mode {rounding!r}")


def _increment(digits: List[int], radix: int) -> bool:
    """Add one unit in the last place; return ``True`` on carry out."""
    for index in range(len(digits) - 1, -1, -1):
        if digits[index] < radix - 1:
            digits[index] += 1
            return False
        digits[index] = 0
    return True


def _format_integer(value: int, radix: int) -> str:
    if radix == 10:
        return str(value)
    return format(value, {2: "b", 8: "o", 16: "x"}[radix])


def render(
    negative: bool,
    numerator: Union[int, float],
    denominator: Union[int, float],
    options: FormatOptions,
) -> str:
    """Render ``numerator / denominator`` (both non-negative) as positional text.

    Works on ``float`` and ``int`` components alike; ``divmod`` keeps every
    remainder exact for both.
    """
    radix = int(options.radix)
    quotient, remainder = divmod(numerator, denominator)
    integer_part = int(quotient)

    digits: List[int] = []
    for _ in range(options.max_decimals):
        if remainder == 0:
            break
        digit, remainder = divmod(remainder * radix, denominator)
        digits.append(int(digit))

    if remainder != 0:
        if options.max_decimals == 0:
            odd = integer_part % 2 == 1
        else:
            odd = digits[-1] % 2 == 1
        half = 2 * remainder
        half_cmp = (half > denominator) - (half < denominator)
        if _should_increment(options.rounding, negative, odd, half_cmp):
            if _increment(digits, radix):
                integer_part += 1

    fraction = "".join(DIGITS[digit] for digit in digits).rstrip("0")
    if integer_part == 0 and not fraction:
        return "0"

    text = _format_integer(integer_part, radix)
    if fraction:
        text += "." + fraction
    return ("-" if negative else "") + text


def to_decimal_string(
    value: SafeFraction, options: Optional[FormatOptions] = None, **overrides: Any
) -> str:
    """Render *value* in ``options.radix`` with at most ``max_decimals`` digits."""
    options = resolve_options(options, **overrides)
    negative = (value.n < 0) != (value.d < 0)
    return render(negative, math.fabs(value.n), math.fabs(value.d), options)


def pad_fixed(text: str, decimals: int) -> str:
    """Zero-pad the fractional digits of *text* to exactly *decimals* digits."""
    if decimals == 0:
        return text
    integer, _, fraction = text.partition(".")
    return integer + "." + fraction.ljust(decimals, "0")


def to_fixed(
    value: SafeFraction,
    decimals: int,
    options: Optional[FormatOptions] = None,
    **overrides: Any,
) -> str:
    """Render *value* with exactly *decimals* fractional digits."""
    if "max_decimals" in overrides:
        raise TypeError("to_fixed() takes its digit count as 'decimals', not 'max_decimals'")
    options = resolve_options(options, max_decimals=decimals, **overrides)
    return pad_fixed(to_decimal_string(value, options), options.max_decimals)


def _format_component(component: float) -> str:
    if component.is_integer():
        return str(int(component))
    return repr(component)


def to_fraction_string(value: SafeFraction) -> str:
    """Return ``"n/d"`` using the stored components."""
    return f"{_format_component(value.n)}/{_format_component(value.d)}"


def to_number(value: SafeFraction) -> float:
    return value.n / value.d


__all__ = [
    "DEFAULT_MAX_DECIMALS",
    "DEFAULT_OPTIONS",
    "FormatOptions",
    "Radix",
    "Rounding",
    "render",
    "pad_fixed",
    "resolve_options",
    "to_decimal_string",
    "to_fixed",
    "to_fraction_string",
    "to_number",
]
