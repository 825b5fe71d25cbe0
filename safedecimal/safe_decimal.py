"""Object interface over the exact decimal core with NumPy interoperability."""
from __future__ import annotations

import math
import numbers
import operator
from fractions import Fraction
from typing import Any, Optional, Union

import numpy as np

from . import ops
from .errors import DivisionByZeroError
from .exact import from_safe_fraction
from .format import FormatOptions, pad_fixed, to_decimal_string, to_fixed, to_fraction_string
from .parsing import from_number, from_string
from .simplify import simplify_factors
from .value import SafeFraction

DecimalLike = Union["SafeDecimal", SafeFraction, Fraction, str, numbers.Real]


def _ensure_float(value: Any, *, name: str) -> float:
    """Convert *value* to a finite ``float``."""
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        result = float(value)
        if math.isfinite(result):
            return result
        raise ValueError(f"{name} must be finite, got {value!r}")
    raise TypeError(f"{name} must be a real number, got {type(value)!r}")


class SafeDecimal:
    """Exact decimal value stored as a pair of doubles ``numerator / denominator``.

    The constructor takes the raw components; use :meth:`from_text`,
    :meth:`from_float` or :func:`safe_decimal` to build values from literals
    and native numbers.
    """

    __slots__ = ("_numerator", "_denominator")
    __array_priority__ = 1000.0  # Prefer SafeDecimal semantics in NumPy expressions.

    def __init__(self, numerator: float = 0.0, denominator: float = 1.0) -> None:
        num = _ensure_float(numerator, name="numerator")
        den = _ensure_float(denominator, name="denominator")
        if den == 0:
            raise DivisionByZeroError("denominator must be non-zero")
        if den < 0:
            num, den = -num, -den

        self._numerator = num
        self._denominator = den

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def from_parts(cls, numerator: float, denominator: float = 1.0) -> "SafeDecimal":
        """Create a value from its components, normalizing their magnitude."""
        value = cls(numerator, denominator)
        return cls(*simplify_factors(value._numerator, value._denominator))

    @classmethod
    def from_text(cls, text: str) -> "SafeDecimal":
        """Parse a literal such as ``"-12.5"``, ``"0x1f.8"`` or ``"0b0.01"``."""
        return cls._wrap(from_string(text))

    @classmethod
    def from_float(cls, value: float) -> "SafeDecimal":
        """Return the decimal *value* was most likely written as (``0.1`` is one tenth)."""
        return cls._wrap(from_number(value))

    @classmethod
    def from_fraction(cls, value: Union[Fraction, SafeFraction]) -> "SafeDecimal":
        """Create a value from a :class:`SafeFraction` or :class:`fractions.Fraction`."""
        if isinstance(value, SafeFraction):
            return cls(value.n, value.d)
        if isinstance(value, Fraction):
            try:
                return cls.from_parts(float(value.numerator), float(value.denominator))
            except OverflowError:
                return cls.from_float(float(value))
        raise TypeError(f"Cannot interpret {type(value)!r} as a fraction")

    @classmethod
    def coerce(cls, value: DecimalLike) -> "SafeDecimal":
        """Coerce a numeric-like value into :class:`SafeDecimal`."""
        if isinstance(value, SafeDecimal):
            return value
        if isinstance(value, (SafeFraction, Fraction)):
            return cls.from_fraction(value)
        if isinstance(value, str):
            return cls.from_text(value)
        if isinstance(value, np.generic):  # NumPy scalars
            return cls.coerce(value.item())
        if isinstance(value, numbers.Real):
            return cls.from_float(value)
        raise TypeError(f"Cannot convert {type(value)!r} to SafeDecimal")

    @classmethod
    def _wrap(cls, value: SafeFraction) -> "SafeDecimal":
        return cls(value.n, value.d)

    # ------------------------------------------------------------------
    # Properties and helpers
    @property
    def numerator(self) -> float:
        return self._numerator

    @property
    def denominator(self) -> float:
        return self._denominator

    def as_fraction(self) -> SafeFraction:
        """Return the underlying :class:`SafeFraction`."""
        return SafeFraction(self._numerator, self._denominator)

    def to_fraction(self) -> Fraction:
        """Return the exact value of the stored pair as a :class:`fractions.Fraction`."""
        return from_safe_fraction(self.as_fraction())

    # ------------------------------------------------------------------
    # Arithmetic
    def add(self, rhs: DecimalLike) -> "SafeDecimal":
        return self._wrap(ops.add(self.as_fraction(), self.coerce(rhs).as_fraction()))

    def sub(self, rhs: DecimalLike) -> "SafeDecimal":
        return self._wrap(ops.sub(self.as_fraction(), self.coerce(rhs).as_fraction()))

    def mul(self, rhs: DecimalLike) -> "SafeDecimal":
        return self._wrap(ops.mul(self.as_fraction(), self.coerce(rhs).as_fraction()))

    def div(self, rhs: DecimalLike) -> "SafeDecimal":
        return self._wrap(ops.div(self.as_fraction(), self.coerce(rhs).as_fraction()))

    def inv(self) -> "SafeDecimal":
        return self._wrap(ops.inv(self.as_fraction()))

    def neg(self) -> "SafeDecimal":
        return self._wrap(ops.neg(self.as_fraction()))

    def abs(self) -> "SafeDecimal":
        return self._wrap(ops.absolute(self.as_fraction()))

    def power(self, exponent: int) -> "SafeDecimal":
        return self._wrap(ops.power(self.as_fraction(), self._coerce_power(exponent)))

    def cmp(self, rhs: DecimalLike) -> int:
        return ops.cmp(self.as_fraction(), self.coerce(rhs).as_fraction())

    def eq(self, rhs: DecimalLike) -> bool:
        return self.cmp(rhs) == 0

    # ------------------------------------------------------------------
    # Rendering
    def to_string(self, options: Optional[FormatOptions] = None, **overrides: Any) -> str:
        """Render the value; see :class:`~safedecimal.format.FormatOptions`."""
        return to_decimal_string(self.as_fraction(), options, **overrides)

    def to_fixed(self, decimals: int, options: Optional[FormatOptions] = None, **overrides: Any) -> str:
        return to_fixed(self.as_fraction(), decimals, options, **overrides)

    def to_fraction_string(self) -> str:
        return to_fraction_string(self.as_fraction())

    def to_number(self) -> float:
        return self._numerator / self._denominator

    # ------------------------------------------------------------------
    # Numeric protocol
    def __float__(self) -> float:
        return self.to_number()

    def __int__(self) -> int:
        return int(self.to_fraction())

    def __bool__(self) -> bool:
        return self._numerator != 0

    # ------------------------------------------------------------------
    # Representation
    def __repr__(self) -> str:
        return f"SafeDecimal({self._numerator!r}, {self._denominator!r})"

    def __str__(self) -> str:
        return self.to_string()

    def __format__(self, format_spec: str) -> str:
        if format_spec in ("", "s"):
            return str(self)
        if format_spec in ("r", "R"):
            return self.to_fraction_string()
        if format_spec.startswith(".") and format_spec.endswith("f") and format_spec[1:-1].isdigit():
            decimals = int(format_spec[1:-1])
            return pad_fixed(self.to_string(max_decimals=decimals), decimals)
        return format(float(self), format_spec)

    # ------------------------------------------------------------------
    # Internal helpers
    def _binary_operation(self, other: Any, op):
        if isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: op(self, self.coerce(x)),
                otypes=[object],
            )
            return vectorised(other)
        if isinstance(other, (list, tuple)):
            return np.array([op(self, self.coerce(x)) for x in other], dtype=object)
        return op(self, self.coerce(other))

    def _reflected_operation(self, other: Any, op):
        if isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: op(self.coerce(x), self),
                otypes=[object],
            )
            return vectorised(other)
        if isinstance(other, (list, tuple)):
            return np.array([op(self.coerce(x), self) for x in other], dtype=object)
        return op(self.coerce(other), self)

    def _coerce_power(self, value: Any) -> int:
        if isinstance(value, numbers.Integral):
            return int(value)
        if isinstance(value, SafeDecimal):
            fraction = value.to_fraction()
            if fraction.denominator != 1:
                raise ValueError("Exponent must be an integer")
            return fraction.numerator
        if isinstance(value, np.generic):
            return self._coerce_power(value.item())
        if isinstance(value, numbers.Real):
            if not float(value).is_integer():
                raise ValueError("Exponent must be an integer")
            return int(value)
        raise TypeError("Unsupported exponent type")

    # ------------------------------------------------------------------
    # Arithmetic operators
    def __add__(self, other: Any) -> Any:
        return self._binary_operation(other, SafeDecimal.add)

    def __radd__(self, other: Any) -> Any:
        return self._reflected_operation(other, SafeDecimal.add)

    def __sub__(self, other: Any) -> Any:
        return self._binary_operation(other, SafeDecimal.sub)

    def __rsub__(self, other: Any) -> Any:
        return self._reflected_operation(other, SafeDecimal.sub)

    def __mul__(self, other: Any) -> Any:
        return self._binary_operation(other, SafeDecimal.mul)

    def __rmul__(self, other: Any) -> Any:
        return self._reflected_operation(other, SafeDecimal.mul)

    def __truediv__(self, other: Any) -> Any:
        return self._binary_operation(other, SafeDecimal.div)

    def __rtruediv__(self, other: Any) -> Any:
        return self._reflected_operation(other, SafeDecimal.div)

    def __pow__(self, exponent: Any) -> Any:
        if isinstance(exponent, np.ndarray):
            vectorised = np.vectorize(lambda x: self.__pow__(x), otypes=[object])
            return vectorised(exponent)
        return self.power(exponent)

    def __neg__(self) -> "SafeDecimal":
        return self.neg()

    def __pos__(self) -> "SafeDecimal":
        return self

    def __abs__(self) -> "SafeDecimal":
        return self.abs()

    # ------------------------------------------------------------------
    # Comparisons
    def _compare(self, other: Any, op) -> bool:
        if isinstance(other, np.generic):
            other = other.item()
        if isinstance(other, float) and not math.isfinite(other):
            return op(self.to_number(), other)
        # Native numbers compare by their exact value so that equal values hash
        # equally; only arithmetic reads a float as its written decimal.
        if isinstance(other, (float, numbers.Rational)):
            return op(self.to_fraction(), Fraction(other))
        return op(self.cmp(other), 0)

    def __eq__(self, other: Any) -> bool:
        try:
            return self._compare(other, operator.eq)
        except (TypeError, ValueError):
            return False

    def __lt__(self, other: Any) -> bool:
        return self._compare(other, operator.lt)

    def __le__(self, other: Any) -> bool:
        return self._compare(other, operator.le)

    def __gt__(self, other: Any) -> bool:
        return self._compare(other, operator.gt)

    def __ge__(self, other: Any) -> bool:
        return self._compare(other, operator.ge)

    def __hash__(self) -> int:
        return hash(self.to_fraction())

    # ------------------------------------------------------------------
    # NumPy interoperability
    _UFUNC_DISPATCH = {
        np.add: operator.add,
        np.subtract: operator.sub,
        np.multiply: operator.mul,
        np.divide: operator.truediv,
        np.true_divide: operator.truediv,
        np.negative: operator.neg,
        np.positive: operator.pos,
        np.absolute: abs,
        np.power: operator.pow,
    }

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        if method != "__call__":
            return NotImplemented
        if kwargs.get("out") is not None:
            raise NotImplementedError("`out` argument is not supported for SafeDecimal ufuncs")
        op = self._UFUNC_DISPATCH.get(ufunc)
        if op is None:
            return NotImplemented

        coerced = []
        has_array = False
        for value in inputs:
            if isinstance(value, SafeDecimal):
                coerced.append(value)
            elif isinstance(value, np.ndarray):
                vectorised = np.vectorize(self.coerce, otypes=[object])
                coerced.append(vectorised(value))
                has_array = True
            else:
                coerced.append(self.coerce(value))
        if has_array:
            vectorised = np.vectorize(lambda *args: op(*args), otypes=[object])
            return vectorised(*coerced)
        return op(*coerced)


def safe_decimal(value: DecimalLike) -> SafeDecimal:
    """Public helper to convert *value* into :class:`SafeDecimal`."""

    return SafeDecimal.coerce(value)


def as_decimal_array(values: Any, *, copy: bool = True) -> np.ndarray:
    """Return a ``numpy.ndarray`` of :class:`SafeDecimal` values.

    ``values`` can be any iterable containing numeric-like entries or an existing
    NumPy array. When ``copy`` is ``False`` and ``values`` is already an object
    array of :class:`SafeDecimal`, the original array is returned.
    """

    if isinstance(values, np.ndarray):
        array = values.copy() if copy else values
        if array.dtype == object and all(isinstance(item, SafeDecimal) for item in array.flat):
            return array
        vectorised = np.vectorize(SafeDecimal.coerce, otypes=[object])
        return vectorised(array)

    if isinstance(values, (list, tuple)):
        return np.array([SafeDecimal.coerce(item) for item in values], dtype=object)

    return as_decimal_array(list(values), copy=copy)


def zeros(length: int) -> np.ndarray:
    """Return a one-dimensional array of length ``length`` filled with zeros."""

    if length < 0:
        raise ValueError("length must be non-negative")
    return as_decimal_array([SafeDecimal() for _ in range(length)])


def zeros_like(values: Any) -> np.ndarray:
    """Return a zero-filled array that matches the shape of ``values``."""

    shape = np.shape(values)
    flat = [SafeDecimal() for _ in range(int(np.prod(shape)))]
    return np.array(flat, dtype=object).reshape(shape)


__all__ = [
    "SafeDecimal",
    "safe_decimal",
    "as_decimal_array",
    "zeros",
    "zeros_like",
]
