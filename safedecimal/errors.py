"""Exceptions raised by :mod:`safedecimal`."""
from __future__ import annotations


class SafeDecimalError(Exception):
    """Base class for errors raised by this package."""


class DivisionByZeroError(SafeDecimalError, ZeroDivisionError):
    """Raised when a value with a zero numerator is inverted or divided by."""

    def __init__(self, message: str = "division by zero") -> None:
        super().__init__(message)


class NegativeRootError(SafeDecimalError, ValueError):
    """Raised when an even-degree root of a negative value is requested."""

    def __init__(self, message: str = "even root of a negative value") -> None:
        super().__init__(message)


class ParseError(SafeDecimalError, ValueError):
    """Raised when a numeric literal cannot be parsed."""


__all__ = ["SafeDecimalError", "DivisionByZeroError", "NegativeRootError", "ParseError"]
