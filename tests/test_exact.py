import math
import unittest
from fractions import Fraction

from safedecimal import SafeDecimal
from safedecimal.errors import DivisionByZeroError, NegativeRootError
from safedecimal.exact import (
    approx,
    from_literal,
    from_safe_fraction,
    power,
    root,
    to_decimal_string,
)
from safedecimal.value import SafeFraction


class ExactParsingTests(unittest.TestCase):
    def test_literals(self):
        self.assertEqual(from_literal("0.1"), Fraction(1, 10))
        self.assertEqual(from_literal("-0x0.8"), Fraction(-1, 2))
        self.assertEqual(from_literal("0b101.1"), Fraction(11, 2))
        self.assertEqual(from_literal("0o7"), Fraction(7))

    def test_no_digit_limit(self):
        digits = "1" * 40
        self.assertEqual(from_literal("0." + digits), Fraction(int(digits), 10 ** 40))

    def test_bridge_from_double_pair(self):
        self.assertEqual(from_safe_fraction(SafeFraction(0.75, 2.5)), Fraction(3, 10))
        self.assertEqual(SafeDecimal.from_text("0.3").to_fraction(), from_literal("0.3"))


class ExactRenderingTests(unittest.TestCase):
    def test_repeating_expansion(self):
        self.assertEqual(to_decimal_string(Fraction(1, 3)), "0.33333333333333333333")
        self.assertEqual(to_decimal_string(Fraction(2, 3), max_decimals=5), "0.66667")

    def test_radix_and_rounding(self):
        self.assertEqual(to_decimal_string(Fraction(1, 16), radix=16), "0.1")
        self.assertEqual(to_decimal_string(Fraction(-1, 8), max_decimals=2, rounding="half-even"), "-0.12")

    def test_long_expansion_is_exact(self):
        text = "0." + "123456789" * 6
        self.assertEqual(to_decimal_string(from_literal(text), max_decimals=60), text)


class ApproxTests(unittest.TestCase):
    def test_depth_zero_is_integer_part(self):
        self.assertEqual(approx(Fraction(355, 113), 0), 3)

    def test_convergents(self):
        self.assertEqual(approx(Fraction(415, 93), 1), Fraction(9, 2))
        pi = Fraction(math.pi)
        self.assertEqual(approx(pi, 1), Fraction(22, 7))
        self.assertEqual(approx(pi, 3), Fraction(355, 113))

    def test_terminating_expansion(self):
        self.assertEqual(approx(Fraction(-7, 2), 5), Fraction(-7, 2))


class RootTests(unittest.TestCase):
    def test_perfect_powers(self):
        self.assertEqual(root(Fraction(4, 9), 2), Fraction(2, 3))
        self.assertEqual(root(Fraction(10 ** 30), 3), Fraction(10 ** 10))

    def test_odd_root_of_negative(self):
        self.assertEqual(root(Fraction(-8, 27), 3), Fraction(-2, 3))

    def test_even_root_of_negative(self):
        with self.assertRaises(NegativeRootError):
            root(Fraction(-4), 2)
        with self.assertRaises(ValueError):
            root(Fraction(-4), 2)

    def test_floor_of_imperfect_root(self):
        self.assertEqual(root(Fraction(2), 2), Fraction(1))
        self.assertEqual(root(Fraction(10), 3), Fraction(2))

    def test_invalid_degree(self):
        with self.assertRaises(ValueError):
            root(Fraction(4), 0)


class PowerTests(unittest.TestCase):
    def test_rational_exponent(self):
        self.assertEqual(power(Fraction(4, 9), Fraction(1, 2)), Fraction(2, 3))
        self.assertEqual(power(Fraction(8), Fraction(-2, 3)), Fraction(1, 4))
        self.assertEqual(power(Fraction(2), 10), Fraction(1024))

    def test_zero_to_negative_power(self):
        with self.assertRaises(DivisionByZeroError):
            power(Fraction(0), -1)


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
