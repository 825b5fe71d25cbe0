import math
import sys
import unittest

from safedecimal import ops
from safedecimal.errors import ParseError
from safedecimal.format import to_decimal_string, to_number
from safedecimal.parsing import Literal, from_number, from_string, split_literal
from safedecimal.value import ZERO


def render(value, **overrides):
    overrides.setdefault("max_decimals", 20)
    return to_decimal_string(value, **overrides)


class SplitLiteralTests(unittest.TestCase):
    def test_decimal_literal(self):
        self.assertEqual(split_literal(" -12.50 "), Literal(True, 10, "12", "50"))

    def test_prefixed_literal_is_lowercased(self):
        self.assertEqual(split_literal("+0XAB.C"), Literal(False, 16, "ab", "c"))

    def test_missing_integer_part(self):
        self.assertEqual(split_literal(".5"), Literal(False, 10, "", "5"))

    def test_rejects_invalid_text(self):
        for text in ("", ".", "abc", "1.2.3", "0b102", "--1", "0x", "0o8", "1e5"):
            with self.assertRaises(ParseError, msg=text):
                split_literal(text)

    def test_parse_error_is_a_value_error(self):
        with self.assertRaises(ValueError):
            from_string("twelve")

    def test_rejects_non_string(self):
        with self.assertRaises(TypeError):
            from_string(123)


class FromStringTests(unittest.TestCase):
    def test_decimal_literals(self):
        cases = {
            "12.34": "12.34",
            "0.1": "0.1",
            "+0.2": "0.2",
            "-3.2": "-3.2",
            "0": "0",
            "-0.000": "0",
            "03.333": "3.333",
            "9007199254740991": "9007199254740991",
        }
        for text, expected in cases.items():
            self.assertEqual(render(from_string(text)), expected, text)

    def test_hexadecimal_literals(self):
        cases = {
            "0x1A": "26",
            "+0x1b": "27",
            "0x0.1": "0.0625",
            "-0xa.fF": "-10.99609375",
            "0xbeef.decaf": "48879.87028408050537109375",
        }
        for text, expected in cases.items():
            self.assertEqual(render(from_string(text)), expected, text)

    def test_binary_and_octal_literals(self):
        cases = {
            "0b1010": "10",
            "-0b1.11": "-1.75",
            "+0b10.0000000001": "2.0009765625",
            "0o17.4": "15.5",
            "0o0.01": "0.015625",
        }
        for text, expected in cases.items():
            self.assertEqual(render(from_string(text)), expected, text)

    def test_radix_prefixes_agree(self):
        self.assertTrue(ops.eq(from_string("0x0.1"), from_string("0.0625")))
        self.assertTrue(ops.eq(from_string("0b0.1"), from_string("0o0.4")))

    def test_long_fraction_keeps_leading_digits(self):
        value = from_string("0.1234567890123456")
        self.assertEqual(render(value, max_decimals=16), "0.1234567890123456")

    def test_integer_overflow(self):
        with self.assertRaises(ParseError):
            from_string("1" + "0" * 400)


class FromNumberTests(unittest.TestCase):
    def test_recovers_written_decimal(self):
        self.assertTrue(ops.eq(ops.sub(from_number(0.2), from_string("0.2")), ZERO))
        self.assertTrue(ops.eq(ops.sub(from_number(43534.5435), from_string("43534.5435")), ZERO))
        self.assertEqual(render(from_number(98.76)), "98.76")

    def test_sum_of_tenths(self):
        total = ops.add(from_number(0.1), from_number(0.2))
        self.assertTrue(ops.eq(total, from_number(0.3)))

    def test_repeating_decimals(self):
        third = ops.div(from_string("1"), from_string("3"))
        self.assertTrue(ops.eq(from_number(1 / 3), third))
        ratio = ops.div(from_string("10"), from_string("21"))
        self.assertTrue(ops.eq(from_number(10 / 21), ratio))

    def test_epsilon(self):
        value = ops.add(from_string("1"), from_number(sys.float_info.epsilon))
        self.assertEqual(
            render(value, max_decimals=47),
            "1.00000000000000022204460492503130808472633361816",
        )

    def test_integers_and_large_values(self):
        self.assertTrue(ops.eq(from_number(5), from_string("5")))
        self.assertEqual(render(from_number(True)), "1")
        self.assertEqual(render(from_number(1e22)), "10000000000000000000000")

    def test_tiny_values_do_not_overflow_the_reciprocal(self):
        for value in (5e-324, 1e-310, 2e-309, -2e-309):
            self.assertEqual(render(from_number(value)), "0", value)
        self.assertTrue(math.isclose(to_number(from_number(1e-300)), 1e-300, rel_tol=1e-15))

    def test_negative_zero(self):
        self.assertEqual(render(from_number(-0.0)), "0")

    def test_rejects_non_finite(self):
        for value in (math.nan, math.inf, -math.inf):
            with self.assertRaises(ValueError):
                from_number(value)

    def test_rejects_non_numbers(self):
        with self.assertRaises(TypeError):
            from_number("0.1")


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
