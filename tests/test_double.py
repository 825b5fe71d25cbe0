import math
import unittest

from safedecimal.double import (
    bits_to_float,
    construct_double,
    exponential_form,
    float_to_bits,
    from_exponential_form,
    parse_double,
)


class BitCastTests(unittest.TestCase):
    def test_float_to_bits(self):
        self.assertEqual(float_to_bits(1.0), 0x3FF0000000000000)
        self.assertEqual(float_to_bits(-0.0), 1 << 63)

    def test_bits_to_float(self):
        self.assertEqual(bits_to_float(0x4000000000000000), 2.0)
        self.assertEqual(bits_to_float(1), 5e-324)


class ParseDoubleTests(unittest.TestCase):
    def test_normal_values(self):
        self.assertEqual(parse_double(1.0), (0, 0, 0))
        self.assertEqual(parse_double(-2.5), (1, 1, 1 << 50))

    def test_zero_and_negative_zero(self):
        self.assertEqual(parse_double(0.0), (0, -1023, 0))
        self.assertEqual(parse_double(-0.0), (1, -1023, 0))

    def test_subnormal(self):
        self.assertEqual(parse_double(5e-324), (0, -1023, 1))

    def test_construct_is_inverse(self):
        for value in (0.1, -123.456, 5e-324, 2.2250738585072014e-308, 1.7976931348623157e308, 0.0):
            self.assertEqual(construct_double(*parse_double(value)), value)
        negative_zero = construct_double(*parse_double(-0.0))
        self.assertEqual(math.copysign(1.0, negative_zero), -1.0)

    def test_construct_rejects_out_of_range_fields(self):
        with self.assertRaises(ValueError):
            construct_double(0, 1025, 0)
        with self.assertRaises(ValueError):
            construct_double(0, -1024, 0)
        with self.assertRaises(ValueError):
            construct_double(2, 0, 0)
        with self.assertRaises(ValueError):
            construct_double(0, 0, 1 << 52)


class ExponentialFormTests(unittest.TestCase):
    def test_strips_trailing_zero_bits(self):
        self.assertEqual(exponential_form(12.0), (0, 3, 2))
        self.assertEqual(exponential_form(-0.375), (1, 3, -3))
        self.assertEqual(exponential_form(1.0), (0, 1, 0))

    def test_zero(self):
        self.assertEqual(exponential_form(0.0), (0, 0, 0))
        self.assertEqual(exponential_form(-0.0), (1, 0, 0))

    def test_subnormal(self):
        self.assertEqual(exponential_form(5e-324), (0, 1, -1074))

    def test_from_exponential_form(self):
        self.assertEqual(from_exponential_form(0, 3, 2), 12.0)
        self.assertEqual(from_exponential_form(1, 3, -3), -0.375)
        self.assertEqual(from_exponential_form(0, 1, 1023), 2.0 ** 1023)

    def test_round_trip(self):
        for value in (0.1, 123.456, -7e-300, float(2 ** 53 - 1), 1e300):
            self.assertEqual(from_exponential_form(*exponential_form(value)), value)

    def test_underflow_degrades_to_subnormal(self):
        self.assertEqual(from_exponential_form(0, 1, -1074), 5e-324)
        self.assertEqual(from_exponential_form(0, 1, -1080), 0.0)

    def test_overflow_raises(self):
        with self.assertRaises(OverflowError):
            from_exponential_form(0, 1, 1024)


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
