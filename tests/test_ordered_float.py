from __future__ import annotations

import math
import unittest

import numpy as np

from glyph_section.ordered_float import OrderedFloat, canonical_bits, ordered_floats


class OrderedFloatTests(unittest.TestCase):
    def test_nan_equals_nan_regardless_of_sign_or_payload(self) -> None:
        quiet = float("nan")
        negative = -float("nan")
        payload = float(np.uint64(0x7FF8000000000001).view(np.float64))
        self.assertTrue(math.isnan(payload))
        self.assertEqual(OrderedFloat(quiet), OrderedFloat(negative))
        self.assertEqual(OrderedFloat(quiet), OrderedFloat(payload))
        self.assertEqual(hash(OrderedFloat(quiet)), hash(OrderedFloat(payload)))
        self.assertEqual(canonical_bits(negative), canonical_bits(quiet))

    def test_signed_zero_is_one_key(self) -> None:
        self.assertEqual(OrderedFloat(-0.0), OrderedFloat(0.0))
        self.assertEqual(hash(OrderedFloat(-0.0)), hash(OrderedFloat(0.0)))
        self.assertEqual(OrderedFloat(-0.0).bits, 0)

    def test_infinity_bits_are_ieee754(self) -> None:
        self.assertEqual(OrderedFloat(math.inf).bits, 0x7FF0000000000000)
        self.assertEqual(OrderedFloat(-math.inf).bits, 0xFFF0000000000000)
        self.assertEqual(OrderedFloat(math.inf), OrderedFloat(float("inf")))

    def test_total_order_puts_nan_last(self) -> None:
        values = ordered_floats(math.nan, 1.0, -math.inf, math.inf, 0.0, -2.5)
        ordered = [v.value for v in sorted(values)]
        self.assertEqual(ordered[:5], [-math.inf, -2.5, 0.0, 1.0, math.inf])
        self.assertTrue(math.isnan(ordered[5]))
        self.assertLess(OrderedFloat(math.inf), OrderedFloat(math.nan))
        self.assertGreaterEqual(OrderedFloat(math.nan), OrderedFloat(math.nan))

    def test_distinct_values_differ(self) -> None:
        self.assertNotEqual(OrderedFloat(0.1), OrderedFloat(0.1 + 1e-16 * 2))
        self.assertNotEqual(OrderedFloat(1.0), OrderedFloat(-1.0))

    def test_wraps_numpy_scalars_and_ints(self) -> None:
        self.assertEqual(OrderedFloat(np.float32(0.5)), OrderedFloat(0.5))
        self.assertEqual(OrderedFloat(3), OrderedFloat(3.0))
        self.assertIsInstance(OrderedFloat(3).value, float)
        self.assertEqual(float(OrderedFloat(2.25)), 2.25)

    def test_not_comparable_with_raw_float(self) -> None:
        self.assertNotEqual(OrderedFloat(1.0), 1.0)
        with self.assertRaises(TypeError):
            _ = OrderedFloat(1.0) < 2.0  # type: ignore[operator]


if __name__ == "__main__":
    unittest.main()
