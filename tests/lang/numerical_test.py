import math
import unittest

from calc.lang.numerical import INT64_MAX, INT64_MIN, f32, format_result, number, to_int64, truncated_mod


class NumericalTestCase(unittest.TestCase):

    def test_f32(self):
        self.assertNotEqual(0.1, f32(0.1))
        self.assertEqual(f32(0.1), f32(f32(0.1)))
        self.assertEqual(0.5, f32(0.5))
        self.assertEqual(math.inf, f32(1e39))
        self.assertEqual(-math.inf, f32(-1e39))

    def test_to_int64(self):
        cases = {
            1.9: 1,
            -1.9: -1,
            0.0: 0,
            math.nan: 0,
            math.inf: INT64_MAX,
            -math.inf: INT64_MIN,
            1e30: INT64_MAX,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, to_int64(case), case)

    def test_truncated_mod(self):
        cases = {(11, 2): 1, (-7, 2): -1, (7, -2): 1, (-7, -2): -1, (6, 3): 0}
        for (left, right), expected in cases.items():
            self.assertEqual(expected, truncated_mod(left, right), (left, right))

    def test_number(self):
        cases = {
            10.0: "10",
            -2.0: "-2",
            f32(10.3): "10.3",
            f32(5.0 / 3.0): "1.6666666",
            0.5: "0.5",
            math.inf: "inf",
            -math.inf: "-inf",
            math.nan: "nan",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, number(case), case)

    def test_format_result(self):
        self.assertEqual("()", format_result(None))
        self.assertEqual("= 7", format_result(7.0))
        self.assertEqual("= 0.25", format_result(0.25))


if __name__ == '__main__':
    unittest.main()
