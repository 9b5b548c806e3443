#!/usr/bin/env python3

import unittest
import sys

from mpmath import mp

from testutils import TranscendTestCase
from ..bigfloat import BigFloat
from .power import (power, power_int, power_checked, power_float64,
                    is_odd_integer)


def B(value, prec=53):
    return BigFloat(value, prec)


INF = float("inf")


class TestPowerCases(TranscendTestCase):
    def test_zero_exponent(self):
        for x in (0.0, -0.0, 2.5, -3.0, INF, -INF):
            with self.subTest(x=x):
                self.assertEqual(power(B(x), B(0)), 1)
                self.assertEqual(power(B(x), B(-0.0)), 1)

    def test_unit_base(self):
        for y in (INF, -INF, 0.5, -7.0, 1e300):
            with self.subTest(y=y):
                self.assertEqual(power(B(1), B(y)), 1)

    def test_unit_exponent(self):
        x = B("0.1", 200)
        self.assertEqual(power(x, B(1)), x)
        self.assertTrue(power(B(-0.0), B(1)).signbit)
        self.assertTrue(power(B(-INF), B(1)).signbit)

    def test_zero_base(self):
        pz = B(0.0)
        nz = B(-0.0)
        # negative odd integer exponent
        self.assertTrue(power(pz, B(-3)).is_inf())
        self.assertFalse(power(pz, B(-3)).signbit)
        self.assertTrue(power(nz, B(-3)).is_inf())
        self.assertTrue(power(nz, B(-3)).signbit)
        self.assertTrue(power(nz, B(-1)).signbit)
        # other negative exponents
        for y in (-2.0, -0.5, -INF):
            with self.subTest(y=y):
                value = power(nz, B(y))
                self.assertTrue(value.is_inf())
                self.assertFalse(value.signbit)
        self.assertTrue(power(pz, B(-1)).is_inf())
        # positive exponents
        self.assertTrue(power(nz, B(INF)).is_zero())
        self.assertFalse(power(nz, B(INF)).signbit)
        self.assertTrue(power(nz, B(3)).signbit)
        self.assertTrue(power(nz, B(3)).is_zero())
        self.assertFalse(power(nz, B(2)).signbit)
        self.assertFalse(power(nz, B(0.5)).signbit)
        self.assertFalse(power(pz, B(3)).signbit)

    def test_infinite_exponent(self):
        self.assertEqual(power(B(-1), B(INF)), 1)
        self.assertEqual(power(B(-1), B(-INF)), 1)
        self.assertTrue(power(B(2), B(INF)).is_inf())
        self.assertTrue(power(B(-2), B(INF)).is_inf())
        self.assertTrue(power(B(0.5), B(INF)).is_zero())
        self.assertTrue(power(B(-0.5), B(INF)).is_zero())
        self.assertTrue(power(B(2), B(-INF)).is_zero())
        self.assertFalse(power(B(2), B(-INF)).signbit)
        self.assertTrue(power(B(0.5), B(-INF)).is_inf())
        self.assertTrue(power(B(INF), B(INF)).is_inf())
        self.assertTrue(power(B(INF), B(-INF)).is_zero())

    def test_infinite_base(self):
        self.assertTrue(power(B(INF), B(2.5)).is_inf())
        self.assertTrue(power(B(INF), B(-2.5)).is_zero())
        self.assertFalse(power(B(INF), B(-2.5)).signbit)
        value = power(B(-INF), B(3))
        self.assertTrue(value.is_inf())
        self.assertTrue(value.signbit)
        value = power(B(-INF), B(2))
        self.assertTrue(value.is_inf())
        self.assertFalse(value.signbit)
        value = power(B(-INF), B(-3))
        self.assertTrue(value.is_zero())
        self.assertTrue(value.signbit)
        value = power(B(-INF), B(-0.5))
        self.assertTrue(value.is_zero())
        self.assertFalse(value.signbit)

    def test_undefined(self):
        value = power(B(-2), B(0.5))
        self.assertTrue(value.is_inf())
        self.assertFalse(value.signbit)
        res = power_checked(B(-2), B(0.5))
        self.assertTrue(res.is_undefined())
        self.assertEqual(res.status, "undefined")
        self.assertTrue(power_checked(B(2), B(0.5)).is_ok())

    def test_integer_exponent(self):
        self.assertEqual(power(B(2), B(10)), 1024)
        self.assertEqual(power(B(-2), B(3)), -8)
        self.assertEqual(power(B(-2), B(4)), 16)
        self.assertEqual(power(B(2), B(-2)), 0.25)
        self.assertEqual(power(B(3, 200), B(50)).to_int(), 3**50)
        with mp.workprec(200):
            self.assertRelClose(power(B("1.1", 100), B(-37)),
                                mp.power(B("1.1", 100).to_mpf(), -37),
                                mp.mpf(2)**-95)

    def test_general(self):
        cases = ((2.0, 0.5), (10.0, 0.3), (0.5, -1.75), (7.25, 3.5),
                 (1e10, -0.125))
        for prec in (53, 200):
            for x, y in cases:
                with self.subTest(prec=prec, x=x, y=y):
                    with mp.workprec(prec + 100):
                        self.assertRelClose(power(B(x, prec), B(y, prec)),
                                            mp.power(mp.mpf(x), mp.mpf(y)),
                                            mp.mpf(2)**(6 - prec))

    def test_huge_integer_exponent(self):
        x = B(-1.0000001)
        y = B(2000001)
        with mp.workprec(200):
            expected = -mp.power(mp.mpf(1.0000001), 2000001)
            self.assertRelClose(power(x, y), expected, mp.mpf(2)**-45)
        value = power(x, B(2000000))
        self.assertFalse(value.signbit)

    def test_overflow(self):
        res = power_checked(B(10), B(1e7))
        self.assertTrue(res.is_overflow())
        self.assertTrue(res.value.is_inf())
        res = power_checked(B(10), B(-1e7))
        self.assertTrue(res.is_ok())
        self.assertTrue(res.value.is_zero())

    def test_precision(self):
        self.assertEqual(power(B(2, 80), B(0.5, 120)).prec, 120)
        self.assertEqual(power(B(2, 80), B(0, 30)).prec, 80)

    def test_deterministic(self):
        for x, y in ((B(7.25, 150), B(3.5, 150)), (B(1.1, 150), B(-37, 150)),
                     (B(-2, 150), B(3, 150))):
            with self.subTest(x=x, y=y):
                first = power(x, y)
                second = power(x, y)
                self.assertEqual(first.man_exp(), second.man_exp())
                self.assertEqual(first.prec, second.prec)


class TestPowerHelpers(TranscendTestCase):
    def test_is_odd_integer(self):
        for y in (1, 3, -3, 2**70 + 1, -1):
            with self.subTest(y=y):
                self.assertTrue(is_odd_integer(BigFloat(y, 100)))
        for y in (0.0, -0.0, 2, -4, 2.5, INF, -INF, 2.0**80):
            with self.subTest(y=y):
                self.assertFalse(is_odd_integer(BigFloat(y, 100)))

    def test_power_int(self):
        x = B(3, 100)
        self.assertEqual(power_int(x, 0), 1)
        self.assertEqual(power_int(x, 4), 81)
        with mp.workprec(200):
            self.assertRelClose(power_int(x, -2), mp.mpf(1)/9, mp.mpf(2)**-98)
        self.assertTrue(power_int(B(-0.0), -3).signbit)
        self.assertTrue(power_int(B(-0.0), -3).is_inf())
        self.assertEqual(power_int(x, 4).prec, 100)

    def test_power_float64(self):
        self.assertEqual(power_float64(2.0, 3.0), 8)
        self.assertEqual(power_float64(2.0, 3.0).prec, 53)
        self.assertTrue(power_float64(float("nan"), 1.0).is_inf())
        self.assertTrue(power_float64(2.0, float("nan")).is_inf())
        self.assertAlmostEqual(power_float64(2.0, 0.5).to_float(), 2**0.5)


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
