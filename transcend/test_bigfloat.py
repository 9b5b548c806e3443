#!/usr/bin/env python3

import unittest
import sys

import numpy as np
from mpmath import mp

from testutils import TranscendTestCase
from .bigfloat import BigFloat, bigfloat
from .numutils import UndefinedOperationError


class TestBigFloat(TranscendTestCase):
    def test_construction(self):
        self.assertEqual(BigFloat(1.5).prec, 53)
        self.assertEqual(BigFloat(1, prec=100).prec, 100)
        self.assertEqual(BigFloat(BigFloat(1, prec=100)).prec, 100)
        self.assertEqual(BigFloat(np.float64(0.25)), 0.25)
        self.assertEqual(BigFloat(np.int64(7)), 7)
        x = BigFloat("0.1", prec=200)
        with mp.workprec(200):
            self.assertEqual(x.to_mpf(), mp.mpf("0.1"))
        self.assertTrue(BigFloat("inf").is_inf())
        self.assertTrue(BigFloat("-inf").signbit)
        with self.assertRaises(UndefinedOperationError):
            BigFloat(float("nan"))
        with self.assertRaises(UndefinedOperationError):
            BigFloat("nan")
        with self.assertRaises(ValueError):
            BigFloat(1, prec=0)
        with self.assertRaises(TypeError):
            BigFloat([1])

    def test_rounding(self):
        x = BigFloat(1, prec=10)
        self.assertEqual(x + 2.0**-20, 1)
        self.assertEqual(BigFloat(1, prec=30) + 2.0**-20, 1 + 2.0**-20)
        self.assertEqual(BigFloat(2**100 + 1, prec=53), 2**100)
        self.assertEqual(BigFloat(2**100 + 1, prec=200).to_int(), 2**100 + 1)

    def test_precision_propagation(self):
        a = BigFloat(1, prec=100)
        b = BigFloat(3, prec=200)
        self.assertEqual((a + b).prec, 200)
        self.assertEqual((a / b).prec, 200)
        self.assertEqual((a * 3).prec, 100)
        self.assertEqual(a.div(b, prec=50).prec, 50)
        self.assertEqual((1 - a).prec, 100)

    def test_signed_zero(self):
        nz = BigFloat(-0.0)
        self.assertTrue(nz.is_zero())
        self.assertTrue(nz.signbit)
        self.assertTrue(BigFloat("-0").signbit)
        self.assertEqual(nz, 0)
        self.assertTrue((BigFloat(-1) * BigFloat(0)).signbit)
        self.assertFalse((BigFloat(-1) * BigFloat(-0.0)).signbit)
        self.assertTrue((nz + nz).signbit)
        self.assertFalse((nz + BigFloat(0)).signbit)
        self.assertFalse((BigFloat(1) - BigFloat(1)).signbit)
        self.assertTrue((BigFloat(0) - BigFloat(0)).signbit is False)
        self.assertTrue((nz - BigFloat(0)).signbit)
        self.assertTrue(BigFloat(0).neg().signbit)
        self.assertFalse(nz.abs().signbit)
        self.assertTrue(nz.sqrt().signbit)
        self.assertEqual(str(nz), "-0.0")
        self.assertEqual(nz.to_float(), 0.0)
        self.assertEqual(str(nz.to_float()), "-0.0")

    def test_infinities(self):
        one = BigFloat(1)
        q = one / BigFloat(-0.0)
        self.assertTrue(q.is_inf())
        self.assertTrue(q.signbit)
        self.assertTrue((one / BigFloat(0)).is_inf())
        self.assertFalse((one / BigFloat(0)).signbit)
        inf = BigFloat.inf()
        self.assertEqual(inf + 1, inf)
        self.assertTrue((one / inf).is_zero())
        self.assertTrue((one / inf.neg()).signbit)
        self.assertTrue((inf / -2).signbit)
        self.assertEqual(inf.to_float(), float("inf"))
        self.assertEqual(str(inf), "inf")
        self.assertEqual(str(inf.neg()), "-inf")

    def test_undefined_operations(self):
        inf = BigFloat.inf()
        with self.assertRaises(UndefinedOperationError):
            inf - inf
        with self.assertRaises(UndefinedOperationError):
            inf * BigFloat(0)
        with self.assertRaises(UndefinedOperationError):
            BigFloat(0) / BigFloat(-0.0)
        with self.assertRaises(UndefinedOperationError):
            inf / inf
        with self.assertRaises(UndefinedOperationError):
            BigFloat(-1).sqrt()
        with self.assertRaises(ArithmeticError):
            inf.neg() + inf

    def test_inspection(self):
        self.assertEqual(BigFloat(1).exponent, 1)
        self.assertEqual(BigFloat(0.75).exponent, 0)
        self.assertEqual(BigFloat(0.125).exponent, -2)
        self.assertEqual(BigFloat(0).exponent, 0)
        self.assertTrue(BigFloat(6).is_integer())
        self.assertTrue(BigFloat(-0.0).is_integer())
        self.assertFalse(BigFloat(2.5).is_integer())
        self.assertFalse(BigFloat.inf().is_integer())
        self.assertEqual(BigFloat(-3).sign(), -1)
        self.assertEqual(BigFloat(-0.0).sign(), 0)
        self.assertEqual(BigFloat(6).man_exp(), (3, 1))
        self.assertEqual(BigFloat(-0.75).man_exp(), (-3, -2))
        with self.assertRaises(ValueError):
            BigFloat.inf().man_exp()

    def test_conversions(self):
        self.assertEqual(BigFloat(-2.5).to_int(), -2)
        self.assertEqual(BigFloat(-2.5).floor(), -3)
        self.assertEqual(BigFloat(2.5).nint(), 3)
        self.assertEqual(BigFloat(2.4).nint(), 2)
        self.assertEqual(BigFloat(-2.6).nint(), -3)
        self.assertEqual(int(BigFloat(7.9)), 7)
        self.assertEqual(float(BigFloat(0.1)), 0.1)
        self.assertEqual(BigFloat(2).shift(5000).to_float(), float("inf"))
        self.assertEqual(BigFloat(2).shift(-5000).to_float(), 0.0)
        with self.assertRaises(OverflowError):
            BigFloat.inf().to_int()
        self.assertEqual(str(BigFloat(0.5)), "0.5")
        self.assertEqual(repr(BigFloat(0.5)), "BigFloat('0.5', prec=53)")

    def test_arithmetic(self):
        a = BigFloat(0.25)
        self.assertEqual(1 - a, 0.75)
        self.assertEqual(a - 1, -0.75)
        self.assertEqual(1 / BigFloat(4), a)
        self.assertEqual(3 * a, 0.75)
        self.assertEqual(-a, -0.25)
        self.assertEqual(abs(-a), a)
        self.assertEqual(BigFloat(9).sqrt(), 3)
        self.assertEqual(a.shift(3), 2)
        x = BigFloat(2, prec=300).sqrt()
        with mp.workprec(300):
            self.assertEqual(x.to_mpf(), mp.sqrt(2))

    def test_comparisons(self):
        a = BigFloat(1.5)
        self.assertTrue(a > 1)
        self.assertTrue(a < 2.0)
        self.assertTrue(a >= BigFloat(1.5, prec=10))
        self.assertTrue(a != 1)
        self.assertEqual(BigFloat(-0.0), BigFloat(0.0))
        self.assertEqual(hash(BigFloat(3)), hash(3))
        self.assertEqual(hash(BigFloat(0.5)), hash(0.5))
        self.assertTrue(BigFloat.inf() > 10**1000)
        self.assertFalse(a == "1.5")
        self.assertEqual(a.cmp(2), -1)

    def test_bigfloat_helper(self):
        x = BigFloat(1, prec=80)
        self.assertIs(bigfloat(x), x)
        self.assertEqual(bigfloat(x, 40).prec, 40)
        self.assertEqual(bigfloat(2.5).prec, 53)

    def test_rational(self):
        x = BigFloat.from_rational(1, 3, 100)
        with mp.workprec(100):
            self.assertEqual(x.to_mpf(), mp.mpf(1)/3)
        self.assertEqual(BigFloat.from_rational(3, -4), -0.75)
        self.assertTrue(BigFloat.from_rational(-1, 0).signbit)
        with self.assertRaises(UndefinedOperationError):
            BigFloat.from_rational(0, 0)


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
