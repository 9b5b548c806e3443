#!/usr/bin/env python3

import unittest
import math
import sys

from mpmath import mp

from testutils import TranscendTestCase
from ..bigfloat import BigFloat
from ..constants import pi
from ..numutils import DomainError
from .trig import (sin, cos, tan, atan, asin, acos, SIN_METHODS, COS_METHODS,
                   TAN_METHODS, sin_taylor_result, sin_polynomial_result,
                   tan_quotient_result, tan_continued_fraction_result,
                   atan_result, asin_result, POLYNOMIAL_MAX_PRECISION)


VALUES = (-7.0, -1.0, 0.3, 0.7854, 1.0, 1.5, 2.0, 3.0, 4.5, 6.0, 100.0)


def _methods(methods, prec):
    return [name for name in sorted(methods)
            if name != "polynomial" or prec <= POLYNOMIAL_MAX_PRECISION]


class TestSinCos(TranscendTestCase):
    def test_known_values(self):
        x = pi(64).div(6)
        self.assertAlmostEqual(sin(x).to_float(), 0.5, delta=1e-10)
        self.assertAlmostEqual(cos(pi(64).div(3)).to_float(), 0.5, delta=1e-10)
        self.assertEqual(sin(x).prec, 64)

    def test_strategies(self):
        for prec in (53, 200):
            for x in VALUES:
                for name in _methods(SIN_METHODS, prec):
                    with self.subTest(prec=prec, x=x, method=name):
                        with mp.workprec(prec + 100):
                            self.assertRelClose(
                                sin(BigFloat(x, prec), method=name),
                                mp.sin(mp.mpf(x)), mp.mpf(2)**(6 - prec))
                for name in _methods(COS_METHODS, prec):
                    with self.subTest(prec=prec, x=x, method=name):
                        with mp.workprec(prec + 100):
                            self.assertRelClose(
                                cos(BigFloat(x, prec), method=name),
                                mp.cos(mp.mpf(x)), mp.mpf(2)**(6 - prec))

    def test_large_arguments(self):
        for x in (1e6, 2.0**60, -1e22):
            for name in _methods(SIN_METHODS, 100):
                with self.subTest(x=x, method=name):
                    with mp.workprec(400):
                        self.assertRelClose(
                            sin(BigFloat(x, 100), method=name),
                            mp.sin(mp.mpf(x)), mp.mpf(2)**-90)
                        self.assertRelClose(
                            cos(BigFloat(x, 100), method=name),
                            mp.cos(mp.mpf(x)), mp.mpf(2)**-90)

    def test_pythagorean_identity(self):
        for x in VALUES:
            with self.subTest(x=x):
                y = BigFloat(x, 100)
                s = sin(y)
                c = cos(y)
                self.assertRelClose(s*s + c*c, 1, 2.0**-95)

    def test_special_values(self):
        for func in (sin, cos, tan):
            for sign in (1, -1):
                value = func(BigFloat.inf(sign))
                self.assertTrue(value.is_inf())
                self.assertFalse(value.signbit)
        self.assertTrue(sin(BigFloat(-0.0)).signbit)
        self.assertTrue(sin(BigFloat(-0.0)).is_zero())
        self.assertFalse(sin(BigFloat(0.0)).signbit)
        self.assertEqual(cos(BigFloat(-0.0)), 1)
        self.assertEqual(cos(BigFloat(0.0, 80)).prec, 80)
        self.assertTrue(tan(BigFloat(-0.0)).signbit)

    def test_dispatch(self):
        with self.assertLogs("transcend.funcs.trig", "DEBUG") as cm:
            sin(BigFloat(1, 100))
        self.assertIn("sin: using taylor at 100 bits", cm.output[0])
        with self.assertLogs("transcend.funcs.trig", "DEBUG") as cm:
            value = sin(BigFloat(1, 1000))
        self.assertIn("sin: using cordic at 1000 bits", cm.output[0])
        with mp.workprec(1100):
            self.assertRelClose(value, mp.sin(1), mp.mpf(2)**-990)
        with self.assertLogs("transcend.funcs.trig", "DEBUG") as cm:
            tan(BigFloat(1, 100))
        self.assertIn("tan: using quotient at 100 bits", cm.output[0])
        with self.assertRaises(ValueError):
            sin(BigFloat(1), method="chebyshev")

    def test_results(self):
        res = sin_taylor_result(BigFloat(1))
        self.assertTrue(res.converged)
        self.assertEqual(res.method, "taylor")

    def test_near_multiples_of_pi(self):
        for prec, x in ((53, math.pi), (53, 355.0), (200, 355.0)):
            for name in _methods(SIN_METHODS, prec):
                with self.subTest(prec=prec, x=x, method=name):
                    with mp.workprec(prec + 200):
                        self.assertRelClose(sin(BigFloat(x, prec), method=name),
                                            mp.sin(mp.mpf(x)),
                                            mp.mpf(2)**(5 - prec))
        x = pi(200).shift(-1)
        for name in _methods(COS_METHODS, 200):
            with self.subTest(method=name):
                with mp.workprec(400):
                    self.assertRelClose(cos(x, method=name),
                                        mp.cos(x.to_mpf()), mp.mpf(2)**-190)

    def test_polynomial(self):
        xs = [0.1 * k - 3.0 for k in range(61)]
        self.assertListAlmostEqual(
            [sin(BigFloat(x, 53), method="polynomial").to_float() for x in xs],
            [math.sin(x) for x in xs], delta=1e-15)
        self.assertListAlmostEqual(
            [cos(BigFloat(x, 53), method="polynomial").to_float() for x in xs],
            [math.cos(x) for x in xs], delta=1e-15)
        res = sin_polynomial_result(BigFloat(1, 53))
        self.assertTrue(res.converged)
        self.assertEqual(res.method, "polynomial")
        self.assertFalse(sin_polynomial_result(BigFloat(1, 200)).converged)

    def test_deterministic(self):
        for prec in (53, 200):
            x = BigFloat(2.5, prec)
            for name in _methods(SIN_METHODS, prec):
                with self.subTest(prec=prec, method=name):
                    first = sin(x, method=name)
                    second = sin(x, method=name)
                    self.assertEqual(first.man_exp(), second.man_exp())
                    self.assertEqual(first.prec, second.prec)


class TestTan(TranscendTestCase):
    def test_strategies(self):
        for prec in (53, 200):
            for x in VALUES:
                for name in sorted(TAN_METHODS):
                    with self.subTest(prec=prec, x=x, method=name):
                        with mp.workprec(prec + 100):
                            self.assertRelClose(
                                tan(BigFloat(x, prec), method=name),
                                mp.tan(mp.mpf(x)), mp.mpf(2)**(8 - prec))

    def test_quotient(self):
        for x in VALUES:
            with self.subTest(x=x):
                y = BigFloat(x, 100)
                self.assertRelClose(tan(y), sin(y) / cos(y), 2.0**-94)

    def test_results(self):
        res = tan_quotient_result(BigFloat(0.5))
        self.assertEqual(res.method, "quotient")
        self.assertTrue(res.converged)
        res = tan_continued_fraction_result(BigFloat(0.5))
        self.assertEqual(res.method, "continued_fraction")
        self.assertGreater(res.iterations, 0)

    def test_near_pole(self):
        x = pi(100).shift(-1)
        for name in sorted(TAN_METHODS):
            with self.subTest(method=name):
                value = tan(x, method=name)
                self.assertTrue(value.is_inf() or abs(value.to_float()) > 1e25)

    def test_near_pole_accuracy(self):
        x = pi(200).shift(-1)
        for name in sorted(TAN_METHODS):
            with self.subTest(method=name):
                with mp.workprec(400):
                    self.assertRelClose(tan(x, method=name),
                                        mp.tan(x.to_mpf()), mp.mpf(2)**-185)


class TestInverse(TranscendTestCase):
    def test_atan(self):
        for prec in (53, 200):
            for x in (-3.0, -0.5, 0.1, 0.7, 1.0, 5.0, 1e10):
                with self.subTest(prec=prec, x=x):
                    with mp.workprec(prec + 100):
                        self.assertRelClose(atan(BigFloat(x, prec)),
                                            mp.atan(mp.mpf(x)),
                                            mp.mpf(2)**(6 - prec))

    def test_atan_special(self):
        with mp.workprec(100):
            self.assertRelClose(atan(BigFloat.inf()), mp.pi/2, 2.0**-50)
            self.assertRelClose(atan(BigFloat.inf(-1)), -mp.pi/2, 2.0**-50)
        self.assertTrue(atan(BigFloat(-0.0)).signbit)
        res = atan_result(BigFloat(0.5))
        self.assertTrue(res.converged)

    def test_asin_acos(self):
        for prec in (53, 200):
            for x in (-1.0, -0.7, -0.3, 0.2, 0.5, 0.9, 1.0):
                with self.subTest(prec=prec, x=x):
                    with mp.workprec(prec + 100):
                        self.assertRelClose(asin(BigFloat(x, prec)),
                                            mp.asin(mp.mpf(x)),
                                            mp.mpf(2)**(6 - prec))
                        self.assertRelClose(acos(BigFloat(x, prec)),
                                            mp.acos(mp.mpf(x)),
                                            mp.mpf(2)**(6 - prec))

    def test_asin_acos_special(self):
        self.assertTrue(acos(BigFloat(1)).is_zero())
        self.assertTrue(asin(BigFloat(-0.0)).signbit)
        self.assertTrue(asin_result(BigFloat(0.25)).converged)
        for x in (1.5, -1.0000001, float("inf")):
            with self.subTest(x=x):
                with self.assertRaises(DomainError):
                    asin(BigFloat(x))
                with self.assertRaises(DomainError):
                    acos(BigFloat(x))

    def test_inverse_relations(self):
        for x in (0.1, 0.4, 0.8, 1.2):
            with self.subTest(x=x):
                y = BigFloat(x, 100)
                self.assertRelClose(atan(tan(y)), y, 2.0**-90)
                if x < 1:
                    self.assertRelClose(asin(sin(y)), y, 2.0**-90)


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
