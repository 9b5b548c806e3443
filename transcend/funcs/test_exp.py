#!/usr/bin/env python3

import unittest
import sys

from mpmath import mp

from testutils import TranscendTestCase, slowtest
from ..bigfloat import BigFloat
from ..config import settings
from .exp import exp, exp_result


class TestExp(TranscendTestCase):
    def test_zero(self):
        self.assertEqual(exp(BigFloat(0)), 1)
        self.assertEqual(exp(BigFloat(-0.0)), 1)
        self.assertEqual(exp(BigFloat(0, 300)).prec, 300)

    def test_special_values(self):
        self.assertTrue(exp(BigFloat.inf()).is_inf())
        z = exp(BigFloat.inf(-1))
        self.assertTrue(z.is_zero())
        self.assertFalse(z.signbit)
        limit = settings.exp_limit
        self.assertTrue(exp(BigFloat(limit + 1)).is_inf())
        z = exp(BigFloat(-limit - 1))
        self.assertTrue(z.is_zero())
        self.assertFalse(z.signbit)
        res = exp_result(BigFloat(limit + 1))
        self.assertTrue(res.converged)
        self.assertEqual(res.iterations, 0)

    def test_accuracy(self):
        values = (-20.5, -1.0, 1e-10, 0.1, 1.0, 2.5, 100.0, 1000.0)
        for prec in (53, 200):
            for x in values:
                with self.subTest(prec=prec, x=x):
                    with mp.workprec(prec + 100):
                        self.assertRelClose(exp(BigFloat(x, prec)),
                                            mp.exp(mp.mpf(x)),
                                            mp.mpf(2)**(4 - prec))

    def test_large_arguments(self):
        x = BigFloat(123456.75, 80)
        with mp.workprec(200):
            self.assertRelClose(exp(x), mp.exp(mp.mpf(123456.75)),
                                mp.mpf(2)**-75)
            self.assertRelClose(exp(-x), mp.exp(-mp.mpf(123456.75)),
                                mp.mpf(2)**-75)

    @slowtest
    def test_high_precision(self):
        x = BigFloat("1.5", 1000)
        with mp.workprec(1100):
            self.assertRelClose(exp(x), mp.exp(mp.mpf(1.5)), mp.mpf(2)**-990)

    def test_result(self):
        res = exp_result(BigFloat(1, 64))
        self.assertTrue(res.converged)
        self.assertEqual(res.method, "exp")
        self.assertEqual(res.value.prec, 64)
        self.assertEqual(str(res.value), "2.71828182845904524")

    def test_deterministic(self):
        x = BigFloat("0.7", 150)
        self.assertEqual(exp(x).man_exp(), exp(x).man_exp())
        self.assertEqual(exp(x).prec, 150)


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
