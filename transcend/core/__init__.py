r"""@package transcend.core

Building blocks shared by the function implementations.

This package contains the generic series summation (series.SeriesEvaluator),
the argument reduction of trigonometric functions (reduction) and the CORDIC
rotations (cordic).
"""
