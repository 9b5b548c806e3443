r"""@package transcend.precision

Tolerances and iteration bounds derived from a bit-precision.

Every iterative routine in this package asks this module how close
successive estimates have to be and how many steps it may take at most.
Both are pure functions of the precision and are recomputed per call.

The tolerances are tiered: requiring a full `2**-p` agreement is
unrealistic at high precision since rounding in the iteration itself
accumulates, so the slack grows with the precision.

@b Examples

```
    >>> tolerance(53)
    BigFloat('1.77635683940025046468e-15', prec=73)
    >>> max_iterations(1000, QUADRATIC)
    49
```
"""

import math

from .bigfloat import BigFloat
from .config import settings


__all__ = [
    "LINEAR",
    "QUADRATIC",
    "CUBIC",
    "tolerance_exponent",
    "tolerance",
    "relative_tolerance",
    "term_tolerance",
    "max_iterations",
    "working_precision",
    "precision_of",
]


## Convergence order of series evaluations (one term at a time).
LINEAR = 1
## Convergence order of Newton's method.
QUADRATIC = 2
## Convergence order of Halley's method.
CUBIC = 3

# order: (factor, offset, min, max)
_ITERATION_BOUNDS = {
    QUADRATIC: (3, 20, 15, 10000),
    CUBIC: (2, 15, 20, 5000),
}


def tolerance_exponent(prec):
    r"""Return `k` such that tolerance(prec) is `2**-k`."""
    prec = int(prec)
    if prec >= 512:
        return prec // 8
    if prec >= 256:
        return prec // 3
    if prec >= 128:
        return prec // 2
    if prec >= 64:
        return prec - 8
    return max(prec - 4, 1)


def tolerance(prec):
    r"""Absolute convergence tolerance for a bit-precision `prec`.

    The result is an exact power of two carrying a slightly larger precision
    than `prec`.
    """
    return BigFloat.from_man_exp(1, -tolerance_exponent(prec),
                                 prec + settings.guard_bits)


def relative_tolerance(prec):
    r"""Relative convergence tolerance for a bit-precision `prec`.

    From 128 bits on, the relative tolerance is much tighter than the
    absolute one, namely `2**(12-p)`.
    """
    if prec >= 128:
        return BigFloat.from_man_exp(1, 12 - int(prec),
                                     prec + settings.guard_bits)
    return tolerance(prec)


def term_tolerance(prec):
    r"""Magnitude below which a series term no longer affects a `prec`-bit sum.

    Series are summed at working precision, so this is `2**-(prec+guard)`
    relative to a sum of order one.
    """
    k = int(prec) + settings.guard_bits
    return BigFloat.from_man_exp(1, -k, k)


def max_iterations(prec, order):
    r"""Maximum number of steps for a method of given convergence order.

    @param prec
        Bit-precision of the computation.
    @param order
        One of `LINEAR`, `QUADRATIC` or `CUBIC`.
    """
    prec = max(int(prec), 2)
    if order == LINEAR:
        return min(max(2 * prec + 200, 50), 10000)
    try:
        factor, offset, lo, hi = _ITERATION_BOUNDS[order]
    except KeyError:
        raise ValueError("Unknown convergence order: %s" % order)
    return min(max(int(factor * math.log2(prec)) + offset, lo), hi)


def working_precision(prec, extra=0):
    r"""Precision for intermediate results of a `prec`-bit computation."""
    return int(prec) + settings.guard_bits + int(extra)


def precision_of(*values):
    r"""Largest precision among the given BigFloat values."""
    return max(v.prec for v in values)
