r"""@package transcend.funcs.rootfind

Logarithm by inverting the exponential function iteratively.

We solve \f$ f(y) = e^y - x = 0 \f$ for `y`, starting from the native
floating point logarithm of `x`. Two update rules are implemented:

Newton (in the stabilised form not dividing by \f$ e^y \f$ alone)
\f[
    y \leftarrow y + 2 \frac{x - e^y}{x + e^y},
\f]
and Halley, using \f$ f' = f'' = e^y \f$,
\f[
    y \leftarrow y - \frac{2 f e^y}{e^y (e^y + x)}.
\f]

Convergence is detected when the absolute change of `y` falls below the
tolerance of ..precision.tolerance() or the relative change below
..precision.relative_tolerance(). After that, steps are taken until the
change reaches the working precision or stops decreasing, so the returned
value is accurate to the full precision wherever possible.

An infinite intermediate exponential or a vanishing denominator raises an
IterationBlowUpError.
"""

import math

from ..bigfloat import BigFloat
from ..numutils import IterationResult, IterationBlowUpError, DomainError
from ..precision import (tolerance, relative_tolerance, max_iterations,
                         working_precision, QUADRATIC, CUBIC)
from .exp import exp


__all__ = [
    "newton_log",
    "halley_log",
    "native_log",
    "ExpInverter",
]


def native_log(x):
    r"""Native float approximation of `log(x)` for any finite `x > 0`.

    Computed from the integer mantissa and binary exponent, so it works for
    values far outside the range of floats.
    """
    man, exp_ = x.man_exp()
    return math.log(man) + exp_ * math.log(2)


def _newton_step(x, y, ey, prec):
    den = x.add(ey, prec)
    if den.is_zero():
        raise IterationBlowUpError("Vanishing denominator in Newton step.")
    return y.add(x.sub(ey, prec).shift(1).div(den, prec), prec)


def _halley_step(x, y, ey, prec):
    den = ey.mul(ey.add(x, prec), prec)
    if den.is_zero():
        raise IterationBlowUpError("Vanishing denominator in Halley step.")
    f = ey.sub(x, prec)
    return y.sub(f.mul(ey, prec).shift(1).div(den, prec), prec)


class ExpInverter(object):
    r"""Iteration solving `exp(y) = x` for `y`.

    @b Examples

    ```
        res = ExpInverter("newton").solve(BigFloat(10, prec=200))
        res.value      # log(10) to 200 bits
        res.iterations # number of exp() evaluations
    ```
    """

    __slots__ = ("name", "_step", "order")

    _METHODS = {
        "newton": (_newton_step, QUADRATIC),
        "halley": (_halley_step, CUBIC),
    }

    def __init__(self, method):
        r"""Create an inverter using `method` ``"newton"`` or ``"halley"``."""
        try:
            step, order = self._METHODS[method]
        except KeyError:
            raise ValueError("Unknown method: %s" % method)
        ## Name of the update rule.
        self.name = method
        self._step = step
        ## Convergence order used to bound the number of steps.
        self.order = order

    def solve(self, x):
        r"""Return an IterationResult containing `log(x)` at `x.prec` bits."""
        if x.sign() <= 0:
            raise DomainError("Logarithm of non-positive number %s" % x)
        prec = x.prec
        wp = working_precision(prec)
        tol = tolerance(prec)
        rtol = relative_tolerance(prec)
        x = x.rounded(wp)
        y = BigFloat(native_log(x), wp)
        converged = False
        prev_diff = None
        steps = max_iterations(prec, self.order)
        i = 0
        while i < steps:
            i += 1
            ey = exp(y)
            if ey.is_inf():
                raise IterationBlowUpError(
                    "Exponential overflow at y=%s in %s step" % (y, self.name)
                )
            y_new = self._step(x, y, ey, wp)
            diff = y_new.sub(y, wp).abs()
            y = y_new
            if diff <= tol or diff <= rtol.mul(y.abs(), wp):
                converged = True
            if converged and (diff.is_zero()
                              or diff <= y.abs().shift(-prec - 4)
                              or (prev_diff is not None and diff >= prev_diff)):
                break
            prev_diff = diff
        return IterationResult(y.rounded(prec), converged, i, self.name)


def newton_log(x):
    r"""Logarithm by Newton iteration (IterationResult)."""
    return ExpInverter("newton").solve(x)


def halley_log(x):
    r"""Logarithm by Halley iteration (IterationResult)."""
    return ExpInverter("halley").solve(x)
