r"""@package transcend.funcs.hyperbolic

Hyperbolic functions and their inverses.

These are evaluated from their definitions in terms of the exponential and
the logarithm,
\f[
    \sinh x = \frac{e^x - e^{-x}}{2}, \quad
    \cosh x = \frac{e^x + e^{-x}}{2}, \quad
    \tanh x = 1 - \frac{2}{e^{2x} + 1},
\f]
\f[
    \operatorname{arsinh} x = \ln(x + \sqrt{x^2 + 1}), \quad
    \operatorname{arcosh} x = \ln(x + \sqrt{x^2 - 1}), \quad
    \operatorname{artanh} x = \frac12 \ln\frac{1+x}{1-x}.
\f]
Near zero, where these formulas suffer from cancellation, power series are
used instead.
"""

from ..bigfloat import BigFloat
from ..core.series import SeriesEvaluator, atan_series
from ..numutils import DomainError
from ..precision import working_precision
from .exp import exp
from .log import log


__all__ = [
    "sinh",
    "cosh",
    "tanh",
    "asinh",
    "acosh",
    "atanh",
]


def _sinh_series(x, prec):
    x2 = x.mul(x, prec)
    ev = SeriesEvaluator(prec, name="sinh")
    return ev.evaluate(x, lambda t, n: t.mul(x2, prec).div(2*n * (2*n+1), prec))


def _signed(value, negative):
    return value.neg() if negative else value


def sinh(x):
    r"""Hyperbolic sine at the precision of `x`."""
    if x.is_zero() or x.is_inf():
        return x.copy()
    prec = x.prec
    wp = working_precision(prec)
    a = x.abs().rounded(wp)
    if a < 1:
        value = _sinh_series(a, wp).value
    else:
        ea = exp(a)
        value = ea.sub(BigFloat.one(wp).div(ea, wp), wp).shift(-1)
    return _signed(value, x.signbit).rounded(prec)


def cosh(x):
    r"""Hyperbolic cosine at the precision of `x`."""
    if x.is_zero():
        return BigFloat.one(x.prec)
    if x.is_inf():
        return BigFloat.inf(1, x.prec)
    prec = x.prec
    wp = working_precision(prec)
    ea = exp(x.abs().rounded(wp))
    value = ea.add(BigFloat.one(wp).div(ea, wp), wp).shift(-1)
    return value.rounded(prec)


def tanh(x):
    r"""Hyperbolic tangent at the precision of `x`."""
    prec = x.prec
    if x.is_zero():
        return x.copy()
    if x.is_inf():
        return _signed(BigFloat.one(prec), x.signbit)
    wp = working_precision(prec)
    a = x.abs().rounded(wp)
    if a < 0.5:
        s = _sinh_series(a, wp).value
        c = BigFloat.one(wp).add(s.mul(s, wp), wp).sqrt(wp)
        value = s.div(c, wp)
    else:
        e2a = exp(a.shift(1))
        value = BigFloat.one(wp).sub(
            BigFloat(2, wp).div(e2a.add(1, wp), wp), wp)
    return _signed(value, x.signbit).rounded(prec)


def asinh(x):
    r"""Inverse hyperbolic sine at the precision of `x`."""
    if x.is_zero() or x.is_inf():
        return x.copy()
    prec = x.prec
    # log(1 + a) for small a loses bits relative to the result
    wp = working_precision(prec, max(-x.exponent, 0))
    a = x.abs().rounded(wp)
    arg = a.add(a.mul(a, wp).add(1, wp).sqrt(wp), wp)
    return _signed(log(arg), x.signbit).rounded(prec)


def acosh(x):
    r"""Inverse hyperbolic cosine at the precision of `x`.

    @raise DomainError for `x < 1`.
    """
    if not x >= 1:
        raise DomainError("acosh argument less than one: %s" % x)
    if x.is_inf():
        return x.copy()
    prec = x.prec
    # x - 1 is exact close to 1, where x^2 - 1 would cancel
    t = x.sub(1, working_precision(prec))
    wp = working_precision(prec, max(-t.exponent, 0))
    root = t.mul(t.add(2, wp), wp).sqrt(wp)
    arg = t.add(root, wp).add(1, wp)
    return log(arg).rounded(prec)


def atanh(x):
    r"""Inverse hyperbolic tangent at the precision of `x`.

    `atanh(+-1)` is `+-inf`.

    @raise DomainError for `|x| > 1`.
    """
    if not x.abs() <= 1:
        raise DomainError("atanh argument outside [-1, 1]: %s" % x)
    prec = x.prec
    if x.is_zero():
        return x.copy()
    if x.abs() == 1:
        return BigFloat.inf(-1 if x.signbit else 1, prec)
    wp = working_precision(prec)
    a = x.abs().rounded(wp)
    if a <= 0.125:
        value = atan_series(a, wp, hyperbolic=True).value
    else:
        one = BigFloat.one(wp)
        value = log(one.add(a, wp).div(one.sub(a, wp), wp)).shift(-1)
    return _signed(value, x.signbit).rounded(prec)
