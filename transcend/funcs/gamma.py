r"""@package transcend.funcs.gamma

Gamma function and factorials of real numbers.

gamma() handles the following cases in this order:
    * non-positive integers (including `+-0`) and `-inf`: poles, the
      sentinel `+inf` is returned
    * other negative arguments: reflection formula
      \f$ \Gamma(x) = \pi / (\sin(\pi x) \Gamma(1-x)) \f$
    * positive integers below `gamma_factorial_limit` (see ..config):
      \f$ \Gamma(n) = (n-1)! \f$, correctly rounded
    * arguments above `gamma_stirling_threshold`: Stirling's series
    * everything else: Lanczos approximation

The Lanczos approximation uses Godfrey's coefficients (`g = 7`, `n = 9`) up
to a precision of `lanczos_max_precision` bits. These are only accurate to
about 15 digits, so for higher precisions the Spouge approximation, whose
coefficients can be computed for any precision, is used instead.

gamma_spouge() shares the special cases with gamma() but uses the Spouge
approximation for all remaining arguments.

@b Examples

```
    >>> gamma(BigFloat(5))
    BigFloat('24.0', prec=53)
    >>> gamma(BigFloat(0.5, prec=64))
    BigFloat('1.77245385090551603', prec=64)
    >>> gamma(BigFloat(-2))
    BigFloat('inf', prec=53)
```
"""

import logging
import math

from ..bigfloat import BigFloat
from ..config import settings
from ..constants import pi, e
from ..numutils import TaggedResult, factorial, bernoulli
from ..precision import working_precision
from .exp import exp
from .log import log
from .trig import sin


__all__ = [
    "gamma",
    "gamma_checked",
    "gamma_float64",
    "gamma_reflection",
    "gamma_stirling",
    "gamma_lanczos",
    "gamma_spouge",
    "factorial_float",
    "LANCZOS_G",
    "LANCZOS_COEFFS",
]


logger = logging.getLogger(__name__)


## Parameter `g` of Godfrey's Lanczos coefficients.
LANCZOS_G = 7

## Godfrey's coefficients for `g = 7`, `n = 9`.
LANCZOS_COEFFS = (
    0.99999999999980993,
    676.5203681218851,
    -1259.1392167224028,
    771.32342877765313,
    -176.61502916214059,
    12.507343278686905,
    -0.13857109526572012,
    9.9843695780195716e-6,
    1.5056327351493116e-7,
)

OK = TaggedResult.OK
UNDEFINED = TaggedResult.UNDEFINED
OVERFLOW = TaggedResult.OVERFLOW


def _sqrt_two_pi(prec):
    return pi(prec).shift(1).sqrt(prec)


def _pole(prec):
    return BigFloat.inf(1, prec), UNDEFINED


def _gamma(x, general):
    r"""Special cases shared by all gamma entry points.

    @return Tuple `(value, status)`.
    """
    prec = x.prec
    if x.is_inf():
        if x.signbit:
            return _pole(prec)
        return x.copy(), OK
    if x.signbit or x.is_zero():
        if x.is_integer():
            return _pole(prec)
        return gamma_reflection(x, general), OK
    if x.is_integer() and x < settings.gamma_factorial_limit:
        return BigFloat(factorial(x.to_int() - 1), prec), OK
    value = general(x)
    if value.is_inf():
        return value, OVERFLOW
    return value, OK


def gamma_reflection(x, general=None):
    r"""Gamma function of a negative non-integer by reflection.

    \f[
        \Gamma(x) = \frac{\pi}{\sin(\pi x) \Gamma(1-x)}
    \f]

    @param x
        Argument (BigFloat).
    @param general
        Callable evaluating \f$ \Gamma(1-x) \f$ (for positive arguments).
        Default is gamma().
    """
    if general is None:
        general = gamma
    prec = x.prec
    wp = working_precision(prec, max(x.exponent, 0))
    p = pi(wp)
    # sin(pi x) = (-1)^n sin(pi d) with x = n + d, |d| <= 1/2; the
    # subtraction is exact, so sin(pi d) keeps its relative accuracy even
    # when x is close to a pole
    n = x.nint()
    d = x.sub(n, wp)
    if d.is_zero():
        return _pole(prec)[0]
    s = sin(p.mul(d, wp))
    if n % 2:
        s = s.neg()
    g = general(BigFloat.one(wp).sub(x, wp))
    return p.div(s.mul(g, wp), wp).rounded(prec)


def _stirling_correction(x, prec):
    r"""Sum the asymptotic series \f$ \sum_k B_{2k} / (2k(2k-1) x^{2k-1}) \f$."""
    total = BigFloat.zero(prec)
    x2 = x.mul(x, prec)
    power = x
    prev = None
    for k in range(1, prec):
        p, q = bernoulli(2*k)
        term = BigFloat.from_rational(p, q * 2*k * (2*k-1), prec).div(power, prec)
        if prev is not None and term.abs() >= prev:
            # asymptotic series: the terms start growing again
            break
        total = total.add(term, prec)
        if term.abs() <= total.abs().shift(-prec):
            break
        prev = term.abs()
        power = power.mul(x2, prec)
    return total


def gamma_stirling(x):
    r"""Gamma function by Stirling's series for large positive `x`.

    We use
    \f[
        \Gamma(x) = \sqrt{\frac{2\pi}{x}} \left(\frac{x}{e}\right)^x
            \exp\left(\sum_{k=1}^K \frac{B_{2k}}{2k(2k-1)x^{2k-1}}\right).
    \f]
    The smallest term of the asymptotic series is roughly
    \f$ e^{-2\pi x} \f$. If this is not small enough for the requested
    precision, the argument is shifted upwards by an integer `m` and the
    result divided by \f$ x(x+1)\cdots(x+m-1) \f$.
    """
    prec = x.prec
    exponent = max(x.exponent, 1)
    wp = working_precision(prec, exponent + exponent.bit_length())
    m = max(0, int(math.ceil(wp * math.log(2) / (2 * math.pi) - x.to_float())))
    xs = x.add(m, wp)
    correction = _stirling_correction(xs, wp)
    # (x/e)^x = exp(x (log(x) - 1))
    t = xs.mul(log(xs).sub(1, wp), wp).add(correction, wp)
    value = pi(wp).shift(1).div(xs, wp).sqrt(wp).mul(exp(t), wp)
    if m:
        prod = BigFloat.one(wp)
        for j in range(m):
            prod = prod.mul(x.add(j, wp), wp)
        value = value.div(prod, wp)
    return value.rounded(prec)


def _lanczos_godfrey(x, prec):
    z = x.sub(1, prec)
    series = BigFloat(LANCZOS_COEFFS[0], prec)
    for i, c in enumerate(LANCZOS_COEFFS[1:], 1):
        series = series.add(BigFloat(c, prec).div(z.add(i, prec), prec), prec)
    t = z.add(LANCZOS_G + 0.5, prec)
    # t^(z+1/2) e^(-t)
    factor = exp(z.add(0.5, prec).mul(log(t), prec).sub(t, prec))
    return _sqrt_two_pi(prec).mul(factor, prec).mul(series, prec)


def gamma_lanczos(x):
    r"""Gamma function by the Lanczos approximation.

    \f[
        \Gamma(z+1) = \sqrt{2\pi}\, t^{z+1/2} e^{-t} \left(c_0 +
            \sum_{i=1}^{8} \frac{c_i}{z+i}\right),
        \qquad t = z + g + \frac12.
    \f]
    For arguments below `1/2`, the reflection formula is applied first.
    Precisions above `lanczos_max_precision` are computed with the Spouge
    series (see gamma_spouge()).
    """
    prec = x.prec
    if x < 0.5:
        return gamma_reflection(x, gamma_lanczos)
    if prec > settings.lanczos_max_precision:
        return _spouge(x)
    wp = working_precision(prec)
    return _lanczos_godfrey(x.rounded(wp), wp).rounded(prec)


def _spouge_parameter(prec):
    r"""Spouge's `a` for a relative error below `2**-prec`."""
    return int(math.ceil(prec * math.log(2) / math.log(2 * math.pi))) + 1


def _spouge(x):
    r"""Spouge's approximation for `x > 0`.

    \f[
        \Gamma(z+1) = (z+a)^{z+1/2} e^{-(z+a)} \left(c_0 +
            \sum_{k=1}^{a-1} \frac{c_k}{z+k}\right)
    \f]
    with \f$ c_0 = \sqrt{2\pi} \f$ and
    \f$ c_k = \frac{(-1)^{k-1}}{(k-1)!} (a-k)^{k-1/2} e^{a-k} \f$.
    """
    prec = x.prec
    if x < 1:
        # the error bound requires z = x - 1 >= 0
        wp = working_precision(prec)
        return _spouge(x.add(1, wp)).div(x, wp).rounded(prec)
    a = _spouge_parameter(working_precision(prec))
    # the alternating coefficients grow to about e^a
    wp = working_precision(prec, 2 * a)
    z = x.sub(1, wp)
    e_ = e(wp)
    series = _sqrt_two_pi(wp)
    e_pow = BigFloat.one(wp)
    for k in range(a - 1, 0, -1):
        # e_pow = e^(a-k)
        e_pow = e_pow.mul(e_, wp)
        j = a - k
        c = BigFloat.from_rational((-1)**(k-1) * j**k, factorial(k - 1), wp)
        c = c.mul(e_pow, wp).div(BigFloat(j, wp).sqrt(wp), wp)
        series = series.add(c.div(z.add(k, wp), wp), wp)
    za = z.add(a, wp)
    factor = exp(z.add(0.5, wp).mul(log(za), wp).sub(za, wp))
    return factor.mul(series, wp).rounded(prec)


def gamma_spouge(x):
    r"""Gamma function using Spouge's approximation for the general case.

    Special cases (poles, negative arguments, small integers) are treated
    as in gamma().
    """
    return _gamma(x, _spouge)[0]


def _general(x):
    if x > settings.gamma_stirling_threshold:
        logger.debug("gamma(%s): Stirling", x)
        return gamma_stirling(x)
    logger.debug("gamma(%s): Lanczos", x)
    return gamma_lanczos(x)


def gamma(x):
    r"""Gamma function at the precision of `x`.

    Poles and `-inf` give the sentinel `+inf`, see gamma_checked() for a
    variant reporting these cases explicitly.
    """
    return _gamma(x, _general)[0]


def gamma_checked(x):
    r"""Gamma function returning a ..numutils.TaggedResult.

    The status is ``"undefined"`` at the poles and ``"overflow"`` if the
    result of a finite argument is too large.
    """
    value, status = _gamma(x, _general)
    return TaggedResult(value, status)


def gamma_float64(x):
    r"""Gamma function of a native float at the default precision.

    NaN gives the sentinel `+inf`.
    """
    if math.isnan(x):
        return BigFloat.inf(1)
    return gamma(BigFloat(x))


def factorial_float(x):
    r"""Factorial `x!` of a real number.

    Non-negative integers give the exact (correctly rounded) factorial,
    other arguments \f$ \Gamma(x+1) \f$. Negative arguments are undefined
    and give the sentinel `+inf`.
    """
    prec = x.prec
    if x.signbit and not x.is_zero():
        return BigFloat.inf(1, prec)
    if x.is_inf():
        return x.copy()
    if x.is_integer() and x < settings.gamma_factorial_limit:
        return BigFloat(factorial(x.to_int()), prec)
    wp = working_precision(prec, max(x.exponent, 0))
    return gamma(x.add(1, wp)).rounded(prec)
