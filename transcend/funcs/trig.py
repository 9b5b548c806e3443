r"""@package transcend.funcs.trig

Trigonometric functions and their inverses.

Sine, cosine and tangent come in several strategies, each a free function
returning an IterationResult:

| function | strategies |
|----------|------------|
| sin      | `taylor`, `cordic`, `polynomial` |
| cos      | `taylor`, `cordic`, `polynomial` |
| tan      | `quotient`, `taylor`, `continued_fraction`, `cordic` |

The dispatchers sin(), cos() and tan() use CORDIC rotations from a precision
of `cordic_min_precision` bits on (see ..config) and otherwise the Taylor
series (sine, cosine) or the quotient of sine and cosine (tangent). A
strategy may be forced with the `method` argument.

The `polynomial` strategies evaluate fixed double precision polynomials and
are meant for precisions up to 53 bits only.

All strategies first reduce the argument using ..core.reduction, so they
accept arbitrary finite angles. Infinite arguments have no defined result
and give the sentinel `+inf`.

The inverse functions atan(), asin() and acos() use series expansions after
transforming the argument into a range of fast convergence. Arguments of
asin() and acos() outside `[-1, 1]` raise a DomainError.

@b Examples

```
    x = BigFloat(1, prec=200)
    sin(x)                   # Taylor series
    sin(x, method="cordic")  # CORDIC rotations
    SIN_METHODS["cordic"](x).iterations # number of rotations
```
"""

import logging
import math

from ..bigfloat import BigFloat
from ..config import settings
from ..constants import pi
from ..core.cordic import cordic_rotate
from ..core.reduction import reduce_sin, reduce_cos, reduce_tan
from ..core.series import SeriesEvaluator, atan_series
from ..numutils import IterationResult, DomainError, bernoulli, factorial
from ..precision import working_precision


__all__ = [
    "sin",
    "cos",
    "tan",
    "atan",
    "asin",
    "acos",
    "sin_taylor",
    "sin_cordic",
    "cos_taylor",
    "cos_cordic",
    "sin_polynomial",
    "cos_polynomial",
    "tan_quotient",
    "tan_taylor",
    "tan_continued_fraction",
    "tan_cordic",
    "SIN_METHODS",
    "COS_METHODS",
    "TAN_METHODS",
]


logger = logging.getLogger(__name__)


def _sin_series(r, prec):
    r2 = r.mul(r, prec)
    ev = SeriesEvaluator(prec, alternating=True, name="taylor")
    return ev.evaluate(r, lambda t, n: t.mul(r2, prec).div(2*n * (2*n+1), prec))


def _cos_series(r, prec):
    r2 = r.mul(r, prec)
    ev = SeriesEvaluator(prec, alternating=True, name="taylor")
    return ev.evaluate(BigFloat.one(prec),
                       lambda t, n: t.mul(r2, prec).div((2*n-1) * 2*n, prec))


def _wp(x, extra=0):
    # large angles lose bits in the reduction
    return working_precision(x.prec, max(x.exponent, 0) + extra)


def _finish(res, transform, prec, method):
    res.value = transform.apply(res.value).rounded(prec)
    res.method = method
    return res


def _sentinel_or_zero(x):
    r"""Special values shared by the odd functions sin and tan."""
    if x.is_inf():
        return IterationResult(BigFloat.inf(1, x.prec), True, 0)
    if x.is_zero():
        return IterationResult(x.copy(), True, 0)
    return None


def _special_cos(x):
    if x.is_inf():
        return IterationResult(BigFloat.inf(1, x.prec), True, 0)
    if x.is_zero():
        return IterationResult(BigFloat.one(x.prec), True, 0)
    return None


def sin_taylor_result(x):
    r"""Sine by the Taylor series on `[0, pi/4]`."""
    res = _sentinel_or_zero(x)
    if res is not None:
        return res
    wp = _wp(x)
    r, tr = reduce_sin(x, wp, fold=True)
    res = (_cos_series if tr.cofunction else _sin_series)(r, wp)
    return _finish(res, tr, x.prec, "taylor")


def sin_cordic_result(x):
    r"""Sine by CORDIC rotations."""
    res = _sentinel_or_zero(x)
    if res is not None:
        return res
    wp = _wp(x)
    r, tr = reduce_sin(x, wp, fold=True)
    res = cordic_rotate(r, wp)
    res.value = res.value[0 if tr.cofunction else 1]
    return _finish(res, tr, x.prec, "cordic")


def cos_taylor_result(x):
    r"""Cosine by the Taylor series on `[0, pi/4]`."""
    res = _special_cos(x)
    if res is not None:
        return res
    wp = _wp(x)
    r, tr = reduce_cos(x, wp, fold=True)
    res = (_sin_series if tr.cofunction else _cos_series)(r, wp)
    return _finish(res, tr, x.prec, "taylor")


def cos_cordic_result(x):
    r"""Cosine by CORDIC rotations."""
    res = _special_cos(x)
    if res is not None:
        return res
    wp = _wp(x)
    r, tr = reduce_cos(x, wp, fold=True)
    res = cordic_rotate(r, wp)
    res.value = res.value[1 if tr.cofunction else 0]
    return _finish(res, tr, x.prec, "cordic")


## Largest precision for which the polynomial strategies are accurate.
POLYNOMIAL_MAX_PRECISION = 53

## Cephes coefficients of `(sin(z) - z) / z^3` in powers of `z^2`, highest
## first, for `z` in `[0, pi/4]`.
SIN_POLYNOMIAL = (
    1.58962301576546568060e-10,
    -2.50507477628578072866e-8,
    2.75573136213857245213e-6,
    -1.98412698295895385996e-4,
    8.33333333332211858878e-3,
    -1.66666666666666307295e-1,
)

## Cephes coefficients of `(cos(z) - 1 + z^2/2) / z^4` in powers of `z^2`,
## highest first.
COS_POLYNOMIAL = (
    -1.13585365213876817300e-11,
    2.08757008419747316778e-9,
    -2.75573141792967388112e-7,
    2.48015872888517045348e-5,
    -1.38888888888730564116e-3,
    4.16666666666665929218e-2,
)


def _horner(coeffs, z2, prec):
    p = BigFloat(coeffs[0], prec)
    for c in coeffs[1:]:
        p = p.mul(z2, prec).add(c, prec)
    return p


def _sin_polynomial(r, prec):
    z2 = r.mul(r, prec)
    value = r.add(r.mul(z2, prec).mul(_horner(SIN_POLYNOMIAL, z2, prec), prec),
                  prec)
    return IterationResult(value, True, len(SIN_POLYNOMIAL))


def _cos_polynomial(r, prec):
    z2 = r.mul(r, prec)
    value = BigFloat.one(prec).sub(z2.shift(-1), prec).add(
        z2.mul(z2, prec).mul(_horner(COS_POLYNOMIAL, z2, prec), prec), prec)
    return IterationResult(value, True, len(COS_POLYNOMIAL))


def _polynomial_result(x, reduce, is_sine):
    wp = _wp(x)
    r, tr = reduce(x, wp, fold=True)
    if tr.cofunction == is_sine:
        res = _cos_polynomial(r, wp)
    else:
        res = _sin_polynomial(r, wp)
    # the coefficients carry double precision only
    res.converged = x.prec <= POLYNOMIAL_MAX_PRECISION
    return _finish(res, tr, x.prec, "polynomial")


def sin_polynomial_result(x):
    r"""Sine by a fixed polynomial on `[0, pi/4]`.

    Uses the minimax polynomials of the Cephes library, as found in many
    `libm` implementations. They are accurate to double precision, so the
    result is only marked as converged for precisions up to
    `POLYNOMIAL_MAX_PRECISION` bits.
    """
    res = _sentinel_or_zero(x)
    if res is not None:
        return res
    return _polynomial_result(x, reduce_sin, True)


def cos_polynomial_result(x):
    r"""Cosine by a fixed polynomial on `[0, pi/4]` (see sin_polynomial_result())."""
    res = _special_cos(x)
    if res is not None:
        return res
    return _polynomial_result(x, reduce_cos, False)


def tan_quotient_result(x):
    r"""Tangent as quotient of sine and cosine."""
    res = _sentinel_or_zero(x)
    if res is not None:
        return res
    xw = x.rounded(_wp(x))
    s = sin_taylor_result(xw)
    c = cos_taylor_result(xw)
    value = s.value.div(c.value).rounded(x.prec)
    return IterationResult(value, s.converged and c.converged,
                           s.iterations + c.iterations, "quotient")


def _tan_coefficient(n, prec):
    r"""Coefficient of `x**(2n-1)` in the Taylor series of the tangent."""
    p, q = bernoulli(2*n)
    four_n = 4**n
    num = (-1)**(n-1) * four_n * (four_n - 1) * p
    return BigFloat.from_rational(num, q * factorial(2*n), prec)


def tan_taylor_result(x):
    r"""Tangent by its Taylor series on `[0, pi/4]`.

    The coefficients are given in terms of the Bernoulli numbers,
    \f[
        \tan x = \sum_{n=1}^\infty
            \frac{(-1)^{n-1} 2^{2n} (2^{2n}-1) B_{2n}}{(2n)!} x^{2n-1}.
    \f]
    """
    res = _sentinel_or_zero(x)
    if res is not None:
        return res
    wp = _wp(x)
    r, tr = reduce_tan(x, wp)
    r2 = r.mul(r, wp)
    ev = SeriesEvaluator(wp, name="taylor")
    res = ev.evaluate(r, lambda t, n: t.mul(r2, wp),
                      lambda t, n: t.mul(_tan_coefficient(n+1, wp), wp))
    return _finish(res, tr, x.prec, "taylor")


def _continued_fraction_depth(r, prec):
    r"""Depth of Lambert's continued fraction needed for `prec` bits."""
    r = max(abs(r.to_float()), 2.0**-prec)
    log2r = math.log2(r)
    n = 1
    bits = 0.0
    while n < 10 * prec:
        bits += 2 * math.log2(2*n + 1) - 2 * log2r
        if bits > prec + 4:
            break
        n += 1
    return n


def tan_continued_fraction_result(x):
    r"""Tangent by Lambert's continued fraction on `[0, pi/4]`.

    \f[
        \tan r = \cfrac{r}{1 - \cfrac{r^2}{3 - \cfrac{r^2}{5 - \cdots}}}
    \f]
    evaluated bottom-up with a depth chosen from the precision.
    """
    res = _sentinel_or_zero(x)
    if res is not None:
        return res
    wp = _wp(x)
    r, tr = reduce_tan(x, wp)
    r2 = r.mul(r, wp)
    depth = _continued_fraction_depth(r, wp)
    d = BigFloat(2*depth + 1, wp)
    for k in range(depth, 0, -1):
        d = BigFloat(2*k - 1, wp).sub(r2.div(d, wp), wp)
    res = IterationResult(r.div(d, wp), True, depth)
    return _finish(res, tr, x.prec, "continued_fraction")


def tan_cordic_result(x):
    r"""Tangent as quotient of the CORDIC rotation coordinates."""
    res = _sentinel_or_zero(x)
    if res is not None:
        return res
    wp = _wp(x)
    r, tr = reduce_tan(x, wp)
    res = cordic_rotate(r, wp)
    c, s = res.value
    res.value = s.div(c, wp)
    return _finish(res, tr, x.prec, "cordic")


## Sine strategies by name.
SIN_METHODS = dict(
    taylor=sin_taylor_result,
    cordic=sin_cordic_result,
    polynomial=sin_polynomial_result,
)

## Cosine strategies by name.
COS_METHODS = dict(
    taylor=cos_taylor_result,
    cordic=cos_cordic_result,
    polynomial=cos_polynomial_result,
)

## Tangent strategies by name.
TAN_METHODS = dict(
    quotient=tan_quotient_result,
    taylor=tan_taylor_result,
    continued_fraction=tan_continued_fraction_result,
    cordic=tan_cordic_result,
)


def _value(res, name, x):
    if not res.converged:
        logger.warning("%s(%s) using %s did not converge in %d steps",
                       name, x, res.method, res.iterations)
    return res.value


def _dispatch(name, methods, default, x, method):
    if method is None:
        if x.prec >= settings.cordic_min_precision:
            method = "cordic"
        else:
            method = default
    try:
        strategy = methods[method]
    except KeyError:
        raise ValueError("Unknown %s method: %s" % (name, method))
    logger.debug("%s: using %s at %d bits", name, method, x.prec)
    return _value(strategy(x), name, x)


def sin(x, method=None):
    r"""Sine at the precision of `x`.

    @param x
        Angle (BigFloat).
    @param method
        Optional name of a strategy in SIN_METHODS.
    """
    return _dispatch("sin", SIN_METHODS, "taylor", x, method)


def cos(x, method=None):
    r"""Cosine at the precision of `x` (see sin())."""
    return _dispatch("cos", COS_METHODS, "taylor", x, method)


def tan(x, method=None):
    r"""Tangent at the precision of `x` (see sin()).

    At the poles, the result is a signed infinity if the reduced angle
    happens to be exactly `pi/2` and a large finite value otherwise.
    """
    return _dispatch("tan", TAN_METHODS, "quotient", x, method)


def sin_taylor(x):
    return _value(sin_taylor_result(x), "sin", x)


def sin_cordic(x):
    return _value(sin_cordic_result(x), "sin", x)


def cos_taylor(x):
    return _value(cos_taylor_result(x), "cos", x)


def cos_cordic(x):
    return _value(cos_cordic_result(x), "cos", x)


def sin_polynomial(x):
    return _value(sin_polynomial_result(x), "sin", x)


def cos_polynomial(x):
    return _value(cos_polynomial_result(x), "cos", x)


def tan_quotient(x):
    return _value(tan_quotient_result(x), "tan", x)


def tan_taylor(x):
    return _value(tan_taylor_result(x), "tan", x)


def tan_continued_fraction(x):
    return _value(tan_continued_fraction_result(x), "tan", x)


def tan_cordic(x):
    return _value(tan_cordic_result(x), "tan", x)


def atan_result(x):
    r"""Arctangent returning an IterationResult.

    For `|x| > 1` we use \f$ \arctan x = \pm\pi/2 - \arctan(1/x) \f$. The
    argument is then halved via
    \f$ \arctan x = 2 \arctan\frac{x}{1 + \sqrt{1+x^2}} \f$
    until it is below `1/8`, where the series converges quickly.
    """
    prec = x.prec
    if x.is_zero():
        return IterationResult(x.copy(), True, 0, "atan")
    if x.is_inf():
        value = pi(prec + 1).shift(-1).rounded(prec)
        return IterationResult(value.neg() if x.signbit else value, True, 0,
                               "atan")
    wp = working_precision(prec, 4)
    a = x.abs().rounded(wp)
    reciprocal = a > 1
    if reciprocal:
        a = BigFloat.one(wp).div(a, wp)
    halvings = 0
    one = BigFloat.one(wp)
    while a > 0.125:
        a = a.div(one.add(one.add(a.mul(a, wp), wp).sqrt(wp), wp), wp)
        halvings += 1
    res = atan_series(a, wp)
    value = res.value.shift(halvings)
    if reciprocal:
        value = pi(wp).shift(-1).sub(value, wp)
    if x.signbit:
        value = value.neg()
    res.value = value.rounded(prec)
    return res


def atan(x):
    r"""Arctangent at the precision of `x`."""
    return _value(atan_result(x), "atan", x)


def _asin_series(a, prec):
    a2 = a.mul(a, prec)
    ev = SeriesEvaluator(prec, name="asin")
    return ev.evaluate(
        a,
        lambda t, n: t.mul(a2, prec).mul(2*n - 1, prec).div(2*n, prec),
        lambda t, n: t.div(2*n + 1, prec) if n else t,
    )


def _check_unit_interval(x, name):
    if not x.abs() <= 1:
        raise DomainError("%s argument outside [-1, 1]: %s" % (name, x))


def asin_result(x):
    r"""Arcsine returning an IterationResult.

    For `|x| <= 1/2` the series
    \f[
        \arcsin x = \sum_{n=0}^\infty
            \frac{(2n)!}{4^n (n!)^2 (2n+1)} x^{2n+1}
    \f]
    is used directly. Otherwise we use
    \f$ \arcsin x = \pi/2 - 2 \arcsin\sqrt{(1-x)/2} \f$ for `x > 0`.

    @raise DomainError for `|x| > 1`.
    """
    _check_unit_interval(x, "asin")
    prec = x.prec
    if x.is_zero():
        return IterationResult(x.copy(), True, 0, "asin")
    wp = working_precision(prec, 4)
    a = x.abs().rounded(wp)
    if a == 1:
        res = IterationResult(pi(wp).shift(-1), True, 0, "asin")
    elif a > 0.5:
        y = BigFloat.one(wp).sub(a, wp).shift(-1).sqrt(wp)
        res = _asin_series(y, wp)
        res.value = pi(wp).shift(-1).sub(res.value.shift(1), wp)
    else:
        res = _asin_series(a, wp)
    if x.signbit:
        res.value = res.value.neg()
    res.value = res.value.rounded(prec)
    return res


def asin(x):
    r"""Arcsine at the precision of `x`."""
    return _value(asin_result(x), "asin", x)


def acos(x):
    r"""Arccosine at the precision of `x`.

    @raise DomainError for `|x| > 1`.
    """
    _check_unit_interval(x, "acos")
    prec = x.prec
    wp = working_precision(prec, 4)
    value = _value(asin_result(x.rounded(wp)), "acos", x)
    return pi(wp).shift(-1).sub(value, wp).rounded(prec)
