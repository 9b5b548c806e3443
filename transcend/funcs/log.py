r"""@package transcend.funcs.log

Natural logarithm.

Three strategies are available, each returning an IterationResult:
    * log_newton_result(): Newton iteration inverting the exponential
    * log_halley_result(): Halley iteration inverting the exponential
    * log_taylor_result(): Taylor series of `log(1+u)` after scaling the
      argument by a power of two into `[1/2, 2]`

The dispatcher log() uses Newton for arguments up to `log_halley_threshold`
(see ..config) and Halley above. Arguments whose binary exponent lies
outside the range of native floats are scaled by a power of two `2**k`
before iterating and `k*ln(2)` is added to the result.

All strategies raise a DomainError for `x <= 0` (including `-0`), return
`+inf` for `+inf` and exactly zero for `x == 1`.
"""

import logging

from ..bigfloat import BigFloat
from ..config import settings
from ..constants import ln2
from ..core.series import SeriesEvaluator
from ..numutils import IterationResult, DomainError
from ..precision import working_precision
from .rootfind import newton_log, halley_log


__all__ = [
    "log",
    "log_newton",
    "log_halley",
    "log_taylor",
    "log_newton_result",
    "log_halley_result",
    "log_taylor_result",
    "LOG_METHODS",
]


logger = logging.getLogger(__name__)


## Arguments with a binary exponent larger than this (in magnitude) are
## scaled before the root finders are applied.
SCALE_EXPONENT = 1000


def _special(x):
    if x.signbit or x.is_zero():
        raise DomainError("Logarithm of non-positive number %s" % x)
    if x.is_inf():
        return x.copy()
    if x == 1:
        return BigFloat.zero(x.prec)
    return None


def _add_multiple_of_ln2(res, k, prec):
    if k:
        wp = working_precision(prec, abs(k).bit_length())
        res.value = res.value.add(ln2(wp).mul(k, wp), wp)
    res.value = res.value.rounded(prec)
    return res


def _scaled(solver, x):
    k = x.exponent
    if abs(k) <= SCALE_EXPONENT:
        return solver(x)
    prec = x.prec
    wp = working_precision(prec, abs(k).bit_length())
    res = solver(x.shift(-k).rounded(wp))
    return _add_multiple_of_ln2(res, k, prec)


def log_newton_result(x):
    r"""Logarithm by Newton iteration."""
    value = _special(x)
    if value is not None:
        return IterationResult(value, True, 0, "newton")
    return _scaled(newton_log, x)


def log_halley_result(x):
    r"""Logarithm by Halley iteration."""
    value = _special(x)
    if value is not None:
        return IterationResult(value, True, 0, "halley")
    return _scaled(halley_log, x)


def log_taylor_result(x):
    r"""Logarithm by the Taylor series of `log(1+u)`.

    The argument is first scaled by a power of two into `[1/2, 2]`. If then
    `|u| = |x/2^k - 1|` exceeds `1/2`, the series would converge too slowly
    and Newton's method is used instead.

    The partial sums are compared every `log_taylor_check_every` terms (see
    ..config) to detect convergence.
    """
    value = _special(x)
    if value is not None:
        return IterationResult(value, True, 0, "taylor")
    k = 0
    if x > 2:
        k = x.exponent - 1
    elif x < 0.5:
        k = x.exponent
    prec = x.prec
    wp = working_precision(prec)
    u = x.shift(-k).sub(1, wp)
    if u.abs() > 0.5:
        logger.debug("log_taylor: |u| = %s too large, using Newton", u.abs())
        return log_newton_result(x)
    ev = SeriesEvaluator(wp, alternating=True,
                         check_every=settings.log_taylor_check_every,
                         name="taylor")
    res = ev.evaluate(u, lambda t, n: t.mul(u, wp),
                      lambda t, n: t.div(n + 1, wp))
    return _add_multiple_of_ln2(res, k, prec)


def _value(res, x):
    if not res.converged:
        logger.warning("log(%s) using %s did not converge in %d steps",
                       x, res.method, res.iterations)
    return res.value


def log_newton(x):
    return _value(log_newton_result(x), x)


def log_halley(x):
    return _value(log_halley_result(x), x)


def log_taylor(x):
    return _value(log_taylor_result(x), x)


## Available strategies by name.
LOG_METHODS = dict(
    newton=log_newton_result,
    halley=log_halley_result,
    taylor=log_taylor_result,
)


def log(x, method=None):
    r"""Natural logarithm at the precision of `x`.

    @param x
        Positive BigFloat.
    @param method
        Force one of the strategies in LOG_METHODS. By default, Newton's
        method is used for `x <= log_halley_threshold` and Halley's method
        above.

    @b Examples

    ```
        >>> log(BigFloat(10, prec=64))
        BigFloat('2.30258509299404568', prec=64)
        >>> log(BigFloat(1, prec=64))
        BigFloat('0.0', prec=64)
    ```
    """
    value = _special(x)
    if value is not None:
        return value
    if method is None:
        method = "newton" if x <= settings.log_halley_threshold else "halley"
    try:
        strategy = LOG_METHODS[method]
    except KeyError:
        raise ValueError("Unknown logarithm method: %s" % method)
    logger.debug("log(%s): using %s", x, method)
    return _value(strategy(x), x)
