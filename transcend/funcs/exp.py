r"""@package transcend.funcs.exp

Exponential function.

The argument is split as \f$ x = k \ln 2 + r \f$ with an integer `k` and
\f$ |r| \le \ln(2)/2 \f$. The Taylor series of \f$ e^r \f$ then converges
quickly and multiplication by \f$ 2^k \f$ is exact.

Arguments beyond `+-exp_limit` (see ..config) overflow to `+inf` or
underflow to `+0`.
"""

import logging

from ..bigfloat import BigFloat
from ..config import settings
from ..constants import ln2
from ..core.series import SeriesEvaluator
from ..numutils import IterationResult
from ..precision import working_precision


__all__ = [
    "exp",
    "exp_result",
]


logger = logging.getLogger(__name__)


def _special(x):
    if x.is_zero():
        return BigFloat.one(x.prec)
    if x.is_inf():
        return BigFloat.zero(x.prec) if x.signbit else x.copy()
    limit = settings.exp_limit
    if x > limit:
        return BigFloat.inf(1, x.prec)
    if x < -limit:
        return BigFloat.zero(x.prec)
    return None


def exp_result(x):
    r"""Compute `exp(x)` returning an IterationResult."""
    value = _special(x)
    if value is not None:
        return IterationResult(value, True, 0, "exp")
    prec = x.prec
    wp = working_precision(prec, abs(x.to_int()).bit_length())
    k = x.div(ln2(wp), wp).nint()
    wp_k = wp + abs(k).bit_length()
    r = x.sub(ln2(wp_k).mul(k, wp_k), wp)
    res = SeriesEvaluator(wp, name="exp").evaluate(
        BigFloat.one(wp),
        lambda t, n: t.mul(r, wp).div(n, wp),
    )
    res.value = res.value.shift(k).rounded(prec)
    return res


def exp(x):
    r"""Exponential function at the precision of `x`.

    `exp(+-0)` is exactly one.

    @b Examples

    ```
        >>> exp(BigFloat(1, prec=64))
        BigFloat('2.71828182845904524', prec=64)
    ```
    """
    res = exp_result(x)
    if not res.converged:
        logger.warning("exp(%s) did not converge in %d terms",
                       x, res.iterations)
    return res.value
