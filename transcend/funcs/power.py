r"""@package transcend.funcs.power

Powers `x**y` of arbitrary-precision numbers.

power() classifies `(x, y)` by the following cases, in this order (the
first match wins):

 1. `y == 0`: one, for any `x` (including zero and infinity)
 2. `x == 1`: one, for any `y` (including infinity)
 3. `y == 1`: `x` unchanged
 4. `x == +-0`:
      - `y < 0` odd integer: infinity with the sign of `x`
      - other `y < 0` (including `-inf`): `+inf`
      - `y == +inf`: `+0`
      - `y > 0` odd integer: zero with the sign of `x`
      - other `y > 0`: `+0`
 5. `x == -1` and `y` infinite: one
 6. `y` infinite: `+inf` or `+0` depending on whether `|x| > 1` and the
    sign of `y`
 7. `x` infinite: `-inf` is handled as case 4 for `(-0, -y)`; `+inf` gives
    `+inf` for `y > 0` and `+0` for `y < 0`
 8. `x < 0` and `y` not an integer: undefined, the sentinel `+inf`
 9. `y` an integer with `|y| < pow_int_limit` (see ..config): binary
    exponentiation via power_int()
 10. otherwise: `exp(y * log(x))` (for negative `x` and huge integer `y`,
     computed for `|x|` and negated for odd `y`)

The result has the larger of the precisions of `x` and `y`.

power_checked() returns a ..numutils.TaggedResult distinguishing the
sentinel of case 8 from an overflow of the exponential in case 10.

@b Examples

```
    >>> power(BigFloat(2), BigFloat(10))
    BigFloat('1024.0', prec=53)
    >>> power(BigFloat(-2), BigFloat(0.5))
    BigFloat('inf', prec=53)
    >>> power_checked(BigFloat(-2), BigFloat(0.5)).status
    'undefined'
```
"""

import logging
import math

from ..bigfloat import BigFloat
from ..config import settings
from ..numutils import TaggedResult
from ..precision import working_precision
from .exp import exp
from .log import log


__all__ = [
    "power",
    "power_int",
    "power_checked",
    "power_float64",
    "is_odd_integer",
]


logger = logging.getLogger(__name__)

OK = TaggedResult.OK
UNDEFINED = TaggedResult.UNDEFINED
OVERFLOW = TaggedResult.OVERFLOW


def is_odd_integer(y):
    r"""Whether `y` is a finite odd integer (positive or negative)."""
    if y.is_zero() or not y.is_integer():
        return False
    # normalized mantissas are odd, so y is even whenever exp_ > 0
    man, exp_ = y.man_exp()
    return exp_ == 0 and man % 2 == 1


def power_int(x, n):
    r"""Compute `x**n` for a machine integer `n` by binary exponentiation.

    The intermediate products are computed with enough extra bits that the
    result is accurate to the precision of `x`; small exact powers like
    `2**10` are exact.

    Zeros and infinities follow the usual sign rules, e.g.
    `power_int(-0, -3) == -inf`.
    """
    n = int(n)
    prec = x.prec
    if n == 0:
        return BigFloat.one(prec)
    m = abs(n)
    wp = working_precision(prec, m.bit_length())
    result = BigFloat.one(wp)
    base = x
    while m:
        if m & 1:
            result = result.mul(base, wp)
        m >>= 1
        if m:
            base = base.mul(base, wp)
    if n < 0:
        result = BigFloat.one(wp).div(result, wp)
    return result.rounded(prec)


def _zero_base(x, y, prec):
    if y.signbit:
        if is_odd_integer(y):
            return BigFloat.inf(-1 if x.signbit else 1, prec)
        return BigFloat.inf(1, prec)
    if y.is_inf():
        return BigFloat.zero(prec)
    if is_odd_integer(y):
        return BigFloat.zero(prec, x.signbit)
    return BigFloat.zero(prec)


def _general(a, y, prec):
    r"""Compute `exp(y log(a))` for positive finite `a`."""
    wp = working_precision(prec)
    t = y.mul(log(a.rounded(wp)), wp)
    extra = max(t.exponent, 0)
    if extra and t.is_finite():
        # the exponent amplifies the error of the product
        wp = working_precision(prec, extra)
        t = y.mul(log(a.rounded(wp)), wp)
    return exp(t).rounded(prec)


def _power(x, y):
    prec = max(x.prec, y.prec)
    # 1-3
    if y.is_zero():
        return BigFloat.one(prec), OK
    if x == 1:
        return BigFloat.one(prec), OK
    if y == 1:
        return x.copy(), OK
    # 4
    if x.is_zero():
        return _zero_base(x, y, prec), OK
    # 5, 6
    if y.is_inf():
        if x == -1:
            return BigFloat.one(prec), OK
        if (x.abs() > 1) != y.signbit:
            return BigFloat.inf(1, prec), OK
        return BigFloat.zero(prec), OK
    # 7
    if x.is_inf():
        if x.signbit:
            return _power(BigFloat.zero(x.prec, negative=True), y.neg())
        if y.signbit:
            return BigFloat.zero(prec), OK
        return BigFloat.inf(1, prec), OK
    # 8
    if x.signbit and not y.is_integer():
        return BigFloat.inf(1, prec), UNDEFINED
    # 9
    if y.is_integer() and y.abs() < settings.pow_int_limit:
        return power_int(x.rounded(prec), y.to_int()), OK
    # 10
    logger.debug("power: general case exp(y log x) at %d bits", prec)
    value = _general(x.abs(), y, prec)
    if x.signbit and is_odd_integer(y):
        value = value.neg()
    if value.is_inf():
        return value, OVERFLOW
    return value, OK


def power(x, y):
    r"""Return `x**y` (see the module documentation for special cases).

    Mathematically undefined results (negative base with non-integer
    exponent) are returned as `+inf`.
    """
    return _power(x, y)[0]


def power_checked(x, y):
    r"""Return `x**y` as a ..numutils.TaggedResult with a status."""
    value, status = _power(x, y)
    return TaggedResult(value, status)


def power_float64(x, y):
    r"""Compute `x**y` for native floats at the default precision.

    The arguments are converted exactly to BigFloat with
    `default_precision` (see ..config). NaN arguments give the sentinel
    `+inf`.
    """
    if math.isnan(x) or math.isnan(y):
        return BigFloat.inf(1)
    return power(BigFloat(x), BigFloat(y))
