r"""@package transcend.bigfloat

Arbitrary-precision real numbers with signed zeros and infinities.

BigFloat wraps a raw `mpmath` floating point tuple (see `mpmath.libmp`) and
attaches a fixed bit-precision to it. All arithmetic results are rounded to
nearest at the precision of the operands (the larger one if they differ) or
at an explicitly given precision. In contrast to `mpmath.mpf`, this type
distinguishes `+0` and `-0` and has no NaN. Operations without a defined
result raise an UndefinedOperationError.

Values are immutable. Since the raw tuple is stored as `_mpf_`, BigFloat
objects can be passed to most `mpmath` functions directly.

@b Examples

```
    >>> x = BigFloat(2, prec=100)
    >>> print(x.sqrt())
    1.4142135623730950488016887242
    >>> BigFloat(-1) * BigFloat(0)
    BigFloat('-0.0', prec=53)
    >>> (BigFloat(1) / BigFloat('-0')).is_inf()
    True
```
"""

import math
import numbers

import numpy as np
from mpmath import mp
from mpmath.libmp import (
    from_int, from_float, from_str, from_rational, from_man_exp,
    to_float, to_int, to_str, prec_to_dps,
    mpf_add, mpf_mul, mpf_div, mpf_sqrt, mpf_neg, mpf_abs, mpf_cmp,
    mpf_shift, mpf_pos, mpf_floor, mpf_hash,
    fzero, fone, finf, fninf, fnan, round_nearest,
)

from .config import settings
from .numutils import UndefinedOperationError


__all__ = [
    "BigFloat",
    "bigfloat",
]


RND = round_nearest


def _signbit(raw, negzero):
    if raw == fzero:
        return negzero
    return raw[0] == 1


def _neg(raw, negzero):
    if raw == fzero:
        return raw, not negzero
    return mpf_neg(raw), False


def _to_raw(value):
    r"""Convert a supported number to `(raw, negzero, prec)`.

    The conversion of numbers other than BigFloat is exact and `prec` is
    `None` for them.
    """
    if isinstance(value, BigFloat):
        return value._mpf_, value._negzero, value._prec
    if isinstance(value, (numbers.Integral, np.integer)):
        return from_int(int(value)), False, None
    if isinstance(value, (float, np.floating)):
        value = float(value)
        if math.isnan(value):
            raise UndefinedOperationError("NaN cannot be represented.")
        return from_float(value), math.copysign(1.0, value) < 0, None
    raw = getattr(value, "_mpf_", None)
    if raw is not None:
        if raw == fnan:
            raise UndefinedOperationError("NaN cannot be represented.")
        return raw, False, None
    raise TypeError("Cannot convert %s to BigFloat" % type(value).__name__)


class BigFloat(object):
    r"""Immutable real number with a fixed bit-precision.

    Public attributes are read-only; use the arithmetic methods (or
    operators) to derive new values.
    """

    __slots__ = ("_mpf_", "_prec", "_negzero")

    def __init__(self, value=0, prec=None):
        r"""Create a number from an int, float, string, mpf or BigFloat.

        @param value
            Value to convert. Strings may contain decimal numbers in any
            format `mpmath` understands as well as ``"inf"``/``"-inf"``.
        @param prec
            Bit-precision of the new number. Default is to take the
            precision of a BigFloat `value` or the configured
            `default_precision` otherwise.
        """
        if prec is None:
            if isinstance(value, BigFloat):
                prec = value._prec
            else:
                prec = settings.default_precision
        prec = int(prec)
        if prec < 1:
            raise ValueError("Precision must be positive, got %s" % prec)
        if isinstance(value, str):
            text = value.strip()
            try:
                raw = from_str(text, prec, RND)
            except ValueError:
                raise ValueError("Cannot convert %r to BigFloat" % value)
            if raw == fnan:
                raise UndefinedOperationError("NaN cannot be represented.")
            negzero = text.startswith("-")
        else:
            raw, negzero, _ = _to_raw(value)
            raw = mpf_pos(raw, prec, RND)
        self._mpf_ = raw
        self._prec = prec
        self._negzero = negzero and raw == fzero

    @classmethod
    def _new(cls, raw, prec, negzero=False):
        obj = object.__new__(cls)
        obj._mpf_ = raw
        obj._prec = prec
        obj._negzero = negzero and raw == fzero
        return obj

    @classmethod
    def inf(cls, sign=1, prec=None):
        r"""Positive (`sign >= 0`) or negative infinity."""
        return cls._new(finf if sign >= 0 else fninf,
                        prec or settings.default_precision)

    @classmethod
    def zero(cls, prec=None, negative=False):
        r"""Signed zero."""
        return cls._new(fzero, prec or settings.default_precision, negative)

    @classmethod
    def one(cls, prec=None):
        return cls._new(fone, prec or settings.default_precision)

    @classmethod
    def from_rational(cls, p, q, prec=None):
        r"""Correctly rounded value of the fraction `p/q` of two integers."""
        prec = prec or settings.default_precision
        if q == 0:
            if p == 0:
                raise UndefinedOperationError("0/0")
            return cls.inf(1 if p > 0 else -1, prec)
        if q < 0:
            p, q = -p, -q
        return cls._new(from_rational(int(p), int(q), prec, RND), prec)

    @classmethod
    def from_man_exp(cls, man, exp, prec=None):
        r"""Value `man * 2**exp` rounded to `prec` bits."""
        prec = prec or settings.default_precision
        return cls._new(from_man_exp(int(man), int(exp), prec, RND), prec)

    @property
    def prec(self):
        r"""Bit-precision of this number."""
        return self._prec

    @property
    def signbit(self):
        r"""Whether the sign bit is set (also for `-0` and `-inf`)."""
        return _signbit(self._mpf_, self._negzero)

    @property
    def exponent(self):
        r"""Binary exponent `e` such that `x = m * 2**e` with `0.5 <= |m| < 1`.

        Zero and infinities have an exponent of `0`.
        """
        sign, man, exp, bc = self._mpf_
        if not man:
            return 0
        return exp + bc

    def man_exp(self):
        r"""Return the signed integer mantissa and exponent of a finite value."""
        if not self.is_finite():
            raise ValueError("Infinity has no mantissa.")
        sign, man, exp, bc = self._mpf_
        man = int(man)
        return (-man if sign else man), int(exp)

    def sign(self):
        r"""Return `-1`, `0` or `1` (zeros of either sign give `0`)."""
        if self._mpf_ == fzero:
            return 0
        return -1 if self._mpf_[0] else 1

    def is_zero(self):
        return self._mpf_ == fzero

    def is_inf(self):
        return self._mpf_ in (finf, fninf)

    def is_finite(self):
        return not self.is_inf()

    def is_integer(self):
        r"""Whether the value is a finite integer."""
        sign, man, exp, bc = self._mpf_
        if not man:
            return self._mpf_ == fzero
        return exp >= 0

    def copy(self):
        return BigFloat._new(self._mpf_, self._prec, self._negzero)

    def rounded(self, prec):
        r"""Return the value rounded to a different precision."""
        return BigFloat._new(mpf_pos(self._mpf_, prec, RND), prec,
                             self._negzero)

    def _prec_with(self, other_prec, prec):
        if prec:
            return prec
        if other_prec is None:
            return self._prec
        return max(self._prec, other_prec)

    def add(self, other, prec=None):
        t, tneg, tprec = _to_raw(other)
        return self._add(t, tneg, self._prec_with(tprec, prec))

    def sub(self, other, prec=None):
        t, tneg, tprec = _to_raw(other)
        t, tneg = _neg(t, tneg)
        return self._add(t, tneg, self._prec_with(tprec, prec))

    def _add(self, t, tneg, prec):
        s = self._mpf_
        r = mpf_add(s, t, prec, RND)
        if r == fnan:
            raise UndefinedOperationError("inf - inf")
        negzero = s == fzero and t == fzero and self._negzero and tneg
        return BigFloat._new(r, prec, negzero)

    def mul(self, other, prec=None):
        t, tneg, tprec = _to_raw(other)
        prec = self._prec_with(tprec, prec)
        r = mpf_mul(self._mpf_, t, prec, RND)
        if r == fnan:
            raise UndefinedOperationError("0 * inf")
        return BigFloat._new(r, prec, self.signbit != _signbit(t, tneg))

    def div(self, other, prec=None):
        t, tneg, tprec = _to_raw(other)
        prec = self._prec_with(tprec, prec)
        s = self._mpf_
        neg = self.signbit != _signbit(t, tneg)
        if t == fzero:
            if s == fzero:
                raise UndefinedOperationError("0 / 0")
            return BigFloat.inf(-1 if neg else 1, prec)
        t_inf = t in (finf, fninf)
        if self.is_inf():
            if t_inf:
                raise UndefinedOperationError("inf / inf")
            return BigFloat.inf(-1 if neg else 1, prec)
        if s == fzero or t_inf:
            return BigFloat.zero(prec, neg)
        return BigFloat._new(mpf_div(s, t, prec, RND), prec)

    def neg(self):
        raw, negzero = _neg(self._mpf_, self._negzero)
        return BigFloat._new(raw, self._prec, negzero)

    def abs(self):
        return BigFloat._new(mpf_abs(self._mpf_), self._prec)

    def sqrt(self, prec=None):
        r"""Square root (`sqrt(-0) = -0`)."""
        prec = prec or self._prec
        if self._mpf_ == fzero:
            return BigFloat.zero(prec, self._negzero)
        if self._mpf_[0]:
            raise UndefinedOperationError("Square root of negative number")
        return BigFloat._new(mpf_sqrt(self._mpf_, prec, RND), prec)

    def shift(self, n):
        r"""Multiply by `2**n` exactly."""
        return BigFloat._new(mpf_shift(self._mpf_, int(n)), self._prec,
                             self._negzero)

    def to_float(self):
        r"""Nearest native float (`+-inf` on overflow)."""
        if self._negzero:
            return -0.0
        return to_float(self._mpf_, False, RND)

    def to_int(self):
        r"""Integer part (rounding towards zero)."""
        if self.is_inf():
            raise OverflowError("Cannot convert infinity to integer.")
        return int(to_int(self._mpf_))

    def floor(self):
        r"""Largest integer not greater than the value."""
        if self.is_inf():
            raise OverflowError("Cannot convert infinity to integer.")
        return int(to_int(mpf_floor(self._mpf_)))

    def nint(self):
        r"""Nearest integer (halfway cases rounded up)."""
        if self.is_inf():
            raise OverflowError("Cannot convert infinity to integer.")
        return int(to_int(mpf_floor(mpf_add(self._mpf_, from_man_exp(1, -1)))))

    def to_mpf(self):
        r"""Convert to an `mpmath.mpf` without rounding."""
        return mp.make_mpf(self._mpf_)

    def cmp(self, other):
        r"""Return `-1`, `0` or `1` comparing to another number."""
        t, _, _ = _to_raw(other)
        return mpf_cmp(self._mpf_, t)

    def _try_cmp(self, other):
        try:
            return self.cmp(other)
        except TypeError:
            return NotImplemented

    def __eq__(self, other):
        c = self._try_cmp(other)
        return c if c is NotImplemented else c == 0

    def __ne__(self, other):
        c = self._try_cmp(other)
        return c if c is NotImplemented else c != 0

    def __lt__(self, other):
        c = self._try_cmp(other)
        return c if c is NotImplemented else c < 0

    def __le__(self, other):
        c = self._try_cmp(other)
        return c if c is NotImplemented else c <= 0

    def __gt__(self, other):
        c = self._try_cmp(other)
        return c if c is NotImplemented else c > 0

    def __ge__(self, other):
        c = self._try_cmp(other)
        return c if c is NotImplemented else c >= 0

    def __hash__(self):
        return mpf_hash(self._mpf_)

    def __bool__(self):
        return self._mpf_ != fzero

    def __float__(self):
        return self.to_float()

    def __int__(self):
        return self.to_int()

    def __neg__(self):
        return self.neg()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.abs()

    def __add__(self, other):
        try:
            return self.add(other)
        except TypeError:
            return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        try:
            return self.sub(other)
        except TypeError:
            return NotImplemented

    def __rsub__(self, other):
        try:
            return self.neg().add(other)
        except TypeError:
            return NotImplemented

    def __mul__(self, other):
        try:
            return self.mul(other)
        except TypeError:
            return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        try:
            return self.div(other)
        except TypeError:
            return NotImplemented

    def __rtruediv__(self, other):
        try:
            t, tneg, _ = _to_raw(other)
        except TypeError:
            return NotImplemented
        return BigFloat._new(t, self._prec, tneg).div(self)

    def __str__(self):
        if self._mpf_ == finf:
            return "inf"
        if self._mpf_ == fninf:
            return "-inf"
        if self._negzero:
            return "-0.0"
        return to_str(self._mpf_, prec_to_dps(self._prec))

    def __repr__(self):
        return "BigFloat('%s', prec=%d)" % (self, self._prec)


def bigfloat(value, prec=None):
    r"""Return `value` as BigFloat, avoiding a copy if it already is one.

    In contrast to the BigFloat constructor, a given precision is applied
    to BigFloat values as well.
    """
    if isinstance(value, BigFloat):
        if prec is None or prec == value.prec:
            return value
        return value.rounded(prec)
    return BigFloat(value, prec)
