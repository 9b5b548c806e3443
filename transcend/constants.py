r"""@package transcend.constants

Mathematical constants and the arctangent lookup table.

The constants `pi`, `e` and `ln(2)` are computed once at a fixed precision
(`constants_precision` in ..config, 1000 bits by default) on first access.
The accessors always return new objects, rounded to the requested precision,
so the shared values can never be modified. Requesting more than the stored
precision computes the constant anew (without caching).

The arctangent table holds `atan(2**-i)` for `i = 0, ..., N-1` as needed by
the CORDIC rotations in .core.cordic. It is built lazily on first use, too.

Initialisation is guarded by a lock, so concurrent first calls from
different threads compute the values only once. Afterwards, reads need no
synchronisation since the stored objects are never modified.

Formulas used:
    * Machin's formula \f$ \pi = 16 \arctan\frac15 - 4 \arctan\frac1{239} \f$
    * \f$ e = \sum_n 1/n! \f$
    * \f$ \ln 2 = 2 \operatorname{artanh}\frac13 \f$
"""

import logging
import threading

from .bigfloat import BigFloat
from .config import settings
from .core.series import SeriesEvaluator, atan_series


__all__ = [
    "pi",
    "e",
    "ln2",
    "arctan_entry",
    "arctan_table",
]


logger = logging.getLogger(__name__)

_lock = threading.Lock()
_stored = None
_table = None


def compute_pi(prec):
    r"""Compute pi at `prec` bits using Machin's formula."""
    wp = prec + settings.guard_bits
    a = atan_series(BigFloat.from_rational(1, 5, wp), wp).value
    b = atan_series(BigFloat.from_rational(1, 239, wp), wp).value
    return a.shift(4).sub(b.shift(2), wp).rounded(prec)


def compute_e(prec):
    r"""Compute Euler's number at `prec` bits by summing `1/n!`."""
    wp = prec + settings.guard_bits
    one = BigFloat.one(wp)
    res = SeriesEvaluator(wp, name="e").evaluate(one, lambda t, n: t.div(n, wp))
    return res.value.rounded(prec)


def compute_ln2(prec):
    r"""Compute `ln(2)` at `prec` bits."""
    wp = prec + settings.guard_bits
    res = atan_series(BigFloat.from_rational(1, 3, wp), wp, hyperbolic=True)
    return res.value.shift(1).rounded(prec)


def compute_arctan_entry(i, prec):
    r"""Compute `atan(2**-i)` at `prec` bits."""
    if i == 0:
        return compute_pi(prec + 2).shift(-2).rounded(prec)
    wp = prec + settings.guard_bits
    x = BigFloat.from_man_exp(1, -i, wp)
    return atan_series(x, wp).value.rounded(prec)


def _constants():
    global _stored
    if _stored is None:
        with _lock:
            if _stored is None:
                prec = settings.constants_precision
                logger.debug("Computing constants at %d bits", prec)
                _stored = dict(
                    pi=compute_pi(prec),
                    e=compute_e(prec),
                    ln2=compute_ln2(prec),
                )
    return _stored


def _get(name, prec, compute):
    if prec is None:
        return _constants()[name].copy()
    if prec <= settings.constants_precision:
        return _constants()[name].rounded(prec)
    return compute(prec)


def pi(prec=None):
    r"""Return pi rounded to `prec` bits (default: stored precision)."""
    return _get("pi", prec, compute_pi)


def e(prec=None):
    r"""Return Euler's number rounded to `prec` bits."""
    return _get("e", prec, compute_e)


def ln2(prec=None):
    r"""Return the natural logarithm of 2 rounded to `prec` bits."""
    return _get("ln2", prec, compute_ln2)


def arctan_table():
    r"""Return the tuple of stored `atan(2**-i)` values."""
    global _table
    if _table is None:
        with _lock:
            if _table is None:
                size = settings.atan_table_size
                prec = settings.atan_table_precision
                logger.debug("Building arctangent table (%d entries, %d bits)",
                             size, prec)
                _table = tuple(compute_arctan_entry(i, prec)
                               for i in range(size))
    return _table


def arctan_entry(i, prec):
    r"""Return `atan(2**-i)` at `prec` bits.

    Indices beyond the table use the approximation `atan(2**-i) = 2**-i`,
    which is accurate to about `2**(-3i)`. Entries requested at a higher
    precision than stored are computed directly.
    """
    if i >= settings.atan_table_size:
        return BigFloat.from_man_exp(1, -i, prec)
    if prec > settings.atan_table_precision:
        return compute_arctan_entry(i, prec)
    return arctan_table()[i].rounded(prec)
