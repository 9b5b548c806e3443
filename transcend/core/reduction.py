r"""@package transcend.core.reduction

Argument reduction for the trigonometric functions.

The reducers map an arbitrary finite angle into a small interval in which
the series or rotation algorithms converge quickly. Along with the reduced
angle they return a Transform recording what needs to be done with the
function value at the reduced angle to recover the value at the original
angle.

The reduction modulo \f$ 2\pi \f$ (or \f$ \pi \f$) subtracts the period
repeatedly. This keeps the quotient exact,
but takes time proportional to the angle. Beyond
`reduction_max_subtractions` periods (see ..config), the integer quotient is
computed directly at a precision wide enough to hold all of its bits.

When the angle is close to a multiple of \f$ \pi/2 \f$, the reduced angle is
much smaller than the angle itself and its leading bits cancel. The
reducers then repeat the reduction at increasing precision (compare
`mod_pi2` in `mpmath.libmp.libelefun`) until the reduced angle is accurate
relative to its own size.

Quadrant boundaries belong to the quadrant they start, i.e. the quadrants
are \f$ [0,\pi/2), [\pi/2,\pi), [\pi,3\pi/2), [3\pi/2,2\pi) \f$.
"""

import logging

from ..config import settings
from ..constants import pi


__all__ = [
    "Transform",
    "reduce_angle",
    "reduce_sin",
    "reduce_cos",
    "reduce_tan",
    "fold_octant",
]


logger = logging.getLogger(__name__)


class Transform(object):
    r"""Record of operations to apply to a value computed at a reduced angle."""

    __slots__ = ("negate", "reciprocal", "cofunction")

    def __init__(self, negate=False, reciprocal=False, cofunction=False):
        ## Whether the result changes sign.
        self.negate = negate
        ## Whether the reciprocal of the result has to be taken.
        self.reciprocal = reciprocal
        ## Whether the complementary function (cos for sin and vice versa)
        ## has to be evaluated at the reduced angle.
        self.cofunction = cofunction

    def apply(self, value):
        r"""Apply the recorded operations to a BigFloat value."""
        if self.reciprocal:
            value = value.one(value.prec).div(value)
        if self.negate:
            value = value.neg()
        return value

    def __repr__(self):
        return ("Transform(negate=%r, reciprocal=%r, cofunction=%r)"
                % (self.negate, self.reciprocal, self.cofunction))


def reduce_angle(x, prec, half_turns=2):
    r"""Reduce a non-negative angle modulo `half_turns * pi`.

    @param x
        Non-negative finite angle (BigFloat).
    @param prec
        Precision of the computation.
    @param half_turns
        Period in multiples of pi. Default is `2`, i.e. reduction modulo
        \f$ 2\pi \f$.

    @return The reduced angle in `[0, half_turns*pi)` at `prec` bits.
    """
    if x.signbit or not x.is_finite():
        raise ValueError("Can only reduce finite non-negative angles.")
    period = pi(prec).mul(half_turns, prec)
    if x < period:
        return x.rounded(prec)
    count = x.div(period, 64).floor()
    if count <= settings.reduction_max_subtractions:
        wp = prec + count.bit_length() + 2
        period = pi(wp).mul(half_turns, wp)
        r = x
        while r >= period:
            r = r.sub(period, wp)
        return r.rounded(prec)
    wp = prec + x.exponent + settings.guard_bits
    logger.debug("Reducing large angle with exponent %d at %d bits",
                 x.exponent, wp)
    period = pi(wp).mul(half_turns, wp)
    count = x.div(period, wp).floor()
    r = x.sub(period.mul(count, wp), wp)
    while r.signbit and not r.is_zero():
        r = r.add(period, wp)
    while r >= period:
        r = r.sub(period, wp)
    return r.rounded(prec)


def _refine(reflect, x, prec, fold=False):
    r"""Evaluate a reduction with enough bits for a relatively accurate result.

    `reflect(x, wp)` computes the reduced angle with an absolute error of
    about `2**(mag - wp)`, `mag` being the magnitude of `x`. When `x` is
    close to a multiple of `pi/2`, the reduced angle is much smaller than
    that and leading bits cancel. The reduction is then repeated with `wp`
    increased by at least `20 << i` bits in round `i` until the reduced
    angle is accurate to `prec` bits relative to itself.

    @param fold
        Whether to reflect the reduced angle into `[0, pi/4]` using
        fold_octant() as part of each round.
    """
    mag = max(x.exponent, 0) + 4
    limit = 2 * (x.prec + mag) + prec + 64
    extra = mag + 8
    i = 0
    while True:
        wp = prec + extra
        r, transform = reflect(x, wp)
        if fold:
            r, transform = fold_octant(r, transform, wp)
        if x.is_zero():
            break
        lost = wp if r.is_zero() else max(-r.exponent, 0)
        if extra >= mag + lost + 1:
            break
        i += 1
        extra = max(extra + (20 << i), mag + lost + 1)
        if extra > limit:
            logger.warning("Cancellation in reduction of %s not resolved "
                           "within %d extra bits", x, limit)
            break
        logger.debug("Reduction of %s cancelled %d bits, retrying at %d bits",
                     x, lost, prec + extra)
    return r.rounded(prec), transform


def _sin_quadrant(x, prec):
    negate = x.signbit
    r = reduce_angle(x.abs(), prec)
    half_pi = pi(prec).shift(-1)
    if r < half_pi:
        pass
    elif r < half_pi.shift(1):
        r = half_pi.shift(1).sub(r, prec)
    elif r < half_pi.mul(3, prec):
        r = r.sub(half_pi.shift(1), prec)
        negate = not negate
    else:
        r = half_pi.shift(2).sub(r, prec)
        negate = not negate
    return r, Transform(negate=negate)


def _cos_quadrant(x, prec):
    r = reduce_angle(x.abs(), prec)
    half_pi = pi(prec).shift(-1)
    negate = False
    if r < half_pi:
        pass
    elif r < half_pi.shift(1):
        r = half_pi.shift(1).sub(r, prec)
        negate = True
    elif r < half_pi.mul(3, prec):
        r = r.sub(half_pi.shift(1), prec)
        negate = True
    else:
        r = half_pi.shift(2).sub(r, prec)
    return r, Transform(negate=negate)


def _tan_octant(x, prec):
    negate = x.signbit
    r = reduce_angle(x.abs(), prec, half_turns=1)
    half_pi = pi(prec).shift(-1)
    if r >= half_pi:
        r = half_pi.shift(1).sub(r, prec)
        negate = not negate
    reciprocal = False
    if r >= half_pi.shift(-1):
        r = half_pi.sub(r, prec)
        reciprocal = True
    return r, Transform(negate=negate, reciprocal=reciprocal)


def reduce_sin(x, prec, fold=False):
    r"""Reduce the argument of the sine to `[0, pi/2]`.

    @param fold
        If `True`, reduce further to `[0, pi/4]` (see fold_octant()).

    @return Tuple `(r, transform)` such that
        `sin(x) = transform.apply(sin(r))`, or the cosine of `r` if
        `transform.cofunction` is set. `r` is accurate to `prec` bits
        relative to itself.
    """
    return _refine(_sin_quadrant, x, prec, fold)


def reduce_cos(x, prec, fold=False):
    r"""Reduce the argument of the cosine to `[0, pi/2]`.

    @param fold
        If `True`, reduce further to `[0, pi/4]` (see fold_octant()).

    @return Tuple `(r, transform)` such that
        `cos(x) = transform.apply(cos(r))`, or the sine of `r` if
        `transform.cofunction` is set.
    """
    return _refine(_cos_quadrant, x, prec, fold)


def reduce_tan(x, prec):
    r"""Reduce the argument of the tangent to `[0, pi/4]`.

    @return Tuple `(r, transform)` such that
        `tan(x) = transform.apply(tan(r))`.
    """
    return _refine(_tan_octant, x, prec)


def fold_octant(r, transform, prec):
    r"""Map an angle in `[0, pi/2]` to `[0, pi/4]`.

    Angles of at least `pi/4` are reflected at `pi/4` and the transform is
    marked to evaluate the complementary function.

    @return Tuple `(r, transform)`.
    """
    half_pi = pi(prec).shift(-1)
    if r >= half_pi.shift(-1):
        return (half_pi.sub(r, prec),
                Transform(transform.negate, transform.reciprocal,
                          not transform.cofunction))
    return r, transform
