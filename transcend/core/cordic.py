r"""@package transcend.core.cordic

CORDIC rotations computing sine and cosine simultaneously.

Starting from the vector `(1, 0)`, each step rotates by \f$ \pm\arctan
2^{-i} \f$ towards the target angle. A rotation by this angle only needs
shifts and additions, apart from a scaling which is the same for all steps
and collected into the gain
\f[
    K_n = \prod_{i=0}^{n-1} \sqrt{1 + 2^{-2i}},
\f]
divided out at the end. The angles are read from the lookup table in
..constants.

After `n` steps, the remaining angle `z` satisfies
\f$ |z| \le \arctan 2^{1-n} \f$. Instead of performing another `n` steps, we
rotate by `z` using the second order expansions of `cos(z)` and `sin(z)`,
so that roughly `prec/2` steps suffice.

Small angles skip the rotations by angles much larger than themselves and
are computed with correspondingly more bits, so that the sine is accurate
relative to its own size.
"""

from ..bigfloat import BigFloat
from ..config import settings
from ..constants import arctan_entry
from ..numutils import IterationResult


__all__ = [
    "cordic_rotate",
    "cordic_steps",
]


## Largest angle reachable by the rotations (sum of all table angles).
MAX_ANGLE = 1.7432866204723400


def cordic_steps(prec):
    r"""Number of rotation steps for a result accurate to `prec` bits."""
    return (prec + settings.guard_bits) // 2 + 2


def cordic_rotate(theta, prec, steps=None):
    r"""Compute `(cos(theta), sin(theta))` by CORDIC rotations.

    @param theta
        Angle with `|theta| <= pi/2` (BigFloat).
    @param prec
        Precision of the results.
    @param steps
        Number of rotation steps. Default is given by cordic_steps().

    @return IterationResult with the tuple `(cos, sin)` as value. The result
        is considered converged if the residual angle after the rotations is
        within the range covered by the final correction.
    """
    if abs(theta.to_float()) > MAX_ANGLE:
        raise ValueError("Angle out of range for CORDIC: %s" % theta)
    if steps is None:
        steps = cordic_steps(prec)
    # for |theta| < 2**-first the larger rotations are skipped and the sine
    # is small, so its relative accuracy needs `first` more bits
    first = 0 if theta.is_zero() else max(-theta.exponent, 0)
    wp = prec + settings.guard_bits + steps.bit_length() + first
    x = BigFloat.one(wp)
    y = BigFloat.zero(wp)
    z = theta.rounded(wp)
    gain_sq = BigFloat.one(wp)
    i = first
    while i < first + steps and not z.is_zero():
        xs = x.shift(-i)
        ys = y.shift(-i)
        angle = arctan_entry(i, wp)
        if z.signbit:
            x, y = x.add(ys, wp), y.sub(xs, wp)
            z = z.add(angle, wp)
        else:
            x, y = x.sub(ys, wp), y.add(xs, wp)
            z = z.sub(angle, wp)
        gain_sq = gain_sq.add(gain_sq.shift(-2*i), wp)
        i += 1
    gain = gain_sq.sqrt(wp)
    x = x.div(gain, wp)
    y = y.div(gain, wp)
    # rotate by the residual angle z using cos(z) ~ 1 - z^2/2, sin(z) ~ z
    c = BigFloat.one(wp).sub(z.mul(z, wp).shift(-1), wp)
    cos = x.mul(c, wp).sub(y.mul(z, wp), wp)
    sin = y.mul(c, wp).add(x.mul(z, wp), wp)
    converged = z.abs() <= BigFloat.from_man_exp(1, 2 - i, wp) or z.is_zero()
    return IterationResult((cos.rounded(prec), sin.rounded(prec)), converged,
                           i - first, "cordic")
