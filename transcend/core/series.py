r"""@package transcend.core.series

Summation of power series with precision-controlled termination.

A series is described by its first term and a recurrence computing each term
from its predecessor. Optionally, the value added to the partial sum (the
*summand*) is derived from the term, e.g. to divide the running power
`x**(2n+1)` by `2n+1` without carrying the division over to the next term.

Two convergence tests are available:
    * *term test* (default): stop as soon as a summand is negligible
      relative to the partial sum. This is sufficient for series whose terms
      decrease monotonically, like the exponential or arctangent series.
    * *partial-sum test* (`check_every=k`): every `k` terms compare the
      partial sum with the one `k` terms earlier. This avoids stopping early
      on a transiently small term in slowly converging series.

In both cases summation also ends when the iteration cap is reached. The
returned IterationResult tells whether the series converged.

@b Examples

```
    # e = sum 1/n!
    x = BigFloat(1, prec=120)
    res = SeriesEvaluator(120).evaluate(x, lambda t, n: t.div(n, 120))
    res.value     # 2.71828...
    res.converged # True
```
"""

from ..numutils import IterationResult
from ..precision import max_iterations, LINEAR


__all__ = [
    "SeriesEvaluator",
    "atan_series",
    "sum_series",
]


class SeriesEvaluator(object):
    r"""Configurable summation of a series given by a term recurrence."""

    __slots__ = ("prec", "tol_bits", "max_terms", "alternating",
                 "check_every", "name")

    def __init__(self, prec, tol_bits=None, max_terms=None, alternating=False,
                 check_every=None, name=None):
        r"""Create a series evaluator.

        @param prec
            Working precision for all additions.
        @param tol_bits
            A summand `s` is negligible if `|s| <= 2**-tol_bits * |sum|`.
            Default is `prec`.
        @param max_terms
            Maximum number of terms after the first one. Default is given by
            ..precision.max_iterations() for linear convergence.
        @param alternating
            If `True`, odd-indexed summands are subtracted instead of added.
        @param check_every
            If given, use the partial-sum test checked every `check_every`
            terms instead of the term test.
        @param name
            Name stored in the returned IterationResult.
        """
        ## Working precision.
        self.prec = int(prec)
        ## Relative tolerance exponent.
        self.tol_bits = self.prec if tol_bits is None else int(tol_bits)
        ## Iteration cap.
        self.max_terms = (max_iterations(self.prec, LINEAR)
                          if max_terms is None else int(max_terms))
        ## Whether summands alternate in sign.
        self.alternating = alternating
        ## Cadence of the partial-sum test (`None` for the term test).
        self.check_every = check_every
        ## Name of the series for reporting.
        self.name = name

    def _negligible(self, value, total):
        return value.abs() <= total.abs().shift(-self.tol_bits)

    def evaluate(self, first, next_term, summand=None):
        r"""Sum the series.

        @param first
            First term `t_0` (a BigFloat).
        @param next_term
            Callable `next_term(t, n)` returning `t_n` given `t = t_{n-1}`.
        @param summand
            Optional callable `summand(t, n)` returning the value added to
            the sum for the term `t = t_n`. Default is to add the terms
            themselves.

        @return IterationResult with the partial sum as value and the number
            of terms after the first as `iterations`.
        """
        prec = self.prec
        term = first
        total = (summand(term, 0) if summand else term).rounded(prec)
        prev_total = total
        converged = False
        n = 0
        while n < self.max_terms:
            n += 1
            term = next_term(term, n)
            value = summand(term, n) if summand else term
            if self.alternating and n % 2:
                total = total.sub(value, prec)
            else:
                total = total.add(value, prec)
            if value.is_zero():
                converged = True
                break
            if self.check_every is None:
                if self._negligible(value, total):
                    converged = True
                    break
            elif n % self.check_every == 0:
                if (self._negligible(total.sub(prev_total, prec), total)
                        or self._negligible(value, total)):
                    converged = True
                    break
                prev_total = total
        return IterationResult(total, converged, n, self.name)


def sum_series(first, next_term, prec, summand=None, **kwargs):
    r"""Convenience wrapper creating a SeriesEvaluator and evaluating it.

    Additional keyword arguments are passed to SeriesEvaluator.
    """
    return SeriesEvaluator(prec, **kwargs).evaluate(first, next_term, summand)


def atan_series(x, prec, hyperbolic=False):
    r"""Sum the Taylor series of `atan(x)` or `atanh(x)` for `|x| < 1`.

    \f[
        \arctan x = \sum_{n=0}^\infty (-1)^n \frac{x^{2n+1}}{2n+1},
        \qquad
        \operatorname{artanh} x = \sum_{n=0}^\infty \frac{x^{2n+1}}{2n+1}.
    \f]

    The series converges quickly only for small `|x|`. Callers are expected
    to reduce the argument first.

    @param x
        Argument (BigFloat).
    @param prec
        Working precision.
    @param hyperbolic
        Whether to sum the series of `atanh` instead of `atan`.

    @return IterationResult.
    """
    x = x.rounded(prec) if x.prec != prec else x
    x2 = x.mul(x, prec)
    ev = SeriesEvaluator(prec, alternating=not hyperbolic,
                         name="atanh" if hyperbolic else "atan")
    return ev.evaluate(
        x,
        lambda t, n: t.mul(x2, prec),
        lambda t, n: t.div(2*n + 1, prec) if n else t,
    )

