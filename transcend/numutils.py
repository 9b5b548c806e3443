r"""@package transcend.numutils

Exceptions, result containers and exact integer helpers.

The routines in this package signal problems on three levels:

    * DomainError for arguments outside a function's domain, e.g. the
      logarithm of a negative number
    * a positive infinity returned as sentinel for mathematically undefined
      results (see TaggedResult for a variant which reports this explicitly)
    * IterationBlowUpError if an iteration leaves its valid regime

Invalid elementary operations on BigFloat values (like `inf - inf`) raise
UndefinedOperationError.


@b Examples

```
    >>> factorial(5)
    120
    >>> bernoulli(2)
    (1, 6)
```
"""

import sympy as sp


__all__ = [
    "factorial",
    "bernoulli",
    "IterationResult",
    "TaggedResult",
    "NumericalError",
    "DomainError",
    "IterationBlowUpError",
    "UndefinedOperationError",
]


class NumericalError(Exception):
    r"""Base for exceptions raised for problems with numerical evaluation."""
    pass


class DomainError(NumericalError, ValueError):
    r"""Raised when a function is evaluated outside of its domain."""
    pass


class IterationBlowUpError(NumericalError):
    r"""Raised when an iteration encounters a division by zero or overflow.

    This indicates that precision was lost catastrophically and any value
    returned would be meaningless.
    """
    pass


class UndefinedOperationError(NumericalError, ArithmeticError):
    r"""Raised for elementary operations without a defined result.

    Examples are `inf - inf`, `0 * inf` or the square root of a negative
    number.
    """
    pass


def factorial(n):
    r"""Compute the factorial of a non-negative integer exactly."""
    if n < 0:
        raise DomainError("Factorial of negative integer %d" % n)
    return int(sp.factorial(n))


def bernoulli(n):
    r"""Return the Bernoulli number B_n as numerator/denominator pair.

    We use the convention `B_1 = -1/2`, so that for even `n` the numbers are
    the ones occurring in the Stirling and tangent series.
    """
    if n == 1:
        return -1, 2
    b = sp.Rational(sp.bernoulli(n))
    return int(b.p), int(b.q)


class IterationResult(object):
    r"""Value computed by an iterative method along with convergence info.

    Strategies that sum series or iterate towards a root return objects of
    this class so that callers (and tests) can check whether the computation
    converged or just ran out of steps.
    """

    __slots__ = ("value", "converged", "iterations", "method")

    def __init__(self, value, converged, iterations, method=None):
        r"""Create a result object.

        @param value
            Computed value (usually a BigFloat).
        @param converged
            Whether the convergence criterion was met.
        @param iterations
            Number of steps or terms used.
        @param method
            Optional name of the method producing the result.
        """
        ## Computed value (best estimate if not converged).
        self.value = value
        ## Whether the tolerance was reached before the iteration cap.
        self.converged = converged
        ## Number of steps or terms used.
        self.iterations = iterations
        ## Name of the producing method.
        self.method = method

    def is_ok(self):
        r"""Return whether the result converged."""
        return self.converged

    def __repr__(self):
        return ("IterationResult(value=%r, converged=%r, iterations=%r, method=%r)"
                % (self.value, self.converged, self.iterations, self.method))


class TaggedResult(object):
    r"""Value together with a status distinguishing sentinel from overflow.

    The plain functions of this package return positive infinity both for
    genuine overflow and as a sentinel for undefined results. The `*_checked`
    variants return objects of this class instead.
    """

    __slots__ = ("value", "status")

    ## Status of a regular (possibly infinite but well-defined) result.
    OK = "ok"
    ## The result is mathematically undefined, `value` is the sentinel.
    UNDEFINED = "undefined"
    ## Finite inputs produced a result too large for the implementation.
    OVERFLOW = "overflow"

    def __init__(self, value, status=OK):
        if status not in (self.OK, self.UNDEFINED, self.OVERFLOW):
            raise ValueError("Unknown status: %s" % status)
        ## Computed value (sentinel `+inf` for undefined results).
        self.value = value
        ## One of `OK`, `UNDEFINED`, `OVERFLOW`.
        self.status = status

    def is_ok(self):
        return self.status == self.OK

    def is_undefined(self):
        return self.status == self.UNDEFINED

    def is_overflow(self):
        return self.status == self.OVERFLOW

    def __repr__(self):
        return "TaggedResult(%r, %r)" % (self.value, self.status)
