r"""@package transcend

Arbitrary-precision transcendental functions.

The functions in this package take BigFloat arguments and return results
with the same bit-precision (the larger one for two arguments). Internally,
the computations use a few extra guard bits and several alternative
algorithms per function, chosen by the magnitude and precision of the
argument.

Mathematically undefined results (like a negative number raised to a
non-integer power or the gamma function at its poles) are returned as
positive infinity. The `*_checked` functions return a TaggedResult telling
such sentinels apart from genuine overflow. Arguments outside a function's
domain (like the logarithm of a negative number) raise a DomainError.


@b Examples

```
    from transcend import BigFloat, exp, log, sin, power, gamma, pi

    x = BigFloat(2, prec=256)
    log(exp(x))                # 2 within the tolerance at 256 bits
    sin(pi(256) / 6)           # 0.5
    power(x, BigFloat(10))     # exactly 1024
    g = gamma(BigFloat(0.5, prec=256))
    g * g                      # pi
```
"""

import logging

from .bigfloat import BigFloat, bigfloat
from .config import settings, load_settings
from .constants import pi, e, ln2
from .numutils import (
    NumericalError, DomainError, IterationBlowUpError,
    UndefinedOperationError, IterationResult, TaggedResult,
)
from .funcs.exp import exp
from .funcs.log import log, log_newton, log_halley, log_taylor
from .funcs.trig import sin, cos, tan, atan, asin, acos
from .funcs.hyperbolic import sinh, cosh, tanh, asinh, acosh, atanh
from .funcs.power import power, power_int, power_checked, power_float64
from .funcs.gamma import (gamma, gamma_checked, gamma_float64, gamma_spouge,
                          factorial_float)


logging.getLogger(__name__).addHandler(logging.NullHandler())
