from __future__ import annotations

import logging
from typing import Callable, Optional

from .errors import ConvergenceFailure

log = logging.getLogger(__name__)

# Called once per iteration with (lower, upper, f_lower, f_upper)
BracketTrace = Callable[[float, float, float, float], None]


def newton_t(
    a: float,
    b: float,
    c: float,
    d: float,
    precision: float = 1e-7,
    max_iterations: int = 100,
    trace: Optional[BracketTrace] = None,
) -> float:
    """Find t in [0,1] with a*t^3 + b*t^2 + c*t + d == 0 (within precision).

    Assumes f(0) = d <= 0 <= f(1), i.e. the root is bracketed by [0, 1] and f
    is monotonic there. Uses Newton-Raphson, falling back to bisection of the
    current sign-change bracket whenever the Newton step leaves it.
    """

    def f(t: float) -> float:
        return ((a * t + b) * t + c) * t + d

    def df(t: float) -> float:
        return (3 * a * t + 2 * b) * t + c

    lower, upper = 0.0, 1.0
    f_lower, f_upper = d, a + b + c + d

    if abs(f_lower) < precision:
        return 0.0
    if abs(f_upper) < precision:
        return 1.0

    # Linear initial approximation
    t = -f_lower / (f_upper - f_lower)
    ft = f(t)
    iterations = 0
    while not abs(ft) <= precision:  # nan residual never converges
        if iterations >= max_iterations:
            log.warning(f"Solver hit iteration cap ({max_iterations}), residual={ft:g}")
            raise ConvergenceFailure(iterations, abs(ft))
        iterations += 1

        if ft * f_lower > 0:
            lower, f_lower = t, ft
        else:
            upper, f_upper = t, ft
        if trace is not None:
            trace(lower, upper, f_lower, f_upper)

        slope = df(t)
        t_new = t - ft / slope if slope else None
        if t_new is None or not lower <= t_new <= upper:
            # Newton left the bracket (or flat derivative): bisect instead
            t_new = (lower + upper) / 2
        t = t_new
        ft = f(t)

    log.debug(f"Solver converged in {iterations} iteration(s), t={t:.9g}")
    return t
