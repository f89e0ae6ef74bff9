from __future__ import annotations

import math
from typing import Sequence

from .errors import (
    DegenerateSegment,
    InsufficientPoints,
    InvalidPointCount,
    NonMonotonicCurve,
    NonMonotonicOrder,
    ShapeMismatch,
)


def validate_control_points(xpos: Sequence[float], ypos: Sequence[float], precision: float = 1e-7) -> int:
    """Check structure and x-monotonicity of a control point sequence.

    Raises the first violation found, scanning segments in index order.
    Returns the number of segments.
    """
    n = len(xpos)
    if len(ypos) != n:
        raise ShapeMismatch(n, len(ypos))
    if n < 4:
        raise InsufficientPoints(n)
    if (n - 1) % 3 != 0:
        raise InvalidPointCount(n)

    for k in range((n - 1) // 3):
        p0, p1, p2, p3 = xpos[3 * k: 3 * k + 4]
        width = p3 - p0
        if width < precision:
            if width < 0:
                raise NonMonotonicOrder(k, width)
            raise DegenerateSegment(k, width, precision)
        check_segment_monotonic(k, p0, p1, p2, p3)
    return (n - 1) // 3


def check_segment_monotonic(k: int, p0: float, p1: float, p2: float, p3: float) -> None:
    # x'(t) is a quadratic Bernstein form in (p1-p0, p2-p1, p3-p2); it stays
    # non-negative when both ends are and the middle term is not too negative.
    if not p0 <= p1:
        raise NonMonotonicCurve(k, "xpos[3k] <= xpos[3k+1]")
    if not p2 <= p3:
        raise NonMonotonicCurve(k, "xpos[3k+2] <= xpos[3k+3]")
    if not -math.sqrt((p3 - p2) * (p1 - p0)) < p2 - p1:
        raise NonMonotonicCurve(k, "-sqrt((x3-x2)(x1-x0)) < x2-x1")
