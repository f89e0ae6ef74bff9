from __future__ import annotations

from typing import Optional

from ..config import SplineConfig
from .curve import BezierSpline


def linear(u: float) -> float:
    """Identity easing, clamped to [0, 1]."""
    return min(1.0, max(0.0, u))


class CubicBezierEase:
    """CSS-style timing function from (0,0) to (1,1).

    Control points (x1, y1, x2, y2) give the inner handles. x1 and x2 must
    keep x(t) strictly inside the monotonicity test used for splines, so
    some timing functions CSS accepts are rejected with NonMonotonicCurve:
    fully crossed handles such as (1, 0, 0, 1) sit on the boundary
    -sqrt((1-x2)*x1) == x2 - x1 and fail it.
    """

    def __init__(
        self,
        p1x: float,
        p1y: float,
        p2x: float,
        p2y: float,
        config: Optional[SplineConfig] = None,
    ):
        self.p1x = p1x
        self.p1y = p1y
        self.p2x = p2x
        self.p2y = p2y
        self._spline = BezierSpline.from_points(
            [0.0, p1x, p2x, 1.0], [0.0, p1y, p2y, 1.0], config
        )

    def sample(self, u: float) -> float:
        """Return y for a given u in [0,1]; u outside the range clamps."""
        if u <= 0.0:
            return 0.0
        if u >= 1.0:
            return 1.0
        return self._spline.y_at(u)

    __call__ = sample

    def __repr__(self) -> str:
        return f"CubicBezierEase({self.p1x}, {self.p1y}, {self.p2x}, {self.p2y})"
