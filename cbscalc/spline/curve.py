from __future__ import annotations

import logging
import math
from bisect import bisect_left
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..batch.pool import run_indexed
from ..config import SplineConfig
from .casteljau import casteljau
from .coefficients import build_coefficients
from .errors import ConvergenceFailure, OutOfRange
from .models import ControlPoints, SegmentCoefficients
from .solver import newton_t

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BezierSpline:
    """Piecewise cubic Bezier curve evaluated as a function y = f(x).

    Build with ``from_points``; coefficients are derived once and shared
    read-only by every query against the curve. The handle and its config
    are frozen, so a spline can be hashed and reused as a cache key.
    """

    points: ControlPoints
    segments: Tuple[SegmentCoefficients, ...]
    anchors: Tuple[float, ...]
    config: SplineConfig

    @classmethod
    def from_points(
        cls,
        xpos: Iterable[float],
        ypos: Iterable[float],
        config: Optional[SplineConfig] = None,
    ) -> "BezierSpline":
        cfg = config if config is not None else SplineConfig()
        points = ControlPoints.model_validate(
            {"xpos": list(xpos), "ypos": list(ypos)},
            context={"precision": cfg.precision},
        )
        segments = tuple(build_coefficients(points.xpos))
        return cls(points, segments, tuple(points.xpos[::3]), cfg)

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    @property
    def x_range(self) -> Tuple[float, float]:
        return self.anchors[0], self.anchors[-1]

    def locate(self, x: float, query_index: Optional[int] = None) -> int:
        """Index of the first segment whose anchors enclose x."""
        lo, hi = self.x_range
        if not lo <= x <= hi:
            raise OutOfRange(x, lo, hi, query_index)
        # Anchors are strictly increasing, so the first k with x <= anchors[k+1]
        # is the first-match segment.
        return bisect_left(self.anchors, x, 1) - 1

    def solve(self, x: float, query_index: Optional[int] = None) -> Tuple[int, float]:
        """Return (segment, t) such that x(t) on that segment equals x."""
        k = self.locate(x, query_index)
        seg = self.segments[k]
        try:
            t = newton_t(
                seg.a, seg.b, seg.c, seg.shifted(x),
                precision=self.config.precision,
                max_iterations=self.config.max_iterations,
            )
        except ConvergenceFailure as e:
            raise ConvergenceFailure(
                e.iterations, e.residual, segment=k, x=x, query_index=query_index
            ) from e
        return k, t

    def x_at(self, k: int, t: float) -> float:
        return casteljau(t, *self.points.segment_x(k))

    def y_at_t(self, k: int, t: float) -> float:
        return casteljau(t, *self.points.segment_y(k))

    def y_at(self, x: float, query_index: Optional[int] = None) -> float:
        k, t = self.solve(x, query_index)
        return self.y_at_t(k, t)

    def __call__(self, x: float) -> float:
        return self.y_at(float(x))

    def evaluate(self, queries: Iterable[float]) -> List[float]:
        """Evaluate every query, preserving input order.

        With the default ``out_of_range="raise"`` the whole batch fails on the
        first query outside the curve; ``"nan"`` fills such slots with nan.
        """
        xs = [float(x) for x in queries]
        if self.config.workers > 1 and len(xs) > 1:
            return run_indexed(self._evaluate_one, xs, self.config.workers)
        return [self._evaluate_one(i, x) for i, x in enumerate(xs)]

    def _evaluate_one(self, index: int, x: float) -> float:
        try:
            return self.y_at(x, index)
        except OutOfRange:
            if self.config.out_of_range == "nan":
                return math.nan
            raise


def evaluate(
    xpos: Sequence[float],
    ypos: Sequence[float],
    queries: Iterable[float],
    config: Optional[SplineConfig] = None,
) -> List[float]:
    """Evaluate y = f(x) of the spline through (xpos, ypos) at each query x."""
    spline = BezierSpline.from_points(xpos, ypos, config)
    log.debug(f"Evaluating {spline.segment_count}-segment spline")
    return spline.evaluate(queries)
