from __future__ import annotations

from typing import List, Tuple

from .curve import BezierSpline


def sample_curve(spline: BezierSpline, step: float) -> Tuple[List[float], List[float]]:
    """Tabulate the curve over its x-range at a fixed x interval.

    - step: spacing between consecutive x samples
    Returns (xs, ys); the last sample is always the final anchor.
    """
    if step <= 0:
        raise ValueError("step must be positive")
    x_min, x_max = spline.x_range
    xs: List[float] = []
    ys: List[float] = []

    i = 0
    x = x_min
    while x < x_max:
        xs.append(x)
        ys.append(spline.y_at(x))
        i += 1
        x = x_min + i * step

    # Ensure last sample is exactly the last anchor
    xs.append(x_max)
    ys.append(spline.points.ypos[-1])
    return xs, ys


def sample_segments(spline: BezierSpline, samples_per_segment: int = 20) -> List[Tuple[float, float]]:
    """Uniformly sample each segment in t; shared anchors appear once."""
    m = max(2, int(samples_per_segment))
    pts: List[Tuple[float, float]] = []
    for k in range(spline.segment_count):
        for j in range(0 if k == 0 else 1, m + 1):
            t = j / float(m)
            pts.append((spline.x_at(k, t), spline.y_at_t(k, t)))
    return pts
