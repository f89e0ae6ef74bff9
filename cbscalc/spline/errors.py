from __future__ import annotations

from typing import Optional


class SplineError(Exception):
    """Base class for every failure raised while building or evaluating a curve.

    Must not subclass ValueError: pydantic wraps ValueError/AssertionError
    raised in validators, which would hide the kind from callers.
    """

    def __init__(self, message: str, *, segment: Optional[int] = None):
        super().__init__(message)
        self.segment = segment


class ShapeMismatch(SplineError):
    def __init__(self, n_x: int, n_y: int):
        super().__init__(f"The length of x and y coordinates should match ({n_x} != {n_y})")
        self.n_x = n_x
        self.n_y = n_y


class InsufficientPoints(SplineError):
    def __init__(self, count: int):
        super().__init__(f"Insufficient number of coordinates: {count} (need at least 4)")
        self.count = count


class InvalidPointCount(SplineError):
    def __init__(self, count: int):
        super().__init__(f"The number of coordinates needs to be 1+3n (n > 0), got {count}")
        self.count = count


class NonMonotonicOrder(SplineError):
    def __init__(self, segment: int, width: float):
        super().__init__(
            f"Anchor point of segment {segment} is placed before its previous anchor "
            f"(width {width:g}); xpos may be in reversed order",
            segment=segment,
        )
        self.width = width


class DegenerateSegment(SplineError):
    def __init__(self, segment: int, width: float, precision: float):
        super().__init__(
            f"Segment {segment} is too short for stable computation "
            f"(width {width:g} < {precision:g}); consider using fewer segments",
            segment=segment,
        )
        self.width = width
        self.precision = precision


class NonMonotonicCurve(SplineError):
    def __init__(self, segment: int, check: str):
        super().__init__(
            f"X coordinates of segment {segment} are not monotonic in t ({check}); "
            f"multiple y-values may exist for x",
            segment=segment,
        )
        self.check = check


class OutOfRange(SplineError):
    def __init__(self, x: float, x_min: float, x_max: float, query_index: Optional[int] = None):
        where = "" if query_index is None else f" at query index {query_index}"
        super().__init__(f"x={x!r}{where} is outside the curve range [{x_min!r}, {x_max!r}]")
        self.x = x
        self.x_min = x_min
        self.x_max = x_max
        self.query_index = query_index


class ConvergenceFailure(SplineError):
    def __init__(
        self,
        iterations: int,
        residual: float,
        *,
        segment: Optional[int] = None,
        x: Optional[float] = None,
        query_index: Optional[int] = None,
    ):
        where = "" if x is None else f" for x={x!r}"
        if segment is not None:
            where += f" in segment {segment}"
        if query_index is not None:
            where += f" at query index {query_index}"
        super().__init__(
            f"Root solver did not converge{where} after {iterations} iterations "
            f"(residual {residual:g})",
            segment=segment,
        )
        self.iterations = iterations
        self.residual = residual
        self.x = x
        self.query_index = query_index
