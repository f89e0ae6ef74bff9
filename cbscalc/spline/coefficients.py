from __future__ import annotations

import logging
from typing import List, Sequence

from .models import SegmentCoefficients

log = logging.getLogger(__name__)


def segment_coefficients(p0: float, p1: float, p2: float, p3: float) -> SegmentCoefficients:
    """Power-basis coefficients of the Bernstein cubic x(t) - p0."""
    a = -p0 + 3 * p1 - 3 * p2 + p3
    b = 3 * p0 - 6 * p1 + 3 * p2
    c = -3 * p0 + 3 * p1
    return SegmentCoefficients(a, b, c, p0, p3)


def build_coefficients(xpos: Sequence[float]) -> List[SegmentCoefficients]:
    coeffs = [segment_coefficients(*xpos[i - 3: i + 1]) for i in range(3, len(xpos), 3)]
    log.debug(f"Built coefficients for {len(coeffs)} segment(s)")
    return coeffs
