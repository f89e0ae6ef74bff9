from __future__ import annotations


def casteljau(t: float, q0: float, q1: float, q2: float, q3: float) -> float:
    """Evaluate the cubic Bezier with control values q0..q3 at t in [0,1]."""
    mt = 1 - t
    return (
        mt * (mt * (mt * q0 + t * q1) + t * (mt * q1 + t * q2))
        + t * (mt * (mt * q1 + t * q2) + t * (mt * q2 + t * q3))
    )
