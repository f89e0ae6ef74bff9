from __future__ import annotations

import math

import pytest

from cbscalc.spline.casteljau import casteljau
from cbscalc.spline.coefficients import build_coefficients, segment_coefficients
from cbscalc.spline.errors import ConvergenceFailure
from cbscalc.spline.solver import newton_t


def _cubic(co, x, t):
    return ((co.a * t + co.b) * t + co.c) * t + co.shifted(x)


def test_coefficients_of_straight_line():
    co = segment_coefficients(0, 1, 2, 3)
    assert (co.a, co.b, co.c) == (0, 0, 3)
    assert (co.x0, co.x1) == (0, 3)


@pytest.mark.parametrize("t", [0.0, 0.1, 0.35, 0.5, 0.8, 1.0])
def test_coefficients_match_bernstein_form(t):
    xs = (1.0, 2.0, 2.0, 5.0)
    co = segment_coefficients(*xs)
    power = ((co.a * t + co.b) * t + co.c) * t + co.x0
    assert power == pytest.approx(casteljau(t, *xs), abs=1e-12)


def test_build_coefficients_one_per_segment():
    coeffs = build_coefficients([0, 1, 2, 3, 4, 5, 6])
    assert len(coeffs) == 2
    assert (coeffs[1].x0, coeffs[1].x1) == (3, 6)


def test_boundary_shortcuts():
    assert newton_t(0, 0, 3, 0) == 0.0
    assert newton_t(0, 0, 3, -3) == 1.0
    assert newton_t(0, 0, 3, -3 + 5e-8) == 1.0


def test_linear_initial_guess_is_exact_for_lines():
    assert newton_t(0, 0, 3, -1.5) == 0.5


@pytest.mark.parametrize("xs", [(0, 2, 0.5, 3), (0, 0, 3, 3), (0, 0.1, 0.2, 10), (5, 9, 9.5, 10)])
@pytest.mark.parametrize("frac", [0.01, 0.25, 0.5, 0.77, 0.999])
def test_root_is_within_precision(xs, frac):
    co = segment_coefficients(*xs)
    x = co.x0 + frac * (co.x1 - co.x0)
    t = newton_t(co.a, co.b, co.c, co.shifted(x))
    assert 0.0 <= t <= 1.0
    assert abs(_cubic(co, x, t)) <= 1e-7


@pytest.mark.parametrize("xs", [(0, 2, 0.5, 3), (0, 0, 3, 3), (0, 0.1, 0.2, 10)])
def test_bracket_keeps_sign_change(xs):
    co = segment_coefficients(*xs)
    x = co.x0 + 0.37 * (co.x1 - co.x0)
    seen = []

    def trace(lower, upper, f_lower, f_upper):
        seen.append((lower, upper, f_lower, f_upper))

    newton_t(co.a, co.b, co.c, co.shifted(x), trace=trace)
    assert seen
    for lower, upper, f_lower, f_upper in seen:
        assert 0.0 <= lower <= upper <= 1.0
        assert f_lower * f_upper <= 0 or min(abs(f_lower), abs(f_upper)) < 1e-7


def test_flat_derivative_falls_back_to_bisection():
    # x'(0) == x'(1) == 0 for these handles
    co = segment_coefficients(0, 0, 3, 3)
    for x in (1e-3, 2.999):
        t = newton_t(co.a, co.b, co.c, co.shifted(x))
        assert abs(_cubic(co, x, t)) <= 1e-7


def test_iteration_cap():
    co = segment_coefficients(0, 0, 3, 3)
    with pytest.raises(ConvergenceFailure) as exc:
        newton_t(co.a, co.b, co.c, co.shifted(0.5), max_iterations=1)
    assert exc.value.iterations == 1
    assert exc.value.residual > 1e-7


def test_casteljau_endpoints():
    assert casteljau(0.0, 1, 7, -3, 4) == 1
    assert casteljau(1.0, 1, 7, -3, 4) == 4


def test_casteljau_midpoint():
    # (q0 + 3 q1 + 3 q2 + q3) / 8
    assert casteljau(0.5, 0, 0, 1, 1) == pytest.approx(0.5)
    assert casteljau(0.5, 1, 7, -3, 4) == pytest.approx((1 + 21 - 9 + 4) / 8)


def test_nan_residual_is_not_treated_as_converged():
    # inf * 0 makes f(t) nan at the seed
    with pytest.raises(ConvergenceFailure) as exc:
        newton_t(math.inf, 0.0, 3.0, -1.5, max_iterations=5)
    assert exc.value.iterations == 5
    assert math.isnan(exc.value.residual)
