from __future__ import annotations

import math

import pytest

from cbscalc.config import SplineConfig, load_config
from cbscalc.spline.curve import evaluate
from cbscalc.spline.errors import OutOfRange


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("CBS_PRECISION", "CBS_MAX_ITER", "CBS_WORKERS", "CBS_OUT_OF_RANGE"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    cfg = load_config()
    assert cfg.precision == 1e-7
    assert cfg.max_iterations == 100
    assert cfg.workers == 1
    assert cfg.out_of_range == "raise"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("CBS_PRECISION", "1e-9")
    monkeypatch.setenv("CBS_MAX_ITER", "250")
    monkeypatch.setenv("CBS_WORKERS", "3")
    monkeypatch.setenv("CBS_OUT_OF_RANGE", "NaN")
    cfg = load_config()
    assert cfg.precision == 1e-9
    assert cfg.max_iterations == 250
    assert cfg.workers == 3
    assert cfg.out_of_range == "nan"


def test_bad_env_value_is_rejected(monkeypatch):
    monkeypatch.setenv("CBS_OUT_OF_RANGE", "clamp")
    with pytest.raises(ValueError):
        load_config()


@pytest.mark.parametrize(
    "kwargs",
    [{"precision": 0}, {"max_iterations": 0}, {"workers": 0}, {"out_of_range": "skip"}],
)
def test_invalid_config(kwargs):
    with pytest.raises(ValueError):
        SplineConfig(**kwargs)


def test_evaluate_ignores_environment_without_config(monkeypatch):
    monkeypatch.setenv("CBS_OUT_OF_RANGE", "nan")
    monkeypatch.setenv("CBS_PRECISION", "10")
    with pytest.raises(OutOfRange):
        evaluate([0, 1, 2, 3], [0, 0, 1, 1], [10.0])
    assert evaluate([0, 1, 2, 3], [0, 0, 1, 1], [1.5]) == pytest.approx([0.5], abs=1e-7)


def test_explicit_load_config_applies_environment(monkeypatch):
    monkeypatch.setenv("CBS_OUT_OF_RANGE", "nan")
    (y,) = evaluate([0, 1, 2, 3], [0, 0, 1, 1], [10.0], load_config())
    assert math.isnan(y)
