from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

OutOfRangeMode = Literal["raise", "nan"]


@dataclass(frozen=True)
class SplineConfig:
    # Root finding
    precision: float = 1e-7            # |x(t) - x| tolerance, also min segment width
    max_iterations: int = 100          # solver cap before ConvergenceFailure

    # Batch evaluation
    workers: int = 1                   # >1 spreads queries over threads
    out_of_range: OutOfRangeMode = "raise"

    def __post_init__(self) -> None:
        if self.precision <= 0:
            raise ValueError("precision must be positive")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        if self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.out_of_range not in ("raise", "nan"):
            raise ValueError(f"unknown out_of_range mode: {self.out_of_range!r}")


def load_config() -> SplineConfig:
    """Defaults with simple env overrides.

    Only used when passed explicitly; functions given no config run with
    ``SplineConfig()``.
    """
    defaults = SplineConfig()
    return SplineConfig(
        precision=float(os.getenv("CBS_PRECISION", defaults.precision)),
        max_iterations=int(os.getenv("CBS_MAX_ITER", defaults.max_iterations)),
        workers=int(os.getenv("CBS_WORKERS", defaults.workers)),
        out_of_range=os.getenv("CBS_OUT_OF_RANGE", defaults.out_of_range).lower(),  # type: ignore[arg-type]
    )
