from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, model_validator

from .validation import validate_control_points


class ControlPoints(BaseModel):
    """Parallel x/y control point arrays, 1 + 3*M points for M segments.

    Pass ``context={"precision": ...}`` to ``model_validate`` to change the
    minimum segment width.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    xpos: Tuple[float, ...] = Field(..., description="Control point x coordinates")
    ypos: Tuple[float, ...] = Field(..., description="Control point y coordinates")

    @model_validator(mode="after")
    def validate_geometry(self, info: ValidationInfo):
        precision = 1e-7
        if info.context and "precision" in info.context:
            precision = float(info.context["precision"])
        validate_control_points(self.xpos, self.ypos, precision)
        return self

    @property
    def segment_count(self) -> int:
        return (len(self.xpos) - 1) // 3

    def segment_x(self, k: int) -> Tuple[float, ...]:
        return self.xpos[3 * k: 3 * k + 4]

    def segment_y(self, k: int) -> Tuple[float, ...]:
        return self.ypos[3 * k: 3 * k + 4]


@dataclass(frozen=True)
class SegmentCoefficients:
    # x(t) = a t^3 + b t^2 + c t + x0 on t in [0, 1]
    a: float
    b: float
    c: float
    x0: float
    x1: float

    def shifted(self, x: float) -> float:
        """Constant term of x(t) - x."""
        return self.x0 - x

    def contains(self, x: float) -> bool:
        return self.x0 <= x <= self.x1
