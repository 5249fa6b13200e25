from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, model_validator


def _check_dims(**vectors: List[float]) -> int:
    dims = {len(v) for v in vectors.values()}
    if len(dims) != 1:
        raise ValueError(f"{', '.join(vectors)} must all have the same number of components")
    n = dims.pop()
    if n not in (2, 3):
        raise ValueError(f"Only 2D and 3D vectors are supported, got {n} components")
    return n


class CurveControl(BaseModel):
    p1: List[float] = Field(..., description="Start point")
    p2: List[float] = Field(..., description="End point")
    t1: List[float] = Field(..., description="Outgoing tangent at p1")
    t2: List[float] = Field(..., description="Incoming tangent at p2")

    @model_validator(mode="after")
    def validate_dims(self):
        _check_dims(p1=self.p1, p2=self.p2, t1=self.t1, t2=self.t2)
        return self

    @property
    def dims(self) -> int:
        return len(self.p1)


class EvaluateRequest(CurveControl):
    step: float = Field(..., description="Position along the curve, 0 at p1 and 1 at p2")


class SegmentsRequest(CurveControl):
    segments: int = Field(..., ge=1)


class SceneSetup(BaseModel):
    start: List[float]
    end: List[float]
    handle_one: List[float] = Field(..., description="Outgoing tangent handle position")
    handle_two: List[float] = Field(..., description="Incoming tangent handle position")
    tangent_one_weight: float = 1.0
    tangent_two_weight: float = 1.0
    segments: int = Field(20, ge=1)

    @model_validator(mode="after")
    def validate_dims(self):
        _check_dims(
            start=self.start,
            end=self.end,
            handle_one=self.handle_one,
            handle_two=self.handle_two,
        )
        return self

    @property
    def dims(self) -> int:
        return len(self.start)
