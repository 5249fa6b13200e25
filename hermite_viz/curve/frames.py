from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from .hermite import Segment, sample_segments
from .models import SceneSetup

SEGMENT_COLORS = ("white", "red")
HANDLE_ONE_COLOR = "cyan"
HANDLE_TWO_COLOR = "magenta"


def json_float(value: float) -> Any:
    """Strict-JSON form of a float: non-finite values become "NaN", "Infinity" or "-Infinity"."""
    value = float(value)
    if math.isfinite(value):
        return value
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def json_vector(values: Sequence[float]) -> List[Any]:
    return [json_float(v) for v in values]


@dataclass(frozen=True)
class SegmentPlacement:
    index: int
    position: Tuple[float, float, float]
    direction: Tuple[float, float, float]   # unit vector, zero for degenerate segments
    length: float
    scale: Tuple[float, float, float]
    material: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "position": json_vector(self.position),
            "direction": json_vector(self.direction),
            "length": json_float(self.length),
            "scale": json_vector(self.scale),
            "material": self.material,
        }


@dataclass(frozen=True)
class DebugLine:
    start: Tuple[float, float, float]
    end: Tuple[float, float, float]
    color: str


@dataclass
class Frame:
    index: int
    dims: int
    handle_one: List[float]
    handle_two: List[float]
    tangent_one: List[float]
    tangent_two: List[float]
    segments: List[Segment]
    placements: List[SegmentPlacement] = field(default_factory=list)
    lines: List[DebugLine] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "dims": self.dims,
            "handle_one": json_vector(self.handle_one),
            "handle_two": json_vector(self.handle_two),
            "tangent_one": json_vector(self.tangent_one),
            "tangent_two": json_vector(self.tangent_two),
            "segments": [[json_vector(a), json_vector(b)] for a, b in self.segments],
            "placements": [p.to_dict() for p in self.placements],
            "lines": [
                {"start": json_vector(ln.start), "end": json_vector(ln.end), "color": ln.color}
                for ln in self.lines
            ],
        }


def _lift(v: Sequence[float]) -> Tuple[float, float, float]:
    # 2D curves live in the z=0 plane
    if len(v) == 2:
        return (float(v[0]), float(v[1]), 0.0)
    return (float(v[0]), float(v[1]), float(v[2]))


def handle_offsets(counter: float, dims: int) -> Tuple[np.ndarray, np.ndarray]:
    """Per-frame translation of the two tangent handles.

    Handles drift in cycles driven by the running animation counter.
    """
    c, s = math.cos(counter), math.sin(counter)
    if dims == 2:
        return np.array([c * 0.1, 0.0]), np.array([s * 0.1, 0.0])
    return (
        np.array([c * 0.1, s * 0.05, -s * 0.1]),
        np.array([s * 0.1, c * 0.03, c * 0.1]),
    )


def curve_tangents(
    start: Sequence[float],
    end: Sequence[float],
    handle_one: Sequence[float],
    handle_two: Sequence[float],
    weight_one: float = 1.0,
    weight_two: float = 1.0,
) -> Tuple[np.ndarray, np.ndarray]:
    """Tangents implied by handle positions.

    The outgoing tangent points from start to handle_one; the incoming one
    points from handle_two to end, so the handle sits "behind" the end point.
    """
    start_v = np.asarray(start, dtype=float)
    end_v = np.asarray(end, dtype=float)
    t1 = (np.asarray(handle_one, dtype=float) - start_v) * weight_one
    t2 = -(np.asarray(handle_two, dtype=float) - end_v) * weight_two
    return t1, t2


def segment_placements(segments: List[Segment], thickness: float) -> List[SegmentPlacement]:
    """Position, orientation and scale of one box primitive per segment.

    Each box sits at the segment start, faces the segment end and is stretched
    along its forward axis to the segment length.
    """
    out: List[SegmentPlacement] = []
    for i, (a, b) in enumerate(segments):
        a3 = np.array(_lift(a))
        b3 = np.array(_lift(b))
        delta = b3 - a3
        length = float(np.linalg.norm(delta))
        direction = delta / length if length > 0.0 else np.zeros(3)
        out.append(
            SegmentPlacement(
                index=i,
                position=_lift(a3),
                direction=_lift(direction),
                length=length,
                scale=(thickness, thickness, length),
                material=i % 2,
            )
        )
    return out


def build_frame(
    setup: SceneSetup,
    handle_one: Sequence[float],
    handle_two: Sequence[float],
    thickness: float = 0.2,
    index: int = 0,
) -> Frame:
    """Sample the curve for the current handle positions and lay out the scene."""
    t1, t2 = curve_tangents(
        setup.start,
        setup.end,
        handle_one,
        handle_two,
        setup.tangent_one_weight,
        setup.tangent_two_weight,
    )
    segments = sample_segments(setup.start, setup.end, t1, t2, setup.segments)

    lines = [
        DebugLine(_lift(a), _lift(b), SEGMENT_COLORS[i % len(SEGMENT_COLORS)])
        for i, (a, b) in enumerate(segments)
    ]
    lines.append(DebugLine(_lift(setup.start), _lift(handle_one), HANDLE_ONE_COLOR))
    lines.append(DebugLine(_lift(setup.end), _lift(handle_two), HANDLE_TWO_COLOR))

    return Frame(
        index=index,
        dims=setup.dims,
        handle_one=[float(v) for v in handle_one],
        handle_two=[float(v) for v in handle_two],
        tangent_one=t1.tolist(),
        tangent_two=t2.tolist(),
        segments=segments,
        placements=segment_placements(segments, thickness),
        lines=lines,
    )
