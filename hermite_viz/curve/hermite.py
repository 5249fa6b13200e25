from __future__ import annotations

from typing import List, Sequence, Tuple, Union

import numpy as np

VectorLike = Union[Sequence[float], np.ndarray]
Segment = Tuple[np.ndarray, np.ndarray]


class InvalidSegmentCount(ValueError):
    """Raised when a curve is split into fewer than one segment."""


def basis_weights(step: float) -> Tuple[float, float, float, float]:
    """Return the cubic Hermite basis weights (h1, h2, h3, h4) at ``step``.

    h1 and h2 blend the two end points, h3 and h4 the outgoing and incoming
    tangents. Steps outside [0, 1] extrapolate the polynomial.
    """
    s2 = step * step
    s3 = s2 * step
    h1 = 2 * s3 - 3 * s2 + 1
    h2 = -2 * s3 + 3 * s2
    h3 = s3 - 2 * s2 + step
    h4 = s3 - s2
    return h1, h2, h3, h4


def _as_vector(v: VectorLike, dims: int, name: str) -> np.ndarray:
    arr = np.asarray(v, dtype=float)
    if arr.shape != (dims,):
        raise ValueError(f"{name} must have {dims} components, got shape {arr.shape}")
    return arr


def _weighted_sum(p1, p2, t1, t2, step: float) -> np.ndarray:
    h1, h2, h3, h4 = basis_weights(step)
    return (h1 * p1) + (h2 * p2) + (h3 * t1) + (h4 * t2)


def evaluate_2d(p1: VectorLike, p2: VectorLike, t1: VectorLike, t2: VectorLike, step: float) -> np.ndarray:
    """Point on the 2D curve from p1 (leaving along t1) to p2 (arriving along t2).

    step=0 gives p1, step=1 gives p2.
    """
    return _weighted_sum(
        _as_vector(p1, 2, "p1"),
        _as_vector(p2, 2, "p2"),
        _as_vector(t1, 2, "t1"),
        _as_vector(t2, 2, "t2"),
        step,
    )


def evaluate_3d(p1: VectorLike, p2: VectorLike, t1: VectorLike, t2: VectorLike, step: float) -> np.ndarray:
    """Point on the 3D curve.

    The weights depend only on ``step``, so applying them to full 3D vectors
    gives the same result as combining an XY and an XZ plane evaluation.
    """
    return _weighted_sum(
        _as_vector(p1, 3, "p1"),
        _as_vector(p2, 3, "p2"),
        _as_vector(t1, 3, "t1"),
        _as_vector(t2, 3, "t2"),
        step,
    )


def evaluate(p1: VectorLike, p2: VectorLike, t1: VectorLike, t2: VectorLike, step: float) -> np.ndarray:
    dims = np.asarray(p1).shape[0] if np.ndim(p1) == 1 else 0
    if dims == 2:
        return evaluate_2d(p1, p2, t1, t2, step)
    if dims == 3:
        return evaluate_3d(p1, p2, t1, t2, step)
    raise ValueError(f"Only 2D and 3D curves are supported, got p1={p1!r}")


def sample_segments(
    p1: VectorLike, p2: VectorLike, t1: VectorLike, t2: VectorLike, segment_count: int
) -> List[Segment]:
    """Approximate the curve with ``segment_count`` consecutive line segments.

    The curve is evaluated at segment_count + 1 evenly spaced steps from 0 to
    1 inclusive; each returned (start, end) pair joins neighbouring samples.
    Pairs hold their own arrays: the end of one pair equals, but is not the
    same object as, the start of the next.
    """
    if segment_count < 1:
        raise InvalidSegmentCount(f"segment_count must be >= 1, got {segment_count}")

    samples = [evaluate(p1, p2, t1, t2, i / segment_count) for i in range(segment_count + 1)]
    return [(samples[i], samples[i + 1].copy()) for i in range(segment_count)]
