from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ..curve.frames import SegmentPlacement


class RendererUnavailable(Exception):
    pass


class SceneRenderer(ABC):
    """Abstract scene sink: one box per curve segment plus debug lines."""

    @abstractmethod
    def setup(self) -> None:
        ...

    @abstractmethod
    def begin_frame(self, index: int) -> None:
        ...

    @abstractmethod
    def place_segment(self, placement: SegmentPlacement) -> None:
        """Move, orient and scale the primitive for one segment."""
        ...

    @abstractmethod
    def draw_line(self, start: Sequence[float], end: Sequence[float], color: str) -> None:
        ...

    @abstractmethod
    def end_frame(self) -> None:
        ...

    @abstractmethod
    def cleanup(self) -> None:
        ...
