from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from .base import SceneRenderer
from ..config import DemoConfig
from ..curve.frames import SegmentPlacement

log = logging.getLogger(__name__)


class LoggingRenderer(SceneRenderer):
    """Renderer that logs actions and keeps the last frame in memory."""

    def __init__(self, cfg: DemoConfig):
        self.cfg = cfg
        self.frame_index = -1
        self.frames_rendered = 0
        self.placements: List[SegmentPlacement] = []
        self.lines: List[Tuple[Tuple[float, ...], Tuple[float, ...], str]] = []
        self._pending_placements: List[SegmentPlacement] = []
        self._pending_lines: List[Tuple[Tuple[float, ...], Tuple[float, ...], str]] = []

    def setup(self) -> None:
        log.info("LoggingRenderer setup complete")

    def begin_frame(self, index: int) -> None:
        self.frame_index = index
        self._pending_placements = []
        self._pending_lines = []

    def place_segment(self, placement: SegmentPlacement) -> None:
        self._pending_placements.append(placement)

    def draw_line(self, start: Sequence[float], end: Sequence[float], color: str) -> None:
        self._pending_lines.append((tuple(start), tuple(end), color))

    def end_frame(self) -> None:
        self.placements = self._pending_placements
        self.lines = self._pending_lines
        self.frames_rendered += 1
        log.debug(
            f"Frame {self.frame_index}: {len(self.placements)} segments, {len(self.lines)} lines (log)"
        )

    def cleanup(self) -> None:
        log.info("LoggingRenderer cleanup")
