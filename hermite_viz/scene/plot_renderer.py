from __future__ import annotations

import logging
import os
from typing import Optional, Sequence

from .base import SceneRenderer, RendererUnavailable
from ..config import DemoConfig
from ..curve.frames import SegmentPlacement

log = logging.getLogger(__name__)

MATERIAL_COLORS = ("tab:blue", "tab:orange")


class PlotRenderer(SceneRenderer):
    """matplotlib renderer writing the latest frame to a PNG file.

    Notes:
    - Uses the object-oriented Figure API (no pyplot), so it is safe to call
      from the controller's worker thread.
    - Segments are drawn as thick strokes coloured by material index; debug
      lines as thin strokes in their own colour.
    """

    def __init__(self, cfg: DemoConfig):
        self.cfg = cfg
        self._Figure = None  # type: Optional[type]
        self._fig = None
        self._ax = None
        self._index = 0

    def setup(self) -> None:
        try:
            from matplotlib.figure import Figure  # type: ignore
        except Exception as e:
            raise RendererUnavailable(str(e))

        self._Figure = Figure
        out_dir = os.path.dirname(self.cfg.frame_png)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)

    def begin_frame(self, index: int) -> None:
        Figure = self._Figure
        if not Figure:
            return
        self._index = index
        self._fig = Figure(figsize=(6, 6))
        self._ax = self._fig.add_subplot(projection="3d")
        self._ax.set_title(f"frame {index}")
        self._ax.set_xlabel("x")
        self._ax.set_ylabel("y")
        self._ax.set_zlabel("z")

    def place_segment(self, placement: SegmentPlacement) -> None:
        ax = self._ax
        if ax is None:
            return
        x0, y0, z0 = placement.position
        dx, dy, dz = (c * placement.length for c in placement.direction)
        ax.plot(
            [x0, x0 + dx],
            [y0, y0 + dy],
            [z0, z0 + dz],
            color=MATERIAL_COLORS[placement.material % len(MATERIAL_COLORS)],
            linewidth=max(1.0, placement.scale[0] * 20),
        )

    def draw_line(self, start: Sequence[float], end: Sequence[float], color: str) -> None:
        ax = self._ax
        if ax is None:
            return
        # white lines vanish on the default background
        ax.plot(
            [start[0], end[0]],
            [start[1], end[1]],
            [start[2], end[2]],
            color="lightgray" if color == "white" else color,
            linewidth=0.8,
        )

    def end_frame(self) -> None:
        if self._fig is None:
            return
        self._fig.savefig(self.cfg.frame_png)
        log.debug(f"Frame {self._index} written to {self.cfg.frame_png}")
        self._fig = None
        self._ax = None

    def cleanup(self) -> None:
        self._fig = None
        self._ax = None
