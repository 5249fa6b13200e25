from __future__ import annotations

import json
import logging
import os
import queue
import threading
import time
from dataclasses import dataclass
from typing import Optional, Literal, Dict, Any, Sequence

import numpy as np

from ..config import load_config, DemoConfig
from ..curve.frames import Frame, build_frame, handle_offsets
from ..curve.models import SceneSetup
from ..scene.base import SceneRenderer
from ..scene.log_renderer import LoggingRenderer
from ..scene.plot_renderer import PlotRenderer

log = logging.getLogger(__name__)


CommandType = Literal["run", "render"]


@dataclass
class Command:
    type: CommandType
    args: Dict[str, Any]


class DemoController:
    def __init__(self, cfg: Optional[DemoConfig] = None, renderer: Optional[SceneRenderer] = None):
        self.cfg: DemoConfig = cfg or load_config()
        self.renderer: SceneRenderer = renderer or self._init_renderer()

        self.status: str = "idle"
        self.error: Optional[str] = None
        self.frame_count: int = 0
        self.anim_counter: float = 0.0
        self.segments: int = 0
        self._last_frame: Optional[Frame] = None

        self._cmd_q: "queue.Queue[Command]" = queue.Queue()
        self._stop_event = threading.Event()
        self._worker = threading.Thread(target=self._worker_loop, daemon=True)
        self._worker.start()

        # Presets storage
        self._data_dir = self.cfg.data_dir
        os.makedirs(self._data_dir, exist_ok=True)
        self._presets_file = os.path.join(self._data_dir, "presets.json")
        if not os.path.exists(self._presets_file):
            with open(self._presets_file, "w", encoding="utf-8") as f:
                json.dump({}, f)

    def _init_renderer(self) -> SceneRenderer:
        if self.cfg.renderer == "plot":
            try:
                plot = PlotRenderer(self.cfg)
                plot.setup()
                log.info("Using matplotlib renderer")
                return plot
            except Exception as e:
                log.info(f"Falling back to logging renderer: {e}")
        renderer = LoggingRenderer(self.cfg)
        renderer.setup()
        return renderer

    def default_setup(self) -> SceneSetup:
        """Scene built from configured handle positions, cut to the configured dimension."""
        d = self.cfg.dims
        scene = self.cfg.scene
        return SceneSetup(
            start=scene.start[:d],
            end=scene.end[:d],
            handle_one=scene.handle_one[:d],
            handle_two=scene.handle_two[:d],
            tangent_one_weight=self.cfg.tangent_one_weight,
            tangent_two_weight=self.cfg.tangent_two_weight,
            segments=self.cfg.segments,
        )

    # Public API
    def enqueue_run(self, setup: SceneSetup, frames: Optional[int] = None) -> None:
        self._cmd_q.put(Command("run", {"setup": setup, "frames": frames}))

    def enqueue_render(self, setup: SceneSetup) -> None:
        self._cmd_q.put(Command("render", {"setup": setup}))

    def stop(self) -> None:
        self._stop_event.set()
        # Clear pending commands
        while not self._cmd_q.empty():
            try:
                self._cmd_q.get_nowait()
            except queue.Empty:
                break

    def get_status(self) -> dict:
        return {
            "status": self.status,
            "frame_count": self.frame_count,
            "anim_counter": round(self.anim_counter, 3),
            "segments": self.segments,
            "renderer": type(self.renderer).__name__,
            "error": self.error,
        }

    def get_frame(self) -> Optional[dict]:
        frame = self._last_frame
        return frame.to_dict() if frame is not None else None

    def render_frame(
        self, setup: SceneSetup, handle_one: Sequence[float], handle_two: Sequence[float]
    ) -> Frame:
        """Build one frame for the given handle positions and push it to the renderer."""
        frame = build_frame(setup, handle_one, handle_two, self.cfg.thickness, index=self.frame_count)
        self.renderer.begin_frame(frame.index)
        for placement in frame.placements:
            self.renderer.place_segment(placement)
        for line in frame.lines:
            self.renderer.draw_line(line.start, line.end, line.color)
        self.renderer.end_frame()

        self._last_frame = frame
        self.segments = len(frame.segments)
        self.frame_count += 1
        return frame

    # Presets
    def list_presets(self) -> Dict[str, dict]:
        try:
            with open(self._presets_file, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError):
            log.warning(f"Could not read presets from {self._presets_file}")
            return {}

    def save_preset(self, name: str, setup: SceneSetup) -> None:
        data = self.list_presets()
        data[name] = json.loads(setup.model_dump_json())
        with open(self._presets_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def delete_preset(self, name: str) -> None:
        data = self.list_presets()
        if name in data:
            data.pop(name)
            with open(self._presets_file, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)

    # Worker and animation
    def _worker_loop(self) -> None:
        while True:
            cmd = self._cmd_q.get()
            self._stop_event.clear()
            self.error = None
            try:
                if cmd.type == "run":
                    self._do_run(cmd.args["setup"], cmd.args["frames"])
                elif cmd.type == "render":
                    self._do_render(cmd.args["setup"])
            except Exception as e:
                log.exception("Command failed")
                self.error = str(e)
                self.status = "error"

    def _do_render(self, setup: SceneSetup) -> None:
        self.status = "rendering"
        self.render_frame(setup, setup.handle_one, setup.handle_two)
        self.status = "idle"

    def _do_run(self, setup: SceneSetup, frames: Optional[int]) -> None:
        self.status = "running"
        self.anim_counter = 0.0
        handle_one = np.asarray(setup.handle_one, dtype=float)
        handle_two = np.asarray(setup.handle_two, dtype=float)
        dt = self.cfg.frame_dt
        log.info(f"Animation started: {setup.dims}D, {setup.segments} segments, frames={frames}")

        start_time = time.perf_counter()
        n = 0
        while frames is None or n < frames:
            if self._stop_event.is_set():
                break
            self.anim_counter += dt
            # Handles drift every frame; the curve follows them
            offset_one, offset_two = handle_offsets(self.anim_counter, setup.dims)
            handle_one = handle_one + offset_one
            handle_two = handle_two + offset_two
            self.render_frame(setup, handle_one, handle_two)
            n += 1

            # Pace frames against wall clock
            deadline = start_time + n * dt
            now = time.perf_counter()
            if now < deadline:
                time.sleep(deadline - now)

        self.status = "idle" if not self._stop_event.is_set() else "stopped"
        log.info(f"Animation {self.status} after {n} frames")


# Singleton getter
_singleton: Optional[DemoController] = None


def get_controller() -> DemoController:
    global _singleton
    if _singleton is None:
        _singleton = DemoController()
    return _singleton
