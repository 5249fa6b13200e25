from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List


def _default_data_dir() -> str:
    return os.path.join(os.path.dirname(__file__), "data")


@dataclass
class SceneDefaults:
    # Positions of the scene handles when no setup is supplied
    start: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    end: List[float] = field(default_factory=lambda: [5.0, 0.0, 0.0])
    handle_one: List[float] = field(default_factory=lambda: [1.0, 2.0, 0.0])
    handle_two: List[float] = field(default_factory=lambda: [4.0, -2.0, 0.0])


@dataclass
class DemoConfig:
    # Curve
    segments: int = 20
    dims: int = 3                      # 2 or 3
    tangent_one_weight: float = 1.0
    tangent_two_weight: float = 1.0

    # Segment primitives
    thickness: float = 0.2

    # Animation
    frame_dt: float = 1.0 / 60.0       # seconds per frame

    # Rendering
    renderer: str = "log"              # "log" or "plot"
    plot_path: str = ""                # empty -> <data_dir>/frame.png

    # Storage
    data_dir: str = field(default_factory=_default_data_dir)

    scene: SceneDefaults = field(default_factory=SceneDefaults)

    @property
    def frame_png(self) -> str:
        return self.plot_path or os.path.join(self.data_dir, "frame.png")


def _vec(name: str, default: List[float]) -> List[float]:
    raw = os.getenv(name)
    if not raw:
        return default
    return [float(v) for v in raw.split(",")]


def load_config() -> DemoConfig:
    cfg = DemoConfig()
    # Simple env overrides
    cfg.segments = int(os.getenv("HERMITE_SEGMENTS", cfg.segments))
    cfg.dims = int(os.getenv("HERMITE_DIMS", cfg.dims))
    cfg.tangent_one_weight = float(os.getenv("HERMITE_TANGENT_ONE_WEIGHT", cfg.tangent_one_weight))
    cfg.tangent_two_weight = float(os.getenv("HERMITE_TANGENT_TWO_WEIGHT", cfg.tangent_two_weight))
    cfg.thickness = float(os.getenv("HERMITE_THICKNESS", cfg.thickness))
    cfg.frame_dt = float(os.getenv("HERMITE_FRAME_DT", cfg.frame_dt))
    cfg.renderer = os.getenv("HERMITE_RENDERER", cfg.renderer).lower()
    cfg.plot_path = os.getenv("HERMITE_PLOT_PATH", cfg.plot_path)
    cfg.data_dir = os.getenv("HERMITE_DATA_DIR", cfg.data_dir)
    # Handle positions as "x,y[,z]"
    cfg.scene.start = _vec("HERMITE_START", cfg.scene.start)
    cfg.scene.end = _vec("HERMITE_END", cfg.scene.end)
    cfg.scene.handle_one = _vec("HERMITE_HANDLE_ONE", cfg.scene.handle_one)
    cfg.scene.handle_two = _vec("HERMITE_HANDLE_TWO", cfg.scene.handle_two)
    if cfg.dims not in (2, 3):
        raise ValueError(f"HERMITE_DIMS must be 2 or 3, got {cfg.dims}")
    return cfg
