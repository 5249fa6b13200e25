from __future__ import annotations

import time

import pytest

from hermite_viz.config import DemoConfig
from hermite_viz.curve.models import SceneSetup


def wait_for(predicate, timeout: float = 5.0) -> bool:
    """Poll until predicate() is true or the timeout expires."""
    deadline = time.perf_counter() + timeout
    while time.perf_counter() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def cfg(tmp_path):
    return DemoConfig(data_dir=str(tmp_path), frame_dt=0.0)


@pytest.fixture
def setup_2d():
    return SceneSetup(
        start=[0.0, 0.0],
        end=[5.0, 0.0],
        handle_one=[1.0, 2.0],
        handle_two=[4.0, -2.0],
        segments=8,
    )


@pytest.fixture
def setup_3d():
    return SceneSetup(
        start=[0.0, 0.0, 0.0],
        end=[5.0, 1.0, -2.0],
        handle_one=[1.0, 2.0, 1.0],
        handle_two=[4.0, -2.0, 0.5],
        segments=10,
    )
