from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from hermite_viz.controller import manager
from hermite_viz.server.api import app

from conftest import wait_for

CURVE_2D = {"p1": [0.0, 0.0], "p2": [1.0, 0.0], "t1": [1.0, 0.0], "t2": [1.0, 0.0]}
SCENE_2D = {
    "start": [0.0, 0.0],
    "end": [5.0, 0.0],
    "handle_one": [1.0, 2.0],
    "handle_two": [4.0, -2.0],
    "segments": 4,
}


def post_json(client, url, body):
    # NaN and Infinity literals; httpx's own encoder rejects them
    return client.post(url, content=json.dumps(body), headers={"Content-Type": "application/json"})


@pytest.fixture
def client(monkeypatch, tmp_path):
    monkeypatch.setenv("HERMITE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("HERMITE_FRAME_DT", "0")
    monkeypatch.setattr(manager, "_singleton", None)
    with TestClient(app) as c:
        yield c
    manager.get_controller().stop()


def test_status(client):
    resp = client.get("/api/status")
    assert resp.status_code == 200
    assert resp.json()["status"] == "idle"


def test_evaluate(client):
    resp = client.post("/api/evaluate", json={**CURVE_2D, "step": 0.5})
    assert resp.status_code == 200
    assert resp.json()["point"] == pytest.approx([0.5, 0.0])


def test_evaluate_3d(client):
    body = {"p1": [0, 0, 0], "p2": [1, 2, 3], "t1": [0, 0, 0], "t2": [0, 0, 0], "step": 1.0}
    resp = client.post("/api/evaluate", json=body)
    assert resp.json()["point"] == pytest.approx([1.0, 2.0, 3.0])


def test_evaluate_rejects_mixed_dims(client):
    resp = client.post("/api/evaluate", json={**CURVE_2D, "p2": [1.0, 0.0, 0.0], "step": 0.5})
    assert resp.status_code == 422


def test_segments(client):
    resp = client.post("/api/segments", json={**CURVE_2D, "segments": 4})
    assert resp.status_code == 200
    segments = resp.json()["segments"]
    assert len(segments) == 4
    assert segments[0][0] == [0.0, 0.0]
    assert segments[-1][1] == pytest.approx([1.0, 0.0])
    for (_, end), (start, _) in zip(segments, segments[1:]):
        assert end == start


def test_segments_rejects_zero(client):
    resp = client.post("/api/segments", json={**CURVE_2D, "segments": 0})
    assert resp.status_code == 422


def test_render_and_frame(client):
    assert client.get("/api/frame").json() == {"frame": None}
    assert client.post("/api/render", json=SCENE_2D).json() == {"ok": True}
    ctl = manager.get_controller()
    assert wait_for(lambda: ctl.frame_count == 1 and ctl.status == "idle")
    frame = client.get("/api/frame").json()["frame"]
    assert frame["dims"] == 2
    assert len(frame["placements"]) == 4


def test_run_default_scene(client):
    assert client.post("/api/run?frames=3").json() == {"ok": True}
    ctl = manager.get_controller()
    assert wait_for(lambda: ctl.frame_count == 3 and ctl.status == "idle")
    assert client.get("/api/frame").json()["frame"]["dims"] == 3


def test_stop(client):
    client.post("/api/run", json=SCENE_2D)
    ctl = manager.get_controller()
    assert wait_for(lambda: ctl.frame_count > 0)
    assert client.post("/api/stop").json() == {"ok": True}
    assert wait_for(lambda: ctl.status == "stopped")


def test_frame_png_missing(client):
    assert client.get("/api/frame.png").status_code == 404


def test_presets(client):
    assert client.get("/api/presets").json() == {}
    assert client.post("/api/presets/arc", json=SCENE_2D).json() == {"ok": True}
    assert client.get("/api/presets").json()["arc"]["segments"] == 4
    assert client.get("/api/run_preset/arc?frames=2").json() == {"ok": True}
    ctl = manager.get_controller()
    assert wait_for(lambda: ctl.frame_count == 2 and ctl.status == "idle")
    assert client.delete("/api/presets/arc").json() == {"ok": True}
    assert client.get("/api/presets").json() == {}


def test_run_missing_preset(client):
    resp = client.get("/api/run_preset/nope")
    assert resp.status_code == 404


@pytest.mark.parametrize(
    "overrides, step",
    [
        ({}, 1e200),
        ({"p1": [float("nan"), 0.0]}, 0.5),
        ({"p1": [float("inf"), 0.0]}, 0.5),
    ],
)
def test_evaluate_non_finite_point(client, overrides, step):
    resp = post_json(client, "/api/evaluate", {**CURVE_2D, **overrides, "step": step})
    assert resp.status_code == 200
    point = resp.json()["point"]
    assert len(point) == 2
    assert any(c in ("NaN", "Infinity", "-Infinity") for c in point)


def test_evaluate_infinite_coordinate_encoding(client):
    resp = post_json(client, "/api/evaluate", {**CURVE_2D, "p1": [float("-inf"), 0.0], "step": 0.5})
    assert resp.json()["point"] == ["-Infinity", 0.0]


def test_segments_non_finite(client):
    resp = post_json(client, "/api/segments", {**CURVE_2D, "p1": [float("nan"), 0.0], "segments": 3})
    assert resp.status_code == 200
    segments = resp.json()["segments"]
    assert len(segments) == 3
    assert segments[0][0] == ["NaN", 0.0]


def test_frame_with_non_finite_handle(client):
    scene = {**SCENE_2D, "handle_one": [float("nan"), 2.0]}
    assert post_json(client, "/api/render", scene).status_code == 200
    ctl = manager.get_controller()
    assert wait_for(lambda: ctl.frame_count == 1 and ctl.status == "idle")
    resp = client.get("/api/frame")
    assert resp.status_code == 200
    assert resp.json()["frame"]["handle_one"] == ["NaN", 2.0]


def test_run_invalid_preset(client, tmp_path):
    (tmp_path / "presets.json").write_text(
        json.dumps({"broken": {"start": [0.0, 0.0], "end": [1.0, 0.0, 0.0]}}), encoding="utf-8"
    )
    resp = client.get("/api/run_preset/broken")
    assert resp.status_code == 422
    assert manager.get_controller().frame_count == 0
