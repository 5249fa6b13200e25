from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from pydantic import ValidationError

from ..controller.manager import get_controller
from ..curve.frames import json_vector
from ..curve.hermite import InvalidSegmentCount, evaluate, sample_segments
from ..curve.models import EvaluateRequest, SceneSetup, SegmentsRequest

log = logging.getLogger(__name__)


app = FastAPI(title="Hermite Curve API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidSegmentCount)
def invalid_segment_count_handler(request: Request, exc: InvalidSegmentCount):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/api/status")
def api_status():
    ctl = get_controller()
    return ctl.get_status()


@app.post("/api/evaluate")
def api_evaluate(req: EvaluateRequest):
    point = evaluate(req.p1, req.p2, req.t1, req.t2, req.step)
    return {"point": json_vector(point)}


@app.post("/api/segments")
def api_segments(req: SegmentsRequest):
    segments = sample_segments(req.p1, req.p2, req.t1, req.t2, req.segments)
    return {"segments": [[json_vector(a), json_vector(b)] for a, b in segments]}


@app.post("/api/run")
def api_run(setup: Optional[SceneSetup] = None, frames: Optional[int] = Query(None, ge=1)):
    """Animate the tangent handles of a scene.

    Behavior:
    - Without a body the configured default scene is used.
    - Without ``frames`` the animation runs until /api/stop.
    """
    ctl = get_controller()
    ctl.enqueue_run(setup or ctl.default_setup(), frames)
    return {"ok": True}


@app.post("/api/render")
def api_render(setup: Optional[SceneSetup] = None):
    ctl = get_controller()
    ctl.enqueue_render(setup or ctl.default_setup())
    return {"ok": True}


@app.post("/api/stop")
def api_stop():
    ctl = get_controller()
    ctl.stop()
    return {"ok": True}


@app.get("/api/frame")
def api_frame():
    ctl = get_controller()
    return {"frame": ctl.get_frame()}


@app.get("/api/frame.png")
def api_frame_png():
    ctl = get_controller()
    path = ctl.cfg.frame_png
    if not os.path.exists(path):
        raise HTTPException(404, detail="No frame image rendered")
    return FileResponse(path, media_type="image/png")


@app.get("/api/presets")
def api_presets_list():
    ctl = get_controller()
    return ctl.list_presets()


@app.post("/api/presets/{name}")
def api_preset_save(name: str, setup: SceneSetup):
    ctl = get_controller()
    ctl.save_preset(name, setup)
    return {"ok": True}


@app.delete("/api/presets/{name}")
def api_preset_delete(name: str):
    ctl = get_controller()
    ctl.delete_preset(name)
    return {"ok": True}


@app.get("/api/run_preset/{name}")
def api_run_preset(name: str, frames: Optional[int] = Query(None, ge=1)):
    ctl = get_controller()
    data = ctl.list_presets()
    if name not in data:
        raise HTTPException(404, detail="Preset not found")
    try:
        setup = SceneSetup(**data[name])
    except ValidationError as e:
        log.warning(f"Preset {name!r} is invalid: {e}")
        raise HTTPException(422, detail=f"Preset {name!r} is invalid")
    ctl.enqueue_run(setup, frames)
    return {"ok": True}
