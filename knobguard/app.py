# knobguard/app.py
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import trimesh
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field

from .config import DEFAULTS, NAME, TYPES, ConfigError
from .kernel import KernelError
from .radio_guard import make_model

# -------------------------- Config & App --------------------------

DEBUG = os.getenv("DEBUG_KNOBGUARD", "0") == "1"
logging.basicConfig(
    level=logging.DEBUG if DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
log = logging.getLogger(__name__)


def _split_origins(s: Optional[str]) -> list[str]:
    if not s:
        return []
    return [x.strip() for x in s.split(",") if x.strip()]


origins = _split_origins(os.getenv("CORS_ALLOW_ORIGINS", "")) or ["*"]

app = FastAPI(title="knobguard - radio knob guard STL service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_MEDIA = {
    "stl": "model/stl",
    "glb": "model/gltf-binary",
}

# -------------------------- Schemas --------------------------


class GenerateBody(BaseModel):
    params: Dict[str, Any] = Field(default_factory=dict)


# -------------------------- Helpers --------------------------


def _export(mesh: trimesh.Trimesh, fmt: str) -> bytes:
    if fmt == "glb":
        from trimesh.visual import ColorVisuals

        preview = mesh.copy()
        preview.visual = ColorVisuals(preview, face_colors=[210, 210, 210, 255])  # gris claro
        scene = trimesh.Scene()
        scene.add_geometry(preview, node_name=NAME)
        return scene.export(file_type="glb")
    return mesh.export(file_type="stl")


# -------------------------- Endpoints --------------------------


@app.get("/health")
def health():
    return {
        "ok": True,
        "service": "knobguard",
        "model": NAME,
        "origins": origins,
        "formats": sorted(_MEDIA),
    }


@app.get("/defaults")
def defaults():
    return {"name": NAME, "defaults": DEFAULTS, "types": TYPES}


@app.post("/generate")
def generate(body: GenerateBody, fmt: str = Query("stl")):
    fmt = (fmt or "stl").strip().lower()
    if fmt not in _MEDIA:
        raise HTTPException(status_code=400, detail=f"Unsupported format '{fmt}'")

    try:
        mesh = make_model(body.params)
    except ConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except KernelError as e:
        log.exception("geometry kernel failed")
        raise HTTPException(status_code=500, detail=f"Model build error: {e}")

    data = _export(mesh, fmt)
    filename = f"{NAME.replace('_', '-')}.{fmt}"
    log.info("generated %s (%d bytes)", filename, len(data))
    return Response(
        content=data,
        media_type=_MEDIA[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
