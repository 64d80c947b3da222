# knobguard/kernel.py
"""
Motor geométrico inyectable.

Los builders (arc/plate/guard/cutters/radio_guard) sólo deciden QUÉ piezas
construir y en qué orden; las operaciones (extrusión, primitivas, envolvente
convexa, booleanos, transformaciones) las hace un objeto que cumple
`GeometryKernel`. Así el algoritmo se prueba sin depender del motor CSG.

Convenciones comunes a cualquier kernel:
  - `extrude` y `cylinder` arrancan en Z=0 y crecen hacia +Z.
  - `box(size)` tiene su esquina mínima en el origen.
  - Ninguna operación modifica sus operandos: siempre devuelve un sólido nuevo.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Protocol, Sequence

import manifold3d as m3d
import numpy as np
import shapely
import trimesh
from shapely.geometry import MultiPolygon, Polygon

from .geom import Point3D, Polygon2D, rotz, translate

log = logging.getLogger(__name__)

Solid = Any

_GRID = 1e-6  # mm


class KernelError(RuntimeError):
    """El motor booleano/envolvente no pudo completar la operación."""


class GeometryKernel(Protocol):
    def extrude(self, polygon: Polygon2D, height: float) -> Solid: ...

    def cylinder(self, radius: float, height: float) -> Solid: ...

    def box(self, size: Point3D) -> Solid: ...

    def hull(self, solids: Sequence[Solid]) -> Solid: ...

    def union(self, solids: Sequence[Solid]) -> Solid: ...

    def difference(self, solid: Solid, cutter: Solid) -> Solid: ...

    def translate(self, solid: Solid, offset: Point3D) -> Solid: ...

    def rotate_z(self, solid: Solid, degrees: float) -> Solid: ...


# ---------------------- Reparación y saneado ----------------------

def _repair(mesh: trimesh.Trimesh) -> trimesh.Trimesh:
    """Deja la malla lista para booleanos: vértices unidos, normales coherentes."""
    m = mesh.copy()
    m.merge_vertices()
    m.remove_unreferenced_vertices()
    trimesh.repair.fix_normals(m)
    if not m.is_watertight:
        trimesh.repair.fill_holes(m)
    return m


def _polygonal_parts(geom) -> List[Polygon]:
    if isinstance(geom, Polygon):
        return [geom] if not geom.is_empty else []
    if isinstance(geom, MultiPolygon):
        return [g for g in geom.geoms if not g.is_empty]
    # GeometryCollection: nos quedamos sólo con las superficies
    out: List[Polygon] = []
    for g in getattr(geom, "geoms", []):
        out.extend(_polygonal_parts(g))
    return out


# ---------------------- Manifold3D bridges ----------------------

def _to_mf(mesh: trimesh.Trimesh) -> "m3d.Manifold":
    return m3d.Manifold(
        mesh=m3d.Mesh(
            vert_properties=np.asarray(mesh.vertices, dtype=np.float32),
            tri_verts=np.asarray(mesh.faces, dtype=np.uint32),
        )
    )


def _from_mf(manifold_obj: "m3d.Manifold") -> trimesh.Trimesh:
    status = manifold_obj.status()
    if status != m3d.Error.NoError:
        raise KernelError(f"manifold3d boolean failed: {status}")
    mm = manifold_obj.to_mesh()
    v = np.asarray(mm.vert_properties, dtype=float)[:, :3]
    f = np.asarray(mm.tri_verts, dtype=np.int64)
    return trimesh.Trimesh(vertices=v, faces=f, process=True)


# ---------------------- Kernel trimesh ----------------------

class TrimeshKernel:
    """
    Kernel sobre `trimesh.Trimesh`: primitivas de trimesh, envolvente convexa
    con `trimesh.convex`, booleanos con manifold3d.
    """

    def __init__(self, sections: int = 96):
        self.sections = int(sections) if sections and sections >= 3 else 32

    # -- primitivas --

    def extrude(self, polygon: Polygon2D, height: float) -> trimesh.Trimesh:
        poly = Polygon(polygon)
        if not poly.is_valid:
            # p.ej. un anillo completo de 360º: el contorno se toca a sí mismo en la costura.
            # Con la rejilla los extremos coinciden y la costura se anula (anillo con agujero).
            poly = shapely.set_precision(poly, _GRID)
            if not poly.is_valid:
                poly = shapely.make_valid(poly)
        parts = _polygonal_parts(poly)
        if not parts:
            raise KernelError("cannot extrude an empty polygon")
        meshes = [trimesh.creation.extrude_polygon(p, float(height)) for p in parts]
        return meshes[0] if len(meshes) == 1 else trimesh.util.concatenate(meshes)

    def cylinder(self, radius: float, height: float) -> trimesh.Trimesh:
        h = float(height)
        c = trimesh.creation.cylinder(radius=float(radius), height=h, sections=self.sections)
        c.apply_translation((0.0, 0.0, h / 2.0))
        return c

    def box(self, size: Point3D) -> trimesh.Trimesh:
        ext = np.asarray(size, dtype=float)
        b = trimesh.creation.box(extents=ext)
        b.apply_translation(ext / 2.0)
        return b

    # -- envolvente y booleanos --

    def hull(self, solids: Sequence[trimesh.Trimesh]) -> trimesh.Trimesh:
        pts = [np.asarray(s.vertices, dtype=float) for s in solids if len(s.vertices)]
        if not pts:
            raise KernelError("hull of nothing")
        return trimesh.convex.convex_hull(np.vstack(pts))

    def union(self, solids: Iterable[trimesh.Trimesh]) -> trimesh.Trimesh:
        mlist = [_repair(m) for m in solids if len(m.vertices)]
        if not mlist:
            return trimesh.Trimesh()
        if len(mlist) == 1:
            return mlist[0]
        acc = m3d.Manifold.batch_boolean([_to_mf(m) for m in mlist], m3d.OpType.Add)
        out = _from_mf(acc)
        log.debug("union of %d solids -> %d faces", len(mlist), len(out.faces))
        return out

    def difference(self, solid: trimesh.Trimesh, cutter: trimesh.Trimesh) -> trimesh.Trimesh:
        if not len(cutter.vertices):
            return solid.copy()
        out = _from_mf(_to_mf(_repair(solid)) - _to_mf(_repair(cutter)))
        log.debug("difference %d - %d faces -> %d faces", len(solid.faces), len(cutter.faces), len(out.faces))
        return out

    # -- transformaciones --

    def translate(self, solid: trimesh.Trimesh, offset: Point3D) -> trimesh.Trimesh:
        out = solid.copy()
        out.apply_transform(translate(offset))
        return out

    def rotate_z(self, solid: trimesh.Trimesh, degrees: float) -> trimesh.Trimesh:
        out = solid.copy()
        out.apply_transform(rotz(degrees))
        return out


__all__ = ["Solid", "GeometryKernel", "KernelError", "TrimeshKernel"]
