"""Triangle meshes and feature-edge wireframes for the base shapes.

Every geometry becomes an indexed triangle mesh whose topology follows
the usual WebGL primitive layouts:

    - BOX: six subdivided planes, each with its own vertices
    - CYLINDER: side grid from top ring (+h/2) to bottom ring (-h/2) with a
      duplicated seam column, plus a fan cap on each end whose radius is > 0
    - SPHERE: longitude/latitude grid, pole rows emit one triangle per cell
    - TORUS: ring in the XY plane, tube grid with duplicated seams
    - polyhedra: base solid, each face split ``detail + 1`` times per edge,
      every vertex pushed out to the circumscribed sphere

Wireframes are feature edges: coincident vertices are merged (to 1e-4),
an edge is drawn when it borders a single face or when its two faces
meet at an angle of at least the material's threshold. Box subdivision
lines and polygon diagonals are therefore hidden; the threshold of 1
degree at the lowest detail still shows every sphere and cylinder facet.

Meshes are cached per geometry value and returned read-only.
"""

from __future__ import annotations

from functools import lru_cache
from math import sqrt

import numpy as np

from robot_gen.arena import PlacementArena, transform_points
from robot_gen.primitives import GeomKind, Geometry, Group, MaterialRole

MERGE_PRECISION = 1e4

# ---------------------------------------------------------------------------
# Base solids (unit-ish coordinates; projected to the radius later)
# ---------------------------------------------------------------------------

_PHI = (1 + sqrt(5)) / 2
_IPHI = 1 / _PHI

_TETRA_VERTS = [(1, 1, 1), (-1, -1, 1), (-1, 1, -1), (1, -1, -1)]
_TETRA_FACES = [(2, 1, 0), (0, 3, 2), (1, 3, 0), (2, 3, 1)]

_OCTA_VERTS = [(1, 0, 0), (-1, 0, 0), (0, 1, 0), (0, -1, 0), (0, 0, 1), (0, 0, -1)]
_OCTA_FACES = [
    (0, 2, 4), (0, 4, 3), (0, 3, 5), (0, 5, 2),
    (1, 2, 5), (1, 5, 3), (1, 3, 4), (1, 4, 2),
]

_ICOSA_VERTS = [
    (-1, _PHI, 0), (1, _PHI, 0), (-1, -_PHI, 0), (1, -_PHI, 0),
    (0, -1, _PHI), (0, 1, _PHI), (0, -1, -_PHI), (0, 1, -_PHI),
    (_PHI, 0, -1), (_PHI, 0, 1), (-_PHI, 0, -1), (-_PHI, 0, 1),
]
_ICOSA_FACES = [
    (0, 11, 5), (0, 5, 1), (0, 1, 7), (0, 7, 10), (0, 10, 11),
    (1, 5, 9), (5, 11, 4), (11, 10, 2), (10, 7, 6), (7, 1, 8),
    (3, 9, 4), (3, 4, 2), (3, 2, 6), (3, 6, 8), (3, 8, 9),
    (4, 9, 5), (2, 4, 11), (6, 2, 10), (8, 6, 7), (9, 8, 1),
]

_DODECA_VERTS = [
    (-1, -1, -1), (-1, -1, 1), (-1, 1, -1), (-1, 1, 1),
    (1, -1, -1), (1, -1, 1), (1, 1, -1), (1, 1, 1),
    (0, -_IPHI, -_PHI), (0, -_IPHI, _PHI), (0, _IPHI, -_PHI), (0, _IPHI, _PHI),
    (-_IPHI, -_PHI, 0), (-_IPHI, _PHI, 0), (_IPHI, -_PHI, 0), (_IPHI, _PHI, 0),
    (-_PHI, 0, -_IPHI), (_PHI, 0, -_IPHI), (-_PHI, 0, _IPHI), (_PHI, 0, _IPHI),
]
# 12 pentagons, 3 triangles each
_DODECA_FACES = [
    (3, 11, 7), (3, 7, 15), (3, 15, 13),
    (7, 19, 17), (7, 17, 6), (7, 6, 15),
    (17, 4, 8), (17, 8, 10), (17, 10, 6),
    (8, 0, 16), (8, 16, 2), (8, 2, 10),
    (0, 12, 1), (0, 1, 18), (0, 18, 16),
    (6, 10, 2), (6, 2, 13), (6, 13, 15),
    (2, 16, 18), (2, 18, 3), (2, 3, 13),
    (18, 1, 9), (18, 9, 11), (18, 11, 3),
    (4, 14, 12), (4, 12, 0), (4, 0, 8),
    (11, 9, 5), (11, 5, 19), (11, 19, 7),
    (19, 5, 14), (19, 14, 4), (19, 4, 17),
    (1, 12, 14), (1, 14, 5), (1, 5, 9),
]

_SOLIDS = {
    GeomKind.TETRAHEDRON: (_TETRA_VERTS, _TETRA_FACES),
    GeomKind.OCTAHEDRON: (_OCTA_VERTS, _OCTA_FACES),
    GeomKind.ICOSAHEDRON: (_ICOSA_VERTS, _ICOSA_FACES),
    GeomKind.DODECAHEDRON: (_DODECA_VERTS, _DODECA_FACES),
}

# (normal axis, sign) -> (u axis, v axis) with u x v pointing outward
_BOX_PLANES = [
    (0, 1, 1, 2),
    (0, -1, 2, 1),
    (1, 1, 2, 0),
    (1, -1, 0, 2),
    (2, 1, 0, 1),
    (2, -1, 1, 0),
]


def _grid_faces(rows: int, cols: int, offset: int = 0) -> list[tuple[int, int, int]]:
    """Two triangles per cell of a (rows+1) x (cols+1) vertex grid, u along cols."""
    faces = []
    for r in range(rows):
        for c in range(cols):
            a = offset + r * (cols + 1) + c
            b = a + 1
            d = a + cols + 1
            e = d + 1
            faces.append((a, b, e))
            faces.append((a, e, d))
    return faces


def _box(size, segments):
    verts: list[np.ndarray] = []
    faces: list[tuple[int, int, int]] = []
    half = np.asarray(size, dtype=float) / 2
    for axis, sign, u, v in _BOX_PLANES:
        nu, nv = segments[u], segments[v]
        us = np.linspace(-half[u], half[u], nu + 1)
        vs = np.linspace(-half[v], half[v], nv + 1)
        plane = np.zeros((nv + 1, nu + 1, 3))
        plane[..., axis] = sign * half[axis]
        plane[..., u] = us[None, :]
        plane[..., v] = vs[:, None]
        faces.extend(_grid_faces(nv, nu, offset=sum(len(p) for p in verts)))
        verts.append(plane.reshape(-1, 3))
    return np.concatenate(verts), faces


def _cylinder(size, segments):
    r_top, r_bottom, height = size
    radial, rows = segments
    theta = np.linspace(0, 2 * np.pi, radial + 1)
    t = np.linspace(0, 1, rows + 1)
    radius = t * (r_bottom - r_top) + r_top
    y = height / 2 - t * height

    side = np.zeros((rows + 1, radial + 1, 3))
    side[..., 0] = radius[:, None] * np.sin(theta)[None, :]
    side[..., 1] = y[:, None]
    side[..., 2] = radius[:, None] * np.cos(theta)[None, :]
    verts = [side.reshape(-1, 3)]
    faces = _grid_faces(rows, radial)
    n = len(verts[0])

    for r, cy in ((r_top, height / 2), (r_bottom, -height / 2)):
        if r <= 0:
            continue
        ring = np.zeros((radial + 1, 3))
        ring[:, 0] = r * np.sin(theta)
        ring[:, 1] = cy
        ring[:, 2] = r * np.cos(theta)
        center = n + radial + 1
        faces.extend((n + i, n + i + 1, center) for i in range(radial))
        verts.extend([ring, np.array([[0.0, cy, 0.0]])])
        n += radial + 2
    return np.concatenate(verts), faces


def _sphere(size, segments):
    (radius,) = size
    ws, hs = segments
    phi = np.linspace(0, 2 * np.pi, ws + 1)
    theta = np.linspace(0, np.pi, hs + 1)
    grid = np.zeros((hs + 1, ws + 1, 3))
    grid[..., 0] = -radius * np.cos(phi)[None, :] * np.sin(theta)[:, None]
    grid[..., 1] = radius * np.cos(theta)[:, None]
    grid[..., 2] = radius * np.sin(phi)[None, :] * np.sin(theta)[:, None]

    faces = []
    for iy in range(hs):
        for ix in range(ws):
            a = iy * (ws + 1) + ix + 1
            b = iy * (ws + 1) + ix
            c = (iy + 1) * (ws + 1) + ix
            d = (iy + 1) * (ws + 1) + ix + 1
            if iy != 0:
                faces.append((a, b, d))
            if iy != hs - 1:
                faces.append((b, c, d))
    return grid.reshape(-1, 3), faces


def _torus(size, segments):
    radius, tube = size
    radial, tubular = segments
    v = np.linspace(0, 2 * np.pi, radial + 1)[:, None]
    u = np.linspace(0, 2 * np.pi, tubular + 1)[None, :]
    grid = np.zeros((radial + 1, tubular + 1, 3))
    grid[..., 0] = (radius + tube * np.cos(v)) * np.cos(u)
    grid[..., 1] = (radius + tube * np.cos(v)) * np.sin(u)
    grid[..., 2] = tube * np.sin(v) * np.ones_like(u)
    return grid.reshape(-1, 3), _grid_faces(radial, tubular)


def _polyhedron(kind, size, segments):
    (radius,) = size
    (detail,) = segments
    base_verts, base_faces = _SOLIDS[kind]
    base = np.asarray(base_verts, dtype=float)
    cols = detail + 1

    tris = []
    for ia, ib, ic in base_faces:
        a, b, c = base[ia], base[ib], base[ic]
        rows_v = []
        for i in range(cols + 1):
            aj = a + (c - a) * (i / cols)
            bj = b + (c - b) * (i / cols)
            span = cols - i
            if span == 0:
                rows_v.append([aj])
            else:
                rows_v.append([aj + (bj - aj) * (j / span) for j in range(span + 1)])
        for i in range(cols):
            for j in range(2 * (cols - i) - 1):
                k = j // 2
                if j % 2 == 0:
                    tris.append((rows_v[i][k + 1], rows_v[i + 1][k], rows_v[i][k]))
                else:
                    tris.append((rows_v[i][k + 1], rows_v[i + 1][k + 1], rows_v[i + 1][k]))

    verts = np.asarray(tris, dtype=float).reshape(-1, 3)
    verts *= radius / np.linalg.norm(verts, axis=1, keepdims=True)
    faces = [(3 * i, 3 * i + 1, 3 * i + 2) for i in range(len(tris))]
    return verts, faces


def _orient_outward(verts: np.ndarray, faces: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """Flip triangles whose normal points toward their reference center."""
    tri = verts[faces]
    normal = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
    inward = np.einsum("ij,ij->i", normal, tri.mean(axis=1) - centers) < 0
    faces = faces.copy()
    faces[inward] = faces[inward][:, ::-1]
    return faces


def _torus_centers(verts: np.ndarray, faces: np.ndarray, radius: float) -> np.ndarray:
    centroid = verts[faces].mean(axis=1)
    xy = centroid[:, :2]
    norm = np.linalg.norm(xy, axis=1, keepdims=True)
    centers = np.zeros_like(centroid)
    centers[:, :2] = radius * xy / np.where(norm > 0, norm, 1)
    return centers


@lru_cache(maxsize=4096)
def build_mesh(geometry: Geometry) -> tuple[np.ndarray, np.ndarray]:
    """Vertices (n, 3) and outward-wound triangle indices (m, 3) for a geometry."""
    kind = geometry.kind
    if kind is GeomKind.BOX:
        verts, faces = _box(geometry.size, geometry.segments)
    elif kind is GeomKind.CYLINDER:
        verts, faces = _cylinder(geometry.size, geometry.segments)
    elif kind is GeomKind.SPHERE:
        verts, faces = _sphere(geometry.size, geometry.segments)
    elif kind is GeomKind.TORUS:
        verts, faces = _torus(geometry.size, geometry.segments)
    else:
        verts, faces = _polyhedron(kind, geometry.size, geometry.segments)

    faces = np.asarray(faces, dtype=np.int64).reshape(-1, 3)
    if kind is GeomKind.TORUS:
        centers = _torus_centers(verts, faces, geometry.size[0])
    else:
        centers = np.zeros((len(faces), 3))
    faces = _orient_outward(verts, faces, centers)

    verts.flags.writeable = False
    faces.flags.writeable = False
    return verts, faces


def feature_edges(
    vertices: np.ndarray, faces: np.ndarray, threshold_deg: float
) -> np.ndarray:
    """Edges to draw as (k, 2, 3) segment endpoints in mesh space."""
    keys = np.round(vertices * MERGE_PRECISION).astype(np.int64)
    _, first, remap = np.unique(keys, axis=0, return_index=True, return_inverse=True)
    remap = remap.reshape(-1)
    merged = vertices[first]
    tris = remap[faces]

    # Drop triangles that collapse after merging (cone tips, sphere poles)
    ok = (tris[:, 0] != tris[:, 1]) & (tris[:, 1] != tris[:, 2]) & (tris[:, 2] != tris[:, 0])
    tris = tris[ok]
    if len(tris) == 0:
        return np.zeros((0, 2, 3))
    p = merged[tris]
    normals = np.cross(p[:, 1] - p[:, 0], p[:, 2] - p[:, 0])
    lengths = np.linalg.norm(normals, axis=1)
    keep_tri = lengths > 1e-12
    tris, normals = tris[keep_tri], normals[keep_tri] / lengths[keep_tri, None]

    edges = np.concatenate([tris[:, [0, 1]], tris[:, [1, 2]], tris[:, [2, 0]]])
    edges.sort(axis=1)
    owner = np.tile(np.arange(len(tris)), 3)
    unique_edges, inverse, counts = np.unique(
        edges, axis=0, return_inverse=True, return_counts=True
    )
    inverse = inverse.reshape(-1)
    order = np.argsort(inverse, kind="stable")
    starts = np.cumsum(counts) - counts

    keep = counts != 2
    paired = counts == 2
    f0 = owner[order[starts[paired]]]
    f1 = owner[order[starts[paired] + 1]]
    dots = np.einsum("ij,ij->i", normals[f0], normals[f1])
    keep[paired] = dots <= np.cos(np.radians(threshold_deg))

    return merged[unique_edges[keep]]


@lru_cache(maxsize=4096)
def _cached_edges(geometry: Geometry, threshold_deg: float) -> np.ndarray:
    verts, faces = build_mesh(geometry)
    edges = feature_edges(verts, faces, threshold_deg)
    edges.flags.writeable = False
    return edges


def geometry_edges(geometry: Geometry, threshold_deg: float) -> np.ndarray:
    """Cached feature edges for one geometry value."""
    return _cached_edges(geometry, float(threshold_deg))


def wireframe_segments(
    root: Group, base: np.ndarray | None = None
) -> tuple[np.ndarray, np.ndarray]:
    """World-space wireframe of a whole tree.

    Returns:
        segments: (k, 2, 3) endpoints
        colors: (k, 3) RGB in [0, 1], one row per segment
    """
    segs, cols = [], []
    for _, prim, matrix in PlacementArena.from_tree(root, base).primitives():
        wire = prim.wireframe
        edges = geometry_edges(prim.geometry, wire.edge_threshold_deg or 1.0)
        if len(edges) == 0:
            continue
        segs.append(transform_points(matrix, edges))
        cols.append(np.tile((wire.color.r, wire.color.g, wire.color.b), (len(edges), 1)))
    if not segs:
        return np.zeros((0, 2, 3)), np.zeros((0, 3))
    return np.concatenate(segs), np.concatenate(cols)


def solid_triangles(
    root: Group, base: np.ndarray | None = None
) -> tuple[np.ndarray, np.ndarray]:
    """World-space faces of every primitive that carries a solid material.

    Returns:
        triangles: (k, 3, 3)
        colors: (k, 4) RGBA, alpha is the material opacity
    """
    tris, cols = [], []
    for _, prim, matrix in PlacementArena.from_tree(root, base).primitives():
        face = prim.solid
        if face is None or face.role is not MaterialRole.SOLID_FACE:
            continue
        verts, faces = build_mesh(prim.geometry)
        tris.append(transform_points(matrix, verts[faces]))
        rgba = (face.color.r, face.color.g, face.color.b, face.opacity)
        cols.append(np.tile(rgba, (len(faces), 1)))
    if not tris:
        return np.zeros((0, 3, 3)), np.zeros((0, 4))
    return np.concatenate(tris), np.concatenate(cols)
