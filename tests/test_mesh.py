"""Tests for mesh building, feature edges and the placement arena."""

import numpy as np
import pytest

from robot_gen import generate
from robot_gen.arena import PlacementArena, euler_xyz, local_matrix
from robot_gen.mesh import (
    build_mesh,
    feature_edges,
    geometry_edges,
    solid_triangles,
    wireframe_segments,
)
from robot_gen.primitives import (
    Group,
    Primitive,
    box,
    cone,
    cylinder,
    dodecahedron,
    icosahedron,
    octahedron,
    sphere,
    tetrahedron,
    torus,
)
from robot_gen.resolution import profile_for

LOW = profile_for(1)
MED = profile_for(2)
HIGH = profile_for(3)


# ---------------------------------------------------------------------------
# Meshes
# ---------------------------------------------------------------------------


class TestBuildMesh:
    def test_box_counts(self):
        verts, faces = build_mesh(box(1, 2, 3, LOW))
        assert verts.shape == (24, 3)
        assert faces.shape == (12, 3)

    def test_box_subdivided(self):
        verts, faces = build_mesh(box(1, 1, 1, MED))
        assert faces.shape == (6 * 2 * 2 * 2, 3)

    def test_box_extent(self):
        verts, _ = build_mesh(box(1, 2, 3, LOW))
        assert verts.min(axis=0) == pytest.approx((-0.5, -1.0, -1.5))
        assert verts.max(axis=0) == pytest.approx((0.5, 1.0, 1.5))

    def test_cylinder_counts(self):
        verts, faces = build_mesh(cylinder(0.5, 0.5, 1.0, LOW))
        # side grid 2 x 9 plus two caps of 9 ring vertices and a center
        assert verts.shape == (18 + 20, 3)
        assert faces.shape == (16 + 16, 3)

    def test_cone_has_no_top_cap(self):
        verts, faces = build_mesh(cone(0.5, 1.0, LOW))
        assert verts.shape == (18 + 10, 3)
        assert faces.shape == (16 + 8, 3)
        assert verts[:, 1].max() == pytest.approx(0.5)

    def test_sphere_radius(self):
        verts, faces = build_mesh(sphere(0.7, LOW))
        assert np.linalg.norm(verts, axis=1) == pytest.approx(np.full(len(verts), 0.7))
        assert faces.shape == (8 * (6 * 2 - 2), 3)

    def test_torus_counts(self):
        verts, faces = build_mesh(torus(1.0, 0.2, LOW))
        assert verts.shape == (7 * 13, 3)
        assert faces.shape == (6 * 12 * 2, 3)
        # ring lies in the XY plane
        assert np.abs(verts[:, 2]).max() <= 0.2 + 1e-12
        assert np.linalg.norm(verts[:, :2], axis=1).max() == pytest.approx(1.2)

    @pytest.mark.parametrize("factory,faces", [
        (tetrahedron, 4),
        (octahedron, 8),
        (icosahedron, 20),
        (dodecahedron, 36),
    ])
    def test_polyhedra(self, factory, faces):
        verts, tris = build_mesh(factory(0.5))
        assert tris.shape == (faces, 3)
        assert np.linalg.norm(verts, axis=1) == pytest.approx(np.full(len(verts), 0.5))
        _, sub = build_mesh(factory(0.5, 1))
        assert sub.shape == (faces * 4, 3)

    @pytest.mark.parametrize("geometry", [
        box(1, 1, 1, HIGH),
        cylinder(0.3, 0.6, 1.0, HIGH),
        sphere(1.0, HIGH),
        icosahedron(1.0, 1),
    ])
    def test_outward_winding(self, geometry):
        verts, faces = build_mesh(geometry)
        tri = verts[faces]
        normal = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
        assert (np.einsum("ij,ij->i", normal, tri.mean(axis=1)) >= -1e-12).all()

    def test_meshes_are_cached_and_read_only(self):
        a = build_mesh(box(1, 1, 1, LOW))
        b = build_mesh(box(1, 1, 1, LOW))
        assert a[0] is b[0]
        with pytest.raises(ValueError):
            a[0][0, 0] = 5.0


# ---------------------------------------------------------------------------
# Feature edges
# ---------------------------------------------------------------------------


class TestFeatureEdges:
    @pytest.mark.parametrize("geometry,expected", [
        (box(1, 1, 1, LOW), 12),
        (box(1, 1, 1, HIGH), 12),
        (cylinder(0.5, 0.5, 1.0, LOW), 24),
        (cone(0.5, 1.0, LOW), 16),
        (tetrahedron(1.0), 6),
        (octahedron(1.0), 12),
        (icosahedron(1.0), 30),
        (dodecahedron(1.0), 30),
        (sphere(1.0, LOW), 88),
    ])
    def test_edge_counts(self, geometry, expected):
        assert len(geometry_edges(geometry, 1.0)) == expected

    def test_threshold_hides_shallow_edges(self):
        geom = sphere(1.0, HIGH)
        assert len(geometry_edges(geom, 25.0)) < len(geometry_edges(geom, 1.0))

    def test_open_edges_always_kept(self):
        verts = np.array([[0, 0, 0], [1, 0, 0], [0, 1, 0]], dtype=float)
        faces = np.array([[0, 1, 2]])
        assert len(feature_edges(verts, faces, 89.0)) == 3

    def test_coplanar_pair_hides_diagonal(self):
        verts = np.array([[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]], dtype=float)
        faces = np.array([[0, 1, 2], [0, 2, 3]])
        assert len(feature_edges(verts, faces, 1.0)) == 4

    def test_degenerate_triangles_skipped(self):
        verts = np.array([[0, 0, 0], [1, 0, 0], [1, 0, 0], [0, 1, 0]], dtype=float)
        faces = np.array([[0, 1, 2], [0, 1, 3]])
        assert len(feature_edges(verts, faces, 1.0)) == 3


# ---------------------------------------------------------------------------
# Arena and world-space emission
# ---------------------------------------------------------------------------


class TestArena:
    def test_euler_order(self):
        rx, ry, rz = 0.3, -0.7, 1.1
        m = euler_xyz((rx, ry, rz))
        assert m == pytest.approx(
            euler_xyz((rx, 0, 0)) @ euler_xyz((0, ry, 0)) @ euler_xyz((0, 0, rz))
        )
        assert m @ m.T == pytest.approx(np.eye(3))

    def test_local_matrix(self):
        g = Group(position=(1, 2, 3), rotation=(0, 0, np.pi / 2), scale=(2, 1, 1))
        p = local_matrix(g) @ np.array([1.0, 0, 0, 1])
        assert p[:3] == pytest.approx((1, 4, 3))

    def test_preorder_layout(self):
        root = generate("robot-001-0")
        arena = PlacementArena.from_tree(root)
        walked = list(root.walk())
        assert len(arena) == len(walked)
        assert all(a is b for a, b in zip(arena.nodes, walked))
        assert arena.parents[0] == -1
        for i, kids in enumerate(arena.children):
            for k in kids:
                assert arena.parents[k] == i
                assert k > i
        assert arena.world[0] == pytest.approx(np.eye(4))

    def test_head_world_position(self):
        root = generate("robot-001-0")
        arena = PlacementArena.from_tree(root)
        head = next(i for i, n in enumerate(arena.nodes) if isinstance(n, Group) and n.name.startswith("head:"))
        assert arena.world[head][1, 3] == pytest.approx(0.769020733377975)

    def test_primitives_share_parent_matrix(self):
        arena = PlacementArena.from_tree(generate("robot-001-1"))
        for i, prim, m in arena.primitives():
            assert isinstance(prim, Primitive)
            assert m is arena.world[i] or np.array_equal(m, arena.world[arena.parents[i]])

    def test_sweep_reverse_preorder(self):
        root = generate("robot-001-2")
        arena = PlacementArena.from_tree(root)
        released = []
        count = arena.sweep(released.append)
        assert count == len(root.primitives()) == 55
        forward = [p for _, p, _ in arena.primitives()]
        assert all(a is b for a, b in zip(released, reversed(forward)))

    def test_base_matrix_offsets_world(self):
        root = generate("robot-001-0")
        base = np.eye(4)
        base[:3, 3] = (10, 0, 0)
        plain, _ = wireframe_segments(root)
        moved, _ = wireframe_segments(root, base)
        assert moved - plain == pytest.approx(np.broadcast_to((10.0, 0, 0), plain.shape))


class TestEmission:
    def test_wireframe_colors_match_materials(self):
        root = generate("robot-001-0")
        segments, colors = wireframe_segments(root)
        assert segments.shape[1:] == (2, 3)
        assert colors.shape == (len(segments), 3)
        palette = {(p.wireframe.color.r, p.wireframe.color.g, p.wireframe.color.b) for p in root.primitives()}
        assert {tuple(c) for c in colors} <= palette

    def test_wireframe_only_has_no_triangles(self):
        tris, colors = solid_triangles(generate("robot-001-0"))
        assert tris.shape == (0, 3, 3)
        assert colors.shape == (0, 4)

    def test_solid_triangles(self):
        tris, colors = solid_triangles(generate("robot-001-0", solid=True))
        assert len(tris) > 0
        assert colors[:, 3] == pytest.approx(np.full(len(colors), 0.85))

    def test_more_detail_more_triangles(self):
        low, _ = solid_triangles(generate("robot-001-0", 1, True))
        high, _ = solid_triangles(generate("robot-001-0", 3, True))
        assert len(high) > len(low)
