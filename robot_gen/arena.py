"""Flattened, index-addressed view of a Placement tree.

Renderers and disposal code work off this instead of recursing through
the tree: nodes are stored in pre-order, every node knows its parent
index and child indices, and world transforms are computed once.

Usage:
    arena = PlacementArena.from_tree(generate("robot-001-0"))
    for index, prim, matrix in arena.primitives():
        ...
    released = arena.sweep(dispose)    # reverse pre-order
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

import numpy as np

from robot_gen.primitives import Group, Primitive, Vec3


def euler_xyz(rotation: Vec3) -> np.ndarray:
    """3x3 rotation for XYZ Euler angles (Rx @ Ry @ Rz)."""
    rx, ry, rz = rotation
    cx, sx = np.cos(rx), np.sin(rx)
    cy, sy = np.cos(ry), np.sin(ry)
    cz, sz = np.cos(rz), np.sin(rz)
    mx = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
    my = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
    mz = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]])
    return mx @ my @ mz


def local_matrix(group: Group) -> np.ndarray:
    """4x4 transform of a group: translate @ rotate @ scale."""
    m = np.eye(4)
    m[:3, :3] = euler_xyz(group.rotation) * np.asarray(group.scale)
    m[:3, 3] = group.position
    return m


def transform_points(matrix: np.ndarray, points: np.ndarray) -> np.ndarray:
    """Apply a 4x4 affine transform to an (..., 3) array."""
    return points @ matrix[:3, :3].T + matrix[:3, 3]


@dataclass
class PlacementArena:
    """Pre-order node table with parent/child links and world matrices.

    Attributes:
        nodes: Groups and primitives in pre-order (root at index 0)
        parents: Parent index per node, -1 for the root
        children: Child indices per node, in tree order
        world: (n, 4, 4) world matrix per node; a primitive shares its
            parent group's matrix
    """

    nodes: list[Group | Primitive]
    parents: list[int]
    children: list[list[int]]
    world: np.ndarray

    @classmethod
    def from_tree(cls, root: Group, base: np.ndarray | None = None) -> PlacementArena:
        nodes: list[Group | Primitive] = []
        parents: list[int] = []
        children: list[list[int]] = []
        world: list[np.ndarray] = []

        stack = [(root, -1)]
        while stack:
            node, parent = stack.pop()
            index = len(nodes)
            nodes.append(node)
            parents.append(parent)
            children.append([])
            if parent >= 0:
                children[parent].append(index)
                parent_world = world[parent]
            else:
                parent_world = np.eye(4) if base is None else base
            if isinstance(node, Group):
                world.append(parent_world @ local_matrix(node))
                # Reversed so the first child pops first (pre-order)
                stack.extend((child, index) for child in reversed(node.children))
            else:
                world.append(parent_world)

        return cls(nodes, parents, children, np.stack(world))

    def __len__(self) -> int:
        return len(self.nodes)

    def primitives(self) -> Iterator[tuple[int, Primitive, np.ndarray]]:
        for i, node in enumerate(self.nodes):
            if isinstance(node, Primitive):
                yield i, node, self.world[i]

    def sweep(self, release: Callable[[Primitive], object]) -> int:
        """Call ``release`` on every primitive, deepest-last-first. Returns the count."""
        count = 0
        for node in reversed(self.nodes):
            if isinstance(node, Primitive):
                release(node)
                count += 1
        return count
