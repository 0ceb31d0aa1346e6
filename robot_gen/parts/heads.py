"""Head catalog -- 11 interchangeable heads.

dims: ``(size,)`` -- overall head size; the origin is the neck joint
center, the assembler lifts it to ``torso_half_height + size * 0.4``.

Stream draws: cube (antenna height), dome (sensor count), turret (barrel
count), scanner (light count). The others are fully determined by size.
"""

from __future__ import annotations

from enum import Enum
from math import cos, pi, sin

from robot_gen.parts.base import TAU, PartGenerator, check_catalog
from robot_gen.primitives import (
    PartBuilder,
    box,
    cone,
    cylinder,
    dodecahedron,
    octahedron,
    sphere,
    tetrahedron,
)


class HeadTag(Enum):
    CUBE = "cube"
    DOME = "dome"
    VISOR = "visor"
    PYRAMID = "pyramid"
    TURRET = "turret"
    CLUSTER = "cluster"
    CYCLOPS = "cyclops"
    SCANNER = "scanner"
    INSECT = "insect"
    MONITOR = "monitor"
    HORNED = "horned"


def cube(dims, color, stream, p, solid):
    """Box head with a single whip antenna off one corner."""
    (s,) = dims
    b = PartBuilder(color, p, solid, name="head:cube")
    b.add(box(s, s * 0.8, s * 0.7, p))
    ah = stream.range(0.2, 0.5)
    b.add(cylinder(0.02, 0.03, ah, p), pos=(s * 0.3, s * 0.4 + ah / 2, 0))
    b.add(octahedron(0.06, b.poly_detail), pos=(s * 0.3, s * 0.4 + ah + 0.06, 0))
    return b.group


def dome(dims, color, stream, p, solid):
    """Drum base under a hemisphere-ish dome, ringed by 2-4 tilted sensors."""
    (s,) = dims
    b = PartBuilder(color, p, solid, name="head:dome")
    b.add(cylinder(s * 0.5, s * 0.6, s * 0.4, p))
    b.add(sphere(s * 0.45, p), pos=(0, s * 0.35, 0))
    n = stream.int_inclusive(2, 4)
    for i in range(n):
        a = (i / n) * TAU
        b.add(
            cylinder(0.04, 0.04, 0.15, p),
            pos=(cos(a) * s * 0.35, s * 0.1, sin(a) * s * 0.35),
            rot=(pi / 6 * cos(a), 0, -pi / 6 * sin(a)),
        )
    return b.group


def visor(dims, color, stream, p, solid):
    (s,) = dims
    b = PartBuilder(color, p, solid, name="head:visor")
    b.add(box(s, s * 0.5, s * 0.6, p))
    b.add(box(s * 1.1, s * 0.15, s * 0.2, p), pos=(0, s * 0.05, s * 0.35))
    b.add(box(s * 0.2, s * 0.3, s * 0.15, p), pos=(0, s * 0.4, 0))
    return b.group


def pyramid(dims, color, stream, p, solid):
    (s,) = dims
    b = PartBuilder(color, p, solid, name="head:pyramid")
    b.add(box(s * 0.7, s * 0.2, s * 0.7, p), pos=(0, -s * 0.3, 0))
    b.add(cone(s * 0.5, s * 0.8, p), pos=(0, s * 0.2, 0), rot=(0, pi / 4, 0))
    return b.group


def turret(dims, color, stream, p, solid):
    """Squat drum with 1-3 forward barrels."""
    (s,) = dims
    b = PartBuilder(color, p, solid, name="head:turret")
    b.add(cylinder(s * 0.4, s * 0.5, s * 0.6, p))
    n = stream.int_inclusive(1, 3)
    for i in range(n):
        b.add(
            cylinder(0.08, 0.08, s * 0.6, p),
            pos=((i - (n - 1) / 2) * 0.15, 0, s * 0.5),
            rot=(pi / 2, 0, 0),
        )
    return b.group


def cluster(dims, color, stream, p, solid):
    (s,) = dims
    b = PartBuilder(color, p, solid, name="head:cluster")
    sd = b.poly_detail
    b.add(octahedron(s * 0.25, sd), pos=(0, s * 0.15, 0))
    b.add(box(s * 0.4, s * 0.3, s * 0.4, p), pos=(0, -s * 0.1, 0))
    b.add(tetrahedron(s * 0.15, sd), pos=(s * 0.25, s * 0.2, s * 0.1))
    b.add(tetrahedron(s * 0.15, sd), pos=(-s * 0.25, s * 0.2, s * 0.1))
    return b.group


def cyclops(dims, color, stream, p, solid):
    """Squashed sphere with one large lensed eye."""
    (s,) = dims
    b = PartBuilder(color, p, solid, name="head:cyclops")
    b.add(sphere(s * 0.5, p), scale=(1, 0.8, 0.9))
    b.add(cylinder(s * 0.25, s * 0.25, s * 0.15, p), pos=(0, 0, s * 0.4), rot=(pi / 2, 0, 0))
    b.add(sphere(s * 0.18, p), pos=(0, 0, s * 0.5))
    return b.group


def scanner(dims, color, stream, p, solid):
    """Wide flat bar with a slit and a row of 3-5 indicator lights."""
    (s,) = dims
    b = PartBuilder(color, p, solid, name="head:scanner")
    b.add(box(s * 1.4, s * 0.25, s * 0.5, p))
    b.add(box(s * 1.2, s * 0.08, s * 0.15, p), pos=(0, 0, s * 0.3))
    n = stream.int_inclusive(3, 5)
    for i in range(n):
        x = (i - (n - 1) / 2) * (s * 0.3)
        b.add(box(s * 0.08, s * 0.12, s * 0.08, p), pos=(x, s * 0.18, 0))
    return b.group


def insect(dims, color, stream, p, solid):
    """Compound-eyed head with two mandibles."""
    (s,) = dims
    b = PartBuilder(color, p, solid, name="head:insect")
    b.add(dodecahedron(s * 0.35, b.poly_detail))
    b.add(sphere(s * 0.22, p), pos=(s * 0.28, s * 0.1, s * 0.15))
    b.add(sphere(s * 0.22, p), pos=(-s * 0.28, s * 0.1, s * 0.15))
    b.add(cone(s * 0.08, s * 0.3, p), pos=(s * 0.15, -s * 0.2, s * 0.2), rot=(0.5, 0, 0.3))
    b.add(cone(s * 0.08, s * 0.3, p), pos=(-s * 0.15, -s * 0.2, s * 0.2), rot=(0.5, 0, -0.3))
    return b.group


def monitor(dims, color, stream, p, solid):
    (s,) = dims
    b = PartBuilder(color, p, solid, name="head:monitor")
    b.add(box(s * 0.9, s * 0.7, s * 0.5, p))
    b.add(box(s * 0.7, s * 0.5, s * 0.05, p), pos=(0, 0, s * 0.26))
    b.add(cylinder(s * 0.08, s * 0.12, s * 0.3, p), pos=(0, -s * 0.5, 0))
    return b.group


def horned(dims, color, stream, p, solid):
    (s,) = dims
    b = PartBuilder(color, p, solid, name="head:horned")
    b.add(box(s * 0.7, s * 0.6, s * 0.65, p))
    b.add(cone(s * 0.12, s * 0.5, p), pos=(s * 0.35, s * 0.4, -s * 0.1), rot=(-0.3, 0, 0.4))
    b.add(cone(s * 0.12, s * 0.5, p), pos=(-s * 0.35, s * 0.4, -s * 0.1), rot=(-0.3, 0, -0.4))
    b.add(box(s * 0.5, s * 0.1, s * 0.15, p), pos=(0, s * 0.05, s * 0.35))
    return b.group


HEADS: dict[HeadTag, PartGenerator] = {
    HeadTag.CUBE: cube,
    HeadTag.DOME: dome,
    HeadTag.VISOR: visor,
    HeadTag.PYRAMID: pyramid,
    HeadTag.TURRET: turret,
    HeadTag.CLUSTER: cluster,
    HeadTag.CYCLOPS: cyclops,
    HeadTag.SCANNER: scanner,
    HeadTag.INSECT: insect,
    HeadTag.MONITOR: monitor,
    HeadTag.HORNED: horned,
}

check_catalog(HeadTag, HEADS)
