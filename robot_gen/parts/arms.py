"""Arm catalog -- 9 interchangeable arms.

dims: ``(length, thickness)``; the origin is the shoulder joint and the
arm hangs down -Y, roughly ``2 * length`` long. The assembler builds the
same tag twice and mirrors the placement for left/right.

Stream draws: tentacle (segment count) only.
"""

from __future__ import annotations

from enum import Enum
from math import cos, pi, sin

from robot_gen.parts.base import HALF_PI, TAU, PartGenerator, check_catalog
from robot_gen.primitives import (
    PartBuilder,
    box,
    cone,
    cylinder,
    icosahedron,
    octahedron,
    sphere,
    tetrahedron,
    torus,
)


class ArmTag(Enum):
    STANDARD = "standard"
    ARMORED = "armored"
    SKELETAL = "skeletal"
    HYDRAULIC = "hydraulic"
    TENTACLE = "tentacle"
    CLAW = "claw"
    BLADE = "blade"
    CANNON = "cannon"
    SHIELD = "shield"


def standard(dims, color, stream, p, solid):
    length, t = dims
    b = PartBuilder(color, p, solid, name="arm:standard")
    b.add(sphere(t * 1.2, p))
    b.add(cylinder(t, t * 0.9, length, p), pos=(0, -length * 0.5, 0))
    b.add(sphere(t * 0.96, p), pos=(0, -length, 0))
    b.add(cylinder(t * 0.8, t * 0.7, length * 0.9, p), pos=(0, -length * 1.45, 0))
    b.add(box(t * 1.5, t * 0.8, t * 1.2, p), pos=(0, -length * 1.95, 0))
    return b.group


def armored(dims, color, stream, p, solid):
    length, t = dims
    b = PartBuilder(color, p, solid, name="arm:armored")
    b.add(box(t * 2.5, t * 1.5, t * 2, p))
    b.add(box(t * 2, length, t * 1.5, p), pos=(0, -length * 0.55, 0))
    b.add(octahedron(t * 0.8, b.poly_detail), pos=(0, -length * 1.05, 0))
    b.add(box(t * 1.6, length * 0.9, t * 1.3, p), pos=(0, -length * 1.5, 0))
    b.add(box(t * 2, t * 1.2, t * 1.8, p), pos=(0, -length * 2, 0))
    return b.group


def skeletal(dims, color, stream, p, solid):
    """Thin rods between ball joints, icosahedron shoulder and elbow."""
    length, t = dims
    b = PartBuilder(color, p, solid, name="arm:skeletal")
    sd = b.poly_detail
    b.add(icosahedron(t * 0.8, sd))
    b.add(cylinder(t * 0.35, t * 0.35, length * 0.6, p), pos=(0, -length * 0.55, 0))
    b.add(sphere(t * 0.4, p), pos=(0, -length * 0.25, 0))
    b.add(sphere(t * 0.4, p), pos=(0, -length * 0.85, 0))
    b.add(icosahedron(t * 0.56, sd), pos=(0, -length, 0))
    b.add(cylinder(t * 0.3, t * 0.3, length * 0.5, p), pos=(0, -length * 1.45, 0))
    b.add(sphere(t * 0.35, p), pos=(0, -length * 1.2, 0))
    b.add(sphere(t * 0.35, p), pos=(0, -length * 1.7, 0))
    b.add(tetrahedron(t * 0.8, sd), pos=(0, -length * 1.9, 0))
    return b.group


def hydraulic(dims, color, stream, p, solid):
    length, t = dims
    b = PartBuilder(color, p, solid, name="arm:hydraulic")
    b.add(cylinder(t * 1.2, t * 1.2, t * 0.8, p), rot=(HALF_PI, 0, 0))
    b.add(cylinder(t, t, length * 0.45, p), pos=(0, -length * 0.3, 0))
    b.add(cylinder(t * 0.5, t * 0.5, length * 0.6, p), pos=(t * 0.5, -length * 0.5, 0))
    b.add(cylinder(t * 0.96, t * 0.96, t * 0.64, p), pos=(0, -length * 0.7, 0), rot=(HALF_PI, 0, 0))
    b.add(cylinder(t * 0.9, t * 0.9, length * 0.45, p), pos=(0, -length * 1.15, 0))
    b.add(box(t * 1.8, t, t * 1.4, p), pos=(0, -length * 1.75, 0))
    return b.group


def tentacle(dims, color, stream, p, solid):
    """5-8 shrinking octahedron nodes joined by tapered links."""
    length, t = dims
    b = PartBuilder(color, p, solid, name="arm:tentacle")
    sd = b.poly_detail
    n = stream.int_inclusive(5, 8)
    sl = length * 2 / n
    for i in range(n):
        k = 1 - (i / n) * 0.5
        b.add(octahedron(t * k, sd), pos=(0, -i * sl, 0))
        if i < n - 1:
            nk = 1 - ((i + 1) / n) * 0.5
            b.add(
                cylinder(t * 0.3 * k, t * 0.3 * nk, sl * 0.7, p, height_segments=1),
                pos=(0, -i * sl - sl * 0.5, 0),
            )
    return b.group


def claw(dims, color, stream, p, solid):
    """Two-segment arm ending in three cone fingers."""
    length, t = dims
    b = PartBuilder(color, p, solid, name="arm:claw")
    b.add(sphere(t * 1.1, p))
    b.add(cylinder(t * 0.9, t * 0.7, length, p), pos=(0, -length * 0.5, 0))
    b.add(sphere(t * 0.8, p), pos=(0, -length, 0))
    b.add(cylinder(t * 0.6, t * 0.5, length * 0.7, p), pos=(0, -length * 1.4, 0))
    fingers = 3
    for i in range(fingers):
        a = (i / fingers) * TAU - pi / 2
        b.add(
            cone(t * 0.25, length * 0.4, p),
            pos=(cos(a) * t * 0.4, -length * 1.9, sin(a) * t * 0.4),
            rot=(0.4 * sin(a), 0, -0.4 * cos(a)),
        )
    return b.group


def blade(dims, color, stream, p, solid):
    length, t = dims
    b = PartBuilder(color, p, solid, name="arm:blade")
    b.add(box(t * 2, t * 1.5, t * 1.5, p))
    b.add(box(t * 1.2, length, t, p), pos=(0, -length * 0.5, 0))
    b.add(box(t * 1.4, t * 0.8, t * 1.2, p), pos=(0, -length * 1.05, 0))
    b.add(box(t * 0.15, length * 1.2, t * 2, p), pos=(0, -length * 1.7, 0))
    # Flattened cone tip, stretched in Z to match the blade's width.
    b.add(cone(t * 0.1, length * 0.3, p), pos=(0, -length * 2.4, 0), rot=(pi, 0, 0), scale=(1, 1, t * 12))
    return b.group


def cannon(dims, color, stream, p, solid):
    length, t = dims
    b = PartBuilder(color, p, solid, name="arm:cannon")
    b.add(cylinder(t * 1.3, t * 1.3, t, p), rot=(HALF_PI, 0, 0))
    b.add(cylinder(t * 1.1, t * 0.9, length * 0.6, p), pos=(0, -length * 0.35, 0))
    b.add(cylinder(t, t, t * 0.5, p), pos=(0, -length * 0.7, 0))
    b.add(cylinder(t * 0.7, t * 0.7, length * 1.2, p), pos=(0, -length * 1.35, 0))
    b.add(torus(t * 0.75, t * 0.15, p), pos=(0, -length * 0.9, 0), rot=(HALF_PI, 0, 0))
    b.add(torus(t * 0.75, t * 0.1, p), pos=(0, -length * 1.9, 0), rot=(HALF_PI, 0, 0))
    return b.group


def shield(dims, color, stream, p, solid):
    length, t = dims
    b = PartBuilder(color, p, solid, name="arm:shield")
    b.add(sphere(t, p))
    b.add(cylinder(t * 0.8, t * 0.7, length * 0.8, p), pos=(0, -length * 0.45, 0))
    b.add(sphere(t * 0.75, p), pos=(0, -length * 0.9, 0))
    b.add(box(t * 4, length, t * 0.3, p), pos=(0, -length * 1.4, t * 1.5))
    b.add(cylinder(t * 0.3, t * 0.3, t * 1.2, p), pos=(0, -length * 1.2, t * 0.6), rot=(HALF_PI, 0, 0))
    return b.group


ARMS: dict[ArmTag, PartGenerator] = {
    ArmTag.STANDARD: standard,
    ArmTag.ARMORED: armored,
    ArmTag.SKELETAL: skeletal,
    ArmTag.HYDRAULIC: hydraulic,
    ArmTag.TENTACLE: tentacle,
    ArmTag.CLAW: claw,
    ArmTag.BLADE: blade,
    ArmTag.CANNON: cannon,
    ArmTag.SHIELD: shield,
}

check_catalog(ArmTag, ARMS)
