"""Leg catalog -- 8 interchangeable legs.

dims: ``(length, thickness)``; the origin is the hip joint, the foot ends
near ``-2.1 * length``. Legs make no stream draws of their own.
"""

from __future__ import annotations

from enum import Enum
from math import pi

from robot_gen.parts.base import HALF_PI, PartGenerator, check_catalog
from robot_gen.primitives import (
    PartBuilder,
    box,
    cone,
    cylinder,
    icosahedron,
    sphere,
)


class LegTag(Enum):
    STANDARD = "standard"
    DIGITIGRADE = "digitigrade"
    ARMORED = "armored"
    PISTON = "piston"
    SPIDER = "spider"
    HOOVED = "hooved"
    BLOCKY = "blocky"
    STILTS = "stilts"


def standard(dims, color, stream, p, solid):
    length, t = dims
    b = PartBuilder(color, p, solid, name="leg:standard")
    b.add(sphere(t * 1.1, p))
    b.add(cylinder(t, t * 0.85, length, p), pos=(0, -length * 0.5, 0))
    b.add(sphere(t * 0.99, p), pos=(0, -length, 0))
    b.add(cylinder(t * 0.8, t * 0.6, length * 0.95, p), pos=(0, -length * 1.5, 0))
    b.add(sphere(t * 0.7, p), pos=(0, -length * 2, 0))
    b.add(box(t * 2, t * 0.6, t * 3, p), pos=(0, -length * 2.15, t * 0.5))
    return b.group


def digitigrade(dims, color, stream, p, solid):
    """Reverse-knee leg with a forward toe cone."""
    length, t = dims
    b = PartBuilder(color, p, solid, name="leg:digitigrade")
    b.add(sphere(t * 1.1, p))
    b.add(cylinder(t, t * 0.8, length * 0.7, p), pos=(0, -length * 0.35, t * 0.2), rot=(-0.2, 0, 0))
    b.add(icosahedron(t * 0.8, b.poly_detail), pos=(0, -length * 0.75, t * 0.35))
    b.add(cylinder(t * 0.7, t * 0.5, length * 0.8, p), pos=(0, -length * 1.2, -t * 0.1), rot=(0.4, 0, 0))
    b.add(sphere(t * 0.6, p), pos=(0, -length * 1.65, -t * 0.4))
    b.add(cylinder(t * 0.4, t * 0.6, length * 0.5, p), pos=(0, -length * 1.9, -t * 0.1), rot=(0.8, 0, 0))
    b.add(cone(t * 0.4, t * 1.2, p), pos=(0, -length * 2.05, t * 0.4), rot=(HALF_PI, 0, 0))
    return b.group


def armored(dims, color, stream, p, solid):
    length, t = dims
    b = PartBuilder(color, p, solid, name="leg:armored")
    b.add(box(t * 2, t * 1.2, t * 2, p))
    b.add(box(t * 2.2, length, t * 1.8, p), pos=(0, -length * 0.55, 0))
    b.add(box(t * 2.5, t * 1.5, t * 2.2, p), pos=(0, -length * 1.1, 0))
    b.add(box(t * 2, length * 0.95, t * 1.6, p), pos=(0, -length * 1.6, 0))
    b.add(box(t * 2.5, t * 0.8, t * 3.5, p), pos=(0, -length * 2.15, t * 0.3))
    return b.group


def piston(dims, color, stream, p, solid):
    """Telescoping cylinders braced by twin pistons."""
    length, t = dims
    b = PartBuilder(color, p, solid, name="leg:piston")
    b.add(cylinder(t * 1.4, t * 1.4, t * 0.8, p), rot=(0, 0, HALF_PI))
    b.add(cylinder(t * 1.2, t * 1.2, length * 0.5, p), pos=(0, -length * 0.3, 0))
    b.add(cylinder(t * 0.8, t * 0.8, length * 0.7, p), pos=(0, -length * 0.85, 0))
    b.add(cylinder(t * 0.3, t * 0.3, length * 0.8, p), pos=(t * 0.8, -length * 0.6, 0))
    b.add(cylinder(t * 0.3, t * 0.3, length * 0.8, p), pos=(-t * 0.8, -length * 0.6, 0))
    b.add(cylinder(t * 1.1, t * 0.9, t * 0.6, p), pos=(0, -length * 1.35, 0))
    b.add(cylinder(t * 0.7, t * 0.5, length * 0.6, p), pos=(0, -length * 1.7, 0))
    b.add(box(t * 2.2, t * 0.5, t * 3, p), pos=(0, -length * 2.05, t * 0.4))
    return b.group


def spider(dims, color, stream, p, solid):
    """Three-segment jointed leg: out, down, then a pointed tip."""
    length, t = dims
    b = PartBuilder(color, p, solid, name="leg:spider")
    b.add(sphere(t, p))
    b.add(cylinder(t * 0.6, t * 0.5, length * 0.5, p), pos=(0, -length * 0.15, t * 0.3), rot=(-0.8, 0, 0))
    b.add(sphere(t * 0.55, p), pos=(0, -length * 0.35, t * 0.55))
    b.add(cylinder(t * 0.45, t * 0.35, length * 0.8, p), pos=(0, -length * 0.8, t * 0.4), rot=(0.3, 0, 0))
    b.add(sphere(t * 0.4, p), pos=(0, -length * 1.25, t * 0.2))
    b.add(cylinder(t * 0.3, t * 0.15, length * 0.6, p), pos=(0, -length * 1.6, t * 0.1), rot=(0.1, 0, 0))
    b.add(cone(t * 0.2, t * 0.4, p), pos=(0, -length * 1.95, t * 0.05), rot=(pi, 0, 0))
    return b.group


def hooved(dims, color, stream, p, solid):
    length, t = dims
    b = PartBuilder(color, p, solid, name="leg:hooved")
    b.add(sphere(t * 1.2, p))
    b.add(cylinder(t, t * 0.7, length * 0.6, p), pos=(0, -length * 0.35, 0))
    b.add(sphere(t * 0.75, p), pos=(0, -length * 0.7, 0))
    b.add(cylinder(t * 0.5, t * 0.4, length * 0.9, p), pos=(0, -length * 1.2, 0))
    b.add(sphere(t * 0.45, p), pos=(0, -length * 1.7, 0))
    b.add(cylinder(t * 0.6, t * 0.8, t * 0.5, p), pos=(0, -length * 2.0, 0))
    return b.group


def blocky(dims, color, stream, p, solid):
    length, t = dims
    b = PartBuilder(color, p, solid, name="leg:blocky")
    b.add(box(t * 1.8, t, t * 1.6, p))
    b.add(box(t * 1.5, length * 0.9, t * 1.4, p), pos=(0, -length * 0.5, 0))
    b.add(box(t * 1.8, t * 0.8, t * 1.6, p), pos=(0, -length * 1.0, 0))
    b.add(box(t * 1.4, length * 0.85, t * 1.3, p), pos=(0, -length * 1.5, 0))
    b.add(box(t * 2.0, t * 0.6, t * 2.8, p), pos=(0, -length * 2.0, t * 0.3))
    return b.group


def stilts(dims, color, stream, p, solid):
    length, t = dims
    b = PartBuilder(color, p, solid, name="leg:stilts")
    b.add(cylinder(t, t * 0.8, t * 0.6, p))
    b.add(cylinder(t * 0.4, t * 0.35, length * 1.3, p), pos=(0, -length * 0.7, 0))
    b.add(sphere(t * 0.5, p), pos=(0, -length * 1.35, 0))
    b.add(cylinder(t * 0.3, t * 0.25, length * 0.8, p), pos=(0, -length * 1.8, 0))
    b.add(cone(t * 0.5, t * 0.8, p), pos=(0, -length * 2.3, 0), rot=(pi, 0, 0))
    return b.group


LEGS: dict[LegTag, PartGenerator] = {
    LegTag.STANDARD: standard,
    LegTag.DIGITIGRADE: digitigrade,
    LegTag.ARMORED: armored,
    LegTag.PISTON: piston,
    LegTag.SPIDER: spider,
    LegTag.HOOVED: hooved,
    LegTag.BLOCKY: blocky,
    LegTag.STILTS: stilts,
}

check_catalog(LegTag, LEGS)
