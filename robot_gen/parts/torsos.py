"""Torso catalog -- 11 interchangeable torsos.

dims: ``(width, height, depth)``; the origin is the torso center and the
tree root's origin. Shoulders sit at ``height * 0.35``, hips at
``-height * 0.5``.

Stream draws: segmented (band count), spinal (vertebra count), cage (rib
count).
"""

from __future__ import annotations

from enum import Enum
from math import pi, sin

from robot_gen.parts.base import HALF_PI, PartGenerator, check_catalog
from robot_gen.primitives import (
    PartBuilder,
    box,
    cylinder,
    octahedron,
    sphere,
    torus,
)


class TorsoTag(Enum):
    BOX = "box"
    HEX = "hex"
    TAPERED = "tapered"
    SEGMENTED = "segmented"
    SPHEROID = "spheroid"
    INDUSTRIAL = "industrial"
    BARREL = "barrel"
    STEALTH = "stealth"
    SPINAL = "spinal"
    CAGE = "cage"
    PLATED = "plated"


def box_torso(dims, color, stream, p, solid):
    """Plain box with a chest plate and belly panel."""
    w, h, d = dims
    b = PartBuilder(color, p, solid, name="torso:box")
    b.add(box(w, h, d, p))
    b.add(box(w * 0.6, 0.15, d * 0.3, p), pos=(0, h * 0.3, d * 0.4))
    b.add(box(w * 0.4, h * 0.5, d * 0.15, p), pos=(0, -h * 0.1, d * 0.35))
    return b.group


def hex_torso(dims, color, stream, p, solid):
    """Six-sided prism with collars; always six radial segments."""
    w, h, d = dims
    b = PartBuilder(color, p, solid, name="torso:hex")
    b.add(cylinder(w * 0.5, w * 0.5, h, p, radial=6))
    b.add(cylinder(w * 0.55, w * 0.55, h * 0.1, p, radial=6, height_segments=1), pos=(0, h * 0.55, 0))
    b.add(cylinder(w * 0.55, w * 0.55, h * 0.1, p, radial=6, height_segments=1), pos=(0, -h * 0.55, 0))
    return b.group


def tapered(dims, color, stream, p, solid):
    w, h, d = dims
    b = PartBuilder(color, p, solid, name="torso:tapered")
    b.add(cylinder(w * 0.35, w * 0.55, h, p))
    b.add(box(w * 1.3, h * 0.15, d * 0.8, p), pos=(0, h * 0.45, 0))
    b.add(box(w * 0.5, h * 0.1, d * 0.4, p), pos=(0, -h * 0.45, 0))
    return b.group


def segmented(dims, color, stream, p, solid):
    """3-5 stacked bands, widest in the middle."""
    w, h, d = dims
    b = PartBuilder(color, p, solid, name="torso:segmented")
    n = stream.int_inclusive(3, 5)
    sh = h / n
    for i in range(n):
        y = (i - (n - 1) / 2) * sh
        k = 1 - abs(i - (n - 1) / 2) * 0.1
        b.add(box(w * k, sh * 0.85, d * k, p), pos=(0, y, 0))
    return b.group


def spheroid(dims, color, stream, p, solid):
    w, h, d = dims
    b = PartBuilder(color, p, solid, name="torso:spheroid")
    b.add(sphere(w * 0.6, p), scale=(1, h / w * 0.8, d / w))
    b.add(torus(w * 0.35, 0.06, p), pos=(0, h * 0.35, 0), rot=(HALF_PI, 0, 0))
    b.add(cylinder(w * 0.25, w * 0.35, h * 0.2, p), pos=(0, -h * 0.45, 0))
    return b.group


def industrial(dims, color, stream, p, solid):
    w, h, d = dims
    b = PartBuilder(color, p, solid, name="torso:industrial")
    b.add(box(w, h * 0.7, d, p), pos=(0, -h * 0.1, 0))
    b.add(box(w * 1.2, h * 0.25, d * 1.1, p), pos=(0, h * 0.35, 0))
    b.add(cylinder(0.06, 0.06, h * 0.4, p), pos=(w * 0.5, 0, d * 0.3))
    b.add(cylinder(0.06, 0.06, h * 0.4, p), pos=(-w * 0.5, 0, d * 0.3))
    return b.group


def barrel(dims, color, stream, p, solid):
    """Drum with three hoop bands."""
    w, h, d = dims
    b = PartBuilder(color, p, solid, name="torso:barrel")
    b.add(cylinder(w * 0.55, w * 0.55, h, p))
    for y in (h * 0.35, -h * 0.35, 0.0):
        b.add(torus(w * 0.58, 0.04, p), pos=(0, y, 0), rot=(HALF_PI, 0, 0))
    return b.group


def stealth(dims, color, stream, p, solid):
    """Faceted body: angled top/bottom wedges and canted side panels."""
    w, h, d = dims
    b = PartBuilder(color, p, solid, name="torso:stealth")
    b.add(box(w, h * 0.5, d * 0.7, p))
    b.add(box(w * 0.8, h * 0.3, d * 0.5, p), pos=(0, h * 0.35, d * 0.1), rot=(0.2, 0, 0))
    b.add(box(w * 0.7, h * 0.25, d * 0.4, p), pos=(0, -h * 0.35, d * 0.05), rot=(-0.15, 0, 0))
    b.add(box(w * 0.15, h * 0.6, d * 0.5, p), pos=(w * 0.55, 0, 0), rot=(0, 0, 0.1))
    b.add(box(w * 0.15, h * 0.6, d * 0.5, p), pos=(-w * 0.55, 0, 0), rot=(0, 0, -0.1))
    return b.group


def spinal(dims, color, stream, p, solid):
    """4-7 flattened octahedron vertebrae along a rear spine rod."""
    w, h, d = dims
    b = PartBuilder(color, p, solid, name="torso:spinal")
    n = stream.int_inclusive(4, 7)
    seg_h = h / n
    for i in range(n):
        y = (i - (n - 1) / 2) * seg_h
        k = 0.7 + sin((i / n) * pi) * 0.3
        # Vertebrae stay at subdivision 0 regardless of detail.
        b.add(octahedron(w * 0.35 * k, 0), pos=(0, y, 0), scale=(1, 0.6, 1))
    b.add(cylinder(w * 0.08, w * 0.08, h * 0.9, p), pos=(0, 0, -d * 0.3))
    return b.group


def cage(dims, color, stream, p, solid):
    """Top/bottom plates, 3-5 elliptical ribs and a spherical core."""
    w, h, d = dims
    b = PartBuilder(color, p, solid, name="torso:cage")
    b.add(box(w, h * 0.1, d, p), pos=(0, h * 0.45, 0))
    b.add(box(w * 0.8, h * 0.1, d * 0.8, p), pos=(0, -h * 0.45, 0))
    ribs = stream.int_inclusive(3, 5)
    for i in range(ribs):
        y = h * 0.3 - i * (h * 0.6 / (ribs - 1))
        b.add(torus(w * 0.4, 0.03, p), pos=(0, y, d * 0.1), scale=(1, 0.6, 1))
    b.add(sphere(w * 0.2, p))
    return b.group


def plated(dims, color, stream, p, solid):
    w, h, d = dims
    b = PartBuilder(color, p, solid, name="torso:plated")
    b.add(box(w * 0.6, h * 0.8, d * 0.5, p))
    b.add(box(w * 0.9, h * 0.35, d * 0.15, p), pos=(0, h * 0.2, d * 0.35), rot=(0.1, 0, 0))
    b.add(box(w * 0.85, h * 0.35, d * 0.15, p), pos=(0, -h * 0.2, d * 0.3), rot=(-0.1, 0, 0))
    b.add(box(w * 0.15, h * 0.7, d * 0.6, p), pos=(w * 0.45, 0, 0))
    b.add(box(w * 0.15, h * 0.7, d * 0.6, p), pos=(-w * 0.45, 0, 0))
    return b.group


TORSOS: dict[TorsoTag, PartGenerator] = {
    TorsoTag.BOX: box_torso,
    TorsoTag.HEX: hex_torso,
    TorsoTag.TAPERED: tapered,
    TorsoTag.SEGMENTED: segmented,
    TorsoTag.SPHEROID: spheroid,
    TorsoTag.INDUSTRIAL: industrial,
    TorsoTag.BARREL: barrel,
    TorsoTag.STEALTH: stealth,
    TorsoTag.SPINAL: spinal,
    TorsoTag.CAGE: cage,
    TorsoTag.PLATED: plated,
}

check_catalog(TorsoTag, TORSOS)
