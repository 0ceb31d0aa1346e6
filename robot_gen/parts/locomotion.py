"""Locomotion catalog -- 6 lower-body units.

dims per tag:
    bipedal:  (torso_width, torso_height, scale) -- a mirrored leg pair
    tank:     (width, length, height)            -- one track pod
    wheel:    (radius, width)
    hover:    (size,)
    ball:     (size,)
    triwheel: (size,)

``bipedal`` delegates to the leg catalog: it draws a leg tag and leg
dimensions, then builds the left leg before the right one. The assembler
uses ``leg_pair`` directly so the two legs become separate root children;
the catalog entry wraps the same pair in one group.

Stream draws: bipedal (leg tag, length, thickness), tank (road wheel
count), wheel (spoke count), hover (vent count).
"""

from __future__ import annotations

from enum import Enum
from math import cos, pi, sin

from robot_gen.parts.base import HALF_PI, TAU, PartGenerator, check_catalog
from robot_gen.parts.legs import LEGS, LegTag
from robot_gen.primitives import (
    Group,
    PartBuilder,
    box,
    cylinder,
    sphere,
    torus,
)


class LocomotionTag(Enum):
    BIPEDAL = "bipedal"
    TANK = "tank"
    WHEEL = "wheel"
    HOVER = "hover"
    BALL = "ball"
    TRIWHEEL = "triwheel"


def leg_pair(dims, color, stream, p, solid):
    """Roll a leg tag and size, then build hips-mounted left and right legs.

    Returns (tag, (length, thickness), [left, right]).
    """
    tw, th, scale = dims
    tag = stream.pick(list(LegTag))
    length = 0.8 * scale * stream.range(0.8, 1.2)
    thickness = 0.15 * scale * stream.range(0.8, 1.2)
    legs = []
    for side, sign in (("left", 1), ("right", -1)):
        leg = LEGS[tag]((length, thickness), color, stream, p, solid)
        leg.name = f"leg.{side}:{tag.value}"
        leg.position = (sign * tw * 0.3, -th * 0.5, 0.0)
        legs.append(leg)
    return tag, (length, thickness), legs


def bipedal(dims, color, stream, p, solid):
    _, _, legs = leg_pair(dims, color, stream, p, solid)
    return Group(children=legs, name="locomotion:bipedal")


def tank(dims, color, stream, p, solid):
    """Track pod: rails, side plates, 3-5 road wheels and two end sprockets."""
    w, length, h = dims
    b = PartBuilder(color, p, solid, name="locomotion:tank")
    n = stream.int_inclusive(3, 5)
    spacing = length / (n - 1)
    b.add(box(w, h * 0.15, length, p), pos=(0, h * 0.4, 0))
    b.add(box(w, h * 0.15, length, p), pos=(0, -h * 0.4, 0))
    b.add(box(w * 0.1, h, length, p), pos=(w * 0.45, 0, 0))
    b.add(box(w * 0.1, h, length, p), pos=(-w * 0.45, 0, 0))
    for i in range(n):
        b.add(
            cylinder(h * 0.45, h * 0.45, w * 0.9, p),
            pos=(0, 0, -length / 2 + i * spacing),
            rot=(0, 0, HALF_PI),
        )
    b.add(cylinder(h * 0.5, h * 0.5, w, p), pos=(0, 0, length / 2), rot=(HALF_PI, 0, 0))
    b.add(cylinder(h * 0.5, h * 0.5, w, p), pos=(0, 0, -length / 2), rot=(HALF_PI, 0, 0))
    return b.group


def wheel(dims, color, stream, p, solid):
    """Tyre torus around an axle hub with 4-8 spokes."""
    radius, width = dims
    b = PartBuilder(color, p, solid, name="locomotion:wheel")
    b.add(torus(radius * 0.85, radius * 0.15, p), rot=(0, 0, HALF_PI))
    b.add(cylinder(radius * 0.3, radius * 0.3, width, p), rot=(0, 0, HALF_PI))
    n = stream.int_inclusive(4, 8)
    for i in range(n):
        a = (i / n) * TAU
        b.add(
            cylinder(radius * 0.05, radius * 0.05, radius * 0.6, p),
            pos=(0, cos(a) * radius * 0.4, sin(a) * radius * 0.4),
            rot=(0, 0, a + HALF_PI),
        )
    return b.group


def hover(dims, color, stream, p, solid):
    """Thruster skirt with a ring of 4-8 angled vents."""
    (s,) = dims
    b = PartBuilder(color, p, solid, name="locomotion:hover")
    b.add(cylinder(s * 0.5, s * 0.6, s * 0.3, p))
    b.add(torus(s * 0.45, s * 0.08, p), pos=(0, -s * 0.1, 0))
    n = stream.int_inclusive(4, 8)
    for i in range(n):
        a = (i / n) * TAU
        b.add(
            box(s * 0.15, s * 0.25, s * 0.08, p),
            pos=(cos(a) * s * 0.35, 0, sin(a) * s * 0.35),
            rot=(0, -a, 0),
        )
    return b.group


def ball(dims, color, stream, p, solid):
    (s,) = dims
    b = PartBuilder(color, p, solid, name="locomotion:ball")
    b.add(sphere(s * 0.5, p))
    b.add(torus(s * 0.35, s * 0.08, p), pos=(0, s * 0.25, 0), rot=(HALF_PI, 0, 0))
    b.add(cylinder(s * 0.4, s * 0.5, s * 0.15, p), pos=(0, s * 0.35, 0))
    return b.group


def triwheel(dims, color, stream, p, solid):
    """Three wheels on a triangular hub, stair-climber style."""
    (s,) = dims
    b = PartBuilder(color, p, solid, name="locomotion:triwheel")
    r = s * 0.3
    for i in range(3):
        a = (i / 3) * TAU + pi / 2
        b.add(
            cylinder(r, r, s * 0.15, p),
            pos=(cos(a) * s * 0.35, sin(a) * s * 0.35, 0),
            rot=(0, 0, HALF_PI),
        )
    b.add(cylinder(s * 0.15, s * 0.15, s * 0.2, p), rot=(0, 0, HALF_PI))
    return b.group


LOCOMOTION: dict[LocomotionTag, PartGenerator] = {
    LocomotionTag.BIPEDAL: bipedal,
    LocomotionTag.TANK: tank,
    LocomotionTag.WHEEL: wheel,
    LocomotionTag.HOVER: hover,
    LocomotionTag.BALL: ball,
    LocomotionTag.TRIWHEEL: triwheel,
}

check_catalog(LocomotionTag, LOCOMOTION)
