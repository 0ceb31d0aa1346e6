"""Shared types for the part catalogs.

Every part generator has the same signature::

    generator(dims, color, stream, profile, solid) -> Group

``dims`` is a tuple whose layout depends on the region (see each catalog
module). Generators draw from ``stream`` only in the order written in
their body and never touch anything but the group they return.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from math import pi

from robot_gen.primitives import Color, Group
from robot_gen.resolution import ResolutionProfile
from robot_gen.stream import SeededStream

PartGenerator = Callable[
    [tuple[float, ...], Color, SeededStream, ResolutionProfile, bool], Group
]

HALF_PI = pi / 2
TAU = pi * 2


def check_catalog(tags: type[Enum], table: dict[Enum, PartGenerator]) -> None:
    """Fail at import time if a tag has no generator (or vice versa)."""
    missing = [t.value for t in tags if t not in table]
    extra = [t for t in table if not isinstance(t, tags)]
    if missing or extra:
        raise RuntimeError(
            f"{tags.__name__} catalog mismatch: missing={missing} extra={extra}"
        )
