"""Tessellation profiles for the three detail levels.

Detail is a display-quality knob, independent of the seed: it changes
segment counts and which wireframe edges are visible, never part choices
or dimensions.

    detail | radial | sphere | torus | edge threshold
    -------+--------+--------+-------+---------------
       1   |   8    |  8x6   | 6x12  |  1 deg (nearly every edge)
       2   |  12    | 12x9   | 8x16  | 15 deg
       3   |  16    | 16x12  | 10x20 | 25 deg
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

log = logging.getLogger(__name__)

MIN_DETAIL = 1
MAX_DETAIL = 3

_EDGE_THRESHOLDS = {1: 1.0, 2: 15.0, 3: 25.0}


@dataclass(frozen=True)
class ResolutionProfile:
    """Segment counts for every base shape at one detail level.

    Attributes:
        detail: The clamped detail level this profile was built for
        box_subdivisions: Width/height/depth segments of a box
        radial_segments: Radial segments of cylinders
        height_segments: Height segments of cylinders
        sphere_width_segments: Longitudinal segments of spheres
        sphere_height_segments: Latitudinal segments of spheres
        torus_radial_segments: Segments around the torus tube
        torus_tubular_segments: Segments along the torus ring
        cone_radial_segments: Radial segments of cones
        edge_threshold_deg: Minimum face angle for a wireframe edge
    """

    detail: int
    box_subdivisions: int
    radial_segments: int
    height_segments: int
    sphere_width_segments: int
    sphere_height_segments: int
    torus_radial_segments: int
    torus_tubular_segments: int
    cone_radial_segments: int
    edge_threshold_deg: float

    @property
    def polyhedron_detail(self) -> int:
        """One subdivision level for Platonic solids above the lowest box detail."""
        return 1 if self.box_subdivisions > 1 else 0


def clamp_detail(detail) -> int:
    """Clamp any number to a valid detail level (1..3)."""
    level = int(detail)
    clamped = max(MIN_DETAIL, min(MAX_DETAIL, level))
    if clamped != detail:
        log.debug("Detail %r clamped to %d", detail, clamped)
    return clamped


def profile_for(detail=1) -> ResolutionProfile:
    """Profile for a detail level; out-of-range input is clamped, never rejected."""
    return _build_profile(clamp_detail(detail))


@lru_cache(maxsize=None)
def _build_profile(d: int) -> ResolutionProfile:
    return ResolutionProfile(
        detail=d,
        box_subdivisions=max(1, d),
        radial_segments=4 + d * 4,
        height_segments=d,
        sphere_width_segments=4 + d * 4,
        sphere_height_segments=3 + d * 3,
        torus_radial_segments=4 + d * 2,
        torus_tubular_segments=8 + d * 4,
        cone_radial_segments=4 + d * 4,
        edge_threshold_deg=_EDGE_THRESHOLDS[d],
    )
