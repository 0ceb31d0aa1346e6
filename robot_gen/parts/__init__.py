"""Part catalogs -- one fixed tag enum and dispatch table per body region.

=== HOW TO ADD A NEW PART ===

1. Add a member to the region's tag enum (e.g. ``HeadTag``). Append it
   at the end: enum order is the order ``stream.pick`` indexes, so
   inserting in the middle changes every existing seed.
2. Write the generator in the same module with the shared signature::

       def my_head(dims, color, stream, p, solid) -> Group

   build it with ``PartBuilder`` and return ``b.group``.
3. Register it in the module's dispatch dict. ``check_catalog`` runs at
   import time and refuses a tag without a generator.

=== CONVENTIONS ===

    - Y-up; a part's origin is where it attaches to the torso
    - All stream draws happen in the order they are written; document
      them in the module docstring
    - Use only the base shapes in ``robot_gen.primitives``
"""

from __future__ import annotations

from enum import Enum

from robot_gen.errors import InvalidArgument
from robot_gen.parts.arms import ARMS, ArmTag
from robot_gen.parts.base import PartGenerator
from robot_gen.parts.heads import HEADS, HeadTag
from robot_gen.parts.legs import LEGS, LegTag
from robot_gen.parts.locomotion import LOCOMOTION, LocomotionTag, leg_pair
from robot_gen.parts.torsos import TORSOS, TorsoTag


class Region(Enum):
    HEAD = "head"
    TORSO = "torso"
    ARM = "arm"
    LEG = "leg"
    LOCOMOTION = "locomotion"


_CATALOGS: dict[Region, tuple[type[Enum], dict]] = {
    Region.HEAD: (HeadTag, HEADS),
    Region.TORSO: (TorsoTag, TORSOS),
    Region.ARM: (ArmTag, ARMS),
    Region.LEG: (LegTag, LEGS),
    Region.LOCOMOTION: (LocomotionTag, LOCOMOTION),
}


def _region(region: Region | str) -> Region:
    try:
        return Region(region)
    except ValueError:
        raise InvalidArgument(f"unknown region {region!r}") from None


def tag_type(region: Region | str) -> type[Enum]:
    """The tag enum for a region."""
    return _CATALOGS[_region(region)][0]


def get_generator(region: Region | str, tag: Enum | str) -> PartGenerator:
    """Look up a generator. Raises InvalidArgument for an unknown tag."""
    tags, table = _CATALOGS[_region(region)]
    if isinstance(tag, Enum) and not isinstance(tag, tags):
        raise InvalidArgument(f"{tag!r} is not a {tags.__name__}")
    try:
        key = tags(tag.value if isinstance(tag, Enum) else tag)
    except ValueError:
        raise InvalidArgument(f"unknown {tags.__name__} {tag!r}") from None
    return table[key]


def list_tags(region: Region | str) -> list[str]:
    """Tag names in pick order."""
    return [t.value for t in tag_type(region)]


def catalog_sizes() -> dict[str, int]:
    return {r.value: len(tags) for r, (tags, _) in _CATALOGS.items()}


__all__ = [
    "Region",
    "HeadTag",
    "TorsoTag",
    "ArmTag",
    "LegTag",
    "LocomotionTag",
    "HEADS",
    "TORSOS",
    "ARMS",
    "LEGS",
    "LOCOMOTION",
    "get_generator",
    "leg_pair",
    "list_tags",
    "tag_type",
    "catalog_sizes",
]
