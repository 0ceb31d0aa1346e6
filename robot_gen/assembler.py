"""Robot assembler -- turns a seed string into one Placement tree.

The assembler owns the robot's single stream and draws from it in this
order (reordering changes every robot):

    1. hue, primary saturation/lightness, secondary hue offset,
       secondary saturation/lightness
    2. overall scale
    3. torso tag, width, height, depth, then the torso generator
    4. head tag, size, then the head generator
    5. arm presence (85%); if present: arm tag, length, thickness,
       left arm generator, right arm generator
    6. locomotion variant from a 3:1:1:1 pool, then its units
    7. antenna presence (40%) -> height, x offset; backpack presence (35%)

Usage:
    root = generate("robot-001-0", detail=2, solid=True)

    root, blueprint = assemble("robot-001-0")
    print(describe_robot(blueprint))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from robot_gen.parts import (
    ARMS,
    HEADS,
    LOCOMOTION,
    TORSOS,
    ArmTag,
    HeadTag,
    LegTag,
    LocomotionTag,
    TorsoTag,
    leg_pair,
)
from robot_gen.primitives import Color, Group, PartBuilder, box, cylinder, sphere
from robot_gen.resolution import ResolutionProfile, profile_for
from robot_gen.stream import SeededStream, create_stream, hash_seed

log = logging.getLogger(__name__)


class LocomotionVariant(Enum):
    BIPEDAL = "bipedal"
    TRACKED = "tracked"
    WHEELED = "wheeled"
    HOVER = "hover"


# Bipedal is listed three times: ~50% bipedal, ~16.7% each of the others.
LOCOMOTION_POOL = (
    LocomotionVariant.BIPEDAL,
    LocomotionVariant.BIPEDAL,
    LocomotionVariant.BIPEDAL,
    LocomotionVariant.TRACKED,
    LocomotionVariant.WHEELED,
    LocomotionVariant.HOVER,
)

ARM_CHANCE = 0.85
ANTENNA_CHANCE = 0.4
BACKPACK_CHANCE = 0.35

# Base proportions at scale 1.0
TORSO_BASE = (0.8, 1.2, 0.5)
HEAD_BASE = 0.6
ARM_BASE = (0.6, 0.12)
ARM_TILT = 0.1
TRACK_BASE = (0.4, 1.5, 0.5)
WHEEL_BASE = (0.35, 0.15)
HOVER_BASE = 0.5


@dataclass(frozen=True)
class RobotBlueprint:
    """Everything rolled for one robot, recorded after the tree is built.

    Attributes:
        seed: Seed string the robot was generated from
        detail: Clamped detail level
        primary / secondary: Palette (torso/limbs vs head/antenna)
        scale: Overall size factor in [0.7, 1.3]
        torso_tag / torso_dims: (width, height, depth)
        head_tag / head_size
        arm_tag / arm_dims: (length, thickness), None when armless
        locomotion: Variant; leg_tag / leg_dims only for bipedal
        has_antenna / has_backpack: Accessory flags
    """

    seed: str
    detail: int
    primary: Color
    secondary: Color
    scale: float
    torso_tag: TorsoTag
    torso_dims: tuple[float, float, float]
    head_tag: HeadTag
    head_size: float
    arm_tag: ArmTag | None
    arm_dims: tuple[float, float] | None
    locomotion: LocomotionVariant
    leg_tag: LegTag | None
    leg_dims: tuple[float, float] | None
    has_antenna: bool
    has_backpack: bool

    @property
    def has_arms(self) -> bool:
        return self.arm_tag is not None


class RobotAssembler:
    """Builds one robot. Not reusable: one instance, one stream, one tree."""

    def __init__(self, seed: str, detail: int = 1, solid: bool = False):
        self.seed = seed
        self.profile: ResolutionProfile = profile_for(detail)
        self.solid = bool(solid)
        self.stream: SeededStream = create_stream(seed)
        self.root = Group(name=f"robot:{seed}")
        self._rolled: dict = {}

    def build(self) -> tuple[Group, RobotBlueprint]:
        self._roll_palette()
        self._rolled["scale"] = self.stream.range(0.7, 1.3)
        self._build_torso()
        self._build_head()
        self._build_arms()
        self._build_locomotion()
        self._build_accessories()
        blueprint = RobotBlueprint(
            seed=self.seed, detail=self.profile.detail, **self._rolled
        )
        log.debug(
            "robot %s: torso=%s head=%s arms=%s loco=%s",
            self.seed,
            blueprint.torso_tag.value,
            blueprint.head_tag.value,
            blueprint.arm_tag.value if blueprint.arm_tag else "-",
            blueprint.locomotion.value,
        )
        return self.root, blueprint

    # -- rolls --------------------------------------------------------------

    def _roll_palette(self):
        rng = self.stream
        hue = rng.range(0, 1)
        primary = Color.from_hsl(hue, rng.range(0.6, 1), rng.range(0.45, 0.65))
        hue2 = (hue + rng.range(0.08, 0.17)) % 1
        secondary = Color.from_hsl(hue2, rng.range(0.6, 1), rng.range(0.5, 0.7))
        self._rolled.update(primary=primary, secondary=secondary)

    def _attach(self, group: Group, name: str, pos=None, rot=None) -> Group:
        group.name = name
        if pos is not None:
            group.position = pos
        if rot is not None:
            group.rotation = rot
        self.root.add(group)
        return group

    def _build_torso(self):
        rng, s = self.stream, self._rolled["scale"]
        tag = rng.pick(list(TorsoTag))
        bw, bh, bd = TORSO_BASE
        dims = (
            bw * s * rng.range(0.8, 1.3),
            bh * s * rng.range(0.8, 1.2),
            bd * s * rng.range(0.8, 1.2),
        )
        torso = TORSOS[tag](dims, self._rolled["primary"], rng, self.profile, self.solid)
        self._attach(torso, f"torso:{tag.value}")
        self._rolled.update(torso_tag=tag, torso_dims=dims)

    def _build_head(self):
        rng, s = self.stream, self._rolled["scale"]
        tag = rng.pick(list(HeadTag))
        size = HEAD_BASE * s * rng.range(0.8, 1.2)
        head = HEADS[tag]((size,), self._rolled["secondary"], rng, self.profile, self.solid)
        th = self._rolled["torso_dims"][1]
        self._attach(head, f"head:{tag.value}", pos=(0, th * 0.5 + size * 0.4, 0))
        self._rolled.update(head_tag=tag, head_size=size)

    def _build_arms(self):
        rng, s = self.stream, self._rolled["scale"]
        if not rng.chance(ARM_CHANCE):
            self._rolled.update(arm_tag=None, arm_dims=None)
            return
        tag = rng.pick(list(ArmTag))
        length = ARM_BASE[0] * s * rng.range(0.8, 1.2)
        thickness = ARM_BASE[1] * s * rng.range(0.8, 1.3)
        tw, th, _ = self._rolled["torso_dims"]
        x = tw * 0.55 + thickness
        for side, sign in (("left", 1), ("right", -1)):
            arm = ARMS[tag](
                (length, thickness), self._rolled["primary"], rng, self.profile, self.solid
            )
            self._attach(
                arm,
                f"arm.{side}:{tag.value}",
                pos=(sign * x, th * 0.35, 0),
                rot=(0, 0, sign * ARM_TILT),
            )
        self._rolled.update(arm_tag=tag, arm_dims=(length, thickness))

    def _build_locomotion(self):
        rng, s = self.stream, self._rolled["scale"]
        tw, th, td = self._rolled["torso_dims"]
        color = self._rolled["primary"]
        variant = rng.pick(LOCOMOTION_POOL)
        leg_tag = leg_dims = None

        if variant is LocomotionVariant.BIPEDAL:
            leg_tag, leg_dims, legs = leg_pair((tw, th, s), color, rng, self.profile, self.solid)
            for leg in legs:
                self.root.add(leg)
        else:
            unit_tag, dims, offsets = _unit_layout(variant, tw, th, td, s)
            for i, pos in enumerate(offsets):
                unit = LOCOMOTION[unit_tag](dims, color, rng, self.profile, self.solid)
                self._attach(unit, f"{variant.value}.{i}:{unit_tag.value}", pos=pos)

        self._rolled.update(locomotion=variant, leg_tag=leg_tag, leg_dims=leg_dims)

    def _build_accessories(self):
        rng, s = self.stream, self._rolled["scale"]
        tw, th, td = self._rolled["torso_dims"]
        primary, secondary = self._rolled["primary"], self._rolled["secondary"]

        has_antenna = rng.chance(ANTENNA_CHANCE)
        if has_antenna:
            b = PartBuilder(secondary, self.profile, self.solid)
            ah = rng.range(0.3, 0.6)
            b.add(cylinder(0.02, 0.015, ah, self.profile), pos=(0, ah / 2, 0))
            b.add(sphere(0.04, self.profile), pos=(0, ah + 0.04, 0))
            head_size = self._rolled["head_size"]
            x = rng.range(-0.2, 0.2)
            self._attach(b.group, "antenna", pos=(x, th * 0.5 + head_size * 0.8, 0))

        has_backpack = rng.chance(BACKPACK_CHANCE)
        if has_backpack:
            bw, bh, bd = tw * 0.6, th * 0.5, 0.25 * s
            b = PartBuilder(primary, self.profile, self.solid)
            b.add(box(bw, bh, bd, self.profile))
            for sign in (1, -1):
                b.add(
                    box(bw * 0.3, bh * 0.15, bd * 0.3, self.profile),
                    pos=(sign * bw * 0.25, bh * 0.3, bd * 0.4),
                    color=secondary,
                )
            self._attach(b.group, "backpack", pos=(0, 0, -td * 0.5 - bd * 0.5 - 0.05))

        self._rolled.update(has_antenna=has_antenna, has_backpack=has_backpack)


def _unit_layout(variant: LocomotionVariant, tw: float, th: float, td: float, s: float):
    """(unit tag, unit dims, offsets) for the non-bipedal variants."""
    if variant is LocomotionVariant.TRACKED:
        w, length, h = (v * s for v in TRACK_BASE)
        x, y = tw * 0.5 + w * 0.5, -th * 0.5 - 0.1
        return LocomotionTag.TANK, (w, length, h), [(x, y, 0), (-x, y, 0)]
    if variant is LocomotionVariant.WHEELED:
        r, w = (v * s for v in WHEEL_BASE)
        x, y, z = tw * 0.6, -th * 0.5 - r * 0.5, td * 0.8
        return LocomotionTag.WHEEL, (r, w), [(x, y, z), (-x, y, z), (x, y, -z), (-x, y, -z)]
    size = HOVER_BASE * s
    x, y, z = tw * 0.35, -th * 0.5 - 0.15, td * 0.5
    return LocomotionTag.HOVER, (size,), [(x, y, z), (-x, y, z), (x, y, -z), (-x, y, -z)]


def assemble(seed: str, detail: int = 1, solid: bool = False) -> tuple[Group, RobotBlueprint]:
    """Build a robot and return it together with its rolled blueprint."""
    return RobotAssembler(seed, detail, solid).build()


def generate(seed: str, detail: int = 1, solid: bool = False) -> Group:
    """Build the Placement tree for one seed. Pure: same inputs, equal trees."""
    root, _ = assemble(seed, detail, solid)
    return root


def robot_id(seed: str) -> str:
    """Short hex identifier for a seed (6 chars)."""
    return f"{hash_seed(seed) & 0xFFFFFF:06x}"


def describe_robot(bp: RobotBlueprint) -> str:
    """Multi-line textual description of a rolled robot.

    Example output:
        Robot #4c5a71 (seed='robot-001-0')  detail=1  scale=0.97
          palette   #56c3f4 / #2727de
          torso     tapered  (0.85 x 1.21 x 0.49)
          head      monitor  (size 0.63)
          arms      skeletal  (length 0.62, thickness 0.12)
          legs      piston  (length 0.80, thickness 0.15)
          extras    -
    """
    w, h, d = bp.torso_dims
    lines = [
        f"Robot #{robot_id(bp.seed)} (seed={bp.seed!r})  detail={bp.detail}  scale={bp.scale:.2f}",
        f"  palette   {bp.primary.hex} / {bp.secondary.hex}",
        f"  torso     {bp.torso_tag.value}  ({w:.2f} x {h:.2f} x {d:.2f})",
        f"  head      {bp.head_tag.value}  (size {bp.head_size:.2f})",
    ]
    if bp.arm_tag is not None:
        length, t = bp.arm_dims
        lines.append(f"  arms      {bp.arm_tag.value}  (length {length:.2f}, thickness {t:.2f})")
    else:
        lines.append("  arms      -")
    if bp.leg_tag is not None:
        length, t = bp.leg_dims
        lines.append(f"  legs      {bp.leg_tag.value}  (length {length:.2f}, thickness {t:.2f})")
    else:
        lines.append(f"  drive     {bp.locomotion.value}")
    extras = [n for n, on in (("antenna", bp.has_antenna), ("backpack", bp.has_backpack)) if on]
    lines.append(f"  extras    {', '.join(extras) or '-'}")
    return "\n".join(lines)
