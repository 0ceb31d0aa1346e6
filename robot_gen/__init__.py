"""Deterministic low-poly wireframe robots from seed strings.

Each robot is assembled from interchangeable parts (torso, head, arms,
locomotion, accessories) picked and sized by a seeded stream. The same
seed and detail level always produce the same Placement tree; detail only
changes tessellation, never the robot.

Usage:
    from robot_gen import generate, assemble, describe_robot

    root = generate("robot-001-0", detail=2, solid=True)   # Placement tree
    root, blueprint = assemble("robot-001-0")              # plus rolled choices
    print(describe_robot(blueprint))
"""

from robot_gen.assembler import (
    RobotBlueprint,
    assemble,
    describe_robot,
    generate,
    robot_id,
)
from robot_gen.errors import InvalidArgument
from robot_gen.primitives import Color, GeomKind, Group, Primitive
from robot_gen.resolution import profile_for
from robot_gen.stream import SeededStream, create_stream

__all__ = [
    "generate",
    "assemble",
    "describe_robot",
    "robot_id",
    "RobotBlueprint",
    "Group",
    "Primitive",
    "GeomKind",
    "Color",
    "SeededStream",
    "create_stream",
    "profile_for",
    "InvalidArgument",
]
