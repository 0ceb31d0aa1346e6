"""Fast tests for the part catalogs.

Validates that:
- Every registered tag has a generator producing a well-formed part
- Catalog sizes and pick order are fixed
- Only the generators with internal rolls consume the stream
- Unknown regions and tags are rejected
"""

import pytest

from robot_gen.errors import InvalidArgument
from robot_gen.parts import (
    ArmTag,
    HeadTag,
    LegTag,
    LocomotionTag,
    Region,
    TorsoTag,
    catalog_sizes,
    get_generator,
    leg_pair,
    list_tags,
)
from robot_gen.primitives import (
    SOLID_OPACITY,
    SOLID_SHADE,
    Color,
    Group,
    MaterialRole,
    Primitive,
)
from robot_gen.render_catalog import build_part, part_dims
from robot_gen.resolution import profile_for
from robot_gen.stream import create_stream

COLOR = Color.from_hsl(0.3, 0.8, 0.5)

ALL_PARTS = [(region, tag) for region in Region for tag in list_tags(region)]

# (region, tag) pairs that roll something internally
DRAWING_PARTS = {
    ("head", "cube"),
    ("head", "dome"),
    ("head", "turret"),
    ("head", "scanner"),
    ("torso", "segmented"),
    ("torso", "spinal"),
    ("torso", "cage"),
    ("arm", "tentacle"),
    ("locomotion", "bipedal"),
    ("locomotion", "tank"),
    ("locomotion", "wheel"),
    ("locomotion", "hover"),
}


def _build(region, tag, detail=1, solid=False, seed="parts"):
    stream = create_stream(seed)
    gen = get_generator(region, tag)
    group = gen(part_dims(region, tag), COLOR, stream, profile_for(detail), solid)
    return group, stream


# ---------------------------------------------------------------------------
# Per-tag validation
# ---------------------------------------------------------------------------


class TestGenerators:
    """Every catalog entry must build a valid part."""

    @pytest.fixture(params=ALL_PARTS, ids=lambda rt: f"{rt[0].value}:{rt[1]}")
    def part(self, request):
        return request.param

    def test_returns_group_with_primitives(self, part):
        region, tag = part
        group, _ = _build(region, tag)
        assert isinstance(group, Group)
        assert len(group.primitives()) >= 1

    def test_primitives_are_wrapped(self, part):
        """Every primitive sits alone under its own transform group."""
        region, tag = part
        group, _ = _build(region, tag)
        for node in group.walk():
            if not isinstance(node, Group):
                continue
            prims = [c for c in node.children if isinstance(c, Primitive)]
            if prims:
                assert len(node.children) == 1, f"{region.value}:{tag} wrapper holds {len(node.children)}"

    def test_wireframe_materials(self, part):
        region, tag = part
        group, _ = _build(region, tag)
        for prim in group.primitives():
            assert len(prim.materials) == 1
            assert prim.wireframe.role is MaterialRole.WIREFRAME_EDGES
            assert prim.wireframe.color == COLOR
            assert prim.solid is None

    def test_solid_materials(self, part):
        region, tag = part
        group, _ = _build(region, tag, solid=True)
        for prim in group.primitives():
            face, wire = prim.materials
            assert face.role is MaterialRole.SOLID_FACE
            assert wire.role is MaterialRole.WIREFRAME_EDGES
            assert face.opacity == SOLID_OPACITY
            assert face.flat_shading and face.double_sided
            assert face.color == wire.color.scaled(SOLID_SHADE)

    def test_sizes_positive(self, part):
        region, tag = part
        group, _ = _build(region, tag)
        for prim in group.primitives():
            assert all(s >= 0 for s in prim.geometry.size)
            assert any(s > 0 for s in prim.geometry.size)
            assert all(n >= 0 for n in prim.geometry.segments)

    def test_deterministic(self, part):
        region, tag = part
        a, sa = _build(region, tag)
        b, sb = _build(region, tag)
        assert a == b
        assert sa.state == sb.state

    def test_stream_use(self, part):
        region, tag = part
        _, stream = _build(region, tag)
        consumed = stream.state != create_stream("parts").state
        assert consumed == ((region.value, tag) in DRAWING_PARTS)

    def test_render_catalog_part(self, part):
        region, tag = part
        assert build_part(region, tag) == build_part(region, tag)


# ---------------------------------------------------------------------------
# Catalog registry
# ---------------------------------------------------------------------------


class TestCatalog:
    def test_sizes(self):
        assert catalog_sizes() == {
            "head": 11,
            "torso": 11,
            "arm": 9,
            "leg": 8,
            "locomotion": 6,
        }

    def test_pick_order(self):
        assert list_tags("head") == [
            "cube", "dome", "visor", "pyramid", "turret", "cluster",
            "cyclops", "scanner", "insect", "monitor", "horned",
        ]
        assert list_tags("torso") == [
            "box", "hex", "tapered", "segmented", "spheroid", "industrial",
            "barrel", "stealth", "spinal", "cage", "plated",
        ]
        assert list_tags("arm") == [
            "standard", "armored", "skeletal", "hydraulic", "tentacle",
            "claw", "blade", "cannon", "shield",
        ]
        assert list_tags("leg") == [
            "standard", "digitigrade", "armored", "piston", "spider",
            "hooved", "blocky", "stilts",
        ]
        assert list_tags("locomotion") == [
            "bipedal", "tank", "wheel", "hover", "ball", "triwheel",
        ]

    def test_accepts_enum_or_string(self):
        assert get_generator(Region.HEAD, HeadTag.DOME) is get_generator("head", "dome")
        assert get_generator("torso", TorsoTag.CAGE) is get_generator(Region.TORSO, "cage")
        assert get_generator("arm", ArmTag.CLAW) is get_generator("arm", "claw")
        assert get_generator("leg", LegTag.STILTS) is get_generator("leg", "stilts")
        assert get_generator("locomotion", LocomotionTag.BALL) is get_generator("locomotion", "ball")

    @pytest.mark.parametrize(
        "region,tag",
        [
            ("head", "nope"),
            ("torso", "cube"),
            ("arm", ""),
            ("leg", "tank"),
            ("tail", "standard"),
            (Region.LEG, ArmTag.STANDARD),
        ],
    )
    def test_unknown_tag_raises(self, region, tag):
        with pytest.raises(InvalidArgument):
            get_generator(region, tag)


class TestLegPair:
    def test_left_then_right(self):
        tag, (length, thickness), legs = leg_pair(
            (1.0, 1.2, 1.0), COLOR, create_stream("legs"), profile_for(1), False
        )
        assert isinstance(tag, LegTag)
        left, right = legs
        assert left.name == f"leg.left:{tag.value}"
        assert right.name == f"leg.right:{tag.value}"
        assert left.position == pytest.approx((0.3, -0.6, 0.0))
        assert right.position == pytest.approx((-0.3, -0.6, 0.0))
        assert 0.8 * 0.8 <= length < 0.8 * 1.2
        assert 0.15 * 0.8 <= thickness < 0.15 * 1.2
        assert left.primitives() == right.primitives()
