"""Tests for the seeded stream and detail profiles.

Validates that:
- Seed hashing and the first draws match known reference values
- The helpers (range, int_inclusive, pick, chance) stay in bounds
- Detail levels clamp and tessellation grows with detail
"""

import pytest

from robot_gen.errors import InvalidArgument
from robot_gen.resolution import clamp_detail, profile_for
from robot_gen.stream import MASK32, SeededStream, create_stream, hash_seed

# ---------------------------------------------------------------------------
# Reference values
# ---------------------------------------------------------------------------

GOLDEN = {
    "robot-001-0": (
        1314684529,
        [0.551656917668879, 0.695695378119126, 0.9898529064375907],
        4,
    ),
    "robot-001-1": (
        1314684530,
        [0.20822648773901165, 0.1351258191280067, 0.19536591274663806],
        5,
    ),
    "": (0, [0.26642920868471265, 0.0003297457005828619, 0.2232720274478197], 3),
    "a": (97, [0.5655837582889944, 0.21950005996041, 0.8339510657824576], 4),
}


class TestHash:
    @pytest.mark.parametrize("seed", list(GOLDEN))
    def test_hash_matches_reference(self, seed):
        assert hash_seed(seed) == GOLDEN[seed][0]

    def test_hash_is_unsigned_32_bit(self):
        for seed in ["", "x", "robot-001-0", "a much longer seed string " * 20]:
            h = hash_seed(seed)
            assert 0 <= h <= MASK32

    def test_hash_uses_utf16_code_units(self):
        # An astral character is two code units: 0xD83E 0xDD16
        expected = ((0xD83E * 31) + 0xDD16) & MASK32
        assert hash_seed("\U0001F916") == expected

    @pytest.mark.parametrize("base", ["robot-001-0", "a", "my seed", "ロボット-42"])
    def test_single_character_changes_change_hash(self, base):
        """Substituting any one character, at any position, moves the state."""
        original = hash_seed(base)
        for pos in range(len(base)):
            variants = {
                base[:pos] + ch + base[pos + 1:]
                for ch in "0aZ-~éロ"
                if ch != base[pos]
            }
            hashes = {hash_seed(v) for v in variants}
            assert original not in hashes, (base, pos)
            assert len(hashes) == len(variants), (base, pos)

    def test_state_starts_at_hash(self):
        assert create_stream("a").state == 97


class TestStreamDraws:
    @pytest.mark.parametrize("seed", list(GOLDEN))
    def test_first_draws_match_reference(self, seed):
        _, draws, int_after = GOLDEN[seed]
        stream = create_stream(seed)
        assert [stream.next() for _ in range(3)] == draws
        assert stream.int_inclusive(3, 5) == int_after

    def test_same_seed_same_sequence(self):
        a, b = create_stream("repeat"), create_stream("repeat")
        assert [a.next() for _ in range(100)] == [b.next() for _ in range(100)]

    def test_streams_are_independent(self):
        a, b = create_stream("one"), create_stream("one")
        a.next()
        a.next()
        assert b.next() == create_stream("one").next()

    def test_next_in_unit_interval(self):
        stream = create_stream("bounds")
        for _ in range(5000):
            v = stream.next()
            assert 0.0 <= v < 1.0

    def test_range_bounds(self):
        stream = create_stream("range")
        for _ in range(1000):
            v = stream.range(-0.2, 0.2)
            assert -0.2 <= v < 0.2

    def test_int_inclusive_hits_both_ends(self):
        stream = create_stream("ints")
        seen = {stream.int_inclusive(4, 8) for _ in range(2000)}
        assert seen == {4, 5, 6, 7, 8}

    def test_pick_returns_member(self):
        stream = create_stream("pick")
        items = ["a", "b", "c"]
        assert {stream.pick(items) for _ in range(500)} == set(items)

    def test_pick_empty_raises(self):
        with pytest.raises(InvalidArgument):
            create_stream("x").pick([])

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            SeededStream("x").pick(())

    def test_chance_extremes(self):
        stream = create_stream("chance")
        assert not any(stream.chance(0.0) for _ in range(200))
        assert all(stream.chance(1.0) for _ in range(200))

    def test_chance_default_is_half(self):
        stream = create_stream("coin")
        hits = sum(stream.chance() for _ in range(10_000))
        assert 4700 < hits < 5300


# ---------------------------------------------------------------------------
# Resolution profiles
# ---------------------------------------------------------------------------


class TestResolution:
    @pytest.mark.parametrize(
        "detail,expected",
        [(-5, 1), (0, 1), (1, 1), (2, 2), (3, 3), (4, 3), (99, 3)],
    )
    def test_clamp(self, detail, expected):
        assert clamp_detail(detail) == expected
        assert profile_for(detail).detail == expected

    def test_low_profile_counts(self):
        p = profile_for(1)
        assert p.box_subdivisions == 1
        assert p.radial_segments == 8
        assert p.height_segments == 1
        assert (p.sphere_width_segments, p.sphere_height_segments) == (8, 6)
        assert (p.torus_radial_segments, p.torus_tubular_segments) == (6, 12)
        assert p.cone_radial_segments == 8
        assert p.edge_threshold_deg == 1.0
        assert p.polyhedron_detail == 0

    def test_high_profile_counts(self):
        p = profile_for(3)
        assert p.radial_segments == 16
        assert (p.sphere_width_segments, p.sphere_height_segments) == (16, 12)
        assert (p.torus_radial_segments, p.torus_tubular_segments) == (10, 20)
        assert p.edge_threshold_deg == 25.0
        assert p.polyhedron_detail == 1

    def test_segments_grow_with_detail(self):
        fields = [
            "box_subdivisions",
            "radial_segments",
            "height_segments",
            "sphere_width_segments",
            "sphere_height_segments",
            "torus_radial_segments",
            "torus_tubular_segments",
            "cone_radial_segments",
        ]
        low, med, high = (profile_for(d) for d in (1, 2, 3))
        for f in fields:
            assert getattr(low, f) <= getattr(med, f) <= getattr(high, f), f

    def test_profiles_are_shared(self):
        assert profile_for(2) is profile_for(2)
