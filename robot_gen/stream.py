"""Seeded pseudo-random stream keyed by an arbitrary string.

Every robot owns exactly one stream. The assembler and the part
generators draw from it in a fixed order, so the same seed string always
yields the same robot.

Bit-level behaviour:
    - The seed is folded one UTF-16 code unit at a time with
      ``acc = int32(acc * 31 + unit)``; the final accumulator is read as
      an unsigned 32-bit state. The empty string hashes to 0.
    - ``next()`` is a Mulberry32 step. Every intermediate value wraps at
      32 bits, so the output sequence matches any other implementation
      of the same algorithm draw for draw.

Usage:
    stream = create_stream("robot-001-0")
    stream.next()                 # float in [0, 1)
    stream.int_inclusive(3, 5)    # 3, 4 or 5
    stream.pick(["a", "b"])
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

from robot_gen.errors import InvalidArgument

T = TypeVar("T")

MASK32 = 0xFFFFFFFF
_GOLDEN_GAMMA = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    """Low 32 bits of a 32x32 multiply (sign-agnostic)."""
    return (a * b) & MASK32


def _utf16_units(text: str):
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def hash_seed(seed_text: str) -> int:
    """Fold a seed string into an unsigned 32-bit initial state."""
    acc = 0
    for unit in _utf16_units(str(seed_text)):
        acc = (acc * 31 + unit) & MASK32
    return acc


class SeededStream:
    """Deterministic float stream; see module docstring for the algorithm."""

    __slots__ = ("_state",)

    def __init__(self, seed_text: str):
        self._state = hash_seed(seed_text)

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        """Advance the state and return a float in [0, 1)."""
        s = (self._state + _GOLDEN_GAMMA) & MASK32
        self._state = s
        t = _imul(s ^ (s >> 15), 1 | s)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & MASK32) ^ t
        return ((t ^ (t >> 14)) & MASK32) / _TWO_POW_32

    def range(self, lo: float, hi: float) -> float:
        return lo + self.next() * (hi - lo)

    def int_inclusive(self, lo: int, hi: int) -> int:
        return math.floor(self.range(lo, hi + 1))

    def pick(self, items: Sequence[T]) -> T:
        """Uniformly pick one element. Raises InvalidArgument if empty."""
        items = list(items)
        if not items:
            raise InvalidArgument("pick() requires a non-empty sequence")
        return items[self.int_inclusive(0, len(items) - 1)]

    def chance(self, p: float = 0.5) -> bool:
        return self.next() < p


def create_stream(seed_text: str) -> SeededStream:
    """Create a fresh stream. Never share one between robots."""
    return SeededStream(seed_text)
