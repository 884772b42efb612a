#!/usr/bin/env python3
"""
Seeded xorshift stream feeding every procedural decision of a session.

The state is a plain 32-bit integer held on the GalaxyState, so a fixed seed
reproduces the same galaxy and the same AI choices for the same tick inputs.
"""
from __future__ import annotations

import hashlib
import math
import random
from dataclasses import dataclass
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

SEED_BITS = 32
SEED_MASK = (1 << SEED_BITS) - 1
# xorshift never leaves the all-zero state
ZERO_SEED_REPLACEMENT = 0x9E3779B9
DRAW_MODULUS = 1_000_000


def normalize_seed(value: Optional[object]) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value & SEED_MASK
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        try:
            return int(cleaned, 0) & SEED_MASK
        except ValueError:
            digest = hashlib.sha256(cleaned.encode("utf-8")).hexdigest()
            return int(digest, 16) & SEED_MASK
    if isinstance(value, (bytes, bytearray)):
        digest = hashlib.sha256(value).hexdigest()
        return int(digest, 16) & SEED_MASK
    try:
        return int(value) & SEED_MASK  # type: ignore[arg-type]
    except (TypeError, ValueError):
        digest = hashlib.sha256(str(value).encode("utf-8")).hexdigest()
        return int(digest, 16) & SEED_MASK


def fresh_seed() -> int:
    """Seed for sessions started without one; the only entropy source."""
    return random.SystemRandom().randrange(1, DRAW_MODULUS)


@dataclass
class XorShift32:
    state: int

    def __post_init__(self) -> None:
        self.state &= SEED_MASK
        if self.state == 0:
            self.state = ZERO_SEED_REPLACEMENT

    def random(self) -> float:
        """Advance the state and return a float in [0, 1)."""
        s = self.state
        s ^= (s << 13) & SEED_MASK
        s ^= s >> 17
        s ^= (s << 5) & SEED_MASK
        self.state = s
        return (s % DRAW_MODULUS) / DRAW_MODULUS

    def uniform(self, a: float, b: float) -> float:
        return a + self.random() * (b - a)

    def randint(self, a: int, b: int) -> int:
        """Integer in [a, b], both ends inclusive."""
        return math.floor(self.uniform(a, b + 1))

    def index(self, n: int) -> int:
        return math.floor(self.random() * n)

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise IndexError("cannot choose from an empty sequence")
        return seq[self.index(len(seq))]
