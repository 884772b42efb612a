#!/usr/bin/env python3
from __future__ import annotations

from conquest.rng import XorShift32

SYLLABLES = [
    "nor", "tar", "ven", "kle", "ri", "mar", "sol", "zen",
    "dax", "quu", "lor", "bel", "tra", "sal", "ion", "aer",
    "yr", "ul", "fen", "gyr", "oth", "rex", "cer", "val",
]


def random_name(rng: XorShift32, parts: int = 2) -> str:
    name = "".join(rng.choice(SYLLABLES) for _ in range(parts))
    return name[:1].upper() + name[1:]
