#!/usr/bin/env python3
from __future__ import annotations

import math
from typing import List, Sequence, Tuple

Point = Tuple[float, float]


def distance(a, b) -> float:
    """Euclidean distance between two objects exposing .x and .y."""
    return math.hypot(a.x - b.x, a.y - b.y)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _cross(o: Point, a: Point, b: Point) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def convex_hull(points: Sequence[Point]) -> List[Point]:
    """
    Monotone-chain hull, counter-clockwise, without a repeated closing point.
    Three or fewer points come back unchanged; callers skip drawing anything
    with fewer than three vertices.
    """
    if len(points) <= 3:
        return list(points)
    ordered = sorted(points)

    lower: List[Point] = []
    for p in ordered:
        while len(lower) >= 2 and _cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)

    upper: List[Point] = []
    for p in reversed(ordered):
        while len(upper) >= 2 and _cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)

    return lower[:-1] + upper[:-1]
