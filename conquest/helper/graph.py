#!/usr/bin/env python3
"""
Starlane graph construction and connectivity repair.

Lanes are stored as (low, high) index pairs; adjacency lives on each
StarSystem.neighbors once generation finishes.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

# k-nearest lookups over system positions
from scipy.spatial import cKDTree  # type: ignore

from conquest.models import Owner, StarSystem

Lane = Tuple[int, int]


def _lane(a: int, b: int) -> Lane:
    return (a, b) if a < b else (b, a)


def nearest_neighbor_lanes(systems: Sequence[StarSystem], k: int) -> List[Lane]:
    """Connect every system to its k nearest others, de-duplicating pairs."""
    n = len(systems)
    if n < 2 or k <= 0:
        return []
    points = np.array([(s.x, s.y) for s in systems], dtype=float)
    tree = cKDTree(points)
    # one extra slot because each point finds itself (or a coincident twin)
    query_k = min(k + 1, n)
    _, indices = tree.query(points, k=query_k)
    indices = np.asarray(indices).reshape(n, query_k)

    lanes: List[Lane] = []
    seen: set[Lane] = set()
    for i in range(n):
        picked = 0
        for j in indices[i]:
            j = int(j)
            if j == i or j >= n:
                continue
            lane = _lane(i, j)
            if lane not in seen:
                seen.add(lane)
                lanes.append(lane)
            picked += 1
            if picked >= k:
                break
    return lanes


def adjacency(n: int, lanes: Sequence[Lane]) -> List[List[int]]:
    adj: List[List[int]] = [[] for _ in range(n)]
    for a, b in lanes:
        adj[a].append(b)
        adj[b].append(a)
    return adj


def connected_components(n: int, lanes: Sequence[Lane]) -> List[List[int]]:
    """Iterative flood fill; components are discovered in ascending seed order."""
    adj = adjacency(n, lanes)
    seen = [False] * n
    components: List[List[int]] = []
    for start in range(n):
        if seen[start]:
            continue
        seen[start] = True
        stack = [start]
        comp: List[int] = []
        while stack:
            v = stack.pop()
            comp.append(v)
            for nb in adj[v]:
                if not seen[nb]:
                    seen[nb] = True
                    stack.append(nb)
        components.append(comp)
    return components


def repair_connectivity(n: int, lanes: List[Lane]) -> List[Lane]:
    """
    Bridge consecutive components through their first-discovered nodes until
    the graph is connected. Appends to `lanes` in place and returns the bridges.
    """
    components = connected_components(n, lanes)
    bridges: List[Lane] = []
    for left, right in zip(components, components[1:]):
        bridge = _lane(left[0], right[0])
        lanes.append(bridge)
        bridges.append(bridge)
    return bridges


def lane_owner(systems: Sequence[StarSystem], lane: Lane) -> Owner:
    """A lane belongs to a faction only while that faction holds both ends."""
    a, b = systems[lane[0]], systems[lane[1]]
    if a.owner != Owner.NEUTRAL and a.owner == b.owner:
        return a.owner
    return Owner.NEUTRAL
