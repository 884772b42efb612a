#!/usr/bin/env python3
from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional

from conquest.models import GalaxyState, Owner


def find_route(
    state: GalaxyState, origin_id: int, destination_id: int, faction: Owner
) -> Optional[List[int]]:
    """
    Shortest hop route from origin to destination (both included) for `faction`.

    Every hop must run between two systems the faction holds, except the hop
    that lands on the destination, which may enter neutral or enemy space.
    Returns None when no such route exists.
    """
    n = len(state.systems)
    if not (0 <= origin_id < n and 0 <= destination_id < n):
        return None
    if origin_id == destination_id:
        return [origin_id]

    systems = state.systems
    queue = deque([origin_id])
    prev: Dict[int, int] = {}
    visited = {origin_id}
    while queue:
        current = queue.popleft()
        if current == destination_id:
            break
        controlled_from = systems[current].owner == faction
        for neigh in systems[current].neighbors:
            if neigh in visited:
                continue
            controlled = controlled_from and systems[neigh].owner == faction
            if controlled or neigh == destination_id:
                visited.add(neigh)
                prev[neigh] = current
                queue.append(neigh)

    if destination_id not in visited:
        return None
    path = [destination_id]
    while path[-1] != origin_id:
        path.append(prev[path[-1]])
    return list(reversed(path))


def is_controlled_prefix(state: GalaxyState, route: List[int], faction: Owner) -> bool:
    """True when every hop except the last stays inside `faction` territory."""
    for a, b in zip(route[:-2], route[1:-1]):
        if state.systems[a].owner != faction or state.systems[b].owner != faction:
            return False
    return True
