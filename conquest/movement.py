#!/usr/bin/env python3
from __future__ import annotations

import logging
from typing import List

from conquest.models import GalaxyState, Fleet
from conquest.combat import resolve_arrival
from conquest.helper.geometry import distance

logger = logging.getLogger(__name__)


def _leave_system(state: GalaxyState, fleet: Fleet) -> None:
    if fleet.at_system is None:
        return
    stationed = state.systems[fleet.at_system].stationed
    if fleet.id in stationed:
        stationed.remove(fleet.id)
    fleet.at_system = None


def _clear_route(fleet: Fleet) -> None:
    fleet.route = []
    fleet.route_index = 0
    fleet.progress = 0.0


def dispatch_fleet(state: GalaxyState, fleet: Fleet, route: List[int]) -> None:
    """Put a stationed fleet in transit along `route` (origin first)."""
    _leave_system(state, fleet)
    fleet.route = list(route)
    fleet.route_index = 0
    fleet.progress = 0.0


def fleet_position(state: GalaxyState, fleet: Fleet) -> tuple[float, float]:
    """Interpolated map position, for renderers."""
    if not fleet.route:
        if fleet.at_system is None:
            return (0.0, 0.0)
        sys = state.systems[fleet.at_system]
        return (sys.x, sys.y)
    a = state.systems[fleet.route[fleet.route_index]]
    b = state.systems[fleet.route[min(fleet.route_index + 1, len(fleet.route) - 1)]]
    t = fleet.progress
    return (a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def advance_fleet(state: GalaxyState, fleet: Fleet, dt: float) -> None:
    """
    Move an in-transit fleet along its current segment by speed * dt.

    Reaching a node resets progress (overshoot is dropped). Friendly waypoints
    are flown through; any other node, and always the final one, goes through
    arrival resolution, which either stations the fleet or destroys it.
    """
    if not fleet.route or fleet.size <= 0:
        return
    if len(fleet.route) < 2 or fleet.route_index >= len(fleet.route) - 1:
        _clear_route(fleet)
        return
    _leave_system(state, fleet)

    origin = state.systems[fleet.route[fleet.route_index]]
    target = state.systems[fleet.route[fleet.route_index + 1]]
    segment = distance(origin, target)
    if segment > 0:
        fleet.progress += (fleet.speed * dt) / segment
    else:
        fleet.progress = 1.0
    if fleet.progress < 1.0:
        return

    fleet.route_index += 1
    fleet.progress = 0.0
    final = fleet.route_index >= len(fleet.route) - 1

    if final or target.owner != fleet.owner:
        resolve_arrival(state, fleet, target)
        if final or fleet.size <= 0:
            _clear_route(fleet)
        else:
            # took a waypoint that changed hands mid-flight; keep flying
            _leave_system(state, fleet)
            logger.debug("fleet %d took waypoint %s en route", fleet.id, target.name)


def purge_destroyed(state: GalaxyState) -> List[int]:
    """Drop size-0 fleets from the fleet map and every stationed list."""
    dead = [fid for fid, fl in state.fleets.items() if fl.size <= 0]
    if not dead:
        return dead
    dead_ids = set(dead)
    state.fleets = {fid: fl for fid, fl in state.fleets.items() if fid not in dead_ids}
    for sys in state.systems:
        if any(fid in dead_ids for fid in sys.stationed):
            sys.stationed = [fid for fid in sys.stationed if fid not in dead_ids]
    return dead


def update_fleets(state: GalaxyState, dt: float) -> None:
    # iterate a snapshot: arrivals mutate fleet sizes and stationed lists
    for fleet in list(state.fleets.values()):
        if fleet.route:
            advance_fleet(state, fleet, dt)
    purge_destroyed(state)
