#!/usr/bin/env python3
"""
Computer faction policy: one greedy step every few simulated seconds.

Pick a random owned system, maybe build there, then send a fleet at the
nearest foreign system it can reach through its own territory.
"""
from __future__ import annotations

import logging
from typing import Optional

from conquest.models import SIM_CONFIG
from conquest.models import GalaxyState, Fleet, Owner
from conquest.helper.geometry import distance
from conquest.helper.world_helpers import owned_systems, spawn_fleet
from conquest.movement import dispatch_fleet
from conquest.pathing import find_route

logger = logging.getLogger(__name__)

AI_FACTION = Owner.AI
TURN_INTERVAL: float = SIM_CONFIG.ai_modifiers.turn_interval
BUILD_CHANCE: float = SIM_CONFIG.ai_modifiers.build_chance
BUILD_STRENGTH = SIM_CONFIG.ai_modifiers.build_strength
REINFORCEMENT_STRENGTH: int = SIM_CONFIG.ai_modifiers.reinforcement_strength


def ai_turn(state: GalaxyState, faction: Owner = AI_FACTION) -> Optional[Fleet]:
    """Run one AI decision. Returns the dispatched fleet, if any."""
    own = owned_systems(state, faction)
    if not own:
        return None
    source = own[state.rng.index(len(own))]

    if state.rng.random() < BUILD_CHANCE:
        spawn_fleet(state, source.id, faction, state.rng.randint(*BUILD_STRENGTH))

    candidates = [s for s in state.systems if s.owner != faction]
    if not candidates:
        return None
    candidates.sort(key=lambda t: distance(source, t))

    for target in candidates:
        route = find_route(state, source.id, target.id, faction)
        if not route:
            continue
        fleet = next(
            (
                state.fleets[fid]
                for fid in source.stationed
                if fid in state.fleets and state.fleets[fid].owner == faction
            ),
            None,
        )
        if fleet is None:
            # the computer faction has no purse; reinforcements are free
            fleet = spawn_fleet(state, source.id, faction, REINFORCEMENT_STRENGTH)
        dispatch_fleet(state, fleet, route)
        logger.debug(
            "AI sends fleet %d (size %d) %s -> %s in %d hops",
            fleet.id,
            fleet.size,
            source.name,
            target.name,
            len(route) - 1,
        )
        return fleet
    return None


def maybe_run_ai(state: GalaxyState, dt: float) -> Optional[Fleet]:
    """Accumulate unpaused time and take an AI turn once per interval."""
    state.ai_timer += dt
    if state.ai_timer < TURN_INTERVAL:
        return None
    state.ai_timer = 0.0
    return ai_turn(state)
