#!/usr/bin/env python3
"""
User commands against a live session.

Every command returns a CommandResult. Refusals (unknown ids, foreign
systems, missing credits, no route) are recorded in the message log and
leave the session untouched.
"""
from __future__ import annotations

import logging
from typing import Optional

from conquest.models import SIM_CONFIG
from conquest.models import CommandResult, GalaxyState, Outcome, Owner, SizeClass
from conquest.helper.world_helpers import generate_into, log_event, spawn_fleet
from conquest.movement import dispatch_fleet
from conquest.pathing import find_route
from conquest.world import end_game

logger = logging.getLogger(__name__)

PLAYER_FACTION = Owner.PLAYER
SPEED_MULTIPLIERS = list(SIM_CONFIG.session_modifiers.speed_multipliers)

_ECON = SIM_CONFIG.economy_modifiers
FLEET_CLASSES = {
    SizeClass.SMALL: (_ECON.small_fleet_cost, _ECON.small_fleet_strength),
    SizeClass.LARGE: (_ECON.large_fleet_cost, _ECON.large_fleet_strength),
}


def _reject(state: GalaxyState, message: str) -> CommandResult:
    logger.debug("command rejected: %s", message)
    log_event(state, "rejected", message)
    return CommandResult(ok=False, message=message)


def _accept(state: GalaxyState, kind: str, message: str, fleet_id: Optional[int] = None) -> CommandResult:
    log_event(state, kind, message)
    return CommandResult(ok=True, message=message, fleet_id=fleet_id)


def _valid_system(state: GalaxyState, system_id: Optional[int]) -> bool:
    return system_id is not None and 0 <= system_id < len(state.systems)


# ---------- Selection ----------


def select_system(state: GalaxyState, system_id: Optional[int]) -> CommandResult:
    """Select a system, or clear the selection with None."""
    if system_id is None:
        state.selected_system_id = None
        state.selected_fleet_id = None
        return CommandResult(ok=True, message="Selection cleared")
    if not _valid_system(state, system_id):
        return _reject(state, f"Unknown system {system_id}")
    state.selected_system_id = system_id
    state.selected_fleet_id = None
    return CommandResult(ok=True, message=f"Selected {state.systems[system_id].name}")


def select_fleet(state: GalaxyState, fleet_id: int) -> CommandResult:
    fleet = state.fleets.get(fleet_id)
    if fleet is None or fleet.owner != PLAYER_FACTION:
        return _reject(state, f"Unknown fleet {fleet_id}")
    state.selected_fleet_id = fleet_id
    return CommandResult(ok=True, message=f"Selected fleet {fleet_id}", fleet_id=fleet_id)


# ---------- Orders ----------


def issue_move(state: GalaxyState, fleet_id: int, destination_id: int) -> CommandResult:
    if state.is_over:
        return _reject(state, "The match is over; start a new game")
    fleet = state.fleets.get(fleet_id)
    if fleet is None or fleet.owner != PLAYER_FACTION:
        return _reject(state, f"Unknown fleet {fleet_id}")
    if not _valid_system(state, destination_id):
        return _reject(state, f"Unknown system {destination_id}")
    if fleet.at_system is None or fleet.route:
        return _reject(state, f"Fleet {fleet_id} is already in transit")
    if fleet.at_system == destination_id:
        return _reject(state, f"Fleet {fleet_id} is already at {state.systems[destination_id].name}")

    route = find_route(state, fleet.at_system, destination_id, PLAYER_FACTION)
    if not route:
        return _reject(
            state,
            "No controlled route to destination (you need connected controlled "
            "starlanes up to adjacent node).",
        )
    dispatch_fleet(state, fleet, route)
    if state.selected_fleet_id == fleet_id:
        state.selected_fleet_id = None
    return _accept(
        state,
        "order",
        f"Fleet {fleet.id} ordered to {state.systems[destination_id].name}",
        fleet_id=fleet.id,
    )


def build_fleet(
    state: GalaxyState, system_id: Optional[int], size_class: SizeClass | str
) -> CommandResult:
    """Buy a fleet at a player system; None builds at the selected system."""
    if state.is_over:
        return _reject(state, "The match is over; start a new game")
    if system_id is None:
        system_id = state.selected_system_id
        if system_id is None:
            return _reject(state, "No selected system")
    if not _valid_system(state, system_id):
        return _reject(state, f"Unknown system {system_id}")
    try:
        size_class = SizeClass(size_class)
    except ValueError:
        return _reject(state, f"Unknown fleet class {size_class!r}")

    sys = state.systems[system_id]
    if sys.owner != PLAYER_FACTION:
        return _reject(state, "You must own the system to build fleets there")
    cost, strength = FLEET_CLASSES[size_class]
    if state.credits < cost:
        return _reject(state, "Not enough credits")

    state.credits -= cost
    fleet = spawn_fleet(state, sys.id, PLAYER_FACTION, strength)
    return _accept(
        state,
        "build",
        f"Built {size_class.value} fleet at {sys.name}",
        fleet_id=fleet.id,
    )


# ---------- Session controls ----------


def set_speed(state: GalaxyState, multiplier: int) -> CommandResult:
    if multiplier not in SPEED_MULTIPLIERS:
        return _reject(
            state,
            f"Speed must be one of {', '.join(f'x{m}' for m in SPEED_MULTIPLIERS)}",
        )
    state.speed = multiplier
    return CommandResult(ok=True, message=f"Speed x{multiplier}")


def cycle_speed(state: GalaxyState) -> CommandResult:
    """Step through the allowed multipliers, wrapping to the first."""
    try:
        idx = SPEED_MULTIPLIERS.index(state.speed)
    except ValueError:
        idx = -1
    return set_speed(state, SPEED_MULTIPLIERS[(idx + 1) % len(SPEED_MULTIPLIERS)])


def toggle_pause(state: GalaxyState) -> CommandResult:
    if state.is_over:
        return _reject(state, "The match is over; start a new game")
    state.paused = not state.paused
    return CommandResult(ok=True, message="Paused" if state.paused else "Resumed")


def surrender(state: GalaxyState) -> CommandResult:
    if state.is_over:
        return _reject(state, "The match is already over")
    end_game(state, Outcome.DEFEAT, "You surrendered.")
    return CommandResult(ok=True, message="You surrendered.")


def new_game(state: GalaxyState, seed: Optional[object] = None) -> CommandResult:
    """Regenerate the galaxy in place, keeping the message log."""
    generate_into(state, seed)
    return CommandResult(ok=True, message=f"New game started. Seed: {state.seed}")
