#!/usr/bin/env python3
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List

from conquest.models import SIM_CONFIG
from conquest.models import GalaxyState, Fleet, StarSystem
from conquest.helper.world_helpers import log_event, faction_label

logger = logging.getLogger(__name__)

SURVIVOR_LOSS_FACTOR = SIM_CONFIG.battle_modifiers.survivor_loss_factor
DEFENSE_DEPLETION_FACTOR = SIM_CONFIG.battle_modifiers.defense_depletion_factor
DEFENDER_FLEET_LOSS_FACTOR = SIM_CONFIG.battle_modifiers.defender_fleet_loss_factor


@dataclass
class BattleResult:
    attacker_wins: bool
    attacker_power: int
    defender_power: int
    survivors: int  # attacker strength left (0 when repelled)
    defense_after: int
    defender_loss: int  # strength knocked off each defending fleet when repelled


def battle_outcome(attacker_power: int, defense: int, fleet_power: int) -> BattleResult:
    """
    Pure combat arithmetic. `defense` is the system's baseline and
    `fleet_power` the summed size of every fleet stationed there.
    """
    defender_power = defense + fleet_power
    if attacker_power > defender_power:
        survivors = max(1, math.floor(attacker_power - defender_power * SURVIVOR_LOSS_FACTOR))
        return BattleResult(
            attacker_wins=True,
            attacker_power=attacker_power,
            defender_power=defender_power,
            survivors=survivors,
            defense_after=defense,
            defender_loss=0,
        )

    if attacker_power >= defense:
        defense_after = 0
    else:
        defense_after = max(0, defense - math.floor(attacker_power * DEFENSE_DEPLETION_FACTOR))
    return BattleResult(
        attacker_wins=False,
        attacker_power=attacker_power,
        defender_power=defender_power,
        survivors=0,
        defense_after=defense_after,
        defender_loss=math.floor(attacker_power * DEFENDER_FLEET_LOSS_FACTOR),
    )


def resolve_arrival(state: GalaxyState, fleet: Fleet, system: StarSystem) -> None:
    """
    Settle a fleet landing on `system`: station it when friendly, otherwise
    fight the garrison plus every stationed fleet. Destroyed fleets are left
    at size 0 in state.fleets for the end-of-tick purge, but are dropped
    from the system's stationed list here.
    """
    who = faction_label(fleet.owner)
    if system.owner == fleet.owner:
        fleet.at_system = system.id
        if fleet.id not in system.stationed:
            system.stationed.append(fleet.id)
        log_event(state, "arrival", f"{who} fleet arrived at {system.name}")
        return

    log_event(state, "attack", f"{who} fleet attacks {system.name}")
    defenders: List[Fleet] = [
        state.fleets[fid] for fid in system.stationed if fid in state.fleets
    ]
    result = battle_outcome(
        fleet.size, system.defense, sum(df.size for df in defenders)
    )

    if result.attacker_wins:
        for df in defenders:
            df.size = 0
            df.at_system = None
        previous_owner = system.owner
        system.owner = fleet.owner
        system.stationed = [fleet.id]
        fleet.size = result.survivors
        fleet.at_system = system.id
        logger.info(
            "%s took %s from %s (%d vs %d, survivors %d)",
            who,
            system.name,
            faction_label(previous_owner),
            result.attacker_power,
            result.defender_power,
            result.survivors,
        )
        log_event(
            state,
            "capture",
            f"{who} captured {system.name} (survivors: {result.survivors})",
        )
        return

    system.defense = result.defense_after
    fleet.size = 0
    fleet.at_system = None
    for df in defenders:
        df.size = max(0, df.size - result.defender_loss)
        if df.size == 0:
            df.at_system = None
    system.stationed = [
        fid for fid in system.stationed if fid in state.fleets and state.fleets[fid].size > 0
    ]
    logger.info(
        "%s assault on %s repelled (%d vs %d)",
        who,
        system.name,
        result.attacker_power,
        result.defender_power,
    )
    log_event(state, "repelled", f"{who} fleet destroyed attacking {system.name}")
