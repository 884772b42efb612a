#!/usr/bin/env python3
from __future__ import annotations

import logging
from typing import Optional

from conquest.models import SIM_CONFIG
from conquest.models import GalaxyState, Outcome, Owner
from conquest.helper.world_helpers import income_per_second, log_event
from conquest.movement import update_fleets
from conquest.puppet import maybe_run_ai

logger = logging.getLogger(__name__)

CONTROL_RATIO: float = SIM_CONFIG.victory_modifiers.control_ratio


# ---------- Economy ----------


def accrue_income(state: GalaxyState, dt: float) -> float:
    """Credit the human faction with its production over dt; returns the gain."""
    gained = income_per_second(state, Owner.PLAYER) * dt
    state.credits += gained
    return gained


# ---------- Outcome ----------


def end_game(state: GalaxyState, outcome: Outcome, text: str) -> None:
    state.outcome = outcome
    state.outcome_text = text
    state.paused = True
    logger.info("game over: %s (%s)", outcome.value, text)
    log_event(state, outcome.value, text)


def check_win_condition(state: GalaxyState) -> Optional[Outcome]:
    if state.outcome is not None:
        return state.outcome
    total = len(state.systems)
    if total == 0:
        return None
    player_count = sum(1 for s in state.systems if s.owner == Owner.PLAYER)
    ai_count = sum(1 for s in state.systems if s.owner == Owner.AI)
    if player_count / total >= CONTROL_RATIO or ai_count == 0:
        end_game(
            state,
            Outcome.VICTORY,
            f"You control {player_count}/{total} systems. Victory!",
        )
    elif ai_count / total >= CONTROL_RATIO or player_count == 0:
        end_game(
            state,
            Outcome.DEFEAT,
            f"AI controls {ai_count}/{total} systems. Defeat.",
        )
    return state.outcome


# ---------- Simulation step ----------


def advance_world(state: GalaxyState, elapsed: float) -> Optional[Outcome]:
    """
    Advance the session by one host frame of `elapsed` real seconds.
    The frame is scaled by the speed multiplier; nothing changes while paused
    or after the match has ended.
    """
    if state.paused or state.is_over or elapsed <= 0:
        return state.outcome
    dt = elapsed * state.speed
    state.time += dt
    accrue_income(state, dt)
    update_fleets(state, dt)
    maybe_run_ai(state, dt)
    return check_win_condition(state)
