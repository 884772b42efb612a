#!/usr/bin/env python3
from __future__ import annotations

import logging
import math
from typing import List, Optional

from conquest.models import SIM_CONFIG
from conquest.models import GalaxyState, StarSystem, Sector, Fleet, GameEvent, Owner
from conquest.rng import XorShift32, normalize_seed, fresh_seed

from .geometry import clamp, convex_hull, distance
from .graph import nearest_neighbor_lanes, repair_connectivity, adjacency
from .names import random_name

logger = logging.getLogger(__name__)

# simulation config variable mapping
_GEN = SIM_CONFIG.generation_modifiers
SECTOR_COUNT = _GEN.sector_count
SYSTEMS_PER_SECTOR = _GEN.systems_per_sector
SECTOR_MARGIN_X: float = _GEN.sector_margin_x
SECTOR_MARGIN_Y: float = _GEN.sector_margin_y
SYSTEM_MARGIN: float = _GEN.system_margin
SYSTEM_RADIUS = _GEN.system_radius
JITTER_X: float = _GEN.jitter_x
JITTER_Y: float = _GEN.jitter_y
PRODUCTION_RANGE = _GEN.production
DEFENSE_RANGE = _GEN.defense
LANES_PER_SYSTEM: int = _GEN.lanes_per_system
# home-system production bonuses
PLAYER_HOME_BONUS: float = _GEN.player_home_bonus
AI_HOME_BONUS: float = _GEN.ai_home_bonus
# starting territory around each home
CLAIM_RADIUS: float = _GEN.claim_radius
CLAIM_CHANCE: float = _GEN.claim_chance
NEUTRAL_BONUS_CHANCE: float = _GEN.neutral_bonus_chance
NEUTRAL_BONUS_DEFENSE = _GEN.neutral_bonus_defense
STARTING_FLEET_SIZE = _GEN.starting_fleet_size
FLEET_SPEED = _GEN.fleet_speed

STARTING_CREDITS: float = SIM_CONFIG.economy_modifiers.starting_credits
EVENT_LOG_LIMIT: int = SIM_CONFIG.session_modifiers.event_log_limit


# ---------- Event log ----------


def log_event(state: GalaxyState, kind: str, text: str) -> GameEvent:
    """Append to the session message log, dropping the oldest past the cap."""
    event = GameEvent(time=state.time, kind=kind, text=text)
    state.events.append(event)
    if len(state.events) > EVENT_LOG_LIMIT:
        del state.events[: len(state.events) - EVENT_LOG_LIMIT]
    logger.debug("t=%.2f [%s] %s", state.time, kind, text)
    return event


def faction_label(owner: Owner) -> str:
    if owner == Owner.PLAYER:
        return "Player"
    if owner == Owner.AI:
        return "AI"
    return "Neutral"


# ---------- Fleets ----------


def spawn_fleet(state: GalaxyState, system_id: int, owner: Owner, size: int) -> Fleet:
    fid = state.next_fleet_id
    state.next_fleet_id += 1
    fleet = Fleet(
        id=fid,
        owner=owner,
        size=size,
        speed=state.rng.uniform(*FLEET_SPEED),
        at_system=system_id,
    )
    state.fleets[fid] = fleet
    state.systems[system_id].stationed.append(fid)
    return fleet


def owned_systems(state: GalaxyState, owner: Owner) -> List[StarSystem]:
    return [s for s in state.systems if s.owner == owner]


def income_per_second(state: GalaxyState, owner: Owner = Owner.PLAYER) -> float:
    return sum(s.production for s in state.systems if s.owner == owner)


# ---------- Galaxy generation ----------


def _check_bounds(width: float, height: float) -> None:
    if width <= 2 * SECTOR_MARGIN_X or height <= 2 * SECTOR_MARGIN_Y:
        raise ValueError(
            f"galaxy bounds {width}x{height} leave no room inside the "
            f"{SECTOR_MARGIN_X}x{SECTOR_MARGIN_Y} sector margins"
        )


def generate_into(state: GalaxyState, seed: Optional[object] = None) -> GalaxyState:
    """
    (Re)build the galaxy inside an existing session object.
    Everything except the message log is reset; the same seed and bounds
    always produce the same systems, lanes, sectors, owners and fleets.
    """
    _check_bounds(state.width, state.height)
    effective_seed = normalize_seed(seed)
    if effective_seed is None:
        effective_seed = fresh_seed()
    rng = XorShift32(effective_seed)

    state.seed = effective_seed
    state.rng = rng
    state.systems = []
    state.lanes = []
    state.sectors = []
    state.fleets = {}
    state.next_fleet_id = 1
    state.credits = STARTING_CREDITS
    state.time = 0.0
    state.paused = False
    state.speed = 1
    state.ai_timer = 0.0
    state.outcome = None
    state.outcome_text = None
    state.selected_system_id = None
    state.selected_fleet_id = None

    width, height = state.width, state.height
    systems = state.systems

    # Sectors and the systems scattered around their centers
    for sector_id in range(rng.randint(*SECTOR_COUNT)):
        center = (
            rng.uniform(SECTOR_MARGIN_X, width - SECTOR_MARGIN_X),
            rng.uniform(SECTOR_MARGIN_Y, height - SECTOR_MARGIN_Y),
        )
        sector = Sector(
            id=sector_id,
            center=center,
            hue=rng.index(360),
            name=random_name(rng, rng.randint(1, 2)),
        )
        for _ in range(rng.randint(*SYSTEMS_PER_SECTOR)):
            angle = rng.uniform(0.0, 2 * math.pi)
            radius = rng.uniform(*SYSTEM_RADIUS)
            x = center[0] + math.cos(angle) * radius + rng.uniform(-JITTER_X, JITTER_X)
            y = center[1] + math.sin(angle) * radius + rng.uniform(-JITTER_Y, JITTER_Y)
            system = StarSystem(
                id=len(systems),
                x=clamp(x, SYSTEM_MARGIN, width - SYSTEM_MARGIN),
                y=clamp(y, SYSTEM_MARGIN, height - SYSTEM_MARGIN),
                name=random_name(rng, rng.randint(1, 2)),
                sector_id=sector_id,
                production=rng.uniform(*PRODUCTION_RANGE),
                defense=rng.randint(*DEFENSE_RANGE),
            )
            systems.append(system)
            sector.system_ids.append(system.id)
        state.sectors.append(sector)

    for sector in state.sectors:
        sector.hull = convex_hull([(systems[i].x, systems[i].y) for i in sector.system_ids])

    # Starlanes: k nearest neighbours, then bridge any stranded components
    lanes = nearest_neighbor_lanes(systems, LANES_PER_SYSTEM)
    bridges = repair_connectivity(len(systems), lanes)
    if bridges:
        logger.debug("bridged %d disconnected components", len(bridges))
    state.lanes = lanes
    for sys, neighbors in zip(systems, adjacency(len(systems), lanes)):
        sys.neighbors = neighbors

    # Home systems for both factions
    available = list(systems)
    player_home = available.pop(rng.index(len(available)))
    player_home.owner = Owner.PLAYER
    player_home.production += PLAYER_HOME_BONUS
    ai_home = available.pop(rng.index(len(available)))
    ai_home.owner = Owner.AI
    ai_home.production += AI_HOME_BONUS

    # Nearby territory; both checks run, so the AI claim wins an overlap
    for sys in systems:
        if sys is player_home or sys is ai_home:
            continue
        if distance(sys, player_home) < CLAIM_RADIUS and rng.random() < CLAIM_CHANCE:
            sys.owner = Owner.PLAYER
        if distance(sys, ai_home) < CLAIM_RADIUS and rng.random() < CLAIM_CHANCE:
            sys.owner = Owner.AI

    for sys in systems:
        if sys.owner == Owner.NEUTRAL and rng.random() < NEUTRAL_BONUS_CHANCE:
            sys.defense += rng.randint(*NEUTRAL_BONUS_DEFENSE)

    spawn_fleet(state, player_home.id, Owner.PLAYER, rng.randint(*STARTING_FLEET_SIZE))
    spawn_fleet(state, ai_home.id, Owner.AI, rng.randint(*STARTING_FLEET_SIZE))

    logger.info(
        "generated galaxy seed=%d sectors=%d systems=%d lanes=%d",
        effective_seed,
        len(state.sectors),
        len(systems),
        len(lanes),
    )
    log_event(state, "generated", f"New galaxy generated. Seed: {effective_seed}")
    return state


def create_galaxy(
    seed: Optional[object] = None, width: float = 1200.0, height: float = 800.0
) -> GalaxyState:
    """
    Generate a new galaxy. When a seed is provided the layout is deterministic;
    otherwise one is drawn from system entropy and recorded on the state.
    """
    state = GalaxyState(width=width, height=height, rng=XorShift32(1))
    return generate_into(state, seed)
