#!/usr/bin/env python3
"""
Helpers for building read-only snapshots of a session for renderers.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from conquest.models import GalaxyState
from conquest.helper.graph import lane_owner
from conquest.helper.world_helpers import faction_label, income_per_second
from conquest.movement import fleet_position

FACTION_COLORS: Dict[str, str] = {
    "player": "#4DA6FF",
    "ai": "#FF6666",
    "neutral": "#9aa6b2",
}


def selection_summary(state: GalaxyState) -> Optional[Dict[str, Any]]:
    """Details of the selected system, or None when nothing is selected."""
    sid = state.selected_system_id
    if sid is None:
        return None
    sys = state.systems[sid]
    return {
        "id": sys.id,
        "name": sys.name,
        "sector": state.sectors[sys.sector_id].name,
        "owner": faction_label(sys.owner),
        "production": round(sys.production, 2),
        "stationed": len(sys.stationed),
        "defense": sys.defense,
    }


def events_tail(state: GalaxyState, count: int = 50) -> List[Dict[str, Any]]:
    if count <= 0:
        return []
    return [
        {"time": ev.time, "kind": ev.kind, "text": ev.text}
        for ev in state.events[-count:]
    ]


def snapshot_from_state(state: GalaxyState, event_count: int = 50) -> dict:
    """
    Generate a snapshot payload suitable for API consumers. Lane owners are
    derived here from current endpoint owners, never stored.
    """
    systems_payload = []
    for sys in state.systems:
        systems_payload.append(
            {
                "id": sys.id,
                "name": sys.name,
                "x": sys.x,
                "y": sys.y,
                "sector_id": sys.sector_id,
                "owner": sys.owner.value,
                "production": sys.production,
                "defense": sys.defense,
                "stationed": list(sys.stationed),
                "stationed_count": len(sys.stationed),
            }
        )

    lanes_payload = [
        {"a": a, "b": b, "owner": lane_owner(state.systems, (a, b)).value}
        for (a, b) in state.lanes
    ]

    sectors_payload = [
        {
            "id": sector.id,
            "name": sector.name,
            "center": list(sector.center),
            "hue": sector.hue,
            "hull": [list(p) for p in sector.hull],
            "drawable": len(sector.hull) >= 3,
        }
        for sector in state.sectors
    ]

    fleets_payload = []
    for fl in state.fleets.values():
        x, y = fleet_position(state, fl)
        fleets_payload.append(
            {
                "id": fl.id,
                "owner": fl.owner.value,
                "size": fl.size,
                "speed": fl.speed,
                "at_system": fl.at_system,
                "route": list(fl.route),
                "route_index": fl.route_index,
                "progress": fl.progress,
                "in_transit": fl.in_transit,
                "x": x,
                "y": y,
            }
        )

    return {
        "seed": state.seed,
        "width": state.width,
        "height": state.height,
        "time": state.time,
        "credits": state.credits,
        "income": income_per_second(state),
        "paused": state.paused,
        "speed": state.speed,
        "outcome": state.outcome.value if state.outcome else None,
        "outcome_text": state.outcome_text,
        "selected_system_id": state.selected_system_id,
        "selected_fleet_id": state.selected_fleet_id,
        "selection": selection_summary(state),
        "systems": systems_payload,
        "lanes": lanes_payload,
        "sectors": sectors_payload,
        "fleets": fleets_payload,
        "factions": [
            {"id": fid, "color": color} for fid, color in FACTION_COLORS.items()
        ],
        "events": events_tail(state, event_count),
    }
