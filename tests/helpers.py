"""Builders for small hand-made galaxies used across the test suite."""
from typing import Iterable, List, Optional, Sequence, Tuple

from conquest.helper.graph import adjacency
from conquest.models import Fleet, GalaxyState, Owner, Sector, StarSystem
from conquest.rng import XorShift32

P = Owner.PLAYER
A = Owner.AI
N = Owner.NEUTRAL


def build_state(
    points: Sequence[Tuple[float, float]],
    lanes: Iterable[Tuple[int, int]],
    owners: Optional[Sequence[Owner]] = None,
    defense: Optional[Sequence[int]] = None,
    production: Optional[Sequence[float]] = None,
    credits: float = 0.0,
    seed: int = 7,
) -> GalaxyState:
    """Helper to create a galaxy with explicit positions, lanes and owners."""
    n = len(points)
    owners = owners or [N] * n
    defense = defense or [0] * n
    production = production or [1.0] * n
    state = GalaxyState(
        width=1200.0, height=800.0, rng=XorShift32(seed), seed=seed, credits=credits
    )
    for i, (x, y) in enumerate(points):
        state.systems.append(
            StarSystem(
                id=i,
                x=x,
                y=y,
                name=f"S{i}",
                sector_id=0,
                owner=owners[i],
                production=production[i],
                defense=defense[i],
            )
        )
    state.sectors = [
        Sector(id=0, name="Testa", center=(0.0, 0.0), hue=0, system_ids=list(range(n)))
    ]
    state.lanes = [(min(a, b), max(a, b)) for a, b in lanes]
    for sys, neighbors in zip(state.systems, adjacency(n, state.lanes)):
        sys.neighbors = neighbors
    return state


def line_state(owners: List[Owner], spacing: float = 100.0, **kwargs) -> GalaxyState:
    """Systems on a horizontal line, each lane joining consecutive systems."""
    points = [(100.0 + i * spacing, 400.0) for i in range(len(owners))]
    lanes = [(i, i + 1) for i in range(len(owners) - 1)]
    return build_state(points, lanes, owners=owners, **kwargs)


def station(
    state: GalaxyState, system_id: int, owner: Owner, size: int, speed: float = 50.0
) -> Fleet:
    fid = state.next_fleet_id
    state.next_fleet_id += 1
    fleet = Fleet(id=fid, owner=owner, size=size, speed=speed, at_system=system_id)
    state.fleets[fid] = fleet
    state.systems[system_id].stationed.append(fid)
    return fleet


def assert_fleet_invariants(state: GalaxyState) -> None:
    for fid, fl in state.fleets.items():
        assert fl.size > 0, f"fleet {fid} kept at size 0"
        assert (fl.at_system is None) == bool(fl.route), f"fleet {fid} stationed and moving"
        if fl.at_system is not None:
            assert fid in state.systems[fl.at_system].stationed
    for sys in state.systems:
        assert len(set(sys.stationed)) == len(sys.stationed)
        for fid in sys.stationed:
            assert fid in state.fleets
            assert state.fleets[fid].at_system == sys.id
            assert state.fleets[fid].owner == sys.owner
