from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Tuple

from conquest.rng import XorShift32


class Owner(str, Enum):
    NEUTRAL = "neutral"
    PLAYER = "player"  # human-controlled faction
    AI = "ai"  # computer-controlled faction


class Outcome(str, Enum):
    VICTORY = "victory"
    DEFEAT = "defeat"


class SizeClass(str, Enum):
    SMALL = "small"
    LARGE = "large"


Point = Tuple[float, float]


@dataclass
class StarSystem:
    id: int
    x: float
    y: float
    name: str
    sector_id: int
    owner: Owner = Owner.NEUTRAL
    production: float = 0.0  # credits per second
    defense: int = 0  # baseline garrison, >= 0
    stationed: List[int] = field(default_factory=list)  # fleet ids at rest here
    neighbors: List[int] = field(default_factory=list)


@dataclass
class Sector:
    id: int
    name: str
    center: Point
    hue: int  # decorative only
    system_ids: List[int] = field(default_factory=list)
    hull: List[Point] = field(default_factory=list)


@dataclass
class Fleet:
    id: int
    owner: Owner
    size: int
    speed: float  # distance per second
    at_system: Optional[int] = None  # None while in transit
    route: List[int] = field(default_factory=list)  # origin .. destination
    route_index: int = 0  # current segment is route[i] -> route[i + 1]
    progress: float = 0.0  # [0, 1) along the current segment

    @property
    def in_transit(self) -> bool:
        return bool(self.route)


@dataclass
class GameEvent:
    time: float  # elapsed simulation seconds
    kind: str  # "generated", "arrival", "capture", "repelled", "rejected", ...
    text: str


@dataclass
class GalaxyState:
    width: float
    height: float
    rng: XorShift32
    seed: int = 0
    systems: List[StarSystem] = field(default_factory=list)
    lanes: List[Tuple[int, int]] = field(default_factory=list)
    sectors: List[Sector] = field(default_factory=list)
    fleets: Dict[int, Fleet] = field(default_factory=dict)
    next_fleet_id: int = 1
    credits: float = 0.0
    time: float = 0.0
    paused: bool = False
    speed: int = 1
    ai_timer: float = 0.0
    outcome: Optional[Outcome] = None
    outcome_text: Optional[str] = None
    selected_system_id: Optional[int] = None
    selected_fleet_id: Optional[int] = None
    events: List[GameEvent] = field(default_factory=list)

    @property
    def is_over(self) -> bool:
        return self.outcome is not None


@dataclass
class CommandResult:
    """Outcome of a user command; rejections are data, not exceptions."""

    ok: bool
    message: str
    fleet_id: Optional[int] = None
