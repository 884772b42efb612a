from conquest.helper.world_helpers import (
    create_galaxy,
    generate_into,
    spawn_fleet,
    log_event,
    income_per_second,
)
from conquest.helper.graph import lane_owner, connected_components


__all__ = [
    "create_galaxy",
    "generate_into",
    "spawn_fleet",
    "log_event",
    "income_per_second",
    "lane_owner",
    "connected_components",
]
