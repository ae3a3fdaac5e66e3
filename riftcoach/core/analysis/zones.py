"""Map zone classification for Summoner's Rift coordinates.

The classifier is an ordered rule list evaluated first-match-wins. Several
coarse regions overlap (the river box reaches into both jungles, the lane
half-planes cover the spawn corners), so rule order is the tie-break and
must not be reshuffled.
"""

from collections.abc import Callable
from typing import NamedTuple

import numpy as np

from riftcoach.contracts.analysis import MapZone, ZoneSafety
from riftcoach.contracts.common import Position, Team
from riftcoach.core.data.summoners_rift import MAP_SIZE, TOWER_COORDINATES

_SafetyFn = Callable[[Team], ZoneSafety]


class ZoneReading(NamedTuple):
    zone: MapZone
    safety: ZoneSafety


class ZoneRule(NamedTuple):
    name: str
    predicate: Callable[[int, int], bool]
    zone: MapZone
    safety: _SafetyFn


def _always(safety: ZoneSafety) -> _SafetyFn:
    return lambda team: safety


def _home(side: Team) -> _SafetyFn:
    return lambda team: ZoneSafety.SAFE if team == side else ZoneSafety.DANGER


def _in_river_box(x: int, y: int) -> bool:
    return 4000 < x < 11000 and 4000 < y < 11000


def _in_river_band(x: int, y: int) -> bool:
    return _in_river_box(x, y) and abs(x - (MAP_SIZE - y)) < 3000


def _in_blue_spawn(x: int, y: int) -> bool:
    return x < 3000 and y < 3000


def _in_red_spawn(x: int, y: int) -> bool:
    return x > 12000 and y > 12000


# Pit rules test the river box corners, not the diagonal band: no band point
# satisfies the corner bounds. (5000, 5000) reads as dragon pit, the dragon
# pit coordinate itself as river bot.
ZONE_RULES: tuple[ZoneRule, ...] = (
    ZoneRule(
        "dragon_pit",
        lambda x, y: _in_river_box(x, y) and x < 6000 and y < 6000,
        MapZone.DRAGON_PIT,
        _always(ZoneSafety.DANGER),
    ),
    ZoneRule(
        "baron_pit",
        lambda x, y: _in_river_box(x, y) and x > 9000 and y > 9000,
        MapZone.BARON_PIT,
        _always(ZoneSafety.DANGER),
    ),
    ZoneRule(
        "river_bot",
        lambda x, y: _in_river_band(x, y) and y < 7500,
        MapZone.RIVER_BOT,
        _always(ZoneSafety.NEUTRAL),
    ),
    ZoneRule("river_top", _in_river_band, MapZone.RIVER_TOP, _always(ZoneSafety.NEUTRAL)),
    ZoneRule(
        "blue_jungle",
        lambda x, y: x < 7000 and y < 7000 and not _in_blue_spawn(x, y),
        MapZone.BLUE_JUNGLE,
        _home(Team.BLUE),
    ),
    ZoneRule(
        "red_jungle",
        lambda x, y: x > 8000 and y > 8000 and not _in_red_spawn(x, y),
        MapZone.RED_JUNGLE,
        _home(Team.RED),
    ),
    ZoneRule("mid_lane", lambda x, y: abs(x - y) < 2000, MapZone.MID_LANE, _always(ZoneSafety.NEUTRAL)),
    ZoneRule("top_lane", lambda x, y: y > x + 2000, MapZone.TOP_LANE, _always(ZoneSafety.NEUTRAL)),
    ZoneRule("bot_lane", lambda x, y: x > y + 2000, MapZone.BOT_LANE, _always(ZoneSafety.NEUTRAL)),
    ZoneRule("blue_base", _in_blue_spawn, MapZone.BLUE_BASE, _home(Team.BLUE)),
    ZoneRule("red_base", _in_red_spawn, MapZone.RED_BASE, _home(Team.RED)),
)

FALLBACK_ZONE = ZoneReading(MapZone.MID_LANE, ZoneSafety.NEUTRAL)


def classify_zone(position: Position, team: Team) -> ZoneReading:
    """Return the zone and its safety for a player of ``team``."""
    for rule in ZONE_RULES:
        if rule.predicate(position.x, position.y):
            return ZoneReading(rule.zone, rule.safety(team))
    return FALLBACK_ZONE


def distance(a: Position, b: Position) -> float:
    return float(np.hypot(b.x - a.x, b.y - a.y))


def is_under_enemy_tower(position: Position, team: Team, radius: float) -> bool:
    """True when ``position`` is within ``radius`` of any enemy reference tower."""
    towers = TOWER_COORDINATES[team.enemy]
    gaps = np.hypot(towers[:, 0] - position.x, towers[:, 1] - position.y)
    return bool(np.any(gaps < radius))
