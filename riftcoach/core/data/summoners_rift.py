"""Fixed Summoner's Rift coordinates (map units, origin at the blue corner)."""

from types import MappingProxyType

import numpy as np

from riftcoach.contracts.common import Position, Team

MAP_SIZE = 15000

DRAGON_PIT = Position(x=9866, y=4414)
BARON_PIT = Position(x=5007, y=10471)

# Five reference structures per side, used for the tower-dive radius check.
_TOWERS: dict[Team, np.ndarray] = {
    Team.BLUE: np.array(
        [
            (1512, 1336),
            (1169, 4287),
            (4318, 1029),
            (981, 10441),
            (6919, 1483),
        ],
        dtype=float,
    ),
    Team.RED: np.array(
        [
            (13604, 13350),
            (13866, 10648),
            (10504, 13604),
            (8955, 13607),
            (14340, 8012),
        ],
        dtype=float,
    ),
}

for _coords in _TOWERS.values():
    _coords.setflags(write=False)

TOWER_COORDINATES = MappingProxyType(_TOWERS)
