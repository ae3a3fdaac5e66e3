"""Category and overall scores - pure domain functions with zero I/O.

Every category starts at 100, loses a severity penalty per mistake mapped
to it, then gets stat-based adjustments. The overall score is a weighted
sum of the five categories plus a flat win bonus.
"""

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

import numpy as np

from riftcoach.contracts.analysis import FlaggedMistake, MistakeCategory, ScoreBreakdown, Severity

logger = logging.getLogger(__name__)

RESOURCE = "resource"
MAP_CONTROL = "map_control"
POSITIONING = "positioning"
OBJECTIVE = "objective"
TRADING = "trading"

SCORE_CATEGORIES = (RESOURCE, MAP_CONTROL, POSITIONING, OBJECTIVE, TRADING)

CATEGORY_OF_TAG: Mapping[MistakeCategory, str] = MappingProxyType(
    {
        MistakeCategory.CS_MISSING: RESOURCE,
        MistakeCategory.WAVE_MANAGEMENT: RESOURCE,
        MistakeCategory.VISION: MAP_CONTROL,
        MistakeCategory.POSITIONING: POSITIONING,
        MistakeCategory.MAP_AWARENESS: POSITIONING,
        MistakeCategory.ROAMING: POSITIONING,
        MistakeCategory.TEAMFIGHT: POSITIONING,
        MistakeCategory.OBJECTIVE: OBJECTIVE,
        MistakeCategory.TRADING: TRADING,
        MistakeCategory.TIMING: TRADING,
        MistakeCategory.ITEMIZATION: TRADING,
        MistakeCategory.COOLDOWN_TRACKING: TRADING,
    }
)

SEVERITY_PENALTIES: Mapping[Severity, int] = MappingProxyType(
    {
        Severity.CRITICAL: 15,
        Severity.HIGH: 10,
        Severity.MEDIUM: 5,
        Severity.LOW: 2,
    }
)

# Same order as SCORE_CATEGORIES
_CATEGORY_WEIGHTS = np.array([0.20, 0.15, 0.30, 0.15, 0.20])
_WIN_BONUS = 5


def score_category(tag: MistakeCategory) -> str:
    return CATEGORY_OF_TAG.get(tag, POSITIONING)


def _clamp(value: float) -> float:
    return float(np.clip(value, 0, 100))


def _round_half_up(value: float) -> int:
    return int(np.floor(value + 0.5))


def _stat(stats: Mapping[str, Mapping[str, float]], detector: str, name: str) -> float:
    return float(stats.get(detector, {}).get(name, 0.0))


def _resource_adjustment(cs_per_min: float) -> int:
    if cs_per_min >= 8:
        return 10
    if cs_per_min >= 7:
        return 5
    if cs_per_min < 5:
        return -10
    return 0


def _vision_adjustment(wards_per_min: float) -> int:
    if wards_per_min >= 1.0:
        return 10
    if wards_per_min >= 0.7:
        return 5
    if wards_per_min < 0.3:
        return -15
    return 0


def _positioning_adjustment(deaths_per_min: float) -> int:
    if deaths_per_min < 0.2:
        return 10
    if deaths_per_min > 0.4:
        return -10
    return 0


def calculate_scores(
    mistakes: Iterable[FlaggedMistake],
    detector_stats: Mapping[str, Mapping[str, float]],
    won: bool,
    game_minutes: float,
) -> ScoreBreakdown:
    """Compute the five category scores and the overall score.

    Args:
        mistakes: All flagged mistakes of the participant.
        detector_stats: Stats maps keyed by detector name
            (``deaths``, ``cs``, ``vision``, ``objectives``).
        won: Whether the participant's team won.
        game_minutes: Match length, used for the deaths-per-minute rate.

    Returns:
        ScoreBreakdown with every value an int in [0, 100].
    """
    scores = dict.fromkeys(SCORE_CATEGORIES, 100.0)

    for mistake in mistakes:
        category = score_category(mistake.category)
        scores[category] = _clamp(scores[category] - SEVERITY_PENALTIES[mistake.severity])

    scores[RESOURCE] = _clamp(
        scores[RESOURCE] + _resource_adjustment(_stat(detector_stats, "cs", "avg_cs_per_min"))
    )
    scores[MAP_CONTROL] = _clamp(
        scores[MAP_CONTROL] + _vision_adjustment(_stat(detector_stats, "vision", "wards_per_minute"))
    )

    deaths_per_min = _stat(detector_stats, "deaths", "total_deaths") / max(game_minutes, 1)
    scores[POSITIONING] = _clamp(scores[POSITIONING] + _positioning_adjustment(deaths_per_min))

    barons_lost = _stat(detector_stats, "objectives", "barons_lost")
    dragons_lost = _stat(detector_stats, "objectives", "dragons_lost") + _stat(
        detector_stats, "objectives", "elders_lost"
    )
    if barons_lost > 0:
        scores[OBJECTIVE] = _clamp(scores[OBJECTIVE] - 10 * barons_lost)
    if dragons_lost >= 3:
        scores[OBJECTIVE] = _clamp(scores[OBJECTIVE] - 10)

    weighted = float(np.dot(_CATEGORY_WEIGHTS, [scores[c] for c in SCORE_CATEGORIES]))
    overall = _round_half_up(weighted)
    if won:
        overall += _WIN_BONUS

    logger.debug(f"Scores computed: weighted={weighted:.2f} won={won}")
    return ScoreBreakdown(
        **{c: _round_half_up(scores[c]) for c in SCORE_CATEGORIES},
        overall=int(_clamp(overall)),
    )
