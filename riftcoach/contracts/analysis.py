"""Post-match analysis output contracts.

These models are the engine's only output surface. They are immutable,
hold no back-references and serialize with ``model_dump(mode="json")``.
"""

from enum import Enum
from typing import Literal

from pydantic import Field

from .common import Position, ResultContract, Role

ALGORITHM_VERSION = "v1"


class Severity(str, Enum):
    """Four-level mistake severity."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Ordinal, critical highest."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.CRITICAL: 4,
    Severity.HIGH: 3,
    Severity.MEDIUM: 2,
    Severity.LOW: 1,
}


class GamePhase(str, Enum):
    EARLY = "early"
    MID = "mid"
    LATE = "late"


class ZoneSafety(str, Enum):
    SAFE = "safe"
    NEUTRAL = "neutral"
    DANGER = "danger"


class MapZone(str, Enum):
    """Semantic Summoner's Rift regions."""

    BLUE_BASE = "blue_base"
    RED_BASE = "red_base"
    BLUE_JUNGLE = "blue_jungle"
    RED_JUNGLE = "red_jungle"
    RIVER_TOP = "river_top"
    RIVER_BOT = "river_bot"
    DRAGON_PIT = "dragon_pit"
    BARON_PIT = "baron_pit"
    TOP_LANE = "top_lane"
    MID_LANE = "mid_lane"
    BOT_LANE = "bot_lane"


class MistakeCategory(str, Enum):
    """Mistake tags. Each maps to one score category."""

    CS_MISSING = "cs-missing"
    VISION = "vision"
    POSITIONING = "positioning"
    MAP_AWARENESS = "map-awareness"
    OBJECTIVE = "objective"
    TRADING = "trading"
    TIMING = "timing"
    WAVE_MANAGEMENT = "wave-management"
    ITEMIZATION = "itemization"
    COOLDOWN_TRACKING = "cooldown-tracking"
    ROAMING = "roaming"
    TEAMFIGHT = "teamfight"


# ===== Mistake context =====


class GoldState(ResultContract):
    player: int
    opponent: int
    differential: int


class LevelState(ResultContract):
    player: int
    opponent: int


class NearbyChampion(ResultContract):
    champion: str
    distance: int


class MapState(ResultContract):
    zone: MapZone | None = None
    safety: ZoneSafety
    nearest_ally: NearbyChampion | None = None
    nearest_enemy: NearbyChampion | None = None
    player_position: Position | None = None


class VisionState(ResultContract):
    wards_placed: int = Field(..., ge=0, description="Wards placed in the window")
    control_wards_placed: int = Field(0, ge=0)
    area_warded: bool


class ResourceState(ResultContract):
    player: int
    opponent: int = Field(..., description="Opponent CS, or the benchmark when no opponent")
    differential: int
    against_benchmark: bool = False


class ObjectiveState(ResultContract):
    objective: str
    player_alive: bool
    player_distance: int


class MistakeContext(ResultContract):
    """Structured evidence attached to a mistake."""

    game_phase: GamePhase
    gold_state: GoldState | None = None
    level_state: LevelState | None = None
    map_state: MapState | None = None
    vision_state: VisionState | None = None
    resource_state: ResourceState | None = None
    objective_state: ObjectiveState | None = None


class FlaggedMistake(ResultContract):
    """One detected mistake. ``id`` is assigned by the orchestrator."""

    id: str | None = None
    category: MistakeCategory
    severity: Severity
    timestamp: int = Field(..., ge=0, description="Game time in seconds")
    title: str
    description: str
    suggestion: str
    coaching_note: str = ""
    context: MistakeContext


class DetectorOutcome(ResultContract):
    """Mistakes plus detector-specific numeric statistics."""

    detector: str
    mistakes: list[FlaggedMistake] = Field(default_factory=list)
    stats: dict[str, float] = Field(default_factory=dict)


# ===== Scores and tips =====


class ScoreBreakdown(ResultContract):
    resource: int = Field(..., ge=0, le=100)
    map_control: int = Field(..., ge=0, le=100)
    positioning: int = Field(..., ge=0, le=100)
    objective: int = Field(..., ge=0, le=100)
    trading: int = Field(..., ge=0, le=100)
    overall: int = Field(..., ge=0, le=100)


class CoachingTip(ResultContract):
    tip_id: str
    category: str
    title: str
    description: str
    priority: int = Field(..., ge=1)
    related_mistake_ids: list[str] = Field(default_factory=list, max_length=3)
    role: Role | None = None


class AnalysisSummary(ResultContract):
    deaths_analyzed: int = Field(..., ge=0)
    mistakes_found: int = Field(..., ge=0)
    severity_counts: dict[Severity, int] = Field(default_factory=dict)


class AnalysisResult(ResultContract):
    """Terminal aggregate of one analysis call."""

    match_id: str
    puuid: str
    participant_id: int = Field(..., ge=1, le=10)
    champion: str
    role: Role
    outcome: Literal["win", "loss"]
    duration: int = Field(..., ge=0, description="Game duration in seconds")
    game_mode: str
    mistakes: list[FlaggedMistake]
    scores: ScoreBreakdown
    tips: list[CoachingTip] = Field(..., max_length=5)
    summary: AnalysisSummary
    detector_stats: dict[str, dict[str, float]] = Field(default_factory=dict)
    algorithm_version: str = ALGORITHM_VERSION
