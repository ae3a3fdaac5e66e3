"""
Match Timeline data contracts for Riot API Match-V5.
This is the core input structure for match analysis.
"""

from collections.abc import Iterator
from enum import Enum

from pydantic import Field, field_validator

from .common import BaseContract, Position


class EventType(str, Enum):
    """Timeline event types the engine reads or commonly receives."""

    CHAMPION_KILL = "CHAMPION_KILL"
    ELITE_MONSTER_KILL = "ELITE_MONSTER_KILL"
    BUILDING_KILL = "BUILDING_KILL"
    WARD_PLACED = "WARD_PLACED"
    WARD_KILL = "WARD_KILL"
    ITEM_PURCHASED = "ITEM_PURCHASED"
    ITEM_DESTROYED = "ITEM_DESTROYED"
    ITEM_SOLD = "ITEM_SOLD"
    ITEM_UNDO = "ITEM_UNDO"
    SKILL_LEVEL_UP = "SKILL_LEVEL_UP"
    LEVEL_UP = "LEVEL_UP"
    TURRET_PLATE_DESTROYED = "TURRET_PLATE_DESTROYED"
    CHAMPION_TRANSFORM = "CHAMPION_TRANSFORM"
    DRAGON_SOUL_GIVEN = "DRAGON_SOUL_GIVEN"
    GAME_END = "GAME_END"


class WardType(str, Enum):
    """Types of wards that can be placed."""

    YELLOW_TRINKET = "YELLOW_TRINKET"
    CONTROL_WARD = "CONTROL_WARD"
    SIGHT_WARD = "SIGHT_WARD"
    BLUE_TRINKET = "BLUE_TRINKET"
    TEEMO_MUSHROOM = "TEEMO_MUSHROOM"
    UNDEFINED = "UNDEFINED"


class MonsterType(str, Enum):
    """Elite monster types."""

    DRAGON = "DRAGON"
    ELDER_DRAGON = "ELDER_DRAGON"
    BARON_NASHOR = "BARON_NASHOR"
    RIFTHERALD = "RIFTHERALD"
    HORDE = "HORDE"


class ParticipantFrame(BaseContract):
    """Participant state at a specific frame."""

    participant_id: int = Field(..., ge=1, le=10)
    position: Position
    current_gold: int = Field(0)
    total_gold: int = Field(0)
    level: int = Field(1, ge=1, le=18)
    xp: int = Field(0)
    minions_killed: int = Field(0)
    jungle_minions_killed: int = Field(0)
    time_enemy_spent_controlled: int = Field(0)

    @property
    def resource_count(self) -> int:
        """Lane minions plus neutral monsters (CS)."""
        return self.minions_killed + self.jungle_minions_killed


class TimelineEvent(BaseContract):
    """A single timeline event. Kind-specific fields are optional."""

    type: EventType | str = Field(..., description="Type of the event")
    timestamp: int = Field(..., ge=0, description="Game time in milliseconds")
    participant_id: int | None = None

    # CHAMPION_KILL / WARD_KILL / ELITE_MONSTER_KILL
    killer_id: int | None = None
    victim_id: int | None = None
    assisting_participant_ids: list[int] = Field(default_factory=list)
    position: Position | None = None

    # ELITE_MONSTER_KILL
    monster_type: str | None = None
    monster_sub_type: str | None = None
    killer_team_id: int | None = None

    # WARD_PLACED
    ward_type: str | None = None
    creator_id: int | None = None

    # BUILDING_KILL
    building_type: str | None = None
    tower_type: str | None = None
    lane_type: str | None = None
    team_id: int | None = None

    # ITEM_* / SKILL_LEVEL_UP / LEVEL_UP
    item_id: int | None = None
    skill_slot: int | None = None
    level: int | None = None

    @property
    def is_elder(self) -> bool:
        return MonsterType.ELDER_DRAGON.value in (self.monster_type, self.monster_sub_type)


class Frame(BaseContract):
    """A single frame (snapshot) in the match timeline."""

    timestamp: int = Field(..., ge=0, description="Frame timestamp in milliseconds")
    participant_frames: dict[int, ParticipantFrame] = Field(
        ..., description="Participant states indexed by participant ID"
    )
    events: list[TimelineEvent] = Field(
        default_factory=list, description="Events that occurred during this frame"
    )

    @field_validator("participant_frames", mode="before")
    @classmethod
    def fill_participant_ids(cls, v: object) -> object:
        """Riot keys frames by id and some payloads omit the id inside."""
        if isinstance(v, dict):
            result = {}
            for key, value in v.items():
                if isinstance(value, dict) and not (
                    "participantId" in value or "participant_id" in value
                ):
                    value = {**value, "participantId": int(key)}
                result[key] = value
            return result
        return v


class MatchTimeline(BaseContract):
    """Ordered frame sequence of one match.

    Frames are assumed contiguous, one per ``frame_interval`` starting at 0.
    """

    match_id: str = Field(..., description="Match ID")
    frame_interval: int = Field(60000, gt=0, description="Milliseconds between frames")
    frames: list[Frame] = Field(..., description="List of all frames in the match")

    @property
    def duration_ms(self) -> int:
        return self.frames[-1].timestamp if self.frames else 0

    def snapshot_at(self, timestamp_ms: int) -> Frame | None:
        """Frame whose interval contains ``timestamp_ms``, or None past the end."""
        index = timestamp_ms // self.frame_interval
        if index < 0 or index >= len(self.frames):
            return None
        return self.frames[index]

    def participant_frame_at(self, participant_id: int, timestamp_ms: int) -> ParticipantFrame | None:
        frame = self.snapshot_at(timestamp_ms)
        if frame is None:
            return None
        return frame.participant_frames.get(participant_id)

    def iter_events(self, *types: EventType) -> Iterator[TimelineEvent]:
        """Yield events in timeline order, optionally filtered by type."""
        wanted = {t.value for t in types}
        for frame in self.frames:
            for event in frame.events:
                if not wanted or _type_value(event.type) in wanted:
                    yield event


def _type_value(event_type: EventType | str) -> str:
    return event_type.value if isinstance(event_type, EventType) else event_type
