"""
Common data types and base models for riftcoach.
All models use Pydantic V2 and are immutable once validated.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Team(int, Enum):
    """Summoner's Rift sides."""

    BLUE = 100
    RED = 200

    @property
    def enemy(self) -> "Team":
        return Team.RED if self is Team.BLUE else Team.BLUE


class Role(str, Enum):
    """Assigned lane role. UNKNOWN is a real member, never an error."""

    TOP = "TOP"
    JUNGLE = "JUNGLE"
    MID = "MID"
    ADC = "ADC"
    SUPPORT = "SUPPORT"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_position(cls, value: str | None) -> "Role":
        """Normalize Riot ``teamPosition`` / ``role`` strings."""
        if not value:
            return cls.UNKNOWN
        return _POSITION_ALIASES.get(value.strip().upper(), cls.UNKNOWN)

    @property
    def is_roam_heavy(self) -> bool:
        """Roles whose farm is not comparable lane-to-lane."""
        return self in (Role.JUNGLE, Role.SUPPORT)


_POSITION_ALIASES: dict[str, Role] = {
    "TOP": Role.TOP,
    "JUNGLE": Role.JUNGLE,
    "JUNGLER": Role.JUNGLE,
    "MIDDLE": Role.MID,
    "MID": Role.MID,
    "BOTTOM": Role.ADC,
    "BOT": Role.ADC,
    "ADC": Role.ADC,
    "CARRY": Role.ADC,
    "UTILITY": Role.SUPPORT,
    "SUPPORT": Role.SUPPORT,
}


class Position(BaseModel):
    """2D position on the map."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    x: int = Field(..., description="X coordinate on the map")
    y: int = Field(..., description="Y coordinate on the map")


class BaseContract(BaseModel):
    """Base model for input contracts (Riot payloads or snake_case kwargs)."""

    model_config = ConfigDict(
        frozen=True,
        # Riot sends camelCase, tests and callers use snake_case
        alias_generator=to_camel,
        populate_by_name=True,
        # Riot keeps adding fields, unknown keys are dropped
        extra="ignore",
    )


class ResultContract(BaseModel):
    """Base model for engine output contracts."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={"examples": []},
    )
