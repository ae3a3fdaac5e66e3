"""Contract models for data validation."""

from .analysis import (
    AnalysisResult,
    CoachingTip,
    DetectorOutcome,
    FlaggedMistake,
    GamePhase,
    MapZone,
    MistakeCategory,
    MistakeContext,
    ScoreBreakdown,
    Severity,
    ZoneSafety,
)
from .common import Position, Role, Team
from .match import MatchInfo, Participant
from .timeline import EventType, Frame, MatchTimeline, ParticipantFrame, TimelineEvent

__all__ = [
    "AnalysisResult",
    "CoachingTip",
    "DetectorOutcome",
    "EventType",
    "FlaggedMistake",
    "Frame",
    "GamePhase",
    "MapZone",
    "MatchInfo",
    "MatchTimeline",
    "MistakeCategory",
    "MistakeContext",
    "Participant",
    "ParticipantFrame",
    "Position",
    "Role",
    "ScoreBreakdown",
    "Severity",
    "Team",
    "TimelineEvent",
    "ZoneSafety",
]
