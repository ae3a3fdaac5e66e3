"""Per-call analysis context shared (read-only) by the detectors."""

from dataclasses import dataclass, field

from riftcoach.config.settings import AnalysisThresholds
from riftcoach.contracts.analysis import GamePhase
from riftcoach.contracts.common import Role
from riftcoach.contracts.match import MatchInfo, Participant
from riftcoach.contracts.timeline import EventType, MatchTimeline
from riftcoach.core.analysis.phases import game_phase


@dataclass(frozen=True)
class DeathWindow:
    """Interval during which a participant is dead (exclusive bounds)."""

    died_at_ms: int
    respawn_ms: int

    def covers(self, timestamp_ms: int) -> bool:
        return self.died_at_ms < timestamp_ms < self.died_at_ms + self.respawn_ms


def respawn_delay_ms(phase: GamePhase, thresholds: AnalysisThresholds) -> int:
    """Estimated death timer by game phase."""
    if phase is GamePhase.EARLY:
        return thresholds.respawn_early_ms
    if phase is GamePhase.MID:
        return thresholds.respawn_mid_ms
    return thresholds.respawn_late_ms


def build_death_windows(
    timeline: MatchTimeline, thresholds: AnalysisThresholds
) -> dict[int, tuple[DeathWindow, ...]]:
    """Dead intervals of every participant, from CHAMPION_KILL events."""
    windows: dict[int, list[DeathWindow]] = {}
    for event in timeline.iter_events(EventType.CHAMPION_KILL):
        if event.victim_id is None:
            continue
        delay = respawn_delay_ms(game_phase(event.timestamp), thresholds)
        windows.setdefault(event.victim_id, []).append(DeathWindow(event.timestamp, delay))
    return {pid: tuple(items) for pid, items in windows.items()}


@dataclass(frozen=True)
class MatchContext:
    """Everything a detector needs about the analyzed player.

    Built once per call by the orchestrator; detectors only read it.
    """

    match: MatchInfo
    timeline: MatchTimeline
    player: Participant
    role: Role
    opponent: Participant | None
    thresholds: AnalysisThresholds
    death_windows: dict[int, tuple[DeathWindow, ...]] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        match: MatchInfo,
        timeline: MatchTimeline,
        player: Participant,
        role: Role,
        opponent: Participant | None,
        thresholds: AnalysisThresholds,
    ) -> "MatchContext":
        return cls(
            match=match,
            timeline=timeline,
            player=player,
            role=role,
            opponent=opponent,
            thresholds=thresholds,
            death_windows=build_death_windows(timeline, thresholds),
        )

    @property
    def player_id(self) -> int:
        return self.player.participant_id

    @property
    def game_minutes(self) -> float:
        """Match length in minutes, from the match summary or the last frame."""
        seconds = self.match.game_duration or self.timeline.duration_ms / 1000
        return seconds / 60

    def is_dead(self, participant_id: int, timestamp_ms: int) -> bool:
        return any(w.covers(timestamp_ms) for w in self.death_windows.get(participant_id, ()))
