"""Pytest configuration and fixtures for riftcoach tests.

Fixtures build typed matches and contiguous one-minute timelines. Every
participant stands at ``DEFAULT_POSITION`` and farms at a fixed rate unless
a test overrides it.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

import pytest

from riftcoach.config.settings import DEFAULT_THRESHOLDS, AnalysisThresholds, reset_settings
from riftcoach.contracts.analysis import FlaggedMistake, GamePhase, MistakeCategory, MistakeContext, Severity
from riftcoach.contracts.common import Position, Role, Team
from riftcoach.contracts.match import MatchInfo, Participant
from riftcoach.contracts.timeline import Frame, MatchTimeline, ParticipantFrame
from riftcoach.core.analysis.context import MatchContext

TEAM_POSITIONS = ("TOP", "JUNGLE", "MIDDLE", "BOTTOM", "UTILITY")
CHAMPIONS = ("Garen", "LeeSin", "Ahri", "Jinx", "Thresh", "Darius", "Vi", "Zed", "Caitlyn", "Leona")
DEFAULT_POSITION = (7400, 7400)
DEFAULT_CS_RATES = {2: 5.5, 5: 1.5, 7: 5.5, 10: 1.5}


def puuid_of(participant_id: int) -> str:
    return f"puuid-{participant_id:02d}-aaaaaaaaaaaa"


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Each test reads settings from a clean environment."""
    monkeypatch.delenv("RIFTCOACH_PARALLEL_DETECTORS", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def thresholds() -> AnalysisThresholds:
    return DEFAULT_THRESHOLDS


@pytest.fixture
def match_factory() -> Callable[..., MatchInfo]:
    def _build(
        *,
        duration_s: int = 1800,
        winner: Team = Team.BLUE,
        queue_id: int | None = 420,
        game_mode: str | None = "CLASSIC",
        positions: Mapping[int, str | None] | None = None,
    ) -> MatchInfo:
        positions = positions or {}
        participants = []
        for pid in range(1, 11):
            team = Team.BLUE if pid <= 5 else Team.RED
            participants.append(
                Participant(
                    participant_id=pid,
                    puuid=puuid_of(pid),
                    champion_id=pid,
                    champion_name=CHAMPIONS[pid - 1],
                    team_id=team,
                    team_position=positions.get(pid, TEAM_POSITIONS[(pid - 1) % 5]),
                    win=team == winner,
                )
            )
        return MatchInfo(
            match_id="EUW1_7000000001",
            game_duration=duration_s,
            game_mode=game_mode,
            queue_id=queue_id,
            participants=participants,
        )

    return _build


@pytest.fixture
def timeline_factory() -> Callable[..., MatchTimeline]:
    def _build(
        minutes: int = 30,
        *,
        positions: Mapping[int, tuple[int, int]] | None = None,
        cs_rates: Mapping[int, float] | None = None,
        gold_offsets: Mapping[int, int] | None = None,
        level_offsets: Mapping[int, int] | None = None,
        absent: Mapping[int, Iterable[int]] | None = None,
        events: Iterable[dict[str, Any]] = (),
    ) -> MatchTimeline:
        """Frames 0..minutes; each event lands in the first frame at or after it."""
        positions = positions or {}
        rates = {**DEFAULT_CS_RATES, **(cs_rates or {})}
        gold_offsets = gold_offsets or {}
        level_offsets = level_offsets or {}
        absent = absent or {}

        by_frame: dict[int, list[dict[str, Any]]] = {}
        for event in sorted(events, key=lambda e: e["timestamp"]):
            index = min(-(-event["timestamp"] // 60000), minutes)
            by_frame.setdefault(index, []).append(event)

        frames = []
        for minute in range(minutes + 1):
            missing = set(absent.get(minute, ()))
            participant_frames = {}
            for pid in range(1, 11):
                if pid in missing:
                    continue
                x, y = positions.get(pid, DEFAULT_POSITION)
                participant_frames[pid] = ParticipantFrame(
                    participant_id=pid,
                    position=Position(x=x, y=y),
                    total_gold=500 + 400 * minute + gold_offsets.get(pid, 0),
                    current_gold=300,
                    level=max(1, min(18, 1 + minute // 2 + level_offsets.get(pid, 0))),
                    minions_killed=int(rates.get(pid, 7.0) * minute),
                )
            frames.append(
                Frame(
                    timestamp=minute * 60000,
                    participant_frames=participant_frames,
                    events=by_frame.get(minute, []),
                )
            )
        return MatchTimeline(match_id="EUW1_7000000001", frames=frames)

    return _build


@pytest.fixture
def context_factory(match_factory, timeline_factory) -> Callable[..., MatchContext]:
    def _build(
        participant_id: int = 1,
        *,
        match: MatchInfo | None = None,
        timeline: MatchTimeline | None = None,
        role: Role | None = None,
        thresholds: AnalysisThresholds = DEFAULT_THRESHOLDS,
    ) -> MatchContext:
        match = match or match_factory()
        timeline = timeline or timeline_factory()
        player = match.participant(participant_id)
        assert player is not None
        resolved = role or player.role
        return MatchContext.build(
            match, timeline, player, resolved, match.opponent_of(player, resolved), thresholds
        )

    return _build


@pytest.fixture
def mistake_factory() -> Callable[..., FlaggedMistake]:
    def _build(
        category: MistakeCategory,
        severity: Severity = Severity.MEDIUM,
        timestamp: int = 0,
        mistake_id: str | None = None,
    ) -> FlaggedMistake:
        return FlaggedMistake(
            id=mistake_id,
            category=category,
            severity=severity,
            timestamp=timestamp,
            title="test",
            description="test",
            suggestion="test",
            context=MistakeContext(game_phase=GamePhase.EARLY),
        )

    return _build


def _kill_event(
    timestamp: int,
    victim: int,
    killer: int,
    *,
    position: tuple[int, int] | None = None,
    assists: Iterable[int] = (),
) -> dict[str, Any]:
    """Riot-shaped CHAMPION_KILL payload."""
    event: dict[str, Any] = {
        "type": "CHAMPION_KILL",
        "timestamp": timestamp,
        "killerId": killer,
        "victimId": victim,
        "assistingParticipantIds": list(assists),
    }
    if position is not None:
        event["position"] = {"x": position[0], "y": position[1]}
    return event


@pytest.fixture
def kill_event() -> Callable[..., dict[str, Any]]:
    return _kill_event
