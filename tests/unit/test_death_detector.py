"""Death detector tests.

Participant 1 (blue TOP, Garen) is analyzed; participant 6 (red TOP,
Darius) is the lane opponent. Everyone else idles at the map center.
"""

from riftcoach.contracts.analysis import GamePhase, MapZone, MistakeCategory, Severity, ZoneSafety
from riftcoach.contracts.common import Position
from riftcoach.contracts.timeline import ParticipantFrame
from riftcoach.core.analysis.detectors.death import DEATH_RULES, DeathFacts, detect_deaths
from riftcoach.core.analysis.zones import ZoneReading

EARLY_TS = 330_000  # 5:30
TOWER_POSITION = (8955, 13600)  # next to a red structure
TOP_LANE = (1000, 9000)
CLOSE_TO_TOP_LANE = (1200, 9000)


def _detect(context_factory, timeline_factory, *, participant_id=1, match=None, **timeline_kwargs):
    ctx = context_factory(participant_id, match=match, timeline=timeline_factory(**timeline_kwargs))
    return detect_deaths(ctx)


def test_tower_dive_is_critical_and_not_generic(context_factory, timeline_factory, kill_event) -> None:
    ts = 22 * 60_000 + 10_000
    outcome = _detect(
        context_factory,
        timeline_factory,
        events=[kill_event(ts, victim=1, killer=6, position=TOWER_POSITION)],
    )

    assert len(outcome.mistakes) == 1
    mistake = outcome.mistakes[0]
    assert mistake.severity is Severity.CRITICAL
    assert mistake.category is MistakeCategory.POSITIONING
    assert mistake.title == "Died under an enemy tower"
    assert mistake.timestamp == ts // 1000
    assert outcome.stats["tower_dive_deaths"] == 1
    assert outcome.stats["solo_deaths"] == 0


def test_isolated_death_in_neutral_zone_is_high(context_factory, timeline_factory, kill_event) -> None:
    outcome = _detect(
        context_factory,
        timeline_factory,
        events=[kill_event(EARLY_TS, victim=1, killer=6, position=TOP_LANE)],
    )

    mistake = outcome.mistakes[0]
    assert mistake.severity is Severity.HIGH
    assert mistake.category is MistakeCategory.POSITIONING
    map_state = mistake.context.map_state
    assert map_state.zone is MapZone.TOP_LANE
    assert map_state.safety is ZoneSafety.NEUTRAL
    assert map_state.nearest_ally.champion == "LeeSin"
    assert map_state.nearest_ally.distance == 6597
    assert "(LeeSin) was 6597 units away" in mistake.description
    assert outcome.stats["isolated_deaths"] == 1


def test_isolated_death_in_enemy_jungle_is_critical(context_factory, timeline_factory, kill_event) -> None:
    outcome = _detect(
        context_factory,
        timeline_factory,
        events=[kill_event(EARLY_TS, victim=1, killer=7, position=(11500, 8500))],
    )

    mistake = outcome.mistakes[0]
    assert mistake.severity is Severity.CRITICAL
    assert mistake.context.map_state.safety is ZoneSafety.DANGER


def test_nearby_ally_prevents_isolation(context_factory, timeline_factory, kill_event) -> None:
    outcome = _detect(
        context_factory,
        timeline_factory,
        positions={2: CLOSE_TO_TOP_LANE},
        events=[kill_event(EARLY_TS, victim=1, killer=6, position=TOP_LANE)],
    )

    mistake = outcome.mistakes[0]
    assert mistake.title == "Avoidable death"
    assert mistake.severity is Severity.MEDIUM
    assert mistake.context.map_state.nearest_ally.distance == 200
    assert outcome.stats["solo_deaths"] == 1


def test_dead_ally_is_not_counted_as_nearby(context_factory, timeline_factory, kill_event) -> None:
    outcome = _detect(
        context_factory,
        timeline_factory,
        positions={2: CLOSE_TO_TOP_LANE},
        events=[
            kill_event(EARLY_TS - 10_000, victim=2, killer=7, position=CLOSE_TO_TOP_LANE),
            kill_event(EARLY_TS, victim=1, killer=6, position=TOP_LANE),
        ],
    )

    assert len(outcome.mistakes) == 1
    mistake = outcome.mistakes[0]
    assert mistake.title == "Died while isolated"
    assert mistake.context.map_state.nearest_ally.champion != "LeeSin"


def test_multi_person_gank(context_factory, timeline_factory, kill_event) -> None:
    outcome = _detect(
        context_factory,
        timeline_factory,
        positions={2: CLOSE_TO_TOP_LANE},
        events=[kill_event(EARLY_TS, victim=1, killer=6, position=TOP_LANE, assists=[7, 8])],
    )

    mistake = outcome.mistakes[0]
    assert mistake.category is MistakeCategory.MAP_AWARENESS
    assert mistake.severity is Severity.HIGH
    assert outcome.stats["ganked_deaths"] == 1


def test_late_game_gank_is_critical(context_factory, timeline_factory, kill_event) -> None:
    outcome = _detect(
        context_factory,
        timeline_factory,
        positions={2: CLOSE_TO_TOP_LANE},
        events=[kill_event(1_600_000, victim=1, killer=6, position=TOP_LANE, assists=[7, 8])],
    )

    assert outcome.mistakes[0].severity is Severity.CRITICAL


def test_gold_deficit_against_lane_opponent(context_factory, timeline_factory, kill_event) -> None:
    outcome = _detect(
        context_factory,
        timeline_factory,
        positions={2: CLOSE_TO_TOP_LANE},
        gold_offsets={1: -1500},
        events=[kill_event(EARLY_TS, victim=1, killer=6, position=TOP_LANE)],
    )

    mistake = outcome.mistakes[0]
    assert mistake.category is MistakeCategory.TRADING
    assert mistake.severity is Severity.HIGH
    assert mistake.context.gold_state.differential == -1500
    assert outcome.stats["gold_deficit_deaths"] == 1


def test_gold_deficit_threshold_is_strict(context_factory, timeline_factory, kill_event) -> None:
    outcome = _detect(
        context_factory,
        timeline_factory,
        positions={2: CLOSE_TO_TOP_LANE},
        gold_offsets={1: -1000},
        events=[kill_event(EARLY_TS, victim=1, killer=6, position=TOP_LANE)],
    )

    assert outcome.mistakes[0].title == "Avoidable death"


def test_level_deficit(context_factory, timeline_factory, kill_event) -> None:
    outcome = _detect(
        context_factory,
        timeline_factory,
        positions={2: CLOSE_TO_TOP_LANE},
        level_offsets={1: -2},
        events=[kill_event(EARLY_TS, victim=1, killer=6, position=TOP_LANE)],
    )

    mistake = outcome.mistakes[0]
    assert mistake.category is MistakeCategory.TRADING
    assert mistake.severity is Severity.MEDIUM
    assert mistake.context.level_state.player < mistake.context.level_state.opponent


def test_comparison_falls_back_to_killer_without_opponent(
    context_factory, timeline_factory, match_factory, kill_event
) -> None:
    match = match_factory(positions={1: None})
    outcome = _detect(
        context_factory,
        timeline_factory,
        match=match,
        positions={2: CLOSE_TO_TOP_LANE},
        gold_offsets={8: 1500},
        events=[kill_event(EARLY_TS, victim=1, killer=8, position=TOP_LANE)],
    )

    mistake = outcome.mistakes[0]
    assert mistake.title == "Died while behind in gold"
    assert mistake.context.map_state.nearest_enemy.champion == "Zed"


def test_late_generic_death_is_high(context_factory, timeline_factory, kill_event) -> None:
    outcome = _detect(
        context_factory,
        timeline_factory,
        positions={2: CLOSE_TO_TOP_LANE},
        events=[kill_event(1_700_000, victim=1, killer=6, position=TOP_LANE)],
    )

    assert outcome.mistakes[0].severity is Severity.HIGH
    assert outcome.mistakes[0].title == "Avoidable death"


def test_missing_event_position_uses_snapshot(context_factory, timeline_factory, kill_event) -> None:
    outcome = _detect(
        context_factory,
        timeline_factory,
        positions={1: TOWER_POSITION},
        events=[kill_event(1_330_000, victim=1, killer=6)],
    )

    mistake = outcome.mistakes[0]
    assert mistake.severity is Severity.CRITICAL
    assert mistake.context.map_state.player_position.x == TOWER_POSITION[0]


def test_missing_snapshot_skips_the_death(context_factory, timeline_factory, kill_event) -> None:
    outcome = _detect(
        context_factory,
        timeline_factory,
        absent={5: [1]},
        events=[kill_event(EARLY_TS, victim=1, killer=6, position=TOP_LANE)],
    )

    assert outcome.mistakes == []
    assert outcome.stats["total_deaths"] == 1


def test_no_deaths_no_mistakes(context_factory, timeline_factory, kill_event) -> None:
    outcome = _detect(
        context_factory,
        timeline_factory,
        events=[kill_event(EARLY_TS, victim=3, killer=8, position=TOP_LANE)],
    )

    assert outcome.mistakes == []
    assert outcome.stats["total_deaths"] == 0
    assert set(outcome.stats) == {"total_deaths", *(rule.stat for rule in DEATH_RULES)}


def test_killer_recorded_as_nearest_enemy(context_factory, timeline_factory, kill_event) -> None:
    outcome = _detect(
        context_factory,
        timeline_factory,
        events=[kill_event(EARLY_TS, victim=1, killer=6, position=TOP_LANE)],
    )

    enemy = outcome.mistakes[0].context.map_state.nearest_enemy
    assert enemy.champion == "Darius"
    assert enemy.distance == 0


def test_isolated_verdict_without_living_ally(thresholds) -> None:
    frame = ParticipantFrame(participant_id=1, position=Position(x=TOP_LANE[0], y=TOP_LANE[1]))
    facts = DeathFacts(
        timestamp_ms=EARLY_TS,
        phase=GamePhase.EARLY,
        position=frame.position,
        zone=ZoneReading(MapZone.TOP_LANE, ZoneSafety.NEUTRAL),
        under_enemy_tower=False,
        nearest_ally=None,
        assists=0,
        killer_name="Darius",
        player_frame=frame,
        compared_frame=None,
    )
    rule = next(r for r in DEATH_RULES if r.stat == "isolated_deaths")

    verdict = rule.verdict(facts, thresholds)

    assert not rule.applies(facts, thresholds)
    assert verdict.severity is Severity.HIGH
    assert verdict.description == "You died at 5:30 while isolated."
