"""Death detector.

Every death of the analyzed participant is classified by the first rule of
``DEATH_RULES`` that applies. The rules run from the most specific cause
(dying to a tower) to the generic "avoidable death".
"""

import logging
from collections.abc import Callable
from typing import NamedTuple

from riftcoach.config.settings import AnalysisThresholds
from riftcoach.contracts.analysis import (
    DetectorOutcome,
    FlaggedMistake,
    GamePhase,
    GoldState,
    LevelState,
    MapState,
    MistakeCategory,
    MistakeContext,
    NearbyChampion,
    Severity,
    ZoneSafety,
)
from riftcoach.contracts.common import Position
from riftcoach.contracts.timeline import EventType, Frame, ParticipantFrame, TimelineEvent
from riftcoach.core.analysis.context import MatchContext
from riftcoach.core.analysis.phases import format_game_time, game_phase
from riftcoach.core.analysis.zones import ZoneReading, classify_zone, distance, is_under_enemy_tower

logger = logging.getLogger(__name__)

DETECTOR_NAME = "deaths"


class DeathFacts(NamedTuple):
    """Evidence gathered around one death."""

    timestamp_ms: int
    phase: GamePhase
    position: Position
    zone: ZoneReading
    under_enemy_tower: bool
    nearest_ally: NearbyChampion | None
    assists: int
    killer_name: str | None
    player_frame: ParticipantFrame
    compared_frame: ParticipantFrame | None

    @property
    def gold_diff(self) -> int:
        if self.compared_frame is None:
            return 0
        return self.player_frame.total_gold - self.compared_frame.total_gold

    @property
    def level_diff(self) -> int:
        if self.compared_frame is None:
            return 0
        return self.player_frame.level - self.compared_frame.level

    @property
    def clock(self) -> str:
        return format_game_time(self.timestamp_ms)

    @property
    def late_game(self) -> bool:
        return self.phase is GamePhase.LATE


class Verdict(NamedTuple):
    category: MistakeCategory
    severity: Severity
    title: str
    description: str
    suggestion: str
    coaching_note: str


class DeathRule(NamedTuple):
    stat: str
    applies: Callable[[DeathFacts, AnalysisThresholds], bool]
    verdict: Callable[[DeathFacts, AnalysisThresholds], Verdict]


def _tower_dive(f: DeathFacts, th: AnalysisThresholds) -> Verdict:
    killer = f.killer_name or "The enemy"
    ganked = f.assists >= 1
    return Verdict(
        MistakeCategory.POSITIONING,
        Severity.CRITICAL,
        "Died under an enemy tower",
        f"You died under an enemy tower at {f.clock}. "
        + (
            f"{f.assists + 1} enemies collapsed on you."
            if ganked
            else f"{killer} killed you under their tower."
        ),
        "Do not dive without minions to tank the tower and enough damage to finish quickly.",
        "Coordinated dives are usually visible on the minimap before they happen."
        if ganked
        else "Before diving, check your minion wave, your health and your cooldowns.",
    )


def _isolated(f: DeathFacts, th: AnalysisThresholds) -> Verdict:
    ally = f.nearest_ally
    danger = f.zone.safety is ZoneSafety.DANGER
    description = f"You died at {f.clock} while isolated."
    if ally is not None:
        description += f" Your closest living ally ({ally.champion}) was {ally.distance} units away."
    return Verdict(
        MistakeCategory.POSITIONING,
        Severity.CRITICAL if danger else Severity.HIGH,
        "Died while isolated",
        description,
        "Stay close to your team, especially when you have no vision of the enemy.",
        "You were in enemy territory. That is very risky without your team."
        if danger
        else "Even in neutral areas, being alone makes you easy to pick.",
    )


def _ganked(f: DeathFacts, th: AnalysisThresholds) -> Verdict:
    return Verdict(
        MistakeCategory.MAP_AWARENESS,
        Severity.CRITICAL if f.late_game else Severity.HIGH,
        "Caught by a multi-person gank",
        f"You were killed by {f.assists + 1} enemies at {f.clock}. "
        + (
            "You were in dangerous territory."
            if f.zone.safety is ZoneSafety.DANGER
            else "The enemy coordinated their gank well."
        ),
        "Ward the enemy rotations and play safer when several enemies are missing from the map.",
        "Before pushing or trading, count the visible enemies. If you cannot see three, assume they are coming.",
    )


def _gold_deficit(f: DeathFacts, th: AnalysisThresholds) -> Verdict:
    opponent = f.killer_name or "your opponent"
    gap = abs(f.gold_diff)
    return Verdict(
        MistakeCategory.TRADING,
        Severity.HIGH,
        "Died while behind in gold",
        f"You died at {f.clock} to {opponent} while {gap} gold behind.",
        "Avoid all-in trades when behind. Farm safely and wait for your jungler or an item spike.",
        f"At {gap} gold behind, your opponent likely has a full item more than you. Respect it.",
    )


def _level_deficit(f: DeathFacts, th: AnalysisThresholds) -> Verdict:
    return Verdict(
        MistakeCategory.TRADING,
        Severity.MEDIUM,
        "Died while behind in levels",
        f"You died at {f.clock} while {abs(f.level_diff)} level(s) behind your opponent.",
        "Levels bring skill points and stats. Do not engage someone with a level advantage.",
        "Wait until the levels are even before taking a fight.",
    )


def _avoidable(f: DeathFacts, th: AnalysisThresholds) -> Verdict:
    killer = f.killer_name or "the enemy"
    return Verdict(
        MistakeCategory.POSITIONING,
        Severity.HIGH if f.late_game else Severity.MEDIUM,
        "Avoidable death",
        f"You died at {f.clock} to {killer}{' with help' if f.assists else ''}.",
        "Review what put you in that position. Could you have avoided the fight?",
        "A late game death can lose the match. Be extra careful with positioning."
        if f.late_game
        else "Every death hands the enemy an advantage. Keep them to a minimum.",
    )


DEATH_RULES: tuple[DeathRule, ...] = (
    DeathRule("tower_dive_deaths", lambda f, th: f.under_enemy_tower, _tower_dive),
    DeathRule(
        "isolated_deaths",
        lambda f, th: f.nearest_ally is not None
        and f.nearest_ally.distance > th.ally_isolation_distance,
        _isolated,
    ),
    DeathRule("ganked_deaths", lambda f, th: f.assists >= th.gank_min_assists, _ganked),
    DeathRule("gold_deficit_deaths", lambda f, th: f.gold_diff < -th.gold_deficit, _gold_deficit),
    DeathRule("level_deficit_deaths", lambda f, th: f.level_diff < -th.level_deficit, _level_deficit),
    DeathRule("solo_deaths", lambda f, th: True, _avoidable),
)


def _nearest_living_ally(
    ctx: MatchContext, frame: Frame, position: Position, timestamp_ms: int
) -> NearbyChampion | None:
    nearest: NearbyChampion | None = None
    for ally in ctx.match.teammates_of(ctx.player):
        ally_frame = frame.participant_frames.get(ally.participant_id)
        if ally_frame is None or ctx.is_dead(ally.participant_id, timestamp_ms):
            continue
        gap = round(distance(position, ally_frame.position))
        if nearest is None or gap < nearest.distance:
            nearest = NearbyChampion(champion=ally.champion_name, distance=gap)
    return nearest


def _gather_facts(ctx: MatchContext, event: TimelineEvent) -> DeathFacts | None:
    frame = ctx.timeline.snapshot_at(event.timestamp)
    player_frame = frame.participant_frames.get(ctx.player_id) if frame else None
    if frame is None or player_frame is None:
        logger.warning(
            f"snapshot_missing: no frame for participant {ctx.player_id} at {event.timestamp}ms, death skipped"
        )
        return None

    position = event.position or player_frame.position
    killer = ctx.match.participant(event.killer_id)

    compared_frame = None
    if ctx.opponent is not None:
        compared_frame = frame.participant_frames.get(ctx.opponent.participant_id)
    if compared_frame is None and killer is not None:
        compared_frame = frame.participant_frames.get(killer.participant_id)

    return DeathFacts(
        timestamp_ms=event.timestamp,
        phase=game_phase(event.timestamp),
        position=position,
        zone=classify_zone(position, ctx.player.team_id),
        under_enemy_tower=is_under_enemy_tower(
            position, ctx.player.team_id, ctx.thresholds.tower_danger_radius
        ),
        nearest_ally=_nearest_living_ally(ctx, frame, position, event.timestamp),
        assists=len(event.assisting_participant_ids),
        killer_name=killer.champion_name if killer else None,
        player_frame=player_frame,
        compared_frame=compared_frame,
    )


def _context(f: DeathFacts) -> MistakeContext:
    compared = f.compared_frame
    return MistakeContext(
        game_phase=f.phase,
        gold_state=GoldState(
            player=f.player_frame.total_gold,
            opponent=compared.total_gold,
            differential=f.gold_diff,
        )
        if compared
        else None,
        level_state=LevelState(player=f.player_frame.level, opponent=compared.level)
        if compared
        else None,
        map_state=MapState(
            zone=f.zone.zone,
            safety=f.zone.safety,
            nearest_ally=f.nearest_ally,
            nearest_enemy=NearbyChampion(champion=f.killer_name, distance=0)
            if f.killer_name
            else None,
            player_position=f.position,
        ),
    )


def detect_deaths(ctx: MatchContext) -> DetectorOutcome:
    """Classify every death of the analyzed participant."""
    stats = {"total_deaths": 0.0} | {rule.stat: 0.0 for rule in DEATH_RULES}
    mistakes: list[FlaggedMistake] = []

    for event in ctx.timeline.iter_events(EventType.CHAMPION_KILL):
        if event.victim_id != ctx.player_id:
            continue
        stats["total_deaths"] += 1

        facts = _gather_facts(ctx, event)
        if facts is None:
            continue

        rule = next(r for r in DEATH_RULES if r.applies(facts, ctx.thresholds))
        stats[rule.stat] += 1
        verdict = rule.verdict(facts, ctx.thresholds)
        mistakes.append(
            FlaggedMistake(
                category=verdict.category,
                severity=verdict.severity,
                timestamp=event.timestamp // 1000,
                title=verdict.title,
                description=verdict.description,
                suggestion=verdict.suggestion,
                coaching_note=verdict.coaching_note,
                context=_context(facts),
            )
        )

    logger.debug(f"Death detector flagged {len(mistakes)} of {int(stats['total_deaths'])} deaths")
    return DetectorOutcome(detector=DETECTOR_NAME, mistakes=mistakes, stats=stats)
