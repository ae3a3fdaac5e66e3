"""Objective detector: epic monsters taken by the enemy team.

An objective is contested when the participant was alive and within range
of the pit at the moment it fell. Objectives lost while the participant
was alive and far away are flagged.
"""

import logging
from typing import NamedTuple

from riftcoach.contracts.analysis import (
    DetectorOutcome,
    FlaggedMistake,
    GamePhase,
    MapState,
    MistakeCategory,
    MistakeContext,
    ObjectiveState,
    Severity,
)
from riftcoach.contracts.common import Position, Role
from riftcoach.contracts.timeline import EventType, MonsterType, TimelineEvent
from riftcoach.core.analysis.context import MatchContext
from riftcoach.core.analysis.phases import format_game_time, game_phase
from riftcoach.core.analysis.zones import classify_zone, distance
from riftcoach.core.data.summoners_rift import BARON_PIT, DRAGON_PIT

logger = logging.getLogger(__name__)

DETECTOR_NAME = "objectives"


class ObjectiveSighting(NamedTuple):
    """The participant's situation when an enemy team secured a monster."""

    event: TimelineEvent
    phase: GamePhase
    position: Position
    alive: bool
    distance: int

    @property
    def clock(self) -> str:
        return format_game_time(self.event.timestamp)


class ObjectiveKind(NamedTuple):
    stat_prefix: str
    pit: Position
    label: str


_DRAGON = ObjectiveKind("dragons", DRAGON_PIT, "Dragon")
_ELDER = ObjectiveKind("elders", DRAGON_PIT, "Elder Dragon")
_BARON = ObjectiveKind("barons", BARON_PIT, "Baron Nashor")
_HERALD = ObjectiveKind("heralds", BARON_PIT, "Rift Herald")


def _kind_of(event: TimelineEvent) -> ObjectiveKind | None:
    if event.is_elder:
        return _ELDER
    if event.monster_type == MonsterType.DRAGON.value:
        return _DRAGON
    if event.monster_type == MonsterType.BARON_NASHOR.value:
        return _BARON
    if event.monster_type == MonsterType.RIFTHERALD.value:
        return _HERALD
    return None


def _dragon_severity(kind: ObjectiveKind, phase: GamePhase) -> Severity:
    if kind is _ELDER:
        return Severity.CRITICAL
    return Severity.HIGH if phase is GamePhase.LATE else Severity.MEDIUM


def _dragon_title(kind: ObjectiveKind, event: TimelineEvent) -> str:
    if kind is _ELDER:
        return "Elder Dragon lost"
    element = (event.monster_sub_type or "").replace("_DRAGON", "").replace("_", " ").title()
    return f"{element} Dragon lost" if element else "Dragon lost"


def _objective_mistake(ctx: MatchContext, kind: ObjectiveKind, s: ObjectiveSighting) -> FlaggedMistake | None:
    th = ctx.thresholds
    far = s.distance > th.objective_far_distance
    jungler = ctx.role is Role.JUNGLE

    if kind in (_DRAGON, _ELDER):
        if s.distance <= th.objective_proximity:
            return None
        severity = _dragon_severity(kind, s.phase)
        title = _dragon_title(kind, s.event)
        suggestion = (
            "As the jungler you set up objectives. Ward the area a minute before spawn and be there."
            if jungler
            else "Be ready to rotate to Dragon when it spawns and talk with your team."
        )
        note = (
            "Elder Dragon usually decides the game. Everything should be organized around it."
            if kind is _ELDER
            else "Dragons give your team permanent buffs. "
            + ("You were far too far away to contest." if far else "Move earlier to get there first.")
        )
    elif kind is _BARON:
        if s.distance <= th.objective_proximity:
            return None
        severity = Severity.CRITICAL
        title = "Baron Nashor lost"
        suggestion = "Baron is the most important mid and late game objective. Group with your team to contest or take it."
        note = "Baron gives a huge siege and gold advantage. " + (
            "You were far too far away to contest." if far else "Losing it uncontested often turns the game."
        )
    else:
        if s.distance <= th.herald_proximity or s.phase is not GamePhase.EARLY:
            return None
        severity = Severity.MEDIUM
        title = "Rift Herald lost"
        suggestion = "Herald can take a whole tower. Help your jungler secure it or at least contest it."
        note = "Herald speeds up the early game. One tower down opens the map for your team."

    zone = classify_zone(s.position, ctx.player.team_id)
    return FlaggedMistake(
        category=MistakeCategory.OBJECTIVE,
        severity=severity,
        timestamp=s.event.timestamp // 1000,
        title=title,
        description=f"The enemy took {kind.label} at {s.clock}. You were {s.distance} units away.",
        suggestion=suggestion,
        coaching_note=note,
        context=MistakeContext(
            game_phase=s.phase,
            objective_state=ObjectiveState(
                objective=kind.label, player_alive=s.alive, player_distance=s.distance
            ),
            map_state=MapState(zone=zone.zone, safety=zone.safety, player_position=s.position),
        ),
    )


def detect_objective_losses(ctx: MatchContext) -> DetectorOutcome:
    """Flag epic monsters the enemy team secured uncontested."""
    stats: dict[str, float] = {}
    for kind in (_DRAGON, _ELDER, _BARON, _HERALD):
        stats[f"{kind.stat_prefix}_lost"] = 0.0
        stats[f"{kind.stat_prefix}_contested"] = 0.0

    mistakes: list[FlaggedMistake] = []
    for event in ctx.timeline.iter_events(EventType.ELITE_MONSTER_KILL):
        if event.killer_team_id is None or event.killer_team_id == ctx.player.team_id:
            continue
        kind = _kind_of(event)
        if kind is None:
            continue

        stats[f"{kind.stat_prefix}_lost"] += 1
        player_frame = ctx.timeline.participant_frame_at(ctx.player_id, event.timestamp)
        if player_frame is None:
            logger.warning(f"snapshot_missing: no position for participant {ctx.player_id} at {event.timestamp}ms")
            continue

        sighting = ObjectiveSighting(
            event=event,
            phase=game_phase(event.timestamp),
            position=player_frame.position,
            alive=not ctx.is_dead(ctx.player_id, event.timestamp),
            distance=round(distance(player_frame.position, kind.pit)),
        )
        proximity = ctx.thresholds.herald_proximity if kind is _HERALD else ctx.thresholds.objective_proximity
        if sighting.alive and sighting.distance <= proximity:
            stats[f"{kind.stat_prefix}_contested"] += 1
        if not sighting.alive:
            continue

        mistake = _objective_mistake(ctx, kind, sighting)
        if mistake is not None:
            mistakes.append(mistake)

    return DetectorOutcome(detector=DETECTOR_NAME, mistakes=mistakes, stats=stats)
