"""Resource (CS) detector.

Samples the participant's farm at fixed checkpoints and compares it with
the lane opponent, or with the per-phase benchmark when there is no
comparable opponent (roam-heavy roles, no opponent, opponent absent from
the snapshot).
"""

import logging
from typing import NamedTuple

from riftcoach.config.settings import AnalysisThresholds
from riftcoach.contracts.analysis import (
    DetectorOutcome,
    FlaggedMistake,
    GamePhase,
    MistakeCategory,
    MistakeContext,
    ResourceState,
    Severity,
)
from riftcoach.contracts.common import Role
from riftcoach.core.analysis.context import MatchContext
from riftcoach.core.analysis.phases import game_phase
from riftcoach.core.data.benchmarks import cs_benchmark

logger = logging.getLogger(__name__)

DETECTOR_NAME = "cs"


class DeficitFold(NamedTuple):
    """Debounce state carried from one checkpoint to the next."""

    last_flagged_diff: int = 0


def step_deficit(
    state: DeficitFold, diff: int, thresholds: AnalysisThresholds
) -> tuple[DeficitFold, bool]:
    """Advance the fold by one checkpoint; returns the new state and whether to flag.

    A deficit is flagged once it passes ``cs_deficit`` and only again after it
    has grown by at least ``cs_deficit_worsening`` since the last flag.
    """
    if diff < -thresholds.cs_deficit and diff <= state.last_flagged_diff - thresholds.cs_deficit_worsening:
        return DeficitFold(last_flagged_diff=diff), True
    return state, False


def _farm_suggestion(role: Role, against_benchmark: bool) -> str:
    if role is Role.JUNGLE:
        return "Clear every camp efficiently and track your respawn timers between ganks."
    if against_benchmark:
        return "Practice last hitting in the Practice Tool. Every minion counts."
    return "Focus on last hits. If the lane is hard, use your abilities to secure minions under tower."


def _opponent_mistake(
    ctx: MatchContext, minute: int, phase: GamePhase, player_cs: int, opponent_cs: int
) -> FlaggedMistake:
    th = ctx.thresholds
    diff = player_cs - opponent_cs
    gold_lost = abs(diff) * th.gold_per_minion
    severe = diff < -th.cs_severe_deficit
    return FlaggedMistake(
        category=MistakeCategory.CS_MISSING,
        severity=Severity.HIGH if severe else Severity.MEDIUM,
        timestamp=minute * 60,
        title=f"CS deficit at {minute} min",
        description=(
            f"You had {player_cs} CS against {opponent_cs} for your opponent "
            f"({diff} CS, about {gold_lost} gold behind)."
        ),
        suggestion=_farm_suggestion(ctx.role, against_benchmark=False),
        coaching_note=(
            f"{abs(diff)} CS behind is significant. Your opponent is almost an item ahead from farm alone."
            if severe
            else f"Even {th.cs_deficit} CS is roughly {th.cs_deficit * th.gold_per_minion} gold. It adds up over a game."
        ),
        context=MistakeContext(
            game_phase=phase,
            resource_state=ResourceState(player=player_cs, opponent=opponent_cs, differential=diff),
        ),
    )


def _benchmark_mistake(
    ctx: MatchContext, minute: int, phase: GamePhase, player_cs: int
) -> FlaggedMistake | None:
    benchmark = cs_benchmark(phase, ctx.role)
    per_minute = player_cs / minute
    if per_minute >= benchmark.poor:
        return None

    expected = round(minute * benchmark.poor)
    severe = player_cs < minute * benchmark.poor * ctx.thresholds.benchmark_severe_ratio
    return FlaggedMistake(
        category=MistakeCategory.CS_MISSING,
        severity=Severity.HIGH if severe else Severity.MEDIUM,
        timestamp=minute * 60,
        title=f"CS below benchmark at {minute} min",
        description=(
            f"You had {player_cs} CS ({per_minute:.1f} CS/min). "
            f"Aim for at least {benchmark.average:g} CS/min."
        ),
        suggestion=_farm_suggestion(ctx.role, against_benchmark=True),
        coaching_note=f"At {minute} min you should have at least {expected} CS. You were {expected - player_cs} short.",
        context=MistakeContext(
            game_phase=phase,
            resource_state=ResourceState(
                player=player_cs,
                opponent=expected,
                differential=player_cs - expected,
                against_benchmark=True,
            ),
        ),
    )


def _average_cs_per_min(ctx: MatchContext) -> tuple[float, int]:
    for frame in reversed(ctx.timeline.frames):
        player_frame = frame.participant_frames.get(ctx.player_id)
        if player_frame is not None:
            minutes = max(frame.timestamp / 60000, 1)
            return round(player_frame.resource_count / minutes, 1), player_frame.resource_count
    return 0.0, 0


def detect_resource_deficits(ctx: MatchContext) -> DetectorOutcome:
    """Flag farm deficits at every checkpoint of the match."""
    th = ctx.thresholds
    use_opponent = ctx.opponent is not None and not ctx.role.is_roam_heavy

    mistakes: list[FlaggedMistake] = []
    fold = DeficitFold()
    max_diff = 0
    behind_checkpoints = 0

    for minute in range(th.checkpoint_step_minutes, th.checkpoint_limit_minutes + 1, th.checkpoint_step_minutes):
        frame = ctx.timeline.snapshot_at(minute * 60000)
        if frame is None:
            break
        player_frame = frame.participant_frames.get(ctx.player_id)
        if player_frame is None:
            logger.warning(f"snapshot_missing: participant {ctx.player_id} absent at {minute} min")
            continue

        phase = game_phase(minute * 60000)
        player_cs = player_frame.resource_count
        opponent_frame = (
            frame.participant_frames.get(ctx.opponent.participant_id)
            if use_opponent and ctx.opponent is not None
            else None
        )

        if opponent_frame is not None:
            diff = player_cs - opponent_frame.resource_count
            if abs(diff) > abs(max_diff):
                max_diff = diff
            fold, flagged = step_deficit(fold, diff, th)
            if flagged:
                behind_checkpoints += 1
                mistakes.append(
                    _opponent_mistake(ctx, minute, phase, player_cs, opponent_frame.resource_count)
                )
        elif minute >= th.benchmark_start_minute:
            mistake = _benchmark_mistake(ctx, minute, phase, player_cs)
            if mistake is not None:
                behind_checkpoints += 1
                mistakes.append(mistake)

    avg_cs, total_cs = _average_cs_per_min(ctx)
    stats = {
        "avg_cs_per_min": avg_cs,
        "total_cs": float(total_cs),
        "max_cs_diff": float(max_diff),
        "cs_behind_checkpoints": float(behind_checkpoints),
    }
    return DetectorOutcome(detector=DETECTOR_NAME, mistakes=mistakes, stats=stats)
