"""Map-control (vision) detector.

Ward activity is bucketed into fixed windows by event timestamp and each
window is compared against the phase benchmark scaled for the role.
"""

import logging
from dataclasses import dataclass

from riftcoach.contracts.analysis import (
    DetectorOutcome,
    FlaggedMistake,
    GamePhase,
    MistakeCategory,
    MistakeContext,
    Severity,
    VisionState,
)
from riftcoach.contracts.common import Role
from riftcoach.contracts.timeline import EventType, WardType
from riftcoach.core.analysis.context import MatchContext
from riftcoach.core.analysis.phases import game_phase
from riftcoach.core.data.benchmarks import vision_benchmark

logger = logging.getLogger(__name__)

DETECTOR_NAME = "vision"


@dataclass
class WardWindow:
    placed: int = 0
    killed: int = 0
    control: int = 0


def _bucket_wards(ctx: MatchContext, window_ms: int) -> list[WardWindow]:
    # Windows cover [0, duration); the final game-end instant joins the last one
    count = max(1, -(-ctx.timeline.duration_ms // window_ms))
    last_window = count - 1
    windows = [WardWindow() for _ in range(count)]

    for event in ctx.timeline.iter_events(EventType.WARD_PLACED, EventType.WARD_KILL):
        index = min(event.timestamp // window_ms, last_window)
        window = windows[index]
        if event.type == EventType.WARD_PLACED and event.creator_id == ctx.player_id:
            window.placed += 1
            if event.ward_type == WardType.CONTROL_WARD.value:
                window.control += 1
        elif event.type == EventType.WARD_KILL and event.killer_id == ctx.player_id:
            window.killed += 1
    return windows


def _deficit_mistake(
    role: Role, start: int, end: int, phase: GamePhase, window: WardWindow, area_warded: bool
) -> FlaggedMistake:
    support = role is Role.SUPPORT
    return FlaggedMistake(
        category=MistakeCategory.VISION,
        severity=Severity.HIGH if phase is GamePhase.LATE else Severity.MEDIUM,
        timestamp=start * 60,
        title=f"Low vision ({start}-{end} min)",
        description=(
            f"You placed only {window.placed} ward(s) between {start} and {end} min. "
            + (
                "As a support, vision is your main responsibility."
                if support
                else "Even as a laner you need to contribute to vision."
            )
        ),
        suggestion=(
            "Place wards in the river, the enemy jungle and around objectives. Use Oracle Lens to clear enemy wards."
            if support
            else "Buy Control Wards regularly. One ward can save your life or a teammate's."
        ),
        coaching_note=f"Vision wins games. {window.placed} ward(s) in five minutes is not enough to read the map.",
        context=MistakeContext(
            game_phase=phase,
            vision_state=VisionState(
                wards_placed=window.placed,
                control_wards_placed=window.control,
                area_warded=area_warded,
            ),
        ),
    )


def _no_control_ward_mistake(start: int, end: int, phase: GamePhase, window: WardWindow) -> FlaggedMistake:
    return FlaggedMistake(
        category=MistakeCategory.VISION,
        severity=Severity.LOW,
        timestamp=start * 60,
        title=f"No Control Ward ({start}-{end} min)",
        description=f"You did not place a Control Ward between {start} and {end} min.",
        suggestion="Control Wards hold key areas such as Dragon, Baron and the jungle. Buy one every back.",
        coaching_note="A Control Ward costs 75 gold and can reveal an ambush. It is one of the best buys in the game.",
        context=MistakeContext(
            game_phase=phase,
            vision_state=VisionState(wards_placed=window.placed, control_wards_placed=0, area_warded=False),
        ),
    )


def detect_vision_gaps(ctx: MatchContext) -> DetectorOutcome:
    """Flag windows with too few wards or no Control Ward."""
    th = ctx.thresholds
    window_minutes = th.vision_window_minutes
    windows = _bucket_wards(ctx, window_minutes * 60000)

    mistakes: list[FlaggedMistake] = []
    for index, window in enumerate(windows):
        start = index * window_minutes
        if start < th.vision_start_minute:
            continue
        end = start + window_minutes
        phase = game_phase(start * 60000)
        benchmark = vision_benchmark(phase, ctx.role)

        if window.placed < benchmark.poor:
            mistakes.append(
                _deficit_mistake(ctx.role, start, end, phase, window, window.placed >= benchmark.average)
            )
        if phase is not GamePhase.EARLY and window.control == 0:
            mistakes.append(_no_control_ward_mistake(start, end, phase, window))

    placed = sum(w.placed for w in windows)
    logger.debug(f"Vision detector: {placed} wards over {len(windows)} windows")
    stats = {
        "total_wards_placed": float(placed),
        "total_wards_killed": float(sum(w.killed for w in windows)),
        "control_wards_placed": float(sum(w.control for w in windows)),
        "wards_per_minute": round(placed / max(ctx.game_minutes, 1), 1),
    }
    return DetectorOutcome(detector=DETECTOR_NAME, mistakes=mistakes, stats=stats)
