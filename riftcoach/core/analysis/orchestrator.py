"""Analysis entry point.

``analyze_match`` resolves the participant, runs the four detectors, merges
and orders their mistakes, then scores and recommends. Each call builds its
own context; nothing is shared between calls.
"""

from concurrent.futures import ThreadPoolExecutor

import structlog

from riftcoach.config.settings import AnalysisThresholds, get_settings
from riftcoach.contracts.analysis import (
    AnalysisResult,
    AnalysisSummary,
    DetectorOutcome,
    FlaggedMistake,
    Severity,
)
from riftcoach.contracts.common import Role
from riftcoach.contracts.match import MatchInfo
from riftcoach.contracts.timeline import MatchTimeline
from riftcoach.core.analysis.context import MatchContext
from riftcoach.core.analysis.detectors import DETECTORS
from riftcoach.core.analysis.errors import ParticipantNotFoundError
from riftcoach.core.analysis.recommendations import generate_coaching_tips
from riftcoach.core.analysis.scoring import calculate_scores
from riftcoach.core.observability import bind_match_context, clear_match_context, trace_analysis

logger = structlog.get_logger(__name__)


def _run_detectors(ctx: MatchContext, parallel: bool, workers: int) -> list[DetectorOutcome]:
    if not parallel:
        return [detector(ctx) for detector in DETECTORS]
    # map() yields in submission order, so merging stays deterministic
    with ThreadPoolExecutor(max_workers=min(workers, len(DETECTORS))) as executor:
        return list(executor.map(lambda detector: detector(ctx), DETECTORS))


def merge_mistakes(outcomes: list[DetectorOutcome]) -> list[FlaggedMistake]:
    """Concatenate in detector order, stable-sort by time and assign ids."""
    merged = [m for outcome in outcomes for m in outcome.mistakes]
    merged.sort(key=lambda m: m.timestamp)
    return [
        m.model_copy(update={"id": f"mistake-{index}-{m.timestamp}"})
        for index, m in enumerate(merged)
    ]


def _summarize(mistakes: list[FlaggedMistake], stats: dict[str, dict[str, float]]) -> AnalysisSummary:
    counts = dict.fromkeys(Severity, 0)
    for mistake in mistakes:
        counts[mistake.severity] += 1
    return AnalysisSummary(
        deaths_analyzed=int(stats.get("deaths", {}).get("total_deaths", 0)),
        mistakes_found=len(mistakes),
        severity_counts=counts,
    )


@trace_analysis(log_level="INFO")
def analyze_match(
    match: MatchInfo,
    timeline: MatchTimeline,
    puuid: str,
    role: Role | None = None,
    *,
    thresholds: AnalysisThresholds | None = None,
    parallel: bool | None = None,
) -> AnalysisResult:
    """Analyze one participant's match.

    Args:
        match: Match summary with the participant list.
        timeline: Frames and events of the same match.
        puuid: Participant to analyze.
        role: Explicit role; defaults to the participant's assigned position.
        thresholds: Overrides the configured detector thresholds.
        parallel: Run detectors in a thread pool; defaults to the
            ``parallel_detectors`` setting.

    Returns:
        The complete, immutable analysis result.

    Raises:
        ParticipantNotFoundError: ``puuid`` is not a participant of ``match``.
    """
    settings = get_settings()
    thresholds = settings.thresholds if thresholds is None else thresholds
    parallel = settings.parallel_detectors if parallel is None else parallel

    player = match.find_participant(puuid)
    if player is None:
        raise ParticipantNotFoundError(match.match_id, puuid)

    bind_match_context(match.match_id, player.participant_id)
    try:
        resolved_role = role or player.role
        opponent = match.opponent_of(player, resolved_role)
        if opponent is None:
            logger.info("opponent_unresolved", role=resolved_role.value)

        ctx = MatchContext.build(match, timeline, player, resolved_role, opponent, thresholds)
        outcomes = _run_detectors(ctx, parallel, settings.detector_workers)
        detector_stats = {outcome.detector: dict(outcome.stats) for outcome in outcomes}

        mistakes = merge_mistakes(outcomes)
        scores = calculate_scores(mistakes, detector_stats, player.win, ctx.game_minutes)
        tips = generate_coaching_tips(mistakes, scores, resolved_role, thresholds)

        logger.info(
            "analysis_assembled",
            mistakes=len(mistakes),
            overall_score=scores.overall,
            tips=len(tips),
        )
        return AnalysisResult(
            match_id=match.match_id,
            puuid=puuid,
            participant_id=player.participant_id,
            champion=player.champion_name,
            role=resolved_role,
            outcome="win" if player.win else "loss",
            duration=match.game_duration,
            game_mode=match.game_mode_label,
            mistakes=mistakes,
            scores=scores,
            tips=tips,
            summary=_summarize(mistakes, detector_stats),
            detector_stats=detector_stats,
        )
    finally:
        clear_match_context()
