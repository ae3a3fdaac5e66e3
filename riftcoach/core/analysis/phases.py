"""Game phase classification shared by every detector."""

from riftcoach.contracts.analysis import GamePhase

EARLY_GAME_END_MINUTES = 14
MID_GAME_END_MINUTES = 25


def game_phase(timestamp_ms: int) -> GamePhase:
    """Map elapsed game time to early / mid / late."""
    minutes = timestamp_ms / 60000
    if minutes < EARLY_GAME_END_MINUTES:
        return GamePhase.EARLY
    if minutes < MID_GAME_END_MINUTES:
        return GamePhase.MID
    return GamePhase.LATE


def format_game_time(timestamp_ms: int) -> str:
    """Render milliseconds as ``m:ss``."""
    m = max(0, int(timestamp_ms // 60000))
    s = max(0, int((timestamp_ms % 60000) // 1000))
    return f"{m}:{s:02d}"
